import pytest
import requests
import responses

from storefeed.hm_service import (
    INDEX_URL,
    CategoryLink,
    HMClient,
    categories,
    gender_for_site,
    is_wanted_category,
    pull_out_categories,
    translate_category,
)
from storefeed.models import Cat

PROXY = "http://proxy.example.com:8080"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_pull_out_categories_source_case():
    cat = pull_out_categories("https://www2.hm.com/tr_tr/home/urune-gore-satin-al/dekorasyon.html")
    assert cat == [Cat(name="Home", slug="home"), Cat(name="Dekorasyon", slug="dekorasyon")]
    assert cat != [
        Cat(name="Home", slug="home"),
        Cat(name="Urune Gore Satin Al", slug="urune-gore-satin-al"),
        Cat(name="Dekorasyon", slug="dekorasyon"),
    ]


@pytest.mark.parametrize(
    "link",
    [
        "https://www2.hm.com/tr_tr/home/dekorasyon.html",
        "https://www2.hm.com/tr_tr/a/b/c/d.html",
    ],
)
def test_pull_out_categories_wrong_depth(link):
    with pytest.raises(ValueError):
        pull_out_categories(link)


@pytest.mark.parametrize(
    "slug,wanted", [("kadin", True), ("erkek", True), ("bebek", True), ("cocuk", True), ("home", False)]
)
def test_is_wanted_category(slug, wanted):
    assert is_wanted_category(slug) is wanted


@pytest.mark.parametrize(
    "slug,tag",
    [("kadin", "woman"), ("erkek", "man"), ("bebek", "boy"), ("cocuk", "girl"), ("home", "unisex")],
)
def test_translate_category(slug, tag):
    assert translate_category(slug) == tag


@pytest.mark.parametrize(
    "slug,tag", [("kadin", "woman"), ("erkek", "man"), ("bebek", "kind"), ("cocuk", "")]
)
def test_gender_for_site(slug, tag):
    assert gender_for_site(slug) == tag


def test_client_requires_proxies():
    with pytest.raises(ValueError):
        HMClient([])


def test_client_rejects_bad_proxy():
    with pytest.raises(ValueError):
        HMClient(["not a url"])


def test_client_get_raises_on_error_status(mocked):
    mocked.add(responses.GET, "https://www2.hm.com/missing", status=404)
    client = HMClient([PROXY])
    with pytest.raises(requests.HTTPError):
        client.get("https://www2.hm.com/missing", {})


def test_client_get_soup_sends_user_agent(mocked):
    mocked.add(responses.GET, "https://www2.hm.com/page", body="<p>hello</p>")
    client = HMClient([PROXY])
    soup = client.get_soup("https://www2.hm.com/page", "agent/1.0")
    assert soup.p.get_text() == "hello"
    assert mocked.calls[0].request.headers["User-Agent"] == "agent/1.0"


MENU = """
<html><body>
<ul class="menu">
  <li><div><ul>
    <li><span>Ürüne göre satın al</span>
      <ul>
        <li><a href="/tr_tr/kadin/urune-gore-satin-al/elbise.html">Elbise</a></li>
        <li><a href="/tr_tr/home/urune-gore-satin-al/dekorasyon.html">Dekorasyon</a></li>
        <li><a>No link</a></li>
      </ul>
    </li>
    <li><span>Öne çıkanlar</span>
      <ul>
        <li><a href="/tr_tr/erkek/one-cikanlar/yeni.html">Yeni</a></li>
      </ul>
    </li>
  </ul></div></li>
</ul>
</body></html>
"""


def test_categories_from_menu(mocked):
    mocked.add(responses.GET, INDEX_URL, body=MENU)
    result = categories(HMClient([PROXY]))
    assert result == [
        CategoryLink(
            link="/tr_tr/kadin/urune-gore-satin-al/elbise.html",
            categories=[
                Cat(name="HM", slug="hm", id=0),
                Cat(name="Kadin", slug="kadin"),
                Cat(name="Elbise", slug="elbise"),
            ],
            gender_tag="woman",
        )
    ]


def test_categories_http_error(mocked):
    mocked.add(responses.GET, INDEX_URL, status=500)
    with pytest.raises(requests.HTTPError):
        categories(HMClient([PROXY]))