import pytest
import requests
import responses

from storefeed.hm_availability import availability_product
from storefeed.hm_card import variable_description, variable_price, variable_product
from storefeed.hm_service import HMClient
from storefeed.models import ColorItem, Product, Size

QUICKBUY = "https://www2.hm.com/tr_tr/productpage/_jcr_content/product.quickbuy.{}.html"

CARD_HTML = """
<div class="product-detail-thumbnails"><ul>
<li><img src="//image.hm.com/assets/a.jpg?imwidth=80&amp;call=url[file:/product/quickthumb]"></li>
<li><img src="//image.hm.com/assets/b.jpg?x=1\\u0026y=2"></li>
</ul></div>
<select data-sizelist="1170211001">
<option data-code="1170211001002" value="XS">XS</option>
<option data-code="1170211001003" value="S">S</option>
</select>
<select data-sizelist="1170211002">
<option data-code="1170211002004" value="M">M</option>
</select>
"""


@pytest.fixture
def client():
    return HMClient(["http://proxy.example.com:8080"])


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _product():
    return Product(
        link="https://www2.hm.com/tr_tr/productpage.1170211001.html",
        article="1170211001",
        items=[
            ColorItem(
                link="https://www2.hm.com/tr_tr/productpage.1170211001.html",
                sizes=[Size(value="old")],
            )
        ],
    )


def test_variable_product_images_and_sizes(client, mocked):
    mocked.add(responses.GET, QUICKBUY.format("1170211001"), body=CARD_HTML)
    original = _product()
    result = variable_product(client, original)
    item = result.items[0]
    assert item.images == [
        "https://image.hm.com/assets/a.jpg?imwidth=80&call=url[file:/product/main]",
        "https://image.hm.com/assets/b.jpg?x=1&y=2&call=url[file:/product/main]",
    ]
    assert item.sizes == [
        Size(value="XS", in_stock=False, data_code="1170211001002"),
        Size(value="S", in_stock=False, data_code="1170211001003"),
    ]
    assert original.items[0].sizes == [Size(value="old")]


def test_variable_product_then_availability(client, mocked):
    mocked.add(responses.GET, QUICKBUY.format("1170211001"), body=CARD_HTML)
    mocked.add(
        responses.GET,
        "https://www2.hm.com/hmwebservices/service/product/tr/availability/1170211.json",
        json={"availability": ["1170211001002"], "fewPieceLeft": []},
    )
    product = availability_product(client, variable_product(client, _product()))
    assert [(s.value, s.in_stock) for s in product.items[0].sizes] == [("XS", True), ("S", False)]


def test_variable_product_http_error_raises(client, mocked):
    mocked.add(responses.GET, QUICKBUY.format("1170211001"), status=404)
    with pytest.raises(requests.HTTPError):
        variable_product(client, _product())


def test_variable_price(client, mocked):
    mocked.add(
        responses.GET,
        QUICKBUY.format("1170211"),
        body='<span class="price-value"> 1.299,99 TL </span>',
    )
    assert variable_price(client, "1170211") == pytest.approx(1299.99)


def test_variable_price_missing_is_zero(client, mocked):
    mocked.add(responses.GET, QUICKBUY.format("1170211"), body="<p>no price</p>")
    assert variable_price(client, "1170211") == 0.0


DESCRIPTION_HTML = """
<html><head><meta name="description" content="A short dress."></head><body>
<div class="content pdp-text pdp-content">
<div id="section-descriptionAccordion"><dl>
<div><dt>Uzunluk:
</dt><dd>Kısa\t boy</dd></div>
</dl></div>
<noscript>&lt;div id="section-descriptionAccordion"&gt;&lt;dl&gt;&lt;div&gt;&lt;dt&gt;Renk:&lt;/dt&gt;&lt;dd&gt;Siyah&lt;/dd&gt;&lt;/div&gt;&lt;/dl&gt;&lt;/div&gt;</noscript>
</div>
</body></html>
"""


def test_variable_description(client, mocked):
    mocked.add(
        responses.GET,
        "https://www2.hm.com/tr_tr/productpage.1205348002.html",
        body=DESCRIPTION_HTML,
    )
    product = Product(article="1205348002", specifications={"old": "value"})
    result = variable_description(client, product)
    assert result.description.eng == "A short dress."
    assert result.specifications == {"Uzunluk": "Kısa boy", "Renk": "Siyah"}
    assert product.specifications == {"old": "value"}