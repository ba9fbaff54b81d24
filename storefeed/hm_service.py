"""HTTP access to the H&M store and its category tree."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Mapping, Sequence
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from .models import Cat, slug_to_name

BASE_URL = "https://www2.hm.com"
INDEX_URL = f"{BASE_URL}/tr_tr/index.html"

# Turkish heading of the "shop by product" menu section.
PRODUCT_CATEGORY = "Ürüne göre satın al"

CATEGORY_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/112.0.0.0 YaBrowser/23.5.2.625 Yowser/2.5 Safari/537.36"
)

_WANTED = {"kadin", "erkek", "bebek", "cocuk"}

_CATEGORY_TRANSLATION = {
    "kadin": "woman",
    "erkek": "man",
    "bebek": "boy",
    "cocuk": "girl",
}

_SITE_GENDER = {
    "kadin": "woman",
    "erkek": "man",
    "bebek": "kind",
}


class HMClient:
    """Sends requests to the store, rotating through the configured proxies."""

    def __init__(self, proxies: Sequence[str], session: requests.Session | None = None) -> None:
        if not proxies:
            raise ValueError("at least one proxy URL is required")
        for proxy in proxies:
            parsed = urlparse(proxy)
            if not parsed.scheme or not parsed.netloc:
                raise ValueError(f"invalid proxy URL: {proxy!r}")
        self.proxies = list(proxies)
        self._cycle = itertools.cycle(self.proxies)
        self._lock = threading.Lock()
        self.session = session or requests.Session()

    def _next_proxy(self) -> str:
        with self._lock:
            return next(self._cycle)

    def get(self, url: str, headers: Mapping[str, str] | None = None) -> requests.Response:
        """GET ``url`` through the next proxy; raises on an unsuccessful status."""
        proxy = self._next_proxy()
        response = self.session.get(
            url,
            headers=dict(headers or {}),
            proxies={"http": proxy, "https": proxy},
        )
        response.raise_for_status()
        return response

    def get_soup(self, url: str, user_agent: str | None = None) -> BeautifulSoup:
        """GET ``url`` and parse the body as HTML."""
        headers = {"User-Agent": user_agent} if user_agent else {}
        return BeautifulSoup(self.get(url, headers).text, "html.parser")


@dataclass
class CategoryLink:
    """A category page link with its category path and gender tag."""

    link: str
    categories: list[Cat] = field(default_factory=list)
    gender_tag: str = ""


def is_wanted_category(slug: str) -> bool:
    """Whether a top-level category is one that gets collected."""
    return slug in _WANTED


def translate_category(slug: str) -> str:
    """Translate a Turkish top-level category into its English gender tag."""
    return _CATEGORY_TRANSLATION.get(slug, "unisex")


def gender_for_site(slug: str) -> str:
    """Gender label used when uploading to the shop site; empty if unknown."""
    return _SITE_GENDER.get(slug, "")


def pull_out_categories(link: str) -> list[Cat]:
    """Turn a category URL into its top-level and leaf categories.

    ``https://www2.hm.com/tr_tr/home/urune-gore-satin-al/dekorasyon.html``
    gives the ``home`` and ``dekorasyon`` categories.
    """
    paths = urlparse(link).path.split("/")
    if len(paths) != 5:
        raise ValueError(f"PullOutCat: len of {paths!r} is {len(paths)}. Correct - 5")
    result = []
    for part in (paths[2], paths[4]):
        slug = part.replace(".html", "")
        result.append(Cat(name=slug_to_name(slug), slug=slug))
    return result


def categories(client: HMClient) -> list[CategoryLink]:
    """Collect every product category link from the store's main menu."""
    soup = client.get_soup(INDEX_URL, CATEGORY_USER_AGENT)
    found: list[CategoryLink] = []
    for anchor in soup.select("ul[class] li div ul li ul li a"):
        link = anchor.get("href")
        if link is None:
            continue
        holder = anchor.parent
        for _ in range(2):
            holder = holder.parent if holder is not None else None
        if holder is None:
            continue
        heading = "".join(span.get_text() for span in holder.find_all("span"))
        if heading != PRODUCT_CATEGORY:
            continue
        try:
            cats = pull_out_categories(BASE_URL + link)
        except ValueError:
            continue
        if not is_wanted_category(cats[0].slug):
            continue
        path = [Cat(name="HM", slug="hm", id=0), *cats]
        found.append(
            CategoryLink(link=link, categories=path, gender_tag=translate_category(path[1].slug))
        )
    return found