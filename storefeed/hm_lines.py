"""H&M category listings: product lines and sub-category links."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from .hm_service import BASE_URL, HMClient
from .models import Cat, ColorItem, Product, keep_letters_and_spaces, name_to_slug, transliterate

log = logging.getLogger(__name__)

LINES_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/58.0.3029.110 Safari/537.3"
)
MENU_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/110.0.0.0 YaBrowser/23.3.4.603 Yowser/2.5 Safari/537.36"
)
MENU_SELECTOR = (
    '#menu-label > ul > li:nth-child(3) > ul > li > a[class="CGae mYRh vEfo C7LF ntl6"]'
)
COUNT_PAGE_SIZE = 10


@dataclass
class Swatch:
    """A colour swatch of a listed product."""

    color_code: str = ""
    article_link: str = ""
    color_name: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Swatch":
        return cls(
            color_code=str(data.get("colorCode", "") or ""),
            article_link=str(data.get("articleLink", "") or ""),
            color_name=str(data.get("colorName", "") or ""),
        )


@dataclass
class LineProduct:
    """A product as it appears in a category listing."""

    article_code: str = ""
    link: str = ""
    title: str = ""
    category: str = ""
    price: str = ""
    red_price: str = ""
    brand_name: str = ""
    swatches: list[Swatch] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "LineProduct":
        return cls(
            article_code=str(data.get("articleCode", "") or ""),
            link=str(data.get("link", "") or ""),
            title=str(data.get("title", "") or ""),
            category=str(data.get("category", "") or ""),
            price=str(data.get("price", "") or ""),
            red_price=str(data.get("redPrice", "") or ""),
            brand_name=str(data.get("brandName", "") or ""),
            swatches=[
                Swatch.from_json(s) for s in data.get("swatches") or [] if isinstance(s, dict)
            ],
        )


@dataclass
class Line:
    """One page of a category listing."""

    total: int = 0
    items_shown: int = 0
    products: list[LineProduct] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Line":
        """Build a listing from the decoded JSON of the listing endpoint."""
        return cls(
            total=int(data.get("total", 0) or 0),
            items_shown=int(data.get("itemsShown", 0) or 0),
            products=[
                LineProduct.from_json(p)
                for p in data.get("products") or []
                if isinstance(p, dict)
            ],
        )


@dataclass
class CategoryURL:
    """A sub-category page and its category path."""

    categories: list[Cat] = field(default_factory=list)
    url: str = ""


def lines(client: HMClient, category_link: str, page_size: int) -> Line:
    """Request one listing page of ``page_size`` products for a category."""
    path = category_link.replace(".html", "")
    url = f"{BASE_URL}{path}/_jcr_content/main/productlisting.display.json?page-size={page_size}"
    response = client.get(
        url, {"x-requested-with": "XMLHttpRequest", "User-Agent": LINES_USER_AGENT}
    )
    try:
        payload = json.loads(response.text)
    except ValueError as exc:
        log.error("ERROR:500: %s", exc)
        return Line()
    if not isinstance(payload, dict):
        log.error("ERROR:500: listing is not an object")
        return Line()
    return Line.from_json(payload)


def lines_count(client: HMClient, category_link: str) -> int:
    """Number of products in a category."""
    return lines(client, category_link, COUNT_PAGE_SIZE).total


def lines_all(client: HMClient, category_link: str) -> Line:
    """Every product of a category in one listing."""
    return lines(client, category_link, lines_count(client, category_link))


def parse_price(text: str) -> float:
    """Parse a listed price such as ``299,99 TL``; unparsable prices give 0."""
    cleaned = text.replace("TL", "").replace(",", ".").replace(" ", "")
    # Non-breaking spaces and other separators are dropped by keeping only '.' to ';'.
    kept = "".join(ch for ch in cleaned if 46 <= ord(ch) <= 59)
    try:
        return float(kept)
    except ValueError:
        return 0.0


def line_to_products(line: Line, categories: Sequence[Cat], gender: str) -> list[Product]:
    """Turn a listing into products with one colour variant per swatch."""
    products = []
    for entry in line.products:
        price = parse_price(entry.red_price or entry.price)
        items = [
            ColorItem(
                link=BASE_URL + swatch.article_link,
                color_eng=swatch.color_name,
                color_code=keep_letters_and_spaces(transliterate(swatch.color_name)),
                price=price,
            )
            for swatch in entry.swatches
        ]
        products.append(
            Product(
                name=entry.title,
                link=BASE_URL + entry.link,
                manufacturer=entry.brand_name,
                article=entry.article_code,
                gender_label=gender,
                categories=list(categories),
                items=items,
            )
        )
    return products


def _category_url(href: str, name: str, base: Sequence[Cat]) -> CategoryURL:
    return CategoryURL(categories=[*base, Cat(name=name, slug=name_to_slug(name))], url=href)


def line_urls(client: HMClient, link: str, base_categories: Sequence[Cat]) -> list[CategoryURL]:
    """Sub-category pages listed in the side menu of a category page.

    When the menu has no sub-categories, the category itself is returned.
    """
    soup = client.get_soup(BASE_URL + link, MENU_USER_AGENT)
    found: list[CategoryURL] = []
    for anchor in soup.select(MENU_SELECTOR):
        parent = anchor.parent
        if parent is not None:
            for sub in parent.select("ul > li > a"):
                href = sub.get("href")
                if href is not None and href != link:
                    found.append(_category_url(href, sub.get_text(), base_categories))
        if found:
            continue
        href = anchor.get("href")
        if href is not None:
            found.append(_category_url(href, anchor.get_text(), base_categories))
    return found