"""Size names derived from H&M SKUs and the product schema embedded in pages."""

from __future__ import annotations

import json
import logging

import requests
from bs4 import BeautifulSoup

from .models import ColorItem, Size, keep_letters_and_spaces, name_to_slug, transliterate

log = logging.getLogger(__name__)

ACTUAL_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/110.0.0.0 YaBrowser/23.3.4.603 Yowser/2.5 Safari/537.36"
)

_LETTER_SIZES = {
    "001": "XXS",
    "002": "XS",
    "003": "S",
    "004": "M",
    "005": "L",
    "006": "XL",
    "007": "XXL",
    "016": "3XL",
    "015": "4XL",
}

_NUMERIC_SIZES = {
    "001": "32",
    "002": "34",
    "003": "36",
    "004": "38",
    "005": "40",
    "006": "42",
    "007": "44",
    "008": "46",
    "009": "48",
    "010": "50",
}

_SHOE_SIZES = {f"{index:03d}": str(21 + index) for index in range(1, 15)}


def _lookup(sku: str, table: dict[str, str]) -> str:
    raw = sku.encode()
    if len(raw) != 13:
        return ""
    return table.get(raw[-3:].decode(errors="replace"), "NOSIZE")


def size_from_sku(sku: str) -> str:
    """Letter size (XXS to 4XL) of a 13-digit SKU; empty for other lengths."""
    return _lookup(sku, _LETTER_SIZES)


def size_from_sku_numeric(sku: str) -> str:
    """Numeric clothing size (32 to 50) of a 13-digit SKU; empty for other lengths."""
    return _lookup(sku, _NUMERIC_SIZES)


def size_from_sku_shoe(sku: str) -> str:
    """Size 22 to 35 of a 13-digit SKU; empty for other lengths."""
    return _lookup(sku, _SHOE_SIZES)


def _parse_price(value: object) -> float:
    try:
        return float(str(value))
    except ValueError:
        return 0.0


def parse_product_schema(html: str) -> ColorItem:
    """Read price, sizes and colour from the ``product-schema`` script of a page.

    Raises ValueError when the schema is not valid JSON.
    """
    soup = BeautifulSoup(html, "html.parser")
    item = ColorItem()
    for script in soup.select("script[id=product-schema]"):
        try:
            schema = json.loads(script.get_text())
        except ValueError as exc:
            raise ValueError(f"VariableActual2: Unmarshal: {exc}") from exc
        if not isinstance(schema, dict):
            raise ValueError("VariableActual2: Unmarshal: schema is not an object")

        price = 0.0
        sizes: list[Size] = []
        for offer in schema.get("offers") or []:
            size_value = size_from_sku(str(offer.get("SKU", "")))
            price = _parse_price(offer.get("price", ""))
            if size_value:
                sizes.append(
                    Size(value=size_value, in_stock="InStock" in str(offer.get("availability", "")))
                )
        color = str(schema.get("color", ""))
        item.price = price
        item.sizes = sizes
        item.color_eng = name_to_slug(color)
        item.color_code = keep_letters_and_spaces(transliterate(color))
    return item


def fetch_actual(url: str) -> ColorItem:
    """Load a product page and read its current sizes and price.

    A page that cannot be fetched yields an empty item.
    """
    try:
        response = requests.get(url, headers={"User-Agent": ACTUAL_USER_AGENT})
    except requests.RequestException as exc:
        log.warning("request %s failed: %s", url, exc)
        return ColorItem()
    if not response.ok:
        log.warning("request %s failed with status %d", url, response.status_code)
        return ColorItem()
    return parse_product_schema(response.text)