"""Stock availability of H&M product sizes."""

from __future__ import annotations

import copy
import json
import logging

from .hm_service import HMClient
from .models import Product

log = logging.getLogger(__name__)

AVAILABILITY_URL = "https://www2.hm.com/hmwebservices/service/product/tr/availability/{sku}.json"
PRODUCT_PAGE_PREFIX = "https://www2.hm.com/tr_tr/productpage."

AVAILABILITY_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/58.0.3029.110 Safari/537.3"
)
MAP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/116.0.5845.837 YaBrowser/23.9.4.837 Yowser/2.5 Safari/537.36"
)


def availability(client: HMClient, link: str) -> list[str]:
    """SKUs in stock for the product behind ``link``, scarce ones last.

    ``link`` is a product page URL or an article number; only its first
    seven digits identify the product.
    """
    sku = link.replace(PRODUCT_PAGE_PREFIX, "").replace(".html", "")
    if len(sku) < 7:
        raise ValueError(f"article {sku!r} is shorter than 7 characters")
    response = client.get(
        AVAILABILITY_URL.format(sku=sku[:7]), {"user-agent": AVAILABILITY_USER_AGENT}
    )
    try:
        payload = json.loads(response.text)
    except ValueError as exc:
        log.error("ERROR:500: %s", exc)
        return []
    if not isinstance(payload, dict):
        log.error("ERROR:500: availability is not an object")
        return []
    return [*(payload.get("availability") or []), *(payload.get("fewPieceLeft") or [])]


def _sizes_block(text: str) -> str | None:
    text = text.replace("&#39;", "'").replace("&#34;", '"').replace("&quot;", '"')
    marker = "'sizes'"
    start = text.find(marker)
    if start < 0:
        return None
    start += len(marker) + 1
    end = text.find("]", start)
    if end < 0:
        return None
    return text[start : end + 1].replace("'", '"')


def availability_map(client: HMClient, link: str) -> dict[str, str]:
    """Map size codes to size names as listed on the product page."""
    soup = client.get_soup(link, MAP_USER_AGENT)
    sizes: dict[str, str] = {}
    for warning in soup.select('div[class="catalogwarning parbase"]'):
        following = warning.find_next_sibling()
        if following is None:
            continue
        block = _sizes_block(following.decode_contents())
        if block is None:
            continue
        try:
            entries = json.loads(block)
        except ValueError:
            continue
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if isinstance(entry, dict):
                sizes[str(entry.get("size", ""))] = str(entry.get("name", ""))
    return sizes


def availability_product(client: HMClient, product: Product) -> Product:
    """Return a copy of ``product`` whose sizes in stock are marked as such."""
    sku = product.article[:7] if len(product.article) == 10 else product.article
    live = set(availability(client, sku))
    result = copy.deepcopy(product)
    for item in result.items:
        for size in item.sizes:
            if size.data_code in live:
                size.in_stock = True
    return result