"""H&M product cards: images, sizes, prices and descriptions."""

from __future__ import annotations

import copy

from bs4 import BeautifulSoup

from .hm_service import BASE_URL, HMClient
from .models import Product, Size

CARD_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/110.0.0.0 YaBrowser/23.3.4.603 Yowser/2.5 Safari/537.36"
)
QUICKBUY_URL = BASE_URL + "/tr_tr/productpage/_jcr_content/product.quickbuy.{sku}.html"


def _image_link(src: str) -> str:
    link = src.replace("&call=url[file:/product/quickthumb]", "")
    link = "https:" + link + "&call=url[file:/product/main]"
    return link.replace("\\u0026", "&").replace("u0026", "&")


def _sku_of(link: str) -> str:
    return link.replace(BASE_URL, "").replace("/tr_tr/productpage.", "").replace(".html", "")


def variable_product(client: HMClient, product: Product) -> Product:
    """Return a copy of ``product`` with images and sizes of every colour variant.

    The sizes already on the variants are replaced; images are appended.
    """
    result = copy.deepcopy(product)
    for item in result.items:
        item.sizes = []
    for item in result.items:
        sku = _sku_of(item.link)
        soup = client.get_soup(QUICKBUY_URL.format(sku=sku), CARD_USER_AGENT)
        for img in soup.select('div[class="product-detail-thumbnails"] > ul > li > img'):
            item.images.append(_image_link(img.get("src", "")))
        for option in soup.select("select[data-sizelist] > option[data-code]"):
            parent = option.parent
            if parent is not None and parent.get("data-sizelist") == sku:
                item.sizes.append(
                    Size(value=option.get("value", ""), data_code=option.get("data-code", ""))
                )
    return result


def _parse_quick_price(text: str) -> float:
    cleaned = text.replace("TL", "").replace(",", "").replace(".", "").strip()
    try:
        return float(cleaned) / 100.0
    except ValueError:
        return 0.0


def variable_price(client: HMClient, sku: str) -> float:
    """Price of a product given its seven-digit article; 0 if none is shown."""
    soup = client.get_soup(QUICKBUY_URL.format(sku=sku), CARD_USER_AGENT)
    price = 0.0
    for span in soup.select('span[class="price-value"]'):
        price = _parse_quick_price(span.get_text())
    return price


def _clean(text: str) -> str:
    return text.replace("\n", " ").replace("\t", " ").replace("  ", " ").strip()


def _expand_noscripts(soup: BeautifulSoup) -> None:
    for noscript in soup.find_all("noscript"):
        if noscript.find(True) is not None:
            noscript.unwrap()
            continue
        parsed = BeautifulSoup(noscript.get_text(), "html.parser")
        children = list(parsed.contents)
        if children:
            noscript.replace_with(*children)
        else:
            noscript.decompose()


def variable_description(client: HMClient, product: Product) -> Product:
    """Return a copy of ``product`` with its description and specifications."""
    result = copy.deepcopy(product)
    result.specifications = {}
    url = f"{BASE_URL}/tr_tr/productpage.{product.article}.html"
    soup = client.get_soup(url, CARD_USER_AGENT)

    for meta in soup.select("meta[name=description]"):
        result.description.eng = meta.get("content", "") or ""

    for content in soup.select('div[class="content pdp-text pdp-content"]'):
        inner = BeautifulSoup(content.decode_contents(), "html.parser")
        _expand_noscripts(inner)
        for row in inner.select("div[id=section-descriptionAccordion] > dl > div"):
            term = "".join(dt.get_text() for dt in row.select("dt"))
            value = "".join(dd.get_text() for dd in row.select("dd"))
            result.specifications[_clean(term.replace(":", ""))] = _clean(value)
    return result