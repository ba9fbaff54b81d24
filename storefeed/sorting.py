"""Grouping of scraped product rows that share a name."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from .models import Product, Variety

log = logging.getLogger(__name__)


def find_first_by_name(products: Sequence[Product], name: str) -> int:
    """Return the index of the first product called ``name``.

    Raises LookupError when no product has that name.
    """
    for index, product in enumerate(products):
        if product.name == name:
            return index
    raise LookupError(f"Не найдено {name}")


def last_index(products: Sequence[Product]) -> int:
    """Index of the last element before the final run of equal names.

    For names ``AAABBCCCCDD`` this is 8, the end of the ``C`` run.
    """
    current = ""
    result = 0
    for index, product in enumerate(products):
        if product.name != current:
            current = product.name
            result = index - 1
    return result


def merge_products(first: Product, second: Product) -> Product:
    """Return ``first`` with the colour variants of ``second`` appended."""
    return replace(first, items=[*first.items, *second.items])


def concatenate_products(products: Sequence[Product]) -> Product:
    """Fold products into the first one, appending every product's variants.

    The first product's own variants are appended as well, so they appear twice.
    """
    if not products:
        raise ValueError("no products to concatenate")
    result = products[0]
    for product in products:
        result = merge_products(result, product)
    return result


def sort_products(
    variety: Variety, additions: Sequence[Product]
) -> tuple[Variety, list[Product]]:
    """Move complete runs of same-named products from ``additions`` into ``variety``.

    Returns the updated variety and the products left over for the next batch.
    """
    if not additions:
        raise ValueError("no products to sort")

    end = last_index(additions)
    merged = Variety(products=list(variety.products))
    current = additions[0].name
    start = 0
    for i in range(end + 1):
        if current != additions[i].name or (end == i and end < len(additions)):
            try:
                found = find_first_by_name(merged.products, current)
            except LookupError:
                log.debug("product %r not present yet", current)
            else:
                log.debug("found %r at %d", current, found)
                merged.products.append(concatenate_products(additions[start:i]))
            current = additions[i].name
            start = i
    return merged, list(additions[start + 1 :])