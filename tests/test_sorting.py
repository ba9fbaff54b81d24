import pytest

from storefeed.models import ColorItem, Product, Variety
from storefeed.sorting import (
    concatenate_products,
    find_first_by_name,
    last_index,
    merge_products,
    sort_products,
)


def _products(names):
    return [Product(name=name) for name in names]


def test_last_index():
    assert last_index(_products("CDDDGG")) == 3


def test_last_index_documented_example():
    assert last_index(_products("AAABBCCCCDD")) == 8


def test_sort_products():
    variety = Variety(products=_products("ABCC"))
    result, rest = sort_products(variety, _products("CDDDGG"))
    assert [p.name for p in result.products] == ["A", "B", "C", "C", "C"]
    assert [p.name for p in rest] == ["G", "G"]
    assert [p.name for p in variety.products] == ["A", "B", "C", "C"]


def test_sort_products_empty_raises():
    with pytest.raises(ValueError):
        sort_products(Variety(), [])


def test_find_first_by_name():
    products = _products("ABB")
    assert find_first_by_name(products, "B") == 1
    with pytest.raises(LookupError):
        find_first_by_name(products, "Z")


def test_merge_products_does_not_mutate():
    first = Product(name="A", items=[ColorItem(color_code="red")])
    second = Product(name="A", items=[ColorItem(color_code="blue")])
    merged = merge_products(first, second)
    assert [i.color_code for i in merged.items] == ["red", "blue"]
    assert [i.color_code for i in first.items] == ["red"]


def test_concatenate_products_includes_first_twice():
    products = [
        Product(name="A", items=[ColorItem(color_code="red")]),
        Product(name="A", items=[ColorItem(color_code="blue")]),
    ]
    result = concatenate_products(products)
    assert result.name == "A"
    assert [i.color_code for i in result.items] == ["red", "red", "blue"]


def test_concatenate_products_empty_raises():
    with pytest.raises(ValueError):
        concatenate_products([])