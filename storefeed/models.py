"""Product data model shared by the scrapers, plus small text helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, TypeVar

from unidecode import unidecode

T = TypeVar("T")


@dataclass
class Cat:
    """One level of a category path."""

    name: str = ""
    slug: str = ""
    id: int = 0


@dataclass
class Description:
    """Product description in English and Russian."""

    eng: str = ""
    rus: str = ""


@dataclass
class Size:
    """A size of a colour variant and whether it is in stock."""

    value: str = ""
    in_stock: bool = False
    data_code: str = ""


@dataclass
class ColorItem:
    """One colour variant of a product."""

    link: str = ""
    color_eng: str = ""
    color_rus: str = ""
    color_code: str = ""
    price: float = 0.0
    sizes: list[Size] = field(default_factory=list)
    images: list[str] = field(default_factory=list)


@dataclass
class Product:
    """A product with all of its colour variants."""

    name: str = ""
    full_name: str = ""
    link: str = ""
    article: str = ""
    manufacturer: str = ""
    gender_label: str = ""
    categories: list[Cat] = field(default_factory=list)
    description: Description = field(default_factory=Description)
    specifications: dict[str, str] = field(default_factory=dict)
    sizes: list[str] = field(default_factory=list)
    items: list[ColorItem] = field(default_factory=list)


@dataclass
class Variety:
    """A collection of products."""

    products: list[Product] = field(default_factory=list)


def _format_categories(categories: Iterable[Cat]) -> str:
    inner = " ".join(f"{{Name:{c.name} Slug:{c.slug} ID:{c.id}}}" for c in categories)
    return f"[{inner}]"


def _format_specifications(specifications: dict[str, str]) -> str:
    inner = " ".join(f"{key}:{specifications[key]}" for key in sorted(specifications))
    return f"map[{inner}]"


def format_items(items: Iterable[ColorItem]) -> str:
    """Render colour variants as a human-readable report."""
    parts = []
    for key, item in enumerate(items):
        sizes = "".join(
            f"{index}: {size.value},{'true' if size.in_stock else 'false'}; "
            for index, size in enumerate(item.sizes)
        )
        parts.append(
            f"{key} - {item.color_eng}\n"
            f"\tЦена: {item.price:.2f}. Ссылка: {item.link}\n"
            f"\tРазмеры({len(item.sizes)}): {sizes}\n"
            f"\tКартинка: {','.join(item.images)}\n"
        )
    return "".join(parts)


def format_product(product: Product) -> str:
    """Render a product and its variants as a human-readable report."""
    return (
        f"Название: {product.name}. Артикул: {product.article}\n"
        f"Производитель: {product.manufacturer}. Гендер: {product.gender_label}\n"
        f" Название(Полн): {product.full_name}\n"
        f"Ссылка: {product.link}\n"
        f"Размеры: {','.join(product.sizes)}\n"
        f"Подкатегория: {_format_categories(product.categories)}\n"
        f"Описание(Рус): {product.description.rus}\n"
        f"Описание(Eng): {product.description.eng}\n"
        f"Дополнительные поля: {_format_specifications(product.specifications)}\n"
        f"Подробнее по каждому цвету:\n{format_items(product.items)}"
    )


def slug_to_name(slug: str) -> str:
    """Turn ``urune-gore-satin-al`` into ``Urune Gore Satin Al``."""
    return " ".join(word.capitalize() for word in slug.split("-") if word)


def name_to_slug(name: str) -> str:
    """Turn a display name into a lower-case, hyphen-separated slug."""
    ascii_name = unidecode(name).lower()
    return re.sub(r"[^a-z0-9]+", "-", ascii_name).strip("-")


def transliterate(text: str) -> str:
    """Transliterate text into plain ASCII."""
    return unidecode(text)


def keep_letters_and_spaces(text: str) -> str:
    """Drop every character that is neither a letter nor a space."""
    return "".join(ch for ch in text if ch.isalpha() or ch == " ")


def remove_duplicates(items: Iterable[T]) -> list[T]:
    """Remove repeated entries, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))