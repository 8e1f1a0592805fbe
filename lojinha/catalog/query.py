"""Catalogue browsing: search, filter, sort and paginate the product snapshot."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from ..core.types import Product
from ..core.utils import clamp, normalize_text, parse_price

SORT_KEYS = ("name", "price", "quantity")


def search(products: Iterable[Product], term: Optional[str]) -> List[Product]:
    needle = normalize_text((term or "").strip())
    if not needle:
        return list(products)
    return [p for p in products if needle in normalize_text(p.name)]


def filter_in_stock(products: Iterable[Product]) -> List[Product]:
    return [p for p in products if p.in_stock]


def _price_key(p: Product) -> Decimal:
    # unparseable prices sort last
    try:
        return parse_price(p.price)
    except ValueError:
        return Decimal("Infinity")


def sort_products(
    products: Iterable[Product], key: str = "name", descending: bool = False
) -> List[Product]:
    if key == "name":
        return sorted(products, key=lambda p: normalize_text(p.name), reverse=descending)
    if key == "price":
        return sorted(products, key=_price_key, reverse=descending)
    if key == "quantity":
        return sorted(products, key=lambda p: p.quantity, reverse=descending)
    raise ValueError(f"unknown sort key {key!r}; expected one of {SORT_KEYS}")


@dataclass
class Page:
    items: List[Product]
    page: int
    page_size: int
    total: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def paginate(items: Sequence[Product], page: int = 1, page_size: int = 12) -> Page:
    """Slice ``items`` into 1-based pages; out-of-range page numbers are clamped."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    page = clamp(page, 1, total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )


@dataclass
class CatalogQuery:
    term: str = ""
    sort: str = "name"
    descending: bool = False
    in_stock_only: bool = False
    page: int = 1
    page_size: int = 12


def run_query(products: Iterable[Product], query: CatalogQuery) -> Page:
    found = search(products, query.term)
    if query.in_stock_only:
        found = filter_in_stock(found)
    ordered = sort_products(found, query.sort, query.descending)
    return paginate(ordered, query.page, query.page_size)
