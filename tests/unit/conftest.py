"""Shared fixtures – sample annotated domain types and candidate items."""
from __future__ import annotations

import dataclasses
import datetime
from typing import Annotated

import pytest

from facet_search import (
    FacetKind,
    FullTextSearch,
    SearchFacet,
    Searchable,
    TextSearchBehavior,
    faceted_search,
)
from facet_search.fulltext import ProviderCapabilities


@dataclasses.dataclass
class Customer:
    Name: str
    Country: str


@faceted_search(namespace="shop.search")
@dataclasses.dataclass
class Product:
    Name: Annotated[str, FullTextSearch()]
    Slug: Annotated[str, FullTextSearch(behavior=TextSearchBehavior.STARTS_WITH)]
    Brand: Annotated[str, SearchFacet(display_name="Brand name")]
    Price: Annotated[int, SearchFacet(kind=FacetKind.RANGE)]
    InStock: Annotated[bool, SearchFacet(kind="Boolean")]
    Released: Annotated[datetime.datetime | None, SearchFacet(kind=FacetKind.DATE_RANGE)] = None
    Category: Annotated[str | None, SearchFacet(kind=FacetKind.HIERARCHICAL, is_hierarchical=True)] = None
    Location: Annotated[float | None, SearchFacet(kind=FacetKind.GEO)] = None
    Country: Annotated[str | None, SearchFacet(navigation_path="Buyer.Country", depends_on="Brand")] = None
    Rating: Annotated[int, Searchable()] = 0
    Buyer: Customer | None = None


@faceted_search(naming="snake_case", generate_metadata=False)
@dataclasses.dataclass
class Article:
    title: Annotated[str, FullTextSearch(case_sensitive=True)]
    author_name: Annotated[str, SearchFacet()]
    word_count: Annotated[int, SearchFacet(kind=FacetKind.RANGE)]
    is_published: Annotated[bool, SearchFacet(kind=FacetKind.BOOLEAN)]


def make_product(
    name: str = "Widget",
    *,
    brand: str = "Acme",
    price: int = 100,
    in_stock: bool = True,
    slug: str | None = None,
    country: str | None = None,
    **extra,
) -> Product:
    return Product(
        Name=name,
        Slug=slug or name.lower(),
        Brand=brand,
        Price=price,
        InStock=in_stock,
        Buyer=Customer(Name=f"{brand} buyer", Country=country) if country else None,
        **extra,
    )


@pytest.fixture
def product_cls() -> type:
    return Product


@pytest.fixture
def article_cls() -> type:
    return Article


@pytest.fixture
def products() -> list[Product]:
    return [
        make_product("Hammer", brand="Acme", price=50, in_stock=True, country="BR"),
        make_product("Drill", brand="Acme", price=150, in_stock=False, country="US"),
        make_product("Saw", brand="Bolt", price=500, in_stock=True, country="BR"),
        make_product("Getting Started Kit", brand="Core", price=600, in_stock=True, slug="getting-started"),
    ]


@pytest.fixture
def no_capabilities() -> ProviderCapabilities:
    return ProviderCapabilities.none()
