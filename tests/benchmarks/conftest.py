"""conftest.py for benchmarks.

Shared catalog data: a few thousand mapping items spread over a handful
of brands, prices and stock states.
"""

from __future__ import annotations

import pytest

from facet_search.declarations import (
    FacetKind,
    FullTextSearch,
    MemberDeclaration,
    SearchFacet,
    Searchable,
    TypeDeclaration,
)

BRANDS = ("Acme", "Bolt", "Core", "Dyna", "Edge")


@pytest.fixture(scope="session")
def catalog_declaration() -> TypeDeclaration:
    return TypeDeclaration(
        name="Product",
        namespace="bench",
        members=(
            MemberDeclaration("Name", str, (FullTextSearch(),)),
            MemberDeclaration("Brand", str, (SearchFacet(),)),
            MemberDeclaration("Price", int, (SearchFacet(kind=FacetKind.RANGE),)),
            MemberDeclaration("InStock", bool, (SearchFacet(kind=FacetKind.BOOLEAN),)),
            MemberDeclaration("Rating", int, (Searchable(),)),
        ),
    )


@pytest.fixture(scope="session")
def catalog_items() -> list[dict]:
    return [
        {
            "Name": f"Item {i}",
            "Brand": BRANDS[i % len(BRANDS)],
            "Price": (i * 37) % 1000,
            "InStock": i % 3 != 0,
            "Rating": i % 5,
        }
        for i in range(5000)
    ]
