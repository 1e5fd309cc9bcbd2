"""Unit tests – MetadataCompiler."""
from __future__ import annotations

import dataclasses

import pytest

from facet_search.compilers import FacetDescriptor, MetadataCompiler, SearchMetadata
from facet_search.declarations import FacetKind, FacetOrder
from facet_search.model import build_spec


class TestMetadataCompiler:
    def _compile(self, product_cls) -> SearchMetadata:
        return MetadataCompiler().compile(build_spec(product_cls))

    def test_one_descriptor_per_facet_in_order(self, product_cls) -> None:
        metadata = self._compile(product_cls)
        assert metadata.entity_name == "Product"
        assert [d.property_name for d in metadata] == [
            "Brand",
            "Price",
            "InStock",
            "Released",
            "Category",
            "Location",
            "Country",
        ]
        assert isinstance(metadata.facets, tuple)
        assert len(metadata) == 7

    def test_descriptor_values(self, product_cls) -> None:
        metadata = self._compile(product_cls)
        assert metadata.by_name("Brand") == FacetDescriptor(
            property_name="Brand",
            display_name="Brand name",
            kind=FacetKind.CATEGORICAL,
            order_by=FacetOrder.COUNT,
        )
        country = metadata.by_name("Country")
        assert country.depends_on == "Brand"
        assert country.navigation_path == "Buyer.Country"
        assert metadata.by_name("Category").is_hierarchical is True

    def test_display_name_defaults_to_property(self, product_cls) -> None:
        assert self._compile(product_cls).by_name("Price").display_name == "Price"

    def test_unknown_name(self, product_cls) -> None:
        assert self._compile(product_cls).by_name("Nope") is None

    def test_text_and_sortable_fields(self, product_cls) -> None:
        metadata = self._compile(product_cls)
        assert metadata.full_text_fields == ("Name", "Slug")
        assert metadata.sortable_fields == ("Rating",)

    def test_catalog_is_read_only(self, product_cls) -> None:
        metadata = self._compile(product_cls)
        with pytest.raises(dataclasses.FrozenInstanceError):
            metadata.facets = ()
        with pytest.raises(dataclasses.FrozenInstanceError):
            metadata.facets[0].limit = 3
