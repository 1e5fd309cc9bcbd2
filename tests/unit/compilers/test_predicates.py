"""Unit tests – PredicateCompiler and QueryTransform over in-memory candidates."""
from __future__ import annotations

import datetime
from types import SimpleNamespace

import pytest

from facet_search.compilers import PredicateCompiler, QueryTransform
from facet_search.declarations import (
    FacetedSearch,
    FacetKind,
    FullTextSearch,
    FullTextStrategy,
    MemberDeclaration,
    SearchFacet,
    Searchable,
    TextSearchBehavior,
    TypeDeclaration,
)
from facet_search.expressions import InSet, field
from facet_search.fulltext import FullTextStrategyDispatcher, ProviderCapabilities
from facet_search.model import build_spec
from facet_search.pagination import Page
from facet_search.providers import InMemoryCandidates


def _transform(
    *members: MemberDeclaration,
    strategy: FullTextStrategy = FullTextStrategy.CONTAINS,
    capabilities: ProviderCapabilities | None = None,
) -> QueryTransform:
    declaration = TypeDeclaration(
        name="Item",
        annotations=(FacetedSearch(full_text_strategy=strategy),),
        members=members,
    )
    dispatcher = FullTextStrategyDispatcher(capabilities or ProviderCapabilities.none())
    return PredicateCompiler(dispatcher).compile(build_spec(declaration))


def _apply(transform: QueryTransform, items, values) -> list:
    return transform.apply(InMemoryCandidates(items), values).to_list()


# ---------------------------------------------------------------------------
# Categorical
# ---------------------------------------------------------------------------


class TestCategorical:
    def setup_method(self) -> None:
        self.transform = _transform(MemberDeclaration("Brand", str, (SearchFacet(),)))
        self.items = [{"Brand": b} for b in ("X", "X", "Y", "Z")]

    def test_membership(self) -> None:
        result = _apply(self.transform, self.items, {"Brand": ["X", "Y"]})
        assert [i["Brand"] for i in result] == ["X", "X", "Y"]

    def test_empty_collection_is_absent(self) -> None:
        assert _apply(self.transform, self.items, {"Brand": []}) == self.items

    def test_missing_value_is_absent(self) -> None:
        assert _apply(self.transform, self.items, {}) == self.items

    def test_bare_string_is_one_member(self) -> None:
        result = _apply(self.transform, self.items, {"Brand": "Z"})
        assert result == [{"Brand": "Z"}]

    def test_values_are_coerced_to_property_type(self) -> None:
        transform = _transform(MemberDeclaration("Year", int, (SearchFacet(),)))
        items = [{"Year": 2020}, {"Year": 2021}]
        assert _apply(transform, items, {"Year": ["2021"]}) == [{"Year": 2021}]

    def test_null_property_never_matches(self) -> None:
        items = [{"Brand": None}, {"Brand": "X"}]
        assert _apply(self.transform, items, {"Brand": ["X"]}) == [{"Brand": "X"}]

    def test_hierarchical_uses_membership(self) -> None:
        transform = _transform(MemberDeclaration("Category", str, (SearchFacet(kind=FacetKind.HIERARCHICAL),)))
        items = [{"Category": "Tools/Power"}, {"Category": "Tools"}]
        assert _apply(transform, items, {"Category": ["Tools"]}) == [{"Category": "Tools"}]

    def test_predicate_shape(self) -> None:
        predicate = self.transform.predicate({"Brand": ["X"]})
        assert predicate == InSet(field("Brand"), ("X",))


# ---------------------------------------------------------------------------
# Range / DateRange / Boolean
# ---------------------------------------------------------------------------


class TestRange:
    def setup_method(self) -> None:
        self.transform = _transform(MemberDeclaration("Price", int, (SearchFacet(kind=FacetKind.RANGE),)))
        self.items = [{"Price": p} for p in (50, 150, 500, 600)]

    def test_inclusive_bounds(self) -> None:
        result = _apply(self.transform, self.items, {"MinPrice": 100, "MaxPrice": 500})
        assert [i["Price"] for i in result] == [150, 500]

    def test_min_only(self) -> None:
        result = _apply(self.transform, self.items, {"MinPrice": 500})
        assert [i["Price"] for i in result] == [500, 600]

    def test_max_only(self) -> None:
        result = _apply(self.transform, self.items, {"MaxPrice": 50})
        assert [i["Price"] for i in result] == [50]

    def test_zero_is_a_value(self) -> None:
        items = [{"Price": 0}, {"Price": -5}]
        assert _apply(self.transform, items, {"MinPrice": 0}) == [{"Price": 0}]

    def test_inverted_bounds_yield_nothing(self) -> None:
        assert _apply(self.transform, self.items, {"MinPrice": 500, "MaxPrice": 100}) == []

    def test_string_bounds_are_parsed(self) -> None:
        result = _apply(self.transform, self.items, {"MinPrice": "100", "MaxPrice": "500"})
        assert [i["Price"] for i in result] == [150, 500]

    def test_unparseable_bound_is_absent(self) -> None:
        result = _apply(self.transform, self.items, {"MinPrice": "cheap", "MaxPrice": "150"})
        assert [i["Price"] for i in result] == [50, 150]


class TestDateRange:
    def test_from_and_to(self) -> None:
        transform = _transform(MemberDeclaration("Released", datetime.datetime, (SearchFacet(kind="DateRange"),)))
        items = [{"Released": datetime.datetime(2024, m, 1)} for m in (1, 6, 12)]
        result = _apply(
            transform,
            items,
            {"ReleasedFrom": datetime.datetime(2024, 2, 1), "ReleasedTo": datetime.datetime(2024, 6, 1)},
        )
        assert result == [{"Released": datetime.datetime(2024, 6, 1)}]

    def test_iso_string_bounds(self) -> None:
        transform = _transform(MemberDeclaration("Released", datetime.datetime, (SearchFacet(kind="DateRange"),)))
        items = [{"Released": datetime.datetime(2024, m, 1)} for m in (1, 6, 12)]
        result = _apply(transform, items, {"ReleasedFrom": "2024-02-01", "ReleasedTo": "2024-06-01T00:00:00"})
        assert result == [{"Released": datetime.datetime(2024, 6, 1)}]


class TestBoolean:
    def setup_method(self) -> None:
        self.transform = _transform(MemberDeclaration("InStock", bool, (SearchFacet(kind=FacetKind.BOOLEAN),)))
        self.items = [{"InStock": True}, {"InStock": False}, {"InStock": None}]

    def test_true(self) -> None:
        assert _apply(self.transform, self.items, {"InStock": True}) == [{"InStock": True}]

    def test_false_is_not_absent(self) -> None:
        assert _apply(self.transform, self.items, {"InStock": False}) == [{"InStock": False}]

    def test_none_is_absent(self) -> None:
        assert _apply(self.transform, self.items, {"InStock": None}) == self.items

    @pytest.mark.parametrize("raw", ["false", "False", "0", "no"])
    def test_false_strings(self, raw) -> None:
        assert _apply(self.transform, self.items, {"InStock": raw}) == [{"InStock": False}]

    def test_true_string(self) -> None:
        assert _apply(self.transform, self.items, {"InStock": "true"}) == [{"InStock": True}]

    def test_unparseable_string_is_absent(self) -> None:
        assert _apply(self.transform, self.items, {"InStock": "sometimes"}) == self.items


class TestGeo:
    def test_geo_has_schema_but_no_predicate(self) -> None:
        transform = _transform(MemberDeclaration("Store", float, (SearchFacet(kind=FacetKind.GEO),)))
        assert "StoreLatitude" in transform.schema.field_names
        assert transform.fragments == ()
        items = [{"Store": 1.0}]
        assert _apply(transform, items, {"StoreLatitude": 10.0, "StoreLongitude": 20.0}) == items


# ---------------------------------------------------------------------------
# Full text
# ---------------------------------------------------------------------------


class TestFullText:
    def test_starts_with(self) -> None:
        transform = _transform(
            MemberDeclaration("Slug", str, (FullTextSearch(behavior=TextSearchBehavior.STARTS_WITH),))
        )
        items = [{"Slug": "getting-started"}, {"Slug": "other"}]
        assert _apply(transform, items, {"SearchText": "get"}) == [{"Slug": "getting-started"}]

    @pytest.mark.parametrize("term", [None, "", "   ", "\t\n"])
    def test_blank_term_disables_fragment(self, term) -> None:
        transform = _transform(MemberDeclaration("Title", str, (FullTextSearch(),)))
        items = [{"Title": "a"}, {"Title": "b"}]
        assert _apply(transform, items, {"SearchText": term}) == items

    def test_term_is_stripped(self) -> None:
        transform = _transform(MemberDeclaration("Title", str, (FullTextSearch(behavior="Exact"),)))
        items = [{"Title": "drill"}, {"Title": "drill bit"}]
        assert _apply(transform, items, {"SearchText": "  drill "}) == [{"Title": "drill"}]

    def test_case_insensitive_by_default(self) -> None:
        transform = _transform(MemberDeclaration("Title", str, (FullTextSearch(),)))
        items = [{"Title": "Power DRILL"}, {"Title": "Saw"}]
        assert _apply(transform, items, {"SearchText": "drill"}) == [{"Title": "Power DRILL"}]

    def test_case_sensitive_field(self) -> None:
        transform = _transform(MemberDeclaration("Title", str, (FullTextSearch(case_sensitive=True),)))
        items = [{"Title": "Power DRILL"}, {"Title": "drill"}]
        assert _apply(transform, items, {"SearchText": "drill"}) == [{"Title": "drill"}]

    def test_ends_with(self) -> None:
        transform = _transform(MemberDeclaration("File", str, (FullTextSearch(behavior="EndsWith"),)))
        items = [{"File": "report.pdf"}, {"File": "pdf-notes.txt"}]
        assert _apply(transform, items, {"SearchText": ".PDF"}) == [{"File": "report.pdf"}]

    def test_fields_are_ored(self) -> None:
        transform = _transform(
            MemberDeclaration("Title", str, (FullTextSearch(),)),
            MemberDeclaration("Body", str, (FullTextSearch(),)),
        )
        items = [
            {"Title": "drill", "Body": "x"},
            {"Title": "x", "Body": "a drill"},
            {"Title": "x", "Body": "x"},
        ]
        assert len(_apply(transform, items, {"SearchText": "drill"})) == 2

    def test_null_text_property_does_not_match(self) -> None:
        transform = _transform(MemberDeclaration("Title", str, (FullTextSearch(),)))
        assert _apply(transform, [{"Title": None}], {"SearchText": "x"}) == []

    def test_like_strategy_escapes_wildcards(self) -> None:
        transform = _transform(MemberDeclaration("Title", str, (FullTextSearch(),)), strategy=FullTextStrategy.LIKE)
        items = [{"Title": "100% cotton"}, {"Title": "100 cotton"}]
        assert _apply(transform, items, {"SearchText": "100%"}) == [{"Title": "100% cotton"}]

    def test_client_side_strategy(self) -> None:
        transform = _transform(
            MemberDeclaration("Title", str, (FullTextSearch(),)),
            strategy=FullTextStrategy.CLIENT_SIDE,
        )
        items = [{"Title": "Drill"}, {"Title": "Saw"}]
        assert transform.predicate({"SearchText": "drill"}) is None
        assert _apply(transform, items, {"SearchText": "drill"}) == [{"Title": "Drill"}]

    def test_missing_primitive_falls_back_to_like(self) -> None:
        transform = _transform(
            MemberDeclaration("Title", str, (FullTextSearch(),)),
            strategy=FullTextStrategy.SQLSERVER_FREETEXT,
        )
        assert transform.text is not None
        assert transform.text.plan.fell_back is True
        assert _apply(transform, [{"Title": "Drill"}], {"SearchText": "dri"}) == [{"Title": "Drill"}]

    def test_primitive_the_candidates_lack_uses_like(self) -> None:
        transform = _transform(
            MemberDeclaration("Title", str, (FullTextSearch(),)),
            strategy=FullTextStrategy.SQLSERVER_FREETEXT,
            capabilities=ProviderCapabilities.for_dialect("mssql"),
        )
        items = [{"Title": "Power Drill"}, {"Title": "Power Saw Blade"}]
        values = {"SearchText": "drill power"}
        full = InMemoryCandidates(items)
        plain = InMemoryCandidates(items, capabilities=ProviderCapabilities.none())
        assert transform.apply(full, values).to_list() == items
        assert transform.apply(plain, values).to_list() == []
        assert transform.apply(plain, {"SearchText": "SAW"}).to_list() == [{"Title": "Power Saw Blade"}]


# ---------------------------------------------------------------------------
# Composition and filter-value sources
# ---------------------------------------------------------------------------


class TestComposition:
    def test_absent_filter_is_identity(self, product_cls, products) -> None:
        transform = PredicateCompiler().compile(build_spec(product_cls))
        candidates = InMemoryCandidates(products)
        assert transform.apply(candidates, None) is candidates

    def test_empty_filter_keeps_everything(self, product_cls, products) -> None:
        transform = PredicateCompiler().compile(build_spec(product_cls))
        values = transform.schema.create()
        assert transform.apply(InMemoryCandidates(products), values).to_list() == products

    def test_facets_and_text_are_anded(self, product_cls, products) -> None:
        transform = PredicateCompiler().compile(build_spec(product_cls))
        values = transform.schema.create(Brand=["Acme", "Bolt"], InStock=True, SearchText="a")
        result = transform.apply(InMemoryCandidates(products), values).to_list()
        assert [p.Name for p in result] == ["Hammer", "Saw"]

    def test_navigation_path_filters_through_association(self, product_cls, products) -> None:
        transform = PredicateCompiler().compile(build_spec(product_cls))
        assert transform.includes == ("Buyer",)
        result = transform.apply(InMemoryCandidates(products), {"Country": ["US"]})
        assert [p.Name for p in result.to_list()] == ["Drill"]
        assert result.includes == ("Buyer",)

    def test_missing_association_does_not_match(self, product_cls, products) -> None:
        transform = PredicateCompiler().compile(build_spec(product_cls))
        result = transform.apply(InMemoryCandidates(products), {"Country": ["BR", "US"]}).to_list()
        assert "Getting Started Kit" not in [p.Name for p in result]

    def test_attribute_object_as_filter(self) -> None:
        transform = _transform(MemberDeclaration("Brand", str, (SearchFacet(),)))
        items = [{"Brand": "X"}, {"Brand": "Y"}]
        assert _apply(transform, items, SimpleNamespace(Brand=["Y"])) == [{"Brand": "Y"}]

    def test_callable(self) -> None:
        transform = _transform(MemberDeclaration("Brand", str, (SearchFacet(),)))
        assert transform(InMemoryCandidates([{"Brand": "X"}]), {"Brand": ["Q"]}).to_list() == []

    def test_input_candidates_are_not_modified(self) -> None:
        transform = _transform(MemberDeclaration("Brand", str, (SearchFacet(),)))
        candidates = InMemoryCandidates([{"Brand": "X"}, {"Brand": "Y"}])
        transform.apply(candidates, {"Brand": ["X"]})
        assert len(candidates.to_list()) == 2


# ---------------------------------------------------------------------------
# Sorting and paging
# ---------------------------------------------------------------------------


class TestSortAndPage:
    def setup_method(self) -> None:
        self.transform = _transform(
            MemberDeclaration("Brand", str, (SearchFacet(),)),
            MemberDeclaration("Rating", int, (Searchable(),)),
            MemberDeclaration("Secret", int, (Searchable(sortable=False),)),
        )
        self.items = [{"Rating": r, "Secret": -r} for r in (3, 1, 2)]

    def test_sort_ascending_and_descending(self) -> None:
        candidates = InMemoryCandidates(self.items)
        assert [i["Rating"] for i in self.transform.sort(candidates, "Rating").to_list()] == [1, 2, 3]
        assert [i["Rating"] for i in self.transform.sort(candidates, "Rating", descending=True).to_list()] == [3, 2, 1]

    @pytest.mark.parametrize("name", ["Unknown", "Secret", "", None])
    def test_unsortable_names_are_ignored(self, name) -> None:
        candidates = InMemoryCandidates(self.items)
        assert self.transform.sort(candidates, name) is candidates

    def test_page(self) -> None:
        candidates = self.transform.sort(InMemoryCandidates(self.items), "Rating")
        page = self.transform.page(candidates, page=2, size=2)
        assert isinstance(page, Page)
        assert [i["Rating"] for i in page.items] == [3]
        assert page.total == 3
        assert page.total_pages == 2
        assert page.has_previous and not page.has_next

    def test_page_normalizes_bad_input(self) -> None:
        page = self.transform.page(InMemoryCandidates(self.items), page=0, size=0)
        assert page.page == 1
        assert page.size == 10
        assert len(page.items) == 3
