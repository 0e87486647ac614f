import itertools

import pytest

from virelia.core.filters import FilterState, SortOption, extract_facets
from virelia.core.url_state import (
    FilterController,
    MemoryNavigator,
    build_query_string,
    normalize_query_value,
    parse_filters_from_query,
    parse_sort_from_query,
    query_from_string,
)


def test_normalize_query_value_handles_each_shape():
    assert normalize_query_value(None) is None
    assert normalize_query_value("a,b") == "a,b"
    assert normalize_query_value(["first", "second"]) == "first"
    assert normalize_query_value([]) is None


def test_parse_filters_reads_each_facet_and_drops_empty_tokens():
    query = {"packaging": "Glass jar,,Tin can", "origin": ["Turkey,Italy"], "moq": "lte5", "other": "x"}
    state = parse_filters_from_query(query)
    assert state == FilterState.of(
        packaging=["Glass jar", "Tin can"],
        origin=["Turkey", "Italy"],
        moq_bucket=["lte5"],
    )
    assert state.certifications == ()


def test_parse_filters_keeps_unknown_values():
    assert parse_filters_from_query({"origin": "Atlantis"}).origin == ("Atlantis",)


@pytest.mark.parametrize("raw", ["garbage", "", "DEFAULT", "name_asc", None, "default"])
def test_unknown_sort_collapses_to_default(raw):
    assert parse_sort_from_query({"sort": raw}) == SortOption.DEFAULT


def test_known_sorts_are_accepted():
    for option in ("name-asc", "name-desc", "moq-asc"):
        assert parse_sort_from_query({"sort": option}).value == option
    assert parse_sort_from_query({"sort": ["moq-asc", "name-asc"]}) == SortOption.MOQ_ASC


def test_build_query_string_is_ordered_and_empty_when_default():
    assert build_query_string(FilterState(), SortOption.DEFAULT) == ""
    state = FilterState.of(certifications=["Halal"], packaging=["Glass jar", "Tin can"], moq_bucket=["gt10"])
    assert (
        build_query_string(state, SortOption.NAME_DESC)
        == "?packaging=Glass+jar%2CTin+can&moq=gt10&certifications=Halal&sort=name-desc"
    )


def test_round_trip_for_ui_reachable_states(sample_products):
    facets = extract_facets(sample_products)
    choices = {
        "packaging": facets.packaging[:2],
        "origin": facets.origin[:2],
        "moq_bucket": ["lte5", "gt10"],
        "certifications": facets.certifications[:2],
    }
    for sort in SortOption:
        for facet, values in choices.items():
            for size in range(len(values) + 1):
                for picked in itertools.permutations(values, size):
                    state = FilterState().with_facet(facet, picked)
                    query = query_from_string(build_query_string(state, sort))
                    assert parse_filters_from_query(query) == state
                    assert parse_sort_from_query(query) == sort


def test_comma_values_are_not_round_trip_safe():
    state = FilterState.of(packaging=["Tin, large"])
    parsed = parse_filters_from_query(query_from_string(build_query_string(state, SortOption.DEFAULT)))
    assert parsed.packaging == ("Tin", " large")


def test_controller_initializes_from_deep_link(sample_products):
    nav = MemoryNavigator("/products/all?origin=Italy&sort=name-asc")
    controller = FilterController(sample_products, nav)
    controller.initialize()
    assert controller.filters.origin == ("Italy",)
    assert controller.sort == SortOption.NAME_ASC
    assert [p.slug for p in controller.filtered_products] == ["pizza-sauces"]
    assert nav.history == []


def test_controller_does_not_navigate_before_initialize(sample_products):
    nav = MemoryNavigator("/products/all?origin=Italy")
    controller = FilterController(sample_products, nav)
    controller.toggle_filter("origin", "Turkey")
    assert nav.history == []
    controller.initialize()
    assert controller.filters.origin == ("Italy",)


def test_controller_replaces_url_on_each_mutation(sample_products):
    nav = MemoryNavigator("/products/all")
    with FilterController(sample_products, nav) as controller:
        controller.toggle_filter("origin", "Turkey")
        controller.update_sort(SortOption.MOQ_ASC)
        controller.toggle_filter("origin", "Turkey")
        controller.clear_filters()
    assert nav.history == [
        "/products/all?origin=Turkey",
        "/products/all?origin=Turkey&sort=moq-asc",
        "/products/all?sort=moq-asc",
    ]


def test_controller_skips_navigation_when_url_unchanged(sample_products):
    nav = MemoryNavigator("/products/all?moq=lte5")
    controller = FilterController(sample_products, nav)
    controller.initialize()
    controller.update_filters(FilterState.of(moq_bucket=["lte5"]))
    controller.update_sort(SortOption.DEFAULT)
    assert nav.history == []


def test_controller_initializes_only_once(sample_products):
    nav = MemoryNavigator("/products/all?origin=Italy")
    controller = FilterController(sample_products, nav)
    controller.initialize()
    controller.toggle_filter("origin", "Turkey")
    controller.initialize()
    assert controller.filters.origin == ("Italy", "Turkey")


def test_controller_stops_navigating_after_close(sample_products):
    nav = MemoryNavigator("/products/all")
    controller = FilterController(sample_products, nav)
    controller.initialize()
    controller.close()
    controller.toggle_filter("origin", "Italy")
    assert nav.history == []
    assert controller.filters.origin == ("Italy",)


def test_controller_view_reports_counts(sample_products):
    nav = MemoryNavigator("/products/all?origin=Atlantis")
    controller = FilterController(sample_products, nav)
    controller.initialize()
    view = controller.view()
    assert view.products == []
    assert view.total == len(sample_products)
    assert view.active_filter_count == 1
    assert view.query == "?origin=Atlantis"
    assert controller.active_filter_count == 1
    assert controller.facets.origin == ["Indonesia", "Italy", "Tunisia", "Turkey"]
