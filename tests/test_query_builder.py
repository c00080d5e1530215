import pytest

from propchat.schemas.query import CompiledQuery, Condition, Group, SortKey
from propchat.services.filter_sanitizer import sanitize_filters
from propchat.services.query_builder import DEFAULT_SORT, build_query, derive_sort


def test_empty_filters_are_unconstrained():
    query = build_query(sanitize_filters({}))
    assert query == CompiledQuery()
    assert query.is_unconstrained()


def test_bedrooms_and_type_only():
    query = build_query(sanitize_filters({"bedrooms": 3, "propertyType": "Villa"}))
    assert query.where == Group(mode="and", clauses=(
        Condition(field="property_type", op="icontains", value="Villa"),
        Condition(field="bedrooms", op="eq", value=3),
    ))


def test_text_fields_compile_to_icontains():
    filters = sanitize_filters({
        "area": "Damac Hills", "developer": "DAMAC", "status": "Ready",
        "sale_status": "Available", "furnished": "Furnished", "payment_plan": "Cash",
    })
    clauses = build_query(filters).where.clauses
    assert {(c.field, c.op) for c in clauses} == {
        ("area", "icontains"), ("developer", "icontains"), ("status", "icontains"),
        ("sale_status", "icontains"), ("furnished", "icontains"), ("payment_plan", "icontains"),
    }


def test_price_with_both_bounds_uses_overlap_or_start_inside():
    query = build_query(sanitize_filters({"min_price": 1_000_000, "max_price": 2_000_000}))
    (price,) = query.where.clauses
    assert price == Group(mode="or", clauses=(
        Group(mode="and", clauses=(
            Condition(field="min_price", op="lte", value=2_000_000),
            Condition(field="max_price", op="gte", value=1_000_000),
        )),
        Group(mode="and", clauses=(
            Condition(field="min_price", op="gte", value=1_000_000),
            Condition(field="min_price", op="lte", value=2_000_000),
        )),
    ))


def test_price_single_bounds():
    only_min = build_query(sanitize_filters({"min_price": 500}))
    assert only_min.where.clauses == (Condition(field="max_price", op="gte", value=500),)

    only_max = build_query(sanitize_filters({"max_price": 900}))
    assert only_max.where.clauses == (Condition(field="min_price", op="lte", value=900),)


def test_area_and_floor_ranges_only_use_present_bounds():
    query = build_query(sanitize_filters({"min_area_sqft": 2000, "floor_range": {"max": 30}}))
    assert query.where.clauses == (
        Condition(field="area_sqft", op="gte", value=2000),
        Condition(field="floor", op="lte", value=30),
    )


def test_amenities_all_of():
    query = build_query(sanitize_filters({"amenities": ["Swimming Pool", "Gym"]}))
    assert query.where.clauses == (
        Condition(field="amenities", op="all_icontains", value=("Swimming Pool", "Gym")),
    )


def test_empty_amenities_never_reach_the_query():
    query = build_query(sanitize_filters({"amenities": ["  ", ""], "bedrooms": 2}))
    assert all(c.field != "amenities" for c in query.where.clauses)
    assert query.where.clauses == (Condition(field="bedrooms", op="eq", value=2),)


def test_deterministic():
    raw = {"area": "Downtown", "min_price": 1, "max_price": 5, "amenities": ["Gym"], "floor_range": {"min": 2}}
    first = build_query(sanitize_filters(raw))
    second = build_query(sanitize_filters(dict(raw)))
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


@pytest.mark.parametrize("query, expected", [
    ("cheapest apartments", (SortKey(field="min_price", direction="asc"),)),
    ("Affordable villa with a BUDGET", (SortKey(field="min_price", direction="asc"),)),
    ("luxury penthouse", (SortKey(field="min_price", direction="desc"),)),
    ("Premium villas", (SortKey(field="min_price", direction="desc"),)),
    ("spacious family home", (SortKey(field="area_sqft", direction="desc"),)),
    ("largest villa", (SortKey(field="area_sqft", direction="desc"),)),
    ("small studio", (SortKey(field="area_sqft", direction="asc"),)),
    ("compact flat", (SortKey(field="area_sqft", direction="asc"),)),
    ("ready to move", DEFAULT_SORT),
    ("3 bedroom villa in Damac Hills", DEFAULT_SORT),
    ("", DEFAULT_SORT),
])
def test_derive_sort(query, expected):
    assert derive_sort(query) == expected


def test_first_matching_sort_rule_wins():
    # "cheapest" outranks "luxury" and "spacious"
    assert derive_sort("cheapest luxury spacious villa") == (SortKey(field="min_price"),)
    assert derive_sort("spacious but compact") == (SortKey(field="area_sqft", direction="desc"),)


def test_default_sort_is_status_then_price():
    assert DEFAULT_SORT == (SortKey(field="status", direction="asc"), SortKey(field="min_price", direction="asc"))
