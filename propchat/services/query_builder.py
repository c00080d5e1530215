from typing import List

from propchat.schemas.property_search import FilterRecord
from propchat.schemas.query import CompiledQuery, Condition, Group, SortKey, SortSpec

TEXT_FILTERS = ("area", "developer", "property_type", "status", "sale_status", "furnished", "payment_plan")

DEFAULT_SORT: SortSpec = (SortKey(field="status"), SortKey(field="min_price"))

# First matching rule wins
SORT_RULES = (
    (("cheapest", "budget", "affordable"), (SortKey(field="min_price"),)),
    (("expensive", "luxury", "premium"), (SortKey(field="min_price", direction="desc"),)),
    (("biggest", "largest", "spacious"), (SortKey(field="area_sqft", direction="desc"),)),
    (("compact", "small"), (SortKey(field="area_sqft"),)),
    (("ready", "immediate"), DEFAULT_SORT),
)


def _price_clause(filters: FilterRecord) -> list:
    low, high = filters.min_price, filters.max_price

    if low and high:
        # Listing's own [min_price, max_price] must overlap the budget,
        # or its starting price must fall inside it.
        return [Group(mode="or", clauses=(
            Group(clauses=(
                Condition(field="min_price", op="lte", value=high),
                Condition(field="max_price", op="gte", value=low),
            )),
            Group(clauses=(
                Condition(field="min_price", op="gte", value=low),
                Condition(field="min_price", op="lte", value=high),
            )),
        ))]
    if low:
        return [Condition(field="max_price", op="gte", value=low)]
    if high:
        return [Condition(field="min_price", op="lte", value=high)]
    return []


def _range_clause(field: str, low, high) -> List[Condition]:
    clauses = []
    if low:
        clauses.append(Condition(field=field, op="gte", value=low))
    if high:
        clauses.append(Condition(field=field, op="lte", value=high))
    return clauses


def build_query(filters: FilterRecord) -> CompiledQuery:
    """
    Compiles sanitized filters into a store query.
    Pure and deterministic; fields that are None never produce a clause.
    """
    clauses = []

    # 1. Text (case-insensitive partial match)
    for field in TEXT_FILTERS:
        value = getattr(filters, field)
        if value:
            clauses.append(Condition(field=field, op="icontains", value=value))

    # 2. Exact match
    if filters.bedrooms:
        clauses.append(Condition(field="bedrooms", op="eq", value=filters.bedrooms))
    if filters.bathrooms:
        clauses.append(Condition(field="bathrooms", op="eq", value=filters.bathrooms))

    # 3. Budget
    clauses.extend(_price_clause(filters))

    # 4. Size & floor
    clauses.extend(_range_clause("area_sqft", filters.min_area_sqft, filters.max_area_sqft))
    if filters.floor_range:
        clauses.extend(_range_clause("floor", filters.floor_range.min, filters.floor_range.max))

    # 5. Amenities (all of them)
    if filters.amenities:
        clauses.append(Condition(field="amenities", op="all_icontains", value=tuple(filters.amenities)))

    return CompiledQuery(where=Group(mode="and", clauses=tuple(clauses)))


def derive_sort(query: str) -> SortSpec:
    """Keyword-based ranking taken from the raw user text."""
    text = (query or "").lower()
    for keywords, sort in SORT_RULES:
        if any(k in text for k in keywords):
            return sort
    return DEFAULT_SORT
