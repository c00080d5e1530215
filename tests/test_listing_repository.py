"""
Runs compiled queries against an in-memory SQLite store.
"""
import asyncio

import pytest

from propchat.core.exceptions import RecordStoreError
from propchat.db.models import LISTING_FIELDS, Listing
from propchat.db.repositories.listing_repository import ListingRepository
from propchat.schemas.query import CompiledQuery
from propchat.services.filter_sanitizer import sanitize_filters
from propchat.services.query_builder import DEFAULT_SORT, build_query, derive_sort


async def names(session, raw_filters, text=""):
    repo = ListingRepository(session)
    rows = await repo.find(build_query(sanitize_filters(raw_filters)), derive_sort(text))
    return [r["name"] for r in rows]


@pytest.mark.asyncio
async def test_bedrooms_and_villa_match_exactly(db_session):
    assert await names(db_session, {"bedrooms": 3, "property_type": "villa"}) == ["Damac Hills Villa A"]


@pytest.mark.asyncio
async def test_three_bedroom_villa_in_damac_hills(db_session):
    filters = {"area": "Damac Hills", "property_type": "Villa", "bedrooms": 3}
    assert await names(db_session, filters, "3 bedroom villa in Damac Hills") == ["Damac Hills Villa A"]


@pytest.mark.asyncio
async def test_text_match_is_case_insensitive_substring(db_session):
    assert await names(db_session, {"area": "damac"}) == [
        "Damac Hills Villa B", "Damac Hills Apartment", "Damac Hills Villa A",
    ]


@pytest.mark.asyncio
async def test_price_overlap(db_session):
    result = await names(db_session, {"min_price": 1_000_000, "max_price": 2_000_000}, "cheapest")
    assert result == ["Downtown Residence", "Damac Hills Apartment", "Damac Hills Villa A"]


@pytest.mark.asyncio
async def test_price_upper_bound_only(db_session):
    assert await names(db_session, {"max_price": 1_000_000}) == ["Marina Studio"]


@pytest.mark.asyncio
async def test_price_lower_bound_only(db_session):
    result = await names(db_session, {"min_price": 2_500_000}, "cheapest")
    assert result == ["Ranches Townhouse", "Damac Hills Villa B"]


@pytest.mark.asyncio
async def test_area_and_floor_ranges(db_session):
    assert await names(db_session, {"min_area_sqft": 2000, "max_area_sqft": 3000}, "biggest") == [
        "Damac Hills Villa A", "Ranches Townhouse",
    ]
    assert await names(db_session, {"floor_range": {"min": 10}}, "cheapest") == [
        "Marina Studio", "Downtown Residence",
    ]


@pytest.mark.asyncio
async def test_amenities_must_all_be_present(db_session):
    assert await names(db_session, {"amenities": ["swimming pool", "GYM"]}) == ["Damac Hills Villa A"]
    assert await names(db_session, {"amenities": ["gym"]}, "cheapest") == [
        "Marina Studio", "Downtown Residence", "Damac Hills Villa A",
    ]


@pytest.mark.asyncio
async def test_like_wildcards_are_literal(db_session):
    assert await names(db_session, {"area": "%"}) == []
    assert await names(db_session, {"area": "_"}) == []


@pytest.mark.asyncio
async def test_default_sort_is_status_then_price(db_session):
    assert await names(db_session, {}) == [
        "Damac Hills Villa B",       # Off Plan
        "Marina Studio",             # Ready, cheapest first
        "Downtown Residence",
        "Damac Hills Apartment",
        "Damac Hills Villa A",
        "Ranches Townhouse",         # Under Construction
    ]


@pytest.mark.asyncio
async def test_sort_by_price_descending(db_session):
    result = await names(db_session, {}, "luxury homes")
    assert result[0] == "Damac Hills Villa B"
    assert result[-1] == "Marina Studio"


@pytest.mark.asyncio
async def test_limit_and_projection(db_session):
    repo = ListingRepository(db_session)
    rows = await repo.find(CompiledQuery(), DEFAULT_SORT, limit=2)
    assert len(rows) == 2
    assert set(rows[0]) == set(LISTING_FIELDS)
    assert isinstance(rows[0]["amenities"], list)


@pytest.mark.asyncio
async def test_zero_results_is_not_an_error(db_session):
    assert await names(db_session, {"area": "Jumeirah Golf Estates"}) == []


@pytest.mark.asyncio
async def test_store_failure_raises_record_store_error(empty_db_session):
    repo = ListingRepository(empty_db_session)
    with pytest.raises(RecordStoreError):
        await repo.find(CompiledQuery(), DEFAULT_SORT)


@pytest.mark.asyncio
async def test_store_timeout_raises_record_store_error():
    class SlowSession:
        async def execute(self, stmt):
            await asyncio.sleep(5)

    repo = ListingRepository(SlowSession(), timeout=0.01)
    with pytest.raises(RecordStoreError):
        await repo.find(CompiledQuery(), DEFAULT_SORT)


@pytest.mark.asyncio
async def test_filter_options(db_session):
    options = await ListingRepository(db_session).get_filter_options()
    assert options["areas"] == ["Arabian Ranches", "Damac Hills", "Downtown Dubai", "Dubai Marina"]
    assert options["developers"] == ["DAMAC", "Emaar", "Select Group"]
    assert options["property_types"] == ["Apartment", "Studio", "Townhouse", "Villa"]
    assert options["statuses"] == ["Off Plan", "Ready", "Under Construction"]
    assert options["bedroom_options"] == [2, 3, 4]
    assert options["price_range"] == {"min": 600_000, "max": 4_000_000}


async def add_listings(session, *listings):
    session.add_all(listings)
    await session.commit()


@pytest.mark.asyncio
async def test_amenities_match_non_ascii_and_quoted_entries(db_session):
    await add_listings(
        db_session,
        Listing(id=7, name="Café Tower", area="Business Bay", status="Ready",
                min_price=900_000, amenities=["Café", "Piscine chauffée"]),
        Listing(id=8, name="Family Block", area="JVC", status="Ready",
                min_price=950_000, amenities=['Kids "Fun" Zone']),
    )
    assert await names(db_session, {"amenities": ["café"]}) == ["Café Tower"]
    assert await names(db_session, {"amenities": ["PISCINE chauffée"]}) == ["Café Tower"]
    assert await names(db_session, {"amenities": ['kids "fun" zone']}) == ["Family Block"]


@pytest.mark.asyncio
async def test_amenity_cannot_match_across_entries(db_session):
    assert await names(db_session, {"amenities": ['gym", "parking']}) == []


@pytest.mark.asyncio
async def test_null_sort_values_rank_last(db_session):
    await add_listings(
        db_session,
        Listing(id=7, name="No Status", area="Dubai Hills", status=None, min_price=100_000, amenities=[]),
    )
    result = await names(db_session, {})
    assert result[0] == "Damac Hills Villa B"
    assert result[-1] == "No Status"


@pytest.mark.asyncio
async def test_oversized_numbers_do_not_reach_the_store(db_session):
    assert len(await names(db_session, {"bedrooms": 10**20})) == 6
    assert await names(db_session, {"bedrooms": 10**20, "area": "Marina"}) == ["Marina Studio"]
    assert len(await names(db_session, {"min_price": 10**20, "floor_range": {"min": 10**20}})) == 6
