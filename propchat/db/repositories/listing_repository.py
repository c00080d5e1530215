import asyncio
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, exists, func, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from propchat.core.exceptions import RecordStoreError
from propchat.db.models import LISTING_FIELDS, Listing
from propchat.schemas.query import CompiledQuery, Condition, Group, SortSpec

logger = logging.getLogger(__name__)

_QUERYABLE = set(LISTING_FIELDS) - {"name", "description"}


def _column(field: str):
    # Only whitelisted listing attributes can be referenced
    if field not in _QUERYABLE:
        raise ValueError(f"Unknown listing field: {field}")
    return getattr(Listing, field)


def _json_elements(column, dialect: str):
    # One row per list entry, as text
    if dialect == "sqlite":
        return func.json_each(column).table_valued("value").alias()
    return func.json_array_elements_text(column).table_valued("value").alias()


def to_clause(node, dialect: str = "postgresql"):
    """Translates a compiled predicate tree into a SQLAlchemy boolean clause."""
    if isinstance(node, Group):
        parts = [to_clause(c, dialect) for c in node.clauses]
        if not parts:
            return true()
        return and_(*parts) if node.mode == "and" else or_(*parts)

    column = _column(node.field)

    if node.op == "icontains":
        return column.icontains(node.value, autoescape=True)
    if node.op == "eq":
        return column == node.value
    if node.op == "gte":
        return column >= node.value
    if node.op == "lte":
        return column <= node.value
    if node.op == "all_icontains":
        # Every requested value must match some entry of the JSON list
        clauses = []
        for v in node.value:
            entries = _json_elements(column, dialect)
            clauses.append(exists(
                select(1).select_from(entries).where(entries.c.value.icontains(v, autoescape=True))
            ))
        return and_(*clauses)

    raise ValueError(f"Unsupported operator: {node.op}")


def to_order_by(sort: SortSpec) -> list:
    order = []
    for key in sort:
        column = _column(key.field)
        ordered = column.desc() if key.direction == "desc" else column.asc()
        order.append(ordered.nulls_last())
    # Stable tie-break so equal queries return equal pages
    order.append(Listing.id.asc())
    return order


class ListingRepository:
    def __init__(self, db: AsyncSession, timeout: Optional[float] = None):
        self.db = db
        self.timeout = timeout

    @property
    def dialect(self) -> str:
        bind = getattr(self.db, "bind", None)
        return bind.dialect.name if bind is not None else "postgresql"

    async def _execute(self, stmt):
        try:
            if self.timeout:
                return await asyncio.wait_for(self.db.execute(stmt), timeout=self.timeout)
            return await self.db.execute(stmt)
        except asyncio.TimeoutError as e:
            logger.error(f"Listing store timed out after {self.timeout}s")
            raise RecordStoreError("listing store timed out") from e
        except SQLAlchemyError as e:
            logger.error(f"Listing store error: {e}")
            raise RecordStoreError("listing store query failed") from e

    async def find(self, query: CompiledQuery, sort: SortSpec, limit: int = 500) -> List[Dict[str, Any]]:
        """
        Runs one compiled query against the store.
        Returns at most `limit` listings, projected to LISTING_FIELDS, in sort order.
        """
        stmt = (
            select(*[getattr(Listing, f) for f in LISTING_FIELDS])
            .where(to_clause(query.where, self.dialect))
            .order_by(*to_order_by(sort))
            .limit(limit)
        )
        result = await self._execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def _distinct(self, column) -> list:
        result = await self._execute(select(column).where(column.isnot(None)).distinct())
        return [v for v in result.scalars().all() if v not in (None, "")]

    async def get_filter_options(self) -> Dict[str, Any]:
        """Distinct values users can filter on, for building search UIs."""
        areas = await self._distinct(Listing.area)
        developers = await self._distinct(Listing.developer)
        property_types = await self._distinct(Listing.property_type)
        statuses = await self._distinct(Listing.status)
        bedrooms = await self._distinct(Listing.bedrooms)

        price_row = (await self._execute(
            select(func.min(Listing.min_price), func.max(Listing.max_price))
        )).one()

        return {
            "areas": sorted(areas),
            "developers": sorted(developers),
            "property_types": sorted(property_types),
            "statuses": sorted(statuses),
            "bedroom_options": sorted(bedrooms),
            "price_range": {"min": price_row[0], "max": price_row[1]},
        }
