# propchat/db/models.py
from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from typing import List, Optional

from propchat.db.base_class import Base


class Listing(Base):
    """A property listing. Read-only from the search pipeline's point of view."""
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    area: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    developer: Mapped[Optional[str]] = mapped_column(String(255))
    property_type: Mapped[Optional[str]] = mapped_column(String(64))
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer)
    min_price: Mapped[Optional[float]] = mapped_column(Float, index=True)
    max_price: Mapped[Optional[float]] = mapped_column(Float)
    area_sqft: Mapped[Optional[float]] = mapped_column(Float)
    status: Mapped[Optional[str]] = mapped_column(String(64))
    sale_status: Mapped[Optional[str]] = mapped_column(String(64))
    amenities: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    floor: Mapped[Optional[int]] = mapped_column(Integer)
    furnished: Mapped[Optional[str]] = mapped_column(String(64))
    payment_plan: Mapped[Optional[str]] = mapped_column(String(64))
    description: Mapped[Optional[str]] = mapped_column(Text)


# Columns returned to callers (and to the response synthesizer)
LISTING_FIELDS = (
    "name", "area", "developer", "property_type", "bedrooms", "bathrooms",
    "min_price", "max_price", "area_sqft", "status", "sale_status",
    "amenities", "floor", "furnished", "payment_plan", "description",
)
