# propchat/schemas/property_search.py
from pydantic import BaseModel, Field
from typing import Optional, Tuple, Union


class FloorRange(BaseModel):
    min: Optional[int] = Field(None, description="Lowest acceptable floor.")
    max: Optional[int] = Field(None, description="Highest acceptable floor.")

    model_config = {"frozen": True}


class FilterRecord(BaseModel):
    """
    Sanitized search constraints for one user query.
    A field left as None means "unconstrained" and never reaches the store query.
    Only filter_sanitizer should construct these.
    """

    # --- 1. TEXT (case-insensitive substring) ---
    area: Optional[str] = Field(None, description="Community or district, e.g. 'Damac Hills'.")
    developer: Optional[str] = Field(None, description="Developer name, e.g. 'Emaar'.")
    property_type: Optional[str] = Field(None, description="Villa, Apartment, Penthouse, Studio, Townhouse.")
    status: Optional[str] = Field(None, description="Construction status: Ready, Off Plan, Under Construction.")
    sale_status: Optional[str] = Field(None, description="Available, Sold, Reserved.")
    furnished: Optional[str] = Field(None, description="Furnished, Unfurnished, Semi-furnished.")
    payment_plan: Optional[str] = Field(None, description="Cash, Installment, Mortgage.")

    # --- 2. EXACT ---
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None

    # --- 3. RANGES ---
    min_price: Optional[Union[int, float]] = Field(None, description="Lower budget bound in AED.")
    max_price: Optional[Union[int, float]] = Field(None, description="Upper budget bound in AED.")
    min_area_sqft: Optional[Union[int, float]] = None
    max_area_sqft: Optional[Union[int, float]] = None
    floor_range: Optional[FloorRange] = None

    # --- 4. ALL-OF ---
    amenities: Optional[Tuple[str, ...]] = None

    model_config = {"frozen": True}

    def applied(self) -> dict:
        """Only the fields the user actually specified."""
        return self.model_dump(exclude_none=True, mode="json")
