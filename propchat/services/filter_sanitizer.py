"""
Validation for model-extracted filters.

The extractor output is untrusted: any key may be missing, mistyped or
nonsensical. sanitize_filters keeps what is valid and silently drops the
rest. It never raises and never invents a default, and running it on its
own output changes nothing.
"""
import logging
import math
from collections.abc import Mapping
from typing import Any, Optional, Tuple, Union

from propchat.schemas.property_search import FilterRecord, FloorRange

logger = logging.getLogger(__name__)

# canonical name -> spellings accepted from the model
TEXT_FIELDS = {
    "area": ("area",),
    "developer": ("developer",),
    "property_type": ("property_type", "propertyType"),
    "status": ("status",),
    "sale_status": ("sale_status", "saleStatus"),
    "furnished": ("furnished",),
    "payment_plan": ("payment_plan", "paymentPlan"),
}
INTEGER_FIELDS = {
    "bedrooms": ("bedrooms",),
    "bathrooms": ("bathrooms",),
}
NUMBER_FIELDS = {
    "min_price": ("min_price", "minPrice"),
    "max_price": ("max_price", "maxPrice"),
    "min_area_sqft": ("min_area_sqft", "minAreaSqft"),
    "max_area_sqft": ("max_area_sqft", "maxAreaSqft"),
}

# Bounds a listing column can hold; larger values are dropped
MAX_INTEGER = 2**31 - 1
MAX_NUMBER = 10**15


def _pick(raw: Mapping, names: Tuple[str, ...]) -> Any:
    for name in names:
        if name in raw and raw[name] is not None:
            return raw[name]
    return None


def clean_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def clean_positive_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, int) and 0 < value <= MAX_INTEGER:
        return value
    return None


def clean_positive_number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value if 0 < value <= MAX_NUMBER else None


def clean_amenities(value: Any) -> Optional[Tuple[str, ...]]:
    if not isinstance(value, (list, tuple)) or not value:
        return None
    kept = []
    seen = set()
    for item in value:
        item = clean_text(item)
        if item is None or item.lower() in seen:
            continue
        seen.add(item.lower())
        kept.append(item)
    return tuple(kept) or None


def clean_floor_range(value: Any) -> Optional[FloorRange]:
    if isinstance(value, FloorRange):
        value = value.model_dump()
    if not isinstance(value, Mapping):
        return None
    low = clean_positive_int(value.get("min"))
    high = clean_positive_int(value.get("max"))
    if low is None and high is None:
        return None
    return FloorRange(min=low, max=high)


def sanitize_filters(raw: Any) -> FilterRecord:
    """
    Builds a FilterRecord from whatever the extractor produced.
    Accepts a mapping (snake_case or camelCase keys) or an existing FilterRecord.
    """
    if isinstance(raw, FilterRecord):
        raw = raw.model_dump(exclude_none=True)
    if not isinstance(raw, Mapping):
        return FilterRecord()

    fields = {}
    for name, keys in TEXT_FIELDS.items():
        fields[name] = clean_text(_pick(raw, keys))
    for name, keys in INTEGER_FIELDS.items():
        fields[name] = clean_positive_int(_pick(raw, keys))
    for name, keys in NUMBER_FIELDS.items():
        fields[name] = clean_positive_number(_pick(raw, keys))

    fields["amenities"] = clean_amenities(raw.get("amenities"))
    fields["floor_range"] = clean_floor_range(_pick(raw, ("floor_range", "floorRange")))

    record = FilterRecord(**{k: v for k, v in fields.items() if v is not None})

    accepted = _accepted_keys(record)
    dropped = [str(k) for k in raw if k not in accepted]
    if dropped:
        logger.debug(f"Dropped invalid/unknown filter keys: {dropped}")
    return record


def _accepted_keys(record: FilterRecord) -> set:
    kept = set()
    spellings = {**TEXT_FIELDS, **INTEGER_FIELDS, **NUMBER_FIELDS,
                 "amenities": ("amenities",), "floor_range": ("floor_range", "floorRange")}
    for name in record.applied():
        kept.update(spellings[name])
    return kept
