import logging
from typing import Any, Dict, List, Optional

from propchat.config import PipelineSettings
from propchat.core.exceptions import CompletionError
from propchat.schemas.property_search import FilterRecord
from propchat.services.openai_service import CompletionService, ask

logger = logging.getLogger(__name__)

NO_FILTERS = "No specific filters"


# --- FIXED FALLBACKS (used whenever the completion service lets us down) ---

def property_fallback(settings: PipelineSettings) -> str:
    return (
        f"Hi! I'm {settings.assistant_name} from {settings.company.name}. "
        "I'm experiencing some technical difficulties right now, but I'm here to help you "
        "find your dream property. Please try your search again, or refine it with an area, "
        "a budget or a number of bedrooms!"
    )


def company_fallback(settings: PipelineSettings) -> str:
    company = settings.company
    return (
        "Here's how to reach us:\n\n"
        f"📍 Office: {company.office}\n"
        f"📞 Phone: {company.phone}\n"
        f"✉️ Email: {company.email}\n\n"
        "How can I help you with your property search today?"
    )


def chat_fallback(settings: PipelineSettings) -> str:
    return (
        f"Hello! I'm {settings.assistant_name} from {settings.company.name} 👋 "
        "I'm here to help you find the perfect property in Dubai. "
        "What kind of property are you looking for today?"
    )


# --- PROMPT CONTEXT ---

def render_filters(filters: Optional[FilterRecord]) -> str:
    applied = filters.applied() if filters else {}
    if not applied:
        return NO_FILTERS
    parts = []
    for key, value in applied.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        elif isinstance(value, dict):
            value = ", ".join(f"{k} {v}" for k, v in value.items())
        parts.append(f"{key}: {value}")
    return ", ".join(parts)


def _number(value: Any, unit: str = "") -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return f"{unit}{value:,.0f}"


def render_listing(index: int, p: Dict[str, Any]) -> str:
    low = _number(p.get("min_price"), "AED ") or "N/A"
    high = _number(p.get("max_price"), "AED ") or "N/A"
    size = _number(p.get("area_sqft"))

    lines = [
        f"{index}. **{p.get('name') or 'Unnamed property'}**",
        f"   📍 Location: {p.get('area') or 'Not specified'}",
        f"   🏗️ Developer: {p.get('developer') or 'Not specified'}",
        f"   🏠 Type: {p.get('property_type') or 'Not specified'}",
        f"   🛏️ Bedrooms: {p.get('bedrooms') or 'Not specified'}",
        f"   🚿 Bathrooms: {p.get('bathrooms') or 'Not specified'}",
        f"   💰 Price: {low} - {high}",
        f"   📏 Area: {size + ' sqft' if size else 'Not specified'}",
        f"   ✅ Status: {p.get('status') or 'Not specified'}",
        f"   🏷️ Availability: {p.get('sale_status') or 'Not specified'}",
    ]
    amenities = p.get("amenities") or []
    if amenities:
        more = "..." if len(amenities) > 3 else ""
        lines.append(f"   🏊 Amenities: {', '.join(str(a) for a in amenities[:3])}{more}")
    return "\n".join(lines)


def render_listings(listings: List[Dict[str, Any]]) -> str:
    if not listings:
        return "None - no property matched."
    return "\n\n".join(render_listing(i, p) for i, p in enumerate(listings, start=1))


# --- BRANCHES ---

async def synthesize_property_response(
    llm: CompletionService,
    query: str,
    filters: Optional[FilterRecord],
    top_listings: List[Dict[str, Any]],
    total_found: int,
    settings: PipelineSettings,
) -> str:
    """
    Grounds the model in the applied filters, the match count and the
    top listings (at most settings.narrative_limit of them).
    """
    prompt = settings.property_response_prompt.format(
        assistant_name=settings.assistant_name,
        company_name=settings.company.name,
        user_query=query,
        filters_applied=render_filters(filters),
        total_found=total_found,
        top_properties=render_listings(top_listings[:settings.narrative_limit]),
    )
    try:
        return await ask(llm, prompt, query, timeout=settings.llm_timeout)
    except CompletionError as e:
        logger.error(f"Response generation error: {e}")
        return property_fallback(settings)


async def synthesize_company_response(llm: CompletionService, query: str, settings: PipelineSettings) -> str:
    company = settings.company
    prompt = settings.company_response_prompt.format(
        assistant_name=settings.assistant_name,
        company_name=company.name,
        company_office=company.office,
        company_phone=company.phone,
        company_email=company.email,
        user_query=query,
    )
    try:
        return await ask(llm, prompt, query, timeout=settings.llm_timeout)
    except CompletionError as e:
        logger.error(f"Company info response error: {e}")
        return company_fallback(settings)


async def synthesize_chat_response(llm: CompletionService, query: str, settings: PipelineSettings) -> str:
    prompt = settings.chat_response_prompt.format(
        assistant_name=settings.assistant_name,
        company_name=settings.company.name,
        examples=" or ".join(f'"{s}"' for s in settings.suggestions[:2]),
        user_query=query,
    )
    try:
        return await ask(llm, prompt, query, timeout=settings.llm_timeout)
    except CompletionError as e:
        logger.error(f"General response error: {e}")
        return chat_fallback(settings)
