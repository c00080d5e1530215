import logging
import math
from typing import Any, Optional

from propchat.config import PipelineSettings
from propchat.core.exceptions import CompletionError
from propchat.schemas.intent import DEFAULT_INTENT, Intent, IntentResult
from propchat.services.json_parsing import extract_json_object
from propchat.services.openai_service import CompletionService, ask

logger = logging.getLogger(__name__)

MALFORMED_CONFIDENCE = 0.5

# Labels the model tends to produce besides the canonical ones
_INTENT_ALIASES = {
    "property_search": Intent.PROPERTY_SEARCH,
    "propertysearch": Intent.PROPERTY_SEARCH,
    "company_info": Intent.COMPANY_INFO,
    "companyinfo": Intent.COMPANY_INFO,
    "general_chat": Intent.GENERAL_CHAT,
    "generalchat": Intent.GENERAL_CHAT,
}


def _parse_intent(value: Any) -> Optional[Intent]:
    if not isinstance(value, str):
        return None
    key = value.strip().lower().replace("-", "_").replace(" ", "_")
    return _INTENT_ALIASES.get(key)


def _parse_confidence(value: Any) -> float:
    # bool is an int subclass, but "true" is not a confidence
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return MALFORMED_CONFIDENCE
    if math.isnan(value) or value < 0 or value > 1:
        return MALFORMED_CONFIDENCE
    return float(value)


def parse_intent_response(raw: Optional[str]) -> IntentResult:
    """Turns raw model text into an IntentResult. Never raises."""
    data = extract_json_object(raw)
    if not data:
        return DEFAULT_INTENT

    intent = _parse_intent(data.get("intent"))
    if intent is None:
        return DEFAULT_INTENT

    reason = data.get("reason")
    if not isinstance(reason, str) or not reason.strip():
        reason = "default classification"

    return IntentResult(
        intent=intent,
        confidence=_parse_confidence(data.get("confidence")),
        reason=reason.strip(),
    )


async def classify_intent(llm: CompletionService, query: str, settings: PipelineSettings) -> IntentResult:
    """
    Asks the completion service what the user wants.
    Classification is advisory: any failure degrades to general chat.
    """
    prompt = settings.intent_prompt.format(
        company_name=settings.company.name,
        user_query=query,
    )
    try:
        raw = await ask(llm, prompt, query, timeout=settings.llm_timeout)
    except CompletionError as e:
        logger.warning(f"Intent detection failed, defaulting to chat: {e}")
        return DEFAULT_INTENT

    result = parse_intent_response(raw)
    logger.info(f"🎯 Intent: {result.intent.value} ({result.confidence:.2f}) - {result.reason}")
    return result


def route_intent(result: IntentResult, settings: PipelineSettings) -> Intent:
    """
    Decides which branch actually runs.
    Property search needs confidence above the threshold; company info is
    honoured at any confidence; everything else is chat.
    """
    if result.intent == Intent.PROPERTY_SEARCH:
        if result.confidence > settings.search_confidence_threshold:
            return Intent.PROPERTY_SEARCH
        return Intent.GENERAL_CHAT
    if result.intent == Intent.COMPANY_INFO:
        return Intent.COMPANY_INFO
    return Intent.GENERAL_CHAT
