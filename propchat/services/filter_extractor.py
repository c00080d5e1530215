import logging
from typing import Any, Dict

from propchat.config import PipelineSettings
from propchat.core.exceptions import CompletionError
from propchat.services.json_parsing import extract_json_object
from propchat.services.openai_service import CompletionService, ask

logger = logging.getLogger(__name__)


async def extract_filters(llm: CompletionService, query: str, settings: PipelineSettings) -> Dict[str, Any]:
    """
    One best-effort call that turns the query into raw, unvalidated filters.
    On any failure the search simply runs unconstrained, so this returns {}.
    """
    prompt = settings.extraction_prompt.format(
        assistant_name=settings.assistant_name,
        company_name=settings.company.name,
        user_query=query,
    )
    try:
        raw = await ask(llm, prompt, query, timeout=settings.llm_timeout)
    except CompletionError as e:
        logger.warning(f"Filter extraction failed, searching without filters: {e}")
        return {}

    data = extract_json_object(raw)
    if data is None:
        logger.warning("Filter extraction returned no JSON object")
        return {}

    logger.info(f"📋 Extracted Filters (raw): {data}")
    return data
