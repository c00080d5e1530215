from langchain_core.runnables import RunnableConfig
import logging

from propchat.core.state import PipelineState
from propchat.services.filter_extractor import extract_filters
from propchat.services.filter_sanitizer import sanitize_filters

logger = logging.getLogger(__name__)


async def extractor_node(state: PipelineState, config: RunnableConfig):
    """Raw filters from the model, then the validated FilterRecord."""
    configurable = config.get("configurable", {})
    raw = await extract_filters(configurable["llm"], state["query"], configurable["settings"])
    filters = sanitize_filters(raw)

    logger.info(f"📋 Applied Filters: {filters.applied()}")
    return {"raw_filters": raw, "filters": filters}
