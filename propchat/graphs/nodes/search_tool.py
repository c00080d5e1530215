from langchain_core.runnables import RunnableConfig
import logging

from propchat.core.state import PipelineState
from propchat.services.query_builder import build_query, derive_sort

logger = logging.getLogger(__name__)


async def search_node(state: PipelineState, config: RunnableConfig):
    """
    Compiles the filters and runs the single store round trip.
    RecordStoreError propagates to the caller.
    """
    configurable = config.get("configurable", {})
    repository = configurable["repository"]
    settings = configurable["settings"]

    query = build_query(state["filters"])
    sort = derive_sort(state["query"])
    logger.info(f"🗄️ Compiled Query: {query.model_dump_json()}")
    logger.info(f"📊 Sort: {[f'{k.field} {k.direction}' for k in sort]}")

    properties = await repository.find(query, sort, limit=settings.fetch_limit)
    logger.info(f"✅ Found {len(properties)} properties")

    return {"compiled_query": query, "sort": sort, "found_properties": properties}
