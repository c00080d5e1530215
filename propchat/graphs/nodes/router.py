from langchain_core.runnables import RunnableConfig
import logging

from propchat.core.state import PipelineState
from propchat.services.intent_classifier import classify_intent, route_intent

logger = logging.getLogger(__name__)


async def router_node(state: PipelineState, config: RunnableConfig):
    """
    Classifies the message and picks the branch.
    A low-confidence PROPERTY_SEARCH label is demoted to chat here.
    """
    configurable = config.get("configurable", {})
    llm = configurable["llm"]
    settings = configurable["settings"]

    result = await classify_intent(llm, state["query"], settings)
    route = route_intent(result, settings)

    if route != result.intent:
        logger.info(
            f"🛤️ Classifier said {result.intent.value} at {result.confidence:.2f}; "
            f"routing to {route.value}"
        )

    return {"intent_result": result, "next_step": route.value}
