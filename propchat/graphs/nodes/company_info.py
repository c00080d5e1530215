from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableConfig
import logging

from propchat.core.state import PipelineState
from propchat.services.response_synthesizer import synthesize_company_response

logger = logging.getLogger(__name__)


async def company_info_node(state: PipelineState, config: RunnableConfig):
    configurable = config.get("configurable", {})
    logger.info("🏢 Providing company information...")
    text = await synthesize_company_response(configurable["llm"], state["query"], configurable["settings"])
    return {"messages": [AIMessage(content=text)]}
