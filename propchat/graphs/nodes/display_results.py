from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableConfig

from propchat.core.state import PipelineState
from propchat.services.response_synthesizer import synthesize_property_response


async def display_results_node(state: PipelineState, config: RunnableConfig):
    """Narrates the search outcome: match count plus the top few listings."""
    configurable = config.get("configurable", {})
    settings = configurable["settings"]
    properties = state.get("found_properties") or []

    text = await synthesize_property_response(
        configurable["llm"],
        state["query"],
        state.get("filters"),
        properties[:settings.narrative_limit],
        len(properties),
        settings,
    )
    return {"messages": [AIMessage(content=text)]}
