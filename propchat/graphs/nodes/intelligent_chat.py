from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableConfig

from propchat.core.state import PipelineState
from propchat.services.response_synthesizer import synthesize_chat_response


async def intelligent_chat_node(state: PipelineState, config: RunnableConfig):
    """Greetings and small talk: nudge the user towards a property search."""
    configurable = config.get("configurable", {})
    text = await synthesize_chat_response(configurable["llm"], state["query"], configurable["settings"])
    return {"messages": [AIMessage(content=text)]}
