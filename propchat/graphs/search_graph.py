from langgraph.graph import StateGraph, END

from propchat.core.state import PipelineState
from propchat.graphs.nodes.router import router_node
from propchat.graphs.nodes.extractor import extractor_node
from propchat.graphs.nodes.search_tool import search_node
from propchat.graphs.nodes.display_results import display_results_node
from propchat.graphs.nodes.company_info import company_info_node
from propchat.graphs.nodes.intelligent_chat import intelligent_chat_node
from propchat.schemas.intent import Intent


def route_decision(state: PipelineState):
    step = state.get("next_step")
    if step == Intent.PROPERTY_SEARCH.value:
        return "extractor"
    if step == Intent.COMPANY_INFO.value:
        return "company_info"
    return "intelligent_chat"


def get_search_graph():
    """
    router -> (extractor -> search_tool -> display_results) | company_info | intelligent_chat

    Compiled without a checkpointer: every invocation starts from a blank state.
    """
    workflow = StateGraph(PipelineState)

    workflow.add_node("router", router_node)
    workflow.add_node("extractor", extractor_node)
    workflow.add_node("search_tool", search_node)
    workflow.add_node("display_results", display_results_node)
    workflow.add_node("company_info", company_info_node)
    workflow.add_node("intelligent_chat", intelligent_chat_node)

    workflow.set_entry_point("router")
    workflow.add_conditional_edges(
        "router",
        route_decision,
        {
            "extractor": "extractor",
            "company_info": "company_info",
            "intelligent_chat": "intelligent_chat",
        }
    )
    workflow.add_edge("extractor", "search_tool")
    workflow.add_edge("search_tool", "display_results")

    workflow.add_edge("display_results", END)
    workflow.add_edge("company_info", END)
    workflow.add_edge("intelligent_chat", END)

    return workflow.compile()
