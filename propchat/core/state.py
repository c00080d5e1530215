from typing import TypedDict, Annotated, List, Optional, Dict, Any
from langgraph.graph.message import add_messages

from propchat.schemas.intent import IntentResult
from propchat.schemas.property_search import FilterRecord
from propchat.schemas.query import CompiledQuery, SortSpec


class PipelineState(TypedDict, total=False):
    # 1. Conversation (HumanMessage in, AIMessage out)
    messages: Annotated[List, add_messages]
    query: str

    # 2. Classification
    intent_result: Optional[IntentResult]
    next_step: Optional[str]

    # 3. Search
    raw_filters: Optional[Dict[str, Any]]
    filters: Optional[FilterRecord]
    compiled_query: Optional[CompiledQuery]
    sort: Optional[SortSpec]
    found_properties: Optional[List[Dict[str, Any]]]
