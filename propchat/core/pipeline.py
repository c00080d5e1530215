from datetime import datetime, timezone
from typing import Union
import logging

from langchain_core.messages import HumanMessage

from propchat.config import PipelineSettings
from propchat.core.exceptions import InvalidQueryError, RecordStoreError
from propchat.graphs.search_graph import get_search_graph
from propchat.schemas.intent import Intent
from propchat.schemas.response import (
    CompanyInfoResponse,
    ErrorResponse,
    GeneralChatResponse,
    PropertySearchResponse,
    SearchMetadata,
    SearchSummary,
)
from propchat.services.openai_service import CompletionService

logger = logging.getLogger(__name__)

STORE_ERROR = "record_store_unavailable"

PipelineResponse = Union[PropertySearchResponse, CompanyInfoResponse, GeneralChatResponse, ErrorResponse]


def store_failure_message(settings: PipelineSettings) -> str:
    return (
        f"Hi! I'm {settings.assistant_name} from {settings.company.name}. "
        "I'm experiencing some technical difficulties, but I'm here to help you find "
        "your perfect property. Please try again!"
    )


class SearchPipeline:
    """
    Natural-language property search.

    One instance serves every request; it holds only its collaborators and
    settings. Each `run` builds its own state from scratch.
    """

    def __init__(self, llm: CompletionService, settings: PipelineSettings):
        self.llm = llm
        self.settings = settings
        self.graph = get_search_graph()

    async def run(self, query: str, repository) -> PipelineResponse:
        if not isinstance(query, str) or not query.strip():
            raise InvalidQueryError("Please provide a message!")
        query = query.strip()

        logger.info(f"🔍 User Query: {query}")

        config = {
            "configurable": {
                "llm": self.llm,
                "settings": self.settings,
                "repository": repository,
            }
        }
        input_data = {
            "messages": [HumanMessage(content=query)],
            "query": query,
        }

        try:
            final_state = await self.graph.ainvoke(input_data, config=config)
        except RecordStoreError as e:
            logger.error(f"💥 Listing store failure: {e}")
            return ErrorResponse(
                message=store_failure_message(self.settings),
                error=STORE_ERROR,
                intent=Intent.PROPERTY_SEARCH.value,
            )

        return self._build_response(query, final_state)

    def _build_response(self, query: str, state: dict) -> PipelineResponse:
        message = state["messages"][-1].content
        route = state.get("next_step")

        if route == Intent.PROPERTY_SEARCH.value:
            properties = state.get("found_properties") or []
            filters = state.get("filters")
            shown = properties[:self.settings.surface_limit]
            return PropertySearchResponse(
                message=message,
                search_summary=SearchSummary(
                    query=query,
                    filters_applied=filters.applied() if filters else {},
                    total_found=len(properties),
                    showing=len(shown),
                ),
                properties=shown,
                metadata=SearchMetadata(
                    compiled_query=state["compiled_query"],
                    sort_applied=list(state["sort"]),
                    response_time=datetime.now(timezone.utc),
                ),
            )

        if route == Intent.COMPANY_INFO.value:
            return CompanyInfoResponse(message=message, company_info=self.settings.company)

        return GeneralChatResponse(message=message, suggestions=list(self.settings.suggestions))
