from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from propchat.core.exceptions import InvalidQueryError, RecordStoreError
from propchat.core.pipeline import SearchPipeline, store_failure_message
from propchat.db.repositories.listing_repository import ListingRepository
from propchat.db.session import get_db
from propchat.schemas.response import ErrorResponse, FilterOptions, FilterOptionsResponse

# Initialize Router and Logger
router = APIRouter()
logger = logging.getLogger(__name__)

EXAMPLE_QUERY = "Try: 'Hi' or '3 bedroom villa in Damac Hills under 2 crore'"


def get_pipeline(request: Request) -> SearchPipeline:
    return request.app.state.pipeline


# ==============================================================================
# 1. CHAT (natural-language property search)
# ==============================================================================
@router.get("/chat")
async def chat(
    msg: Optional[str] = Query(None, description="Free-text user message"),
    pipeline: SearchPipeline = Depends(get_pipeline),
    db: AsyncSession = Depends(get_db),
):
    if not msg or not msg.strip():
        return JSONResponse(
            status_code=400,
            content={"error": "Please provide a message!", "example": EXAMPLE_QUERY},
        )

    repository = ListingRepository(db, timeout=pipeline.settings.store_timeout)
    try:
        result = await pipeline.run(msg, repository)
    except InvalidQueryError as e:
        return JSONResponse(status_code=400, content={"error": str(e), "example": EXAMPLE_QUERY})
    except Exception as e:
        logger.error(f"💥 Chat endpoint error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                message=store_failure_message(pipeline.settings),
                error="internal_error",
            ).model_dump(),
        )

    if isinstance(result, ErrorResponse):
        return JSONResponse(status_code=503, content=result.model_dump())
    return result


# ==============================================================================
# 2. FILTER OPTIONS (what can be searched for)
# ==============================================================================
@router.get("/chat/filters")
async def filter_options(
    pipeline: SearchPipeline = Depends(get_pipeline),
    db: AsyncSession = Depends(get_db),
):
    repository = ListingRepository(db, timeout=pipeline.settings.store_timeout)
    try:
        options = await repository.get_filter_options()
    except RecordStoreError as e:
        logger.error(f"Filter options error: {e}")
        return JSONResponse(
            status_code=503,
            content=ErrorResponse(message="Could not fetch filter options", error="record_store_unavailable").model_dump(),
        )
    return FilterOptionsResponse(available_filters=FilterOptions(**options))
