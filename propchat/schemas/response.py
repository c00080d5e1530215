# propchat/schemas/response.py
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from propchat.config import CompanyInfo
from propchat.schemas.query import CompiledQuery, SortKey


class SearchSummary(BaseModel):
    query: str
    filters_applied: Dict[str, Any]
    total_found: int
    showing: int


class SearchMetadata(BaseModel):
    compiled_query: CompiledQuery
    sort_applied: List[SortKey]
    response_time: datetime


class PropertySearchResponse(BaseModel):
    success: bool = True
    intent: Literal["property_search"] = "property_search"
    message: str
    search_summary: SearchSummary
    properties: List[Dict[str, Any]]
    metadata: SearchMetadata


class CompanyInfoResponse(BaseModel):
    success: bool = True
    intent: Literal["company_info"] = "company_info"
    message: str
    company_info: CompanyInfo


class GeneralChatResponse(BaseModel):
    success: bool = True
    intent: Literal["general_chat"] = "general_chat"
    message: str
    suggestions: List[str]


ChatResponse = Annotated[
    Union[PropertySearchResponse, CompanyInfoResponse, GeneralChatResponse],
    Field(discriminator="intent"),
]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str
    intent: Optional[str] = None


class PriceRange(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class FilterOptions(BaseModel):
    areas: List[str]
    developers: List[str]
    property_types: List[str]
    statuses: List[str]
    bedroom_options: List[int]
    price_range: PriceRange


class FilterOptionsResponse(BaseModel):
    success: bool = True
    available_filters: FilterOptions
