# propchat/schemas/intent.py
from enum import Enum
from pydantic import BaseModel, Field


class Intent(str, Enum):
    """Closed set of things a user message can be about."""
    PROPERTY_SEARCH = "property_search"
    COMPANY_INFO = "company_info"
    GENERAL_CHAT = "general_chat"


class IntentResult(BaseModel):
    intent: Intent
    confidence: float = Field(ge=0.0, le=1.0)
    # For logs only, never shown to the user
    reason: str

    model_config = {"frozen": True}


DEFAULT_INTENT = IntentResult(
    intent=Intent.GENERAL_CHAT,
    confidence=0.3,
    reason="error in detection",
)
