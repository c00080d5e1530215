from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import os
from dotenv import load_dotenv

from propchat import prompts

# Load environment variables from .env file
load_dotenv()


class CompanyInfo(BaseModel):
    name: str
    office: str
    phone: str
    email: str


class PipelineSettings(BaseModel):
    """
    Everything the search pipeline needs besides its collaborators.
    Built once at startup and handed to SearchPipeline; nodes never read env vars.
    """
    model: str = "gpt-4o"
    assistant_name: str = "Shora"
    company: CompanyInfo = CompanyInfo(
        name="roarrealty.ae",
        office="1507, Al Manara Tower, Business Bay, Dubai, United Arab Emirates",
        phone="+971 585005438",
        email="anurag@roarrealty.ae",
    )

    # Routing: property search is only honoured above this confidence
    search_confidence_threshold: float = 0.7

    # Result caps
    fetch_limit: int = 500
    surface_limit: int = 20
    narrative_limit: int = 3

    # Timeouts (seconds)
    llm_timeout: float = 20.0
    store_timeout: float = 10.0

    # Instruction templates
    intent_prompt: str = prompts.INTENT_PROMPT
    extraction_prompt: str = prompts.EXTRACTION_PROMPT
    property_response_prompt: str = prompts.PROPERTY_RESPONSE_PROMPT
    company_response_prompt: str = prompts.COMPANY_RESPONSE_PROMPT
    chat_response_prompt: str = prompts.CHAT_RESPONSE_PROMPT

    suggestions: List[str] = Field(default_factory=lambda: [
        "3 bedroom villa in Downtown Dubai",
        "Affordable apartments under 1 crore",
        "Luxury penthouses with sea view",
        "Ready to move properties in Damac Hills",
    ])


class Settings(BaseSettings):
    # Application Settings
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database Settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "postgresql+psycopg://localhost:5432/roarrealty")

    # Completion Service Settings (any OpenAI-compatible endpoint)
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_BASE_URL: Optional[str] = os.getenv("OPENAI_BASE_URL") or None
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "20"))
    STORE_TIMEOUT_SECONDS: float = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

    # Assistant / Company
    ASSISTANT_NAME: str = os.getenv("ASSISTANT_NAME", "Shora")
    COMPANY_NAME: str = os.getenv("COMPANY_NAME", "roarrealty.ae")
    COMPANY_OFFICE: str = os.getenv(
        "COMPANY_OFFICE", "1507, Al Manara Tower, Business Bay, Dubai, United Arab Emirates"
    )
    COMPANY_PHONE: str = os.getenv("COMPANY_PHONE", "+971 585005438")
    COMPANY_EMAIL: str = os.getenv("COMPANY_EMAIL", "anurag@roarrealty.ae")

    # Validate database URL format
    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def validate_database_url(cls, v: Optional[str]) -> str:
        if not v:
            raise ValueError("DATABASE_URL is not set in environment variables")
        if not v.startswith(("postgresql://", "postgresql+psycopg://", "sqlite+aiosqlite://")):
            raise ValueError(
                "DATABASE_URL must start with postgresql://, postgresql+psycopg:// or sqlite+aiosqlite://"
            )
        # Ensure the async psycopg driver is used
        if v.startswith("postgresql://"):
            v = v.replace("postgresql://", "postgresql+psycopg://", 1)
        return v

    @field_validator("LLM_TIMEOUT_SECONDS", "STORE_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be positive")
        return v

    def pipeline_settings(self) -> PipelineSettings:
        return PipelineSettings(
            model=self.LLM_MODEL,
            assistant_name=self.ASSISTANT_NAME,
            company=CompanyInfo(
                name=self.COMPANY_NAME,
                office=self.COMPANY_OFFICE,
                phone=self.COMPANY_PHONE,
                email=self.COMPANY_EMAIL,
            ),
            llm_timeout=self.LLM_TIMEOUT_SECONDS,
            store_timeout=self.STORE_TIMEOUT_SECONDS,
        )

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create settings instance
settings = Settings()
