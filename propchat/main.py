import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propchat.api.endpoints import chat
from propchat.config import settings
from propchat.core.pipeline import SearchPipeline
from propchat.db.session import close_db
from propchat.services.openai_service import OpenAIService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    pipeline_settings = settings.pipeline_settings()
    llm = OpenAIService(
        api_key=settings.OPENAI_API_KEY,
        model=pipeline_settings.model,
        base_url=settings.OPENAI_BASE_URL,
        timeout=pipeline_settings.llm_timeout,
    )
    app.state.pipeline = SearchPipeline(llm, pipeline_settings)
    yield
    await close_db()


# Initialize the App
app = FastAPI(
    title="Property Chat API",
    description="Natural-language property search for Dubai real estate",
    version="1.0.0",
    lifespan=lifespan,
)

# --- CORS MIDDLEWARE ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- ROUTER REGISTRATION ---
# Resulting URL: http://localhost:8000/api/v1/chat?msg=...
app.include_router(
    chat.router,
    prefix="/api/v1",
    tags=["Chat"]
)


# --- ROOT ENDPOINT ---
@app.get("/")
async def health_check():
    return {
        "status": "active",
        "service": "Property Chat API",
        "version": "1.0.0"
    }


# --- ENTRY POINT ---
# Allows you to run: python -m propchat.main
if __name__ == "__main__":
    uvicorn.run("propchat.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
