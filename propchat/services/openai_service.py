from openai import AsyncOpenAI, OpenAIError
from typing import Optional, Protocol
import asyncio
import logging

from propchat.core.exceptions import CompletionError

logger = logging.getLogger(__name__)


class CompletionService(Protocol):
    """Prompt in, raw text out. Parsing and fallbacks belong to the caller."""

    async def get_chat_response(self, system_prompt: str, user_message: str) -> str:
        ...


class OpenAIService:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: Optional[str] = None,
        timeout: float = 20.0,
        temperature: float = 0.7,
    ):
        if not api_key:
            logger.error("OPENAI_API_KEY is missing in environment variables!")

        self.model = model
        self.temperature = temperature
        # One best-effort call per step: no client-side retries
        self.client = AsyncOpenAI(
            api_key=api_key or "not-configured",
            base_url=base_url,
            max_retries=0,
            timeout=timeout,
        )

    async def get_chat_response(self, system_prompt: str, user_message: str) -> str:
        """
        Sends the prompt and user message to the model and returns its text.
        Raises CompletionError on API failure or an empty reply.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message}
                ],
                temperature=self.temperature
            )
        except OpenAIError as e:
            logger.error(f"OpenAI Error: {e}")
            raise CompletionError(str(e)) from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise CompletionError("empty completion")
        return content


async def ask(llm: CompletionService, system_prompt: str, user_message: str, timeout: float) -> str:
    """
    Calls the completion service under a hard timeout.
    Every failure mode (timeout, API error, empty text) comes out as CompletionError.
    """
    try:
        text = await asyncio.wait_for(llm.get_chat_response(system_prompt, user_message), timeout=timeout)
    except CompletionError:
        raise
    except asyncio.TimeoutError as e:
        logger.error(f"Completion timed out after {timeout}s")
        raise CompletionError("completion timed out") from e
    except Exception as e:
        logger.error(f"Completion service error: {e}")
        raise CompletionError(str(e)) from e

    if not isinstance(text, str) or not text.strip():
        raise CompletionError("empty completion")
    return text
