"""Call summarization service."""
import logging
from typing import Optional
from openai import AsyncOpenAI

from app.core.errors import ProviderUnavailable
from app.services.summary.prompt import get_system_prompt, get_user_prompt

logger = logging.getLogger(__name__)


class SummarizerService:
    """Turns raw transcript text into a short handoff summary."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        max_tokens: int = 400,
        temperature: float = 0.2,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def summarize(self, transcript_text: str) -> str:
        """
        Summarize a transcript for the agent taking over the call.

        Args:
            transcript_text: Raw transcript

        Returns:
            Summary text
        """
        logger.info(f"[SUMMARY] Summarizing {len(transcript_text)} chars with {self.model}")
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": get_system_prompt()},
                    {"role": "user", "content": get_user_prompt(transcript_text)},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            raise ProviderUnavailable("openai", f"summary generation failed: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise ProviderUnavailable("openai", "summary generation returned no text")
        return content.strip()
