"""Chat-completion client used to score recommendation candidates.

Wraps the Groq SDK in JSON-object mode. Unlike a best-effort re-ranker this
client does not swallow failures: a missing key, a transport error or a
timeout all surface as `RecommendationGenerationError` so the generator can
fail the request.
"""

from typing import Dict, List, Optional

from groq import Groq

from core.config import Settings, settings as default_settings
from core.exceptions import RecommendationGenerationError
from core.logger import get_logger

logger = get_logger("services.llm_scorer")


class GroqRecommendationScorer:
    """Send a system/user message pair and return the raw JSON text reply."""

    def __init__(self, config: Settings = default_settings, client: Optional[Groq] = None):
        self.config = config
        self._client = client

    @property
    def model_version(self) -> str:
        return self.config.llm_model

    def _get_client(self) -> Groq:
        if self._client is None:
            if not self.config.llm_api_key:
                raise RecommendationGenerationError("LLM provider is not configured (GROQ_API_KEY missing)")
            self._client = Groq(api_key=self.config.llm_api_key, timeout=self.config.llm_timeout, max_retries=0)
        return self._client

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Return the provider's message content (expected to be a JSON object).

        Raises:
            RecommendationGenerationError: On any provider failure or empty reply.
        """
        client = self._get_client()
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = client.chat.completions.create(
                model=self.config.llm_model,
                messages=messages,
                max_tokens=self.config.llm_max_tokens,
                temperature=self.config.llm_temperature,
                response_format={"type": "json_object"},
            )
        except Exception as exc:
            logger.warning("Scoring provider call failed: %s", exc)
            raise RecommendationGenerationError(f"provider error: {type(exc).__name__}") from exc

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            raise RecommendationGenerationError("provider returned an empty response")
        return content
