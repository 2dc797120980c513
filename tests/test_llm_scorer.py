"""Groq chat-completion client, with the SDK mocked out."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from core.config import Settings
from core.exceptions import RecommendationGenerationError
from services.llm_scorer import GroqRecommendationScorer


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_complete_uses_json_mode_and_low_temperature():
    config = Settings(llm_api_key="test-key", llm_model="test-model", llm_timeout=5.0)
    with patch("services.llm_scorer.Groq") as groq_cls:
        groq_cls.return_value.chat.completions.create.return_value = completion('{"recommendations": []}')
        scorer = GroqRecommendationScorer(config)
        assert scorer.complete("system text", "user text") == '{"recommendations": []}'

    groq_cls.assert_called_once_with(api_key="test-key", timeout=5.0, max_retries=0)
    kwargs = groq_cls.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["temperature"] == config.llm_temperature
    assert kwargs["max_tokens"] == config.llm_max_tokens
    assert kwargs["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]
    assert scorer.model_version == "test-model"


def test_missing_api_key_fails_without_calling_the_provider():
    with patch("services.llm_scorer.Groq") as groq_cls:
        with pytest.raises(RecommendationGenerationError) as exc_info:
            GroqRecommendationScorer(Settings(llm_api_key="")).complete("s", "u")
    groq_cls.assert_not_called()
    assert "GROQ_API_KEY" in exc_info.value.details["reason"]


def test_provider_exception_is_wrapped():
    client = MagicMock()
    client.chat.completions.create.side_effect = TimeoutError("read timed out")
    with pytest.raises(RecommendationGenerationError) as exc_info:
        GroqRecommendationScorer(Settings(llm_api_key="k"), client=client).complete("s", "u")
    assert exc_info.value.details == {"reason": "provider error: TimeoutError"}
    assert isinstance(exc_info.value.__cause__, TimeoutError)


@pytest.mark.parametrize("response", [completion(""), completion(None), SimpleNamespace(choices=[])])
def test_empty_reply_is_an_error(response):
    client = MagicMock()
    client.chat.completions.create.return_value = response
    with pytest.raises(RecommendationGenerationError):
        GroqRecommendationScorer(Settings(llm_api_key="k"), client=client).complete("s", "u")
