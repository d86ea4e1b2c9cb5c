"""Tests for OpenAI provider."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from flowguard.llm.base import LLMProviderError
from flowguard.llm.openai_provider import DEFAULT_BASE_URL, OpenAIProvider
from flowguard.models import LLMConfig


@pytest.fixture
def mock_openai_client():
    """Create mock OpenAI client."""
    with patch("flowguard.llm.openai_provider.AsyncOpenAI") as mock:
        client = MagicMock()
        mock.return_value = client
        yield client


@pytest.fixture
def provider(mock_openai_client):
    """Create OpenAIProvider instance with mocked client."""
    return OpenAIProvider(api_key="test-key", model="llama-3.1-8b-instant")


def _response(content="Response", prompt_tokens=5, completion_tokens=10):
    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = content
    mock_response.usage.prompt_tokens = prompt_tokens
    mock_response.usage.completion_tokens = completion_tokens
    return mock_response


@pytest.mark.asyncio
async def test_complete_success(provider, mock_openai_client):
    """Test successful completion."""
    mock_openai_client.chat.completions.create = AsyncMock(
        return_value=_response("This is a test response", 10, 20)
    )

    result = await provider.complete("Test prompt")

    assert result == "This is a test response"
    assert provider.total_tokens["input"] == 10
    assert provider.total_tokens["output"] == 20


@pytest.mark.asyncio
async def test_complete_with_parameters(provider, mock_openai_client):
    """Test completion with custom parameters."""
    mock_openai_client.chat.completions.create = AsyncMock(return_value=_response())

    await provider.complete(
        "Test prompt",
        max_tokens=100,
        temperature=0.7,
    )

    # Verify parameters were passed
    call_kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
    assert call_kwargs["max_tokens"] == 100
    assert call_kwargs["temperature"] == 0.7
    assert call_kwargs["model"] == "llama-3.1-8b-instant"
    assert call_kwargs["messages"] == [{"role": "user", "content": "Test prompt"}]


@pytest.mark.asyncio
async def test_complete_error_handling(provider, mock_openai_client):
    """Test error handling in completion."""
    mock_openai_client.chat.completions.create = AsyncMock(
        side_effect=Exception("API Error")
    )

    with pytest.raises(LLMProviderError) as exc_info:
        await provider.complete("Test prompt")

    assert "Chat completion error" in str(exc_info.value)


@pytest.mark.asyncio
async def test_complete_malformed_response(provider, mock_openai_client):
    """Test a response without choices."""
    mock_response = _response()
    mock_response.choices = []
    mock_openai_client.chat.completions.create = AsyncMock(return_value=mock_response)

    with pytest.raises(LLMProviderError, match="Malformed"):
        await provider.complete("Test prompt")


@pytest.mark.asyncio
async def test_complete_empty_content(provider, mock_openai_client):
    """Test a None message body comes back as an empty string."""
    mock_openai_client.chat.completions.create = AsyncMock(return_value=_response(None))

    assert await provider.complete("Test prompt") == ""


def test_usage_stats(provider):
    """Test usage statistics tracking."""
    stats = provider.get_usage_stats()

    assert stats["total_tokens"]["input"] == 0
    assert stats["total_tokens"]["output"] == 0
    assert stats["model"] == "llama-3.1-8b-instant"
    assert stats["base_url"] == DEFAULT_BASE_URL


@pytest.mark.asyncio
async def test_usage_stats_after_calls(provider, mock_openai_client):
    """Test usage statistics are updated after API calls."""
    mock_openai_client.chat.completions.create = AsyncMock(return_value=_response("Response", 100, 50))

    await provider.complete("Test")
    await provider.complete("Test again")

    stats = provider.get_usage_stats()

    assert stats["total_tokens"]["input"] == 200
    assert stats["total_tokens"]["output"] == 100


def test_reset_usage_stats(provider):
    """Test resetting usage statistics."""
    provider.total_tokens["input"] = 1000
    provider.total_tokens["output"] = 500

    provider.reset_usage_stats()

    assert provider.total_tokens["input"] == 0
    assert provider.total_tokens["output"] == 0


def test_initialization():
    """Test provider initialization."""
    with patch("flowguard.llm.openai_provider.AsyncOpenAI") as mock:
        provider = OpenAIProvider(
            api_key="test-key",
            model="llama-3.3-70b-versatile",
            base_url="https://example.test/v1",
        )

        assert provider.model == "llama-3.3-70b-versatile"
        assert provider.api_key == "test-key"
        mock.assert_called_once_with(
            api_key="test-key", base_url="https://example.test/v1", max_retries=0
        )


def test_from_config():
    """Test building a provider from configuration."""
    with patch("flowguard.llm.openai_provider.AsyncOpenAI"):
        provider = OpenAIProvider.from_config(LLMConfig(api_key="abc", model="m"))

        assert provider.model == "m"
        assert provider.base_url == DEFAULT_BASE_URL


def test_from_config_requires_key():
    """Test that a missing key is rejected."""
    with pytest.raises(ValueError, match="API key"):
        OpenAIProvider.from_config(LLMConfig())
