"""OpenAI-compatible chat completion provider."""

from typing import Any, Optional

from openai import AsyncOpenAI

from flowguard.llm.base import BaseLLMProvider, LLMProviderError
from flowguard.models import LLMConfig

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"


class OpenAIProvider(BaseLLMProvider):
    """Chat completions against any OpenAI-compatible endpoint.

    Defaults to Groq's endpoint. Requests are made once: the client is built
    with ``max_retries=0`` so a failure surfaces immediately and the caller
    can fall back.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.1-8b-instant",
        base_url: Optional[str] = DEFAULT_BASE_URL,
        **kwargs: Any,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: API key
            model: Model for completions
            base_url: Base URL of the API (None for api.openai.com)
            **kwargs: Additional parameters
        """
        super().__init__(api_key, model, **kwargs)
        self.base_url = base_url
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self.total_tokens = {"input": 0, "output": 0}

    @classmethod
    def from_config(cls, config: LLMConfig) -> "OpenAIProvider":
        """Create a provider from an LLMConfig.

        Raises:
            ValueError: If the config has no API key
        """
        if not config.api_key:
            raise ValueError("An API key is required for the OpenAI provider")
        return cls(api_key=config.api_key, model=config.model, base_url=config.base_url)

    async def complete(
        self,
        prompt: str,
        max_tokens: int = 1500,
        temperature: float = 0.3,
        **kwargs: Any,
    ) -> str:
        """Generate a completion.

        Args:
            prompt: The prompt to send
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature
            **kwargs: Additional chat completion parameters

        Returns:
            Generated text

        Raises:
            LLMProviderError: If API call fails
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=temperature,
                **kwargs,
            )
        except Exception as e:
            raise LLMProviderError(f"Chat completion error: {e}") from e

        usage = getattr(response, "usage", None)
        if usage is not None:
            self.total_tokens["input"] += usage.prompt_tokens
            self.total_tokens["output"] += usage.completion_tokens

        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            raise LLMProviderError(f"Malformed chat completion response: {e}") from e

    def get_usage_stats(self) -> dict:
        """Get current usage statistics.

        Returns:
            Dictionary with token counts
        """
        return {
            "total_tokens": self.total_tokens,
            "model": self.model,
            "base_url": self.base_url,
        }

    def reset_usage_stats(self) -> None:
        """Reset usage statistics."""
        self.total_tokens = {"input": 0, "output": 0}
