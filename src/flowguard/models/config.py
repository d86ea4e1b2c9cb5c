"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseModel):
    """Configuration for the narrative LLM API."""

    api_key: Optional[str] = Field(None, description="API key")
    base_url: str = Field(
        "https://api.groq.com/openai/v1",
        description="Base URL of an OpenAI-compatible chat completions API",
    )
    model: str = Field("llama-3.1-8b-instant", description="Model name")
    max_tokens: int = Field(1500, description="Maximum tokens for completion")
    temperature: float = Field(0.3, description="Temperature for generation")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM Settings
    llm_api_key: Optional[str] = None
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_model: str = "llama-3.1-8b-instant"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 1500
    enable_llm: bool = True

    # Logging
    log_level: str = "INFO"

    def llm_config(self) -> LLMConfig:
        """Build the LLM configuration from these settings."""
        return LLMConfig(
            api_key=self.llm_api_key,
            base_url=self.llm_base_url,
            model=self.llm_model,
            max_tokens=self.llm_max_tokens,
            temperature=self.llm_temperature,
        )
