"""
Application configuration using Pydantic Settings.

Environment-based infrastructure switching is controlled by the ENVIRONMENT variable.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local"] = "local"
    DEBUG: bool = True

    # ===========================================
    # Database (user settings key-value store)
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./timebox.db"

    # ===========================================
    # LLM Configuration
    # ===========================================
    # LLM Provider: "gemini-api" | "litellm"
    # - gemini-api: Gemini API (API Key)
    # - litellm: LiteLLM (OpenAI, Bedrock, etc. with optional custom endpoint)
    LLM_PROVIDER: Literal["gemini-api", "litellm"] = "litellm"

    # Gemini model name (for gemini-api)
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # Google API Key (for gemini-api provider)
    GOOGLE_API_KEY: str = ""

    # LiteLLM model identifier (for litellm provider)
    LITELLM_MODEL: str = "openai/gpt-4o-2024-08-06"

    # LiteLLM custom endpoint (optional, for proxy servers)
    LITELLM_API_BASE: str = ""

    # LiteLLM custom API key (optional, for custom endpoints)
    LITELLM_API_KEY: str = ""

    # Comma separated list of selectable model ids
    AVAILABLE_MODELS: str = ""

    LLM_TEMPERATURE: float = 0.2
    LLM_MAX_OUTPUT_TOKENS: int = 2000

    # ===========================================
    # Rate limiting (generation endpoints)
    # ===========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 3
    RATE_LIMIT_WINDOW_SECONDS: float = 60.0

    # ===========================================
    # Scheduling
    # ===========================================
    MIN_ITEM_DURATION_HOURS: float = 0.5
    DEFAULT_DAY_START: str = "05:00"
    DEFAULT_DAY_END: str = "21:00"
    DEFAULT_CORE_START: str = "09:00"
    DEFAULT_CORE_END: str = "12:00"

    # ===========================================
    # Auth
    # ===========================================
    AUTH_REQUIRED: bool = False

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"

    @property
    def available_models(self) -> list[str]:
        """Parsed AVAILABLE_MODELS list."""
        return [model.strip() for model in self.AVAILABLE_MODELS.split(",") if model.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
