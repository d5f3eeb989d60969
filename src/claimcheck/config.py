"""
claimcheck configuration

Credentials, model choices, store limits and server settings live here.
Environment variables override defaults for deployment flexibility.
"""

import os
from dataclasses import dataclass, field
from typing import Literal


@dataclass
class GenerationConfig:
    """External quiz generation"""
    provider: Literal["openai", "claude", "mock"] = os.getenv("GENERATION_PROVIDER", "openai")
    model: str = os.getenv("GENERATION_MODEL", "")  # Empty = use provider default
    timeout_seconds: float = float(os.getenv("GENERATION_TIMEOUT", "30"))
    use_mock_ai: bool = os.getenv("USE_MOCK_AI", "false").lower() == "true"

    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    anthropic_api_key: str = os.getenv("ANTHROPIC_API_KEY", "")

    # Default models per provider
    PROVIDER_DEFAULTS = {
        "openai": "gpt-4.1-mini",
        "claude": "claude-sonnet-4-20250514",
        "mock": "mock-model-v1",
    }

    @property
    def credential(self) -> str:
        """API key for the selected provider ("" when not configured)."""
        if self.provider == "openai":
            return self.openai_api_key
        if self.provider == "claude":
            return self.anthropic_api_key
        if self.provider == "mock":
            return "mock"
        return ""

    @property
    def use_local_synthesis(self) -> bool:
        """Local rules are used when forced or when no credential is set."""
        return self.use_mock_ai or not self.credential

    def get_model(self) -> str:
        """Get generation model, falling back to provider default."""
        return self.model or self.PROVIDER_DEFAULTS.get(self.provider, "")


@dataclass
class StoreConfig:
    """Quiz record retention"""
    ttl_seconds: float = float(os.getenv("QUIZ_TTL_SECONDS", "86400"))  # 0 = process lifetime
    max_records: int = int(os.getenv("QUIZ_MAX_RECORDS", "10000"))  # 0 = unbounded


@dataclass
class ServerConfig:
    """HTTP API bind address"""
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))


@dataclass
class Config:
    """Master config, import this"""
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    # Quick presets
    @classmethod
    def offline_mode(cls) -> "Config":
        """For development and testing: rule-based quizzes only"""
        cfg = cls()
        cfg.generation.use_mock_ai = True
        return cfg


# Singleton
config = Config()
