"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Topics offered by the topic selector
TOPICS: list[str] = [
    "environment",
    "education",
    "technology",
    "society",
    "health",
    "urban",
]

# Static seed words used when the topic-word source is unavailable
FALLBACK_WORDS: dict[str, list[str]] = {
    "environment": ["environment", "ecosystem", "sustainable", "biodiversity", "conservation"],
    "education": ["education", "curriculum", "academic", "knowledge", "learning"],
    "technology": ["technology", "innovation", "digital", "artificial", "algorithm"],
    "society": ["society", "culture", "heritage", "tradition", "diversity"],
    "health": ["health", "medical", "treatment", "wellness", "prevention"],
    "urban": ["urban", "architecture", "infrastructure", "planning", "development"],
}

# Used for topics without their own fallback list
GENERIC_FALLBACK_WORDS: list[str] = ["environment", "education", "technology", "society", "health"]

DEFAULT_SEED_WORD = "environment"


def fallback_words(topic: str, count: int | None = None) -> list[str]:
    """Return the static fallback word list for a topic."""
    words = FALLBACK_WORDS.get(topic, GENERIC_FALLBACK_WORDS)
    return list(words[:count] if count is not None else words)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # LLM Configuration (remote OpenAI-compatible endpoint)
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-3.5-turbo"
    llm_api_key: str = "your-api-key"
    llm_max_concurrent: int = 4
    llm_timeout: float = 10.0
    llm_retries: int = 2
    llm_temperature: float = 0.7
    llm_max_tokens: int = Field(
        default=150,
        description="Word lists are short, keep completions small"
    )

    # Graph Parameters
    graph_max_nodes: int = Field(
        default=20,
        description="Prune to the focal neighbourhood once the graph grows past this"
    )
    graph_max_connections: int = Field(
        default=4,
        description="Related words requested per expansion"
    )
    graph_min_spacing: float = 10.0
    graph_center_font_size: int = 18
    graph_normal_font_size: int = 16
    graph_padding_around: int = 14
    graph_seed_count: int = 5

    # Canvas (headless sessions)
    canvas_width: int = 1280
    canvas_height: int = 800

    # Cache
    cache_enabled: bool = True
    cache_max_age: float = Field(
        default=24 * 60 * 60,
        description="Seconds a cached word list stays valid"
    )

    # API Configuration
    api_base_url: str = "http://localhost:3000/api"
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_debug: bool = False


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        llm_base_url="http://localhost:11434/v1",
        llm_api_key="test",
        llm_retries=0,
        cache_enabled=False,
        canvas_width=800,
        canvas_height=600,
    )


# Global settings instance
settings = Settings()
