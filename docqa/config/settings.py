"""Application settings loaded from environment variables via pydantic-settings.

Two sources feed these fields, highest priority first:

  1. Environment variables, e.g. ``OPENAI_API_KEY=sk-...``
  2. A ``.env`` file in the working directory

Field ``chunk_size`` maps to env var ``CHUNK_SIZE`` and so on.  Defaults
apply when neither source sets a field.  ``config/config.yaml`` can sit
underneath both; see :mod:`docqa.config.loader`.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Values shipped in the sample .env that mean "not configured yet".
_PLACEHOLDER_KEYS = frozenset(
    {
        "your_openai_api_key_here",
        "your_anthropic_api_key_here",
    }
)


class Settings(BaseSettings):
    """docqa application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # === Provider selection ===
    llm_provider: str = "openai"  # openai | anthropic | ollama
    embedding_provider: str = "openai"  # openai | nomic

    # === LLM / embedding credentials ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoints (TogetherAI, etc.)
    openai_text_model: str = "gpt-4"
    openai_embedding_model: str = "text-embedding-ada-002"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    ollama_base_url: str = "http://localhost:11434"
    ollama_text_model: str = "llama3.1"

    # === Vector store ===
    # Set to an empty string for an in-process, non-persistent client.
    chromadb_persist_dir: str = "./data/chromadb"

    # === Pipeline tuning ===
    chunk_size: int = 1000
    chunk_overlap: int = 200
    min_chunk_chars: int = 50
    embedding_batch_size: int = 10
    retrieval_top_k: int = 5
    answer_max_tokens: int = 1000
    answer_temperature: float = 0.3

    # === Document fetching ===
    fetch_timeout: float = 30.0
    max_document_bytes: int = 50 * 1024 * 1024

    # === Processed-document memo ===
    document_cache_enabled: bool = True
    document_cache_ttl: int = 3600
    document_cache_size: int = 128

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def has_openai_key(self) -> bool:
        """Return ``True`` when a real (non-placeholder) OpenAI key is set."""
        return bool(self.openai_api_key) and self.openai_api_key not in _PLACEHOLDER_KEYS

    def has_anthropic_key(self) -> bool:
        """Return ``True`` when a real (non-placeholder) Anthropic key is set."""
        return (
            bool(self.anthropic_api_key)
            and self.anthropic_api_key not in _PLACEHOLDER_KEYS
        )
