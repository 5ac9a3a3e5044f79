"""Application configuration using Pydantic Settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite:///./database.sqlite"

    # OpenRouter (OpenAI-compatible chat completions)
    OPENROUTER_API_KEY: str
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    SITE_URL: str = ""
    SITE_NAME: str = "Chat-Agent"
    CHAT_MODEL: str = "google/gemini-2.0-flash-exp:free"
    CHAT_TEMPERATURE: float = 0.7
    CHAT_MAX_TOKENS: int = 4000
    LLM_TIMEOUT: Optional[float] = None  # None waits on the model indefinitely

    # Embeddings (Ollama)
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "nomic-embed-text"
    EMBED_DIM: int = 768  # Must match the model's output dimension

    # Conversation memory
    MEMORY_CHUNK_SIZE: int = 1000
    MEMORY_CHUNK_OVERLAP: int = 100
    MEMORY_RESULTS: int = 5

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
