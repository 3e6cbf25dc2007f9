"""
Markov Text Service Configuration
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ===== Service =====
    SERVICE_NAME: str = Field(default="markov-text-service", env="SERVICE_NAME")  # type: ignore
    SERVICE_VERSION: str = Field(default="1.0.0", env="SERVICE_VERSION")  # type: ignore
    HOST: str = Field(default="0.0.0.0", env="HOST")  # type: ignore
    PORT: int = Field(default=8000, env="PORT")  # type: ignore
    LOG_LEVEL: str = Field(default="info", env="LOG_LEVEL")  # type: ignore
    DEBUG: bool = Field(default=False, env="DEBUG")  # type: ignore

    # ===== CORS =====
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"], env="CORS_ORIGINS"  # type: ignore
    )

    # ===== Markov Generation Defaults =====
    MARKOV_STATE_SIZE: int = Field(default=2, env="MARKOV_STATE_SIZE")  # type: ignore
    MARKOV_TRIES: int = Field(default=999, env="MARKOV_TRIES")  # type: ignore
    MARKOV_MAX_TRIES: int = Field(default=5000, env="MARKOV_MAX_TRIES")  # type: ignore
    MARKOV_MIN_WORDS: int = Field(default=0, env="MARKOV_MIN_WORDS")  # type: ignore
    MARKOV_MAX_WORDS: int = Field(default=100, env="MARKOV_MAX_WORDS")  # type: ignore
    MARKOV_MAX_OVERLAP_RATIO: float = Field(default=0.7, env="MARKOV_MAX_OVERLAP_RATIO")  # type: ignore
    MARKOV_MAX_OVERLAP_TOTAL: int = Field(default=15, env="MARKOV_MAX_OVERLAP_TOTAL")  # type: ignore

    # ===== Model Cache =====
    MARKOV_MAX_MODELS: int = Field(default=32, env="MARKOV_MAX_MODELS")  # type: ignore
    MARKOV_SEED: Optional[int] = Field(default=None, env="MARKOV_SEED")  # type: ignore

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
