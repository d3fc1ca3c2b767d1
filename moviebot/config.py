"""
Runtime configuration and logging setup.
Values come from environment variables or a local .env file.
"""

import sys  # stderr sink for loguru
from functools import lru_cache  # cache a single Settings instance
from typing import Literal, Optional

from loguru import logger  # console logging
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

	# Which generation backend is active; exactly one (or none) at a time
	llm_provider: Literal["ollama", "gemini", "none"] = "gemini"

	# Local model (Ollama)
	ollama_url: str = "http://localhost:11434"
	ollama_model: str = "llama3.1:8b"

	# Cloud model (Google Gemini)
	gemini_api_key: Optional[str] = None
	gemini_model: str = "gemini-1.5-flash"
	gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

	# Sampling options shared by both providers
	llm_temperature: float = 0.3
	llm_top_p: float = 0.9
	llm_max_tokens: int = 1000
	llm_timeout_seconds: Optional[float] = None  # None waits indefinitely

	movies_csv_path: str = "data/IMDB_Movies_Dataset.csv"
	log_level: str = "INFO"
	port: int = 3001


@lru_cache
def get_settings() -> Settings:
	return Settings()


def configure_logging(level: str = "INFO") -> None:
	"""Replace loguru's default sink with a stderr sink at the given level."""
	logger.remove()
	logger.add(sys.stderr, level=level.upper())
	logger.debug(f"[Config] Logging configured at level {level.upper()}")
