"""
Configuration management for the converter.

Loads settings from environment variables (prefix AGENT_CONVERT_) and an
optional .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class ConverterSettings(BaseSettings):
    """Configuration settings for conversion and package scoring."""

    # Content evaluation
    evaluation_enabled: bool = Field(False, description="Call the remote content evaluator when scoring packages")
    anthropic_api_key: Optional[str] = Field(None, description="API key for the content evaluator")
    evaluator_base_url: str = Field("https://api.anthropic.com", description="Evaluator API base URL")
    evaluator_model: str = Field("claude-3-5-haiku-latest", description="Model used for content evaluation")
    evaluator_max_tokens: int = Field(500, gt=0, description="Max tokens for the evaluation response")
    evaluation_timeout: float = Field(10.0, gt=0, description="Seconds before the evaluation call is abandoned")
    min_evaluation_length: int = Field(50, ge=0, description="Shorter prompt text is scored heuristically")

    # Batch reconversion
    batch_workers: Optional[int] = Field(None, gt=0, description="Thread pool size for batch reconversion")

    # Logging
    log_level: str = Field("WARNING", description="Root log level used by the CLI")

    model_config = {
        "env_prefix": "AGENT_CONVERT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> ConverterSettings:
    """Settings loaded once from the environment."""
    return ConverterSettings()
