"""Configuration management"""

import logging
import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "YOUR_API_KEY_HERE"
MAX_RESULTS_LIMIT = 50


class Config:
    """Application configuration"""

    def __init__(self):
        # API Configuration
        self.youtube_api_key = os.getenv("YOUTUBE_API_KEY", "").strip()
        self.youtube_configured = bool(self.youtube_api_key) and (
            self.youtube_api_key != PLACEHOLDER_API_KEY
        )
        if not self.youtube_configured:
            logger.warning(
                "YOUTUBE_API_KEY is not configured; every query will be rejected. "
                "Set it in your .env file or environment."
            )

        # Narrative summary
        self.anthropic_api_key = os.getenv("ANTHROPIC_API_KEY", "").strip()
        self.summary_configured = bool(self.anthropic_api_key)
        self.summary_model = os.getenv("SUMMARY_MODEL", "claude-sonnet-4-20250514")
        self.summary_max_tokens = int(os.getenv("SUMMARY_MAX_TOKENS", "1024"))

        # Query defaults
        self.default_region = os.getenv("DEFAULT_REGION", "US").upper()
        self.default_max_results = int(os.getenv("DEFAULT_MAX_RESULTS", "20"))

        # Network / process
        self.timeout_seconds = int(os.getenv("TIMEOUT_SECONDS", "30"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.port = int(os.getenv("PORT", "3000"))

    def validate(self) -> None:
        """Validate configuration"""
        if self.timeout_seconds < 1:
            raise ValueError("TIMEOUT_SECONDS must be at least 1")

        if not 1 <= self.default_max_results <= MAX_RESULTS_LIMIT:
            raise ValueError(
                f"DEFAULT_MAX_RESULTS must be between 1 and {MAX_RESULTS_LIMIT}"
            )

        if self.summary_max_tokens < 1:
            raise ValueError("SUMMARY_MAX_TOKENS must be at least 1")

    def masked_api_key(self) -> Optional[str]:
        """Return the YouTube key with all but the last 4 characters hidden"""
        if not self.youtube_api_key:
            return None
        return "*" * max(0, len(self.youtube_api_key) - 4) + self.youtube_api_key[-4:]


# Global configuration instance
config = Config()
