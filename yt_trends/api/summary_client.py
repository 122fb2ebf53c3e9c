"""Narrative summary of an analytics digest via the Anthropic Messages API"""

import json
import logging
from typing import Optional

from anthropic import (
    Anthropic,
    APIConnectionError,
    APIError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import Config
from ..errors import ConfigurationError, SummaryError
from ..models import SummaryDigest

logger = logging.getLogger(__name__)

# auth, permission and bad-request errors fail on the first attempt
TRANSIENT_ERRORS = (APIConnectionError, APITimeoutError, RateLimitError, InternalServerError)

SYSTEM_PROMPT = """You are a YouTube trends analyst.

You receive a JSON digest of a batch of popular videos: totals, the most frequent
tags, the channels with the most views, the most common categories and the top
videos by views. The digest may include the search keyword and the region code.

Write a short report in Markdown:
- one paragraph on what is trending and why it stands out
- a bullet list of 3-5 notable patterns (tags, channels, categories, engagement)
- one sentence with a practical takeaway for a content creator

Only use numbers that appear in the digest. Do not invent videos or channels."""


class NarrativeSummarizer:
    """Turn a SummaryDigest into prose; the text is passed through untouched"""

    def __init__(self, app_config: Config, client: Optional[Anthropic] = None):
        if not app_config.summary_configured and client is None:
            raise ConfigurationError(
                "Anthropic API key is not configured. Set ANTHROPIC_API_KEY in .env"
            )
        self.model = app_config.summary_model
        self.max_tokens = app_config.summary_max_tokens
        self.client = client or Anthropic(api_key=app_config.anthropic_api_key)

    def summarize(self, digest: SummaryDigest) -> str:
        """Ask for a narrative summary of the digest

        Raises:
            SummaryError: If the collaborator fails after retries
        """
        try:
            return self._create(digest)
        except APIError as e:
            logger.error(f"Summary generation failed: {e}")
            raise SummaryError(f"Failed to generate summary: {e}")

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    def _create(self, digest: SummaryDigest) -> str:
        payload = json.dumps(digest.to_json_dict(), ensure_ascii=False, indent=2)
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": payload}],
        )
        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            raise SummaryError("Summary service returned an empty response")
        return text
