"""Error taxonomy shared by the query services and the HTTP surface"""

import json
from typing import Optional

from googleapiclient.errors import HttpError

GENERIC_UPSTREAM_MESSAGE = "YouTube API request failed"


class TrendsError(Exception):
    """Base class for all errors raised by yt_trends"""


class ConfigurationError(TrendsError):
    """A required credential is missing or still set to its placeholder"""


class UpstreamError(TrendsError):
    """A required upstream call returned a non-success response"""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message or GENERIC_UPSTREAM_MESSAGE
        super().__init__(f"{self.status_code}: {self.message}")

    @classmethod
    def from_http_error(cls, error: HttpError) -> "UpstreamError":
        """Build from a googleapiclient HttpError, keeping the upstream message

        Args:
            error: Error raised by a discovery client request

        Returns:
            UpstreamError carrying the upstream status code and message
        """
        status = getattr(error.resp, "status", None) or 502
        return cls(int(status), _upstream_message(error.content))


class EmptyResultError(TrendsError):
    """No videos matched the requested filters"""

    def __init__(self, keyword: Optional[str] = None):
        self.keyword = keyword
        if keyword:
            message = f'No videos found for "{keyword}". Try different keywords.'
        else:
            message = "No trending videos found for this region and category."
        self.message = message
        super().__init__(message)


class SummaryError(TrendsError):
    """The narrative-summary collaborator could not produce a summary"""


def _upstream_message(content) -> Optional[str]:
    """Extract error.message from an upstream error body, if there is one"""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        data = json.loads(content)
    except (TypeError, ValueError):
        return None

    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None
