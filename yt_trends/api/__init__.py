"""API clients for the YouTube Data API and the narrative summary service"""

from .youtube_client import YouTubeClient
from .summary_client import NarrativeSummarizer

__all__ = ["YouTubeClient", "NarrativeSummarizer"]
