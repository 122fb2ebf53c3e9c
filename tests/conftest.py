"""Shared fixtures for all tests."""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# ── Sample data factories ──────────────────────────────────────────


def make_item(
    video_id="vid00000001",
    title="Test Video",
    channel_id="UCchannel0000000000000001",
    channel_title="Test Channel",
    views="1000",
    likes="100",
    comments="10",
    tags=None,
    category_id="22",
    duration="PT3M32S",
    thumbnails=None,
):
    """Raw videos.list item, shaped like the YouTube Data API returns it."""
    statistics = {}
    if views is not None:
        statistics["viewCount"] = views
    if likes is not None:
        statistics["likeCount"] = likes
    if comments is not None:
        statistics["commentCount"] = comments

    snippet = {
        "title": title,
        "channelTitle": channel_title,
        "channelId": channel_id,
        "description": "A test video description.",
        "publishedAt": "2024-01-15T12:00:00Z",
        "thumbnails": thumbnails if thumbnails is not None else {
            "default": {"url": "https://i.ytimg.com/vi/x/default.jpg"},
            "medium": {"url": "https://i.ytimg.com/vi/x/mqdefault.jpg"},
            "high": {"url": "https://i.ytimg.com/vi/x/hqdefault.jpg"},
        },
        "categoryId": category_id,
    }
    if tags is not None:
        snippet["tags"] = tags

    return {
        "kind": "youtube#video",
        "id": video_id,
        "snippet": snippet,
        "statistics": statistics,
        "contentDetails": {"duration": duration},
    }


def make_search_item(video_id):
    return {"kind": "youtube#searchResult", "id": {"kind": "youtube#video", "videoId": video_id}}


def make_config(env=None):
    """Build a Config from a controlled environment."""
    base = {"YOUTUBE_API_KEY": "test-key-123"}
    if env is not None:
        base = env
    with patch.dict(os.environ, base, clear=True):
        from yt_trends.config import Config
        return Config()


@pytest.fixture
def sample_item():
    return make_item()


@pytest.fixture
def app_config():
    return make_config()


@pytest.fixture
def unconfigured_config():
    return make_config({})


@pytest.fixture
def mock_client():
    """YouTubeClient stand-in; set return values per endpoint in the test."""
    client = MagicMock()
    client.list_videos.return_value = {"items": [], "pageInfo": {"totalResults": 0}}
    client.search.return_value = {"items": []}
    client.list_video_categories.return_value = {"items": []}
    return client
