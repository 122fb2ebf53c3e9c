"""YouTube Data API v3 client"""

import logging
import socket
from typing import Any, Dict, List, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import MAX_RESULTS_LIMIT
from ..errors import UpstreamError
from ..models import DurationFilter

logger = logging.getLogger(__name__)

VIDEO_PARTS = "snippet,statistics,contentDetails"
ALL_CATEGORIES = "0"


def clamp_max_results(max_results: Any) -> int:
    """Coerce a requested batch size into the upstream's 1..50 window"""
    try:
        value = int(max_results)
    except (TypeError, ValueError):
        raise ValueError(f"maxResults must be an integer, got {max_results!r}")
    return max(1, min(MAX_RESULTS_LIMIT, value))


def _has_category_filter(category: Optional[str]) -> bool:
    return bool(category) and str(category).strip() != ALL_CATEGORIES


def chart_params(region: str, category: Optional[str], max_results: Any) -> Dict[str, Any]:
    """Parameters for the mostPopular chart request

    Category "0" means "all": videoCategoryId is left out entirely rather than
    being sent as 0.
    """
    params = {
        "part": VIDEO_PARTS,
        "chart": "mostPopular",
        "regionCode": region,
        "maxResults": clamp_max_results(max_results),
    }
    if _has_category_filter(category):
        params["videoCategoryId"] = str(category).strip()
    return params


def search_params(
    keyword: str,
    region: str,
    category: Optional[str],
    max_results: Any,
    duration: DurationFilter = DurationFilter.ANY,
) -> Dict[str, Any]:
    """Parameters for a keyword search ordered by view count"""
    params = {
        "part": "id",
        "q": keyword.strip(),
        "type": "video",
        "regionCode": region,
        "order": "viewCount",
        "maxResults": clamp_max_results(max_results),
    }
    if _has_category_filter(category):
        params["videoCategoryId"] = str(category).strip()
    if duration is not DurationFilter.ANY:
        params["videoDuration"] = duration.value
    return params


def detail_params(video_ids: List[str]) -> Dict[str, Any]:
    """Parameters for a statistics/content-details lookup by id batch"""
    if len(video_ids) > MAX_RESULTS_LIMIT:
        raise ValueError(f"Maximum {MAX_RESULTS_LIMIT} video IDs per request")
    return {
        "part": VIDEO_PARTS,
        "id": ",".join(video_ids),
        "maxResults": max(1, len(video_ids)),
    }


def category_params(region: str) -> Dict[str, Any]:
    return {"part": "snippet", "regionCode": region}


class YouTubeClient:
    """Client for YouTube Data API v3

    One instance per query; the underlying httplib2 connection is not shared
    between threads.
    """

    def __init__(self, api_key: str, timeout_seconds: int = 30, youtube=None):
        """Initialize YouTube API client

        Args:
            api_key: YouTube Data API key
            timeout_seconds: Socket timeout for every upstream call
            youtube: Prebuilt discovery resource (tests)
        """
        self.api_key = api_key
        if youtube is None:
            youtube = build(
                "youtube",
                "v3",
                developerKey=api_key,
                http=httplib2.Http(timeout=timeout_seconds),
                cache_discovery=False,
            )
        self.youtube = youtube

    def close(self) -> None:
        """Release the underlying HTTP connections"""
        self.youtube.close()

    def list_videos(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Call videos.list (chart or id batch)

        Raises:
            UpstreamError: If the request fails
        """
        return self._execute("videos", self.youtube.videos().list(**params), params)

    def search(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Call search.list; the response carries identifiers only

        Raises:
            UpstreamError: If the request fails
        """
        return self._execute("search", self.youtube.search().list(**params), params)

    def list_video_categories(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Call videoCategories.list

        Raises:
            UpstreamError: If the request fails
        """
        return self._execute(
            "videoCategories", self.youtube.videoCategories().list(**params), params
        )

    def _execute(self, endpoint: str, request, params: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"GET {endpoint} {params}")
        try:
            response = request.execute()
        except HttpError as e:
            error = UpstreamError.from_http_error(e)
            logger.error(f"{endpoint} request failed with {error.status_code}: {error.message}")
            raise error
        except (httplib2.HttpLib2Error, socket.timeout, OSError) as e:
            logger.error(f"{endpoint} request failed: {e}")
            raise UpstreamError(502, f"Could not reach the YouTube API: {e}")

        return response if isinstance(response, dict) else {}
