"""Choose and run a sourcing strategy: popularity chart or keyword search"""

import logging
from typing import Any, Dict, List, Optional

from ..api.youtube_client import (
    YouTubeClient,
    chart_params,
    detail_params,
    search_params,
)
from ..models import DurationFilter, SourceResult
from .normalizer import normalize_video_item

logger = logging.getLogger(__name__)


def _total_results(response: Dict[str, Any], fallback: int) -> int:
    page_info = response.get("pageInfo")
    if isinstance(page_info, dict):
        try:
            return max(0, int(page_info.get("totalResults") or 0))
        except (TypeError, ValueError):
            pass
    return fallback


def extract_search_ids(response: Dict[str, Any]) -> List[str]:
    """Ordered video ids from a search.list response, duplicates dropped"""
    ids = []
    seen = set()
    for item in response.get("items") or []:
        raw_id = item.get("id") if isinstance(item, dict) else None
        video_id = raw_id.get("videoId") if isinstance(raw_id, dict) else None
        if video_id and video_id not in seen:
            seen.add(video_id)
            ids.append(video_id)
    return ids


class SourceResolver:
    """Pull one batch of VideoRecords for a region/category/keyword query"""

    def __init__(self, youtube_client: YouTubeClient):
        """Initialize resolver

        Args:
            youtube_client: Client used for every upstream call of this query
        """
        self.youtube_client = youtube_client

    def resolve(
        self,
        region: str,
        category: Optional[str] = "0",
        max_results: Any = 20,
        keyword: Optional[str] = None,
        duration: DurationFilter = DurationFilter.ANY,
    ) -> SourceResult:
        """Fetch videos via the search branch when a keyword is given, else the chart

        Raises:
            UpstreamError: If any required upstream call fails
        """
        keyword = (keyword or "").strip()
        if keyword:
            logger.info(f"Searching '{keyword}' in {region} (category={category})")
            return self.from_search(keyword, region, category, max_results, duration)

        logger.info(f"Fetching mostPopular chart for {region} (category={category})")
        return self.from_chart(region, category, max_results, duration)

    def from_chart(
        self,
        region: str,
        category: Optional[str],
        max_results: Any,
        duration: DurationFilter = DurationFilter.ANY,
    ) -> SourceResult:
        """Single call; items come back already in chart order"""
        response = self.youtube_client.list_videos(chart_params(region, category, max_results))
        videos = [normalize_video_item(item) for item in response.get("items") or []]

        # the chart endpoint has no duration filter of its own
        if duration is not DurationFilter.ANY:
            videos = [v for v in videos if duration.matches(v.duration_seconds)]

        return SourceResult(
            videos=tuple(videos),
            total_results=_total_results(response, len(videos)),
        )

    def from_search(
        self,
        keyword: str,
        region: str,
        category: Optional[str],
        max_results: Any,
        duration: DurationFilter = DurationFilter.ANY,
    ) -> SourceResult:
        """search -> ids -> videos.list, keeping the search order"""
        search_response = self.youtube_client.search(
            search_params(keyword, region, category, max_results, duration)
        )
        video_ids = extract_search_ids(search_response)
        if not video_ids:
            logger.info(f"Search for '{keyword}' returned no videos")
            return SourceResult.empty()

        detail_response = self.youtube_client.list_videos(detail_params(video_ids))
        videos = order_by_ids(
            [normalize_video_item(item) for item in detail_response.get("items") or []],
            video_ids,
        )
        return SourceResult(
            videos=tuple(videos),
            total_results=_total_results(search_response, len(videos)),
        )


def order_by_ids(videos, video_ids: List[str]):
    """Reorder detail records to follow video_ids; ids without a record are dropped"""
    by_id = {}
    for video in videos:
        by_id.setdefault(video.id, video)
    return [by_id[video_id] for video_id in video_ids if video_id in by_id]
