"""Map raw upstream video items onto VideoRecord

This is the only place that knows the upstream item shape. Nothing here
raises: missing or malformed fields fall back to "", 0 or an empty tuple.
"""

import math
from typing import Any, Dict, Optional, Tuple

from ..models import VideoRecord

THUMBNAIL_ORDER = ("high", "medium", "default")


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_count(value: Any) -> int:
    """Upstream sends counts as decimal strings; anything unusable becomes 0"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return max(0, int(value))
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def _video_id(item: Dict[str, Any]) -> str:
    raw_id = item.get("id")
    # search results nest the id: {"kind": "youtube#video", "videoId": "..."}
    if isinstance(raw_id, dict):
        return _as_text(raw_id.get("videoId"))
    return _as_text(raw_id)


def pick_thumbnail(thumbnails: Any) -> str:
    """First present of high, medium, default; "" when none"""
    thumbnails = _as_dict(thumbnails)
    for key in THUMBNAIL_ORDER:
        url = _as_dict(thumbnails.get(key)).get("url")
        if url:
            return _as_text(url)
    return ""


def _tags(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(_as_text(tag) for tag in value if tag is not None)


def _optional_text(value: Any) -> Optional[str]:
    text = _as_text(value)
    return text or None


def normalize_video_item(item: Any) -> VideoRecord:
    """Build a VideoRecord from one videos.list item"""
    item = _as_dict(item)
    snippet = _as_dict(item.get("snippet"))
    statistics = _as_dict(item.get("statistics"))
    content_details = _as_dict(item.get("contentDetails"))

    return VideoRecord(
        id=_video_id(item),
        title=_as_text(snippet.get("title")),
        channel_name=_as_text(snippet.get("channelTitle")),
        channel_id=_as_text(snippet.get("channelId")),
        description=_as_text(snippet.get("description")),
        published_at=_as_text(snippet.get("publishedAt")),
        thumbnail_url=pick_thumbnail(snippet.get("thumbnails")),
        view_count=_as_count(statistics.get("viewCount")),
        like_count=_as_count(statistics.get("likeCount")),
        comment_count=_as_count(statistics.get("commentCount")),
        duration_iso=_optional_text(content_details.get("duration")),
        tags=_tags(snippet.get("tags")),
        category_id=_optional_text(snippet.get("categoryId")),
    )
