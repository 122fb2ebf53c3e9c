"""Video record models"""

from enum import Enum
from typing import Optional, Tuple

import isodate
from pydantic import Field

from .base import ValueModel


class DurationFilter(str, Enum):
    """Video length buckets, matching the upstream videoDuration values"""

    ANY = "any"
    SHORT = "short"  # under 4 minutes
    MEDIUM = "medium"  # 4 to 20 minutes
    LONG = "long"  # over 20 minutes

    def matches(self, duration_seconds: Optional[int]) -> bool:
        """Check whether a duration falls in this bucket"""
        if self is DurationFilter.ANY:
            return True
        if not duration_seconds:
            return False
        if self is DurationFilter.SHORT:
            return duration_seconds < 4 * 60
        if self is DurationFilter.MEDIUM:
            return 4 * 60 <= duration_seconds <= 20 * 60
        return duration_seconds > 20 * 60


class VideoRecord(ValueModel):
    """One upstream video, normalized"""

    id: str = Field(..., description="YouTube video ID")
    title: str = Field("", description="Video title")
    channel_name: str = Field("", description="Channel display name")
    channel_id: str = Field("", description="Channel ID")
    description: str = Field("", description="Video description")
    published_at: str = Field("", description="Publication timestamp (ISO 8601)")
    thumbnail_url: str = Field("", description="Best available thumbnail URL")
    view_count: int = Field(0, ge=0, description="View count")
    like_count: int = Field(0, ge=0, description="Like count")
    comment_count: int = Field(0, ge=0, description="Comment count")
    duration_iso: Optional[str] = Field(None, description="ISO 8601 duration")
    tags: Tuple[str, ...] = Field(default_factory=tuple, description="Video tags, upstream order")
    category_id: Optional[str] = Field(None, description="YouTube category ID")

    @property
    def duration_seconds(self) -> int:
        """Duration in seconds, 0 when absent or unparseable"""
        if not self.duration_iso:
            return 0
        try:
            duration = isodate.parse_duration(self.duration_iso)
        except (isodate.ISO8601Error, ValueError, TypeError):
            return 0
        return int(duration.total_seconds())


class TopVideo(ValueModel):
    """Display subset of a VideoRecord for the top-videos ranking"""

    id: str
    title: str
    channel_name: str
    view_count: int
    like_count: int
    comment_count: int
    thumbnail_url: str
    published_at: str
    duration_iso: Optional[str] = None

    @classmethod
    def from_record(cls, record: VideoRecord) -> "TopVideo":
        return cls(
            id=record.id,
            title=record.title,
            channel_name=record.channel_name,
            view_count=record.view_count,
            like_count=record.like_count,
            comment_count=record.comment_count,
            thumbnail_url=record.thumbnail_url,
            published_at=record.published_at,
            duration_iso=record.duration_iso,
        )


class SourceResult(ValueModel):
    """Videos pulled by one sourcing strategy plus upstream's total hint"""

    videos: Tuple[VideoRecord, ...] = Field(default_factory=tuple)
    total_results: int = Field(0, ge=0, description="Upstream-reported total available")

    @classmethod
    def empty(cls) -> "SourceResult":
        return cls(videos=(), total_results=0)
