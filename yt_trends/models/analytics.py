"""Aggregation result models"""

from typing import Optional, Tuple

from pydantic import Field

from .base import ValueModel
from .video import TopVideo


class Totals(ValueModel):
    """Batch-wide sums"""

    video_count: int = 0
    view_sum: int = 0
    like_sum: int = 0
    comment_sum: int = 0


class TagCount(ValueModel):
    tag: str = Field(..., description="Lowercased tag")
    count: int


class ChannelRollupEntry(ValueModel):
    channel_id: str
    channel_name: str
    view_sum: int = 0
    video_count: int = 0


class CategoryRollupEntry(ValueModel):
    category_id: str
    video_count: int = 0
    display_name: Optional[str] = Field(None, description="Filled in by the category name resolver")


class SummaryDigest(ValueModel):
    """Structured digest handed to the narrative-summary collaborator"""

    keyword: Optional[str] = None
    region: str
    tags: Tuple[TagCount, ...] = ()
    channels: Tuple[ChannelRollupEntry, ...] = ()
    top_videos: Tuple[TopVideo, ...] = ()
    categories: Tuple[CategoryRollupEntry, ...] = ()
    totals: Totals = Field(default_factory=Totals)


class AggregationResult(ValueModel):
    """Ranked analytics over one batch of videos"""

    totals: Totals = Field(default_factory=Totals)
    tag_frequency: Tuple[TagCount, ...] = ()
    channel_rollup: Tuple[ChannelRollupEntry, ...] = ()
    category_rollup: Tuple[CategoryRollupEntry, ...] = ()
    top_videos: Tuple[TopVideo, ...] = ()

    def to_response(self) -> dict:
        """Shape as the stats payload: {totals, tags, categories, channels, topVideos}"""
        data = self.to_json_dict()
        return {
            "totals": data["totals"],
            "tags": data["tagFrequency"],
            "categories": data["categoryRollup"],
            "channels": data["channelRollup"],
            "topVideos": data["topVideos"],
        }

    def to_digest(self, region: str, keyword: Optional[str] = None) -> SummaryDigest:
        return SummaryDigest(
            keyword=keyword or None,
            region=region,
            tags=self.tag_frequency,
            channels=self.channel_rollup,
            top_videos=self.top_videos,
            categories=self.category_rollup,
            totals=self.totals,
        )
