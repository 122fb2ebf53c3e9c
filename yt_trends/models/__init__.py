"""Data models for video retrieval and analytics"""

from .video import DurationFilter, VideoRecord, TopVideo, SourceResult
from .analytics import (
    Totals,
    TagCount,
    ChannelRollupEntry,
    CategoryRollupEntry,
    AggregationResult,
    SummaryDigest,
)

__all__ = [
    "DurationFilter",
    "VideoRecord",
    "TopVideo",
    "SourceResult",
    "Totals",
    "TagCount",
    "ChannelRollupEntry",
    "CategoryRollupEntry",
    "AggregationResult",
    "SummaryDigest",
]
