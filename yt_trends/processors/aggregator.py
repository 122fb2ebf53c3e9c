"""Tag, channel and category rollups over a batch of videos"""

from typing import Dict, Iterable, List

from ..models import (
    AggregationResult,
    CategoryRollupEntry,
    ChannelRollupEntry,
    TagCount,
    TopVideo,
    Totals,
    VideoRecord,
)

TOP_TAGS = 20
TOP_CHANNELS = 10
TOP_CATEGORIES = 10
TOP_VIDEOS = 10


def compute_totals(videos: List[VideoRecord]) -> Totals:
    return Totals(
        video_count=len(videos),
        view_sum=sum(v.view_count for v in videos),
        like_sum=sum(v.like_count for v in videos),
        comment_sum=sum(v.comment_count for v in videos),
    )


def tag_frequency(videos: List[VideoRecord], limit: int = TOP_TAGS) -> List[TagCount]:
    """Case-insensitive tag counts; equal counts keep first-seen order"""
    counts: Dict[str, int] = {}
    for video in videos:
        for tag in video.tags:
            key = tag.strip().lower()
            if key:
                counts[key] = counts.get(key, 0) + 1

    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)
    return [TagCount(tag=tag, count=count) for tag, count in ranked[:limit]]


def channel_rollup(videos: List[VideoRecord], limit: int = TOP_CHANNELS) -> List[ChannelRollupEntry]:
    """Views and video count per channel, ranked by views"""
    names: Dict[str, str] = {}
    views: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for video in videos:
        # first video seen for a channel supplies its name
        names.setdefault(video.channel_id, video.channel_name)
        views[video.channel_id] = views.get(video.channel_id, 0) + video.view_count
        counts[video.channel_id] = counts.get(video.channel_id, 0) + 1

    ranked = sorted(names, key=lambda channel_id: views[channel_id], reverse=True)
    return [
        ChannelRollupEntry(
            channel_id=channel_id,
            channel_name=names[channel_id],
            view_sum=views[channel_id],
            video_count=counts[channel_id],
        )
        for channel_id in ranked[:limit]
    ]


def category_rollup(
    videos: List[VideoRecord], limit: int = TOP_CATEGORIES
) -> List[CategoryRollupEntry]:
    """Video count per category id; display names are attached later"""
    counts: Dict[str, int] = {}
    for video in videos:
        if video.category_id:
            counts[video.category_id] = counts.get(video.category_id, 0) + 1

    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)
    return [
        CategoryRollupEntry(category_id=category_id, video_count=count)
        for category_id, count in ranked[:limit]
    ]


def rank_by_views(videos: Iterable[VideoRecord]) -> List[VideoRecord]:
    """Stable sort on view count, highest first"""
    return sorted(videos, key=lambda v: v.view_count, reverse=True)


def top_videos(videos: List[VideoRecord], limit: int = TOP_VIDEOS) -> List[TopVideo]:
    return [TopVideo.from_record(v) for v in rank_by_views(videos)[:limit]]


def aggregate(videos: Iterable[VideoRecord]) -> AggregationResult:
    """Compute every rollup for one batch; an empty batch gives zeros and empty lists"""
    videos = list(videos)
    return AggregationResult(
        totals=compute_totals(videos),
        tag_frequency=tuple(tag_frequency(videos)),
        channel_rollup=tuple(channel_rollup(videos)),
        category_rollup=tuple(category_rollup(videos)),
        top_videos=tuple(top_videos(videos)),
    )
