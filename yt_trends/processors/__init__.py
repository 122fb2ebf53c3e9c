"""Retrieval and aggregation pipeline"""

from .normalizer import normalize_video_item
from .source_resolver import SourceResolver
from .aggregator import aggregate
from .category_names import fetch_category_names, apply_category_names
from .query_services import TrendingQueryService, StatsQueryService, CategoryQueryService

__all__ = [
    "normalize_video_item",
    "SourceResolver",
    "aggregate",
    "fetch_category_names",
    "apply_category_names",
    "TrendingQueryService",
    "StatsQueryService",
    "CategoryQueryService",
]
