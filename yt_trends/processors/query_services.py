"""Query services composed from the resolver, aggregator and name resolver"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

from ..api.youtube_client import YouTubeClient, category_params, clamp_max_results
from ..config import Config
from ..errors import ConfigurationError, EmptyResultError
from ..models import AggregationResult, DurationFilter, SourceResult
from .aggregator import aggregate
from .category_names import apply_category_names, fetch_category_names, parse_categories
from .source_resolver import SourceResolver

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], YouTubeClient]


class _YouTubeQueryService:
    """Holds the injected config and builds a fresh client per query"""

    def __init__(self, app_config: Config, client_factory: Optional[ClientFactory] = None):
        """Initialize service

        Args:
            app_config: Process-wide configuration, validated at startup
            client_factory: Builds one YouTubeClient; defaults to the real API
        """
        self.config = app_config
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> YouTubeClient:
        return YouTubeClient(self.config.youtube_api_key, self.config.timeout_seconds)

    def _new_client(self) -> YouTubeClient:
        """Fail fast before any network call when no credential is configured"""
        if not self.config.youtube_configured:
            raise ConfigurationError(
                "YouTube API key is not configured. Set YOUTUBE_API_KEY in .env"
            )
        return self._client_factory()

    def _resolve(self, region, category, max_results, keyword, duration) -> SourceResult:
        client = self._new_client()
        try:
            return SourceResolver(client).resolve(region, category, max_results, keyword, duration)
        finally:
            client.close()


class TrendingQueryService(_YouTubeQueryService):
    """Ranked/filterable video list for the grid view"""

    def fetch_trending(
        self,
        region: str,
        category: Optional[str] = "0",
        max_results: Any = 20,
        keyword: Optional[str] = None,
        duration: DurationFilter = DurationFilter.ANY,
    ) -> SourceResult:
        """Videos in chart or search order, at most max_results of them

        Raises:
            ConfigurationError: If no YouTube API key is configured
            UpstreamError: If an upstream call fails
            EmptyResultError: If nothing matched
        """
        limit = clamp_max_results(max_results)
        result = self._resolve(region, category, limit, keyword, duration)

        if not result.videos:
            raise EmptyResultError((keyword or "").strip() or None)

        return SourceResult(videos=result.videos[:limit], total_results=result.total_results)


class StatsQueryService(_YouTubeQueryService):
    """Analytics digest: resolve, aggregate, then name the categories"""

    def fetch_stats(
        self,
        region: str,
        max_results: Any = 50,
        keyword: Optional[str] = None,
        duration: DurationFilter = DurationFilter.ANY,
    ) -> AggregationResult:
        """Rollups over one batch; category names are best-effort

        Raises:
            ConfigurationError: If no YouTube API key is configured
            UpstreamError: If the video lookup fails
        """
        source = self._resolve(region, "0", max_results, keyword, duration)
        logger.info(f"Aggregating {len(source.videos)} videos for {region}")

        if not source.videos:
            return aggregate([])

        # the taxonomy lookup only needs the region, so it runs while we aggregate
        with ThreadPoolExecutor(max_workers=1) as executor:
            names_future = executor.submit(self._category_names, region)
            result = aggregate(source.videos)
            names = names_future.result()

        return result.model_copy(
            update={"category_rollup": tuple(apply_category_names(result.category_rollup, names))}
        )

    def _category_names(self, region: str) -> Dict[str, str]:
        # separate client: the query's client stays on this thread
        try:
            client = self._client_factory()
        except Exception as e:
            logger.warning(f"Could not create client for category lookup: {e}")
            return {}
        try:
            return fetch_category_names(client, region)
        finally:
            client.close()


class CategoryQueryService(_YouTubeQueryService):
    """Assignable categories for the filter dropdown"""

    def list_categories(self, region: str) -> List[Dict[str, str]]:
        """[{id, title}] in upstream order

        Raises:
            ConfigurationError: If no YouTube API key is configured
            UpstreamError: If the lookup fails
        """
        client = self._new_client()
        try:
            response = client.list_video_categories(category_params(region))
        finally:
            client.close()
        return parse_categories(response, assignable_only=True)
