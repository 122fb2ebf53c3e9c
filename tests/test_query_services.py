"""Tests for yt_trends/processors/query_services.py with mocked dependencies."""

from unittest.mock import MagicMock

import pytest

from conftest import make_item, make_search_item
from yt_trends.errors import ConfigurationError, EmptyResultError, UpstreamError
from yt_trends.processors.query_services import (
    CategoryQueryService,
    StatsQueryService,
    TrendingQueryService,
)

CATEGORIES_RESPONSE = {
    "items": [
        {"id": "10", "snippet": {"title": "Music", "assignable": True}},
        {"id": "20", "snippet": {"title": "Gaming", "assignable": True}},
        {"id": "18", "snippet": {"title": "Short Movies", "assignable": False}},
    ]
}


def _factory(client):
    factory = MagicMock(return_value=client)
    return factory


class TestConfigurationGate:
    @pytest.mark.parametrize("service_cls", [TrendingQueryService, StatsQueryService, CategoryQueryService])
    def test_rejects_without_credential(self, service_cls, unconfigured_config, mock_client):
        factory = _factory(mock_client)
        service = service_cls(unconfigured_config, client_factory=factory)

        with pytest.raises(ConfigurationError, match="YOUTUBE_API_KEY"):
            if service_cls is TrendingQueryService:
                service.fetch_trending("US")
            elif service_cls is StatsQueryService:
                service.fetch_stats("US")
            else:
                service.list_categories("US")

        factory.assert_not_called()
        mock_client.list_videos.assert_not_called()


class TestTrendingQueryService:
    def test_chart_end_to_end(self, app_config, mock_client):
        mock_client.list_videos.return_value = {
            "items": [make_item("a"), make_item("b")],
            "pageInfo": {"totalResults": 187},
        }
        service = TrendingQueryService(app_config, client_factory=_factory(mock_client))

        result = service.fetch_trending(region="US", category="0", max_results=2)

        assert mock_client.list_videos.call_count == 1
        assert len(result.videos) == 2
        assert result.total_results == 187
        params = mock_client.list_videos.call_args[0][0]
        assert "videoCategoryId" not in params
        assert params["maxResults"] == 2

    def test_truncates_to_max_results(self, app_config, mock_client):
        mock_client.list_videos.return_value = {
            "items": [make_item(f"v{i}") for i in range(5)],
            "pageInfo": {"totalResults": 5},
        }
        service = TrendingQueryService(app_config, client_factory=_factory(mock_client))
        assert len(service.fetch_trending("US", max_results=3).videos) == 3

    def test_empty_search_raises_empty_result(self, app_config, mock_client):
        service = TrendingQueryService(app_config, client_factory=_factory(mock_client))

        with pytest.raises(EmptyResultError) as exc_info:
            service.fetch_trending("US", keyword="nothingmatches")

        assert "nothingmatches" in exc_info.value.message
        mock_client.list_videos.assert_not_called()

    def test_upstream_error_propagates(self, app_config, mock_client):
        mock_client.list_videos.side_effect = UpstreamError(400, "Invalid regionCode")
        service = TrendingQueryService(app_config, client_factory=_factory(mock_client))
        with pytest.raises(UpstreamError) as exc_info:
            service.fetch_trending("ZZ")
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid regionCode"


class TestStatsQueryService:
    def test_search_end_to_end(self, app_config, mock_client):
        mock_client.search.return_value = {
            "items": [make_search_item("a"), make_search_item("b"), make_search_item("c")],
            "pageInfo": {"totalResults": 3},
        }
        mock_client.list_videos.return_value = {
            "items": [
                make_item("a", views="500", category_id="10", tags=["Test"]),
                make_item("b", views="9000", category_id="20", tags=["test", "query"]),
                make_item("c", views="1200", category_id="10"),
            ]
        }
        mock_client.list_video_categories.return_value = CATEGORIES_RESPONSE
        service = StatsQueryService(app_config, client_factory=_factory(mock_client))

        result = service.fetch_stats("US", max_results=50, keyword="testquery")

        assert [v.id for v in result.top_videos] == ["b", "c", "a"]
        assert [v.view_count for v in result.top_videos] == [9000, 1200, 500]
        assert result.totals.view_sum == 10700
        assert result.tag_frequency[0].tag == "test"
        assert result.tag_frequency[0].count == 2
        assert [(c.category_id, c.display_name) for c in result.category_rollup] == [
            ("10", "Music"),
            ("20", "Gaming"),
        ]
        assert mock_client.search.call_args[0][0]["q"] == "testquery"

    def test_category_lookup_failure_degrades(self, app_config, mock_client):
        mock_client.list_videos.return_value = {
            "items": [make_item("a", category_id="10"), make_item("b", category_id="24")],
        }
        mock_client.list_video_categories.side_effect = OSError("network unreachable")
        service = StatsQueryService(app_config, client_factory=_factory(mock_client))

        result = service.fetch_stats("US")

        assert [c.display_name for c in result.category_rollup] == ["Category 10", "Category 24"]
        assert result.totals.video_count == 2

    def test_category_client_creation_failure_degrades(self, app_config, mock_client):
        mock_client.list_videos.return_value = {"items": [make_item("a", category_id="10")]}
        # first call serves the main query, the second (category lookup) blows up
        factory = MagicMock(side_effect=[mock_client, RuntimeError("boom")])
        service = StatsQueryService(app_config, client_factory=factory)

        result = service.fetch_stats("US")
        assert result.category_rollup[0].display_name == "Category 10"

    def test_stats_uses_all_categories(self, app_config, mock_client):
        StatsQueryService(app_config, client_factory=_factory(mock_client)).fetch_stats("GB", max_results=50)
        params = mock_client.list_videos.call_args[0][0]
        assert "videoCategoryId" not in params
        assert params["regionCode"] == "GB"
        assert params["maxResults"] == 50

    def test_empty_batch_skips_category_lookup(self, app_config, mock_client):
        result = StatsQueryService(app_config, client_factory=_factory(mock_client)).fetch_stats("US")
        assert result.totals.video_count == 0
        mock_client.list_video_categories.assert_not_called()

    def test_primary_failure_is_terminal(self, app_config, mock_client):
        mock_client.list_videos.side_effect = UpstreamError(403, "quota")
        service = StatsQueryService(app_config, client_factory=_factory(mock_client))
        with pytest.raises(UpstreamError):
            service.fetch_stats("US")


class TestCategoryQueryService:
    def test_assignable_only(self, app_config, mock_client):
        mock_client.list_video_categories.return_value = CATEGORIES_RESPONSE
        service = CategoryQueryService(app_config, client_factory=_factory(mock_client))
        assert service.list_categories("US") == [
            {"id": "10", "title": "Music"},
            {"id": "20", "title": "Gaming"},
        ]

    def test_failure_propagates(self, app_config, mock_client):
        mock_client.list_video_categories.side_effect = UpstreamError(403, "forbidden")
        service = CategoryQueryService(app_config, client_factory=_factory(mock_client))
        with pytest.raises(UpstreamError):
            service.list_categories("US")


class TestClientCleanup:
    def test_trending_closes_client(self, app_config, mock_client):
        mock_client.list_videos.return_value = {"items": [make_item("a")]}
        TrendingQueryService(app_config, client_factory=_factory(mock_client)).fetch_trending("US")
        mock_client.close.assert_called_once()

    def test_closes_client_on_upstream_error(self, app_config, mock_client):
        mock_client.list_videos.side_effect = UpstreamError(403, "quota")
        with pytest.raises(UpstreamError):
            TrendingQueryService(app_config, client_factory=_factory(mock_client)).fetch_trending("US")
        mock_client.close.assert_called_once()

    def test_stats_closes_query_and_lookup_clients(self, app_config):
        query_client, lookup_client = MagicMock(), MagicMock()
        query_client.list_videos.return_value = {"items": [make_item("a", category_id="10")]}
        lookup_client.list_video_categories.return_value = CATEGORIES_RESPONSE
        factory = MagicMock(side_effect=[query_client, lookup_client])

        result = StatsQueryService(app_config, client_factory=factory).fetch_stats("US")

        assert result.category_rollup[0].display_name == "Music"
        query_client.close.assert_called_once()
        lookup_client.close.assert_called_once()

    def test_categories_closes_client(self, app_config, mock_client):
        CategoryQueryService(app_config, client_factory=_factory(mock_client)).list_categories("US")
        mock_client.close.assert_called_once()
