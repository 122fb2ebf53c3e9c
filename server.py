"""YT Trends - Flask API serving trending videos and analytics."""

import logging

from flask import Flask, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from yt_trends.api.summary_client import NarrativeSummarizer
from yt_trends.config import config
from yt_trends.errors import ConfigurationError, EmptyResultError, SummaryError, UpstreamError
from yt_trends.models import DurationFilter, SummaryDigest
from yt_trends.processors.query_services import (
    CategoryQueryService,
    StatsQueryService,
    TrendingQueryService,
)

logging.basicConfig(
    level=config.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

config.validate()
logger.info(f"YouTube API key: {config.masked_api_key() or 'not configured'}")

app = Flask(__name__)

trending_service = TrendingQueryService(config)
stats_service = StatsQueryService(config)
category_service = CategoryQueryService(config)


def get_summarizer() -> NarrativeSummarizer:
    return NarrativeSummarizer(config)


class InvalidParameter(Exception):
    """Invalid query parameter"""


def _region() -> str:
    region = request.args.get("region", config.default_region).strip().upper()
    if not region.isalpha() or len(region) != 2:
        raise InvalidParameter(f"Invalid region code: {region!r}")
    return region


def _max_results(default: int) -> int:
    value = request.args.get("maxResults", str(default))
    try:
        return int(value)
    except ValueError:
        raise InvalidParameter(f"maxResults must be an integer, got {value!r}")


def _duration() -> DurationFilter:
    value = request.args.get("duration", DurationFilter.ANY.value).strip().lower()
    try:
        return DurationFilter(value)
    except ValueError:
        raise InvalidParameter(f"Invalid duration filter: {value!r}")


# ============================================
# ERROR HANDLERS
# ============================================

@app.errorhandler(InvalidParameter)
def handle_bad_request(e):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(ConfigurationError)
def handle_configuration_error(e):
    logger.error(f"Configuration error: {e}")
    return jsonify({"error": str(e)}), 500


@app.errorhandler(UpstreamError)
def handle_upstream_error(e):
    return jsonify({"error": e.message}), e.status_code


@app.errorhandler(SummaryError)
def handle_summary_error(e):
    return jsonify({"error": str(e)}), 502


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    logger.exception(f"Unhandled error on {request.path}: {e}")
    return jsonify({"error": "Internal server error"}), 500


# ============================================
# API ROUTES
# ============================================

@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "healthy"})


@app.route("/api/trending")
def trending():
    """Trending grid: chart or keyword search."""
    region = _region()
    keyword = request.args.get("keyword", "").strip() or None
    try:
        result = trending_service.fetch_trending(
            region=region,
            category=request.args.get("category", "0"),
            max_results=_max_results(config.default_max_results),
            keyword=keyword,
            duration=_duration(),
        )
    except EmptyResultError as e:
        logger.info(f"No results for region={region} keyword={keyword!r}")
        return jsonify({"videos": [], "totalResults": 0, "message": e.message})

    return jsonify(result.to_json_dict())


@app.route("/api/categories")
def categories():
    """Assignable categories for a region."""
    return jsonify({"categories": category_service.list_categories(_region())})


@app.route("/api/stats")
def stats():
    """Tag, channel and category rollups plus top videos."""
    result = stats_service.fetch_stats(
        region=_region(),
        max_results=_max_results(50),
        keyword=request.args.get("keyword", "").strip() or None,
        duration=_duration(),
    )
    return jsonify(result.to_response())


@app.route("/api/summary", methods=["POST"])
def summary():
    """Forward a stats digest to the narrative summary service."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    # accept either a digest or a raw stats payload wrapped as {"stats": ...}
    if isinstance(data.get("stats"), dict):
        data = dict(data["stats"], keyword=data.get("keyword"), region=data.get("region"))
    if not data.get("region"):
        data["region"] = config.default_region

    try:
        digest = SummaryDigest.model_validate(data)
    except ValidationError as e:
        return jsonify({"error": f"Invalid digest: {e.error_count()} validation error(s)"}), 400

    text = get_summarizer().summarize(digest)
    return jsonify({"summary": text})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.port, debug=False)
