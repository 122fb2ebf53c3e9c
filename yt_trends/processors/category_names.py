"""Best-effort display names for category ids"""

import logging
from typing import Dict, Iterable, List

from ..api.youtube_client import YouTubeClient, category_params
from ..models import CategoryRollupEntry

logger = logging.getLogger(__name__)


def fallback_category_name(category_id: str) -> str:
    return f"Category {category_id}"


def parse_categories(response: Dict, assignable_only: bool = False) -> List[Dict[str, str]]:
    """[{id, title}] from a videoCategories.list response, upstream order"""
    categories = []
    for item in response.get("items") or []:
        if not isinstance(item, dict) or not item.get("id"):
            continue
        snippet = item.get("snippet") if isinstance(item.get("snippet"), dict) else {}
        if assignable_only and not snippet.get("assignable"):
            continue
        categories.append({"id": str(item["id"]), "title": str(snippet.get("title") or "")})
    return categories


def fetch_category_names(youtube_client: YouTubeClient, region: str) -> Dict[str, str]:
    """Category id -> title for a region; {} if the lookup fails for any reason"""
    try:
        response = youtube_client.list_video_categories(category_params(region))
    except Exception as e:
        logger.warning(f"Category lookup for {region} failed, using placeholder names: {e}")
        return {}

    return {c["id"]: c["title"] for c in parse_categories(response) if c["title"]}


def apply_category_names(
    rollup: Iterable[CategoryRollupEntry], names: Dict[str, str]
) -> List[CategoryRollupEntry]:
    """Attach display names; unknown ids get "Category <id>" """
    named = []
    for entry in rollup:
        display_name = names.get(entry.category_id) or fallback_category_name(entry.category_id)
        named.append(entry.model_copy(update={"display_name": display_name}))
    return named
