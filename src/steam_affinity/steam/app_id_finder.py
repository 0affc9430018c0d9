"""Find Steam App IDs by game name."""

import requests
from difflib import SequenceMatcher

STORE_SEARCH_URL = "https://store.steampowered.com/api/storesearch/"
REQUEST_TIMEOUT = 10


def similarity(a: str, b: str) -> float:
    """Calculate string similarity (0-1)."""
    return SequenceMatcher(None, a.lower(), b.lower()).ratio()


def _store_search(game_name: str) -> list[dict]:
    params = {
        "term": game_name,
        "l": "english",
        "cc": "US",
    }
    try:
        response = requests.get(STORE_SEARCH_URL, params=params, timeout=REQUEST_TIMEOUT)
        if response.status_code != 200:
            return []
        data = response.json()
    except (requests.RequestException, ValueError):
        return []
    if not isinstance(data, dict):
        return []
    return data.get("items", [])


def get_multiple_matches(game_name: str, limit: int = 5) -> list[dict]:
    """
    Get multiple potential matches for a game name.

    Returns:
        List of dicts with 'appid', 'name', and 'similarity' keys,
        in Steam's relevance order
    """
    matches = []
    for item in _store_search(game_name)[:limit]:
        item_name = item.get("name", "")
        matches.append({
            "appid": item.get("id"),
            "name": item_name,
            "similarity": similarity(game_name, item_name),
        })
    return matches
