"""
Unit tests for Steam Store App ID lookup.

Network calls are mocked.
"""

from unittest.mock import Mock, patch

import requests

from steam_affinity.steam import app_id_finder


def _response(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


class TestSimilarity:
    """Tests for name similarity."""

    def test_case_insensitive(self):
        """Case does not affect similarity."""
        assert app_id_finder.similarity("Dota 2", "DOTA 2") == 1.0

    def test_different(self):
        """Unrelated names score low."""
        assert app_id_finder.similarity("Dota 2", "Factorio") < 0.5


class TestGetMultipleMatches:
    """Tests for store search."""

    @patch("steam_affinity.steam.app_id_finder.requests.get")
    def test_matches(self, mock_get):
        """Matches keep store order and carry a similarity score."""
        mock_get.return_value = _response({"items": [
            {"id": 570, "name": "Dota 2"},
            {"id": 1, "name": "Dota Underlords"},
        ]})
        matches = app_id_finder.get_multiple_matches("dota 2")
        assert [m["appid"] for m in matches] == [570, 1]
        assert matches[0]["similarity"] == 1.0
        assert matches[1]["similarity"] < 1.0

    @patch("steam_affinity.steam.app_id_finder.requests.get")
    def test_limit(self, mock_get):
        """At most `limit` matches are returned."""
        mock_get.return_value = _response({"items": [{"id": i, "name": f"Game {i}"} for i in range(10)]})
        assert len(app_id_finder.get_multiple_matches("game", limit=3)) == 3

    @patch("steam_affinity.steam.app_id_finder.requests.get")
    def test_network_error(self, mock_get):
        """Connection failures mean no match."""
        mock_get.side_effect = requests.ConnectionError("offline")
        assert app_id_finder.get_multiple_matches("factorio") == []

    @patch("steam_affinity.steam.app_id_finder.requests.get")
    def test_http_error_status(self, mock_get):
        """Non-200 responses mean no match."""
        mock_get.return_value = _response({}, status_code=503)
        assert app_id_finder.get_multiple_matches("factorio") == []

    @patch("steam_affinity.steam.app_id_finder.requests.get")
    def test_invalid_json(self, mock_get):
        """An unparseable body means no match."""
        response = _response(None)
        response.json.side_effect = ValueError("not json")
        mock_get.return_value = response
        assert app_id_finder.get_multiple_matches("factorio") == []

    @patch("steam_affinity.steam.app_id_finder.requests.get")
    def test_json_not_an_object(self, mock_get):
        """A JSON body that is not an object means no match."""
        mock_get.return_value = _response([{"id": 570, "name": "Dota 2"}])
        assert app_id_finder.get_multiple_matches("dota 2") == []
