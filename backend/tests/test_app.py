"""
Tests for app.py - the Battlesnake HTTP endpoints.
"""

import pytest
import sys
import os
from unittest.mock import Mock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import app as app_module

from builders import move_payload, snake_payload


@pytest.fixture
def client(monkeypatch):
    # Keep the background sweeper out of request tests
    monkeypatch.setattr(app_module.cache_sweeper, "start", Mock())
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as client:
        yield client


class TestIndex:
    """Tests for GET /."""

    def test_appearance(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.get_json()
        assert data["apiversion"] == "1"
        assert set(data) == {"apiversion", "author", "color", "head", "tail", "version"}

    def test_requests_start_the_sweeper(self, client):
        client.get("/")
        app_module.cache_sweeper.start.assert_called()


class TestLifecycle:
    """Tests for /start and /end."""

    def test_start(self, client):
        response = client.post("/start", json=move_payload())
        assert response.status_code == 200
        assert response.get_json() == {}

    def test_end(self, client):
        response = client.post("/end", json=move_payload())
        assert response.status_code == 200
        assert response.get_json() == {}

    def test_start_without_body(self, client):
        assert client.post("/start").status_code == 200


class TestMove:
    """Tests for POST /move."""

    def test_scenario_move(self, client):
        enemy = snake_payload("enemy", [(7, 5), (7, 4), (7, 3), (7, 2)])
        response = client.post("/move", json=move_payload(others=[enemy], game_id="app-scenario"))
        assert response.status_code == 200
        data = response.get_json()
        assert data["move"] in ("up", "left")
        assert isinstance(data["shout"], str)

    def test_enclosed_snake_still_gets_a_move(self, client):
        enemy = snake_payload("enemy", [(1, 0), (1, 1), (1, 2), (1, 3)])
        payload = move_payload(you_body=[(0, 0), (0, 1), (0, 2)], others=[enemy], game_id="app-enclosed")
        response = client.post("/move", json=payload)
        assert response.status_code == 200
        assert response.get_json()["move"] == "up"

    def test_malformed_payload_is_rejected(self, client):
        response = client.post("/move", json={"turn": 1})
        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_non_json_body_is_rejected(self, client):
        response = client.post("/move", data="not json", content_type="text/plain")
        assert response.status_code == 400

    def test_unknown_route_is_404(self, client):
        assert client.get("/nope").status_code == 404
