"""Integration tests for the Web adapter.

Tests the REST endpoints, WebSocket view streaming and the application
lifespan against an in-process PokeAPI double.
"""

import asyncio
import random

import httpx
import pytest
from fastapi.testclient import TestClient

from pokeduel.adapters.pokeapi.client import PokeAPIClient
from pokeduel.adapters.web import create_web_adapter
from pokeduel.config import BattleConfig, Config, PokeAPIConfig

BASE_URL = "https://pokeapi.test/api/v2"


def creature_body(creature_id: int) -> dict:
    return {
        "id": creature_id,
        "name": f"mon{creature_id}",
        "sprites": {"front_default": f"https://img/{creature_id}.png"},
        "stats": [
            {"base_stat": 30, "stat": {"name": "hp"}},
            {"base_stat": creature_id * 10, "stat": {"name": "attack"}},
        ],
        "types": [{"slot": 1, "type": {"name": "normal"}}],
    }


def pokeapi_double(request: httpx.Request) -> httpx.Response:
    """Serve creatures 1-4 by id and an empty ``normal`` type."""
    parts = request.url.path.rstrip("/").split("/")
    if parts[-2] == "pokemon" and parts[-1] in {"1", "2", "3", "4"}:
        return httpx.Response(200, json=creature_body(int(parts[-1])))
    if parts[-2] == "type" and parts[-1] == "normal":
        return httpx.Response(200, json={"name": "normal", "pokemon": []})
    return httpx.Response(404)


def build_adapter(
    select_on_startup: bool = False, max_creature_id: int = 4, handler=pokeapi_double
):
    config = Config(
        pokeapi=PokeAPIConfig(base_url=BASE_URL, max_creature_id=max_creature_id),
        battle=BattleConfig(
            select_on_startup=select_on_startup, animation_step_seconds=0
        ),
    )
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    gateway = PokeAPIClient(base_url=BASE_URL, client=http_client)
    return create_web_adapter(config, gateway=gateway, rng=random.Random(11))


@pytest.fixture
def web_adapter():
    return build_adapter()


@pytest.fixture
def client(web_adapter):
    with TestClient(web_adapter.app) as test_client:
        yield test_client


class TestRestEndpoints:
    """Test REST endpoints."""

    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    def test_initial_view(self, client):
        """Test the view is empty before any pair is chosen."""
        response = client.get("/api/view")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "_ vs _"
        assert data["first"]["name"] == "_"
        assert data["battle_enabled"] is False
        assert data["battle_label"] == "Battle"

    def test_new_pair(self, client):
        response = client.post("/api/pair")

        assert response.status_code == 200
        data = response.json()
        assert data["battle_enabled"] is True
        assert data["first"]["name"] != data["second"]["name"]
        assert data["title"] == f"{data['first']['name']} vs {data['second']['name']}"
        assert client.get("/api/view").json() == data

    def test_battle_announces_winner(self, client):
        """Test the higher attack wins and the button is re-enabled."""
        pair = client.post("/api/pair").json()
        attacks = {
            pair["first"]["name"]: int(pair["first"]["attack"]),
            pair["second"]["name"]: int(pair["second"]["attack"]),
        }
        expected = max(attacks, key=attacks.get)

        response = client.post("/api/battle")

        assert response.status_code == 200
        data = response.json()
        assert data["result"] == f"The Winner is: {expected}!"
        assert data["winner_head"] == f"{expected}!"
        assert data["winner_type"] == "Type: normal"
        assert data["battle_label"] == "Battle"
        assert data["battle_enabled"] is True

    def test_battle_without_pair_is_noop(self, client):
        response = client.post("/api/battle")

        assert response.status_code == 200
        assert response.json()["title"] == "_ vs _"

    def test_fetch_failure_reported_in_view(self):
        """Test an upstream miss is shown as the result, not an HTTP error."""
        adapter = build_adapter(max_creature_id=10)
        adapter.controller.rng = random.Random(0)
        with TestClient(adapter.app) as client:
            for _ in range(20):
                data = client.post("/api/pair").json()
                if data["result"]:
                    break

        assert data["result"] == "Error fetching pokemon"
        assert data["battle_enabled"] is False

    def test_pair_conflict_while_selecting(self, client, web_adapter):
        web_adapter.controller.controls.selecting = True

        response = client.post("/api/pair")

        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["error"] == "SELECTION_IN_PROGRESS"
        assert detail["message"] == "A new pair is already being selected"

    def test_battle_conflict_while_battling(self, client, web_adapter):
        client.post("/api/pair")
        web_adapter.controller.controls.battling = True

        response = client.post("/api/battle")

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "BATTLE_IN_PROGRESS"

    def test_metrics_endpoint(self, client):
        client.post("/api/pair")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "pokeduel_fetch_total" in response.text


class TestWebSocket:
    """Test WebSocket view streaming."""

    def test_initial_view_pushed(self, client):
        with client.websocket_connect("/ws") as websocket:
            data = websocket.receive_json()

        assert data["title"] == "_ vs _"

    def test_selection_pushes_two_views(self, client):
        """Test a selection streams the disabled view then the loaded pair."""
        with client.websocket_connect("/ws") as websocket:
            websocket.receive_json()

            client.post("/api/pair")
            disabled = websocket.receive_json()
            loaded = websocket.receive_json()

        assert disabled["battle_enabled"] is False
        assert loaded["battle_enabled"] is True
        assert loaded["title"] != "_ vs _"

    def test_battle_streams_animation(self, client):
        """Test every battle label step is pushed before the result."""
        client.post("/api/pair")
        with client.websocket_connect("/ws") as websocket:
            websocket.receive_json()

            client.post("/api/battle")
            labels = [websocket.receive_json()["battle_label"] for _ in range(4)]
            result = websocket.receive_json()

        assert labels == ["calculating...", "fighting.", "fighting..", "fighting..."]
        assert result["battle_label"] == "Battle"
        assert result["result"].startswith("The Winner is: ")


class TestLifecycle:
    """Test application startup and shutdown."""

    def test_select_on_startup(self):
        adapter = build_adapter(select_on_startup=True)

        with TestClient(adapter.app) as client:
            for _ in range(50):
                data = client.get("/api/view").json()
                if data["battle_enabled"]:
                    break

        assert data["title"] != "_ vs _"
        assert data["battle_enabled"] is True

    def test_shutdown_clears_connections(self, web_adapter):
        with TestClient(web_adapter.app) as client:
            with client.websocket_connect("/ws") as websocket:
                websocket.receive_json()

        assert web_adapter.websocket_connections == []

    @pytest.mark.asyncio
    async def test_shutdown_cancels_pending_work(self):
        """Test pending tasks are cancelled before the gateway closes."""
        type_lookup = asyncio.Event()

        async def slow_types(request: httpx.Request) -> httpx.Response:
            if "/type/" in request.url.path:
                await type_lookup.wait()
            return pokeapi_double(request)

        adapter = build_adapter(handler=slow_types)
        await adapter.gateway.initialize()
        await adapter.controller.choose_new_pair()
        await adapter.controller.battle()
        gallery_task = adapter.controller._gallery_task
        startup_task = asyncio.create_task(asyncio.Event().wait())
        adapter._startup_task = startup_task

        await adapter.shutdown()

        assert gallery_task.cancelled()
        assert startup_task.cancelled()
        assert adapter._startup_task is None
        assert await adapter.controller.wait_for_gallery() == []
