from __future__ import annotations

import httpx
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.main import build_controller, register_routes


SHOWS_PAYLOAD = [
    {
        "id": 5,
        "name": "Breaking Bad",
        "genres": ["Drama"],
        "status": "Ended",
        "rating": {"average": 9.2},
        "runtime": 60,
        "summary": "<p>Chemistry</p>",
        "image": {"medium": "https://static.example.com/bb.jpg"},
    },
    {"id": 7, "name": "arrow", "genres": ["Action"], "status": "Ended"},
]

EPISODES_PAYLOAD = [
    {
        "id": 9,
        "season": 1,
        "number": 3,
        "name": "Pilot",
        "summary": "<p>Walter cooks</p>",
        "url": "https://www.tvmaze.com/episodes/9",
    }
]


def build_app() -> tuple[FastAPI, list[str]]:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path == "/shows":
            return httpx.Response(200, json=SHOWS_PAYLOAD)
        if request.url.path == "/shows/5/episodes":
            return httpx.Response(200, json=EPISODES_PAYLOAD)
        return httpx.Response(404, json={"message": "Not Found"})

    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://api.example.com"
    )
    app = FastAPI()
    register_routes(app)
    controller, renderer = build_controller(http_client, app_name="Test Browser")
    app.state.controller = controller
    app.state.renderer = renderer
    return app, paths


def test_listing_renders_sorted_cards_with_count() -> None:
    app, paths = build_app()

    with TestClient(app) as client:
        response = client.get("/back")

    assert response.status_code == 200
    body = response.text
    assert "Displaying 2 / 2 shows" in body
    assert body.index("arrow") < body.index("Breaking Bad")
    assert "<p>Chemistry</p>" in body
    assert "Rating N/A" in body
    assert paths == ["/shows"]


def test_drilldown_and_episode_selection_flow() -> None:
    app, paths = build_app()

    with TestClient(app) as client:
        client.get("/back")
        drilldown = client.get("/shows/5")
        selected = client.get("/episodes", params={"episode": "9"})
        client.get("/back")
        again = client.get("/shows/5")
        state = client.get("/api/state").json()

    assert "Viewing: Breaking Bad" in drilldown.text
    assert "S01E03 - Pilot" in drilldown.text
    assert "Displaying 1 / 1 episodes" in drilldown.text
    assert '<option value="9" selected>' in selected.text
    assert "View on TVMaze.com" in again.text
    assert paths == ["/shows", "/shows/5/episodes"]
    assert state["view"] == "episodes"
    assert state["showId"] == 5
    assert state["episodeCount"] == 1


def test_failed_episode_fetch_shows_error_state() -> None:
    app, paths = build_app()

    with TestClient(app) as client:
        client.get("/back")
        response = client.get("/shows/7")
        retry = client.get("/switch", params={"show": "7"})

    assert "Error loading episodes." in response.text
    assert "Error loading episodes." in retry.text
    assert paths == ["/shows", "/shows/7/episodes", "/shows/7/episodes"]


def test_search_route_filters_active_listing() -> None:
    app, _ = build_app()

    with TestClient(app) as client:
        client.get("/back")
        response = client.get("/search", params={"q": "chemistry"})

    assert "Displaying 1 / 2 shows" in response.text
    assert 'value="chemistry"' in response.text


def test_commands_redirect_home() -> None:
    app, _ = build_app()

    with TestClient(app) as client:
        response = client.get("/switch", params={"show": ""}, follow_redirects=False)
        health = client.get("/healthz")

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert health.json() == {"status": "ok"}


def test_failed_episode_fetch_keeps_show_heading() -> None:
    app, _ = build_app()

    with TestClient(app) as client:
        client.get("/back")
        response = client.get("/shows/7")

    assert '<span id="nav-current">Viewing: arrow</span>' in response.text
    assert "Error loading episodes." in response.text
