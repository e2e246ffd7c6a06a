"""Entry point for the FastAPI-hosted show browser."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, RedirectResponse

from .config import settings
from .controller import DrilldownView, SessionState, ViewController
from .services.catalog_api import CatalogClient
from .services.catalog_cache import CatalogCache
from .web import HtmlRenderer

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


def build_controller(
    http_client: httpx.AsyncClient, *, app_name: str | None = None
) -> tuple[ViewController, HtmlRenderer]:
    """Wire a fresh session around ``http_client``."""

    renderer = HtmlRenderer(app_name or settings.app_name)
    cache = CatalogCache(CatalogClient(http_client))
    controller = ViewController(SessionState(cache=cache), renderer)
    return controller, renderer


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    catalog_http_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=settings.catalog_base_url,
            timeout=httpx.Timeout(settings.request_timeout_seconds, connect=10.0),
        )
    )
    controller, renderer = build_controller(catalog_http_client)
    fastapi_app.state.controller = controller
    fastapi_app.state.renderer = renderer
    await controller.start()

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Browse a TV catalog and drill into each show's episodes",
        version="1.0.0",
        lifespan=lifespan,
    )
    register_routes(fastapi_app)
    return fastapi_app


def get_controller(fastapi_app: FastAPI) -> ViewController:
    controller = getattr(fastapi_app.state, "controller", None)
    if not isinstance(controller, ViewController):
        raise RuntimeError("View controller not initialised")
    return controller


def get_renderer(fastapi_app: FastAPI) -> HtmlRenderer:
    renderer = getattr(fastapi_app.state, "renderer", None)
    if not isinstance(renderer, HtmlRenderer):
        raise RuntimeError("Renderer not initialised")
    return renderer


def _back_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        controller = get_controller(fastapi_app)
        renderer = get_renderer(fastapi_app)
        show_id = controller.session.selection.current_show_id
        return HTMLResponse(renderer.render_document(current_show_id=show_id))

    @fastapi_app.get("/shows/{show_id}")
    async def select_show(show_id: str) -> RedirectResponse:
        await get_controller(fastapi_app).select_show(show_id)
        return _back_home()

    @fastapi_app.get("/switch")
    async def switch_show(show: str = "") -> RedirectResponse:
        await get_controller(fastapi_app).switch_show(show)
        return _back_home()

    @fastapi_app.get("/back")
    async def back() -> RedirectResponse:
        await get_controller(fastapi_app).back()
        return _back_home()

    @fastapi_app.get("/search")
    async def search(q: str = "") -> RedirectResponse:
        await get_controller(fastapi_app).search(q)
        return _back_home()

    @fastapi_app.get("/episodes")
    async def select_episode(episode: str = "all") -> RedirectResponse:
        get_controller(fastapi_app).select_episode(episode)
        return _back_home()

    @fastapi_app.get("/api/state")
    async def state() -> dict[str, Any]:
        controller = get_controller(fastapi_app)
        session = controller.session
        view = controller.view
        return {
            "view": view.name,
            "showId": view.show_id if isinstance(view, DrilldownView) else None,
            "episodeFilter": session.selection.episode_filter,
            "showQuery": session.show_query,
            "episodeQuery": session.episode_query,
            "showsLoaded": session.cache.loaded,
            "showCount": len(session.cache.shows),
            "episodeCount": len(controller.current_episodes()),
        }


app = create_app()
