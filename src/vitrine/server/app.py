"""FastAPI application for the component preview server.

Example:
    >>> from vitrine.config import PreviewConfig
    >>> from vitrine.server import create_app
    >>> app = create_app(PreviewConfig(components_dir="components"))

Run with uvicorn, or use ``vitrine serve``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from vitrine.components.assets import AssetCompiler
from vitrine.components.builder import ComponentBuilder
from vitrine.components.errors import CompileFailure
from vitrine.components.renderer import ComponentRenderer
from vitrine.config import PreviewConfig
from vitrine.environment.helpers import make_asset_helper
from vitrine.server.channel import UpdateChannel
from vitrine.server.document import gallery_document
from vitrine.server.middleware import PreviewMiddleware, component_index
from vitrine.server.watcher import watch_components

logger = logging.getLogger(__name__)


def _report_watcher_exit(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error("Component watcher stopped; hot update is off", exc_info=error)


def create_app(
    config: PreviewConfig | None = None,
    *,
    renderer: ComponentRenderer | None = None,
    channel: UpdateChannel | None = None,
) -> FastAPI:
    """Build the preview application.

    Args:
        config: Preview settings; ``PreviewConfig.from_env()`` when omitted
        renderer: Renderer with the helpers and partials to preview with
        channel: Push channel for hot-update notifications

    The app exposes ``app.state.builder``, ``app.state.renderer`` and
    ``app.state.channel``. When ``config.hot_update`` is set, the lifespan
    runs the change watcher for as long as the app is serving.
    """
    config = config or PreviewConfig.from_env()
    renderer = renderer or ComponentRenderer()
    channel = channel or UpdateChannel()
    builder = ComponentBuilder(config.build_options)
    assets = AssetCompiler(config.build_options)
    renderer.register_helper("asset", make_asset_helper(config.asset_url_prefix))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not config.hot_update:
            yield
            return

        if not config.components_dir.is_dir():
            logger.warning("Hot update disabled: %s is not a directory", config.components_dir)
            yield
            return

        stop = asyncio.Event()
        watcher = asyncio.create_task(watch_components(config.components_dir, channel, stop_event=stop))
        watcher.add_done_callback(_report_watcher_exit)
        try:
            yield
        finally:
            stop.set()
            watcher.cancel()
            try:
                await watcher
            except asyncio.CancelledError:
                pass
            except Exception:
                # _report_watcher_exit has logged it
                logger.debug("Component watcher ended with an error", exc_info=True)

    app = FastAPI(title="Vitrine preview", lifespan=lifespan)
    app.state.config = config
    app.state.builder = builder
    app.state.renderer = renderer
    app.state.channel = channel

    prefix = config.static_prefix

    @app.get("/", response_class=HTMLResponse)
    async def gallery() -> str:
        return gallery_document(renderer.environment, component_index(builder.repository), config)

    @app.get(f"{prefix}/global.css")
    async def global_styles() -> Response:
        try:
            css = assets.compile_global_styles()
        except CompileFailure as e:
            logger.error("Global stylesheet unavailable:\n%s", e.format_compact())
            return PlainTextResponse(e.message, status_code=404)
        return Response(css, media_type="text/css")

    @app.websocket(f"{prefix}/ws")
    async def updates(websocket: WebSocket) -> None:
        await websocket.accept()
        subscription = channel.subscribe(websocket.send_json)
        await websocket.send_json({"type": "connected"})
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.debug("Preview client disconnected")
        finally:
            subscription.unsubscribe()

    if config.global_assets_dir.is_dir():
        app.mount(
            f"{prefix}/global-assets",
            StaticFiles(directory=str(config.global_assets_dir)),
            name="global-assets",
        )
    else:
        logger.warning("Global assets directory %s does not exist", config.global_assets_dir)

    app.add_middleware(PreviewMiddleware, config=config, builder=builder, renderer=renderer)
    return app
