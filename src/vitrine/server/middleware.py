"""Preview middleware: routes requests to components.

Routes:
- ``GET /api/components`` → JSON array of ``{type, variation, meta}``,
  scanned fresh on every request
- ``GET /preview/{type}/{variation}`` → full preview document built and
  rendered from disk on every request

Anything else, including a preview URL whose component directory does not
exist, goes to the wrapped application untouched.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from vitrine.components.builder import ComponentBuilder
from vitrine.components.errors import VitrineError
from vitrine.components.models import RenderRequest
from vitrine.components.renderer import ComponentRenderer
from vitrine.components.repository import ComponentRepository
from vitrine.components.validation import validate_data
from vitrine.config import PreviewConfig
from vitrine.server.document import preview_document

logger = logging.getLogger(__name__)

API_PATH = "/api/components"
PREVIEW_PREFIX = "/preview/"


def component_index(repository: ComponentRepository) -> list[dict[str, Any]]:
    """The ``/api/components`` payload for a fresh scan of ``repository``."""
    return [
        {"type": found.type, "variation": found.variation, "meta": dict(found.definition.meta)}
        for found in repository.scan()
    ]


def parse_preview_path(path: str) -> tuple[str, str] | None:
    """``(type, variation)`` from ``/preview/{type}/{variation}``; None if it does not match.

    Example:
        >>> parse_preview_path("/preview/hero/dark")
        ('hero', 'dark')
        >>> parse_preview_path("/preview/hero") is None
        True
    """
    if not path.startswith(PREVIEW_PREFIX):
        return None
    parts = [part for part in path[len(PREVIEW_PREFIX) :].split("/") if part]
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


class PreviewMiddleware:
    """ASGI middleware serving component previews.

    Args:
        app: Application that handles every other request
        config: Preview settings
        builder: Builder to compile components with
        renderer: Renderer (and its helpers and partials) to render with
    """

    def __init__(
        self,
        app: ASGIApp,
        config: PreviewConfig | None = None,
        builder: ComponentBuilder | None = None,
        renderer: ComponentRenderer | None = None,
    ):
        self.app = app
        self.config = config or PreviewConfig()
        self.builder = builder or ComponentBuilder(self.config.build_options)
        self.renderer = renderer or ComponentRenderer()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in ("GET", "HEAD"):
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        # Scanning, sass and rendering block, so they run in the thread pool.
        if path == API_PATH:
            index = await asyncio.to_thread(component_index, self.builder.repository)
            response: Response | None = JSONResponse(index)
        else:
            pair = parse_preview_path(path)
            response = await asyncio.to_thread(self.preview, *pair) if pair is not None else None

        if response is None:
            await self.app(scope, receive, send)
            return
        await response(scope, receive, send)

    def preview(self, component_type: str, variation: str) -> Response | None:
        """Preview response for ``type/variation``; None when no such component exists."""
        location = self.builder.repository.find(component_type, variation)
        if location is None:
            logger.debug("No component at %s/%s, passing through", component_type, variation)
            return None

        try:
            component = self.builder.build(location)
            data = component.definition.defaults()
            for issue in validate_data(component.definition, data):
                logger.warning("%s default data: %s", component.name, issue)
            html = self.renderer.render(component, RenderRequest(data, preview=True))
        except VitrineError as e:
            logger.exception("Failed to preview %s/%s", component_type, variation)
            return PlainTextResponse(e.format_compact(), status_code=500)

        return HTMLResponse(preview_document(component, html, self.config))
