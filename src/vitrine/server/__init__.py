"""Preview server: middleware, documents, hot-update channel and watcher."""

from vitrine.server.app import create_app
from vitrine.server.channel import Subscription, UpdateChannel
from vitrine.server.document import gallery_document, inject_hot_update, preview_document
from vitrine.server.middleware import PreviewMiddleware, component_index, parse_preview_path
from vitrine.server.watcher import resolve_component, update_messages, watch_components

__all__ = [
    "PreviewMiddleware",
    "Subscription",
    "UpdateChannel",
    "component_index",
    "create_app",
    "gallery_document",
    "inject_hot_update",
    "parse_preview_path",
    "preview_document",
    "resolve_component",
    "update_messages",
    "watch_components",
]
