"""Tests for the update channel and component change resolution."""

from __future__ import annotations

import asyncio
import logging

import pytest
from watchfiles import Change

from vitrine.server.channel import UpdateChannel
from vitrine.server.watcher import resolve_component, update_messages, watch_components

from .conftest import write_component

MESSAGE = {"type": "component-update", "path": "components/hero/dark"}


class TestUpdateChannel:
    @pytest.mark.asyncio
    async def test_publish_to_all(self):
        channel = UpdateChannel()
        first, second = [], []
        channel.subscribe(first.append)
        channel.subscribe(second.append)
        assert await channel.publish(MESSAGE) == 2
        assert first == second == [MESSAGE]

    @pytest.mark.asyncio
    async def test_async_subscriber(self):
        channel = UpdateChannel()
        received = []

        async def deliver(message):
            received.append(message)

        channel.subscribe(deliver)
        assert await channel.publish(MESSAGE) == 1
        assert received == [MESSAGE]

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        channel = UpdateChannel()
        received = []
        subscription = channel.subscribe(received.append)
        assert subscription.active
        subscription.unsubscribe()
        subscription.unsubscribe()
        assert not subscription.active
        assert len(channel) == 0
        assert await channel.publish(MESSAGE) == 0
        assert received == []

    @pytest.mark.asyncio
    async def test_failing_subscriber_is_logged(self, caplog):
        channel = UpdateChannel()
        received = []

        def broken(message):
            raise ConnectionError("gone")

        channel.subscribe(broken)
        channel.subscribe(received.append)
        with caplog.at_level(logging.ERROR, logger="vitrine.server.channel"):
            assert await channel.publish(MESSAGE) == 1
        assert received == [MESSAGE]
        assert "gone" in caplog.text

    @pytest.mark.asyncio
    async def test_unsubscribe_during_publish(self):
        channel = UpdateChannel()
        received = []
        subscriptions = []

        def leave(message):
            subscriptions[1].unsubscribe()

        subscriptions.append(channel.subscribe(leave))
        subscriptions.append(channel.subscribe(received.append))
        assert await channel.publish(MESSAGE) == 2
        assert received == [MESSAGE]
        assert len(channel) == 1


class TestResolveComponent:
    def test_component_file(self, components_dir):
        path = components_dir / "hero" / "dark" / "index.html"
        assert resolve_component(components_dir, path) == ("hero", "dark")

    def test_nested_asset(self, components_dir):
        path = components_dir / "hero" / "dark" / "assets" / "js" / "script.js"
        assert resolve_component(str(components_dir), str(path)) == ("hero", "dark")

    def test_variation_directory(self, components_dir):
        assert resolve_component(components_dir, components_dir / "hero" / "dark") == ("hero", "dark")

    @pytest.mark.parametrize("relative", ["README.md", "hero", ".hidden/x/index.html", "node_modules/pkg/x/index.js"])
    def test_ignored(self, components_dir, relative):
        assert resolve_component(components_dir, components_dir / relative) is None

    def test_hidden_file_directory(self, components_dir):
        assert resolve_component(components_dir, components_dir / "hero" / ".cache" / "x.json") is None

    def test_outside_root(self, components_dir, tmp_path):
        assert resolve_component(components_dir, tmp_path / "other" / "hero" / "dark" / "index.html") is None

    def test_source_map(self, components_dir):
        path = components_dir / "hero" / "dark" / "assets" / "css" / "styles.css.map"
        assert resolve_component(components_dir, path) is None

    def test_compiled_css_is_ignored_when_scss_exists(self, tmp_path):
        root = tmp_path / "components"
        location = write_component(root, "card", "basic", scss=".card {}", css=".card {}")
        assert resolve_component(root, location / "assets" / "css" / "styles.css") is None
        assert resolve_component(root, location / "assets" / "scss" / "styles.scss") == ("card", "basic")

    def test_plain_css_counts(self, components_dir):
        path = components_dir / "hero" / "dark" / "assets" / "css" / "styles.css"
        assert resolve_component(components_dir, path) == ("hero", "dark")


class TestUpdateMessages:
    def test_one_message_per_component(self, components_dir):
        hero = components_dir / "hero" / "dark"
        changes = {
            (Change.modified, str(hero / "index.html")),
            (Change.modified, str(hero / "meta.json")),
            (Change.added, str(components_dir / "footer" / "simple" / "index.html")),
            (Change.deleted, str(components_dir / "notes.txt")),
        }
        messages = update_messages(components_dir, changes, display_root="components")
        assert messages == [
            {"type": "component-update", "path": "components/footer/simple"},
            {"type": "component-update", "path": "components/hero/dark"},
        ]

    def test_display_root_defaults_to_root(self, components_dir):
        changes = [(Change.modified, str(components_dir / "hero" / "dark" / "index.html"))]
        [message] = update_messages(components_dir, changes)
        assert message["path"] == (components_dir / "hero" / "dark").as_posix()

    def test_no_relevant_changes(self, components_dir):
        assert update_messages(components_dir, [(Change.modified, str(components_dir / "README.md"))]) == []


class TestWatchComponents:
    @pytest.mark.asyncio
    async def test_publishes_component_update(self, components_dir):
        channel = UpdateChannel()
        received: asyncio.Queue[dict] = asyncio.Queue()
        channel.subscribe(received.put_nowait)
        stop = asyncio.Event()
        task = asyncio.create_task(watch_components(components_dir, channel, stop_event=stop))
        try:
            await asyncio.sleep(0.5)
            (components_dir / "hero" / "dark" / "index.html").write_text("<h1>Edited</h1>", encoding="utf-8")
            message = await asyncio.wait_for(received.get(), timeout=10)
        finally:
            stop.set()
            await asyncio.wait_for(task, timeout=10)
        assert message == {"type": "component-update", "path": (components_dir / "hero" / "dark").as_posix()}

    @pytest.mark.asyncio
    async def test_stop_event_ends_watch(self, components_dir, caplog):
        stop = asyncio.Event()
        with caplog.at_level(logging.INFO, logger="vitrine.server.watcher"):
            task = asyncio.create_task(watch_components(components_dir, UpdateChannel(), stop_event=stop))
            await asyncio.sleep(0.2)
            stop.set()
            await asyncio.wait_for(task, timeout=10)
        assert "Stopped watching" in caplog.text
