"""Tests for HelperRegistry copy-on-write semantics and registration rules."""

from __future__ import annotations

import threading

import pytest

from vitrine import DEFAULT_HELPERS, Environment, HelperError, HelperRegistry


class TestRegistration:
    def test_register_and_lookup(self):
        registry = HelperRegistry()
        registry.register("shout", str.upper)
        assert "shout" in registry
        assert registry["shout"] is str.upper
        assert registry.names() == ["shout"]

    def test_item_assignment(self):
        registry = HelperRegistry()
        registry["shout"] = str.upper
        assert registry.get("shout") is str.upper

    def test_update(self):
        registry = HelperRegistry()
        registry.update({"a": str.upper, "b": str.lower})
        assert len(registry) == 2

    def test_unregister(self):
        registry = HelperRegistry({"a": str.upper})
        registry.unregister("a")
        assert "a" not in registry

    @pytest.mark.parametrize("name", ["", None, 3])
    def test_invalid_name(self, name):
        with pytest.raises(ValueError):
            HelperRegistry().register(name, str.upper)

    def test_not_callable(self):
        with pytest.raises(TypeError):
            HelperRegistry().register("x", "not callable")
        with pytest.raises(TypeError):
            HelperRegistry().update({"x": 1})

    def test_version_increments(self):
        registry = HelperRegistry()
        assert registry.version == 0
        registry.register("a", str.upper)
        registry.update({"b": str.lower})
        registry.unregister("a")
        assert registry.version == 3


class TestCopyOnWrite:
    def test_snapshot_is_stable(self):
        registry = HelperRegistry({"a": str.upper})
        snapshot = registry.snapshot()
        registry.register("b", str.lower)
        assert "b" not in snapshot
        with pytest.raises(TypeError):
            snapshot["c"] = str.title  # type: ignore[index]

    def test_copy_is_isolated(self):
        registry = HelperRegistry({"a": str.upper})
        fork = registry.copy()
        fork.register("b", str.lower)
        assert "b" not in registry

    def test_environments_do_not_share_by_default(self):
        first, second = Environment(), Environment()
        first.register_helper("only_first", lambda: "x")
        assert "only_first" not in second.helpers
        assert set(second.helpers) == set(DEFAULT_HELPERS)

    def test_shared_registry(self):
        registry = HelperRegistry(DEFAULT_HELPERS)
        first, second = Environment(helpers=registry), Environment(helpers=registry)
        first.register_helper("shared", lambda: "x")
        assert "shared" in second.helpers


class TestLastWriteWins:
    def test_reregistration_affects_new_compilations_only(self, env):
        env.register_helper("greet", lambda name: f"Hello {name}")
        before = env.compile("{{greet who}}")
        assert before({"who": "Ada"}) == "Hello Ada"

        env.register_helper("greet", lambda name: f"Hi {name}")
        after = env.compile("{{greet who}}")
        assert after({"who": "Ada"}) == "Hi Ada"
        assert before({"who": "Ada"}) == "Hello Ada"

    def test_override_builtin(self, env):
        env.register_helper("uppercase", lambda value: f"<{value}>")
        assert env.compile("{{{uppercase x}}}")({"x": "a"}) == "<a>"

    def test_partials_recompile_after_helper_change(self, env):
        env.register_partial("p", "{{tag x}}")
        env.register_helper("tag", lambda value: f"1:{value}")
        render = env.compile("{{> p}}")
        assert render({"x": "a"}) == "1:a"
        env.register_helper("tag", lambda value: f"2:{value}")
        assert render({"x": "a"}) == "2:a"


class TestRegistrationDuringRender:
    def test_register_inside_helper_is_refused(self, env):
        def sneaky():
            env.register_helper("late", lambda: "x")
            return ""

        env.register_helper("sneaky", sneaky)
        with pytest.raises(HelperError) as exc_info:
            env.compile("{{sneaky}}")()
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "late" not in env.helpers

    def test_register_after_render_is_allowed(self, env):
        env.compile("{{x}}")({"x": 1})
        env.register_helper("late", lambda: "x")
        assert "late" in env.helpers

    def test_render_in_other_thread_does_not_block_registration(self, env):
        started = threading.Event()
        release = threading.Event()

        def wait():
            started.set()
            release.wait(5)
            return "done"

        env.register_helper("wait", wait)
        render = env.compile("{{wait}}")
        results = []
        worker = threading.Thread(target=lambda: results.append(render()))
        worker.start()
        assert started.wait(5)
        env.register_helper("other", lambda: "x")
        release.set()
        worker.join(5)
        assert results == ["done"]
