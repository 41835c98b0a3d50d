"""Vitrine Environment: central configuration and template management.

The Environment owns the helper registry, registered partials and an
optional partial loader, and compiles template source into Template
objects.

Thread-Safety:
- Helper and partial registration use copy-on-write
- The partial cache is replaced, never mutated in place
- Registration while a template renders raises RuntimeError

Example:
    >>> from vitrine import Environment
    >>> env = Environment()
    >>> env.register_partial("badge", "<b>{{label}}</b>")
    >>> render = env.compile("{{> badge}} {{uppercase name}}")
    >>> render({"label": "New", "name": "card"})
    '<b>New</b> CARD'

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from vitrine.compiler import Compiler
from vitrine.environment.exceptions import TemplateNotFoundError
from vitrine.environment.helpers import DEFAULT_HELPERS
from vitrine.environment.loaders import Loader
from vitrine.environment.registry import HelperRegistry
from vitrine.lexer import tokenize
from vitrine.parser import Parser
from vitrine.render_context import get_render_context
from vitrine.template import Template


class Environment:
    """Central configuration for compiling and rendering templates.

    Args:
        loader: Fallback source for partials that are not registered by name
        helpers: Helper registry to compile against; a fresh registry holding
            the built-in helpers when omitted, so environments never share
            helpers by accident
        partials: Initial ``name → source`` partials
        max_partial_depth: Nesting limit for partials (catches self-inclusion)

    Attributes:
        helpers: The HelperRegistry templates are compiled against
    """

    def __init__(
        self,
        loader: Loader | None = None,
        helpers: HelperRegistry | None = None,
        partials: Mapping[str, str] | None = None,
        max_partial_depth: int = 50,
    ):
        self.loader = loader
        self.helpers = helpers if helpers is not None else HelperRegistry(DEFAULT_HELPERS)
        self.max_partial_depth = max_partial_depth
        self._partials: dict[str, str] = dict(partials or {})
        # name → (helpers version, compiled partial)
        self._partial_cache: dict[str, tuple[int, Template]] = {}

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Compile template source into a Template.

        Raises:
            TemplateSyntaxError: If the source does not parse
        """
        tokens = tokenize(source, name)
        node = Parser(tokens, name, source).parse()
        render_func = Compiler(self).compile(node, name)
        return Template(self, render_func, name, source)

    def compile(self, source: str, name: str | None = None) -> Callable[..., str]:
        """Compile template source into a render function ``render(data) -> str``."""
        return self.from_string(source, name).render

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def register_helper(self, name: str, func: Callable[..., Any]) -> None:
        """Register a helper; replaces any helper with the same name.

        Templates compiled before the call keep the helper they were
        compiled with.
        """
        self.helpers.register(name, func)

    # ------------------------------------------------------------------
    # Partials
    # ------------------------------------------------------------------

    def register_partial(self, name: str, source: str) -> None:
        if get_render_context() is not None:
            raise RuntimeError("Partials cannot be registered while a template is rendering")
        partials = self._partials.copy()
        partials[name] = source
        self._partials = partials
        cache = self._partial_cache.copy()
        cache.pop(name, None)
        self._partial_cache = cache

    def list_partials(self) -> list[str]:
        """Names of registered partials plus those the loader can find."""
        names = set(self._partials)
        if self.loader is not None:
            names.update(self.loader.list_templates())
        return sorted(names)

    def get_partial(self, name: str) -> Template:
        """Return the compiled partial ``name``.

        Registered partials win over the loader. Compiled partials are cached
        until a helper or a partial of the same name is registered.

        Raises:
            TemplateNotFoundError: If no registered partial or loader has ``name``
            TemplateSyntaxError: If the partial source does not parse
        """
        version = self.helpers.version
        cached = self._partial_cache.get(name)
        if cached is not None and cached[0] == version:
            return cached[1]

        source = self._partials.get(name)
        if source is None:
            if self.loader is None:
                raise TemplateNotFoundError(f"The partial '{name}' could not be found")
            source, _filename = self.loader.get_source(name)

        template = self.from_string(source, name)
        cache = self._partial_cache.copy()
        cache[name] = (version, template)
        self._partial_cache = cache
        return template

    def __repr__(self) -> str:
        return (
            f"<Environment helpers={len(self.helpers)} partials={len(self._partials)}"
            f" loader={type(self.loader).__name__ if self.loader else None}>"
        )
