"""Component builder: one directory in, one CompiledComponent out.

Every build captures a fresh ComponentSnapshot; nothing is cached between
builds, so two concurrent builds of the same component just do the work
twice.
"""

from __future__ import annotations

import logging
from pathlib import Path

from vitrine.components.assets import AssetCompiler
from vitrine.components.errors import CompileFailure, MetadataError, VitrineError
from vitrine.components.models import CompiledComponent
from vitrine.components.repository import ComponentRepository, load_definition
from vitrine.components.snapshot import META_FILE, TEMPLATE_FILE, ComponentSnapshot
from vitrine.config import BuildOptions
from vitrine.environment import Environment, TemplateSyntaxError
from vitrine.environment.exceptions import ErrorCode

logger = logging.getLogger(__name__)


class ComponentBuilder:
    """Build components from disk.

    Args:
        options: Build options (components root, minify, source maps)
        environment: Environment used to syntax-check templates

    Example:
        >>> builder = ComponentBuilder(BuildOptions(components_dir=Path("components")))
        >>> component = builder.build(Path("components/hero/dark"))
        >>> component.definition.display_name
        'Dark Hero'
    """

    def __init__(
        self,
        options: BuildOptions | None = None,
        environment: Environment | None = None,
    ):
        self.options = options or BuildOptions()
        self.assets = AssetCompiler(self.options)
        self.environment = environment or Environment()
        self.repository = ComponentRepository(self.options.components_dir)

    def build(self, location: str | Path) -> CompiledComponent:
        """Build the component at ``location``.

        Raises:
            CompileFailure: The descriptor or template is missing or broken,
                or the stylesheet does not compile
        """
        location = Path(location)
        snapshot = ComponentSnapshot.capture(location)

        if snapshot.meta is None:
            raise CompileFailure(
                f"{location} has no {META_FILE}", location=location, code=ErrorCode.MISSING_SOURCE
            )
        if snapshot.template is None:
            raise CompileFailure(
                f"{location} has no {TEMPLATE_FILE}", location=location, code=ErrorCode.MISSING_SOURCE
            )

        try:
            definition = load_definition(location, snapshot.meta)
        except MetadataError as e:
            raise CompileFailure(e.message, location=location, code=ErrorCode.DISCOVERY) from e

        try:
            self.environment.from_string(snapshot.template, name=f"{definition.type}/{definition.variation}")
        except TemplateSyntaxError as e:
            raise CompileFailure(
                f"Template for {definition.type}/{definition.variation} does not compile: {e.message}",
                location=location,
                code=ErrorCode.TEMPLATE_COMPILE,
            ) from e

        styles = self.assets.compile_styles(snapshot)
        script = self.assets.compile_script(snapshot)
        manifest = self.assets.collect_assets(snapshot)
        if snapshot.scss is not None:
            manifest = manifest.including_css("css/styles.css")

        logger.debug("Built %s/%s from %s", definition.type, definition.variation, location)
        return CompiledComponent(
            definition=definition,
            template_source=snapshot.template,
            styles=styles,
            script=script,
            assets=manifest,
            location=location,
        )

    def build_all(self) -> list[CompiledComponent]:
        """Build every discovered component; failures are logged and skipped."""
        components = []
        for location in self.repository.discover():
            try:
                components.append(self.build(location))
            except VitrineError as e:
                logger.error("Failed to build component at %s:\n%s", location, e.format_compact())
        return components
