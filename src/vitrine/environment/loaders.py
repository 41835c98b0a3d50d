"""Partial loaders for Vitrine environments.

Loaders provide partial source to the Environment when a partial is not
registered by name. They implement ``get_source(name)`` returning
``(source, filename)``.

Built-in Loaders:
- ``FileSystemLoader``: Load from filesystem directories
- ``DictLoader``: Load from an in-memory dictionary (testing/embedded)

Custom Loaders:
Implement the Loader protocol:
    ```python
    class DatabaseLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            row = db.query("SELECT source FROM partials WHERE name = ?", name)
            if not row:
                raise TemplateNotFoundError(f"Partial '{name}' not found")
            return row.source, f"db://{name}"

        def list_templates(self) -> list[str]:
            return [r.name for r in db.query("SELECT name FROM partials")]
    ```

"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from vitrine.environment.exceptions import TemplateNotFoundError


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...

    def list_templates(self) -> list[str]: ...


class FileSystemLoader:
    """Load partials from filesystem directories.

    Directories are searched in order and the first match wins. A name is
    tried as written, then with ``extension`` appended, so ``{{> card}}``
    finds ``card.html``.

    Example:
            >>> loader = FileSystemLoader("partials/")
            >>> source, filename = loader.get_source("shared/badge")
            >>> print(filename)
            'partials/shared/badge.html'

    Raises:
        TemplateNotFoundError: If the partial is not found in any search path

    """

    __slots__ = ("_encoding", "_extension", "_paths")

    def __init__(
        self,
        paths: str | Path | list[str | Path],
        extension: str = ".html",
        encoding: str = "utf-8",
    ):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._extension = extension
        self._encoding = encoding

    def get_source(self, name: str) -> tuple[str, str]:
        if ".." not in Path(name).parts:
            for base in self._paths:
                for candidate in (base / name, base / f"{name}{self._extension}"):
                    if candidate.is_file():
                        return candidate.read_text(self._encoding), str(candidate)

        raise TemplateNotFoundError(
            f"Partial '{name}' not found in: {', '.join(str(p) for p in self._paths)}"
        )

    def list_templates(self) -> list[str]:
        names = set()
        for base in self._paths:
            if base.is_dir():
                for path in base.rglob(f"*{self._extension}"):
                    names.add(path.relative_to(base).with_suffix("").as_posix())
        return sorted(names)


class DictLoader:
    """Load partials from an in-memory dictionary.

    Example:
            >>> env = Environment(loader=DictLoader({"badge": "<b>{{label}}</b>"}))
            >>> env.from_string("{{> badge}}").render({"label": "New"})
            '<b>New</b>'

    Raises:
        TemplateNotFoundError: If the name is not in the mapping

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = dict(mapping)

    def get_source(self, name: str) -> tuple[str, None]:
        try:
            return self._mapping[name], None
        except KeyError:
            raise TemplateNotFoundError(f"Partial '{name}' not found") from None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)
