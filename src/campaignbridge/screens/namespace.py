"""Namespace providers — where screens and tabs are discovered from.

A namespace is a two-level tree of view definitions.  Leaves become
single screens (or tabs, one level down); containers become composite
screens.  Two providers ship with the engine:

``DirectoryNamespace`` walks a directory::

    screens/
      dashboard.py        # single screen, render(screen)
      status.html         # single screen, kida template
      _status.py          # override configuration for "status"
      settings/           # composite screen
        _config.py        # override configuration for "settings"
        general.py        # tab
        mailchimp.py      # tab

``TableNamespace`` serves the same shape from a declarative mapping,
built once at startup::

    TableNamespace({
        "dashboard": render_dashboard,
        "settings": {"general": render_general, "mailchimp": render_mc},
    })

Both list entries in a deterministic order (lexical for directories,
insertion order for tables) so that tab order is stable across requests.
Neither provider filters reserved names; that is the caller's job.
"""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

from campaignbridge.errors import ViewNotFoundError
from campaignbridge.screens.types import NamespaceEntry, View, ViewHandle

logger = logging.getLogger("campaignbridge.screens")


@runtime_checkable
class NamespaceProvider(Protocol):
    """Deterministic, side-effect-free listing of view definitions."""

    def entries(self, root: str = "") -> list[NamespaceEntry]:
        """List entries directly under *root* (``""`` is the top level)."""
        ...


class DirectoryNamespace:
    """Filesystem-backed namespace rooted at *path*.

    Files whose suffix is in *view_suffixes* are leaves; directories are
    containers.  Anything else (stylesheets, ``__pycache__`` contents,
    README files) is not part of the namespace.
    """

    __slots__ = ("_root", "_suffixes")

    def __init__(
        self,
        path: str | Path,
        view_suffixes: tuple[str, ...] = (".py", ".html"),
    ) -> None:
        self._root = Path(path).resolve()
        self._suffixes = view_suffixes

    @property
    def root(self) -> Path:
        return self._root

    def entries(self, root: str = "") -> list[NamespaceEntry]:
        directory = self._root / root if root else self._root
        if not directory.is_dir():
            logger.info("Screens directory not found: %s", directory)
            return []

        found: list[NamespaceEntry] = []
        seen: set[str] = set()
        for item in sorted(directory.iterdir()):
            if item.is_dir():
                name = item.name
                entry = NamespaceEntry(name=name, is_container=True)
            elif item.is_file() and item.suffix in self._suffixes:
                name = item.stem
                entry = NamespaceEntry(
                    name=name,
                    is_container=False,
                    view=self._handle_for(item),
                )
            else:
                continue

            # settings/ and settings.py: the first one listed wins
            if name in seen:
                logger.warning(
                    "Ignoring %s: another entry named %r exists in %s", item, name, directory
                )
                continue
            seen.add(name)
            found.append(entry)
        return found

    def _handle_for(self, file: Path) -> ViewHandle:
        if file.suffix == ".py":
            return ViewHandle(name=file.stem, module=file)
        template_name = file.relative_to(self._root).as_posix()
        return ViewHandle(name=file.stem, template=template_name)


class TableNamespace:
    """Declarative namespace built from a mapping of identifier to view.

    Values are either view callables (leaves) or nested mappings
    (containers).  Nested containers below the first level are listed but
    never rendered as tabs.
    """

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[str, Any]) -> None:
        self._table = table

    def entries(self, root: str = "") -> list[NamespaceEntry]:
        node: Any = self._table
        if root:
            for part in root.split("/"):
                if not isinstance(node, Mapping) or part not in node:
                    return []
                node = node[part]
        if not isinstance(node, Mapping):
            return []

        found: list[NamespaceEntry] = []
        for name, value in node.items():
            if isinstance(value, Mapping):
                found.append(NamespaceEntry(name=name, is_container=True))
            elif callable(value):
                found.append(
                    NamespaceEntry(
                        name=name,
                        is_container=False,
                        view=ViewHandle(name=name, func=value),
                    )
                )
        return found


def load_view(handle: ViewHandle) -> View:
    """Resolve a module-backed or callable view handle to its callable.

    Module views are loaded fresh on every call so edits show up on the
    next request, the same way the host re-reads its screen files.

    Raises:
        ViewNotFoundError: If the file is missing, cannot be loaded, or
            does not define a callable ``render``.
    """
    if handle.func is not None:
        return handle.func
    if handle.module is None:
        msg = f"View {handle.name!r} is a template, not a callable"
        raise ViewNotFoundError(msg)

    module = load_module(handle.module)
    func = getattr(module, "render", None)
    if func is None or not callable(func):
        msg = f"Screen file has no render() function: {handle.module.name}"
        raise ViewNotFoundError(msg)
    return func


def load_module(path: Path, prefix: str = "_screen") -> ModuleType:
    """Execute a Python file as an anonymous module and return it."""
    if not path.is_file():
        msg = f"Screen file not found: {path.name}"
        raise ViewNotFoundError(msg)

    module_name = f"{prefix}_{path.stem}_{id(path)}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot load screen file: {path.name}"
        raise ViewNotFoundError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
