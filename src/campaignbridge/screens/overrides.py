"""Override configuration — optional per-screen and per-tab settings.

Every screen gets its configuration from three layers, later winning::

    built-in defaults  <  derived from the name  <  override source

The override source is optional.  When absent the screen runs entirely
on derived values.  Recognized keys:

    menu_title, page_title, capability, position, description,
    controller, assets, slug, data, tabs

Tab overrides additionally accept ``label`` (the tab title) and ``order``.
A composite screen may configure its tabs inline under ``tabs``::

    CONFIG = {
        "menu_title": "CB Settings",
        "tabs": {"mailchimp": {"label": "Mailchimp", "order": 5}},
    }
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from campaignbridge.errors import ConfigurationError, ViewNotFoundError
from campaignbridge.screens.namespace import load_module

logger = logging.getLogger("campaignbridge.screens")

RECOGNIZED_KEYS: frozenset[str] = frozenset({
    "menu_title",
    "page_title",
    "capability",
    "position",
    "description",
    "controller",
    "assets",
    "slug",
    "data",
    "tabs",
    "label",
    "order",
})


@runtime_checkable
class OverrideLoader(Protocol):
    """Look up the override configuration for a screen or tab."""

    def load(self, name: str, parent: str | None = None) -> Mapping[str, Any] | None:
        """Return the override map for *name* (a tab when *parent* is set)."""
        ...


class NullOverrideLoader:
    """No overrides anywhere; everything falls back to derived values."""

    __slots__ = ()

    def load(self, name: str, parent: str | None = None) -> Mapping[str, Any] | None:
        return None


class MappingOverrideLoader:
    """Overrides held in memory, keyed ``"screen"`` or ``"screen/tab"``."""

    __slots__ = ("_overrides",)

    def __init__(self, overrides: Mapping[str, Mapping[str, Any]]) -> None:
        self._overrides = overrides

    def load(self, name: str, parent: str | None = None) -> Mapping[str, Any] | None:
        key = f"{parent}/{name}" if parent else name
        return self._overrides.get(key)


class ModuleOverrideLoader:
    """Overrides read from reserved-prefix Python files next to the views.

    - Composite screen ``settings/``: ``settings/_config.py``
    - Single screen ``dashboard.py``: ``_dashboard.py``
    - Tab ``settings/general.py``: ``settings/_general.py``

    Each file exposes either a ``CONFIG`` mapping or a ``config()``
    function returning one.
    """

    __slots__ = ("_config_entry", "_root")

    def __init__(self, root: str | Path, config_entry: str = "_config") -> None:
        self._root = Path(root).resolve()
        self._config_entry = config_entry

    def load(self, name: str, parent: str | None = None) -> Mapping[str, Any] | None:
        if parent:
            source = self._root / parent / f"_{name}.py"
        elif (self._root / name).is_dir():
            source = self._root / name / f"{self._config_entry}.py"
        else:
            source = self._root / f"_{name}.py"

        if not source.is_file():
            return None
        return _read_override_module(source, screen=f"{parent}/{name}" if parent else name)


def _read_override_module(source: Path, *, screen: str) -> Mapping[str, Any]:
    try:
        module = load_module(source, prefix="_override")
    except ViewNotFoundError as exc:
        raise ConfigurationError(str(exc), screen=screen) from exc
    except Exception as exc:
        msg = f"Override file {source.name} for {screen!r} failed to load: {exc}"
        raise ConfigurationError(msg, screen=screen) from exc

    value: Any = getattr(module, "CONFIG", None)
    if value is None:
        factory = getattr(module, "config", None)
        try:
            value = factory() if callable(factory) else {}
        except Exception as exc:
            msg = f"config() in {source.name} for {screen!r} raised: {exc}"
            raise ConfigurationError(msg, screen=screen) from exc

    if not isinstance(value, Mapping):
        msg = f"Override file {source.name} must provide a mapping, got {type(value).__name__}"
        raise ConfigurationError(msg, screen=screen)

    unknown = set(value) - RECOGNIZED_KEYS
    if unknown:
        logger.debug("Unrecognized override keys for %s: %s", screen, ", ".join(sorted(unknown)))
    return value


def merge_configuration(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge configuration layers left to right; later layers win.

    ``None`` layers (an absent override source) are skipped.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged
