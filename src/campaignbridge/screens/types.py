"""Data models for convention-based admin screens.

Frozen dataclasses representing namespace entries, view handles, and the
screen/tab definitions built during a navigation-build pass.  Definitions
are rebuilt from scratch on every pass; nothing here outlives a request.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from campaignbridge.screens.context import ScreenContext
    from campaignbridge.screens.controllers import ControllerBinding

type View = Callable[[ScreenContext], str | None]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class ScreenKind(Enum):
    """Whether a screen is one view or a strip of tabs."""

    SINGLE = "single"
    COMPOSITE = "composite"


@dataclass(frozen=True, slots=True)
class ViewHandle:
    """Reference to the renderable unit behind a screen or tab.

    Exactly one of the three sources is set:

    - ``module``: a ``.py`` file exposing ``render(screen)``; loaded on
      first render, not during discovery.
    - ``template``: a kida template name relative to the screens root.
    - ``func``: a view callable from a declarative table.
    """

    name: str
    module: Path | None = None
    template: str | None = None
    func: View | None = None

    @property
    def location(self) -> str:
        """Human-readable origin for error messages and the CLI."""
        if self.module is not None:
            return str(self.module)
        if self.template is not None:
            return self.template
        return getattr(self.func, "__qualname__", self.name)


@dataclass(frozen=True, slots=True)
class NamespaceEntry:
    """One ``{name, is_container}`` item from a namespace listing.

    Attributes:
        name: Raw identifier (file stem or directory name).
        is_container: ``True`` for composite candidates (directories or
            nested tables), ``False`` for leaf views.
        view: Handle for leaf entries; ``None`` for containers.
    """

    name: str
    is_container: bool
    view: ViewHandle | None = None


@dataclass(frozen=True, slots=True)
class TabDefinition:
    """A discovered tab inside a composite screen.

    Attributes:
        name: Raw identifier within the parent namespace.
        slug: Value carried by the ``tab`` request parameter.
        title: Label shown in the navigation strip.
        view: The tab's renderable unit.
        order: Sort key; equal orders keep enumeration order.
        capability: Access token, or ``False`` to hide the tab.
        description: Tooltip for the navigation strip.
        controller: Explicit tab controller reference (class or name).
        configuration: The merged per-tab configuration.
    """

    name: str
    slug: str
    title: str
    view: ViewHandle
    order: int = 10
    capability: str | bool | None = None
    description: str = ""
    controller: Any = None
    configuration: Mapping[str, Any] = field(default=_EMPTY)


@dataclass(frozen=True, slots=True)
class ScreenDefinition:
    """A screen resolved during a navigation-build pass.

    Immutable for the pass that built it.  The bound controller is the
    only mutable collaborator it references (its data is refreshed after
    request handling).
    """

    name: str
    kind: ScreenKind
    slug: str
    title: str
    configuration: Mapping[str, Any] = field(default=_EMPTY)
    controller: ControllerBinding | None = None
    view: ViewHandle | None = None

    @property
    def page_title(self) -> str:
        return str(self.configuration.get("page_title") or self.title)

    @property
    def menu_title(self) -> str:
        return self.title

    @property
    def capability(self) -> Any:
        return self.configuration.get("capability")

    @property
    def position(self) -> int | None:
        return self.configuration.get("position")

    @property
    def description(self) -> str:
        return str(self.configuration.get("description") or "")

    @property
    def is_composite(self) -> bool:
        return self.kind is ScreenKind.COMPOSITE
