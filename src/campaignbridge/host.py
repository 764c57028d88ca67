"""Host navigation registrar.

The engine never owns the admin menu.  It talks to the host through
``NavigationHost``: subscribe to the navigation-build event, add pages,
and attach a load callback that runs before a page renders.

``MenuHost`` is an in-memory host used by the CLI and the test client.
It rebuilds its page table from scratch on every ``build()``, so no
state survives from one navigation-build pass to the next::

    host = MenuHost()
    registry.init(host)
    host.build()
    html = host.dispatch("campaignbridge-settings", RequestParams.from_query_string("tab=mailchimp"))
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from campaignbridge.errors import AccessDeniedError, PageNotFoundError
from campaignbridge.http.params import RequestParams

logger = logging.getLogger("campaignbridge.screens")

type Writer = Callable[[str], object]
type RenderCallback = Callable[[RequestParams, Writer], None]
type LoadCallback = Callable[[RequestParams], None]
type BuildCallback = Callable[[], None]


@runtime_checkable
class NavigationHost(Protocol):
    """What the engine needs from the host's navigation system."""

    def on_build(self, callback: BuildCallback) -> None: ...

    def add_page(
        self,
        parent_slug: str,
        page_title: str,
        menu_title: str,
        capability: Any,
        menu_slug: str,
        render: RenderCallback,
        position: int | None = None,
    ) -> str: ...

    def on_load(self, handle: str, callback: LoadCallback) -> None: ...


@dataclass(frozen=True, slots=True)
class MenuPage:
    """One submenu page registered with ``MenuHost``."""

    parent_slug: str
    page_title: str
    menu_title: str
    capability: Any
    slug: str
    render: RenderCallback
    position: int | None = None


class MenuHost:
    """In-memory navigation host.

    Args:
        access: Capability check applied on ``dispatch``.  Defaults to
            allowing every capability.
    """

    __slots__ = ("_access", "_build_callbacks", "_load_callbacks", "_pages")

    def __init__(self, *, access: Callable[[Any], bool] | None = None) -> None:
        self._access = access
        self._build_callbacks: list[BuildCallback] = []
        self._pages: dict[str, MenuPage] = {}
        self._load_callbacks: dict[str, list[LoadCallback]] = {}

    # -- Registrar --

    def on_build(self, callback: BuildCallback) -> None:
        self._build_callbacks.append(callback)

    def add_page(
        self,
        parent_slug: str,
        page_title: str,
        menu_title: str,
        capability: Any,
        menu_slug: str,
        render: RenderCallback,
        position: int | None = None,
    ) -> str:
        if menu_slug in self._pages:
            logger.warning("Page %r registered twice; replacing the earlier page", menu_slug)
            self._load_callbacks.pop(menu_slug, None)
        self._pages[menu_slug] = MenuPage(
            parent_slug=parent_slug,
            page_title=page_title,
            menu_title=menu_title,
            capability=capability,
            slug=menu_slug,
            render=render,
            position=position,
        )
        return menu_slug

    def on_load(self, handle: str, callback: LoadCallback) -> None:
        if handle not in self._pages:
            raise PageNotFoundError(handle)
        self._load_callbacks.setdefault(handle, []).append(callback)

    # -- Lifecycle --

    def build(self) -> None:
        """Run a navigation-build pass, replacing every page."""
        self._pages.clear()
        self._load_callbacks.clear()
        for callback in self._build_callbacks:
            callback()

    @property
    def pages(self) -> list[MenuPage]:
        """Registered pages, by ``position`` then registration order."""
        ordered = sorted(
            enumerate(self._pages.values()),
            key=lambda item: (item[1].position is None, item[1].position or 0, item[0]),
        )
        return [page for _, page in ordered]

    def page(self, slug: str) -> MenuPage:
        try:
            return self._pages[slug]
        except KeyError:
            raise PageNotFoundError(slug) from None

    def __contains__(self, slug: object) -> bool:
        return slug in self._pages

    def dispatch(self, slug: str, params: RequestParams | None = None) -> str:
        """Serve one page view: load callbacks, then render.

        Raises:
            PageNotFoundError: No page is registered under *slug*.
            AccessDeniedError: The access check rejects the page's capability.
        """
        page = self.page(slug)
        if self._access is not None and not self._access(page.capability):
            raise AccessDeniedError(slug, page.capability)

        params = params or RequestParams.empty()
        for callback in self._load_callbacks.get(slug, ()):
            callback(params)

        buffer = io.StringIO()
        page.render(params, buffer.write)
        return buffer.getvalue()
