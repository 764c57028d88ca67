"""Render dispatch — paints a single screen or a tab strip plus the active tab.

Output for every screen::

    <div class="wrap campaignbridge-screen">
      <h1>Page title</h1>
      <p class="description">...</p>          (optional)
      notices from request handling
      <nav class="nav-tab-wrapper">...</nav>   (composite screens)
      view output, verbatim
      notices added while rendering
    </div>

The dispatcher never templates a view's own markup; it only wraps it.
Every render gets a fresh ScreenContext, closed once the view returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from campaignbridge.config import AdminConfig
from campaignbridge.errors import CompositeEmptyError, ConfigurationError, ViewNotFoundError
from campaignbridge.notices import Notice
from campaignbridge.screens.context import ScreenContext, Writer
from campaignbridge.screens.namespace import NamespaceProvider, load_view
from campaignbridge.screens.tabs import discover_tabs
from campaignbridge.templating import render_template

if TYPE_CHECKING:
    from kida import Environment

    from campaignbridge.assets import AssetLoader
    from campaignbridge.http.params import RequestParams
    from campaignbridge.screens.controllers import ControllerBinding, ControllerResolver
    from campaignbridge.screens.overrides import OverrideLoader
    from campaignbridge.screens.types import ScreenDefinition, TabDefinition, ViewHandle
    from campaignbridge.security.nonce import NonceIssuer

logger = logging.getLogger("campaignbridge.screens")

type AccessCheck = Callable[[Any], bool]

_HEADER_TEMPLATE = "campaignbridge/screen_header.html"
_TABS_TEMPLATE = "campaignbridge/tabs.html"
_NOTICES_TEMPLATE = "campaignbridge/notices.html"


@dataclass(frozen=True, slots=True)
class NavItem:
    """One link in the tab navigation strip."""

    slug: str
    title: str
    url: str
    active: bool
    description: str = ""


def select_active_tab(tabs: Sequence[TabDefinition], requested: str | None) -> TabDefinition:
    """Pick the tab whose slug matches *requested*, else the first tab.

    Unknown slugs (a bookmark to a removed tab) fall back silently.
    """
    if requested:
        for tab in tabs:
            if tab.slug == requested:
                return tab
        logger.debug("Unknown tab %r requested; falling back to %r", requested, tabs[0].slug)
    return tabs[0]


def allow_all(capability: Any) -> bool:
    return True


class ScreenDispatcher:
    """Render ScreenDefinitions for one navigation-build pass."""

    __slots__ = (
        "_access",
        "_assets",
        "_config",
        "_controllers",
        "_env",
        "_namespace",
        "_nonces",
        "_overrides",
    )

    def __init__(
        self,
        namespace: NamespaceProvider,
        *,
        config: AdminConfig,
        env: Environment,
        controllers: ControllerResolver,
        overrides: OverrideLoader | None = None,
        assets: AssetLoader | None = None,
        nonces: NonceIssuer | None = None,
        access: AccessCheck | None = None,
    ) -> None:
        self._namespace = namespace
        self._config = config
        self._env = env
        self._controllers = controllers
        self._overrides = overrides
        self._assets = assets
        self._nonces = nonces
        self._access = access or allow_all

    def render(self, definition: ScreenDefinition, params: RequestParams, write: Writer) -> None:
        """Paint *definition* for the current request."""
        pending = definition.controller.drain_notices() if definition.controller else []
        self._write_template(
            write,
            _HEADER_TEMPLATE,
            {
                "screen_name": definition.name,
                "page_title": definition.page_title,
                "description": definition.description,
            },
        )
        self._write_notices(write, pending)
        if definition.is_composite:
            self._render_composite(definition, params, write)
        else:
            self._render_single(definition, params, write)
        write("</div>\n")

    # -- Single --

    def _render_single(
        self,
        definition: ScreenDefinition,
        params: RequestParams,
        write: Writer,
    ) -> None:
        screen = self._context(definition, None, definition.controller, params, write)
        if definition.controller is not None:
            screen.update(definition.controller.data)
        screen.update(_config_data(definition.configuration))

        if definition.view is None:
            self._write_notices(write, [Notice.error(f"Screen has no view: {definition.name}")])
        else:
            self._invoke(definition.view, screen)
        self._finish(screen, write)

    # -- Composite --

    def _render_composite(
        self,
        definition: ScreenDefinition,
        params: RequestParams,
        write: Writer,
    ) -> None:
        try:
            tabs = self._accessible_tabs(definition)
        except CompositeEmptyError as exc:
            logger.warning("%s", exc)
            self._write_notices(write, [Notice.error(str(exc))])
            return
        except ConfigurationError as exc:
            logger.error("Tab configuration for %r is invalid: %s", definition.name, exc)
            self._write_notices(write, [Notice.error(str(exc))])
            return

        active = select_active_tab(tabs, params.get(self._config.tab_param))
        page_slug = self.menu_slug(definition)
        nav = [
            NavItem(
                slug=tab.slug,
                title=tab.title,
                url=self._tab_url(page_slug, tab.slug),
                active=tab is active,
                description=tab.description,
            )
            for tab in tabs
        ]
        self._write_template(write, _TABS_TEMPLATE, {"tabs": nav})

        notices: list[Notice] = []
        tab_controller = self._tab_controller(definition, active, notices)
        screen = self._context(definition, active.name, tab_controller, params, write)
        screen.add_notices(notices)

        # Tab controller data first; the screen controller only fills gaps
        if tab_controller is not None:
            screen.update(tab_controller.data)
        if definition.controller is not None and definition.controller is not tab_controller:
            screen.update(definition.controller.data, overwrite=False)
        screen.update(_config_data(definition.configuration))
        screen.update(_config_data(active.configuration))

        write('<div class="tab-content">\n')
        self._invoke(active.view, screen)
        write("</div>\n")
        self._finish(screen, write)

    def tabs(self, definition: ScreenDefinition) -> list[TabDefinition]:
        """Every tab of composite *definition*, before access filtering."""
        return discover_tabs(
            self._namespace,
            definition.name,
            overrides=self._overrides,
            screen_config=definition.configuration,
            reserved_prefixes=self._config.reserved_prefixes,
            default_order=self._config.default_tab_order,
        )

    def _accessible_tabs(self, definition: ScreenDefinition) -> list[TabDefinition]:
        tabs = self.tabs(definition)
        visible = [tab for tab in tabs if self._can_access(tab.capability)]
        if not visible:
            raise CompositeEmptyError(definition.name)
        return visible

    def _can_access(self, capability: Any) -> bool:
        if capability is False:
            return False
        if capability is None or capability is True:
            return True
        return self._access(capability)

    def _tab_controller(
        self,
        definition: ScreenDefinition,
        tab: TabDefinition,
        notices: list[Notice],
    ) -> ControllerBinding | None:
        if not tab.controller:
            return definition.controller
        try:
            binding = self._controllers.instantiate(
                tab.controller, screen=f"{definition.name}/{tab.name}"
            )
        except ConfigurationError as exc:
            logger.error("%s", exc)
            notices.append(Notice.error(str(exc)))
            return definition.controller

        instance = binding.instance
        if hasattr(instance, "screen_controller"):
            instance.screen_controller = (
                definition.controller.instance if definition.controller else None
            )
        return binding

    # -- Shared --

    def menu_slug(self, definition: ScreenDefinition) -> str:
        """Slug the host knows this screen by (``campaignbridge-settings``)."""
        parent = self._config.parent_slug
        return f"{parent}-{definition.slug}" if parent else definition.slug

    def _tab_url(self, page_slug: str, tab_slug: str) -> str:
        return "?" + urlencode({self._config.page_param: page_slug, self._config.tab_param: tab_slug})

    def _context(
        self,
        definition: ScreenDefinition,
        active_tab: str | None,
        controller: ControllerBinding | None,
        params: RequestParams,
        write: Writer,
    ) -> ScreenContext:
        return ScreenContext(
            definition.name,
            definition.kind,
            active_tab,
            controller,
            params,
            writer=write,
            env=self._env,
            assets=self._assets,
            nonces=self._nonces,
            page_slug=self.menu_slug(definition),
            page_param=self._config.page_param,
            tab_param=self._config.tab_param,
            user=params.user,
        )

    def _invoke(self, view: ViewHandle, screen: ScreenContext) -> None:
        if view.template is not None:
            screen.render_template(view.template)
            return
        try:
            func = load_view(view)
        except ViewNotFoundError as exc:
            logger.error("%s", exc)
            screen.error(str(exc))
            return
        result = func(screen)
        if isinstance(result, str):
            screen.write(result)

    def _finish(self, screen: ScreenContext, write: Writer) -> None:
        self._write_notices(write, screen.drain_notices())
        screen.close()

    def _write_notices(self, write: Writer, notices: list[Notice]) -> None:
        if notices:
            self._write_template(write, _NOTICES_TEMPLATE, {"notices": notices})

    def _write_template(self, write: Writer, name: str, context: dict[str, Any]) -> None:
        write(render_template(self._env, name, context))


def _config_data(configuration: Mapping[str, Any]) -> Mapping[str, Any]:
    data = configuration.get("data")
    return data if isinstance(data, Mapping) else {}
