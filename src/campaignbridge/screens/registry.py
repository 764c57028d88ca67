"""Screen Registry — turns a namespace into registered admin pages.

One ``build(host)`` call is one navigation-build pass::

    namespace entries
      -> reserved-prefix filter
      -> identity (slug, title, controller name)
      -> configuration: defaults < derived < override
      -> controller binding
      -> ScreenDefinition
      -> host.add_page(...) + host.on_load(...)

Screens are independent.  A screen whose configuration cannot be
honoured is skipped with an ERROR diagnostic and its siblings still
register.  Every pass starts from an empty set of definitions and
diagnostics.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from campaignbridge.assets import AssetLoader, AssetQueue, AssetTier, enqueue_from_config
from campaignbridge.config import AdminConfig
from campaignbridge.errors import ConfigurationError
from campaignbridge.screens.controllers import ControllerRegistry, ControllerResolver
from campaignbridge.screens.diagnostics import Diagnostic, Severity
from campaignbridge.screens.dispatch import AccessCheck, ScreenDispatcher
from campaignbridge.screens.namespace import DirectoryNamespace, NamespaceProvider
from campaignbridge.screens.naming import resolve_identity
from campaignbridge.screens.overrides import (
    ModuleOverrideLoader,
    NullOverrideLoader,
    OverrideLoader,
    merge_configuration,
)
from campaignbridge.screens.tabs import is_reserved
from campaignbridge.screens.types import NamespaceEntry, ScreenDefinition, ScreenKind
from campaignbridge.security.nonce import NonceConfig, NonceIssuer, nonces_var
from campaignbridge.templating import create_environment

if TYPE_CHECKING:
    from kida import Environment

    from campaignbridge.host import NavigationHost
    from campaignbridge.http.params import RequestParams
    from campaignbridge.screens.context import Writer

logger = logging.getLogger("campaignbridge.screens")


class ScreenRegistry:
    """Discover screens and register them with a navigation host.

    Usage::

        registry = ScreenRegistry.from_config(AdminConfig(screens_dir="admin/screens"))
        registry.init(host)        # build(host) runs on every navigation build
    """

    __slots__ = (
        "_assets",
        "_config",
        "_controllers",
        "_diagnostics",
        "_dispatcher",
        "_env",
        "_namespace",
        "_nonces",
        "_overrides",
    )

    def __init__(
        self,
        namespace: NamespaceProvider,
        *,
        config: AdminConfig | None = None,
        overrides: OverrideLoader | None = None,
        controllers: ControllerResolver | None = None,
        assets: AssetLoader | None = None,
        nonces: NonceIssuer | None = None,
        environment: Environment | None = None,
        access: AccessCheck | None = None,
    ) -> None:
        self._config = config or AdminConfig()
        self._namespace = namespace
        self._overrides = overrides if overrides is not None else NullOverrideLoader()
        self._controllers = controllers or ControllerResolver(self._config.controller_namespace)
        self._assets = assets
        self._nonces = nonces
        if environment is None:
            screens_dir = namespace.root if isinstance(namespace, DirectoryNamespace) else None
            environment = create_environment(self._config, screens_dir=screens_dir)
        self._env = environment
        self._dispatcher = ScreenDispatcher(
            namespace,
            config=self._config,
            env=environment,
            controllers=self._controllers,
            overrides=self._overrides,
            assets=assets,
            nonces=nonces,
            access=access,
        )
        self._diagnostics: list[Diagnostic] = []

    @classmethod
    def from_config(
        cls,
        config: AdminConfig,
        *,
        controllers: ControllerRegistry | None = None,
        access: AccessCheck | None = None,
    ) -> ScreenRegistry:
        """Registry over ``config.screens_dir`` with file-based overrides.

        Nonces are enabled when ``config.secret_key`` is set.
        """
        namespace = DirectoryNamespace(config.screens_dir, config.view_suffixes)
        nonces = None
        if config.secret_key:
            nonces = NonceIssuer(
                NonceConfig(
                    secret_key=config.secret_key,
                    lifetime=config.nonce_lifetime,
                    field_name=config.nonce_field,
                    action_prefix=config.nonce_action_prefix,
                )
            )
        return cls(
            namespace,
            config=config,
            overrides=ModuleOverrideLoader(namespace.root, config.config_entry),
            controllers=ControllerResolver(config.controller_namespace, controllers),
            assets=AssetQueue(
                base_url=config.asset_base_url,
                root=config.asset_root,
                prefix=config.asset_prefix,
                version=config.version,
            ),
            nonces=nonces,
            access=access,
        )

    @property
    def config(self) -> AdminConfig:
        return self._config

    @property
    def assets(self) -> AssetLoader | None:
        return self._assets

    @property
    def nonces(self) -> NonceIssuer | None:
        return self._nonces

    @property
    def environment(self) -> Environment:
        return self._env

    @property
    def dispatcher(self) -> ScreenDispatcher:
        return self._dispatcher

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Issues recorded by the most recent ``discover()``."""
        return tuple(self._diagnostics)

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self._diagnostics)

    # -- Discovery --

    def discover(self, root: str = "") -> list[ScreenDefinition]:
        """Resolve every screen under *root*.

        Entries with a reserved prefix are skipped.  When two entries
        resolve to the same slug the later one wins and a warning is
        recorded.
        """
        self._diagnostics = []
        by_slug: dict[str, ScreenDefinition] = {}

        for entry in self._namespace.entries(root):
            if is_reserved(entry.name, self._config.reserved_prefixes):
                continue
            try:
                definition = self._define(entry)
            except ConfigurationError as exc:
                logger.error("Skipping screen %r: %s", entry.name, exc)
                self._record(Severity.ERROR, "configuration", str(exc), entry.name)
                continue

            previous = by_slug.pop(definition.slug, None)
            if previous is not None:
                msg = (
                    f"{entry.name!r} and {previous.name!r} both resolve to slug "
                    f"{definition.slug!r}; {entry.name!r} wins"
                )
                logger.warning("%s", msg)
                self._record(Severity.WARNING, "duplicate-slug", msg, entry.name)
            by_slug[definition.slug] = definition

        if not by_slug:
            where = f"{root}/" if root else "the screens namespace"
            logger.info("No screens found in %s", where)
            self._record(Severity.INFO, "discovery", f"No screens found in {where}")
        return list(by_slug.values())

    def _define(self, entry: NamespaceEntry) -> ScreenDefinition:
        identity = resolve_identity(entry.name)
        defaults = {
            "capability": self._config.default_capability,
            "position": None,
            "description": "",
            "assets": {},
        }
        derived = {
            "menu_title": identity.title,
            "page_title": identity.title,
            "slug": identity.slug,
        }
        override = self._overrides.load(entry.name)
        configuration = merge_configuration(defaults, derived, override)

        controller = self._controllers.resolve(entry.name, configuration.get("controller"))
        return ScreenDefinition(
            name=entry.name,
            kind=ScreenKind.COMPOSITE if entry.is_container else ScreenKind.SINGLE,
            slug=str(configuration["slug"] or identity.slug),
            title=str(configuration["menu_title"] or identity.title),
            configuration=configuration,
            controller=controller,
            view=None if entry.is_container else entry.view,
        )

    def _record(
        self, severity: Severity, category: str, message: str, screen: str | None = None
    ) -> None:
        self._diagnostics.append(Diagnostic(severity, category, message, screen))

    # -- Host registration --

    def init(self, host: NavigationHost) -> None:
        """Subscribe to the host's navigation-build event."""
        host.on_build(lambda: self.build(host))

    def build(self, host: NavigationHost) -> list[ScreenDefinition]:
        """One navigation-build pass: discover, then register."""
        if isinstance(self._assets, AssetQueue):
            self._assets.clear()
        if self._assets is not None and self._config.global_assets:
            enqueue_from_config(self._assets, self._config.global_assets, AssetTier.GLOBAL)

        screens = self.discover()
        self.register(host, screens)
        logger.debug("Registered %d screen(s)", len(screens))
        return screens

    def register(self, host: NavigationHost, screens: list[ScreenDefinition]) -> None:
        for definition in screens:
            handle = host.add_page(
                self._config.parent_slug,
                definition.page_title,
                definition.menu_title,
                definition.capability,
                self._dispatcher.menu_slug(definition),
                self._render_callback(definition),
                definition.position,
            )
            host.on_load(handle, self._load_callback(definition))

    def _render_callback(
        self, definition: ScreenDefinition
    ) -> Callable[[RequestParams, Writer], None]:
        def render(params: RequestParams, write: Writer) -> None:
            self._dispatcher.render(definition, params, write)

        return render

    def _load_callback(self, definition: ScreenDefinition) -> Callable[[RequestParams], None]:
        def on_load(params: RequestParams) -> None:
            assets: Any = definition.configuration.get("assets")
            if self._assets is not None and assets:
                enqueue_from_config(self._assets, assets, AssetTier.SCREEN)
            if definition.controller is not None and params.is_submission:
                token = nonces_var.set(self._nonces)
                try:
                    definition.controller.handle_request(params)
                finally:
                    nonces_var.reset(token)

        return on_load
