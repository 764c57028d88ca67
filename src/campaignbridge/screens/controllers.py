"""Controller binding — optional business logic attached to a screen.

Controllers are found by naming convention::

    dashboard.py   -> campaignbridge.controllers.Dashboard_Controller
    settings/      -> campaignbridge.controllers.Settings_Controller
    post_types/    -> campaignbridge.controllers.Post_Types_Controller

or named explicitly by the ``controller`` override key.  A controller is
constructed with no arguments; it pulls what it needs from process-wide
accessors such as ``campaignbridge.options.get_options()``.

Two optional methods make up the controller interface::

    class Settings_Controller:
        def preload(self) -> dict:              # data for the views
            ...
        def handle_request(self, params):       # form submissions
            ...

Lookup goes through an explicit ``ControllerRegistry`` first (populated
with ``@register_controller``), then falls back to importing the
namespace module and reading the attribute.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from campaignbridge.errors import ConfigurationError
from campaignbridge.notices import Notice, coerce_notices
from campaignbridge.screens.naming import qualified_controller_name

if TYPE_CHECKING:
    from campaignbridge.http.params import RequestParams

logger = logging.getLogger("campaignbridge.screens")


@runtime_checkable
class Controller(Protocol):
    """Structural interface for screen controllers (both methods optional)."""

    def preload(self) -> Mapping[str, Any]: ...


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ControllerRegistry:
    """Name to factory map consulted before module attribute lookup.

    Keys are fully-qualified controller names, e.g.
    ``"campaignbridge.controllers.Settings_Controller"``.
    """

    __slots__ = ("_factories",)

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], Any]] = {}

    def register(self, name: str, factory: Callable[[], Any]) -> None:
        if name in self._factories and self._factories[name] is not factory:
            logger.warning("Controller %s registered twice; keeping the later one", name)
        self._factories[name] = factory

    def get(self, name: str) -> Callable[[], Any] | None:
        return self._factories.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


default_registry = ControllerRegistry()
"""Process-wide registry used by ``@register_controller`` by default."""


def register_controller(
    cls: type | None = None,
    *,
    name: str | None = None,
    registry: ControllerRegistry | None = None,
) -> Any:
    """Class decorator registering a controller under its qualified name.

    Usage::

        @register_controller
        class Dashboard_Controller: ...

        @register_controller(name="myplugin.controllers.Reports_Controller")
        class ReportsController: ...
    """
    target = registry if registry is not None else default_registry

    def decorate(klass: type) -> type:
        target.register(name or f"{klass.__module__}.{klass.__qualname__}", klass)
        return klass

    if cls is not None:
        return decorate(cls)
    return decorate


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------


class ControllerBinding:
    """A controller instance plus the data it exposes to views.

    ``data`` is filled by ``preload()`` at construction and refreshed
    after every ``handle_request()`` so a submission's writes are visible
    to the render that follows in the same request.
    """

    __slots__ = ("_data", "_instance", "_pending")

    def __init__(self, instance: Any) -> None:
        self._instance = instance
        self._data: dict[str, Any] = {}
        self._pending: list[Notice] = []
        self._data = self._preload()

    @property
    def instance(self) -> Any:
        return self._instance

    @property
    def type_name(self) -> str:
        cls = type(self._instance)
        return f"{cls.__module__}.{cls.__qualname__}"

    @property
    def data(self) -> Mapping[str, Any]:
        """Read-only view of the preloaded data."""
        return MappingProxyType(self._data)

    @property
    def handles_requests(self) -> bool:
        return callable(getattr(self._instance, "handle_request", None))

    def _preload(self) -> dict[str, Any]:
        preload = getattr(self._instance, "preload", None)
        if not callable(preload):
            return {}
        result = preload()
        return dict(result) if result else {}

    def refresh(self) -> None:
        """Re-run ``preload()``; keep the previous data if it fails."""
        try:
            self._data = self._preload()
        except Exception as exc:
            logger.exception("Reloading data for %s failed", self.type_name)
            self._pending.append(Notice.error(f"Could not reload screen data: {exc}"))

    def handle_request(self, params: RequestParams) -> None:
        """Forward a submission to the controller, then refresh its data.

        Exceptions never escape: they are logged and turned into an
        error notice for the render that follows.
        """
        handler = getattr(self._instance, "handle_request", None)
        if not callable(handler):
            return

        try:
            result = handler(params)
        except Exception as exc:
            logger.exception("%s.handle_request failed", self.type_name)
            self._pending.append(Notice.error(f"The request could not be processed: {exc}"))
        else:
            self._pending.extend(coerce_notices(result))
        self.refresh()

    def drain_notices(self) -> list[Notice]:
        """Return and clear notices produced during request handling."""
        pending, self._pending = self._pending, []
        return pending

    def __repr__(self) -> str:
        return f"<ControllerBinding {self.type_name}>"


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class ControllerResolver:
    """Locate and instantiate controllers by convention or explicit reference."""

    __slots__ = ("_namespace", "_registry")

    def __init__(
        self,
        namespace: str = "campaignbridge.controllers",
        registry: ControllerRegistry | None = None,
    ) -> None:
        self._namespace = namespace
        self._registry = registry if registry is not None else default_registry

    @property
    def namespace(self) -> str:
        return self._namespace

    def expected_name(self, name: str) -> str:
        """Fully-qualified convention-derived controller name for *name*."""
        return qualified_controller_name(name, self._namespace)

    def find(self, name: str) -> Callable[[], Any] | None:
        """Return the convention-matched controller factory, if any.

        Raises:
            ConfigurationError: If the namespace module exists but fails
                to import.
        """
        return self._lookup(self.expected_name(name), screen=name)

    def resolve(self, name: str, override: Any = None) -> ControllerBinding | None:
        """Bind the controller for screen *name*.

        Returns ``None`` when no override is given and no controller
        matches the convention.

        Raises:
            ConfigurationError: If an explicit override does not resolve
                to an instantiable type, or if construction (including
                the initial ``preload()``) raises.
        """
        if override:
            factory = self._explicit(override, screen=name)
        else:
            factory = self.find(name)
            if factory is None:
                logger.debug("No controller %s for screen %r", self.expected_name(name), name)
                return None
        return self.bind(factory, screen=name)

    def instantiate(self, reference: Any, *, screen: str) -> ControllerBinding:
        """Bind an explicit controller reference (used for tab controllers)."""
        return self.bind(self._explicit(reference, screen=screen), screen=screen)

    def bind(self, factory: Callable[[], Any], *, screen: str) -> ControllerBinding:
        label = getattr(factory, "__qualname__", repr(factory))
        try:
            return ControllerBinding(factory())
        except Exception as exc:
            msg = f"Controller {label} for {screen!r} failed during construction: {exc}"
            raise ConfigurationError(msg, screen=screen) from exc

    def _explicit(self, reference: Any, *, screen: str) -> Callable[[], Any]:
        if isinstance(reference, str):
            qualified = reference if "." in reference else f"{self._namespace}.{reference}"
            factory = self._lookup(qualified, screen=screen)
            if factory is None:
                msg = f"Controller {qualified} for {screen!r} does not exist"
                raise ConfigurationError(msg, screen=screen)
        else:
            factory = reference

        if not callable(factory) or (inspect.isclass(factory) and inspect.isabstract(factory)):
            msg = f"Controller {reference!r} for {screen!r} is not instantiable"
            raise ConfigurationError(msg, screen=screen)
        return factory

    def _lookup(self, qualified: str, *, screen: str) -> Callable[[], Any] | None:
        factory = self._registry.get(qualified)
        if factory is not None:
            return factory

        module_path, _, attr_name = qualified.rpartition(".")
        if not module_path:
            return None
        try:
            module = importlib.import_module(module_path)
        except Exception as exc:
            if isinstance(exc, ModuleNotFoundError) and _is_missing(exc, module_path):
                return None
            msg = f"Controller module {module_path} for {screen!r} failed to import: {exc}"
            raise ConfigurationError(msg, screen=screen) from exc
        return getattr(module, attr_name, None)


def _is_missing(exc: ModuleNotFoundError, module_path: str) -> bool:
    """Whether *exc* reports *module_path* itself (or a parent) as absent."""
    missing = exc.name or ""
    return bool(missing) and (module_path == missing or module_path.startswith(f"{missing}."))
