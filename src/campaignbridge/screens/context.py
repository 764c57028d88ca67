"""Screen Context — the per-render object handed to every view.

One context is built for every render call and closed when the view
returns, so nothing leaks between screens, tabs, or requests.  Views
receive it as their only argument::

    def render(screen):
        name = screen.get("from_name", "")
        screen.enqueue_style("settings", "css/settings.css")
        screen.write(f"<p>Sending as {escape(name)}</p>")

Template views (``.html``) see it as ``screen``, with the context data
spread into the template namespace as well.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from campaignbridge.assets import AssetLoader, AssetTier
from campaignbridge.http.sanitize import sanitize_value
from campaignbridge.notices import Notice, NoticeLevel
from campaignbridge.screens.types import ScreenKind

if TYPE_CHECKING:
    from kida import Environment
    from kida.utils.html import Markup

    from campaignbridge.http.params import RequestParams
    from campaignbridge.screens.controllers import ControllerBinding
    from campaignbridge.security.nonce import NonceIssuer

type Writer = Callable[[str], object]


class ScreenContext:
    """Data, request access, CSRF helpers, notices, and assets for one render."""

    __slots__ = (
        "_assets",
        "_closed",
        "_controller",
        "_data",
        "_env",
        "_nonces",
        "_notices",
        "_page_param",
        "_page_slug",
        "_params",
        "_tab_param",
        "_user",
        "_writer",
        "active_tab",
        "screen_kind",
        "screen_name",
    )

    def __init__(
        self,
        screen_name: str,
        screen_kind: ScreenKind,
        active_tab: str | None,
        controller: ControllerBinding | None,
        params: RequestParams,
        *,
        writer: Writer,
        env: Environment | None = None,
        assets: AssetLoader | None = None,
        nonces: NonceIssuer | None = None,
        page_slug: str = "",
        page_param: str = "page",
        tab_param: str = "tab",
        user: str = "",
    ) -> None:
        self.screen_name = screen_name
        self.screen_kind = screen_kind
        self.active_tab = active_tab
        self._controller = controller
        self._params = params
        self._writer = writer
        self._env = env
        self._assets = assets
        self._nonces = nonces
        self._page_slug = page_slug
        self._page_param = page_param
        self._tab_param = tab_param
        self._user = user
        self._data: dict[str, Any] = {}
        self._notices: list[Notice] = []
        self._closed = False

    # -- Data --

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._data

    def all(self) -> dict[str, Any]:
        """Copy of every value available to the view."""
        return dict(self._data)

    def update(self, values: Mapping[str, Any], *, overwrite: bool = True) -> None:
        """Merge *values*; with ``overwrite=False`` existing keys are kept."""
        for key, value in values.items():
            if overwrite or key not in self._data:
                self._data[key] = value

    @property
    def controller(self) -> Any:
        """The bound controller instance, or ``None``."""
        return self._controller.instance if self._controller is not None else None

    # -- Request --

    @property
    def params(self) -> RequestParams:
        return self._params

    def is_post(self) -> bool:
        return self._params.method == "POST"

    def param(self, key: str, default: str | None = None) -> str | None:
        """Raw request value (body first, then query string)."""
        return self._params.get(key, default)

    def post(self, key: str, default: Any = None) -> Any:
        """Sanitized body value for *key*, or *default* when absent."""
        form = self._params.form
        if key not in form:
            return default
        values = form.get_list(key)
        value: Any = values if len(values) > 1 else values[0]
        return sanitize_value(key, value)

    # -- CSRF --

    @property
    def csrf_enabled(self) -> bool:
        return self._nonces is not None

    def nonce(self, action: str) -> str:
        return self._require_nonces().create(action, self._user)

    def nonce_field(self, action: str) -> Markup:
        """Hidden input carrying the nonce for *action*."""
        return self._require_nonces().field(action, self._user)

    def verify_nonce(self, action: str) -> bool:
        """Check the submitted nonce for *action*."""
        issuer = self._require_nonces()
        return issuer.verify(self._params.form.get(issuer.field_name), action, self._user)

    def _require_nonces(self) -> NonceIssuer:
        if self._nonces is None:
            from campaignbridge.errors import NonceError

            msg = "No nonce issuer configured. Set AdminConfig(secret_key=...)."
            raise NonceError(msg)
        return self._nonces

    # -- Notices --

    def add_notice(self, message: str, level: NoticeLevel | str = NoticeLevel.INFO) -> None:
        if isinstance(level, str):
            level = NoticeLevel(level)
        self._notices.append(Notice(message, level, dismissible=level is not NoticeLevel.ERROR))

    def add_notices(self, notices: list[Notice]) -> None:
        self._notices.extend(notices)

    def success(self, message: str) -> None:
        self._notices.append(Notice.success(message))

    def warning(self, message: str) -> None:
        self._notices.append(Notice.warning(message))

    def error(self, message: str) -> None:
        self._notices.append(Notice.error(message))

    @property
    def notices(self) -> tuple[Notice, ...]:
        return tuple(self._notices)

    @property
    def errors(self) -> tuple[Notice, ...]:
        return tuple(n for n in self._notices if n.is_error)

    @property
    def has_errors(self) -> bool:
        return any(n.is_error for n in self._notices)

    def drain_notices(self) -> list[Notice]:
        notices, self._notices = self._notices, []
        return notices

    # -- Assets --

    @property
    def asset_tier(self) -> AssetTier:
        return AssetTier.TAB if self.active_tab else AssetTier.SCREEN

    def enqueue_style(
        self, handle: str, src: str, deps: tuple[str, ...] = (), version: str | None = None
    ) -> None:
        if self._assets is not None:
            self._assets.enqueue_style(handle, src, deps, version, tier=self.asset_tier)

    def enqueue_script(
        self,
        handle: str,
        src: str,
        deps: tuple[str, ...] = (),
        version: str | None = None,
        in_footer: bool = True,
    ) -> None:
        if self._assets is not None:
            self._assets.enqueue_script(
                handle, src, deps, version, in_footer, tier=self.asset_tier
            )

    def asset_enqueue_style(self, handle: str, manifest: str, deps: tuple[str, ...] = ()) -> bool:
        if self._assets is None:
            return False
        result = self._assets.enqueue_manifest(
            handle, manifest, script=False, deps=deps, tier=self.asset_tier
        )
        return result["style"]

    def asset_enqueue_script(
        self,
        handle: str,
        manifest: str,
        deps: tuple[str, ...] = (),
        in_footer: bool = True,
    ) -> bool:
        if self._assets is None:
            return False
        result = self._assets.enqueue_manifest(
            handle, manifest, style=False, deps=deps, in_footer=in_footer, tier=self.asset_tier
        )
        return result["script"]

    def asset_enqueue(self, handle: str, manifest: str) -> dict[str, bool]:
        if self._assets is None:
            return {"style": False, "script": False}
        return self._assets.enqueue_manifest(handle, manifest, tier=self.asset_tier)

    def localize_script(self, handle: str, object_name: str, data: Mapping[str, Any]) -> None:
        if self._assets is not None:
            self._assets.localize(handle, object_name, data)

    # -- Screen info --

    def screen_info(self) -> dict[str, Any]:
        return {
            "name": self.screen_name,
            "type": self.screen_kind.value,
            "current_tab": self.active_tab,
        }

    def is_tab(self, tab_name: str) -> bool:
        return self.active_tab == tab_name

    def tab_url(self, tab_slug: str) -> str:
        """Admin URL that opens *tab_slug* on this screen."""
        query = {self._page_param: self._page_slug, self._tab_param: tab_slug}
        return "?" + urlencode(query)

    # -- Output --

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, text: str) -> None:
        """Emit *text* to the page verbatim."""
        if self._closed:
            msg = f"Screen context for {self.screen_name!r} is closed; contexts are single-use"
            raise RuntimeError(msg)
        self._writer(text)

    def render_template(self, name: str, **context: Any) -> None:
        """Render a kida template and write it to the page.

        The template sees ``screen`` plus the context data, overridden
        by any keyword arguments.
        """
        if self._env is None:
            msg = "No template environment configured for this screen"
            raise RuntimeError(msg)
        template = self._env.get_template(name)
        self.write(template.render({**self._data, "screen": self, **context}))

    def close(self) -> None:
        self._closed = True

    def __repr__(self) -> str:
        tab = f" tab={self.active_tab!r}" if self.active_tab else ""
        return f"<ScreenContext {self.screen_name!r} {self.screen_kind.value}{tab}>"
