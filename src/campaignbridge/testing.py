"""Test client for campaignbridge screens.

Drives a ScreenRegistry through the same MenuHost the CLI uses.  Every
request runs a fresh navigation-build pass, so definitions, controller
bindings, and contexts never leak between requests.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

from campaignbridge.host import MenuHost
from campaignbridge.http.params import RequestParams
from campaignbridge.screens.registry import ScreenRegistry

_ACTIVE_TAB_RE = re.compile(r'class="nav-tab nav-tab-active"[^>]*>([^<]*)</a>')


# ---------------------------------------------------------------------------
# Assertion helpers
# ---------------------------------------------------------------------------


def assert_notice(html: str, message: str, *, level: str | None = None) -> None:
    """Assert the page shows a notice containing *message*."""
    css = f"notice notice-{level}" if level else "notice notice-"
    for block in html.split('<div class="')[1:]:
        if block.startswith(css) and message in block.split("</div>", 1)[0]:
            return
    raise AssertionError(
        f"No {level or 'any'} notice containing {message!r}.\nPage: {html[:500]}"
    )


def active_tab_title(html: str) -> str | None:
    """Title of the tab marked active in the navigation strip."""
    match = _ACTIVE_TAB_RE.search(html)
    return match.group(1) if match else None


class ScreenTestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Synchronous test client for admin screens.

    Usage::

        client = ScreenTestClient(registry)
        html = client.get("settings", tab="mailchimp")
        html = client.post("settings", {"from_name": "Acme"})
    """

    __slots__ = ("host", "registry")

    def __init__(
        self,
        registry: ScreenRegistry,
        *,
        access: Callable[[Any], bool] | None = None,
    ) -> None:
        self.registry = registry
        self.host = MenuHost(access=access)
        registry.init(self.host)

    def page_slug(self, slug: str) -> str:
        """Host slug for screen *slug* (``settings`` -> ``campaignbridge-settings``)."""
        parent = self.registry.config.parent_slug
        if not parent or slug.startswith(f"{parent}-"):
            return slug
        return f"{parent}-{slug}"

    def get(
        self,
        slug: str,
        *,
        tab: str | None = None,
        query: Mapping[str, str] | None = None,
        user: str = "",
    ) -> str:
        """Render *slug* for a GET request."""
        return self.request("GET", slug, tab=tab, query=query, user=user)

    def post(
        self,
        slug: str,
        form: Mapping[str, Any],
        *,
        tab: str | None = None,
        user: str = "",
    ) -> str:
        """Submit *form* to *slug* and return the page rendered afterwards."""
        return self.request("POST", slug, tab=tab, form=form, user=user)

    def request(
        self,
        method: str,
        slug: str,
        *,
        tab: str | None = None,
        query: Mapping[str, str] | None = None,
        form: Mapping[str, Any] | None = None,
        user: str = "",
    ) -> str:
        page = self.page_slug(slug)
        query_args = {self.registry.config.page_param: page, **(query or {})}
        if tab is not None:
            query_args[self.registry.config.tab_param] = tab

        self.host.build()
        params = RequestParams(method=method, query=query_args, form=form, user=user)
        return self.host.dispatch(page, params)
