"""Tab discovery for composite screens.

Tabs are the leaf entries directly inside a composite screen's namespace
(nested containers are ignored).  Reserved-prefix entries such as
``_config`` never become tabs.  Order is the namespace's enumeration
order, then a stable sort on each tab's ``order`` (default 10), so tabs
without an explicit order keep their lexical position.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from campaignbridge.screens.namespace import NamespaceProvider
from campaignbridge.screens.naming import resolve_identity
from campaignbridge.screens.overrides import OverrideLoader, merge_configuration
from campaignbridge.screens.types import TabDefinition

logger = logging.getLogger("campaignbridge.screens")


def is_reserved(name: str, reserved_prefixes: tuple[str, ...]) -> bool:
    """Whether *name* is hidden from discovery (override files, dotfiles)."""
    return not name or name.startswith(reserved_prefixes)


def discover_tabs(
    namespace: NamespaceProvider,
    composite: str,
    *,
    overrides: OverrideLoader | None = None,
    screen_config: Mapping[str, Any] | None = None,
    reserved_prefixes: tuple[str, ...] = ("_", "."),
    default_order: int = 10,
) -> list[TabDefinition]:
    """Return the ordered tabs of composite screen *composite*.

    Args:
        namespace: Provider to enumerate.
        composite: Raw identifier of the composite screen.
        overrides: Per-tab override source (``settings/_general.py``).
        screen_config: The composite's merged configuration; its ``tabs``
            map configures tabs inline and its ``capability`` is the
            default for every tab.
        reserved_prefixes: Prefixes that exclude an entry.
        default_order: ``order`` for tabs that do not set one.
    """
    screen_config = screen_config or {}
    inline: Mapping[str, Any] = screen_config.get("tabs") or {}

    tabs: list[TabDefinition] = []
    for entry in namespace.entries(composite):
        if entry.is_container:
            logger.debug("Skipping nested container %s/%s", composite, entry.name)
            continue
        if is_reserved(entry.name, reserved_prefixes) or entry.view is None:
            continue

        identity = resolve_identity(entry.name)
        defaults = {
            "capability": screen_config.get("capability"),
            "order": default_order,
            "description": "",
            "controller": None,
        }
        derived = {"label": identity.title, "slug": identity.slug}
        loaded = overrides.load(entry.name, composite) if overrides is not None else None
        config = merge_configuration(defaults, derived, inline.get(entry.name), loaded)

        tabs.append(
            TabDefinition(
                name=entry.name,
                slug=str(config["slug"]),
                title=str(config["label"]),
                view=entry.view,
                order=_as_order(config.get("order"), default_order),
                capability=config.get("capability"),
                description=str(config.get("description") or ""),
                controller=config.get("controller"),
                configuration=config,
            )
        )

    # sorted() is stable: equal orders keep enumeration order
    return sorted(tabs, key=lambda tab: tab.order)


def _as_order(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
