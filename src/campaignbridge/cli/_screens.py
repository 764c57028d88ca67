"""``campaignbridge screens`` — list discovered screens.

Prints one row per screen with its kind, slug, menu title, bound
controller, and tab slugs in display order.
"""

import argparse

from campaignbridge.cli._load import load_registry
from campaignbridge.errors import ConfigurationError


def run_screens(args: argparse.Namespace) -> None:
    registry = load_registry(args)
    screens = registry.discover()
    if not screens:
        print("No screens found.")
        return

    rows: list[tuple[str, str, str, str, str]] = []
    for definition in screens:
        controller = definition.controller.type_name if definition.controller else "-"
        tabs = "-"
        if definition.is_composite:
            try:
                tabs = ", ".join(tab.slug for tab in registry.dispatcher.tabs(definition)) or "(none)"
            except ConfigurationError as exc:
                tabs = f"(error: {exc})"
        rows.append((definition.kind.value, definition.slug, definition.title, controller, tabs))

    headers = ("KIND", "SLUG", "TITLE", "CONTROLLER", "TABS")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(4)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 8 + max(len(row[4]) for row in rows), 100))
    for row in rows:
        print(fmt.format(*row))

    for diagnostic in registry.diagnostics:
        print(diagnostic)
