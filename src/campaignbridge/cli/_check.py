"""``campaignbridge check`` — discovery diagnostics.

Runs discovery and tab discovery over a screens directory, printing
every diagnostic.  Exits with code 1 if any error is found.
"""

import argparse

from campaignbridge.cli._load import load_registry
from campaignbridge.errors import ConfigurationError


def run_check(args: argparse.Namespace) -> None:
    """Validate a screens directory.

    Besides the registry's own diagnostics, every composite screen must
    resolve at least one tab and its tab configuration must load.
    """
    registry = load_registry(args)
    screens = registry.discover()

    problems = [str(d) for d in registry.diagnostics]
    errors = registry.has_errors
    for definition in screens:
        if not definition.is_composite:
            continue
        try:
            tabs = registry.dispatcher.tabs(definition)
        except ConfigurationError as exc:
            problems.append(f"error: configuration [{definition.name}]: {exc}")
            errors = True
            continue
        if not tabs:
            problems.append(f"error: discovery [{definition.name}]: composite screen has no tabs")
            errors = True

    for line in problems:
        print(line)
    tally = f"{len(screens)} screen(s), {len(problems)} issue(s)"
    if errors:
        print(f"FAILED: {tally}")
        raise SystemExit(1)
    print(f"OK: {tally}")
