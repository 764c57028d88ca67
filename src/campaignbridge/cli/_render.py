"""``campaignbridge render`` — render one screen to stdout.

Runs a full navigation-build pass through MenuHost and dispatches a
single page view, optionally as a form submission::

    campaignbridge render admin/screens settings --tab mailchimp --post from_name=Acme
"""

import argparse
import sys

from campaignbridge.assets import AssetQueue
from campaignbridge.cli._load import load_registry
from campaignbridge.errors import PageNotFoundError
from campaignbridge.testing import ScreenTestClient


def _parse_fields(pairs: list[str]) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            print(f"Error: --post expects KEY=VALUE, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        fields.setdefault(key, []).append(value)
    return fields


def run_render(args: argparse.Namespace) -> None:
    registry = load_registry(args)
    client = ScreenTestClient(registry)
    form = _parse_fields(args.post)

    try:
        if form:
            html = client.post(args.slug, form, tab=args.tab)
        else:
            html = client.get(args.slug, tab=args.tab)
    except PageNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    sys.stdout.write(html)
    if isinstance(registry.assets, AssetQueue):
        tags = registry.assets.render_tags()
        if tags:
            sys.stdout.write(f"\n<!-- assets -->\n{tags}\n")
