"""CampaignBridge CLI — inspect, validate, and render screen directories.

Entry point registered as ``campaignbridge`` in ``pyproject.toml``::

    [project.scripts]
    campaignbridge = "campaignbridge.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``campaignbridge`` command."""
    parser = argparse.ArgumentParser(
        prog="campaignbridge",
        description="CampaignBridge — convention-based admin screens.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log discovery details (-v info, -vv debug)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- campaignbridge screens -------------------------------------------
    screens_parser = subparsers.add_parser("screens", help="List discovered screens")
    screens_parser.add_argument("directory", help="Screens directory")
    _add_common(screens_parser)

    # -- campaignbridge check ---------------------------------------------
    check_parser = subparsers.add_parser("check", help="Report discovery diagnostics")
    check_parser.add_argument("directory", help="Screens directory")
    _add_common(check_parser)

    # -- campaignbridge render --------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render one screen to stdout")
    render_parser.add_argument("directory", help="Screens directory")
    render_parser.add_argument("slug", help="Screen slug (e.g. settings)")
    render_parser.add_argument("--tab", default=None, help="Tab slug to activate")
    render_parser.add_argument(
        "--post",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Submit a form field (repeatable)",
    )
    render_parser.add_argument(
        "--secret-key",
        default="",
        help="Enable nonce helpers with this secret",
    )
    _add_common(render_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "screens":
        from campaignbridge.cli._screens import run_screens

        run_screens(args)
    elif args.command == "check":
        from campaignbridge.cli._check import run_check

        run_check(args)
    elif args.command == "render":
        from campaignbridge.cli._render import run_render

        run_render(args)


def _add_common(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--parent",
        default="campaignbridge",
        help="Parent menu slug (default: campaignbridge)",
    )
    subparser.add_argument(
        "--controllers",
        default="campaignbridge.controllers",
        help="Module searched for convention-named controllers",
    )
