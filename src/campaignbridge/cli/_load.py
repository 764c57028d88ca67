"""Build a ScreenRegistry from CLI arguments."""

import argparse
import sys
from pathlib import Path

from campaignbridge.config import AdminConfig
from campaignbridge.screens.registry import ScreenRegistry


def load_registry(args: argparse.Namespace) -> ScreenRegistry:
    """Registry over ``args.directory``; exits 1 if it is not a directory."""
    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"Error: not a directory: {directory}", file=sys.stderr)
        raise SystemExit(1)

    config = AdminConfig(
        screens_dir=directory,
        parent_slug=args.parent,
        controller_namespace=args.controllers,
        secret_key=getattr(args, "secret_key", ""),
    )
    return ScreenRegistry.from_config(config)
