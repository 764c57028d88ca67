"""Shared fixtures: screen directory builder and an isolated option store."""

from collections.abc import Callable, Iterator
from pathlib import Path
from textwrap import dedent

import pytest

from campaignbridge.options import OptionStore, options_var, use_options

type ScreensFactory = Callable[[dict[str, str]], Path]


@pytest.fixture
def make_screens(tmp_path: Path) -> ScreensFactory:
    """Write ``{relative path: source}`` under a fresh screens directory.

    A path ending in ``/`` creates an empty directory.
    """

    def build(files: dict[str, str]) -> Path:
        root = tmp_path / "screens"
        root.mkdir(exist_ok=True)
        for relative, source in files.items():
            target = root / relative
            if relative.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(dedent(source))
        return root

    return build


@pytest.fixture(autouse=True)
def options() -> Iterator[OptionStore]:
    """Fresh option store per test."""
    store = OptionStore()
    token = use_options(store)
    yield store
    options_var.reset(token)
