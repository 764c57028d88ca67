"""Kida environment setup for screen chrome and template views.

Creates a kida Environment from AdminConfig.  The environment is built
once per registry and shared by every render: it loads template views
from the screens directory and the engine's own chrome templates
(``campaignbridge/*.html``) from this package.
"""

from pathlib import Path
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from campaignbridge.config import AdminConfig


def create_environment(
    config: AdminConfig,
    *,
    screens_dir: str | Path | None = None,
) -> Environment:
    """Create a kida Environment for *config*.

    Args:
        config: Admin configuration (autoescape, debug).
        screens_dir: Directory holding ``.html`` views.  ``None`` (or a
            missing directory) leaves only the chrome templates.
    """
    loaders = []
    if screens_dir is not None and Path(screens_dir).is_dir():
        loaders.append(FileSystemLoader(str(screens_dir)))
    loaders.append(PackageLoader("campaignbridge.templating", "templates"))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )


def render_template(env: Environment, name: str, context: dict[str, Any]) -> str:
    """Render template *name* to a string."""
    return env.get_template(name).render(context)


__all__ = ["create_environment", "render_template"]
