"""Admin surface configuration.

One AdminConfig is built per plugin and shared by the registry and the
CLI.  Fields are read as attributes, never by string key.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class AdminConfig:
    """Admin surface configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AdminConfig(screens_dir="admin/screens", secret_key="s3cr3t")
    """

    # Screens
    screens_dir: str | Path = "screens"
    view_suffixes: tuple[str, ...] = (".py", ".html")
    reserved_prefixes: tuple[str, ...] = ("_", ".")
    config_entry: str = "_config"  # Override source inside a composite screen
    default_tab_order: int = 10

    # Host navigation
    parent_slug: str = "campaignbridge"
    default_capability: str = "manage_options"
    page_param: str = "page"
    tab_param: str = "tab"

    # Controllers
    controller_namespace: str = "campaignbridge.controllers"

    # Security
    secret_key: str = ""
    nonce_lifetime: int = 86400  # seconds
    nonce_field: str = "_cbnonce"
    nonce_action_prefix: str = "cb_"

    # Assets
    asset_base_url: str = ""
    asset_root: str | Path = "."
    asset_prefix: str = "cb-"
    global_assets: dict[str, Any] = field(default_factory=dict)
    version: str = "0.1.0"

    # Templates
    autoescape: bool = True
    debug: bool = False
