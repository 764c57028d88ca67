"""Convention-based admin screens with automatic tab composition.

The ``screens/`` directory structure defines the admin menu, tab
strips, and controller bindings.  No registration code is needed.

Usage::

    registry = ScreenRegistry.from_config(AdminConfig(screens_dir="admin/screens"))
    registry.init(host)

Conventions:

    screens/
      dashboard.py       # Single screen "Dashboard"      -> Dashboard_Controller
      _dashboard.py      # Optional override configuration for "dashboard"
      status.html        # Single screen rendered as a kida template
      settings/          # Composite screen "Settings"    -> Settings_Controller
        _config.py       # Optional override configuration (menu_title, tabs, ...)
        general.py       # Tab "General"
        mailchimp.py     # Tab "Mailchimp"
        _mailchimp.py    # Optional per-tab override configuration

Every view is called with a fresh ``ScreenContext``::

    def render(screen):
        screen.write(f"<p>{escape(screen.get('from_name', ''))}</p>")
"""

from campaignbridge.screens.context import ScreenContext
from campaignbridge.screens.controllers import (
    ControllerBinding,
    ControllerRegistry,
    ControllerResolver,
    register_controller,
)
from campaignbridge.screens.diagnostics import Diagnostic, Severity
from campaignbridge.screens.dispatch import ScreenDispatcher
from campaignbridge.screens.namespace import DirectoryNamespace, NamespaceProvider, TableNamespace
from campaignbridge.screens.naming import ScreenIdentity, resolve_identity
from campaignbridge.screens.overrides import MappingOverrideLoader, ModuleOverrideLoader
from campaignbridge.screens.registry import ScreenRegistry
from campaignbridge.screens.tabs import discover_tabs
from campaignbridge.screens.types import ScreenDefinition, ScreenKind, TabDefinition

__all__ = [
    "ControllerBinding",
    "ControllerRegistry",
    "ControllerResolver",
    "Diagnostic",
    "DirectoryNamespace",
    "MappingOverrideLoader",
    "ModuleOverrideLoader",
    "NamespaceProvider",
    "ScreenContext",
    "ScreenDefinition",
    "ScreenDispatcher",
    "ScreenIdentity",
    "ScreenKind",
    "ScreenRegistry",
    "Severity",
    "TabDefinition",
    "TableNamespace",
    "discover_tabs",
    "register_controller",
    "resolve_identity",
]
