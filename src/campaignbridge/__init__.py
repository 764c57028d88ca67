"""CampaignBridge — convention-based admin screens for the CampaignBridge plugin.

Drop view files into a directory and they become admin pages: single
files are screens, folders are tabbed screens, and controllers bind by
name.

Basic usage::

    from campaignbridge import AdminConfig, MenuHost, ScreenRegistry

    registry = ScreenRegistry.from_config(AdminConfig(screens_dir="admin/screens"))
    host = MenuHost()
    registry.init(host)
    host.build()
    html = host.dispatch("campaignbridge-settings")
"""

__version__ = "0.1.0"
__all__ = [
    "AdminConfig",
    "CampaignBridgeError",
    "ConfigurationError",
    "MenuHost",
    "Notice",
    "RequestParams",
    "ScreenContext",
    "ScreenRegistry",
    "get_options",
    "register_controller",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import campaignbridge`` cheap for controllers that only need
    ``__version__`` or the option accessor.
    """
    if name == "AdminConfig":
        from campaignbridge.config import AdminConfig

        return AdminConfig

    if name == "MenuHost":
        from campaignbridge.host import MenuHost

        return MenuHost

    if name == "Notice":
        from campaignbridge.notices import Notice

        return Notice

    if name == "RequestParams":
        from campaignbridge.http.params import RequestParams

        return RequestParams

    if name == "get_options":
        from campaignbridge.options import get_options

        return get_options

    if name in ("ScreenContext", "ScreenRegistry", "register_controller"):
        from campaignbridge import screens as _screens

        return getattr(_screens, name)

    if name in ("CampaignBridgeError", "ConfigurationError"):
        from campaignbridge import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
