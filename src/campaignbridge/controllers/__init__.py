"""Built-in screen controllers.

Found by naming convention: the ``settings/`` screen binds
``Settings_Controller``, ``status.py`` binds ``Status_Controller``.
Both read and write through ``campaignbridge.options.get_options()``.
Settings submissions must carry a valid ``save_settings`` nonce (or
``reset_all`` for a reset) whenever the registry has a secret key.
"""

import platform
import sys
from typing import Any

from campaignbridge.http.sanitize import sanitize_value
from campaignbridge.notices import Notice
from campaignbridge.options import get_options
from campaignbridge.security.nonce import verify_request

_MAILCHIMP_KEY_MIN_LENGTH = 20

SAVE_ACTION = "save_settings"
RESET_ACTION = "reset_all"

SETTINGS_FIELDS: tuple[str, ...] = (
    "from_name",
    "from_email",
    "reply_to",
    "mailchimp_api_key",
    "mailchimp_audience",
    "debug_mode",
    "log_level",
)
"""Options a settings submission may write."""


def _mailchimp_connected(api_key: Any) -> bool:
    return bool(api_key) and len(str(api_key)) > _MAILCHIMP_KEY_MIN_LENGTH


class Settings_Controller:  # noqa: N801
    """Data and form handling shared by every tab of the settings screen."""

    def preload(self) -> dict[str, Any]:
        options = get_options()
        api_key = options.get("mailchimp_api_key", "")
        connected = _mailchimp_connected(api_key)
        return {
            "from_name": options.get("from_name", ""),
            "from_email": options.get("from_email", ""),
            "reply_to": options.get("reply_to", ""),
            "mailchimp_api_key": api_key,
            "mailchimp_audience": options.get("mailchimp_audience", ""),
            "mailchimp_connected": connected,
            "debug_mode": bool(options.get("debug_mode", False)),
            "log_level": options.get("log_level", "info"),
            "integrations": {
                "mailchimp": {
                    "connected": connected,
                    "status": "Connected" if connected else "Not connected",
                },
            },
        }

    def handle_request(self, params: Any) -> Notice | None:
        options = get_options()
        form = params.form

        if "reset_all_settings" in form:
            if not verify_request(params, RESET_ACTION):
                return Notice.error("Security check failed.")
            for name in SETTINGS_FIELDS:
                options.delete(name)
            return Notice.success("All settings have been reset.")

        submitted = {name: form[name] for name in SETTINGS_FIELDS if name in form}
        if not submitted:
            return None
        if not verify_request(params, SAVE_ACTION):
            return Notice.error("Security check failed.")
        for name, value in submitted.items():
            options.set(name, sanitize_value(name, value))
        return Notice.success("Settings saved.")


class Status_Controller:  # noqa: N801
    """Read-only system information for the status screen."""

    def preload(self) -> dict[str, Any]:
        from campaignbridge import __version__

        options = get_options()
        return {
            "system_info": {
                "python_version": platform.python_version(),
                "implementation": platform.python_implementation(),
                "platform": platform.platform(),
                "executable": sys.executable,
            },
            "plugin_info": {
                "name": "CampaignBridge",
                "version": __version__,
            },
            "integrations": {
                "mailchimp": {
                    "active": True,
                    "configured": _mailchimp_connected(options.get("mailchimp_api_key", "")),
                },
                "html": {"active": True, "configured": True},
            },
        }
