"""CampaignBridge exception hierarchy.

Shared across discovery, controller binding, dispatch, and the CLI so
every module raises and catches the same types.
"""


class CampaignBridgeError(Exception):
    """Base for all campaignbridge-specific errors."""


class ConfigurationError(CampaignBridgeError):
    """Raised when a screen's configuration cannot be honoured.

    Scoped to a single screen: the registry catches it during discovery,
    records a diagnostic, and skips that screen while its siblings
    continue to register.
    """

    def __init__(self, message: str, *, screen: str | None = None) -> None:
        super().__init__(message)
        self.screen = screen


class CompositeEmptyError(CampaignBridgeError):
    """A composite screen resolved zero (accessible) tabs at render time."""

    def __init__(self, screen: str) -> None:
        super().__init__(f"No accessible tabs found in: {screen}/")
        self.screen = screen


class ViewNotFoundError(CampaignBridgeError):
    """A view handle points at a missing file or a module without ``render``."""


class NonceError(CampaignBridgeError):
    """Raised when nonce helpers are used without a secret key."""


class PageNotFoundError(CampaignBridgeError, LookupError):
    """No page is registered with the host under the requested slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"No admin page registered as {slug!r}")
        self.slug = slug


class AccessDeniedError(CampaignBridgeError, PermissionError):
    """The current operator lacks the capability a page requires."""

    def __init__(self, slug: str, capability: object) -> None:
        super().__init__(f"Access to {slug!r} requires {capability!r}")
        self.slug = slug
        self.capability = capability
