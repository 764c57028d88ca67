"""Security helpers for admin screens."""

from campaignbridge.security.nonce import NonceConfig, NonceIssuer

__all__ = ["NonceConfig", "NonceIssuer"]
