"""Action-bound CSRF nonces for admin forms.

A nonce is the operator's user id signed with ``itsdangerous`` under a
salt derived from the action name.  The signature carries its own
timestamp, so a token expires ``lifetime`` seconds after it was issued
and never verifies for a different action or user.

Views use the Screen Context helpers::

    {{ screen.nonce_field("save_settings") }}

    if screen.is_post() and screen.verify_nonce("save_settings"):
        ...

Controllers check submissions against the issuer active for the
current request::

    if not verify_request(params, "save_settings"):
        return Notice.error("Security check failed.")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass
from html import escape
from typing import TYPE_CHECKING

from itsdangerous import BadSignature, SignatureExpired, TimestampSigner, URLSafeTimedSerializer
from kida.utils.html import Markup

from campaignbridge.errors import NonceError

if TYPE_CHECKING:
    from campaignbridge.http.params import RequestParams

_log = logging.getLogger("campaignbridge.security")


@dataclass(frozen=True, slots=True)
class NonceConfig:
    """Nonce issuer configuration.

    Attributes:
        secret_key: Signing key; required.
        lifetime: Seconds a token remains valid.
        field_name: Form field carrying the token.
        action_prefix: Prepended to every action name to form the salt.
    """

    secret_key: str
    lifetime: int = 86400
    field_name: str = "_cbnonce"
    action_prefix: str = "cb_"


def _signer_for(clock: Callable[[], float]) -> type[TimestampSigner]:
    class ClockSigner(TimestampSigner):
        def get_timestamp(self) -> int:
            return int(clock())

    return ClockSigner


class NonceIssuer:
    """Create and verify action-bound nonces.

    *user* identifies the operator (a user id or session id); tokens
    issued for one user do not verify for another.
    """

    __slots__ = ("_config", "_signer")

    def __init__(
        self,
        config: NonceConfig,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not config.secret_key:
            msg = "Nonces require a secret_key. Set AdminConfig(secret_key=...)."
            raise NonceError(msg)
        self._config = config
        self._signer = _signer_for(clock)

    @property
    def field_name(self) -> str:
        return self._config.field_name

    def _serializer(self, action: str) -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(
            self._config.secret_key,
            salt=f"{self._config.action_prefix}{action}",
            signer=self._signer,
        )

    def create(self, action: str, user: str = "") -> str:
        """Return a fresh token for *action*."""
        return self._serializer(action).dumps(user)

    def verify(self, token: str | None, action: str, user: str = "") -> bool:
        """Check *token* was issued for *action* and *user* within the lifetime."""
        if not token:
            return False
        try:
            signed_user = self._serializer(action).loads(token, max_age=self._config.lifetime)
        except SignatureExpired:
            _log.warning("Nonce for action %r has expired", action)
            return False
        except BadSignature:
            _log.warning("Nonce verification failed for action %r", action)
            return False
        if signed_user != user:
            _log.warning("Nonce for action %r was issued to another user", action)
            return False
        return True

    def field(self, action: str, user: str = "") -> Markup:
        """Render a hidden input carrying the nonce for *action*.

        Renders: ``<input type="hidden" name="_cbnonce" value="...">``
        """
        token = escape(self.create(action, user))
        return Markup(f'<input type="hidden" name="{self._config.field_name}" value="{token}">')


nonces_var: ContextVar[NonceIssuer | None] = ContextVar("campaignbridge_nonces", default=None)
"""Issuer for the request being handled.  ``None`` when CSRF is off."""


def get_nonces() -> NonceIssuer | None:
    return nonces_var.get()


def verify_request(params: RequestParams, action: str) -> bool:
    """Check the submitted nonce for *action* against the active issuer.

    Always true when no issuer is active (no ``secret_key`` configured).
    """
    issuer = nonces_var.get()
    if issuer is None:
        return True
    return issuer.verify(params.form.get(issuer.field_name), action, params.user)
