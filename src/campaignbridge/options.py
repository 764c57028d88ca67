"""Process-wide option storage for controllers.

Controllers are constructed with no arguments, so they reach settings
through an accessor instead of through their constructor::

    from campaignbridge.options import get_options

    options = get_options()
    options.get("from_name", "")
    options.set("from_name", "Acme")

Keys are stored with the plugin prefix (``cb_from_name``), matching how
the host namespaces plugin options.

The active store lives in a ContextVar.  Hosts and tests swap it with
``use_options()``::

    token = use_options(OptionStore({"from_name": "Acme"}))
    try:
        ...
    finally:
        options_var.reset(token)
"""

from collections.abc import Iterator, Mapping
from contextvars import ContextVar, Token
from typing import Any

_MISSING = object()


class OptionStore:
    """In-memory key/value option store with a key prefix."""

    __slots__ = ("_prefix", "_values")

    def __init__(self, initial: Mapping[str, Any] | None = None, *, prefix: str = "cb_") -> None:
        self._prefix = prefix
        self._values: dict[str, Any] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def _key(self, name: str) -> str:
        return name if name.startswith(self._prefix) else f"{self._prefix}{name}"

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(self._key(name), default)

    def set(self, name: str, value: Any) -> None:
        self._values[self._key(name)] = value

    def delete(self, name: str) -> bool:
        """Remove *name*; returns whether it existed."""
        return self._values.pop(self._key(name), _MISSING) is not _MISSING

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"OptionStore({len(self._values)} option(s))"


options_var: ContextVar[OptionStore] = ContextVar("campaignbridge_options")
"""The active option store.  Unset until first use."""


def get_options() -> OptionStore:
    """Return the active option store, creating an empty one on first use."""
    try:
        return options_var.get()
    except LookupError:
        store = OptionStore()
        options_var.set(store)
        return store


def use_options(store: OptionStore) -> Token[OptionStore]:
    """Make *store* the active option store."""
    return options_var.set(store)
