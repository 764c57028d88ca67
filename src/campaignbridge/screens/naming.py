"""Naming conventions for screens, tabs, and controllers.

Pure functions that turn a raw identifier (a file or directory name with
its suffix stripped) into the strings the rest of the engine needs::

    settings          -> title "Settings",        slug "settings"
    email_templates   -> title "Email Templates", slug "email-templates"
    My-Page           -> title "My Page",         slug "my-page"

    settings          -> controller "Settings_Controller"
    email_templates   -> controller "Email_Templates_Controller"

None of these raise. Identifiers that split into no words at all fall
back to the raw identifier, so the result is never empty for a
non-empty input. Empty identifiers are filtered out by discovery before
they get here.
"""

import re
from dataclasses import dataclass

# Word separators: underscores, hyphens, whitespace
_SPLIT_RE = re.compile(r"[_\-\s]+")

CONTROLLER_SUFFIX = "_Controller"


@dataclass(frozen=True, slots=True)
class ScreenIdentity:
    """Everything derived from a raw identifier.

    Attributes:
        name: The raw identifier as discovered.
        slug: URL-safe, lower-case, hyphen-joined.
        title: Human-readable, capitalized words joined by spaces.
        controller_type: Convention-derived controller type name
            (without namespace).
    """

    name: str
    slug: str
    title: str
    controller_type: str


def split_words(raw: str) -> list[str]:
    """Split *raw* on ``_``, ``-`` and whitespace, dropping empty segments."""
    return [word for word in _SPLIT_RE.split(raw) if word]


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def title_from_name(raw: str) -> str:
    """Human-readable title: each word's first letter upper-cased."""
    words = split_words(raw)
    if not words:
        return raw
    return " ".join(_upper_first(w) for w in words)


def slug_from_name(raw: str) -> str:
    """URL-safe slug: lower-case words joined with ``-``."""
    words = split_words(raw)
    if not words:
        return raw.lower()
    return "-".join(w.lower() for w in words)


def controller_type_name(raw: str) -> str:
    """Controller type name: ``Pascal_Words`` plus ``_Controller``."""
    words = split_words(raw)
    base = "_".join(_upper_first(w) for w in words) if words else raw
    return f"{base}{CONTROLLER_SUFFIX}"


def qualified_controller_name(raw: str, namespace: str) -> str:
    """Controller type name resolved against a dotted *namespace* prefix."""
    type_name = controller_type_name(raw)
    if not namespace:
        return type_name
    return f"{namespace.rstrip('.')}.{type_name}"


def resolve_identity(raw: str) -> ScreenIdentity:
    """Derive slug, title, and controller type name from *raw*."""
    return ScreenIdentity(
        name=raw,
        slug=slug_from_name(raw),
        title=title_from_name(raw),
        controller_type=controller_type_name(raw),
    )
