"""Context-aware sanitization of submitted values.

The field name decides how a submitted string is cleaned:

- ``*email*`` / ``reply_to``: trimmed address, ``""`` if malformed
- ``*url*``: http(s), mailto, or site-relative URLs only, else ``""``
- ``*html*`` / ``*content*``: markup kept, ``<script>``/``<style>`` removed
- ``*id*`` / ``*limit*`` with a numeric value: non-negative ``int``
- anything else: plain text (tags stripped, whitespace collapsed)

Lists and dicts are sanitized recursively; dict keys are reduced to
lower-case ``[a-z0-9_-]``.
"""

import re
from typing import Any

# Structural check only
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")
_TAG_RE = re.compile(r"<[^>]*>")
_SCRIPT_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_WS_RE = re.compile(r"\s+")
_KEY_RE = re.compile(r"[^a-z0-9_\-]")
_SAFE_SCHEMES = ("http://", "https://", "mailto:")


def sanitize_text(value: str) -> str:
    """Strip tags, collapse whitespace, and trim."""
    value = _SCRIPT_RE.sub("", value)
    value = _TAG_RE.sub("", value)
    return _WS_RE.sub(" ", value).strip()


def sanitize_email(value: str) -> str:
    value = value.strip()
    return value if _EMAIL_RE.match(value) else ""


def sanitize_url(value: str) -> str:
    """Keep absolute http(s)/mailto URLs and same-origin relative paths."""
    value = value.strip()
    if not value or any(ch in value for ch in "\r\n\t"):
        return ""
    if value.lower().startswith(_SAFE_SCHEMES):
        return value
    if value.startswith("/") and not value.startswith("//"):
        return value
    return ""


def sanitize_html(value: str) -> str:
    return _SCRIPT_RE.sub("", value).strip()


def sanitize_key(key: str) -> str:
    return _KEY_RE.sub("", key.lower())


def sanitize_value(key: str, value: Any) -> Any:
    """Sanitize *value* according to the field name *key*."""
    if isinstance(value, str):
        lowered = key.lower()
        if "email" in lowered or lowered == "reply_to":
            return sanitize_email(value)
        if "url" in lowered:
            return sanitize_url(value)
        if "html" in lowered or "content" in lowered:
            return sanitize_html(value)
        if ("id" in lowered or "limit" in lowered) and value.strip().lstrip("-").isdigit():
            return abs(int(value.strip()))
        return sanitize_text(value)

    if isinstance(value, bool) or value is None:
        return value

    if isinstance(value, int | float):
        if "id" in key.lower() or "limit" in key.lower():
            return abs(int(value))
        return value

    if isinstance(value, dict):
        return {sanitize_key(str(k)): sanitize_value(str(k), v) for k, v in value.items()}

    if isinstance(value, list | tuple):
        return [sanitize_value(key, item) for item in value]

    return sanitize_text(str(value))
