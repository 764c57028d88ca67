"""Operator-facing notices — success, info, warning, and error messages.

Notices are accumulated on a ScreenContext during a render (or on a
controller binding during request handling) and rendered by the
dispatcher with the ``campaignbridge/notices.html`` template.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class NoticeLevel(Enum):
    """Visual severity; maps to the host's ``notice-<level>`` CSS class."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    """A single message shown to the operator."""

    message: str
    level: NoticeLevel = NoticeLevel.INFO
    dismissible: bool = True

    @classmethod
    def success(cls, message: str) -> Notice:
        return cls(message, NoticeLevel.SUCCESS)

    @classmethod
    def info(cls, message: str) -> Notice:
        return cls(message, NoticeLevel.INFO)

    @classmethod
    def warning(cls, message: str) -> Notice:
        return cls(message, NoticeLevel.WARNING)

    @classmethod
    def error(cls, message: str) -> Notice:
        return cls(message, NoticeLevel.ERROR, dismissible=False)

    @property
    def is_error(self) -> bool:
        return self.level is NoticeLevel.ERROR

    @property
    def css_class(self) -> str:
        classes = f"notice notice-{self.level.value}"
        if self.dismissible:
            classes += " is-dismissible"
        return classes


def coerce_notices(value: Any) -> list[Notice]:
    """Normalise a controller's return value into a list of notices.

    Accepts ``None``, a plain string (treated as a success message), a
    ``Notice``, or an iterable of either.
    """
    if value is None:
        return []
    if isinstance(value, Notice):
        return [value]
    if isinstance(value, str):
        return [Notice.success(value)] if value else []
    if isinstance(value, Iterable):
        notices: list[Notice] = []
        for item in value:
            notices.extend(coerce_notices(item))
        return notices
    return []
