"""Diagnostics recorded during a navigation-build pass.

Nothing found during discovery aborts the pass.  Missing directories,
slug collisions, and broken screen configuration are recorded here
(and logged) so the CLI and tests can inspect them afterwards.
"""

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity of a discovery issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single issue found while discovering screens.

    Attributes:
        severity: How bad it is.
        category: ``"discovery"``, ``"duplicate-slug"``, or
            ``"configuration"``.
        message: Operator-readable description.
        screen: Raw identifier of the affected screen, if any.
    """

    severity: Severity
    category: str
    message: str
    screen: str | None = None

    def __str__(self) -> str:
        where = f" [{self.screen}]" if self.screen else ""
        return f"{self.severity.value}: {self.category}{where}: {self.message}"
