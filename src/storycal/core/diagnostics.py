"""
storycal.core.diagnostics
-------------------------
Structured, non-fatal diagnostics.

Conversion code never raises for incomplete calendar data. Instead it records
what it assumed into a Diagnostics collector which the caller can inspect;
each distinct record is also logged once on the emitting module's logger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

Level = Literal["info", "warning", "error", "critical"]

_LOG_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    level: Level
    code: str
    message: str

    def __str__(self) -> str:
        return self.message


class Diagnostics:
    """Ordered, de-duplicated collection of Diagnostic records."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger
        self._records: List[Diagnostic] = []

    def add(self, level: Level, code: str, message: str, *, log: Optional[logging.Logger] = None) -> Diagnostic:
        rec = Diagnostic(level, code, message)
        if rec not in self._records:
            self._records.append(rec)
            (log or self._log).log(_LOG_LEVELS[level], message)
        return rec

    def merge(self, other: "Diagnostics") -> None:
        """Append other's records that are not here yet. They are not logged again."""
        for rec in other:
            if rec not in self._records:
                self._records.append(rec)

    def info(self, code: str, message: str, **kw) -> Diagnostic:
        return self.add("info", code, message, **kw)

    def warning(self, code: str, message: str, **kw) -> Diagnostic:
        return self.add("warning", code, message, **kw)

    def error(self, code: str, message: str, **kw) -> Diagnostic:
        return self.add("error", code, message, **kw)

    def critical(self, code: str, message: str, **kw) -> Diagnostic:
        return self.add("critical", code, message, **kw)

    # ---------------------------------------------------------

    @property
    def records(self) -> List[Diagnostic]:
        return list(self._records)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Records at warning level or above."""
        return [r for r in self._records if r.level != "info"]

    @property
    def messages(self) -> List[str]:
        return [r.message for r in self._records]

    def codes(self) -> List[str]:
        return [r.code for r in self._records]

    def has(self, code: str) -> bool:
        return any(r.code == code for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __repr__(self) -> str:
        return f"Diagnostics({self._records!r})"


def ensure(diag: Optional[Diagnostics]) -> Diagnostics:
    """Return diag, or a throwaway collector when the caller did not pass one."""
    return diag if diag is not None else Diagnostics()
