"""
Diagnostics — structured messages collected during one generation pass.

A Diagnostics object is created per pass and handed explicitly to the
generation service.  Every entry is kept on the object (so callers can
inspect or serialise what happened) and is also forwarded to a regular
``logging`` logger, so the CLI's logging setup still shows it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class Diagnostic:
    """A single diagnostic entry."""

    level: str  # info, warning, error
    message: str
    subject: str = ""  # qualified name the entry is about, if any
    timestamp: str = ""

    def __post_init__(self) -> None:
        if not self.timestamp:
            self.timestamp = datetime.now(UTC).isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "message": self.message,
            "subject": self.subject,
            "timestamp": self.timestamp,
        }


@dataclass
class Diagnostics:
    """Diagnostics sink scoped to a single generation pass."""

    logger_name: str = "buildergen.generation"
    entries: list[Diagnostic] = field(default_factory=list)

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(self.logger_name)

    def _record(self, level: str, message: str, subject: str) -> Diagnostic:
        entry = Diagnostic(level=level, message=message, subject=subject)
        self.entries.append(entry)
        self.logger.log(logging.getLevelName(level.upper()), message)
        return entry

    def info(self, message: str, subject: str = "") -> Diagnostic:
        return self._record("info", message, subject)

    def warning(self, message: str, subject: str = "") -> Diagnostic:
        return self._record("warning", message, subject)

    def error(self, message: str, subject: str = "") -> Diagnostic:
        return self._record("error", message, subject)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [e for e in self.entries if e.level == "warning"]

    @property
    def errors(self) -> list[Diagnostic]:
        return [e for e in self.entries if e.level == "error"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "warnings": len(self.warnings),
            "errors": len(self.errors),
            "entries": [e.to_dict() for e in self.entries],
        }
