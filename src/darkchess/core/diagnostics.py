"""Diagnostic events emitted by the rules core.

The core never configures logging itself. It hands structured events to an
:class:`IDiagnosticSink`; the default sink forwards them to the standard
``logging`` module, and :class:`RecordingSink` keeps them in memory.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

_LOGGER = logging.getLogger("darkchess.core")


class Severity(IntEnum):
    """Event severity; values match the stdlib ``logging`` levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    severity: Severity
    message: str
    fields: Mapping[str, Any] = field(default_factory=dict)


class IDiagnosticSink(ABC):
    """Receiver for diagnostic events."""

    @abstractmethod
    def emit(self, event: DiagnosticEvent) -> None: ...

    # Convenience wrappers used throughout the core.

    def debug(self, message: str, **fields: Any) -> None:
        self.emit(DiagnosticEvent(Severity.DEBUG, message, fields))

    def info(self, message: str, **fields: Any) -> None:
        self.emit(DiagnosticEvent(Severity.INFO, message, fields))

    def warning(self, message: str, **fields: Any) -> None:
        self.emit(DiagnosticEvent(Severity.WARNING, message, fields))

    def error(self, message: str, **fields: Any) -> None:
        self.emit(DiagnosticEvent(Severity.ERROR, message, fields))

    def critical(self, message: str, **fields: Any) -> None:
        self.emit(DiagnosticEvent(Severity.CRITICAL, message, fields))


class LoggingSink(IDiagnosticSink):
    """Forward events to a :class:`logging.Logger`."""

    __slots__ = ("_logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _LOGGER

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def emit(self, event: DiagnosticEvent) -> None:
        self._logger.log(
            int(event.severity),
            event.message,
            extra={"diagnostic": dict(event.fields)},
        )


class RecordingSink(IDiagnosticSink):
    """Keep every event in memory, in emission order."""

    __slots__ = ("events",)

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def emit(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    def of(self, severity: Severity) -> list[DiagnosticEvent]:
        return [e for e in self.events if e.severity == severity]

    def clear(self) -> None:
        self.events.clear()
