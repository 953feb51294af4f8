"""
Structured event sinks for cadtreelib.

Nothing in the traversal, adapter or resolver code prints or logs directly.
Instead they report ExportEvent records to an EventSink that is passed down
the call chain. The sink decides what happens with them: forward to the
``logging`` module, collect them for later inspection, or drop them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class EventCode(Enum):
    """What kind of thing happened."""
    # Per-node degradation
    NAME_DEGRADED = "name_degraded"
    KIND_DEGRADED = "kind_degraded"
    CHILDREN_DEGRADED = "children_degraded"
    PARAMETERS_DEGRADED = "parameters_degraded"
    VALUE_DEGRADED = "value_degraded"
    PROPERTY_DEGRADED = "property_degraded"
    ORIGIN_UNRESOLVED = "origin_unresolved"
    CHILD_FAILED = "child_failed"
    DEPTH_CEILING_REACHED = "depth_ceiling_reached"
    # Assembly resolution
    PART_UNRESOLVED = "part_unresolved"
    MEMBER_FAILED = "member_failed"
    # Per-document
    DOCUMENT_OPENED = "document_opened"
    DOCUMENT_NOT_FOUND = "document_not_found"
    DOCUMENT_OPEN_FAILED = "document_open_failed"
    DOCUMENT_UNSUPPORTED = "document_unsupported"
    DOCUMENT_FAILED = "document_failed"
    DOCUMENT_CLOSE_FAILED = "document_close_failed"


@dataclass(frozen=True)
class ExportEvent:
    """A single reported occurrence.

    Attributes:
        code: Event category
        message: Human readable description
        level: ``logging`` level number
        subject: Name of the node or path of the document concerned
        error: Exception behind the event, if any
    """
    code: EventCode
    message: str
    level: int = logging.WARNING
    subject: Optional[str] = None
    error: Optional[BaseException] = None

    def as_record(self) -> Dict[str, Any]:
        return {
            'code': self.code.value,
            'message': self.message,
            'level': logging.getLevelName(self.level),
            'subject': self.subject,
            'error_type': type(self.error).__name__ if self.error else None,
            'error_message': str(self.error) if self.error else None,
        }


class EventSink(ABC):
    """
    Base class for event sinks.

    Subclasses implement ``emit``; ``report`` is the convenience used by
    the rest of the library.
    """

    @abstractmethod
    def emit(self, event: ExportEvent) -> None:
        """
        Receive an event.

        Args:
            event: The event to handle
        """
        pass

    def report(self,
               code: EventCode,
               message: str,
               *,
               level: int = logging.WARNING,
               subject: Optional[str] = None,
               error: Optional[BaseException] = None) -> None:
        """Build an ExportEvent and emit it."""
        self.emit(ExportEvent(code, message, level, subject, error))


class NullEventSink(EventSink):
    """Sink that drops every event."""

    def emit(self, event: ExportEvent) -> None:
        pass


class LoggingEventSink(EventSink):
    """
    Sink that forwards events to the standard ``logging`` module.

    Exceptions are attached as ``exc_info`` only at DEBUG verbosity so that
    routine degradation does not flood the log with tracebacks.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Args:
            logger: Target logger (defaults to the ``cadtreelib`` logger)
        """
        self.logger = logger or logging.getLogger("cadtreelib")

    def emit(self, event: ExportEvent) -> None:
        message = event.message
        if event.error is not None:
            message = f"{message}: {event.error}"
        exc_info = event.error if (
            event.error is not None and self.logger.isEnabledFor(logging.DEBUG)
        ) else None
        self.logger.log(event.level, "[%s] %s", event.code.value, message,
                        exc_info=exc_info)


class CollectingEventSink(EventSink):
    """
    Sink that keeps every event for later inspection.

    Used by the test suite to assert on degradation paths, and by callers
    that want to present all problems at the end of an export.
    """

    def __init__(self):
        self.events: List[ExportEvent] = []

    def emit(self, event: ExportEvent) -> None:
        self.events.append(event)

    def by_code(self, code: EventCode) -> List[ExportEvent]:
        return [e for e in self.events if e.code is code]

    def codes(self) -> List[EventCode]:
        return [e.code for e in self.events]

    def clear(self) -> None:
        self.events.clear()

    def get_statistics(self) -> Dict[str, Any]:
        """
        Summarize collected events.

        Returns:
            Dictionary with total count, counts per code and full records
        """
        per_code: Dict[str, int] = {}
        for event in self.events:
            per_code[event.code.value] = per_code.get(event.code.value, 0) + 1
        return {
            'total_events': len(self.events),
            'warnings': sum(1 for e in self.events if e.level >= logging.WARNING),
            'by_code': per_code,
            'events': [e.as_record() for e in self.events],
        }


class TeeEventSink(EventSink):
    """Sink that forwards every event to several sinks in order."""

    def __init__(self, sinks: Iterable[EventSink]):
        self.sinks = list(sinks)

    def emit(self, event: ExportEvent) -> None:
        for sink in self.sinks:
            sink.emit(event)
