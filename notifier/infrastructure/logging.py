"""
Structured logging for the notifier.

JSON lines on stdout, stamped with the service name and, while an event
is being posted, the identity of the object the event is about.
"""

import logging
import re
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar

import structlog

from ..domain import ObjectReference

# Kind/namespace/name of the object whose event is being posted
involved_object: ContextVar[str] = ContextVar("involved_object", default="")

_SECRET_PROPERTY = re.compile(r"(SharedAccessKey|SharedAccessSignature)=[^;]*", re.IGNORECASE)


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        service_name: Value of the `service` field on every record
        level: Minimum level name, INFO if unknown
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.getLevelNamesMapping().get(level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _event_context(service_name),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def _event_context(service_name: str):
    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        ref = involved_object.get()
        if ref:
            event_dict.setdefault("involved_object", ref)
        return event_dict

    return processor


def object_identity(ref: ObjectReference) -> str:
    """Render an object reference as Kind/namespace/name."""
    if ref.namespace:
        return f"{ref.kind}/{ref.namespace}/{ref.name}"
    return f"{ref.kind}/{ref.name}"


@contextmanager
def logging_involved_object(ref: ObjectReference):
    """Stamp records logged inside the block with the object's identity."""
    token = involved_object.set(object_identity(ref))
    try:
        yield
    finally:
        involved_object.reset(token)


class Timer:
    """Measures the wall time of a `with` block in milliseconds."""

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self.duration_ms = 0.0
        return self

    def __exit__(self, *args) -> None:
        self.duration_ms = round((time.perf_counter() - self._start) * 1000, 2)


def sanitize_for_logging(endpoint: str) -> str:
    """Redact signature material from an endpoint or connection string."""
    return _SECRET_PROPERTY.sub(lambda m: f"{m.group(1)}=***", endpoint)
