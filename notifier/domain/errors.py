"""
Error taxonomy for the notifier.

Every error raised by the notifier derives from NotifierError. Wrapped
dependency errors are chained as __cause__ and keep their original message.
"""

from enum import Enum


class PublishStage(str, Enum):
    """Stage of a notifier operation that produced an error."""

    OPEN = "open"
    BATCH = "batch"
    ADD = "add"
    SEND = "send"
    CLOSE = "close"


class NotifierError(Exception):
    """Base class for all notifier errors."""

    retryable: bool = False


class ConfigurationError(NotifierError):
    """Raised when the connection parameters have the wrong shape."""

    pass


class CredentialError(NotifierError):
    """Raised when an identity cannot be resolved or authenticated."""

    retryable = True


class SerializationError(NotifierError):
    """Raised when an event cannot be encoded for the wire."""

    pass


class TransportError(NotifierError):
    """Raised when creating, filling, sending or closing a batch fails."""

    retryable = True

    def __init__(self, message: str, stage: PublishStage) -> None:
        super().__init__(message)
        self.stage = stage


class AggregateError(NotifierError):
    """
    A publish error together with the teardown error that followed it.

    Both errors stay inspectable through `errors`, and the string form
    contains both messages.
    """

    def __init__(self, errors: list[Exception]) -> None:
        self.errors = [e for e in errors if e is not None]
        super().__init__(self._format())

    @property
    def primary(self) -> Exception:
        return self.errors[0]

    @property
    def teardown(self) -> Exception | None:
        return self.errors[1] if len(self.errors) > 1 else None

    @property
    def retryable(self) -> bool:
        return all(getattr(e, "retryable", False) for e in self.errors)

    def _format(self) -> str:
        if len(self.errors) == 1:
            return str(self.errors[0])
        return "[" + ", ".join(str(e) for e in self.errors) + "]"


def combine(error: Exception | None, close_error: Exception | None) -> Exception | None:
    """
    Merge a publish error with a teardown error.

    Returns None when neither is set, the single error unchanged when only
    one is set, and an AggregateError when both are.
    """
    if error is None:
        return close_error
    if close_error is None:
        return error
    return AggregateError([error, close_error])
