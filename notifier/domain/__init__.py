from .errors import (
    AggregateError,
    ConfigurationError,
    CredentialError,
    NotifierError,
    PublishStage,
    SerializationError,
    TransportError,
    combine,
)
from .event import (
    META_COMMIT_STATUS_KEY,
    META_COMMIT_STATUS_UPDATE_VALUE,
    META_REVISION_KEY,
    META_TOKEN_KEY,
    Event,
    ObjectReference,
    Severity,
    decode_event,
    encode_event,
)

__all__ = [
    "AggregateError",
    "ConfigurationError",
    "CredentialError",
    "Event",
    "META_COMMIT_STATUS_KEY",
    "META_COMMIT_STATUS_UPDATE_VALUE",
    "META_REVISION_KEY",
    "META_TOKEN_KEY",
    "NotifierError",
    "ObjectReference",
    "PublishStage",
    "SerializationError",
    "Severity",
    "TransportError",
    "combine",
    "decode_event",
    "encode_event",
]
