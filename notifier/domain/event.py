"""Notification event emitted by the reconcilers and forwarded to Event Hubs."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Metadata keys and values with a meaning for notifiers
META_REVISION_KEY = "revision"
META_TOKEN_KEY = "token"
META_COMMIT_STATUS_KEY = "commit_status"
META_COMMIT_STATUS_UPDATE_VALUE = "update"


class Severity(str, Enum):
    """Event severity."""

    INFO = "info"
    ERROR = "error"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ObjectReference(_WireModel):
    """Reference to the object the event is about."""

    kind: str = ""
    namespace: str = ""
    name: str = ""
    uid: str = ""
    api_version: str = ""
    resource_version: str = ""
    field_path: str = ""


class Event(_WireModel):
    """A notification event with its metadata."""

    involved_object: ObjectReference
    severity: Severity
    timestamp: datetime
    message: str
    reason: str
    metadata: dict[str, str] | None = None
    reporting_controller: str
    reporting_instance: str | None = None

    def has_metadata(self, key: str, value: str) -> bool:
        """Return True if the metadata holds `key` set to `value`."""
        if not self.metadata:
            return False
        return self.metadata.get(key) == value

    def is_commit_status_update(self) -> bool:
        return self.has_metadata(META_COMMIT_STATUS_KEY, META_COMMIT_STATUS_UPDATE_VALUE)


def encode_event(event: Event) -> bytes:
    """Encode an event to its canonical JSON wire form."""
    return event.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def decode_event(data: bytes | str) -> Event:
    """Decode an event from its JSON wire form."""
    return Event.model_validate_json(data)
