from .azure_eventhub import AzureEventHubNotifier
from .eventhub_auth import (
    AuthStrategy,
    ConnectionDescriptor,
    DefaultCredentialResolver,
    EventHubAuth,
    StaticTokenCredential,
    resolve_auth,
)
from .eventhub_transport import EventHubTransport

__all__ = [
    "AuthStrategy",
    "AzureEventHubNotifier",
    "ConnectionDescriptor",
    "DefaultCredentialResolver",
    "EventHubAuth",
    "EventHubTransport",
    "StaticTokenCredential",
    "resolve_auth",
]
