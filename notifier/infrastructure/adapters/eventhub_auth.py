"""
Credential resolution for Azure Event Hubs.

Picks one of three authentication strategies from the connection
parameters, once, and opens producer clients with it:

- token: a caller-supplied bearer token (JWT)
- shared access key: a connection string with an embedded signature
- default credential: the ambient Azure identity chain
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import structlog
from azure.core.credentials import AccessToken
from azure.core.credentials_async import AsyncTokenCredential
from azure.eventhub import parse_connection_string
from azure.eventhub.aio import EventHubProducerClient
from azure.identity.aio import DefaultAzureCredential

from ...domain import ConfigurationError, CredentialError
from ...domain.ports import CredentialResolver
from ..logging import sanitize_for_logging
from .eventhub_transport import EventHubTransport

logger = structlog.get_logger()

SHARED_ACCESS_KEY_MARKER = "SharedAccessKey"
EVENTHUBS_SCOPE = "https://eventhubs.azure.net/.default"


class AuthStrategy(str, Enum):
    """How the notifier authenticates against Event Hubs."""

    TOKEN = "token"
    SHARED_ACCESS_KEY = "shared_access_key"
    DEFAULT_CREDENTIAL = "default_credential"


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Connection parameters as supplied by the caller."""

    endpoint_url: str  # Event hub name, or a connection string
    token: str = ""
    namespace: str = ""

    @property
    def strategy(self) -> AuthStrategy:
        # A token takes precedence over a signature embedded in the endpoint
        if self.token:
            return AuthStrategy.TOKEN
        if SHARED_ACCESS_KEY_MARKER in self.endpoint_url:
            return AuthStrategy.SHARED_ACCESS_KEY
        return AuthStrategy.DEFAULT_CREDENTIAL


class StaticTokenCredential(AsyncTokenCredential):
    """
    Credential that always hands out the same bearer token.

    The caller is expected to supply a fresh token when needed,
    so no expiry is set and nothing is refreshed.
    """

    def __init__(self, token: str) -> None:
        self._token = token

    async def get_token(self, *scopes: str, **kwargs) -> AccessToken:
        return AccessToken(self._token, 0)

    async def close(self) -> None:
        pass

    async def __aexit__(self, *args) -> None:
        await self.close()


class DefaultCredentialResolver(CredentialResolver):
    """
    Resolves the ambient identity through DefaultAzureCredential.

    Environment variables, workload identity, managed identity and the
    developer tool caches are tried in the Azure SDK's standard order.
    The credential is probed once so an unusable environment fails here
    rather than on the first send.
    """

    def __init__(self, scope: str = EVENTHUBS_SCOPE, **credential_options) -> None:
        self._scope = scope
        self._credential_options = credential_options

    async def resolve_credential(self) -> AsyncTokenCredential:
        try:
            credential = DefaultAzureCredential(**self._credential_options)
        except ValueError as e:
            raise CredentialError(f"failed to create default azure credential: {e}") from e

        try:
            await credential.get_token(self._scope)
        except asyncio.CancelledError:
            await credential.close()
            raise
        except Exception as e:
            await credential.close()
            raise CredentialError(f"failed to resolve default azure credential: {e}") from e

        return credential


class EventHubAuth(ABC):
    """Resolved authentication state. Immutable once selected."""

    strategy: AuthStrategy

    @abstractmethod
    async def open(self) -> EventHubTransport:
        """
        Open a new producer client.

        Raises:
            ConfigurationError: If the client cannot be built from the parameters
            CredentialError: If no identity could be resolved
        """
        ...


@dataclass(frozen=True)
class TokenAuth(EventHubAuth):
    namespace: str
    eventhub_name: str
    token: str

    strategy = AuthStrategy.TOKEN

    async def open(self) -> EventHubTransport:
        credential = StaticTokenCredential(self.token)
        try:
            producer = EventHubProducerClient(
                fully_qualified_namespace=self.namespace,
                eventhub_name=self.eventhub_name,
                credential=credential,
            )
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"failed to create a eventhub using JWT {e}") from e
        return EventHubTransport(producer, credential)


@dataclass(frozen=True)
class SharedAccessKeyAuth(EventHubAuth):
    connection_string: str

    strategy = AuthStrategy.SHARED_ACCESS_KEY

    async def open(self) -> EventHubTransport:
        try:
            producer = EventHubProducerClient.from_connection_string(self.connection_string)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"failed to create a eventhub using SAS {e}") from e
        return EventHubTransport(producer)


@dataclass(frozen=True)
class DefaultCredentialAuth(EventHubAuth):
    namespace: str
    eventhub_name: str
    credential_resolver: CredentialResolver

    strategy = AuthStrategy.DEFAULT_CREDENTIAL

    async def open(self) -> EventHubTransport:
        credential = await self.credential_resolver.resolve_credential()
        try:
            producer = EventHubProducerClient(
                fully_qualified_namespace=self.namespace,
                eventhub_name=self.eventhub_name,
                credential=credential,
            )
        except (ValueError, TypeError) as e:
            await credential.close()
            raise ConfigurationError(
                f"failed to create a eventhub using default azure credential {e}"
            ) from e
        return EventHubTransport(producer, credential)


def resolve_auth(
    descriptor: ConnectionDescriptor,
    credential_resolver: CredentialResolver | None = None,
) -> EventHubAuth:
    """
    Select the authentication strategy for a connection descriptor.

    Args:
        descriptor: Connection parameters
        credential_resolver: Ambient identity source, DefaultCredentialResolver if None

    Returns:
        The resolved auth state

    Raises:
        ConfigurationError: If a connection string is malformed or lacks an EntityPath
    """
    strategy = descriptor.strategy
    logger.info(
        "Selected event hub auth strategy",
        strategy=strategy.value,
        namespace=descriptor.namespace,
        endpoint=sanitize_for_logging(descriptor.endpoint_url),
    )

    if strategy is AuthStrategy.TOKEN:
        return TokenAuth(
            namespace=descriptor.namespace,
            eventhub_name=descriptor.endpoint_url,
            token=descriptor.token,
        )

    if strategy is AuthStrategy.SHARED_ACCESS_KEY:
        try:
            properties = parse_connection_string(descriptor.endpoint_url)
        except ValueError as e:
            raise ConfigurationError(f"failed to create a eventhub using SAS {e}") from e
        if not properties.eventhub_name:
            raise ConfigurationError(
                "failed to create a eventhub using SAS connection string does not "
                "contain an EntityPath. eventHub cannot be an empty string"
            )
        return SharedAccessKeyAuth(connection_string=descriptor.endpoint_url)

    return DefaultCredentialAuth(
        namespace=descriptor.namespace,
        eventhub_name=descriptor.endpoint_url,
        credential_resolver=credential_resolver or DefaultCredentialResolver(),
    )
