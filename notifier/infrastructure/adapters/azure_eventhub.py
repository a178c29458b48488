"""
Azure Event Hubs notifier.

Forwards each notification event as a single-item batch. Every post
owns its producer client and closes it before returning, whatever
happened before, and reports a failed close alongside any publish error.
"""

import asyncio

import structlog
from azure.eventhub import EventData
from azure.eventhub.aio import EventHubProducerClient

from ...domain import (
    Event,
    NotifierError,
    PublishStage,
    SerializationError,
    TransportError,
    combine,
    encode_event,
)
from ...domain.ports import CredentialResolver, Notifier
from ..logging import Timer, logging_involved_object
from .eventhub_auth import AuthStrategy, ConnectionDescriptor, EventHubAuth, resolve_auth
from .eventhub_transport import EventHubTransport

logger = structlog.get_logger()


def _reason(error: Exception) -> str:
    if isinstance(error, TimeoutError):
        return "deadline exceeded"
    return str(error)


def _deadline(timeout: float | None) -> float | None:
    if timeout is None:
        return None
    return asyncio.get_running_loop().time() + timeout


async def _open(auth: EventHubAuth, deadline: float | None) -> EventHubTransport:
    try:
        async with asyncio.timeout_at(deadline):
            return await auth.open()
    except TimeoutError as e:
        raise TransportError(
            f"failed to open event hub producer: {_reason(e)}", PublishStage.OPEN
        ) from e


class AzureEventHubNotifier(Notifier):
    """Event Hubs implementation of the Notifier port."""

    def __init__(self, auth: EventHubAuth, transport: EventHubTransport | None = None) -> None:
        """
        Initialize with resolved auth state.

        Prefer `create`, which resolves the auth and opens the first client.

        Args:
            auth: Resolved authentication state
            transport: Client opened at construction, used by the first post
        """
        self._auth = auth
        self._transport = transport

    @classmethod
    async def create(
        cls,
        endpoint_url: str,
        token: str = "",
        namespace: str = "",
        credential_resolver: CredentialResolver | None = None,
        timeout: float | None = None,
    ) -> "AzureEventHubNotifier":
        """
        Build a notifier and open its producer client.

        Args:
            endpoint_url: Event hub name, or a connection string with SharedAccessKey
            token: Bearer token, empty unless JWT auth is used
            namespace: Fully qualified Event Hubs namespace
            credential_resolver: Ambient identity source for default credential auth
            timeout: Optional deadline in seconds for resolving the identity

        Raises:
            ConfigurationError: If the connection parameters are malformed
            CredentialError: If no identity could be resolved
            TransportError: If the deadline passed while opening the client
        """
        descriptor = ConnectionDescriptor(endpoint_url=endpoint_url, token=token, namespace=namespace)
        auth = resolve_auth(descriptor, credential_resolver)
        transport = await _open(auth, _deadline(timeout))
        return cls(auth, transport)

    @property
    def strategy(self) -> AuthStrategy:
        return self._auth.strategy

    async def post(self, event: Event, timeout: float | None = None) -> None:
        """
        Publish an event to the event hub.

        Commit status update events are skipped. The producer client is
        closed on every path. The timeout covers opening the client,
        creating the batch and sending it.

        Raises:
            ConfigurationError: If a new client cannot be built
            CredentialError: If no identity could be resolved for a new client
            SerializationError: If the event cannot be encoded
            TransportError: If opening, batching, sending or closing fails
            AggregateError: If publishing and closing both fail
        """
        deadline = _deadline(timeout)

        with logging_involved_object(event.involved_object):
            transport = await self._take_transport(deadline)

            error: NotifierError | None = None
            try:
                await self._publish(transport.producer, event, deadline)
            except NotifierError as e:
                error = e
            finally:
                close_error = await self._close(transport)

            result = combine(error, close_error)
            if result is not None:
                logger.error("Event hub post failed", reason=event.reason, error=str(result))
                raise result

    async def aclose(self) -> None:
        """
        Close the client opened at construction if no post has used it.

        Raises:
            TransportError: If closing fails
        """
        transport, self._transport = self._transport, None
        if transport is None:
            return
        error = await self._close(transport)
        if error is not None:
            raise error

    async def _take_transport(self, deadline: float | None) -> EventHubTransport:
        """Hand out the client opened at construction once, then open new ones."""
        transport, self._transport = self._transport, None
        if transport is None:
            transport = await _open(self._auth, deadline)
        return transport

    async def _publish(
        self,
        producer: EventHubProducerClient,
        event: Event,
        deadline: float | None,
    ) -> None:
        # Skip Git commit status update event
        if event.is_commit_status_update():
            logger.debug("Skipping commit status update event")
            return

        try:
            payload = encode_event(event)
        except Exception as e:
            raise SerializationError(f"unable to marshall event: {e}") from e

        try:
            async with asyncio.timeout_at(deadline):
                batch = await producer.create_batch()
        except Exception as e:
            raise TransportError(
                f"failed to create new event data batch: {_reason(e)}", PublishStage.BATCH
            ) from e

        try:
            batch.add(EventData(payload))
        except Exception as e:
            raise TransportError(f"failed to add event data: {_reason(e)}", PublishStage.ADD) from e

        with Timer() as t:
            try:
                async with asyncio.timeout_at(deadline):
                    await producer.send_batch(batch)
            except Exception as e:
                raise TransportError(f"failed to send msg: {_reason(e)}", PublishStage.SEND) from e

        logger.info("Event sent to event hub", size_bytes=len(payload), duration_ms=t.duration_ms)

    async def _close(self, transport: EventHubTransport) -> TransportError | None:
        try:
            await transport.close()
        except Exception as e:
            logger.warning("Failed to close event hub producer", error=str(e))
            error = TransportError(f"failed to close event hub producer: {e}", PublishStage.CLOSE)
            error.__cause__ = e
            return error
        return None
