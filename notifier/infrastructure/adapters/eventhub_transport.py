from azure.core.credentials_async import AsyncTokenCredential
from azure.eventhub.aio import EventHubProducerClient


class EventHubTransport:
    """
    A producer client together with the credential it was built from.

    Owned by a single publish call and closed once at its end.
    """

    def __init__(
        self,
        producer: EventHubProducerClient,
        credential: AsyncTokenCredential | None = None,
    ) -> None:
        self._producer = producer
        self._credential = credential

    @property
    def producer(self) -> EventHubProducerClient:
        return self._producer

    async def close(self) -> None:
        """Close the producer, then the credential it owns."""
        try:
            await self._producer.close()
        finally:
            if self._credential is not None:
                await self._credential.close()
