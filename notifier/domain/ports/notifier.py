"""
Outbound port for event notifiers.

The upstream event source depends on this interface and picks the
concrete notifier; infrastructure adapters implement it.
"""

from abc import ABC, abstractmethod

from ..event import Event


class Notifier(ABC):
    """Outbound port for forwarding one event to a notification back-end."""

    @abstractmethod
    async def post(self, event: Event, timeout: float | None = None) -> None:
        """
        Forward an event.

        Args:
            event: The event to forward
            timeout: Optional deadline in seconds for the network operations

        Raises:
            NotifierError: If the event could not be delivered
        """
        ...
