"""
Outbound port for ambient credential resolution.

Lets the notifier obtain an identity from the hosting environment
without knowing which provider chain produced it.
"""

from abc import ABC, abstractmethod

from azure.core.credentials_async import AsyncTokenCredential


class CredentialResolver(ABC):
    """Outbound port for resolving an ambient identity."""

    @abstractmethod
    async def resolve_credential(self) -> AsyncTokenCredential:
        """
        Resolve a credential from the execution environment.

        Returns:
            A credential the caller owns and must close

        Raises:
            CredentialError: If no identity could be resolved
        """
        ...
