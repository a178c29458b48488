from .credential_resolver import CredentialResolver
from .notifier import Notifier

__all__ = [
    "CredentialResolver",
    "Notifier",
]
