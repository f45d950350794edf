"""Transport abstractions used by Paykit.

Exposes the capability protocols callers implement, the storage layout
conventions, and the Pubky adapters that satisfy the protocols out of the box.
"""

from .ports import (
    AuthenticatedTransport,
    StorageEntry,
    StorageReader,
    StorageWriter,
    UnauthenticatedTransportRead,
)
from .pubky import (
    PubkyAuthenticatedTransport,
    PubkySession,
    PubkyStorage,
    PubkyUnauthenticatedTransport,
)

__all__ = [
    "AuthenticatedTransport",
    "UnauthenticatedTransportRead",
    "StorageEntry",
    "StorageReader",
    "StorageWriter",
    "PubkyAuthenticatedTransport",
    "PubkyUnauthenticatedTransport",
    "PubkySession",
    "PubkyStorage",
]
