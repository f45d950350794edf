"""Ports (interfaces) between Paykit and the storage network.

Two narrow capabilities are consumed by the facade operations:

- ``UnauthenticatedTransportRead``: read-only discovery, no session required.
- ``AuthenticatedTransport``: writes scoped to the caller's own storage root.

Below them sits the raw storage boundary (``StorageReader`` / ``StorageWriter``)
that the resolution algorithms and the Pubky adapters are written against.

All are structural ``Protocol`` types: implementations (adapters, mocks,
wrappers adding caching or telemetry) never need to inherit from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..domain.value_objects import EndpointData, MethodId, PublicKey, SupportedPayments


@dataclass(frozen=True)
class StorageEntry:
    """One entry of a directory listing.

    ``path`` is the path within the owner's root (``/pub/paykit.app/v0/lightning``);
    ``address`` is the full address usable for a follow-up ``get``.
    A path ending in ``/`` marks a pseudo-directory.
    """

    path: str
    address: str

    def __str__(self) -> str:
        return self.address

    @property
    def is_directory(self) -> bool:
        return self.path.endswith("/")


@runtime_checkable
class StorageReader(Protocol):
    """Read side of the storage network.

    Missing resources must be signalled with a ``StorageRequestError`` carrying
    status 404 or 410, so callers can tell absence apart from failure.
    """

    async def get(self, address: str) -> bytes:
        """Fetch raw content stored at ``address``."""
        ...

    async def list(self, address: str, shallow: bool = True) -> list[StorageEntry]:
        """Enumerate the children of the directory at ``address``."""
        ...


@runtime_checkable
class StorageWriter(Protocol):
    """Write side of the storage network."""

    async def put(self, address: str, body: bytes | str) -> None:
        """Create or replace content at ``address``."""
        ...

    async def delete(self, address: str) -> None:
        """Remove content at ``address``; fails if nothing is stored there."""
        ...


@runtime_checkable
class UnauthenticatedTransportRead(Protocol):
    """Read-only access to public Paykit data."""

    async def fetch_supported_payments(self, payee: PublicKey) -> SupportedPayments:
        """Fetch the Supported Payments List published by ``payee``."""
        ...

    async def fetch_payment_endpoint(
        self, payee: PublicKey, method: MethodId
    ) -> EndpointData | None:
        """Fetch a single payment endpoint document if it exists."""
        ...

    async def fetch_known_contacts(self, owner: PublicKey) -> list[PublicKey]:
        """Return the contacts (public keys) followed by ``owner``."""
        ...


@runtime_checkable
class AuthenticatedTransport(Protocol):
    """Authenticated write access to the caller's own Paykit data."""

    async def upsert_payment_endpoint(self, method: MethodId, data: EndpointData) -> None:
        """Write or replace the endpoint document for ``method``."""
        ...

    async def remove_payment_endpoint(self, method: MethodId) -> None:
        """Remove the endpoint document for ``method``."""
        ...
