"""Read-only Pubky adapter satisfying ``UnauthenticatedTransportRead``."""

from __future__ import annotations

from ...domain.value_objects import EndpointData, MethodId, PublicKey, SupportedPayments
from ...exceptions import TransportError
from ...utils.config import PaykitSettings
from ..ports import StorageReader
from ..resolution import (
    DEFAULT_MAX_CONCURRENCY,
    resolve_known_contacts,
    resolve_payment_endpoint,
    resolve_supported_payments,
)
from .client import PubkyStorage


class PubkyUnauthenticatedTransport:
    """Adapter around public Pubky storage.

    ``inner`` is any ``StorageReader``; normally a ``PubkyStorage`` without a
    session, but tests and integrators may pass their own.
    """

    def __init__(
        self, inner: StorageReader, *, max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    ):
        self._inner = inner
        self.max_concurrency = max_concurrency

    @classmethod
    def try_new(cls, settings: PaykitSettings | None = None) -> PubkyUnauthenticatedTransport:
        """Build an adapter with a fresh public ``PubkyStorage`` client."""
        try:
            settings = settings or PaykitSettings()
            inner = PubkyStorage.from_settings(settings)
        except Exception as e:
            raise TransportError(
                f"failed to create Pubky public transport: {e}", original_error=e
            ) from e
        return cls(inner, max_concurrency=settings.max_concurrent_fetches)

    @property
    def inner(self) -> StorageReader:
        """The wrapped storage client."""
        return self._inner

    async def fetch_supported_payments(self, payee: PublicKey) -> SupportedPayments:
        return await resolve_supported_payments(
            self._inner, payee, max_concurrency=self.max_concurrency
        )

    async def fetch_payment_endpoint(
        self, payee: PublicKey, method: MethodId
    ) -> EndpointData | None:
        return await resolve_payment_endpoint(self._inner, payee, method)

    async def fetch_known_contacts(self, owner: PublicKey) -> list[PublicKey]:
        return await resolve_known_contacts(self._inner, owner)
