"""Authenticated Pubky adapter satisfying ``AuthenticatedTransport``."""

from __future__ import annotations

from ...domain.value_objects import EndpointData, MethodId
from ...exceptions import PaykitError, TransportError
from ...utils.logging import get_logger
from ..paths import payment_endpoint_path
from .client import PubkySession

logger = get_logger(__name__)


class PubkyAuthenticatedTransport:
    """Adapter around a ``PubkySession``; writes land under the session owner's root."""

    def __init__(self, session: PubkySession):
        self._session = session

    @classmethod
    def from_session(cls, session: PubkySession) -> PubkyAuthenticatedTransport:
        return cls(session)

    @property
    def session(self) -> PubkySession:
        """The wrapped session, for callers needing direct storage access."""
        return self._session

    async def upsert_payment_endpoint(self, method: MethodId, data: EndpointData) -> None:
        path = payment_endpoint_path(method)
        try:
            await self._session.storage.put(path, data.encode())
        except PaykitError as e:
            raise TransportError(f"put endpoint: {e.message}", original_error=e) from e
        logger.info("payment_endpoint_written", method=str(method), path=path)

    async def remove_payment_endpoint(self, method: MethodId) -> None:
        path = payment_endpoint_path(method)
        try:
            await self._session.storage.delete(path)
        except PaykitError as e:
            raise TransportError(f"delete endpoint: {e.message}", original_error=e) from e
        logger.info("payment_endpoint_removed", method=str(method), path=path)
