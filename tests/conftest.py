"""
Pytest configuration and shared fixtures.

Reader and writer fixtures share one in-memory storage, so data written
through the authenticated transport is visible to the public one.
"""

import pytest

from paykit.domain.value_objects import PublicKey
from paykit.transport.pubky.authenticated_transport import PubkyAuthenticatedTransport
from paykit.transport.pubky.client import PubkySession
from paykit.transport.pubky.unauthenticated_transport import PubkyUnauthenticatedTransport
from tests.support import InMemoryStorage, random_public_key


@pytest.fixture
def storage() -> InMemoryStorage:
    """Empty in-memory storage shared by reader and writer fixtures."""
    return InMemoryStorage()


@pytest.fixture
def public_key() -> PublicKey:
    """Identity of the payee owning the session."""
    return random_public_key()


@pytest.fixture
def session(storage: InMemoryStorage, public_key: PublicKey) -> PubkySession:
    """Authenticated session writing into the shared in-memory storage."""
    return PubkySession(public_key, storage.bound_to(public_key))


@pytest.fixture
def writer(session: PubkySession) -> PubkyAuthenticatedTransport:
    return PubkyAuthenticatedTransport(session)


@pytest.fixture
def reader(storage: InMemoryStorage) -> PubkyUnauthenticatedTransport:
    return PubkyUnauthenticatedTransport(storage)
