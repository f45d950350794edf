"""Pubky adapters for the Paykit transport protocols."""

from ..paths import PAYKIT_PATH_PREFIX, PUBKY_FOLLOWS_PATH
from .authenticated_transport import PubkyAuthenticatedTransport
from .client import PubkySession, PubkyStorage
from .unauthenticated_transport import PubkyUnauthenticatedTransport

__all__ = [
    "PAYKIT_PATH_PREFIX",
    "PUBKY_FOLLOWS_PATH",
    "PubkyAuthenticatedTransport",
    "PubkyUnauthenticatedTransport",
    "PubkySession",
    "PubkyStorage",
]
