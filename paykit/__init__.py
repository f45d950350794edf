"""Paykit: payment endpoint discovery over Pubky storage.

A stateless SDK for the transport layer of the Paykit protocol. Payees publish
one document per payment method under ``/pub/paykit.app/v0/`` in their Pubky
storage; payers list and read them. The high-level helpers
(``get_payment_list``, ``set_payment_endpoint``, ...) work with any object
implementing ``UnauthenticatedTransportRead`` or ``AuthenticatedTransport``;
Pubky adapters are included, and sessions, caching or telemetry stay with the
integrator.
"""

__version__ = "0.1.0"

from .application.endpoints import (
    get_known_contacts,
    get_payment_endpoint,
    get_payment_list,
    remove_payment_endpoint,
    set_payment_endpoint,
)
from .domain.value_objects import EndpointData, MethodId, PublicKey, SupportedPayments
from .exceptions import PaykitError, StorageRequestError, TransportError, UnimplementedError
from .transport import (
    AuthenticatedTransport,
    PubkyAuthenticatedTransport,
    PubkySession,
    PubkyStorage,
    PubkyUnauthenticatedTransport,
    UnauthenticatedTransportRead,
)

__all__ = [
    "__version__",
    # Operations
    "get_payment_list",
    "get_payment_endpoint",
    "get_known_contacts",
    "set_payment_endpoint",
    "remove_payment_endpoint",
    # Domain
    "EndpointData",
    "MethodId",
    "PublicKey",
    "SupportedPayments",
    # Errors
    "PaykitError",
    "TransportError",
    "StorageRequestError",
    "UnimplementedError",
    # Transports
    "AuthenticatedTransport",
    "UnauthenticatedTransportRead",
    "PubkyAuthenticatedTransport",
    "PubkyUnauthenticatedTransport",
    "PubkySession",
    "PubkyStorage",
]
