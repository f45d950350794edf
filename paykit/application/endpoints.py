"""Public Paykit operations.

Each operation validates its inputs, delegates to an injected capability and
passes the result through untouched. Transport failures are re-raised with the
operation name prefixed so the call chain stays traceable; no retries, caching
or payload validation happen here.

Example:
    >>> reader = PubkyUnauthenticatedTransport.try_new()
    >>> payments = await get_payment_list(reader, payee)
    >>> for method, data in payments.entries.items():
    ...     print(method, data)
"""

from __future__ import annotations

import copy

from ..domain.value_objects import EndpointData, MethodId, PublicKey, SupportedPayments
from ..exceptions import PaykitError, TransportError
from ..transport.ports import AuthenticatedTransport, UnauthenticatedTransportRead
from ..utils.logging import LogPerformance, get_logger

logger = get_logger(__name__)


def map_transport_error(label: str, error: PaykitError) -> PaykitError:
    """Prefix a ``TransportError`` message with ``label``; other kinds pass through.

    The returned error keeps the concrete class and attributes of ``error``.
    """
    if isinstance(error, TransportError):
        labelled = copy.copy(error)
        labelled.message = f"{label}: {error.message}"
        labelled.args = (labelled.message,)
        labelled.context = dict(error.context)
        return labelled
    return error


async def set_payment_endpoint(
    client: AuthenticatedTransport,
    method: MethodId | str,
    data: EndpointData | str,
) -> None:
    """Store or update a payment endpoint via the authenticated client.

    Example:
        >>> await set_payment_endpoint(writer, "lightning", '{"bolt11":"ln..."}')
    """
    method = MethodId.coerce(method)
    data = EndpointData.coerce(data)

    with LogPerformance("set_payment_endpoint", logger, method=str(method)):
        try:
            await client.upsert_payment_endpoint(method, data)
        except TransportError as e:
            raise map_transport_error("set_payment_endpoint", e) from e


async def remove_payment_endpoint(client: AuthenticatedTransport, method: MethodId | str) -> None:
    """Remove a payment endpoint via the authenticated client.

    Removing an endpoint that was never published raises ``TransportError``;
    check with ``get_payment_endpoint`` first if idempotent removal is wanted.
    """
    method = MethodId.coerce(method)

    with LogPerformance("remove_payment_endpoint", logger, method=str(method)):
        try:
            await client.remove_payment_endpoint(method)
        except TransportError as e:
            raise map_transport_error("remove_payment_endpoint", e) from e


async def get_payment_list(
    reader: UnauthenticatedTransportRead, payee: PublicKey | str
) -> SupportedPayments:
    """Retrieve all supported payment methods of ``payee``.

    Semantics:
        - Empty result when the payee published nothing or has no Paykit
          directory yet.
        - ``TransportError`` on network or protocol failures.
    """
    payee = PublicKey.coerce(payee)

    with LogPerformance("get_payment_list", logger, payee=str(payee)):
        try:
            return await reader.fetch_supported_payments(payee)
        except TransportError as e:
            raise map_transport_error("get_payment_list", e) from e


async def get_payment_endpoint(
    reader: UnauthenticatedTransportRead,
    payee: PublicKey | str,
    method: MethodId | str,
) -> EndpointData | None:
    """Retrieve the endpoint ``payee`` publishes for ``method``.

    Semantics:
        - ``None`` when the endpoint file is missing or empty.
        - ``TransportError`` only when the transport itself fails.
    """
    payee = PublicKey.coerce(payee)
    method = MethodId.coerce(method)

    with LogPerformance("get_payment_endpoint", logger, payee=str(payee), method=str(method)):
        try:
            return await reader.fetch_payment_endpoint(payee, method)
        except TransportError as e:
            raise map_transport_error("get_payment_endpoint", e) from e


async def get_known_contacts(
    reader: UnauthenticatedTransportRead, key: PublicKey | str
) -> list[PublicKey]:
    """Return the known contacts of ``key``.

    Empty when nothing is stored under the follows path. A malformed contact
    entry raises ``TransportError``.
    """
    key = PublicKey.coerce(key)

    with LogPerformance("get_known_contacts", logger, owner=str(key)):
        try:
            return await reader.fetch_known_contacts(key)
        except TransportError as e:
            raise map_transport_error("get_known_contacts", e) from e
