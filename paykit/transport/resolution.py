"""Resolution of raw storage listings into Paykit domain results.

Every call that crosses the storage boundary goes through ``fetch_text`` or
``list_entries``. Those two helpers are the only places where a missing resource
is turned into an empty result, and ``is_not_found`` is the only rule deciding
what "missing" means:

- listing of a missing namespace  -> empty collection
- missing or empty document       -> ``None``

Any other failure is raised as ``TransportError`` labelled with the step that
failed.
"""

from __future__ import annotations

import asyncio

from ..domain.value_objects import EndpointData, MethodId, PublicKey, SupportedPayments
from ..exceptions import PaykitError, StorageRequestError, TransportError
from ..utils.logging import get_logger
from .paths import contacts_list_address, payment_endpoint_address, payment_list_address
from .ports import StorageEntry, StorageReader

logger = get_logger(__name__)

NOT_FOUND_STATUS_CODES = frozenset({404, 410})

DEFAULT_MAX_CONCURRENCY = 8


def is_not_found(error: BaseException) -> bool:
    """Return True when ``error`` reports a missing (404) or gone (410) resource."""
    return isinstance(error, StorageRequestError) and error.status_code in NOT_FOUND_STATUS_CODES


def trailing_segment(path: str) -> str | None:
    """Return the last non-empty path segment, or None for ``""`` and ``.../``."""
    segment = path.rsplit("/", 1)[-1]
    return segment or None


def _labelled(label: str, error: Exception) -> TransportError:
    detail = error.message if isinstance(error, PaykitError) else str(error)
    return TransportError(f"{label}: {detail}", original_error=error)


async def fetch_text(storage: StorageReader, address: str, label: str) -> str | None:
    """Fetch a UTF-8 document, returning None when it is missing or empty."""
    try:
        body = await storage.get(address)
    except Exception as e:
        if is_not_found(e):
            return None
        if isinstance(e, PaykitError) and not isinstance(e, TransportError):
            raise
        raise _labelled(label, e) from e

    if not body:
        return None

    try:
        return bytes(body).decode("utf-8")
    except UnicodeDecodeError as e:
        raise _labelled(label, e) from e


async def list_entries(storage: StorageReader, address: str, label: str) -> list[StorageEntry]:
    """Shallow-list ``address``, returning an empty list when it does not exist."""
    try:
        return list(await storage.list(address, shallow=True))
    except Exception as e:
        if is_not_found(e):
            return []
        if isinstance(e, PaykitError) and not isinstance(e, TransportError):
            raise
        raise _labelled(f"{label} send failed", e) from e


def _entry_name(entry: StorageEntry, error_message: str) -> str | None:
    """Trailing segment of a file entry; None for pseudo-directories."""
    if entry.is_directory:
        return None
    name = trailing_segment(entry.path)
    if name is None:
        raise TransportError(error_message, context={"path": entry.path})
    return name


async def resolve_supported_payments(
    storage: StorageReader,
    payee: PublicKey,
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> SupportedPayments:
    """Build the Supported Payments List published by ``payee``.

    Documents are fetched concurrently (at most ``max_concurrency`` at once);
    results are merged into the mapping only after every fetch completed, in
    listing order, so later duplicates win.
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be >= 1")

    entries = await list_entries(storage, payment_list_address(payee), "list supported payments")

    resolved: list[tuple[str, StorageEntry]] = []
    for entry in entries:
        method = _entry_name(entry, "invalid resource returned for supported payment entry")
        if method is not None:
            resolved.append((method, entry))

    semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch_one(method: str, entry: StorageEntry) -> str | None:
        async with semaphore:
            return await fetch_text(storage, str(entry), f"fetch endpoint {method}")

    # A failed fetch cancels its siblings before the error leaves this call
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(fetch_one(method, entry)) for method, entry in resolved]
    except ExceptionGroup as group_error:
        raise group_error.exceptions[0]
    payloads = [task.result() for task in tasks]

    merged: dict[MethodId, EndpointData] = {}
    for (method, entry), payload in zip(resolved, payloads, strict=True):
        if payload is None:
            # Listed but gone (or emptied) before we could read it
            logger.warning(
                "payment_endpoint_vanished",
                payee=str(payee),
                method=method,
                address=entry.address,
            )
            continue
        merged[MethodId(method)] = EndpointData(payload)

    logger.debug("supported_payments_resolved", payee=str(payee), count=len(merged))
    return SupportedPayments(entries=merged)


async def resolve_payment_endpoint(
    storage: StorageReader, payee: PublicKey, method: MethodId
) -> EndpointData | None:
    """Fetch one endpoint document of ``payee``; None if missing or empty."""
    payload = await fetch_text(storage, payment_endpoint_address(payee, method), "fetch endpoint")
    return EndpointData(payload) if payload is not None else None


async def resolve_known_contacts(storage: StorageReader, owner: PublicKey) -> list[PublicKey]:
    """List the contacts followed by ``owner``, in listing order.

    A marker whose name is not a valid public key fails the whole call instead
    of being dropped.
    """
    entries = await list_entries(storage, contacts_list_address(owner), "list known contacts")

    contacts: list[PublicKey] = []
    for entry in entries:
        name = _entry_name(entry, "invalid resource returned for contact entry")
        if name is None:
            continue
        try:
            contacts.append(PublicKey.from_str(name))
        except ValueError as e:
            raise TransportError(
                f"invalid contact entry '{name}': {e}",
                context={"owner": str(owner)},
                original_error=e,
            ) from e

    logger.debug("known_contacts_resolved", owner=str(owner), count=len(contacts))
    return contacts
