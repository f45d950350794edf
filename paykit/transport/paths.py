"""Storage layout conventions for Paykit on Pubky.

Under a payee's storage root:

    /pub/paykit.app/v0/<method_id>       -> UTF-8 endpoint descriptor
    /pub/pubky.app/follows/<public_key>  -> empty marker file per known contact

``v0`` is the protocol version marker. An incompatible layout must use a new
version segment instead of changing what ``v0`` means.
"""

from __future__ import annotations

from ..domain.value_objects import MethodId, PublicKey

PUBKY_SCHEME = "pubky"

PAYKIT_PATH_PREFIX = "/pub/paykit.app/v0/"
PUBKY_FOLLOWS_PATH = "/pub/pubky.app/follows/"


def _address(owner: PublicKey | str, path: str) -> str:
    return f"{PUBKY_SCHEME}{owner}{path}"


def payment_endpoint_path(method: MethodId) -> str:
    """Path of a payment endpoint relative to the owner's root."""
    return f"{PAYKIT_PATH_PREFIX}{method}"


def payment_endpoint_address(payee: PublicKey, method: MethodId) -> str:
    return _address(payee, payment_endpoint_path(method))


def payment_list_address(payee: PublicKey) -> str:
    """Listing address holding every payment endpoint of ``payee``."""
    return _address(payee, PAYKIT_PATH_PREFIX)


def contact_path(contact: PublicKey) -> str:
    return f"{PUBKY_FOLLOWS_PATH}{contact}"


def contact_address(owner: PublicKey, contact: PublicKey) -> str:
    return _address(owner, contact_path(contact))


def contacts_list_address(owner: PublicKey) -> str:
    """Listing address holding one marker file per contact of ``owner``."""
    return _address(owner, PUBKY_FOLLOWS_PATH)


def split_address(address: str) -> tuple[str | None, str]:
    """Split an address into ``(owner, path)``.

    Accepts ``pubky<pk>/path``, ``pubky://<pk>/path`` and owner-relative
    ``/path``. The owner is returned unparsed; relative paths yield ``None``.

    Raises:
        ValueError: If the address has none of these forms.
    """
    if address.startswith("/"):
        return None, address

    if not address.startswith(PUBKY_SCHEME):
        raise ValueError(f"Unsupported storage address: {address!r}")

    rest = address[len(PUBKY_SCHEME) :]
    if rest.startswith("://"):
        rest = rest[3:]

    owner, sep, path = rest.partition("/")
    if not owner or not sep:
        raise ValueError(f"Storage address has no path: {address!r}")
    return owner, f"/{path}"
