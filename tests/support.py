"""Test doubles shared across the Paykit test suite.

Provides an in-memory stand-in for Pubky homeserver storage so the Paykit
operations can be exercised end to end without a network.
"""

import secrets

from paykit.domain.value_objects import PublicKey
from paykit.exceptions import StorageRequestError, TransportError
from paykit.transport.paths import split_address
from paykit.transport.ports import StorageEntry


def random_public_key() -> PublicKey:
    """Generate a fresh, valid public key."""
    return PublicKey.from_bytes(secrets.token_bytes(32))


class InMemoryStorage:
    """Homeserver-like storage keyed by ``(owner, path)``.

    Mirrors the homeserver semantics Paykit relies on:
    - ``get`` of a missing file and ``list`` of an empty directory answer 404
    - ``delete`` of a missing file answers 404
    - shallow listings report sub-directories as paths ending in ``/``
    """

    def __init__(self, owner: PublicKey | None = None, files: dict | None = None):
        self.owner = owner
        self.files: dict[tuple[str, str], bytes] = files if files is not None else {}
        self.calls: list[tuple[str, str]] = []

    def bound_to(self, owner: PublicKey) -> "InMemoryStorage":
        """View of the same files whose relative paths resolve to ``owner``."""
        view = InMemoryStorage(owner=owner, files=self.files)
        view.calls = self.calls
        return view

    def _key(self, address: str) -> tuple[str, str]:
        host, path = split_address(address)
        if host is None:
            if self.owner is None:
                raise TransportError(f"relative path {address!r} requires an owner public key")
            host = str(self.owner)
        return host, path

    def _not_found(self, address: str) -> StorageRequestError:
        return StorageRequestError(f"{address} not found", status_code=404, url=address)

    async def get(self, address: str) -> bytes:
        self.calls.append(("get", address))
        key = self._key(address)
        if key not in self.files:
            raise self._not_found(address)
        return self.files[key]

    async def list(self, address: str, shallow: bool = True) -> list[StorageEntry]:
        self.calls.append(("list", address))
        host, directory = self._key(address)
        if not directory.endswith("/"):
            directory = f"{directory}/"

        entries: dict[str, StorageEntry] = {}
        for owner, path in self.files:
            if owner != host or not path.startswith(directory):
                continue
            rest = path[len(directory) :]
            if shallow and "/" in rest:
                child = f"{directory}{rest.split('/', 1)[0]}/"
            else:
                child = path
            entries[child] = StorageEntry(path=child, address=f"pubky://{owner}{child}")

        if not entries:
            raise self._not_found(address)
        return list(entries.values())

    async def put(self, address: str, body: bytes | str) -> None:
        self.calls.append(("put", address))
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.files[self._key(address)] = body

    async def delete(self, address: str) -> None:
        self.calls.append(("delete", address))
        key = self._key(address)
        if key not in self.files:
            raise self._not_found(address)
        del self.files[key]

    def seed(self, owner: PublicKey, path: str, body: bytes | str = b"") -> None:
        """Store a file directly, bypassing the write capability."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.files[(str(owner), path)] = body


