"""HTTP client for Pubky homeserver storage.

Implements the raw storage boundary (``get``/``list``/``put``/``delete``) over
the homeserver HTTP API using httpx:

- ``GET  {homeserver}{path}``                 read a file
- ``GET  {homeserver}{dir}/?shallow=true``    list direct children (one URL per line)
- ``PUT  {homeserver}{path}``                 create or replace (session required)
- ``DELETE {homeserver}{path}``               delete, 404 when missing (session required)

The tenant is selected with the ``pubky-host`` header. Resolving a public key
to its homeserver and establishing sessions are left to the caller.
"""

from __future__ import annotations

from types import TracebackType

import httpx

from ...domain.value_objects import PublicKey
from ...exceptions import StorageRequestError, TransportError, wrap_exception
from ...utils.config import PaykitSettings
from ...utils.logging import get_logger
from ..paths import split_address
from ..ports import StorageEntry

logger = get_logger(__name__)

PUBKY_HOST_HEADER = "pubky-host"


class PubkyStorage:
    """Async client for one Pubky homeserver.

    Satisfies both ``StorageReader`` and ``StorageWriter``. Without a session
    cookie it can only read; ``owner`` lets owner-relative paths (``/pub/...``)
    be used, as the authenticated side does.
    """

    def __init__(
        self,
        homeserver_url: str,
        *,
        owner: PublicKey | None = None,
        session_cookie: str | None = None,
        timeout_seconds: float = 30.0,
        connect_timeout_seconds: float = 5.0,
        user_agent: str = "paykit-python/0.1.0",
        client: httpx.AsyncClient | None = None,
    ):
        self.homeserver_url = homeserver_url.rstrip("/")
        self.owner = owner
        self._session_cookie = session_cookie
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds, connect=connect_timeout_seconds),
            headers={"User-Agent": user_agent},
        )

    @classmethod
    def from_settings(
        cls,
        settings: PaykitSettings,
        *,
        owner: PublicKey | None = None,
        session_cookie: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> PubkyStorage:
        if session_cookie is None and settings.session_cookie is not None:
            session_cookie = settings.session_cookie.get_secret_value()
        return cls(
            settings.homeserver_url,
            owner=owner,
            session_cookie=session_cookie,
            timeout_seconds=settings.request_timeout_seconds,
            connect_timeout_seconds=settings.connect_timeout_seconds,
            user_agent=settings.user_agent,
            client=client,
        )

    @property
    def is_authenticated(self) -> bool:
        return self._session_cookie is not None

    async def __aenter__(self) -> PubkyStorage:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    # ------------------------------------------------------------------
    # Storage boundary
    # ------------------------------------------------------------------

    async def get(self, address: str) -> bytes:
        response = await self._request("GET", address)
        return response.content

    async def list(self, address: str, shallow: bool = True) -> list[StorageEntry]:
        if not address.endswith("/"):
            address = f"{address}/"
        params = {"shallow": "true"} if shallow else None
        response = await self._request("GET", address, params=params)
        return self._parse_listing(response.text)

    async def put(self, address: str, body: bytes | str) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        await self._request("PUT", address, content=body, authenticated=True)

    async def delete(self, address: str) -> None:
        await self._request("DELETE", address, authenticated=True)

    async def signout(self) -> None:
        """End the homeserver session this client is authenticated with."""
        if self.owner is None:
            raise TransportError("signout requires an owner public key")
        await self._request("DELETE", f"pubky{self.owner}/session", authenticated=True)
        self._session_cookie = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _target(self, address: str) -> tuple[str, str]:
        try:
            host, path = split_address(address)
        except ValueError as e:
            raise TransportError(str(e), original_error=e) from e

        if host is None:
            if self.owner is None:
                raise TransportError(f"relative path {address!r} requires an owner public key")
            host = str(self.owner)
        return f"{self.homeserver_url}{path}", host

    def _cookie_header(self, host: str) -> str:
        cookie = self._session_cookie or ""
        # A bare session secret is sent under the owner's cookie name
        return cookie if "=" in cookie else f"{host}={cookie}"

    async def _request(
        self,
        method: str,
        address: str,
        *,
        authenticated: bool = False,
        **kwargs,
    ) -> httpx.Response:
        url, host = self._target(address)
        headers = {PUBKY_HOST_HEADER: host}
        if authenticated:
            if self._session_cookie is None:
                raise TransportError(f"{method} {address} requires an authenticated session")
            headers["Cookie"] = self._cookie_header(host)

        try:
            response = await self.client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise wrap_exception(e, f"{method} {url}: {e}", url=url) from e

        logger.debug("storage_request", method=method, url=url, status=response.status_code)

        if response.is_error:
            raise StorageRequestError(
                f"{method} {url} failed with status {response.status_code}: "
                f"{response.text[:200]}",
                status_code=response.status_code,
                url=url,
            )
        return response

    @staticmethod
    def _parse_listing(body: str) -> list[StorageEntry]:
        entries = []
        for line in body.splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                _, path = split_address(line)
            except ValueError as e:
                raise TransportError(f"invalid listing entry {line!r}", original_error=e) from e
            entries.append(StorageEntry(path=path, address=line))
        return entries


class PubkySession:
    """An authenticated homeserver session for ``public_key``.

    Sessions are established elsewhere; this wraps the resulting cookie so
    writes land under the owner's root.
    """

    def __init__(self, public_key: PublicKey, storage: PubkyStorage):
        if storage.owner != public_key:
            raise ValueError("session storage must be owned by the session public key")
        self.public_key = public_key
        self.storage = storage

    @classmethod
    def from_cookie(
        cls,
        public_key: PublicKey,
        cookie: str,
        settings: PaykitSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> PubkySession:
        settings = settings or PaykitSettings()
        storage = PubkyStorage.from_settings(
            settings, owner=public_key, session_cookie=cookie, client=client
        )
        return cls(public_key, storage)

    async def signout(self) -> None:
        await self.storage.signout()
        logger.info("session_signed_out", public_key=str(self.public_key))

    async def aclose(self) -> None:
        await self.storage.aclose()

    def __repr__(self) -> str:
        return f"PubkySession(public_key={self.public_key})"
