"""CloudStack HTTP adapter - signed API calls over aiohttp."""

import base64
import hashlib
import hmac
import json
from typing import Any, Optional
from urllib.parse import quote

import aiohttp
import structlog
from yarl import URL

from zonedef.core.domain.models import CloudStackApiError
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort, item_key_for

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 500


def _encode(value: str) -> str:
    # match java.net.URLEncoder, which also escapes "~"
    return quote(value, safe="*").replace("~", "%7E")


def build_query(params: dict[str, str]) -> str:
    """
    Build the canonical query string.

    Parameters are sorted by lowercased key and their values are
    URL-encoded with spaces as ``%20``.
    """
    return "&".join(
        f"{key}={_encode(params[key])}"
        for key in sorted(params, key=str.lower)
    )


def sign_request(params: dict[str, str], secret: str) -> str:
    """
    Compute a request signature.

    HMAC-SHA1 of the lowercased canonical query, keyed with the
    secret, base64 encoded.

    Args:
        params: Request parameters, ``apikey`` included, ``signature`` excluded
        secret: API secret key

    Returns:
        The signature value
    """
    message = build_query(params).lower().encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), message, hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii").strip()


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class HttpCloudStackAdapter(ICloudStackPort):
    """
    CloudStack API client using aiohttp.

    Every request is a signed GET against the endpoint. List commands
    are paged with ``page``/``pagesize`` until the reported ``count``
    is reached.

    Transport errors (``aiohttp.ClientError``, timeouts) propagate
    unchanged. Errors reported by the API raise CloudStackApiError.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        secret: str,
        timeout: float = 30.0,
        page_size: int = DEFAULT_PAGE_SIZE,
        verify_ssl: bool = True,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize adapter.

        Args:
            endpoint: API URL, e.g. ``http://127.0.0.1:8080/client/api``
            api_key: API key
            secret: API secret key
            timeout: Total timeout per request (seconds)
            page_size: Items requested per page for list commands
            verify_ssl: Verify TLS certificates
            session: Existing session to use; it is not closed by this adapter
        """
        self._endpoint = endpoint
        self._api_key = api_key
        self._secret = secret
        self._timeout = timeout
        self._page_size = page_size
        self._verify_ssl = verify_ssl
        self._session = session
        self._owns_session = session is None

    @property
    def endpoint(self) -> str:
        """API endpoint URL."""
        return self._endpoint

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                connector=aiohttp.TCPConnector(ssl=self._verify_ssl),
            )
            self._owns_session = True
        return self._session

    def signed_url(self, command: str, **params: Any) -> URL:
        """Build the signed request URL for a command."""
        query = {
            key: _stringify(value)
            for key, value in params.items()
            if value is not None
        }
        query["command"] = command
        query["response"] = "json"
        query["apikey"] = self._api_key

        signature = sign_request(query, self._secret)
        raw = f"{build_query(query)}&signature={_encode(signature)}"
        return URL(f"{self._endpoint}?{raw}", encoded=True)

    async def request(self, command: str, **params: Any) -> dict[str, Any]:
        session = self._get_session()
        url = self.signed_url(command, **params)

        logger.debug("cloudstack_request", command=command, params=params)

        async with session.get(url) as resp:
            text = await resp.text()
            status = resp.status

        try:
            body = json.loads(text) if text else {}
        except json.JSONDecodeError as e:
            raise CloudStackApiError(
                command,
                f"invalid JSON response: {text[:200]}",
                status_code=status,
            ) from e

        payload = body.get(f"{command.lower()}response", {}) if isinstance(body, dict) else {}
        if not isinstance(payload, dict):
            payload = {}

        if "errorcode" in payload or status >= 400:
            raise CloudStackApiError(
                command,
                str(payload.get("errortext", text[:200])),
                error_code=payload.get("errorcode"),
                status_code=status,
            )

        return payload

    async def list_resources(self, command: str, **params: Any) -> list[dict[str, Any]]:
        item_key = item_key_for(command)
        items: list[dict[str, Any]] = []
        page = 1

        while True:
            payload = await self.request(
                command,
                page=page,
                pagesize=self._page_size,
                **params,
            )
            batch = payload.get(item_key, [])
            items.extend(batch)

            count = int(payload.get("count", 0))
            if not batch or len(items) >= count:
                break
            page += 1

        logger.debug("cloudstack_list", command=command, count=len(items), pages=page)
        return items

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None
