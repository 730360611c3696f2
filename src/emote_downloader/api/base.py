"""Base API client interface."""

import asyncio
import json
import logging

import aiohttp

from ..core.errors import ApiError

logger = logging.getLogger(__name__)


async def safe_json(resp: aiohttp.ClientResponse) -> dict | list | None:
    """Safely parse JSON from response, returning None on error.

    This handles common error cases:
    - HTML error pages (ContentTypeError)
    - Malformed JSON (JSONDecodeError)
    - Empty responses

    Args:
        resp: aiohttp response object

    Returns:
        Parsed JSON data or None if parsing failed
    """
    try:
        return await resp.json(content_type=None)
    except (aiohttp.ContentTypeError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to parse JSON response: {e}")
        return None


def create_session(timeout: int = 0, limit: int = 0) -> aiohttp.ClientSession:
    """Create an HTTP session.

    Args:
        timeout: Total timeout per request in seconds, 0 for none.
        limit: Maximum simultaneous connections, 0 for unlimited.
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout or None)
    connector = aiohttp.TCPConnector(limit=limit)
    return aiohttp.ClientSession(timeout=client_timeout, connector=connector)


async def close_session(session: aiohttp.ClientSession | None) -> None:
    """Close an HTTP session if it is still open."""
    if session is None or session.closed:
        return
    await session.close()
    # Allow time for underlying connections to fully close
    # This prevents "Unclosed connector" warnings from aiohttp
    await asyncio.sleep(0.1)


class BaseApiClient:
    """Shared session handling for the platform API clients."""

    def __init__(self, timeout: int = 0) -> None:
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = create_session(self._timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        try:
            await close_session(self._session)
        finally:
            self._session = None

    async def get_text(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: list[tuple[str, str]] | dict[str, str] | None = None,
    ) -> str:
        """GET a URL and return the response body.

        Raises:
            ApiError: on transport errors, a non-2xx status or a body that
                is not valid text.
        """
        try:
            async with self.session.get(url, headers=headers, params=params) as resp:
                if not 200 <= resp.status < 300:
                    raise ApiError(f"GET {url} returned HTTP {resp.status}", url, resp.status)
                return await resp.text()
        except UnicodeDecodeError as e:
            raise ApiError(f"GET {url} returned an undecodable body: {e}", url) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ApiError(f"GET {url} failed: {e}", url) from e

    async def get_json(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: list[tuple[str, str]] | dict[str, str] | None = None,
    ) -> dict | list:
        """GET a URL and parse the body as JSON.

        Raises:
            ApiError: on transport errors, a non-2xx status or a non-JSON body.
        """
        text = await self.get_text(url, headers=headers, params=params)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ApiError(f"GET {url} did not return JSON: {e}", url) from e
