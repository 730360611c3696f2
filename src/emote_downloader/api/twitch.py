"""Twitch Helix API client."""

import asyncio
import logging

import aiohttp

from ..core.errors import ApiError, AuthError
from .base import BaseApiClient, safe_json

logger = logging.getLogger(__name__)


class TwitchApiClient(BaseApiClient):
    """Client for the Twitch Helix API and OAuth token endpoint."""

    BASE_URL = "https://api.twitch.tv/helix"
    AUTH_URL = "https://id.twitch.tv/oauth2"

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        access_token: str = "",
        timeout: int = 0,
    ) -> None:
        super().__init__(timeout)
        self.client_id = client_id
        self.client_secret = client_secret
        self.access_token = access_token

    def get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        return {
            "Client-Id": self.client_id,
            "Authorization": f"Bearer {self.access_token}",
        }

    async def authorize(self) -> str:
        """
        Authorize using client credentials flow.
        Requires client_id and client_secret to be set.

        Returns:
            The new access token, also kept on the client.

        Raises:
            AuthError: if the exchange fails for any reason.
        """
        if not self.client_id or not self.client_secret:
            raise AuthError("Client ID and client secret are required to get a token")

        try:
            async with self.session.post(
                f"{self.AUTH_URL}/token",
                params={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                },
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise AuthError(f"Token request returned HTTP {resp.status}")

                data = await safe_json(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthError(f"Token request failed: {e}") from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise AuthError("Token response did not contain an access token")

        self.access_token = token
        return token

    async def ensure_token(self) -> str:
        """Return the configured token, exchanging client credentials if there is none."""
        if self.access_token:
            return self.access_token
        logger.debug("Token not provided, using client ID and secret to get a token")
        return await self.authorize()

    async def get_user_ids(self, logins: list[str]) -> list[str]:
        """Look up user IDs for login names in a single request.

        IDs are returned in the order the API lists them. Unknown logins
        are simply absent from the result.

        Raises:
            ApiError: if the request fails or the body is not usable JSON.
        """
        if not logins:
            return []

        data = await self.get_json(
            f"{self.BASE_URL}/users",
            headers=self.get_headers(),
            params=[("login", login) for login in logins],
        )
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            raise ApiError("Users response did not contain a data array")

        ids = []
        for user in data["data"]:
            if isinstance(user, dict) and user.get("id"):
                ids.append(str(user["id"]))
        return ids
