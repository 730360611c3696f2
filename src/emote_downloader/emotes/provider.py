"""Emote providers for Twitch, 7TV, BTTV, and FFZ.

A provider knows where a platform keeps a channel's emote list and how to
ask for it. Parsing the response is left to the normalizer.
"""

import logging
from abc import ABC, abstractmethod

from ..api.base import BaseApiClient
from ..api.twitch import TwitchApiClient
from ..core.models import EmotePlatform

logger = logging.getLogger(__name__)


class BaseEmoteProvider(ABC):
    """Base class for emote providers."""

    def __init__(self, client: BaseApiClient) -> None:
        self.client = client

    @property
    @abstractmethod
    def platform(self) -> EmotePlatform:
        """Platform this provider fetches from."""

    @abstractmethod
    def channel_url(self, channel_id: str) -> str:
        """URL of the channel emote list."""

    def get_headers(self) -> dict[str, str] | None:
        """Headers for the emote list request. Unauthenticated by default."""
        return None

    async def fetch_channel_emotes(self, channel_id: str) -> str:
        """Fetch the raw channel emote list.

        Raises:
            ApiError: if the request fails or returns a non-2xx status.
        """
        url = self.channel_url(channel_id)
        logger.debug(f"Fetching {self.platform.value} emotes from {url}")
        return await self.client.get_text(url, headers=self.get_headers())


class TwitchProvider(BaseEmoteProvider):
    """Native Twitch emote provider using Helix API."""

    client: TwitchApiClient

    @property
    def platform(self) -> EmotePlatform:
        return EmotePlatform.TWITCH

    def channel_url(self, channel_id: str) -> str:
        return f"{TwitchApiClient.BASE_URL}/chat/emotes?broadcaster_id={channel_id}"

    def get_headers(self) -> dict[str, str]:
        return self.client.get_headers()


class BTTVProvider(BaseEmoteProvider):
    """BetterTTV emote provider."""

    BASE_URL = "https://api.betterttv.net/3"

    @property
    def platform(self) -> EmotePlatform:
        return EmotePlatform.BTTV

    def channel_url(self, channel_id: str) -> str:
        # BTTV uses Twitch user IDs for channel lookup
        return f"{self.BASE_URL}/cached/users/twitch/{channel_id}"


class FFZProvider(BaseEmoteProvider):
    """FrankerFaceZ emote provider, served through the BTTV cache."""

    BASE_URL = "https://api.betterttv.net/3"

    @property
    def platform(self) -> EmotePlatform:
        return EmotePlatform.FFZ

    def channel_url(self, channel_id: str) -> str:
        return f"{self.BASE_URL}/cached/frankerfacez/users/twitch/{channel_id}"


class SevenTVProvider(BaseEmoteProvider):
    """7TV emote provider."""

    BASE_URL = "https://api.7tv.app/v2"

    @property
    def platform(self) -> EmotePlatform:
        return EmotePlatform.SEVENTV

    def channel_url(self, channel_id: str) -> str:
        return f"{self.BASE_URL}/users/{channel_id}/emotes"


_PROVIDERS: dict[EmotePlatform, type[BaseEmoteProvider]] = {
    EmotePlatform.TWITCH: TwitchProvider,
    EmotePlatform.BTTV: BTTVProvider,
    EmotePlatform.FFZ: FFZProvider,
    EmotePlatform.SEVENTV: SevenTVProvider,
}


def get_provider(platform: EmotePlatform, client: TwitchApiClient) -> BaseEmoteProvider:
    """Create the provider for a platform."""
    return _PROVIDERS[platform](client)
