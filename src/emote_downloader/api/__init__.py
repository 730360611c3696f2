"""API clients for streaming platforms."""

from .base import BaseApiClient
from .twitch import TwitchApiClient

__all__ = [
    "BaseApiClient",
    "TwitchApiClient",
]
