"""Emote fetching, normalization and download."""

from .downloader import download_emotes
from .normalizer import merge_first_wins, normalize
from .provider import get_provider

__all__ = [
    "download_emotes",
    "get_provider",
    "merge_first_wins",
    "normalize",
]
