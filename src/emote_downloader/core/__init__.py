"""Core models and utilities for Emote Downloader."""

from .errors import ApiError, AuthError, ConfigError, DownloadError, EmoteDownloaderError
from .models import DownloadFailure, DownloadResult, Emote, EmoteCollection, EmotePlatform
from .options import RunOptions
from .settings import Settings

__all__ = [
    "ApiError",
    "AuthError",
    "ConfigError",
    "DownloadError",
    "EmoteDownloaderError",
    "DownloadFailure",
    "DownloadResult",
    "Emote",
    "EmoteCollection",
    "EmotePlatform",
    "RunOptions",
    "Settings",
]
