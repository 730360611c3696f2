"""Errors raised while downloading emotes.

Each error carries the process exit code ``main()`` reports for it.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import DownloadResult

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_VERSION = 2
EXIT_API_ERROR = 3
EXIT_DOWNLOAD_ERROR = 4


class EmoteDownloaderError(Exception):
    """Base class for all Emote Downloader errors."""

    exit_code = EXIT_API_ERROR


class ConfigError(EmoteDownloaderError):
    """Missing or invalid command-line arguments."""

    exit_code = EXIT_CONFIG_ERROR


class AuthError(EmoteDownloaderError):
    """The OAuth token exchange failed."""

    exit_code = EXIT_API_ERROR


class ApiError(EmoteDownloaderError):
    """A metadata request failed or returned an unusable body."""

    exit_code = EXIT_API_ERROR

    def __init__(self, message: str, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class DownloadError(EmoteDownloaderError):
    """One or more emote files could not be downloaded."""

    exit_code = EXIT_DOWNLOAD_ERROR

    def __init__(self, result: "DownloadResult") -> None:
        super().__init__(
            f"{len(result.failures)} of {result.total} emote downloads failed"
        )
        self.result = result
