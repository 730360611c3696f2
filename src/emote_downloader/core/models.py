"""Core data models for Emote Downloader."""

from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigError

DEFAULT_EXTENSION = "png"


class EmotePlatform(str, Enum):
    """Supported emote platforms."""

    TWITCH = "twitch"
    BTTV = "bttv"
    FFZ = "ffz"
    SEVENTV = "7tv"

    @classmethod
    def parse(cls, value: str | None) -> "EmotePlatform":
        """Resolve a user-supplied platform name, ignoring case."""
        if value is None:
            raise ConfigError("Platform is required")
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigError(f"Invalid platform: {value}") from None


@dataclass(frozen=True)
class Emote:
    """A single emote image to download."""

    name: str  # Text code (e.g., "KEKW")
    url: str
    extension: str = DEFAULT_EXTENSION

    @property
    def filename(self) -> str:
        """Get the file name this emote is written to."""
        safe_name = self.name.replace("/", "_").replace("\\", "_").replace("\0", "_")
        if safe_name in (".", ".."):
            safe_name = safe_name.replace(".", "_")
        return f"{safe_name}.{self.extension}"


# Emote name -> Emote, in insertion order
EmoteCollection = dict[str, Emote]


@dataclass
class DownloadFailure:
    """An emote that could not be downloaded."""

    emote: Emote
    error: str


@dataclass
class DownloadResult:
    """Outcome of a bulk download."""

    downloaded: list[Emote] = field(default_factory=list)
    failures: list[DownloadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.downloaded) + len(self.failures)
