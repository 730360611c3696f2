"""Validated options for a single download run."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .models import EmotePlatform
from .settings import DEFAULT_OUTPUT_DIR, Settings

logger = logging.getLogger(__name__)


def split_list(value: str | None) -> list[str]:
    """Split a comma-separated argument, dropping blanks."""
    if value is None:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def mask_secret(value: str | None) -> str:
    """Mask a secret for log output, keeping the last four characters."""
    if not value:
        return "<not set>"
    if len(value) <= 4:
        return "****"
    return "****" + value[-4:]


@dataclass
class RunOptions:
    """Everything the pipeline needs, checked before any network call."""

    platform: EmotePlatform
    output_dir: Path
    client_id: str = ""
    client_secret: str = ""
    token: str = ""
    channel_ids: list[str] = field(default_factory=list)
    channel_names: list[str] = field(default_factory=list)
    request_timeout: int = 0

    @property
    def use_names(self) -> bool:
        """Whether channel names must be looked up (ids take precedence)."""
        return not self.channel_ids

    @property
    def token_required(self) -> bool:
        """Whether a Twitch bearer token is needed for this run."""
        return self.platform == EmotePlatform.TWITCH or self.use_names

    @classmethod
    def from_values(
        cls,
        platform: str | None,
        client_id: str | None = None,
        client_secret: str | None = None,
        token: str | None = None,
        channel_ids: str | None = None,
        channel_names: str | None = None,
        output_dir: str | None = None,
        settings: Settings | None = None,
    ) -> "RunOptions":
        """Validate raw option values, falling back to saved settings.

        Raises:
            ConfigError: if the platform, credentials or channel selection
                are missing or invalid.
        """
        settings = settings or Settings()
        resolved_platform = EmotePlatform.parse(platform)

        client_id = client_id or settings.twitch.client_id or ""
        client_secret = client_secret or settings.twitch.client_secret or ""
        token = token or ""

        token_required = resolved_platform == EmotePlatform.TWITCH or channel_ids is None
        if token_required and not (client_id and (token or client_secret)):
            raise ConfigError(
                "Client ID and Client secret or token and Client ID is required "
                "for Twitch or when using channel names"
            )

        if channel_ids is None and channel_names is None:
            raise ConfigError("Channel IDs or channel names is required")

        ids = split_list(channel_ids)
        names = split_list(channel_names)

        if channel_ids is not None and channel_names is not None:
            logger.debug("Channel IDs and channel names provided, using channel IDs")
        elif channel_ids is not None:
            logger.debug("Channel IDs provided, using channel IDs")
        else:
            logger.debug("Channel names provided, using channel names")

        if channel_ids is not None and not ids:
            raise ConfigError("Channel IDs cannot be empty")
        if channel_ids is None and not names:
            raise ConfigError("Channel names cannot be empty")

        return cls(
            platform=resolved_platform,
            output_dir=resolve_output_dir(output_dir or settings.output_dir),
            client_id=client_id,
            client_secret=client_secret,
            token=token,
            channel_ids=ids,
            channel_names=[] if ids else names,
            request_timeout=settings.request_timeout,
        )

    def log_summary(self) -> None:
        """Echo the run parameters at debug level."""
        logger.debug(f"Platform: {self.platform.value}")
        logger.debug(f"Client ID: {self.client_id or '<not set>'}")
        logger.debug(f"Client Secret: {mask_secret(self.client_secret)}")
        logger.debug(f"Token: {mask_secret(self.token)}")
        logger.debug(f"Channel IDs: {','.join(self.channel_ids) or '<not set>'}")
        logger.debug(f"Channel Names: {','.join(self.channel_names) or '<not set>'}")
        logger.debug(f"Output Directory: {self.output_dir}")


def resolve_output_dir(value: str | None) -> Path:
    """Resolve the output directory, defaulting to ./emotes."""
    if not value:
        logger.debug("Output directory not provided, using ./emotes")
        return Path.cwd() / DEFAULT_OUTPUT_DIR
    return Path(value).expanduser()


def ensure_output_dir(path: Path) -> Path:
    """Create the output directory if it doesn't exist.

    Raises:
        ConfigError: if the path exists as a file or cannot be created.
    """
    if not path.is_dir():
        logger.debug(f"Output directory does not exist, creating: {path}")
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Cannot create output directory {path}: {e}") from e
    return path
