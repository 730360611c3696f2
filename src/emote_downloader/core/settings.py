"""Settings management for Emote Downloader."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from appdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "emote-downloader"
APP_AUTHOR = "emote-downloader"

DEFAULT_OUTPUT_DIR = "emotes"


def get_config_dir() -> Path:
    """Get the configuration directory."""
    return Path(user_config_dir(APP_NAME, APP_AUTHOR))


@dataclass
class TwitchSettings:
    """Twitch API settings."""

    client_id: str = ""
    client_secret: str = ""


@dataclass
class Settings:
    """Persisted defaults for command-line options."""

    output_dir: str = ""  # empty = ./emotes in the working directory
    request_timeout: int = 0  # seconds, 0 = no total timeout
    twitch: TwitchSettings = field(default_factory=TwitchSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from file."""
        from .credential_store import KEY_TWITCH_CLIENT_SECRET, get_secret, is_available

        if path is None:
            path = get_config_dir() / "settings.json"

        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            settings = cls._from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable settings file {path}: {e}")
            return cls()

        # Keyring overrides JSON values
        if is_available():
            secret = get_secret(KEY_TWITCH_CLIENT_SECRET)
            if secret:
                settings.twitch.client_secret = secret

        return settings

    def save(self, path: Path | None = None) -> None:
        """Save settings to file."""
        from .credential_store import (
            KEY_TWITCH_CLIENT_SECRET,
            is_available,
            secure_file_permissions,
            store_secret,
        )

        if path is None:
            path = get_config_dir() / "settings.json"

        path.parent.mkdir(parents=True, exist_ok=True)

        use_keyring = is_available() and store_secret(
            KEY_TWITCH_CLIENT_SECRET, self.twitch.client_secret
        )

        # Atomic write: write to temp file then rename to prevent corruption on crash
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix="settings_")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._to_dict(exclude_secrets=use_keyring), f, indent=2)
            os.replace(tmp_path, path)  # Atomic on POSIX
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

        if not use_keyring:
            # Fallback: protect the file with restrictive permissions
            secure_file_permissions(str(path))

    @staticmethod
    def _validate_int(value, default: int, min_val: int = 0, max_val: int | None = None) -> int:
        """Validate and constrain an integer value."""
        if not isinstance(value, int) or isinstance(value, bool):
            return default
        if value < min_val:
            return min_val
        if max_val is not None and value > max_val:
            return max_val
        return value

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        """Create Settings from a dictionary with validation."""
        settings = cls()

        output_dir = data.get("output_dir", settings.output_dir)
        if isinstance(output_dir, str):
            settings.output_dir = output_dir
        settings.request_timeout = cls._validate_int(
            data.get("request_timeout"), 0, min_val=0, max_val=3600
        )

        twitch = data.get("twitch", {})
        settings.twitch.client_id = twitch.get("client_id", "") or ""
        settings.twitch.client_secret = twitch.get("client_secret", "") or ""

        return settings

    def _to_dict(self, exclude_secrets: bool = False) -> dict:
        """Convert settings to a JSON-serializable dictionary."""
        twitch = {"client_id": self.twitch.client_id}
        if not exclude_secrets:
            twitch["client_secret"] = self.twitch.client_secret
        return {
            "output_dir": self.output_dir,
            "request_timeout": self.request_timeout,
            "twitch": twitch,
        }
