"""Client secret storage in the system keyring.

The Twitch client secret lives in the system keyring (GNOME Keyring,
KWallet, macOS Keychain, etc.) rather than in settings.json whenever a
usable backend exists. Access tokens are never stored anywhere.
"""

import logging
import os
import stat

logger = logging.getLogger(__name__)

SERVICE_NAME = "emote-downloader"
KEY_TWITCH_CLIENT_SECRET = "twitch_client_secret"

_keyring_available: bool | None = None


def is_available() -> bool:
    """Check once whether a real keyring backend is configured."""
    global _keyring_available
    if _keyring_available is None:
        try:
            import keyring
            from keyring.backends.fail import Keyring as FailKeyring

            backend = keyring.get_keyring()
            _keyring_available = not isinstance(backend, FailKeyring)
            logger.debug(f"Keyring backend: {type(backend).__name__}")
        except Exception as e:
            logger.debug(f"Keyring unavailable: {e}")
            _keyring_available = False
    return _keyring_available


def store_secret(key: str, value: str) -> bool:
    """Store (or clear, for an empty value) a secret.

    Returns False when the caller has to keep the secret in settings.json.
    """
    if not is_available():
        return False

    import keyring
    from keyring.errors import KeyringError, PasswordDeleteError

    try:
        if value:
            keyring.set_password(SERVICE_NAME, key, value)
        else:
            try:
                keyring.delete_password(SERVICE_NAME, key)
            except PasswordDeleteError:
                pass  # nothing stored
    except KeyringError as e:
        logger.warning(f"Failed to store secret '{key}' in keyring: {e}")
        return False
    return True


def get_secret(key: str) -> str | None:
    """Read a secret, or None if absent or the keyring is unusable."""
    if not is_available():
        return None

    import keyring
    from keyring.errors import KeyringError

    try:
        return keyring.get_password(SERVICE_NAME, key)
    except KeyringError as e:
        logger.warning(f"Failed to read secret '{key}' from keyring: {e}")
        return None


def secure_file_permissions(filepath: str) -> None:
    """Restrict a file to its owner (chmod 600)."""
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        logger.debug(f"Could not set permissions on {filepath}: {e}")
