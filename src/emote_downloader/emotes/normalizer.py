"""Normalize per-platform emote lists into a single emote collection.

Every platform returns a differently shaped JSON document. ``normalize``
turns one raw response into ``(name, Emote)`` pairs in response order,
and ``merge_first_wins`` folds those pairs into the run's collection
without ever replacing an emote that is already there.
"""

import json
import logging
from collections.abc import Callable, Iterable

from ..core.errors import ApiError
from ..core.models import DEFAULT_EXTENSION, Emote, EmoteCollection, EmotePlatform

logger = logging.getLogger(__name__)

BTTV_CDN_URL = "https://cdn.betterttv.net/emote/{id}/3x"
FFZ_CDN_URL = "https://cdn.betterttv.net/frankerfacez_emote/{id}/4"

# Twitch image sizes, best first
TWITCH_IMAGE_KEYS = ("url_4x", "url_2x", "url_1x")

EmotePair = tuple[str, Emote]


def _load(raw: str, wrap_array: bool = False) -> dict:
    """Parse a response body, wrapping bare arrays as {"data": [...]}."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise ApiError(f"Emote response is not valid JSON: {e}") from e

    if wrap_array and isinstance(data, list):
        data = {"data": data}
    if not isinstance(data, dict):
        raise ApiError(f"Unexpected emote response type: {type(data).__name__}")
    return data


def _entries(data: dict, key: str) -> list[dict]:
    """Get the list of emote entries under a key, tolerating absence."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ApiError(f"Expected '{key}' to be a list, got {type(value).__name__}")
    return [entry for entry in value if isinstance(entry, dict)]


def _extension(value) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip().lower()
    return DEFAULT_EXTENSION


def _parse_twitch(data: dict) -> list[EmotePair]:
    """Parse a Helix chat/emotes response."""
    pairs: list[EmotePair] = []
    for entry in _entries(data, "data"):
        name = entry.get("name")
        if not name:
            logger.debug(f"Skipping Twitch emote without a name: {entry.get('id')}")
            continue

        images = entry.get("images")
        if not isinstance(images, dict):
            images = {}
        url = next((images[key] for key in TWITCH_IMAGE_KEYS if images.get(key)), None)
        if not url:
            logger.debug(f"Unable to get url for {name}")
            continue

        formats = entry.get("format") or []
        animated = any("animated" in str(fmt) for fmt in formats)
        pairs.append(
            (
                name,
                Emote(
                    name=name,
                    url=url.replace("/static/", "/default/"),
                    extension="gif" if animated else "png",
                ),
            )
        )
    return pairs


def _parse_bttv(data: dict) -> list[EmotePair]:
    """Parse a BTTV cached user response (channel emotes, then shared emotes)."""
    pairs: list[EmotePair] = []
    for key in ("channelEmotes", "sharedEmotes"):
        for entry in _entries(data, key):
            code = entry.get("code")
            emote_id = entry.get("id")
            if not code or not emote_id:
                logger.debug(f"Skipping BTTV emote without code or id: {entry}")
                continue
            emote = Emote(
                name=code,
                url=BTTV_CDN_URL.format(id=emote_id),
                extension=_extension(entry.get("imageType")),
            )
            pairs.append((code, emote))
    return pairs


def _parse_ffz(data: dict) -> list[EmotePair]:
    """Parse a BTTV-cached FrankerFaceZ user response."""
    pairs: list[EmotePair] = []
    for entry in _entries(data, "data"):
        # The BTTV cache labels FFZ emotes with "code"
        name = entry.get("name") or entry.get("code")
        emote_id = entry.get("id")
        if not name or emote_id in (None, ""):
            logger.debug(f"Skipping FFZ emote without name or id: {entry}")
            continue
        emote = Emote(
            name=name,
            url=FFZ_CDN_URL.format(id=emote_id),
            extension=_extension(entry.get("imageType")),
        )
        pairs.append((name, emote))
    return pairs


def _parse_seventv(data: dict) -> list[EmotePair]:
    """Parse a 7TV v2 user emotes response."""
    pairs: list[EmotePair] = []
    for entry in _entries(data, "data"):
        name = entry.get("name")
        if not name:
            logger.debug(f"Skipping 7TV emote without a name: {entry.get('id')}")
            continue

        # Last [label, url] pair with a url wins
        url = ""
        for item in entry.get("urls") or []:
            if isinstance(item, (list, tuple)) and len(item) > 1 and item[1] is not None:
                url = str(item[1])
        if not url:
            logger.debug(f"Unable to get url for {name}")
            continue

        mime = entry.get("mime")
        extension = DEFAULT_EXTENSION
        if isinstance(mime, str) and mime:
            extension = _extension(mime.removeprefix("image/"))
        pairs.append((name, Emote(name=name, url=url, extension=extension)))
    return pairs


_PARSERS: dict[EmotePlatform, tuple[Callable[[dict], list[EmotePair]], bool]] = {
    EmotePlatform.TWITCH: (_parse_twitch, False),
    EmotePlatform.BTTV: (_parse_bttv, False),
    EmotePlatform.FFZ: (_parse_ffz, True),
    EmotePlatform.SEVENTV: (_parse_seventv, True),
}


def normalize(platform: EmotePlatform, raw: str) -> list[EmotePair]:
    """Parse one raw emote list response into (name, Emote) pairs.

    Pairs come back in response order. Emotes without a usable image URL
    are logged and left out.

    Raises:
        ApiError: if the body is not JSON or not shaped like the platform's
            emote list.
    """
    parser, wrap_array = _PARSERS[platform]
    return parser(_load(raw, wrap_array=wrap_array))


def merge_first_wins(collection: EmoteCollection, pairs: Iterable[EmotePair]) -> int:
    """Merge emotes into a collection, keeping whichever name was seen first.

    Returns:
        Number of emotes added.
    """
    added = 0
    for name, emote in pairs:
        if name in collection:
            logger.debug(f"Emote {name} already collected, keeping the first one")
            continue
        collection[name] = emote
        added += 1
    return added
