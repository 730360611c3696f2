"""Shared test fixtures for emote_downloader tests."""

import json

import pytest

from emote_downloader.core import credential_store
from emote_downloader.core.models import Emote


@pytest.fixture(autouse=True)
def no_keyring(monkeypatch):
    """Never touch the real system keyring from tests."""
    monkeypatch.setattr(credential_store, "_keyring_available", False)


@pytest.fixture
def twitch_emotes_json():
    return json.dumps(
        {
            "data": [
                {
                    "id": "25",
                    "name": "Kappa",
                    "format": ["static"],
                    "images": {
                        "url_1x": "https://static-cdn.jtvnw.net/emoticons/v2/25/static/light/1.0",
                        "url_2x": "https://static-cdn.jtvnw.net/emoticons/v2/25/static/light/2.0",
                        "url_4x": "https://static-cdn.jtvnw.net/emoticons/v2/25/static/light/3.0",
                    },
                },
                {
                    "id": "emotesv2_1",
                    "name": "PartyHat",
                    "format": ["static", "animated"],
                    "images": {
                        "url_1x": "https://static-cdn.jtvnw.net/emoticons/v2/emotesv2_1/static/dark/1.0",
                    },
                },
            ]
        }
    )


@pytest.fixture
def bttv_emotes_json():
    return json.dumps(
        {
            "channelEmotes": [
                {"code": "Kappa", "id": "abc", "imageType": "png"},
                {"code": "catJAM", "id": "def", "imageType": "gif"},
            ],
            "sharedEmotes": [
                {"code": "monkaS", "id": "ghi", "imageType": "png"},
            ],
        }
    )


@pytest.fixture
def ffz_emotes_json():
    return json.dumps(
        [
            {"id": 128054, "code": "OMEGALUL", "imageType": "png"},
            {"id": 381875, "name": "KEKW", "imageType": "png"},
        ]
    )


@pytest.fixture
def seventv_emotes_json():
    return json.dumps(
        [
            {
                "id": "60ae958e229664e8667aea38",
                "name": "peepoHappy",
                "mime": "image/webp",
                "urls": [
                    ["1", "https://cdn.7tv.app/emote/60ae958e229664e8667aea38/1x"],
                    ["2", "https://cdn.7tv.app/emote/60ae958e229664e8667aea38/2x"],
                    ["4", "https://cdn.7tv.app/emote/60ae958e229664e8667aea38/4x"],
                ],
            },
        ]
    )


@pytest.fixture
def sample_emote():
    return Emote(name="Kappa", url="https://cdn.betterttv.net/emote/abc/3x", extension="png")
