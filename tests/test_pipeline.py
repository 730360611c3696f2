"""Tests for the end-to-end download pipeline."""

import asyncio
import json

import pytest
from fakes import FakeResponse, FakeSession

from emote_downloader.core import pipeline as pipeline_module
from emote_downloader.core.errors import ApiError, AuthError, DownloadError
from emote_downloader.core.options import RunOptions
from emote_downloader.core.pipeline import EmotePipeline

BTTV_URL = "https://api.betterttv.net/3/cached/users/twitch/{}"
USERS_URL = "https://api.twitch.tv/helix/users"
TOKEN_URL = "https://id.twitch.tv/oauth2/token"


def _bttv(*emotes):
    return json.dumps(
        {"channelEmotes": [{"code": c, "id": i, "imageType": "png"} for c, i in emotes]}
    )


def _pipeline(options, api_routes, cdn_routes=None, monkeypatch=None):
    pipe = EmotePipeline(options)
    api_session = FakeSession(api_routes)
    pipe.client._session = api_session
    cdn_session = FakeSession(cdn_routes or {})
    if monkeypatch is not None:
        monkeypatch.setattr(pipeline_module, "create_session", lambda timeout=0: cdn_session)
    return pipe, api_session, cdn_session


def test_ids_skip_name_lookup(tmp_path):
    options = RunOptions.from_values(
        platform="bttv",
        channel_ids="1",
        channel_names="forsen",
        client_id="cid",
        token="tok",
        output_dir=str(tmp_path),
    )
    pipe, api, _ = _pipeline(options, {BTTV_URL.format(1): FakeResponse(200, _bttv(("A", "a")))})

    collection = asyncio.run(pipe.collect())

    assert list(collection) == ["A"]
    assert USERS_URL not in api.urls()
    assert TOKEN_URL not in api.urls()


def test_first_channel_wins_across_channels(tmp_path):
    options = RunOptions.from_values(platform="bttv", channel_ids="1,2", output_dir=str(tmp_path))
    pipe, api, _ = _pipeline(
        options,
        {
            BTTV_URL.format(1): FakeResponse(200, _bttv(("X", "from-one"), ("Y", "y"))),
            BTTV_URL.format(2): FakeResponse(200, _bttv(("X", "from-two"), ("Z", "z"))),
        },
    )

    collection = asyncio.run(pipe.collect())

    assert list(collection) == ["X", "Y", "Z"]
    assert collection["X"].url == "https://cdn.betterttv.net/emote/from-one/3x"
    assert api.urls() == [BTTV_URL.format(1), BTTV_URL.format(2)]


def test_names_resolved_with_token_exchange(tmp_path):
    options = RunOptions.from_values(
        platform="bttv",
        channel_names="forsen",
        client_id="cid",
        client_secret="secret",
        output_dir=str(tmp_path),
    )
    pipe, api, _ = _pipeline(
        options,
        {
            TOKEN_URL: FakeResponse(200, {"access_token": "fresh"}),
            USERS_URL: FakeResponse(200, {"data": [{"id": "22484632"}]}),
            BTTV_URL.format("22484632"): FakeResponse(200, _bttv(("A", "a"))),
        },
    )

    collection = asyncio.run(pipe.collect())

    assert list(collection) == ["A"]
    assert api.urls() == [TOKEN_URL, USERS_URL, BTTV_URL.format("22484632")]
    assert api.calls[1][2]["Authorization"] == "Bearer fresh"


def test_token_exchange_failure(tmp_path):
    options = RunOptions.from_values(
        platform="twitch",
        channel_ids="1",
        client_id="cid",
        client_secret="bad",
        output_dir=str(tmp_path),
    )
    pipe, _, _ = _pipeline(options, {TOKEN_URL: FakeResponse(403, {"message": "invalid"})})

    with pytest.raises(AuthError):
        asyncio.run(pipe.collect())


def test_channel_failure_aborts_run(tmp_path):
    options = RunOptions.from_values(platform="bttv", channel_ids="1,2,3", output_dir=str(tmp_path))
    pipe, api, _ = _pipeline(
        options,
        {
            BTTV_URL.format(1): FakeResponse(200, _bttv(("A", "a"))),
            BTTV_URL.format(2): FakeResponse(500, "Internal Server Error"),
            BTTV_URL.format(3): FakeResponse(200, _bttv(("C", "c"))),
        },
    )

    with pytest.raises(ApiError):
        asyncio.run(pipe.collect())
    assert BTTV_URL.format(3) not in api.urls()


def test_run_downloads_collection(tmp_path, monkeypatch):
    out = tmp_path / "emotes"
    options = RunOptions.from_values(platform="bttv", channel_ids="1", output_dir=str(out))
    pipe, api, cdn = _pipeline(
        options,
        {BTTV_URL.format(1): FakeResponse(200, _bttv(("Kappa", "abc")))},
        {"https://cdn.betterttv.net/emote/abc/3x": FakeResponse(200, b"img")},
        monkeypatch,
    )

    result = asyncio.run(pipe.run())

    assert result.ok
    assert (out / "Kappa.png").read_bytes() == b"img"
    assert api.closed
    assert cdn.closed


def test_run_reports_download_failures(tmp_path, monkeypatch):
    options = RunOptions.from_values(platform="bttv", channel_ids="1", output_dir=str(tmp_path))
    pipe, _, cdn = _pipeline(
        options,
        {BTTV_URL.format(1): FakeResponse(200, _bttv(("Kappa", "abc"), ("Gone", "zzz")))},
        {"https://cdn.betterttv.net/emote/abc/3x": FakeResponse(200, b"img")},
        monkeypatch,
    )

    with pytest.raises(DownloadError) as excinfo:
        asyncio.run(pipe.run())

    result = excinfo.value.result
    assert [e.name for e in result.downloaded] == ["Kappa"]
    assert [f.emote.name for f in result.failures] == ["Gone"]
    assert (tmp_path / "Kappa.png").exists()
    assert cdn.closed
