"""Concurrent download of a collected emote set."""

import asyncio
import logging
from pathlib import Path

import aiohttp

from ..core.models import DownloadFailure, DownloadResult, Emote, EmoteCollection

logger = logging.getLogger(__name__)


async def download_emote(session: aiohttp.ClientSession, emote: Emote, output_dir: Path) -> Path:
    """Download a single emote and return the written path.

    Raises:
        aiohttp.ClientResponseError: on a non-2xx status.
        aiohttp.ClientError, asyncio.TimeoutError, OSError: on transport or
            file errors.
    """
    path = output_dir / emote.filename
    async with session.get(emote.url) as resp:
        resp.raise_for_status()
        data = await resp.read()
    await asyncio.to_thread(path.write_bytes, data)
    logger.debug(f"Downloaded {emote.name} -> {path}")
    return path


async def download_emotes(
    collection: EmoteCollection,
    output_dir: Path,
    session: aiohttp.ClientSession,
) -> DownloadResult:
    """Download every emote at once and wait for all of them to settle.

    One failing download never cancels the others; each failure is
    recorded in the returned result. An emote whose file name is already
    taken by an earlier emote is recorded as a failure and not fetched.
    """
    result = DownloadResult()
    emotes: list[Emote] = []
    claimed: dict[str, Emote] = {}
    for emote in collection.values():
        owner = claimed.setdefault(emote.filename, emote)
        if owner is not emote:
            error = f"File name {emote.filename} is already used by emote {owner.name}"
            logger.error(f"Skipping {emote.name}: {error}")
            result.failures.append(DownloadFailure(emote=emote, error=error))
            continue
        emotes.append(emote)

    tasks = [download_emote(session, emote, output_dir) for emote in emotes]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    for emote, outcome in zip(emotes, results):
        if isinstance(outcome, asyncio.CancelledError):
            raise outcome
        if isinstance(outcome, Exception):
            error = str(outcome) or type(outcome).__name__
            logger.error(f"Failed to download {emote.name} from {emote.url}: {error}")
            result.failures.append(DownloadFailure(emote=emote, error=error))
        else:
            result.downloaded.append(emote)

    return result
