"""Run one emote download from validated options."""

import logging

from ..api.base import close_session, create_session
from ..api.twitch import TwitchApiClient
from ..emotes.downloader import download_emotes
from ..emotes.normalizer import merge_first_wins, normalize
from ..emotes.provider import get_provider
from .errors import DownloadError
from .models import DownloadResult, EmoteCollection
from .options import RunOptions, ensure_output_dir

logger = logging.getLogger(__name__)


async def resolve_channel_ids(options: RunOptions, client: TwitchApiClient) -> list[str]:
    """Get channel IDs, looking up names only when no IDs were given."""
    if not options.use_names:
        return list(options.channel_ids)

    logger.debug("Getting channel IDs from channel names")
    ids = await client.get_user_ids(options.channel_names)
    if len(ids) < len(options.channel_names):
        logger.warning(
            f"Only {len(ids)} of {len(options.channel_names)} channel names were found"
        )
    logger.debug(f"Got {len(ids)} channel IDs")
    return ids


class EmotePipeline:
    """Authenticate, resolve channels, collect emotes, then download them."""

    def __init__(self, options: RunOptions) -> None:
        self.options = options
        self.client = TwitchApiClient(
            client_id=options.client_id,
            client_secret=options.client_secret,
            access_token=options.token,
            timeout=options.request_timeout,
        )

    async def collect(self) -> EmoteCollection:
        """Fetch and merge emotes for every channel, one channel at a time.

        Raises:
            AuthError: if a token was needed and could not be obtained.
            ApiError: if any lookup or emote list request fails.
        """
        options = self.options
        if options.token_required:
            await self.client.ensure_token()

        channel_ids = await resolve_channel_ids(options, self.client)
        provider = get_provider(options.platform, self.client)

        collection: EmoteCollection = {}
        for channel_id in channel_ids:
            logger.debug(f"Getting emotes for channel ID: {channel_id}")
            raw = await provider.fetch_channel_emotes(channel_id)
            added = merge_first_wins(collection, normalize(options.platform, raw))
            logger.debug(f"Added {added} emotes from channel ID: {channel_id}")

        return collection

    async def download(self, collection: EmoteCollection) -> DownloadResult:
        """Download a collected emote set into the output directory.

        Raises:
            DownloadError: if any emote failed; the rest are still written.
        """
        output_dir = ensure_output_dir(self.options.output_dir)
        session = create_session(self.options.request_timeout)
        try:
            result = await download_emotes(collection, output_dir, session)
        finally:
            await close_session(session)

        if not result.ok:
            raise DownloadError(result)
        return result

    async def run(self) -> DownloadResult:
        """Run the whole pipeline."""
        try:
            collection = await self.collect()
        finally:
            await self.client.close()

        logger.info(f"Download started ({len(collection)} emotes)")
        result = await self.download(collection)
        logger.info("Download complete!")
        return result
