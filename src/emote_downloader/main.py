#!/usr/bin/env python3
"""Main entry point for Emote Downloader."""

import argparse
import asyncio
import logging
import sys

from . import __version__
from .core.errors import EXIT_OK, EXIT_VERSION, ConfigError, EmoteDownloaderError
from .core.options import RunOptions, ensure_output_dir
from .core.pipeline import EmotePipeline
from .core.settings import Settings

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("keyring").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="emote-downloader",
        description="Bulk download emotes from Twitch/BTTV/FFZ/7TV",
    )
    parser.add_argument(
        "-p",
        "--platform",
        help="Platform to download from. Valid values: twitch, bttv, ffz, 7tv",
    )
    parser.add_argument(
        "--client_id",
        help="Client ID, not required if platform is not twitch and channel_ids is provided",
    )
    parser.add_argument(
        "--client_secret",
        help="Client Secret, not required if token is provided or platform is not twitch "
        "and channel_ids is provided",
    )
    parser.add_argument(
        "-t",
        "--token",
        help="Token, not required if client ID and secret are provided or platform is not "
        "twitch and channel_ids is provided",
    )
    parser.add_argument(
        "--channel_ids",
        help="Channel IDs, separated by commas. Not required if channel names are provided",
    )
    parser.add_argument(
        "--channel_names",
        help="Channel Names, separated by commas. Not required if channel IDs are provided",
    )
    parser.add_argument(
        "-o",
        "--output_dir",
        help="Output directory, will be created if it doesn't exist (default: ./emotes)",
    )
    parser.add_argument("-v", "--version", action="store_true", help="Print version")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enables verbose output, intended for debugging purposes",
    )
    parser.add_argument(
        "--save_credentials",
        action="store_true",
        help="Remember the given client ID and secret for later runs",
    )
    return parser


def save_credentials(settings: Settings, options: RunOptions) -> None:
    """Persist the client ID and secret used for this run."""
    settings.twitch.client_id = options.client_id
    settings.twitch.client_secret = options.client_secret
    try:
        settings.save()
    except OSError as e:
        raise ConfigError(f"Cannot save settings: {e}") from e
    logger.info("Saved client credentials")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"EmoteDownloader v{__version__}")
        return EXIT_VERSION

    setup_logging(args.verbose)
    logger.debug("Enabled verbose output")

    try:
        settings = Settings.load()
        options = RunOptions.from_values(
            platform=args.platform,
            client_id=args.client_id,
            client_secret=args.client_secret,
            token=args.token,
            channel_ids=args.channel_ids,
            channel_names=args.channel_names,
            output_dir=args.output_dir,
            settings=settings,
        )
        options.log_summary()
        ensure_output_dir(options.output_dir)
        if args.save_credentials:
            save_credentials(settings, options)

        result = asyncio.run(EmotePipeline(options).run())
    except EmoteDownloaderError as e:
        logger.error(str(e))
        return e.exit_code

    logger.info(f"Downloaded {len(result.downloaded)} emotes to {options.output_dir}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
