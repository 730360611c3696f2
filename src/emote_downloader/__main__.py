"""Allow running as ``python -m emote_downloader``."""

import sys

from .main import main

sys.exit(main())
