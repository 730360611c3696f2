"""Bulk download chat emotes from Twitch, BTTV, FFZ and 7TV."""

__version__ = "1.0.2"
