"""Discord bot that translates messages through DeepL."""

__version__ = "1.0.0"
