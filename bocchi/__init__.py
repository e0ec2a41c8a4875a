"""Asyncio OneBot 11 client with a plugin-based chat bot."""

__version__ = "0.1.0"