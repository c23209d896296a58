"""Link shortening module."""

from .shortener import LinkShortener

__all__ = ["LinkShortener"]
