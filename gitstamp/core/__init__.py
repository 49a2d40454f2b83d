"""Core provider functionality for gitstamp."""

from .provider import GitStatusProvider

__all__ = ["GitStatusProvider"]
