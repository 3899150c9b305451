"""Exception types raised by the alt-text backfill tool."""

from __future__ import annotations

from typing import Any, Optional


class AltTextError(Exception):
    """Base exception for the alt-text backfill tool."""


class ConfigError(AltTextError):
    """Configuration is missing or malformed."""


class StoryblokAPIError(AltTextError):
    """A request to the Storyblok management API failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def describe(self) -> str:
        """Prefer the service's error payload over the transport message."""
        if self.body:
            return str(self.body)
        return str(self)
