"""Exceptions raised by the platform clients and the unification layer."""

from typing import Optional


class PlatformAPIError(Exception):
    """A platform returned a non-success response."""

    def __init__(self, platform: str, message: str, status: Optional[int] = None):
        self.platform = platform
        self.status = status
        self.message = message
        prefix = f"{platform} API error"
        if status is not None:
            prefix = f"{prefix} {status}"
        super().__init__(f"{prefix}: {message}")


class PlatformAuthError(PlatformAPIError):
    """Credentials were rejected and could not be refreshed."""


class CredentialsError(ValueError):
    """Credentials supplied for a platform are incomplete."""


class UnsupportedPlatformError(ValueError):
    """The requested platform is not one HalGrid can read."""
