"""
Centralized exception hierarchy for baro.

Every error carries a ``kind`` and an optional ``payload`` string. The payload
is the diagnostic captured by the failing component (a version, a platform
key, a URL, ...) and is rendered into the user-facing message by the CLI.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class BaroError(Exception):
    """Base exception for all baro errors."""

    kind = "Unknown"
    template = "{payload}"

    def __init__(self, payload: Optional[str] = None):
        self.payload = payload
        super().__init__(self.render())

    def render(self) -> str:
        """Render the human-readable message for this error."""
        if self.payload is None:
            return self.kind
        return self.template.format(payload=self.payload)


# ============================================================================
# Remote / Index Exceptions
# ============================================================================


class NotFoundError(BaroError):
    """Raised when a remote resource, cache field or requested item is absent."""

    kind = "NotFound"
    template = "{payload} not found"


class FetchingFailedError(BaroError):
    """Raised when a network request returns a non-success status."""

    kind = "FetchingFailed"
    template = "fetching {payload} failed"


class VersionNotFoundError(BaroError):
    """Raised when a version token is not a key of the index document."""

    kind = "VersionNotFound"
    template = "version `{payload}` not found in the version index"

    def __init__(self, token: str):
        self.token = token
        super().__init__(token)


class UnsupportedError(BaroError):
    """Raised when the index has no build for the local platform."""

    kind = "Unsupported"
    template = "your cpu arch - os ({payload}) is not supported"


# ============================================================================
# Local Installation Exceptions
# ============================================================================


class NotInstalledError(BaroError):
    """Raised when a local artifact or symlink target is missing."""

    kind = "NotInstalled"
    template = "{payload} is not installed"


class AlreadyInstalledError(BaroError):
    """Raised when the install target directory already exists."""

    kind = "AlreadyInstalled"
    template = "{payload} has already been installed"


# ============================================================================
# Cache Exceptions
# ============================================================================


class InvalidFieldError(BaroError):
    """Raised when a cache key is not part of the cache schema."""

    kind = "InvalidField"
    template = "invalid cache field `{payload}`"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(field_name)


# ============================================================================
# Configuration / CLI Exceptions
# ============================================================================


class ConfigError(BaroError):
    """Configuration parsing or validation error."""

    kind = "Config"
    template = "invalid configuration: {payload}"


class UnknownToolError(BaroError):
    """Raised when a command targets a tool with no registered manager."""

    kind = "UnknownTool"
    template = "no manager is available for the `{payload}` tool"


class ToolDisabledError(BaroError):
    """Raised when a command targets a tool disabled in the configuration."""

    kind = "ToolDisabled"
    template = "the `{payload}` tool is disabled in the configuration"
