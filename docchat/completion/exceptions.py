class CompletionError(Exception):
    """Raised when the completion provider fails."""

    status_code = 502


class UpstreamSetupError(CompletionError):
    """Raised when the provider rejects or cannot open a completion stream."""


class UpstreamStreamError(CompletionError):
    """Raised when the provider fails while deltas are being consumed."""
