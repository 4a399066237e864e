class PromptLoadError(Exception):
    """Raised when a bundled or custom prompt file cannot be read."""
