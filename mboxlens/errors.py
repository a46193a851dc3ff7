"""Project-wide error types."""


class MboxLensError(Exception):
    """Base for all mboxlens errors."""


class ValidationError(MboxLensError):
    """Invalid input data."""


class ExternalServiceError(MboxLensError):
    """Third-party API or service failure."""


class MailStoreError(ExternalServiceError):
    """The mail-store backend rejected or failed a command."""

    def __init__(self, command, message):
        super().__init__(message)
        self.command = command


def error_message(exc):
    """Reduce an exception to the single line shown to the user."""
    if exc is None:
        return "Unknown error"
    text = str(exc).strip()
    return text or type(exc).__name__


__all__ = ["MboxLensError", "ValidationError", "ExternalServiceError", "MailStoreError", "error_message"]
