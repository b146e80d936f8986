"""
Error taxonomy for the logbook service.

Handlers raise these; the exception handlers in ``error_handlers`` turn them
into HTTP responses carrying ``status_code``.
"""


class LogbookError(Exception):
    """Base class for every error raised by the service."""
    status_code: int = 500


class ConfigurationError(LogbookError):
    """Configuration is present but unusable (e.g. unknown timezone)."""


class ConfigurationMissing(ConfigurationError):
    """A required environment value is absent."""


class StorageUnavailable(LogbookError):
    """The log store could not be reached, created, written or read."""
    status_code = 500


class MalformedPayload(LogbookError):
    """Webhook body is not JSON or does not match the update envelope."""
    status_code = 400


class Unauthorized(LogbookError):
    """Webhook credential is missing or wrong."""
    status_code = 401


class SenderNotAllowlisted(LogbookError):
    """Message came from someone other than the configured owner.

    Soft condition: answered with a plain success response.
    """
    status_code = 200
