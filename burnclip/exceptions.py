class BurnClipError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:burnclip_error'


class ExchangeError(BurnClipError):
    """Base exception for all send and redeem outcomes that aren't a success."""

    error_code = 'exchange:exchange_error'


class OfflineError(ExchangeError):
    """Raised when the clip store can't be reached before a send starts."""

    error_code = 'exchange:offline'


class TransientError(ExchangeError):
    """Raised when a store or blob call times out or loses its connection.

    Nothing is retried inside the exchange. Callers may retry sends, and may retry
    redeems because a redeem that never reached the store consumed nothing.
    """

    error_code = 'exchange:transient_error'


class SendFailedError(ExchangeError):
    """Raised when the store or blob service rejects a send."""

    error_code = 'exchange:send_failed'


class UploadFailedError(SendFailedError):
    """Raised when file bytes can't be written to the blob store."""

    error_code = 'exchange:upload_failed'


class CodeCollisionError(SendFailedError):
    """Raised when concurrent senders keep claiming the generated codes first."""

    error_code = 'exchange:code_collision'


class ExhaustedCodespaceError(SendFailedError):
    """Raised when no unused code was found within the retry ceiling."""

    error_code = 'exchange:exhausted_codespace'


class RedeemFailedError(ExchangeError):
    """Base exception for redeem attempts that deliver no content."""

    error_code = 'exchange:redeem_failed'


class NotFoundError(RedeemFailedError):
    """Raised when a code was never sent or was already redeemed."""

    error_code = 'exchange:not_found'


class ExpiredError(RedeemFailedError):
    """Raised when a code outlived its TTL. The clip is deleted as part of detection."""

    error_code = 'exchange:expired'


class ConfigurationError(BurnClipError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
