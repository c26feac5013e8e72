"""Application-wide exception hierarchy.

Every exception carries an `error_code` class attribute which the handlers
forward to clients verbatim (see fileshortener.handlers.responses).

Classes:
    FileShortenerError:
        Base exception for all application-specific errors.

    ValidationError, InvalidUrlError, InvalidShortcodeError:
        Client input errors (HTTP 400), never retried.

    ShortcodeTakenError:
        Requested shortcode already exists (HTTP 409).

    GenerationExhaustedError:
        No free shortcode found within the retry bound (HTTP 500).

    ConfigurationError, BadConfigurationError:
        Invalid application configuration.

Storage errors (CorruptStoreError, PersistenceError) live in
fileshortener.dao.exceptions.
"""


class FileShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'FILESHORTENER_ERROR'


class ValidationError(FileShortenerError):
    """Base exception for rejected client input."""

    error_code = 'VALIDATION_ERROR'


class InvalidUrlError(ValidationError):
    """Raised when a target URL is empty or not an absolute http(s) URL."""

    error_code = 'INVALID_URL'


class InvalidShortcodeError(ValidationError):
    """Raised when a requested shortcode is empty, reserved or not URL-safe."""

    error_code = 'INVALID_SHORTCODE'


class ShortcodeTakenError(FileShortenerError):
    """Raised when a requested shortcode is already mapped to a URL."""

    error_code = 'SHORTCODE_TAKEN'


class GenerationExhaustedError(FileShortenerError):
    """Raised when every generated shortcode collided with an existing one."""

    error_code = 'GENERATION_EXHAUSTED'


class ConfigurationError(FileShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'CONFIGURATION_ERROR'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'BAD_CONFIGURATION'
