from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ConfigurationError(Exception):
    """Raised when a required secret or key is missing from the configuration.

    The message is returned to the client as a 500 response, so it names the
    missing setting but never its value.
    """


class InvalidSecretEncodingError(ValueError):
    """Raised when a shared secret is not valid Base32."""


class SessionAttachmentError(RuntimeError):
    """Raised when a connection's session attachment is missing or already set."""
