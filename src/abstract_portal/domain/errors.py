"""Domain errors raised by portal services."""


class PortalError(Exception):
    """Base class for expected portal failures."""


class ValidationError(PortalError):
    """Raised when input fails a business rule."""


class AuthenticationError(PortalError):
    """Raised when credentials do not match an account."""


class DuplicateKeyError(PortalError):
    """Raised by repositories when a unique constraint rejects a write."""
