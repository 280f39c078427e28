"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class URLValidationError(URLError):
    """URL failed validation checks."""
    pass


class MissingLinkError(URLValidationError):
    """No link was supplied."""
    pass


class InvalidURLError(URLValidationError):
    """The URL format is invalid."""
    pass


class URLCreationError(URLError):
    """Error occurred during URL creation."""
    pass


class ShortCodeGenerationError(URLCreationError):
    """Failed to generate a unique short id."""
    pass


class URLNotFoundError(URLError):
    """URL with the specified id was not found."""
    pass


class CleanupError(ServiceError):
    """Base exception for cleanup-related errors."""
    pass


class ExpiredURLCleanupError(CleanupError):
    """Error occurred while cleaning up expired URLs."""
    pass
