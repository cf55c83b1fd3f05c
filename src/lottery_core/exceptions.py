"""Domain-specific exceptions for lottery-core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from LotteryCoreError for easy catching.
"""

from __future__ import annotations


class LotteryCoreError(Exception):
    """Base exception for all lottery-core errors.

    Users can catch this exception to handle any error raised by the package.
    """

    pass


class ConfigError(LotteryCoreError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided
    - Required configuration is missing
    """

    pass


class ValidationError(LotteryCoreError):
    """Raised when aggregation input does not have the expected shape.

    This exception is raised when:
    - The record collection is not a list of mappings
    - A numeric parameter (window size, recent count) is out of range

    Partially populated records are never rejected; their missing fields
    are normalized instead.
    """

    pass


class FetchError(LotteryCoreError):
    """Raised when the reporting endpoint cannot be queried.

    This exception is raised when:
    - Network connection to the API fails
    - The API returns a non-success status
    - The response body is not the expected JSON document
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnauthenticatedError(FetchError):
    """Raised when the API rejects the session token.

    Derived from an HTTP 401 or a token-related error message. Callers are
    expected to clear the stored session and send the user back to login.
    """

    pass
