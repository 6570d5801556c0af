from typing import Optional


class TOAError(Exception):
    """Base exception for everything raised by pytoa."""

    pass


class ConfigurationError(TOAError):
    """Exception raised when settings are missing or invalid."""

    pass


class TransportError(TOAError):
    """Exception raised when a request to the API does not succeed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.path = path
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class ParseError(TOAError, ValueError):
    """The response body is not valid JSON."""

    pass


class ShapeError(TOAError, ValueError):
    """The JSON parsed, but not into the shape we expected."""

    pass


class NotFoundError(TOAError, LookupError):
    """Something we looked for is not in the data."""

    pass


class SeasonNotFoundError(NotFoundError):
    pass


class TeamNotFoundError(NotFoundError):
    pass


class FieldNotFoundError(NotFoundError):
    pass
