"""
Error taxonomy for the Project Thunder network layer.

Every failure produced while building, sending or decoding a request is an
APIError tagged with an ErrorKind. Errors are classified once, at the
transport boundary, and callers branch on ``error.kind`` rather than on
exception subclasses.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of API failure."""

    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    INVALID_DATA = "invalid_data"
    NETWORK = "network"
    DECODING = "decoding"
    UNSPECIFIED = "unspecified"
    SERVER_ERROR = "server_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"


class APIError(Exception):
    """
    A classified API failure.

    Attributes:
        kind: Which kind of failure this is
        message: Server-supplied text (bad request, unauthorized, server error)
        cause: Underlying exception (network, decoding, unspecified)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.kind = kind
        self.message = message
        self.cause = cause
        super().__init__(self.description)

    @classmethod
    def invalid_url(cls) -> "APIError":
        return cls(ErrorKind.INVALID_URL)

    @classmethod
    def invalid_response(cls) -> "APIError":
        return cls(ErrorKind.INVALID_RESPONSE)

    @classmethod
    def invalid_data(cls, cause: Optional[BaseException] = None) -> "APIError":
        return cls(ErrorKind.INVALID_DATA, cause=cause)

    @classmethod
    def network(cls, cause: BaseException) -> "APIError":
        return cls(ErrorKind.NETWORK, cause=cause)

    @classmethod
    def decoding(cls, cause: BaseException) -> "APIError":
        return cls(ErrorKind.DECODING, cause=cause)

    @classmethod
    def unspecified(cls, cause: BaseException) -> "APIError":
        return cls(ErrorKind.UNSPECIFIED, cause=cause)

    @classmethod
    def server_error(cls, message: str) -> "APIError":
        return cls(ErrorKind.SERVER_ERROR, message=message)

    @classmethod
    def unauthorized(cls, message: str) -> "APIError":
        return cls(ErrorKind.UNAUTHORIZED, message=message)

    @classmethod
    def not_found(cls) -> "APIError":
        return cls(ErrorKind.NOT_FOUND)

    @classmethod
    def bad_request(cls, message: str) -> "APIError":
        return cls(ErrorKind.BAD_REQUEST, message=message)

    @property
    def description(self) -> str:
        """
        Human-readable description suitable for showing to the user.

        Returns:
            Message text for this error kind
        """
        kind = self.kind
        if kind is ErrorKind.INVALID_URL:
            return "The request URL is not valid."
        if kind is ErrorKind.INVALID_RESPONSE:
            return "Received an invalid response from the server."
        if kind is ErrorKind.INVALID_DATA:
            return "The request data could not be encoded."
        if kind is ErrorKind.NETWORK:
            return f"Network error: {self.cause}"
        if kind is ErrorKind.DECODING:
            return f"Could not decode the server response: {self.cause}"
        if kind is ErrorKind.UNSPECIFIED:
            return f"Unexpected error: {self.cause}"
        if kind is ErrorKind.SERVER_ERROR:
            return f"Server error: {self.message}"
        if kind is ErrorKind.UNAUTHORIZED:
            return f"Authorization failed: {self.message}. Please sign in again."
        if kind is ErrorKind.NOT_FOUND:
            return "The requested resource was not found."
        return f"Bad request: {self.message}"

    def __repr__(self) -> str:
        return f"APIError(kind={self.kind.name}, message={self.message!r}, cause={self.cause!r})"
