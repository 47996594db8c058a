"""
Network layer for the Project Thunder API.

This module provides the HTTP plumbing shared by every API call:

- Endpoint: declarative description of one call
- TransportClient: executes endpoints and classifies responses
- NetworkService: transport wrapper that refreshes expired tokens once
  and retries
- APIResponse: the {status, message, data} response envelope
- APIError / ErrorKind: the error taxonomy
"""

from .endpoint import DEFAULT_BASE_URL, Endpoint, HTTPMethod
from .errors import APIError, ErrorKind
from .response import APIResponse, CamelModel, ResponseOutcome, ResponseStatus
from .service import NetworkService, TokenRefresher
from .transport import TransportClient

__all__ = [
    # Endpoints
    "DEFAULT_BASE_URL",
    "Endpoint",
    "HTTPMethod",
    # Transport
    "TransportClient",
    "NetworkService",
    "TokenRefresher",
    # Responses
    "APIResponse",
    "CamelModel",
    "ResponseOutcome",
    "ResponseStatus",
    # Errors
    "APIError",
    "ErrorKind",
]
