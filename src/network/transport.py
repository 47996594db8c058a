"""
HTTP transport for the Project Thunder API.

TransportClient executes one Endpoint over a ``requests`` session and
classifies the outcome:

- 2xx responses return the raw body
- 400, 401, 404 and 5xx map to their APIError kinds
- any other status is an invalid response
- transport exceptions (DNS, timeout, connection reset) are unspecified errors

The client does no retrying and no token handling; see
``src.network.service.NetworkService`` for the refresh-and-retry policy.
"""

import logging
from typing import Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .endpoint import Endpoint
from .errors import APIError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class TransportClient:
    """
    Executes endpoints and maps HTTP status codes to APIError kinds.

    Example:
        with TransportClient() as transport:
            envelope = transport.decode(endpoint, AuthResponse)
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize transport client.

        Args:
            session: HTTP session to send requests with (creates one if not provided)
            timeout: Request timeout in seconds (None uses the transport default)
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    def execute(self, endpoint: Endpoint) -> bytes:
        """
        Send the request described by an endpoint.

        Args:
            endpoint: Endpoint to execute

        Returns:
            Raw response body of a 2xx response

        Raises:
            APIError: Classified failure
        """
        prepared = endpoint.to_request()
        logger.debug(f"{prepared.method} {prepared.url}")

        # Proxies and CA bundle from the environment, as Session.request applies them
        settings = self.session.merge_environment_settings(prepared.url, {}, None, None, None)

        try:
            response = self.session.send(prepared, timeout=self.timeout, **settings)
        except requests.RequestException as e:
            logger.warning(f"Request {prepared.method} {prepared.url} failed: {e}")
            raise APIError.unspecified(e) from e

        logger.debug(f"Response: {response.status_code}")
        return self._classify(response)

    def execute_void(self, endpoint: Endpoint) -> None:
        """
        Send a request whose successful payload is not needed.

        Raises:
            APIError: Classified failure
        """
        self.execute(endpoint)

    def decode(self, endpoint: Endpoint, model: Type[M]) -> M:
        """
        Send a request and decode its JSON body into a model.

        Args:
            endpoint: Endpoint to execute
            model: Pydantic model describing the response envelope

        Returns:
            Decoded model instance

        Raises:
            APIError: Classified failure, or DECODING if the body does not
                      match the model
        """
        body = self.execute(endpoint)
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"Could not decode response from {endpoint.path}: {e}")
            raise APIError.decoding(e) from e

    def _classify(self, response: requests.Response) -> bytes:
        """
        Map a response status code to its body or an APIError.

        Args:
            response: HTTP response

        Returns:
            Response body bytes for 2xx responses

        Raises:
            APIError: For every non-2xx status
        """
        status = response.status_code

        if 200 <= status <= 299:
            return response.content

        if status == 400:
            logger.warning(f"Bad request (400): {response.text}")
            raise APIError.bad_request(response.text or "Bad Request")

        if status == 401:
            logger.warning("Unauthorized (401)")
            raise APIError.unauthorized(response.text or "Unauthorized")

        if status == 404:
            logger.warning(f"Resource not found (404): {response.url}")
            raise APIError.not_found()

        if 500 <= status <= 599:
            logger.error(f"Server error ({status}): {response.text}")
            raise APIError.server_error(response.text or "Server Error")

        logger.error(f"Unexpected response status {status}")
        raise APIError.invalid_response()

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> "TransportClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - ensures cleanup."""
        self.close()
