"""
Declarative API endpoint descriptions.

An Endpoint describes one API call (method, path, headers, query and body)
and knows how to turn itself into a prepared ``requests`` request. It never
attaches authorization on its own; callers add a bearer token explicitly
with ``with_authorization()``.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urljoin, urlparse

import requests

from .errors import APIError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5246"


def default_headers() -> Dict[str, str]:
    """Headers every endpoint carries unless overridden."""
    return {"Content-Type": "application/json"}


class HTTPMethod(str, Enum):
    """HTTP methods used by the API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class Endpoint:
    """
    Immutable description of a single API call.

    Attributes:
        path: Absolute API path (e.g., "/api/auth/login")
        method: HTTP method
        base_url: Origin the path is resolved against
        headers: Request headers (default: JSON content type)
        query_params: Optional query string parameters
        body: Optional JSON body fields (ignored for GET)
    """

    path: str
    method: HTTPMethod = HTTPMethod.GET
    base_url: str = DEFAULT_BASE_URL
    headers: Mapping[str, str] = field(default_factory=default_headers)
    query_params: Optional[Mapping[str, str]] = None
    body: Optional[Mapping[str, Any]] = None

    @property
    def url(self) -> str:
        """
        Resolve the full request URL (without query string).

        The path replaces any path already present on the base URL.

        Raises:
            APIError: INVALID_URL if the result is not an absolute http(s) URL
        """
        path = self.path if self.path.startswith("/") else f"/{self.path}"
        try:
            url = urljoin(self.base_url, path)
            parsed = urlparse(url)
        except ValueError as e:
            logger.error(f"Could not build URL from {self.base_url!r} + {self.path!r}: {e}")
            raise APIError.invalid_url() from e

        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            logger.error(f"Invalid URL for endpoint: {url!r}")
            raise APIError.invalid_url()
        return url

    def with_authorization(self, token: str) -> "Endpoint":
        """
        Return a copy of this endpoint carrying a bearer token.

        Args:
            token: Access token

        Returns:
            New Endpoint with an Authorization header added
        """
        headers = dict(self.headers)
        headers["Authorization"] = f"Bearer {token}"
        return replace(self, headers=headers)

    def encode_body(self) -> Optional[bytes]:
        """
        Serialize the body to JSON bytes.

        Returns:
            JSON bytes, or None for GET requests and empty bodies

        Raises:
            APIError: INVALID_DATA if the body is not JSON-serializable
        """
        if not self.body or self.method is HTTPMethod.GET:
            return None
        try:
            return json.dumps(dict(self.body), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.error(f"Could not encode body for {self.method.value} {self.path}: {e}")
            raise APIError.invalid_data(e) from e

    def to_request(self) -> requests.PreparedRequest:
        """
        Build the wire request for this endpoint.

        Returns:
            Prepared request ready to be sent by a requests Session

        Raises:
            APIError: INVALID_URL or INVALID_DATA
        """
        url = self.url
        data = self.encode_body()
        request = requests.Request(
            method=self.method.value,
            url=url,
            headers=dict(self.headers),
            params=dict(self.query_params) if self.query_params else None,
            data=data,
        )
        try:
            return request.prepare()
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            logger.error(f"Invalid URL for endpoint {url!r}: {e}")
            raise APIError.invalid_url() from e
