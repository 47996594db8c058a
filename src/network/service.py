"""
Network service with transparent access-token refresh.

NetworkService wraps a TransportClient. When a call fails with
UNAUTHORIZED it refreshes the tokens once and replays the original call
exactly once; the replay's result is final.

Refreshing needs the auth service, and the auth service needs a network
service. The cycle is broken by ``refresher_factory``: on a 401 the service
builds a second NetworkService flagged ``is_auth_service=True`` on the same
transport and hands it to the factory. A service flagged that way never
refreshes, so a 401 from the refresh endpoint itself is returned to the
caller instead of recursing.
"""

import logging
from typing import Callable, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel

from .endpoint import Endpoint
from .errors import APIError, ErrorKind
from .response import APIResponse
from .transport import TransportClient

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
R = TypeVar("R")


class TokenRefresher(Protocol):
    """Anything that can obtain and persist a fresh access token."""

    def refresh_token(self) -> APIResponse: ...


class NetworkService:
    """
    Executes endpoints, recovering from expired access tokens.

    Attributes:
        transport: Transport used for every attempt
        is_auth_service: True for the service used by the refresher itself;
                         such a service never attempts a refresh
    """

    def __init__(
        self,
        transport: Optional[TransportClient] = None,
        refresher_factory: Optional[Callable[["NetworkService"], TokenRefresher]] = None,
        is_auth_service: bool = False,
    ):
        """
        Initialize network service.

        Args:
            transport: Transport client (creates default if not provided)
            refresher_factory: Builds the token refresher from an
                               auth-flagged NetworkService. Without one,
                               UNAUTHORIZED errors are returned unchanged.
            is_auth_service: Disable refresh for this instance
        """
        self.transport = transport or TransportClient()
        self.refresher_factory = refresher_factory
        self.is_auth_service = is_auth_service

    def request(self, endpoint: Endpoint, response_model: Type[M]) -> M:
        """
        Execute an endpoint and decode its response.

        Args:
            endpoint: Endpoint to call
            response_model: Pydantic model for the response envelope

        Returns:
            Decoded response

        Raises:
            APIError: If the call (or its single retry) fails
        """
        return self._with_refresh(
            endpoint, lambda ep: self.transport.decode(ep, response_model)
        )

    def request_without_response(self, endpoint: Endpoint) -> None:
        """
        Execute an endpoint, discarding a successful payload.

        Raises:
            APIError: If the call (or its single retry) fails
        """
        self._with_refresh(endpoint, self.transport.execute_void)

    def execute(self, endpoint: Endpoint) -> bytes:
        """
        Execute an endpoint and return the raw response body.

        Raises:
            APIError: If the call (or its single retry) fails
        """
        return self._with_refresh(endpoint, self.transport.execute)

    def _with_refresh(self, endpoint: Endpoint, call: Callable[[Endpoint], R]) -> R:
        """
        Run a call, refreshing tokens and retrying once on UNAUTHORIZED.

        If the original endpoint carried an Authorization header, the retry
        carries the refreshed access token instead.

        Args:
            endpoint: Endpoint to call
            call: Performs one attempt against the given endpoint

        Returns:
            Result of the first attempt, or of the retry after a refresh

        Raises:
            APIError: Non-auth failures unchanged; refresh failures; or the
                      retry's failure
        """
        try:
            return call(endpoint)
        except APIError as e:
            if e.kind is not ErrorKind.UNAUTHORIZED or not self._can_refresh():
                raise
            logger.info(f"Unauthorized response from {endpoint.path}, refreshing tokens")

        access_token = self._refresh()

        retry_endpoint = endpoint
        if access_token and "Authorization" in endpoint.headers:
            retry_endpoint = endpoint.with_authorization(access_token)

        logger.info(f"Tokens refreshed, retrying {endpoint.method.value} {endpoint.path}")
        return call(retry_endpoint)

    def _can_refresh(self) -> bool:
        return not self.is_auth_service and self.refresher_factory is not None

    def _refresh(self) -> Optional[str]:
        """
        Refresh tokens through a refresher bound to an auth-flagged service.

        Returns:
            The new access token, if the refresh response carried one

        Raises:
            APIError: If the refresh call fails or is rejected
        """
        auth_network = NetworkService(transport=self.transport, is_auth_service=True)
        refresher = self.refresher_factory(auth_network)

        response = refresher.refresh_token()

        if not response.is_success:
            logger.warning(f"Token refresh rejected with status {response.status!r}")
            raise APIError.unauthorized(response.message or "Token refresh was rejected")

        return getattr(response.data, "access_token", None)
