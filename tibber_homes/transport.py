"""GraphQL transport for the Tibber API."""

import logging
from collections.abc import Mapping
from typing import Protocol

import aiohttp

from .const import API_URL, DEFAULT_TIMEOUT
from .exceptions import (
    TibberAuthenticationError,
    TibberCommunicationError,
    TibberGraphQLError,
    TibberPermissionError,
    TibberQueryError,
    TibberRateLimitError,
)

_LOGGER = logging.getLogger(__name__)

HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429


class GraphQLTransport(Protocol):
    """Executes a GraphQL document and returns its ``data`` object."""

    async def execute(self, document: str, headers: Mapping[str, str]) -> dict:
        ...

    async def close(self) -> None:
        ...


def raise_for_graphql_errors(response_json: dict) -> None:
    """Map the ``errors`` array of a GraphQL response to an exception."""
    errors = response_json.get("errors")
    if not errors:
        return
    if not isinstance(errors, list):
        raise TibberCommunicationError(
            TibberCommunicationError.MALFORMED_BODY.format(
                exception=f"errors must be a list, got {type(errors).__name__}"
            )
        )

    error = errors[0]
    if not isinstance(error, dict):
        raise TibberGraphQLError(f"Malformed error: {error}")

    message = error.get("message", "Unknown error")
    extensions = error.get("extensions") or {}
    code = extensions.get("code")

    if code == "UNAUTHENTICATED":
        _LOGGER.error("Tibber API authentication error: %s", message)
        raise TibberAuthenticationError(TibberAuthenticationError.INVALID_CREDENTIALS)
    if code == "FORBIDDEN":
        _LOGGER.error("Tibber API permission error: %s", message)
        raise TibberPermissionError(TibberPermissionError.INSUFFICIENT_PERMISSIONS)
    if code in ("RATE_LIMITED", "TOO_MANY_REQUESTS"):
        retry_after = extensions.get("retryAfter")
        _LOGGER.warning("Tibber API rate limited: %s (retry after %s)", message, retry_after)
        raise TibberRateLimitError(None if retry_after is None else str(retry_after))
    if code in ("VALIDATION_ERROR", "GRAPHQL_VALIDATION_FAILED"):
        _LOGGER.error("Tibber API validation error: %s", message)
        raise TibberQueryError(TibberQueryError.INVALID_QUERY_ERROR.format(message=message))

    _LOGGER.error("Tibber API GraphQL error (code: %s): %s", code or "unknown", message)
    raise TibberGraphQLError(message, code)


class AiohttpTransport:
    """POSTs GraphQL documents to the Tibber endpoint with aiohttp."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the transport.

        Args:
            session: Session to borrow. It is never closed by the
                transport. If omitted, one is created on first use and
                closed by close(). A closed transport cannot be reused.
            url: GraphQL endpoint
            timeout: Total request timeout in seconds
        """
        self._session = session
        self._owns_session = session is None
        self._closed = False
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def url(self) -> str:
        """The GraphQL endpoint."""
        return self._url

    async def __aenter__(self) -> "AiohttpTransport":
        """Enter async context."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active session."""
        if self._closed:
            raise RuntimeError("Transport is closed")
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def execute(self, document: str, headers: Mapping[str, str]) -> dict:
        """Execute a query document and return the ``data`` object.

        Raises:
            RuntimeError: The transport has been closed.
            TibberCommunicationError: Network failure, timeout, unexpected
                status, or a body that is not a GraphQL response.
            TibberAuthenticationError: HTTP 401 or UNAUTHENTICATED.
            TibberPermissionError: HTTP 403 or FORBIDDEN.
            TibberRateLimitError: HTTP 429 or a rate limit error code.
            TibberQueryError: HTTP 400 or a validation error code.
            TibberGraphQLError: Any other GraphQL error, or no data.
        """
        session = await self._ensure_session()
        request_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **headers,
        }
        _LOGGER.debug("POST %s (%d byte document)", self._url, len(document))

        try:
            async with session.post(
                self._url,
                json={"query": document},
                headers=request_headers,
                timeout=self._timeout,
            ) as resp:
                self._check_status(resp.status, resp.headers)
                if resp.status >= 300:
                    text = await resp.text()
                    raise TibberCommunicationError(
                        TibberCommunicationError.STATUS_ERROR.format(
                            status=resp.status, text=text
                        )
                    )
                try:
                    response_json = await resp.json(content_type=None)
                except ValueError as err:
                    raise TibberCommunicationError(
                        TibberCommunicationError.MALFORMED_BODY.format(exception=err)
                    ) from err
        except TimeoutError as err:
            _LOGGER.warning("Request to %s timed out", self._url)
            raise TibberCommunicationError(
                TibberCommunicationError.TIMEOUT_ERROR.format(exception=err)
            ) from err
        except aiohttp.ClientError as err:
            _LOGGER.warning("Request to %s failed: %s", self._url, err)
            raise TibberCommunicationError(
                TibberCommunicationError.CONNECTION_ERROR.format(exception=err)
            ) from err

        if not isinstance(response_json, dict):
            raise TibberCommunicationError(
                TibberCommunicationError.MALFORMED_BODY.format(
                    exception=f"expected an object, got {type(response_json).__name__}"
                )
            )

        raise_for_graphql_errors(response_json)

        data = response_json.get("data")
        if data is None:
            _LOGGER.error("Tibber API response missing data object")
            raise TibberGraphQLError(TibberGraphQLError.MISSING_DATA)
        if not isinstance(data, dict):
            raise TibberCommunicationError(
                TibberCommunicationError.MALFORMED_BODY.format(
                    exception=f"data must be an object, got {type(data).__name__}"
                )
            )
        _LOGGER.debug("Received response with keys %s", list(data))
        return data

    @staticmethod
    def _check_status(status: int, headers: Mapping[str, str]) -> None:
        """Raise the specific error for statuses with a known meaning."""
        if status == HTTP_UNAUTHORIZED:
            _LOGGER.error("Tibber API authentication failed - check access token")
            raise TibberAuthenticationError(TibberAuthenticationError.INVALID_CREDENTIALS)
        if status == HTTP_FORBIDDEN:
            _LOGGER.error("Tibber API access forbidden - insufficient permissions")
            raise TibberPermissionError(TibberPermissionError.INSUFFICIENT_PERMISSIONS)
        if status == HTTP_TOO_MANY_REQUESTS:
            retry_after = headers.get("Retry-After")
            _LOGGER.warning("Tibber API rate limit exceeded - retry after %s seconds", retry_after)
            raise TibberRateLimitError(retry_after)
        if status == HTTP_BAD_REQUEST:
            _LOGGER.error("Tibber API rejected request - likely invalid GraphQL query")
            raise TibberQueryError(
                TibberQueryError.INVALID_QUERY_ERROR.format(message="Bad request")
            )

    async def close(self) -> None:
        """Close the session if this transport created it.

        Later calls to execute() raise RuntimeError.
        """
        self._closed = True
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
