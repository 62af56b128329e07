"""Exceptions raised by the Tibber homes client."""


class TibberError(Exception):
    """Base error for the Tibber homes client."""

    pass


class InvalidQueryParameterError(TibberError, ValueError):
    """A query parameter cannot be safely embedded in a document."""

    INVALID_HOME_ID = "Invalid home id: {home_id!r}"
    INVALID_COUNT = "Count must be a non-negative integer, got {count!r}"
    INVALID_RESOLUTION = "Resolution must be a PriceResolution, got {resolution!r}"


class TibberCommunicationError(TibberError):
    """Network failure, timeout, unexpected HTTP status or malformed body."""

    TIMEOUT_ERROR = "Timeout error fetching information - {exception}"
    CONNECTION_ERROR = "Error fetching information - {exception}"
    STATUS_ERROR = "API request failed: {status} - {text}"
    MALFORMED_BODY = "Malformed response body - {exception}"


class TibberDecodeError(TibberError):
    """A response value does not have the type its field requires."""

    INVALID_VALUE = "Cannot decode {kind} from {value!r}"


class TibberAuthenticationError(TibberError):
    """The access token was rejected."""

    INVALID_CREDENTIALS = "Invalid access token or expired credentials"


class TibberPermissionError(TibberError):
    """The access token lacks permission for the query."""

    INSUFFICIENT_PERMISSIONS = "Access forbidden - insufficient permissions for this operation"


class TibberRateLimitError(TibberError):
    """The API asked the caller to slow down."""

    RATE_LIMIT_ERROR = "Rate limit exceeded. Please wait {retry_after} seconds before retrying"

    def __init__(self, retry_after: str | None = None):
        self.retry_after = retry_after
        super().__init__(self.RATE_LIMIT_ERROR.format(retry_after=retry_after or "unknown"))


class TibberQueryError(TibberError):
    """The API rejected the query document."""

    INVALID_QUERY_ERROR = "Invalid GraphQL query: {message}"


class TibberGraphQLError(TibberError):
    """The API answered with a GraphQL error."""

    GRAPHQL_ERROR = "GraphQL error: {message}"
    MISSING_DATA = "Response missing data object"

    def __init__(self, message: str, code: str | None = None):
        self.code = code
        super().__init__(self.GRAPHQL_ERROR.format(message=message))


class HomeNotFoundError(TibberError):
    """The requested home is not visible to the access token."""

    def __init__(self, home_id: str):
        self.home_id = home_id
        super().__init__(f"Home not found: {home_id}")
