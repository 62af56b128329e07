"""tibber-homes - Python library for the Tibber GraphQL API."""

from .client import TibberClient
from .exceptions import (
    HomeNotFoundError,
    InvalidQueryParameterError,
    TibberAuthenticationError,
    TibberCommunicationError,
    TibberDecodeError,
    TibberError,
    TibberGraphQLError,
    TibberPermissionError,
    TibberQueryError,
    TibberRateLimitError,
)
from .models import (
    Address,
    Consumption,
    CurrentSubscription,
    Home,
    PreviousMeterData,
    Price,
    PriceInfo,
    PriceRating,
    PriceRatingEntry,
    PriceRatingThresholdPercentages,
    PriceRatingType,
    PriceResolution,
)
from .transport import AiohttpTransport, GraphQLTransport

__version__ = "0.1.0"
__all__ = [
    "Address",
    "AiohttpTransport",
    "Consumption",
    "CurrentSubscription",
    "GraphQLTransport",
    "Home",
    "HomeNotFoundError",
    "InvalidQueryParameterError",
    "PreviousMeterData",
    "Price",
    "PriceInfo",
    "PriceRating",
    "PriceRatingEntry",
    "PriceRatingThresholdPercentages",
    "PriceRatingType",
    "PriceResolution",
    "TibberAuthenticationError",
    "TibberClient",
    "TibberCommunicationError",
    "TibberDecodeError",
    "TibberError",
    "TibberGraphQLError",
    "TibberPermissionError",
    "TibberQueryError",
    "TibberRateLimitError",
]
