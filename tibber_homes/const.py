"""Constants for the Tibber homes client."""

API_URL = "https://api.tibber.com/v1-beta/gql"

# Total request timeout in seconds
DEFAULT_TIMEOUT = 25

HEADER_AUTHORIZATION = "Authorization"
HEADER_CACHE_CONTROL = "Cache-Control"
NO_CACHE = "no-cache"
