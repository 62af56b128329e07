"""Tibber API client."""

import logging

from .const import HEADER_AUTHORIZATION, HEADER_CACHE_CONTROL, NO_CACHE
from .models import Consumption, Home, Price, PriceInfo, PriceRating, PriceResolution
from .queries import (
    GraphQLQuery,
    build_consumption_query,
    build_current_price_query,
    build_home_query,
    build_homes_query,
    build_price_info_query,
    build_price_rating_query,
    build_tomorrow_prices_query,
)
from .responses import (
    unwrap_consumption,
    unwrap_current_price,
    unwrap_home,
    unwrap_homes,
    unwrap_price_info,
    unwrap_price_rating,
    unwrap_tomorrow_prices,
)
from .transport import AiohttpTransport, GraphQLTransport

_LOGGER = logging.getLogger(__name__)


class TibberClient:
    """Client for reading homes, prices and consumption from Tibber.

    The client only holds the access token and the transport, so one
    instance can serve concurrent calls as long as the transport can.
    Errors raised by the transport propagate unchanged; nothing is retried.
    """

    def __init__(self, access_token: str, transport: GraphQLTransport | None = None):
        """Initialize the client.

        Args:
            access_token: Tibber personal access token
            transport: Transport to send queries with. If omitted, an
                AiohttpTransport is created and closed with the client.
        """
        if not access_token:
            raise ValueError("An access token is required")
        self._access_token = access_token
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else AiohttpTransport()

    @property
    def access_token(self) -> str:
        """The bearer token sent with every request."""
        return self._access_token

    @property
    def transport(self) -> GraphQLTransport:
        """The transport queries are sent with."""
        return self._transport

    async def __aenter__(self) -> "TibberClient":
        """Enter async context."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        await self.close()

    def _headers(self) -> dict[str, str]:
        return {
            HEADER_CACHE_CONTROL: NO_CACHE,
            HEADER_AUTHORIZATION: f"Bearer {self._access_token}",
        }

    async def _execute(self, query: GraphQLQuery) -> dict:
        """Send a built query and return the response ``data`` object."""
        _LOGGER.debug("Executing %s query", query.name)
        return await self._transport.execute(query.document, self._headers())

    async def get_homes(self) -> list[Home]:
        """Get every home on the account, in API order."""
        data = await self._execute(build_homes_query())
        homes = unwrap_homes(data)
        _LOGGER.debug("get_homes: parsed %d home(s)", len(homes))
        return homes

    async def get_home(self, home_id: str) -> Home:
        """Get metadata for one home.

        Raises:
            HomeNotFoundError: If the API returns no home for the id.
        """
        data = await self._execute(build_home_query(home_id))
        return unwrap_home(data, home_id)

    async def get_current_price(self, home_id: str) -> Price | None:
        """Get the price of the current period.

        Returns None if the home has no active subscription.
        """
        data = await self._execute(build_current_price_query(home_id))
        return unwrap_current_price(data, home_id)

    async def get_current_price_rating(self, home_id: str) -> PriceRating | None:
        """Get the hourly, daily and monthly price ratings."""
        data = await self._execute(build_price_rating_query(home_id))
        return unwrap_price_rating(data, home_id)

    async def get_tomorrows_prices(self, home_id: str) -> list[Price]:
        """Get tomorrow's prices.

        The list is empty until tomorrow's prices are published.
        """
        data = await self._execute(build_tomorrow_prices_query(home_id))
        prices = unwrap_tomorrow_prices(data, home_id)
        _LOGGER.debug("get_tomorrows_prices: %d price(s) for home %s", len(prices), home_id)
        return prices

    async def get_price_info(self, home_id: str) -> PriceInfo | None:
        """Get the current price together with today's and tomorrow's prices."""
        data = await self._execute(build_price_info_query(home_id))
        return unwrap_price_info(data, home_id)

    async def get_consumption(
        self, home_id: str, resolution: PriceResolution, last: int
    ) -> list[Consumption]:
        """Get the most recent consumption buckets.

        Args:
            home_id: Tibber home id
            resolution: PriceResolution.HOURLY or PriceResolution.DAILY
            last: Number of buckets to fetch

        Returns:
            Consumption records, oldest first

        Raises:
            InvalidQueryParameterError: If a parameter is invalid. No
                request is sent in that case.
        """
        query = build_consumption_query(home_id, resolution, last)
        data = await self._execute(query)
        nodes = unwrap_consumption(data, home_id)
        _LOGGER.debug(
            "get_consumption: %d %s record(s) for home %s",
            len(nodes),
            resolution,
            home_id,
        )
        return nodes

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()
