"""Extract typed values from the ``viewer`` envelope of Tibber responses.

Every function takes the GraphQL ``data`` object as returned by the
transport. Absent or null sequences decode to an empty list and absent
single values to None. A missing ``viewer.home`` raises HomeNotFoundError
so that "no such home" is never confused with an empty one. A node of the
wrong JSON type raises TibberDecodeError.
"""

from .exceptions import HomeNotFoundError
from .models import Consumption, Home, Price, PriceInfo, PriceRating, _list, _object


def _viewer(data: dict) -> dict:
    return _object(_object(data, "data").get("viewer"), "viewer")


def _home_node(data: dict, home_id: str) -> dict:
    home = _viewer(data).get("home")
    if home is None:
        raise HomeNotFoundError(home_id)
    return _object(home, "home")


def _subscription_node(data: dict, home_id: str) -> dict:
    home = _home_node(data, home_id)
    return _object(home.get("currentSubscription"), "currentSubscription")


def _price_info_node(data: dict, home_id: str) -> dict:
    subscription = _subscription_node(data, home_id)
    return _object(subscription.get("priceInfo"), "priceInfo")


def unwrap_homes(data: dict) -> list[Home]:
    """Return ``viewer.homes`` in upstream order."""
    homes = _list(_viewer(data).get("homes"), "homes")
    return [Home.from_api_response(_object(home, "home")) for home in homes]


def unwrap_home(data: dict, home_id: str) -> Home:
    """Return ``viewer.home``."""
    return Home.from_api_response(_home_node(data, home_id))


def unwrap_current_price(data: dict, home_id: str) -> Price | None:
    """Return ``viewer.home.currentSubscription.priceInfo.current``."""
    current = _object(_price_info_node(data, home_id).get("current"), "current")
    return Price.from_api_response(current) if current else None


def unwrap_price_rating(data: dict, home_id: str) -> PriceRating | None:
    """Return ``viewer.home.currentSubscription.priceRating``."""
    subscription = _subscription_node(data, home_id)
    rating = _object(subscription.get("priceRating"), "priceRating")
    return PriceRating.from_api_response(rating) if rating else None


def unwrap_tomorrow_prices(data: dict, home_id: str) -> list[Price]:
    """Return ``viewer.home.currentSubscription.priceInfo.tomorrow``."""
    tomorrow = _list(_price_info_node(data, home_id).get("tomorrow"), "tomorrow")
    return [Price.from_api_response(_object(price, "price")) for price in tomorrow]


def unwrap_price_info(data: dict, home_id: str) -> PriceInfo | None:
    """Return ``viewer.home.currentSubscription.priceInfo``."""
    price_info = _price_info_node(data, home_id)
    return PriceInfo.from_api_response(price_info) if price_info else None


def unwrap_consumption(data: dict, home_id: str) -> list[Consumption]:
    """Return ``viewer.home.consumption.nodes``."""
    connection = _object(_home_node(data, home_id).get("consumption"), "consumption")
    nodes = _list(connection.get("nodes"), "nodes")
    return [Consumption.from_api_response(_object(node, "node")) for node in nodes]
