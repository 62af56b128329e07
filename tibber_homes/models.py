"""Data models for Tibber API responses."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .exceptions import TibberDecodeError


class PriceResolution(Enum):
    """Time bucket used when requesting consumption history."""

    HOURLY = "HOURLY"
    DAILY = "DAILY"

    def __str__(self) -> str:
        return self.value


def _object(value, kind: str) -> dict:
    """Return a JSON object, {} for null, rejecting any other type."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TibberDecodeError(
            TibberDecodeError.INVALID_VALUE.format(kind=kind, value=value)
        )
    return value


def _list(value, kind: str) -> list:
    """Return a JSON array, [] for null, rejecting any other type."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise TibberDecodeError(
            TibberDecodeError.INVALID_VALUE.format(kind=kind, value=value)
        )
    return value


def _parse_time(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp, keeping its UTC offset.

    Only a null or empty value means "absent"; anything else that does not
    parse raises TibberDecodeError.
    """
    if value is None or value == "":
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError) as err:
        raise TibberDecodeError(
            TibberDecodeError.INVALID_VALUE.format(kind="timestamp", value=value)
        ) from err


def _float(value) -> float | None:
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TibberDecodeError(
            TibberDecodeError.INVALID_VALUE.format(kind="number", value=value)
        )
    return float(value)


def _int(value) -> int | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TibberDecodeError(
            TibberDecodeError.INVALID_VALUE.format(kind="integer", value=value)
        )
    return value


@dataclass(frozen=True)
class Address:
    """Postal address of a home."""

    address1: str | None = None
    address2: str | None = None
    address3: str | None = None
    postal_code: str | None = None
    city: str | None = None
    country: str | None = None
    # Tibber returns coordinates as strings
    latitude: str | None = None
    longitude: str | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "Address":
        """Create an Address from API response data."""
        return cls(
            address1=data.get("address1"),
            address2=data.get("address2"),
            address3=data.get("address3"),
            postal_code=data.get("postalCode"),
            city=data.get("city"),
            country=data.get("country"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )


@dataclass(frozen=True)
class Price:
    """Price for one period."""

    level: str | None = None
    total: float | None = None
    energy: float | None = None
    tax: float | None = None
    currency: str | None = None
    starts_at: datetime | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "Price":
        """Create a Price from API response data."""
        return cls(
            level=data.get("level"),
            total=_float(data.get("total")),
            energy=_float(data.get("energy")),
            tax=_float(data.get("tax")),
            currency=data.get("currency"),
            starts_at=_parse_time(data.get("startsAt")),
        )


def _prices(items: list | None) -> tuple[Price, ...]:
    return tuple(
        Price.from_api_response(_object(item, "price")) for item in _list(items, "prices")
    )


@dataclass(frozen=True)
class PriceInfo:
    """Current price plus the price sequences for today and tomorrow."""

    current: Price | None = None
    today: tuple[Price, ...] = ()
    # Empty until tomorrow's prices are published
    tomorrow: tuple[Price, ...] = ()

    @classmethod
    def from_api_response(cls, data: dict) -> "PriceInfo":
        """Create a PriceInfo from API response data."""
        current = _object(data.get("current"), "current")
        return cls(
            current=Price.from_api_response(current) if current else None,
            today=_prices(data.get("today")),
            tomorrow=_prices(data.get("tomorrow")),
        )


@dataclass(frozen=True)
class PriceRatingEntry:
    """A price compared against the average of its rating window."""

    time: datetime | None = None
    energy: float | None = None
    total: float | None = None
    tax: float | None = None
    difference: float | None = None
    level: str | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "PriceRatingEntry":
        """Create a PriceRatingEntry from API response data."""
        return cls(
            time=_parse_time(data.get("time")),
            energy=_float(data.get("energy")),
            total=_float(data.get("total")),
            tax=_float(data.get("tax")),
            difference=_float(data.get("difference")),
            level=data.get("level"),
        )


@dataclass(frozen=True)
class PriceRatingType:
    """Price rating for one window size (hourly, daily or monthly)."""

    min_energy: float | None = None
    max_energy: float | None = None
    min_total: float | None = None
    max_total: float | None = None
    currency: str | None = None
    entries: tuple[PriceRatingEntry, ...] = ()

    @classmethod
    def from_api_response(cls, data: dict) -> "PriceRatingType":
        """Create a PriceRatingType from API response data."""
        return cls(
            min_energy=_float(data.get("minEnergy")),
            max_energy=_float(data.get("maxEnergy")),
            min_total=_float(data.get("minTotal")),
            max_total=_float(data.get("maxTotal")),
            currency=data.get("currency"),
            entries=tuple(
                PriceRatingEntry.from_api_response(_object(entry, "entry"))
                for entry in _list(data.get("entries"), "entries")
            ),
        )


@dataclass(frozen=True)
class PriceRatingThresholdPercentages:
    """Percentages above/below average that make a price high or low."""

    high: float | None = None
    low: float | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "PriceRatingThresholdPercentages":
        """Create threshold percentages from API response data."""
        return cls(high=_float(data.get("high")), low=_float(data.get("low")))


@dataclass(frozen=True)
class PriceRating:
    """Hourly, daily and monthly price ratings for a home."""

    threshold_percentages: PriceRatingThresholdPercentages | None = None
    hourly: PriceRatingType | None = None
    daily: PriceRatingType | None = None
    monthly: PriceRatingType | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "PriceRating":
        """Create a PriceRating from API response data."""
        thresholds = _object(data.get("thresholdPercentages"), "thresholdPercentages")
        hourly = _object(data.get("hourly"), "hourly")
        daily = _object(data.get("daily"), "daily")
        monthly = _object(data.get("monthly"), "monthly")
        return cls(
            threshold_percentages=(
                PriceRatingThresholdPercentages.from_api_response(thresholds)
                if thresholds
                else None
            ),
            hourly=PriceRatingType.from_api_response(hourly) if hourly else None,
            daily=PriceRatingType.from_api_response(daily) if daily else None,
            monthly=PriceRatingType.from_api_response(monthly) if monthly else None,
        )


@dataclass(frozen=True)
class CurrentSubscription:
    """The active subscription of a home."""

    price_info: PriceInfo | None = None
    price_rating: PriceRating | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "CurrentSubscription":
        """Create a CurrentSubscription from API response data."""
        price_info = _object(data.get("priceInfo"), "priceInfo")
        price_rating = _object(data.get("priceRating"), "priceRating")
        return cls(
            price_info=PriceInfo.from_api_response(price_info) if price_info else None,
            price_rating=(
                PriceRating.from_api_response(price_rating) if price_rating else None
            ),
        )


@dataclass(frozen=True)
class PreviousMeterData:
    """Meter snapshot from the previous period."""

    power: float | None = None
    power_production: float | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "PreviousMeterData":
        """Create a PreviousMeterData from API response data."""
        return cls(
            power=_float(data.get("power")),
            power_production=_float(data.get("powerProduction")),
        )


@dataclass(frozen=True)
class Consumption:
    """Energy consumed during one resolution bucket."""

    from_time: datetime | None = None
    to_time: datetime | None = None
    cost: float | None = None
    unit_price: float | None = None
    unit_price_vat: float | None = None
    consumption: float | None = None
    consumption_unit: str | None = None
    currency: str | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "Consumption":
        """Create a Consumption from API response data."""
        return cls(
            from_time=_parse_time(data.get("from")),
            to_time=_parse_time(data.get("to")),
            cost=_float(data.get("cost")),
            unit_price=_float(data.get("unitPrice")),
            unit_price_vat=_float(data.get("unitPriceVAT")),
            consumption=_float(data.get("consumption")),
            consumption_unit=data.get("consumptionUnit"),
            currency=data.get("currency"),
        )


@dataclass(frozen=True)
class Home:
    """A home registered on the Tibber account."""

    id: str
    app_nickname: str | None = None
    metering_point_id: str | None = None
    real_time_consumption_enabled: bool = False
    address: Address | None = None
    size: int | None = None
    main_fuse_size: int | None = None
    number_of_residents: int | None = None
    primary_heating_source: str | None = None
    has_ventilation_system: bool = False
    current_subscription: CurrentSubscription | None = None
    previous_meter_data: PreviousMeterData | None = None
    consumption: tuple[Consumption, ...] = ()

    @classmethod
    def from_api_response(cls, data: dict) -> "Home":
        """Create a Home from API response data.

        Nested objects missing from the selection decode to None and the
        consumption connection to an empty tuple.
        """
        address = _object(data.get("address"), "address")
        subscription = _object(data.get("currentSubscription"), "currentSubscription")
        previous = _object(data.get("previousMeterData"), "previousMeterData")
        connection = _object(data.get("consumption"), "consumption")
        metering = _object(data.get("meteringPointData"), "meteringPointData")
        features = _object(data.get("features"), "features")
        return cls(
            id=data.get("id") or "",
            app_nickname=data.get("appNickname"),
            metering_point_id=metering.get("consumptionEan"),
            real_time_consumption_enabled=bool(features.get("realTimeConsumptionEnabled")),
            address=Address.from_api_response(address) if address else None,
            size=_int(data.get("size")),
            main_fuse_size=_int(data.get("mainFuseSize")),
            number_of_residents=_int(data.get("numberOfResidents")),
            primary_heating_source=data.get("primaryHeatingSource"),
            has_ventilation_system=bool(data.get("hasVentilationSystem")),
            current_subscription=(
                CurrentSubscription.from_api_response(subscription)
                if subscription
                else None
            ),
            previous_meter_data=(
                PreviousMeterData.from_api_response(previous) if previous else None
            ),
            consumption=tuple(
                Consumption.from_api_response(_object(node, "node"))
                for node in _list(connection.get("nodes"), "nodes")
            ),
        )
