"""Pytest configuration and fixtures for tibber_homes tests."""

from unittest.mock import AsyncMock

import pytest

HOME_ID = "96a14971-525a-4420-aae9-e5aedaa129ff"


def _price(level, total, energy, tax, starts_at):
    return {
        "level": level,
        "total": total,
        "energy": energy,
        "tax": tax,
        "currency": "NOK",
        "startsAt": starts_at,
    }


def _rating_type(time, level):
    return {
        "minEnergy": 0.5,
        "maxEnergy": 1.5,
        "minTotal": 0.7,
        "maxTotal": 1.9,
        "currency": "NOK",
        "entries": [
            {
                "time": time,
                "energy": 1.0,
                "total": 1.25,
                "tax": 0.25,
                "difference": -12.5,
                "level": level,
            }
        ],
    }


@pytest.fixture
def home_id():
    """Return a Tibber home id."""
    return HOME_ID


@pytest.fixture
def mock_transport():
    """Return a transport mock whose execute() is awaitable."""
    return AsyncMock()


@pytest.fixture
def home_node():
    """Return a home as selected by the home queries."""
    return {
        "id": HOME_ID,
        "appNickname": "Cabin",
        "meteringPointData": {"consumptionEan": "707057500012345678"},
        "features": {"realTimeConsumptionEnabled": True},
        "address": {
            "address1": "Kungsgatan 8",
            "address2": None,
            "address3": None,
            "postalCode": "11159",
            "city": "Stockholm",
            "country": "SE",
            "latitude": "59.3362066",
            "longitude": "18.0675126",
        },
        "size": 120,
        "mainFuseSize": 25,
        "numberOfResidents": 4,
        "primaryHeatingSource": "GROUND",
        "hasVentilationSystem": True,
    }


@pytest.fixture
def homes_response(home_node):
    """Return a homes envelope with two homes."""
    second = {**home_node, "id": "c70dcbe5-4485-4821-933d-a8a86452737b", "appNickname": "Flat"}
    return {"viewer": {"homes": [home_node, second]}}


@pytest.fixture
def home_response(home_node):
    """Return a single home envelope."""
    return {"viewer": {"home": home_node}}


@pytest.fixture
def current_price_response():
    """Return a current price envelope."""
    return {
        "viewer": {
            "home": {
                "currentSubscription": {
                    "priceInfo": {
                        "current": {
                            "level": "NORMAL",
                            "total": 1.23,
                            "energy": 1.0,
                            "tax": 0.23,
                            "currency": "NOK",
                            "startsAt": "2024-01-01T00:00:00Z",
                        }
                    }
                }
            }
        }
    }


@pytest.fixture
def price_info_response():
    """Return a price info envelope without tomorrow's prices."""
    return {
        "viewer": {
            "home": {
                "currentSubscription": {
                    "priceInfo": {
                        "current": _price(
                            "CHEAP", 0.9, 0.7, 0.2, "2024-01-01T10:00:00.000+01:00"
                        ),
                        "today": [
                            _price("CHEAP", 0.8, 0.6, 0.2, "2024-01-01T00:00:00.000+01:00"),
                            _price("NORMAL", 1.1, 0.9, 0.2, "2024-01-01T01:00:00.000+01:00"),
                        ],
                        "tomorrow": [],
                    }
                }
            }
        }
    }


@pytest.fixture
def tomorrow_prices_response():
    """Return a tomorrow prices envelope."""
    return {
        "viewer": {
            "home": {
                "currentSubscription": {
                    "priceInfo": {
                        "tomorrow": [
                            _price("EXPENSIVE", 2.1, 1.7, 0.4, "2024-01-02T00:00:00.000+01:00"),
                            _price("VERY_EXPENSIVE", 2.9, 2.3, 0.6, "2024-01-02T01:00:00.000+01:00"),
                        ]
                    }
                }
            }
        }
    }


@pytest.fixture
def price_rating_response():
    """Return a price rating envelope."""
    return {
        "viewer": {
            "home": {
                "currentSubscription": {
                    "priceRating": {
                        "thresholdPercentages": {"high": 20, "low": 10},
                        "hourly": _rating_type("2024-01-01T00:00:00.000+01:00", "LOW"),
                        "daily": _rating_type("2024-01-01T00:00:00.000+01:00", "NORMAL"),
                        "monthly": _rating_type("2024-01-01T00:00:00.000+01:00", "HIGH"),
                    }
                }
            }
        }
    }


@pytest.fixture
def consumption_response():
    """Return a consumption envelope with two hourly buckets."""
    return {
        "viewer": {
            "home": {
                "consumption": {
                    "nodes": [
                        {
                            "from": "2024-01-01T00:00:00.000+01:00",
                            "to": "2024-01-01T01:00:00.000+01:00",
                            "cost": 1.97,
                            "unitPrice": 0.83,
                            "unitPriceVAT": 0.17,
                            "currency": "NOK",
                            "consumption": 2.37,
                            "consumptionUnit": "kWh",
                        },
                        {
                            "from": "2024-01-01T01:00:00.000+01:00",
                            "to": "2024-01-01T02:00:00.000+01:00",
                            "cost": None,
                            "unitPrice": 0.85,
                            "unitPriceVAT": 0.17,
                            "currency": "NOK",
                            "consumption": None,
                            "consumptionUnit": "kWh",
                        },
                    ]
                }
            }
        }
    }
