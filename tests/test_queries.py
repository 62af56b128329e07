"""Tests for tibber_homes query documents."""

import re

import pytest

from tibber_homes.exceptions import InvalidQueryParameterError
from tibber_homes.models import PriceResolution
from tibber_homes.queries import (
    build_consumption_query,
    build_current_price_query,
    build_home_query,
    build_homes_query,
    build_price_info_query,
    build_price_rating_query,
    build_tomorrow_prices_query,
    validate_count,
    validate_home_id,
)

HOME_SCOPED_BUILDERS = [
    build_home_query,
    build_current_price_query,
    build_price_rating_query,
    build_tomorrow_prices_query,
    build_price_info_query,
]


def assert_balanced(document: str) -> None:
    """Assert braces and parentheses nest correctly outside string literals."""
    pairs = {"}": "{", ")": "("}
    stack = []
    for char in re.sub(r'"[^"]*"', '""', document):
        if char in "{(":
            stack.append(char)
        elif char in pairs:
            assert stack and stack.pop() == pairs[char], document
    assert not stack, document


def selection(document: str, field: str) -> str:
    """Return the selection set that follows ``field``."""
    start = document.index(field)
    start = document.index("{", start)
    depth = 0
    for pos in range(start, len(document)):
        if document[pos] == "{":
            depth += 1
        elif document[pos] == "}":
            depth -= 1
            if depth == 0:
                return document[start : pos + 1]
    raise AssertionError(f"unterminated selection for {field}")


class TestHomesQuery:
    """Test the list homes document."""

    def test_document(self):
        """Test the document selects every home field."""
        query = build_homes_query()

        assert query.name == "homes"
        assert_balanced(query.document)
        assert "homes {" in query.document
        for field in (
            "id",
            "appNickname",
            "consumptionEan",
            "realTimeConsumptionEnabled",
            "address1",
            "postalCode",
            "latitude",
            "longitude",
            "size",
            "mainFuseSize",
            "numberOfResidents",
            "primaryHeatingSource",
            "hasVentilationSystem",
        ):
            assert re.search(rf"\b{field}\b", query.document), field

    def test_same_selection_as_single_home(self, home_id):
        """Test list and single home select identical fields."""
        homes = selection(build_homes_query().document, "homes")
        home = selection(build_home_query(home_id).document, "home(")

        assert homes == home


class TestHomeScopedQueries:
    """Test documents taking a home id."""

    @pytest.mark.parametrize("builder", HOME_SCOPED_BUILDERS)
    def test_home_id_quoted_once(self, builder, home_id):
        """Test the id appears exactly once as a quoted literal."""
        document = builder(home_id).document

        assert document.count(home_id) == 1
        assert f'home(id: "{home_id}")' in document
        assert_balanced(document)

    @pytest.mark.parametrize("builder", HOME_SCOPED_BUILDERS)
    @pytest.mark.parametrize(
        "bad_id",
        ['abc") { id } home(id: "x', "back\\slash", "line\nbreak", "", None, 42],
    )
    def test_unsafe_home_id_rejected(self, builder, bad_id):
        """Test ids that could escape the literal are rejected."""
        with pytest.raises(InvalidQueryParameterError):
            builder(bad_id)

    def test_current_price_fields(self, home_id):
        """Test the current price selection."""
        document = build_current_price_query(home_id).document
        current = selection(document, "current {")

        for field in ("level", "total", "energy", "tax", "currency", "startsAt"):
            assert field in current
        assert "today" not in document
        assert "tomorrow" not in document

    def test_tomorrow_prices_fields(self, home_id):
        """Test only tomorrow is selected."""
        document = build_tomorrow_prices_query(home_id).document

        assert "startsAt" in selection(document, "tomorrow {")
        assert "current {" not in document
        assert "today" not in document

    def test_price_info_fields(self, home_id):
        """Test current, today and tomorrow select the same price fields."""
        document = build_price_info_query(home_id).document

        current = selection(document, "current {")
        assert selection(document, "today {") == current
        assert selection(document, "tomorrow {") == current

    def test_price_rating_fields(self, home_id):
        """Test thresholds and all three rating windows are selected."""
        document = build_price_rating_query(home_id).document

        thresholds = selection(document, "thresholdPercentages")
        assert "high" in thresholds
        assert "low" in thresholds
        hourly = selection(document, "hourly")
        for field in ("minEnergy", "maxEnergy", "minTotal", "maxTotal", "currency", "difference"):
            assert field in hourly
        assert selection(document, "daily") == hourly
        assert selection(document, "monthly") == hourly


class TestConsumptionQuery:
    """Test the consumption document."""

    def test_hourly_24(self, home_id):
        """Test resolution and count are written as bare tokens."""
        query = build_consumption_query(home_id, PriceResolution.HOURLY, 24)

        assert query.name == "consumption"
        assert "consumption(resolution: HOURLY, last: 24)" in query.document
        assert "DAILY" not in query.document
        assert_balanced(query.document)

    def test_daily(self, home_id):
        """Test the daily token."""
        document = build_consumption_query(home_id, PriceResolution.DAILY, 7).document

        assert "resolution: DAILY, last: 7" in document
        assert "HOURLY" not in document

    def test_zero_count(self, home_id):
        """Test zero is an accepted count."""
        document = build_consumption_query(home_id, PriceResolution.DAILY, 0).document

        assert "last: 0)" in document

    def test_node_fields(self, home_id):
        """Test every consumption field is selected."""
        document = build_consumption_query(home_id, PriceResolution.HOURLY, 1).document
        nodes = selection(document, "nodes")

        for field in (
            "from",
            "to",
            "cost",
            "unitPrice",
            "unitPriceVAT",
            "currency",
            "consumption",
            "consumptionUnit",
        ):
            assert re.search(rf"\b{field}\b", nodes), field

    @pytest.mark.parametrize("count", [-1, 1.5, "24", True, None])
    def test_invalid_count(self, home_id, count):
        """Test counts that are not non-negative integers are rejected."""
        with pytest.raises(InvalidQueryParameterError, match="non-negative integer"):
            build_consumption_query(home_id, PriceResolution.HOURLY, count)

    @pytest.mark.parametrize("resolution", ["HOURLY", "WEEKLY", 0, None])
    def test_invalid_resolution(self, home_id, resolution):
        """Test only PriceResolution members are accepted."""
        with pytest.raises(InvalidQueryParameterError, match="PriceResolution"):
            build_consumption_query(home_id, resolution, 24)

    def test_invalid_home_id(self):
        """Test the home id is validated too."""
        with pytest.raises(InvalidQueryParameterError):
            build_consumption_query('x"', PriceResolution.HOURLY, 24)


class TestValidators:
    """Test parameter validators."""

    def test_validate_home_id_returns_id(self, home_id):
        """Test a valid id is returned unchanged."""
        assert validate_home_id(home_id) == home_id

    def test_validate_count_returns_count(self):
        """Test a valid count is returned unchanged."""
        assert validate_count(24) == 24

    def test_error_is_value_error(self):
        """Test validation errors are ValueErrors."""
        with pytest.raises(ValueError):
            validate_count(-5)
