"""GraphQL query documents for the Tibber API.

Caller parameters are validated before they are written into a document:
home ids become quoted string literals, counts bare integers and
resolutions their enum token. Anything that could break out of a literal
is rejected with InvalidQueryParameterError.
"""

import re
from dataclasses import dataclass

from .exceptions import InvalidQueryParameterError
from .models import PriceResolution

# Characters that would terminate or escape a GraphQL string literal
_UNSAFE_ID_CHARS = re.compile(r'["\\\x00-\x1f\x7f]')

HOME_FIELDS = """
        id
        appNickname
        meteringPointData {
          consumptionEan
        }
        features {
          realTimeConsumptionEnabled
        }
        address {
          address1
          address2
          address3
          postalCode
          city
          country
          latitude
          longitude
        }
        size
        mainFuseSize
        numberOfResidents
        primaryHeatingSource
        hasVentilationSystem"""

PRICE_FIELDS = """
              level
              total
              energy
              tax
              currency
              startsAt"""

PRICE_RATING_TYPE_FIELDS = """
              minEnergy
              maxEnergy
              minTotal
              maxTotal
              currency
              entries {
                time
                energy
                total
                tax
                difference
                level
              }"""

CONSUMPTION_FIELDS = """
          from
          to
          cost
          unitPrice
          unitPriceVAT
          currency
          consumption
          consumptionUnit"""

HOMES_QUERY = f"""
query {{
  viewer {{
    homes {{{HOME_FIELDS}
    }}
  }}
}}"""

HOME_QUERY = f"""
query {{
  viewer {{
    home(id: "%(home_id)s") {{{HOME_FIELDS}
    }}
  }}
}}"""

CURRENT_PRICE_QUERY = f"""
query {{
  viewer {{
    home(id: "%(home_id)s") {{
      currentSubscription {{
        priceInfo {{
          current {{{PRICE_FIELDS}
          }}
        }}
      }}
    }}
  }}
}}"""

PRICE_RATING_QUERY = f"""
query {{
  viewer {{
    home(id: "%(home_id)s") {{
      currentSubscription {{
        priceRating {{
          thresholdPercentages {{
            high
            low
          }}
          hourly {{{PRICE_RATING_TYPE_FIELDS}
          }}
          daily {{{PRICE_RATING_TYPE_FIELDS}
          }}
          monthly {{{PRICE_RATING_TYPE_FIELDS}
          }}
        }}
      }}
    }}
  }}
}}"""

TOMORROW_PRICES_QUERY = f"""
query {{
  viewer {{
    home(id: "%(home_id)s") {{
      currentSubscription {{
        priceInfo {{
          tomorrow {{{PRICE_FIELDS}
          }}
        }}
      }}
    }}
  }}
}}"""

PRICE_INFO_QUERY = f"""
query {{
  viewer {{
    home(id: "%(home_id)s") {{
      currentSubscription {{
        priceInfo {{
          current {{{PRICE_FIELDS}
          }}
          today {{{PRICE_FIELDS}
          }}
          tomorrow {{{PRICE_FIELDS}
          }}
        }}
      }}
    }}
  }}
}}"""

CONSUMPTION_QUERY = f"""
query {{
  viewer {{
    home(id: "%(home_id)s") {{
      consumption(resolution: %(resolution)s, last: %(last)d) {{
        nodes {{{CONSUMPTION_FIELDS}
        }}
      }}
    }}
  }}
}}"""


@dataclass(frozen=True)
class GraphQLQuery:
    """A named, fully built query document."""

    name: str
    document: str


def validate_home_id(home_id: str) -> str:
    """Return the home id if it can be embedded as a string literal."""
    if not isinstance(home_id, str) or not home_id or _UNSAFE_ID_CHARS.search(home_id):
        raise InvalidQueryParameterError(
            InvalidQueryParameterError.INVALID_HOME_ID.format(home_id=home_id)
        )
    return home_id


def validate_count(count: int) -> int:
    """Return the count if it is a non-negative integer."""
    # bool is an int subclass but never a meaningful count
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise InvalidQueryParameterError(
            InvalidQueryParameterError.INVALID_COUNT.format(count=count)
        )
    return count


def validate_resolution(resolution: PriceResolution) -> PriceResolution:
    """Return the resolution if it is a PriceResolution member."""
    if not isinstance(resolution, PriceResolution):
        raise InvalidQueryParameterError(
            InvalidQueryParameterError.INVALID_RESOLUTION.format(resolution=resolution)
        )
    return resolution


def build_homes_query() -> GraphQLQuery:
    """Build the query listing every home of the viewer."""
    return GraphQLQuery("homes", HOMES_QUERY)


def build_home_query(home_id: str) -> GraphQLQuery:
    """Build the query for a single home's metadata."""
    return GraphQLQuery(
        "home", HOME_QUERY % {"home_id": validate_home_id(home_id)}
    )


def build_current_price_query(home_id: str) -> GraphQLQuery:
    """Build the query for the price of the current period."""
    return GraphQLQuery(
        "current_price",
        CURRENT_PRICE_QUERY % {"home_id": validate_home_id(home_id)},
    )


def build_price_rating_query(home_id: str) -> GraphQLQuery:
    """Build the query for the hourly, daily and monthly price ratings."""
    return GraphQLQuery(
        "price_rating",
        PRICE_RATING_QUERY % {"home_id": validate_home_id(home_id)},
    )


def build_tomorrow_prices_query(home_id: str) -> GraphQLQuery:
    """Build the query for tomorrow's prices."""
    return GraphQLQuery(
        "tomorrow_prices",
        TOMORROW_PRICES_QUERY % {"home_id": validate_home_id(home_id)},
    )


def build_price_info_query(home_id: str) -> GraphQLQuery:
    """Build the query for current, today's and tomorrow's prices."""
    return GraphQLQuery(
        "price_info",
        PRICE_INFO_QUERY % {"home_id": validate_home_id(home_id)},
    )


def build_consumption_query(
    home_id: str, resolution: PriceResolution, last: int
) -> GraphQLQuery:
    """Build the query for the last ``last`` consumption buckets.

    Args:
        home_id: Tibber home id
        resolution: Bucket size, HOURLY or DAILY
        last: Number of buckets to return, counting back from now

    Raises:
        InvalidQueryParameterError: If any parameter is invalid. Nothing
            is built in that case.
    """
    home_id = validate_home_id(home_id)
    resolution = validate_resolution(resolution)
    last = validate_count(last)
    return GraphQLQuery(
        "consumption",
        CONSUMPTION_QUERY
        % {"home_id": home_id, "resolution": resolution.value, "last": last},
    )
