# airwis: city air quality reports from the WAQI feed
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
WAQI feed client.

This module fetches the city feed from the World Air Quality Index project
and parses it into a ``PollutionReading``.

The feed returns a JSON document of the form:

    {
        "status": "ok",
        "data": {
            "aqi": 57,
            "dominentpol": "pm25",
            "iaqi": {"pm25": {"v": 57}, "o3": {"v": 21}, "t": {"v": 18.2}},
            "city": {"name": "London", ...},
            "time": {"s": "2024-06-01 12:00:00", ...},
            "forecast": {"daily": {"pm25": [{"day": "2024-06-02", "avg": 40,
                                             "min": 20, "max": 60}, ...]}}
        }
    }

Weather fields (t, h, p, w, dew, uvi) share the same maps and are dropped.

API Documentation: https://aqicn.org/json-api/doc/
"""

from logging import getLogger
from typing import Any
from urllib.parse import quote

import requests

from .config import FeedConfig, load_config
from .decorators import RETRY_ATTEMPTS, retry_on_network_error, with_logging
from .errors import FeedError, FeedTimeoutError
from .metrics import parse_pollutant, standardise_pollutant
from .types import ForecastDay, PollutantKind, PollutionReading

logger = getLogger(__name__)


# ============================================================================
# API CLIENT
# ============================================================================


def feed_url(city: str, config: FeedConfig) -> str:
    """Build the feed URL for a city name, station id ("@123") or "geo:lat;lng"."""
    return f"{config.api_base}/feed/{quote(city.strip(), safe=':;@')}/"


@retry_on_network_error
def _call_waqi_api(city: str, config: FeedConfig) -> Any:
    """
    Make a request to the WAQI feed endpoint.

    Network errors and HTTP 5xx responses are retried; everything else is
    raised to the caller.

    Returns:
        Decoded JSON document
    """
    response = requests.get(
        feed_url(city, config),
        params={"token": config.token},
        timeout=config.timeout,
    )
    response.raise_for_status()
    return response.json()


def fetch_city_feed(city: str, config: FeedConfig | None = None) -> dict:
    """
    Fetch the raw feed document for a city.

    Args:
        city: City name as understood by WAQI (e.g. "london", "beijing")
        config: Feed settings; read from the environment when omitted

    Returns:
        dict: The full JSON document (status and data)

    Raises:
        FeedTimeoutError: If the request timed out on every attempt
        FeedError: For any other transport, HTTP or decoding failure
    """
    config = config or load_config()
    logger.info(f"Fetching WAQI feed for {city}...")

    try:
        payload = _call_waqi_api(city, config)
    except requests.exceptions.Timeout as e:
        raise FeedTimeoutError(
            f"Request timed out after {RETRY_ATTEMPTS} attempts of "
            f"{config.timeout}s each for {city}"
        ) from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        raise FeedError(f"WAQI API returned HTTP {status} for {city}") from e
    except requests.exceptions.RequestException as e:
        raise FeedError(f"WAQI API request failed: {e}") from e
    except ValueError as e:
        # JSON decoding error
        raise FeedError(f"Failed to parse WAQI response: {e}") from e

    if not isinstance(payload, dict):
        raise FeedError(f"Unexpected WAQI response type: {type(payload).__name__}")
    return payload


# ============================================================================
# PARSING
# ============================================================================


def _parse_current_values(iaqi: dict) -> dict[PollutantKind, float]:
    values = {}
    for key, entry in (iaqi or {}).items():
        kind = standardise_pollutant(key)
        if kind is None:
            continue
        try:
            values[kind] = float(entry["v"])
        except (KeyError, TypeError, ValueError):
            logger.debug(f"Skipping unusable iaqi entry {key}: {entry!r}")
    return values


def _parse_forecast(daily: dict) -> dict[PollutantKind, list[ForecastDay]]:
    series = {}
    for key, days in (daily or {}).items():
        kind = standardise_pollutant(key)
        if kind is None:
            continue
        parsed = []
        for day in days or []:
            try:
                parsed.append(
                    ForecastDay(
                        date_label=str(day["day"]),
                        average_concentration=float(day["avg"]),
                        minimum=day.get("min"),
                        maximum=day.get("max"),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.debug(f"Skipping unusable {key} forecast entry: {day!r}")
        series[kind] = parsed
    return series


def parse_feed_response(payload: dict) -> PollutionReading:
    """
    Parse a WAQI feed document into a PollutionReading.

    The current date label is the date part of ``time.s``. Only the six
    supported pollutants are kept from ``iaqi`` and the daily forecast.

    Raises:
        FeedError: If the status is not "ok" or required fields are missing
        UnknownPollutantError: If the dominant pollutant is not supported
    """
    status = payload.get("status")
    if status != "ok":
        detail = payload.get("data")
        message = f"API returned an error: {status}"
        if isinstance(detail, str):
            message += f" ({detail})"
        raise FeedError(message)

    data = payload.get("data")
    if not isinstance(data, dict):
        raise FeedError("WAQI response has no data object")

    dominant = data.get("dominentpol")
    if not dominant:
        raise FeedError("WAQI response has no dominant pollutant")
    kind = parse_pollutant(dominant)

    time_string = (data.get("time") or {}).get("s") or ""
    date_parts = time_string.split()
    if not date_parts:
        raise FeedError("Failed to parse date")

    station_aqi = data.get("aqi")
    return PollutionReading(
        dominant_pollutant=kind,
        current_value=_parse_current_values(data.get("iaqi")),
        forecast_series=_parse_forecast((data.get("forecast") or {}).get("daily")),
        current_date_label=date_parts[0],
        city_name=(data.get("city") or {}).get("name", ""),
        station_aqi=station_aqi if isinstance(station_aqi, int) else None,
    )


@with_logging()
def fetch_reading(city: str, config: FeedConfig | None = None) -> PollutionReading:
    """
    Fetch and parse the current reading for a city.

    Example:
        >>> reading = fetch_reading("london")
        >>> reading.dominant_pollutant
        <PollutantKind.PM25: 'pm25'>
    """
    return parse_feed_response(fetch_city_feed(city, config))
