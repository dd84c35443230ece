"""
Pytest configuration and shared fixtures.

This module provides common fixtures and utilities used across all tests.
"""

import pytest

from airwis.config import FeedConfig
from airwis.types import ForecastDay, PollutantKind, PollutionReading

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def feed_config():
    """Feed settings pointing at the real API host, with a fake token."""
    return FeedConfig(token="test-token-123", timeout=5.0)


# ============================================================================
# Feed Payload Fixtures
# ============================================================================


@pytest.fixture
def waqi_payload():
    """
    A WAQI city feed document.

    Mirrors the structure returned by https://api.waqi.info/feed/{city}/,
    including weather fields that share the iaqi and forecast maps.
    """
    return {
        "status": "ok",
        "data": {
            "aqi": 57,
            "idx": 5724,
            "attributions": [
                {"url": "https://uk-air.defra.gov.uk/", "name": "UK-AIR"},
            ],
            "city": {
                "geo": [51.5073509, -0.1277583],
                "name": "London",
                "url": "https://aqicn.org/city/london",
                "location": "",
            },
            "dominentpol": "pm25",
            "iaqi": {
                "pm25": {"v": 15.2},
                "pm10": {"v": 20},
                "o3": {"v": 31.5},
                "no2": {"v": 12.8},
                "t": {"v": 18.2},
                "h": {"v": 72},
                "w": {"v": 3.6},
            },
            "time": {
                "s": "2024-06-01 12:00:00",
                "tz": "+01:00",
                "v": 1717243200,
                "iso": "2024-06-01T12:00:00+01:00",
            },
            "forecast": {
                "daily": {
                    "pm25": [
                        {"avg": 30, "day": "2024-05-31", "max": 40, "min": 20},
                        {"avg": 14, "day": "2024-06-01", "max": 20, "min": 9},
                        {"avg": 10, "day": "2024-06-02", "max": 15, "min": 5},
                        {"avg": 40, "day": "2024-06-03", "max": 60, "min": 30},
                    ],
                    "o3": [
                        {"avg": 25, "day": "2024-06-02", "max": 30, "min": 18},
                    ],
                    "uvi": [
                        {"avg": 2, "day": "2024-06-02", "max": 5, "min": 0},
                    ],
                }
            },
        },
    }


# ============================================================================
# Reading Fixtures
# ============================================================================


@pytest.fixture
def o3_reading():
    """Ozone-dominated reading with one same-day and one future forecast entry."""
    return PollutionReading(
        dominant_pollutant="o3",
        current_value={"o3": 70},
        forecast_series={"o3": [("2024-06-01", 60), ("2024-06-02", 90)]},
        current_date_label="2024-06-01",
        city_name="Test City",
    )


@pytest.fixture
def pm25_reading():
    """PM2.5-dominated reading using parsed types throughout."""
    return PollutionReading(
        dominant_pollutant=PollutantKind.PM25,
        current_value={PollutantKind.PM25: 12.0, PollutantKind.O3: 20.0},
        forecast_series={
            PollutantKind.PM25: [
                ForecastDay("2024-06-02", 35.4, 20, 50),
                ForecastDay("2024-06-03", 55.5, 40, 70),
            ],
        },
        current_date_label="2024-06-01",
        city_name="London",
    )
