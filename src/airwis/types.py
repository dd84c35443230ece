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
Core type definitions for airwis.

This module defines the pollutant and severity enumerations and the small
immutable records passed between the feed client, the AQI converter, the
report deriver and the renderer.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Mapping, NamedTuple, Sequence


class PollutantKind(str, Enum):
    """
    Pollutants supported by the AQI converter.

    Values are the identifiers used by the WAQI feed, so a member compares
    equal to the raw feed string (``PollutantKind.O3 == "o3"``).
    """

    PM25 = "pm25"
    PM10 = "pm10"
    O3 = "o3"  # 8-hour average
    NO2 = "no2"
    SO2 = "so2"  # 1-hour average
    CO = "co"

    def __str__(self) -> str:
        return self.value


class SeverityTier(IntEnum):
    """
    US EPA AQI categories, ordered from least to most severe.

    A tier is always derived from an AQI number via ``from_aqi``; it is never
    supplied independently of the value it describes.
    """

    GOOD = 1
    MODERATE = 2
    UNHEALTHY_SENSITIVE = 3
    UNHEALTHY = 4
    VERY_UNHEALTHY = 5
    HAZARDOUS = 6

    @property
    def aqi_range(self) -> tuple[int, int]:
        """Inclusive (low, high) AQI bounds of this tier."""
        return _TIER_RANGES[self]

    @property
    def label(self) -> str:
        """Human-readable category name."""
        return _TIER_LABELS[self]

    @classmethod
    def from_aqi(cls, aqi: int) -> "SeverityTier":
        """
        Return the tier whose AQI sub-range contains ``aqi``.

        Raises:
            ValueError: If ``aqi`` is outside 0-500
        """
        for tier, (low, high) in _TIER_RANGES.items():
            if low <= aqi <= high:
                return tier
        raise ValueError(f"AQI {aqi} is outside the 0-500 scale")


_TIER_RANGES = {
    SeverityTier.GOOD: (0, 50),
    SeverityTier.MODERATE: (51, 100),
    SeverityTier.UNHEALTHY_SENSITIVE: (101, 150),
    SeverityTier.UNHEALTHY: (151, 200),
    SeverityTier.VERY_UNHEALTHY: (201, 300),
    SeverityTier.HAZARDOUS: (301, 500),
}

_TIER_LABELS = {
    SeverityTier.GOOD: "Good",
    SeverityTier.MODERATE: "Moderate",
    SeverityTier.UNHEALTHY_SENSITIVE: "Unhealthy for Sensitive Groups",
    SeverityTier.UNHEALTHY: "Unhealthy",
    SeverityTier.VERY_UNHEALTHY: "Very Unhealthy",
    SeverityTier.HAZARDOUS: "Hazardous",
}


@dataclass(frozen=True)
class Breakpoint:
    """A single row of a breakpoint table."""

    low_conc: float  # Low concentration bound (inclusive)
    high_conc: float  # High concentration bound (inclusive)
    low_aqi: int  # AQI at low_conc
    high_aqi: int  # AQI at high_conc

    def __post_init__(self):
        if self.low_conc > self.high_conc or self.low_aqi > self.high_aqi:
            raise ValueError(f"Inverted breakpoint row: {self}")

    def contains(self, concentration: float) -> bool:
        return self.low_conc <= concentration <= self.high_conc


@dataclass(frozen=True)
class AirQualityResult:
    """Result of converting one concentration to the AQI scale."""

    aqi: int  # AQI value (0-500)
    level: SeverityTier  # Always SeverityTier.from_aqi(aqi)
    pollutant: PollutantKind | None = None
    concentration: float | None = None  # Input concentration, before truncation

    @property
    def category(self) -> str:
        return self.level.label


class ForecastDay(NamedTuple):
    """One day of a pollutant forecast as published by the feed."""

    date_label: str  # "YYYY-MM-DD"
    average_concentration: float
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True)
class PollutionReading:
    """
    A parsed feed response for one city.

    Built fresh for every request and discarded once the report is rendered.
    Mapping keys may be ``PollutantKind`` members or raw feed identifiers.
    Forecast days may be ``ForecastDay`` tuples or plain
    ``(date_label, average_concentration)`` pairs.
    """

    dominant_pollutant: PollutantKind | str
    current_value: Mapping[str, float]
    forecast_series: Mapping[str, Sequence[ForecastDay | tuple]] = field(
        default_factory=dict
    )
    current_date_label: str = ""
    city_name: str = ""
    station_aqi: int | None = None  # The feed's own AQI, carried unvalidated


@dataclass(frozen=True)
class DailyReportEntry:
    """AQI result for one day of a report."""

    date_label: str
    aqi_result: AirQualityResult

    @property
    def aqi(self) -> int:
        return self.aqi_result.aqi

    @property
    def level(self) -> SeverityTier:
        return self.aqi_result.level
