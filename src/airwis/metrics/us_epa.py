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
US EPA Air Quality Index (AQI) implementation.

The US EPA AQI uses a 0-500 scale divided into six categories:
Good (0-50), Moderate (51-100), Unhealthy for Sensitive Groups (101-150),
Unhealthy (151-200), Very Unhealthy (201-300), Hazardous (301-500).

Reference: https://www.airnow.gov/aqi/aqi-basics/
CFR: 40 CFR Appendix G to Part 58

Pollutants and averaging periods:
- PM2.5: 24-hour average
- PM10: 24-hour average
- O3: 8-hour average
- NO2: 1-hour average
- SO2: 1-hour average
- CO: 8-hour average

Note: WAQI reports ozone, NO2 and SO2 in ppb and CO in ppm, so the tables
below are expressed in those units.
"""

import math
import numbers
from types import MappingProxyType

from ..errors import OutOfDomainError
from ..types import AirQualityResult, Breakpoint, PollutantKind, SeverityTier
from .base import (
    calculate_aqi_from_breakpoints,
    find_breakpoint,
    parse_pollutant,
    truncate,
)

# =============================================================================
# Category Presentation
# =============================================================================

COLORS = MappingProxyType(
    {
        SeverityTier.GOOD: "#00E400",  # Green
        SeverityTier.MODERATE: "#FFFF00",  # Yellow
        SeverityTier.UNHEALTHY_SENSITIVE: "#FF7E00",  # Orange
        SeverityTier.UNHEALTHY: "#FF0000",  # Red
        SeverityTier.VERY_UNHEALTHY: "#8F3F97",  # Purple
        SeverityTier.HAZARDOUS: "#7E0023",  # Maroon
    }
)

HEALTH_MESSAGES = MappingProxyType(
    {
        SeverityTier.GOOD: (
            "Air quality is satisfactory, and air pollution poses little or no risk."
        ),
        SeverityTier.MODERATE: (
            "Air quality is acceptable. However, there may be a risk for some people, "
            "particularly those who are unusually sensitive to air pollution."
        ),
        SeverityTier.UNHEALTHY_SENSITIVE: (
            "Members of sensitive groups may experience health effects. "
            "The general public is less likely to be affected."
        ),
        SeverityTier.UNHEALTHY: (
            "Some members of the general public may experience health effects; "
            "members of sensitive groups may experience more serious health effects."
        ),
        SeverityTier.VERY_UNHEALTHY: (
            "Health alert: The risk of health effects is increased for everyone."
        ),
        SeverityTier.HAZARDOUS: (
            "Health warning of emergency conditions: everyone is more likely to be affected."
        ),
    }
)


# =============================================================================
# Breakpoints
# =============================================================================
#
# Source: 40 CFR Part 58, Appendix G (pre-2024 revision)
# URL: https://www.ecfr.gov/current/title-40/chapter-I/subchapter-C/part-58/appendix-Appendix%20G%20to%20Part%2058
#
# PM2.5 uses the 0-12.0 "Good" band that the WAQI feed scores against.
# =============================================================================

AVERAGING_PERIODS = MappingProxyType(
    {
        PollutantKind.PM25: "24h",
        PollutantKind.PM10: "24h",
        PollutantKind.O3: "8h",
        PollutantKind.NO2: "1h",
        PollutantKind.SO2: "1h",
        PollutantKind.CO: "8h",
    }
)

# Units for each pollutant (as used in breakpoints)
UNITS = MappingProxyType(
    {
        PollutantKind.PM25: "µg/m³",
        PollutantKind.PM10: "µg/m³",
        PollutantKind.O3: "ppb",
        PollutantKind.NO2: "ppb",
        PollutantKind.SO2: "ppb",
        PollutantKind.CO: "ppm",
    }
)

# Truncation rules (decimal places to truncate to)
TRUNCATION = MappingProxyType(
    {
        PollutantKind.PM25: 1,
        PollutantKind.PM10: 0,
        PollutantKind.O3: 0,
        PollutantKind.NO2: 0,
        PollutantKind.SO2: 0,
        PollutantKind.CO: 1,
    }
)

# PM2.5 (µg/m³, 24-hour)
PM25_BREAKPOINTS = (
    Breakpoint(0.0, 12.0, 0, 50),
    Breakpoint(12.1, 35.4, 51, 100),
    Breakpoint(35.5, 55.4, 101, 150),
    Breakpoint(55.5, 150.4, 151, 200),
    Breakpoint(150.5, 250.4, 201, 300),
    Breakpoint(250.5, 350.4, 301, 400),
    Breakpoint(350.5, 500.4, 401, 500),
)

# PM10 (µg/m³, 24-hour)
PM10_BREAKPOINTS = (
    Breakpoint(0, 54, 0, 50),
    Breakpoint(55, 154, 51, 100),
    Breakpoint(155, 254, 101, 150),
    Breakpoint(255, 354, 151, 200),
    Breakpoint(355, 424, 201, 300),
    Breakpoint(425, 504, 301, 400),
    Breakpoint(505, 604, 401, 500),
)

# O3 (ppb, 8-hour) - Only valid for AQI 0-300
O3_8HR_BREAKPOINTS = (
    Breakpoint(0, 54, 0, 50),
    Breakpoint(55, 70, 51, 100),
    Breakpoint(71, 85, 101, 150),
    Breakpoint(86, 105, 151, 200),
    Breakpoint(106, 200, 201, 300),
)

# NO2 (ppb, 1-hour)
NO2_BREAKPOINTS = (
    Breakpoint(0, 53, 0, 50),
    Breakpoint(54, 100, 51, 100),
    Breakpoint(101, 360, 101, 150),
    Breakpoint(361, 649, 151, 200),
    Breakpoint(650, 1249, 201, 300),
    Breakpoint(1250, 1649, 301, 400),
    Breakpoint(1650, 2049, 401, 500),
)

# SO2 (ppb, 1-hour) - Only valid for AQI 0-200
SO2_1HR_BREAKPOINTS = (
    Breakpoint(0, 35, 0, 50),
    Breakpoint(36, 75, 51, 100),
    Breakpoint(76, 185, 101, 150),
    Breakpoint(186, 304, 151, 200),
)

# CO (ppm, 8-hour)
CO_BREAKPOINTS = (
    Breakpoint(0.0, 4.4, 0, 50),
    Breakpoint(4.5, 9.4, 51, 100),
    Breakpoint(9.5, 12.4, 101, 150),
    Breakpoint(12.5, 15.4, 151, 200),
    Breakpoint(15.5, 30.4, 201, 300),
    Breakpoint(30.5, 40.4, 301, 400),
    Breakpoint(40.5, 50.4, 401, 500),
)

BREAKPOINTS = MappingProxyType(
    {
        PollutantKind.PM25: PM25_BREAKPOINTS,
        PollutantKind.PM10: PM10_BREAKPOINTS,
        PollutantKind.O3: O3_8HR_BREAKPOINTS,
        PollutantKind.NO2: NO2_BREAKPOINTS,
        PollutantKind.SO2: SO2_1HR_BREAKPOINTS,
        PollutantKind.CO: CO_BREAKPOINTS,
    }
)


# =============================================================================
# Table Lookups
# =============================================================================


def list_pollutants() -> list[PollutantKind]:
    """List the pollutants that have a breakpoint table."""
    return list(BREAKPOINTS.keys())


def get_breakpoints(pollutant) -> tuple[Breakpoint, ...]:
    """
    Get the breakpoint table for a pollutant.

    Raises:
        UnknownPollutantError: If pollutant is not supported
    """
    return BREAKPOINTS[parse_pollutant(pollutant)]


def max_concentration(pollutant) -> float:
    """Highest concentration covered by the pollutant's table."""
    return get_breakpoints(pollutant)[-1].high_conc


def get_averaging_period(pollutant) -> str:
    """
    Get the averaging period for a pollutant.

    Returns:
        Averaging period string (e.g., "8h", "24h", "1h")
    """
    return AVERAGING_PERIODS[parse_pollutant(pollutant)]


def get_unit(pollutant) -> str:
    """
    Get the unit for a pollutant as used in AQI calculation.

    Returns:
        Unit string (e.g., "ppm", "ppb", "µg/m³")
    """
    return UNITS[parse_pollutant(pollutant)]


# =============================================================================
# Conversion
# =============================================================================



def _check_domain(kind: PollutantKind, concentration) -> None:
    """Reject anything that is not a real number in the table's range."""
    upper = BREAKPOINTS[kind][-1].high_conc
    if isinstance(concentration, bool) or not isinstance(concentration, numbers.Real):
        raise OutOfDomainError(
            f"Concentration {concentration!r} for {kind} is not a number",
            pollutant=kind,
            concentration=concentration,
        )
    if not math.isfinite(concentration) or concentration < 0 or concentration > upper:
        raise OutOfDomainError(
            f"Concentration {concentration} {UNITS[kind]} is outside the "
            f"{kind} breakpoint range (0 - {upper})",
            pollutant=kind,
            concentration=concentration,
        )


def convert(pollutant, concentration: float) -> AirQualityResult:
    """
    Convert a pollutant concentration to a US EPA AQI value and severity tier.

    The first breakpoint row containing the concentration is selected and
    the AQI is interpolated linearly within that row, then rounded half up.
    A value that falls between two published rows (e.g. PM2.5 12.05) is
    truncated to the table's reporting precision, which places it in the
    lower row.

    Args:
        pollutant: ``PollutantKind`` or feed identifier (e.g. "pm25", "o3")
        concentration: Concentration in the table's units
                       (µg/m³ for PM, ppb for O3/NO2/SO2, ppm for CO)

    Returns:
        AirQualityResult with AQI value (0-500) and severity tier

    Raises:
        UnknownPollutantError: If pollutant is not supported
        OutOfDomainError: If concentration is not a number, negative, not
                          finite, or above the highest breakpoint

    Example:
        >>> convert("pm25", 35.4).aqi
        100
    """
    kind = parse_pollutant(pollutant)
    _check_domain(kind, concentration)
    breakpoints = BREAKPOINTS[kind]

    lookup = concentration
    if find_breakpoint(lookup, breakpoints) is None:
        # Between two rows
        lookup = truncate(concentration, TRUNCATION[kind])
    aqi = calculate_aqi_from_breakpoints(lookup, breakpoints)

    if aqi is None:
        # Only reachable if a table has a gap wider than its precision
        raise OutOfDomainError(
            f"No {kind} breakpoint covers {lookup}",
            pollutant=kind,
            concentration=concentration,
        )

    return AirQualityResult(
        aqi=aqi,
        level=SeverityTier.from_aqi(aqi),
        pollutant=kind,
        concentration=concentration,
    )
