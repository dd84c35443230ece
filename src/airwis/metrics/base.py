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
Base utilities for AQI calculations.

This module holds the pieces shared by every breakpoint table: pollutant
name standardisation, concentration truncation, and the piecewise-linear
interpolation between breakpoints.
"""

import math
from typing import Sequence

from ..errors import UnknownPollutantError
from ..types import Breakpoint, PollutantKind

# =============================================================================
# Pollutant Standardisation
# =============================================================================

# Map common pollutant names to the feed identifiers. Keys are lower case.
POLLUTANT_ALIASES = {
    # PM2.5 variants
    "pm25": PollutantKind.PM25,
    "pm2.5": PollutantKind.PM25,
    "pm 2.5": PollutantKind.PM25,
    "pm2_5": PollutantKind.PM25,
    "fine particulate": PollutantKind.PM25,
    # PM10 variants
    "pm10": PollutantKind.PM10,
    "pm 10": PollutantKind.PM10,
    "coarse particulate": PollutantKind.PM10,
    # Ozone variants
    "o3": PollutantKind.O3,
    "ozone": PollutantKind.O3,
    # Nitrogen dioxide variants
    "no2": PollutantKind.NO2,
    "nitrogen dioxide": PollutantKind.NO2,
    "nitrogen_dioxide": PollutantKind.NO2,
    # Sulphur dioxide variants
    "so2": PollutantKind.SO2,
    "sulfur dioxide": PollutantKind.SO2,
    "sulphur dioxide": PollutantKind.SO2,
    "sulfur_dioxide": PollutantKind.SO2,
    "sulphur_dioxide": PollutantKind.SO2,
    # Carbon monoxide variants
    "co": PollutantKind.CO,
    "carbon monoxide": PollutantKind.CO,
    "carbon_monoxide": PollutantKind.CO,
}


def standardise_pollutant(pollutant) -> PollutantKind | None:
    """
    Standardise a pollutant name to its ``PollutantKind``.

    Args:
        pollutant: A ``PollutantKind`` or a pollutant name in any common format

    Returns:
        The matching ``PollutantKind``, or None if not recognised
    """
    if isinstance(pollutant, PollutantKind):
        return pollutant
    if not isinstance(pollutant, str):
        return None
    return POLLUTANT_ALIASES.get(pollutant.strip().lower())


def parse_pollutant(pollutant) -> PollutantKind:
    """
    Convert an external pollutant identifier into a ``PollutantKind``.

    Raises:
        UnknownPollutantError: If the identifier is not a supported pollutant
    """
    kind = standardise_pollutant(pollutant)
    if kind is None:
        raise UnknownPollutantError(
            f"Unsupported or unknown pollutant: {pollutant}",
            pollutant=pollutant,
        )
    return kind


# =============================================================================
# Rounding and Truncation
# =============================================================================


def truncate(value: float, decimal_places: int) -> float:
    """
    Truncate a value to a specified number of decimal places.

    Note: This truncates (floors toward zero), not rounds. The product is
    rounded to 9 places first so that 35.4 * 10 does not floor to 353.
    """
    if decimal_places == 0:
        return float(int(round(value, 9)))
    factor = 10**decimal_places
    return float(int(round(value * factor, 9))) / factor


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounding away from zero."""
    if value < 0:
        return -round_half_up(-value)
    return int(math.floor(value + 0.5))


# =============================================================================
# Breakpoint Interpolation
# =============================================================================


def find_breakpoint(
    concentration: float,
    breakpoints: Sequence[Breakpoint],
) -> Breakpoint | None:
    """
    Return the first row containing ``concentration``, or None.

    Rows are scanned in table order, so a value sitting on a bound shared by
    two rows resolves to the lower row.
    """
    for bp in breakpoints:
        if bp.contains(concentration):
            return bp
    return None


def calculate_aqi_from_breakpoints(
    concentration: float,
    breakpoints: Sequence[Breakpoint],
) -> int | None:
    """
    Calculate AQI value using linear interpolation between breakpoints.

    This is the standard EPA-style calculation:

    AQI = ((high_aqi - low_aqi) / (high_conc - low_conc)) * (conc - low_conc) + low_aqi

    Args:
        concentration: Pollutant concentration (must be in the table's units)
        breakpoints: Breakpoint rows, sorted by concentration

    Returns:
        Interpolated AQI rounded half up, or None if concentration is out of range
    """
    bp = find_breakpoint(concentration, breakpoints)
    if bp is None:
        return None

    aqi_range = bp.high_aqi - bp.low_aqi
    conc_range = bp.high_conc - bp.low_conc

    if conc_range == 0:
        # Edge case: single-point breakpoint
        return bp.low_aqi

    aqi_value = (aqi_range / conc_range) * (concentration - bp.low_conc) + bp.low_aqi
    return round_half_up(aqi_value)
