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
Air Quality Index conversion.

This package converts pollutant concentrations into US EPA AQI values and
severity tiers using the regulator's breakpoint tables.

Quick Start:
    >>> from airwis import metrics
    >>>
    >>> result = metrics.convert("pm25", 12.0)
    >>> result.aqi, result.level.label
    (50, 'Good')
    >>>
    >>> metrics.get_unit("o3")
    'ppb'
"""

from .base import parse_pollutant, standardise_pollutant
from .us_epa import (
    COLORS,
    HEALTH_MESSAGES,
    convert,
    get_averaging_period,
    get_breakpoints,
    get_unit,
    list_pollutants,
    max_concentration,
)

__all__ = [
    "convert",
    "parse_pollutant",
    "standardise_pollutant",
    "get_breakpoints",
    "get_unit",
    "get_averaging_period",
    "list_pollutants",
    "max_concentration",
    "COLORS",
    "HEALTH_MESSAGES",
]
