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
Text rendering of daily AQI reports.

Each day is shown as a date, a coloured heart for its severity tier and a
ten-cell progress bar running from a tree (clean air) to a skull (AQI 250+).
"""

import math
from typing import Sequence

from .types import DailyReportEntry, SeverityTier

LEVEL_EMOJI = {
    SeverityTier.GOOD: "💚",
    SeverityTier.MODERATE: "💛",
    SeverityTier.UNHEALTHY_SENSITIVE: "🧡",
    SeverityTier.UNHEALTHY: "❤️",
    SeverityTier.VERY_UNHEALTHY: "💜",
    SeverityTier.HAZARDOUS: "🖤",
}

LEGEND = "➔ ".join(LEVEL_EMOJI[tier] for tier in SeverityTier)

PROGRESS_BAR_SIZE = 10
AQI_PER_CELL = 25
MAX_AQI = 500


def level_emoji(level: SeverityTier) -> str:
    return LEVEL_EMOJI[level]


def progress_bar(aqi: int, size: int = PROGRESS_BAR_SIZE) -> str:
    """
    Render an AQI as a bounded bar, e.g. ``🌳 [███░░░░░░░] 💀``.

    One cell is filled per started 25 AQI points, capped at ``size``.
    """
    filled = math.ceil(min(max(aqi, 0), MAX_AQI) / AQI_PER_CELL)
    filled = min(filled, size)
    return f"🌳 [{'█' * filled}{'░' * (size - filled)}] 💀"


def render_day(entry: DailyReportEntry) -> str:
    return f"{entry.date_label} {level_emoji(entry.level)}\n{progress_bar(entry.aqi)}\n"


def render_report(city_name: str, entries: Sequence[DailyReportEntry]) -> str:
    """
    Render a full report: legend, city name, then one block per day.

    Args:
        city_name: Display name of the city or station
        entries: Output of ``derive_report``

    Returns:
        str: Multi-line report text ending in a newline
    """
    text = f"{LEGEND}\n{city_name}\n"
    return text + "".join(render_day(entry) for entry in entries)
