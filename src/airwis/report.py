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
Daily report derivation.

Turns a parsed ``PollutionReading`` into an ordered list of daily AQI
entries for its dominant pollutant: the current day first, followed by every
forecast day that falls after it.

Example:
    >>> from airwis.report import derive_report
    >>> from airwis.types import PollutionReading
    >>>
    >>> reading = PollutionReading(
    ...     dominant_pollutant="o3",
    ...     current_value={"o3": 70},
    ...     forecast_series={"o3": [("2024-06-01", 60), ("2024-06-02", 90)]},
    ...     current_date_label="2024-06-01",
    ... )
    >>> [(e.date_label, e.aqi) for e in derive_report(reading)]
    [('2024-06-01', 100), ('2024-06-02', 161)]
"""

from logging import getLogger
from typing import Any, Mapping, Sequence

import pandas as pd

from .errors import ConversionError, MissingCurrentValueError
from .metrics import COLORS, convert, parse_pollutant, standardise_pollutant
from .types import DailyReportEntry, PollutantKind, PollutionReading

logger = getLogger(__name__)

REPORT_COLUMNS = [
    "date_label",
    "aqi",
    "level",
    "category",
    "color",
    "is_forecast",
]


def _lookup(mapping: Mapping[Any, Any], kind: PollutantKind) -> Any | None:
    """Find the value stored for ``kind`` under any of its accepted key spellings."""
    if kind in mapping:
        return mapping[kind]
    for key, value in mapping.items():
        if standardise_pollutant(key) is kind:
            return value
    return None


def _forecast_day(day) -> tuple[str, float]:
    """Unpack a ForecastDay or a plain (date_label, average) pair."""
    return day[0], day[1]


def _convert_in_context(kind: PollutantKind, value: float, context: str):
    try:
        return convert(kind, value)
    except ConversionError as e:
        raise e.with_context(context) from e


def derive_report(reading: PollutionReading) -> list[DailyReportEntry]:
    """
    Derive the daily AQI entries for a reading's dominant pollutant.

    Args:
        reading: Parsed feed reading

    Returns:
        list[DailyReportEntry]: The current day first, then forecast days
        dated strictly after ``reading.current_date_label`` in feed order

    Raises:
        UnknownPollutantError: If the dominant pollutant is not supported
        MissingCurrentValueError: If there is no current value for it
        OutOfDomainError: If any value falls outside the breakpoint tables

    Conversion errors are re-raised as the same class with a ``context``
    naming the day that failed; no partial report is ever returned.
    """
    kind = parse_pollutant(reading.dominant_pollutant)
    current_date = reading.current_date_label

    current = _lookup(reading.current_value, kind)
    if current is None:
        raise MissingCurrentValueError(kind)

    entries = [
        DailyReportEntry(
            date_label=current_date,
            aqi_result=_convert_in_context(
                kind, current, f"current value {current} for {current_date}"
            ),
        )
    ]

    forecast: Sequence = _lookup(reading.forecast_series, kind) or ()
    for day in forecast:
        date_label, average = _forecast_day(day)
        if date_label <= current_date:
            # Historical, not forecast
            continue
        entries.append(
            DailyReportEntry(
                date_label=date_label,
                aqi_result=_convert_in_context(
                    kind, average, f"forecast value {average} for {date_label}"
                ),
            )
        )

    logger.debug(
        f"Derived {len(entries)} report entries for {kind} "
        f"({len(entries) - 1} forecast days)"
    )
    return entries


def report_to_dataframe(entries: Sequence[DailyReportEntry]) -> pd.DataFrame:
    """
    Convert report entries to a DataFrame.

    Returns:
        pd.DataFrame: One row per entry with columns
            date_label, aqi, level, category, color, is_forecast
    """
    if not entries:
        return pd.DataFrame(columns=REPORT_COLUMNS)

    rows = [
        {
            "date_label": entry.date_label,
            "aqi": entry.aqi,
            "level": entry.level.name,
            "category": entry.level.label,
            "color": COLORS[entry.level],
            "is_forecast": i > 0,
        }
        for i, entry in enumerate(entries)
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)
