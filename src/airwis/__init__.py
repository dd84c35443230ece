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

"""City air quality reports: WAQI feed to US EPA AQI"""

from .errors import (
    AirwisError,
    FeedError,
    FeedTimeoutError,
    MissingCurrentValueError,
    OutOfDomainError,
    UnknownPollutantError,
)
from .metrics import convert, parse_pollutant
from .report import derive_report, report_to_dataframe
from .types import (
    AirQualityResult,
    Breakpoint,
    DailyReportEntry,
    ForecastDay,
    PollutantKind,
    PollutionReading,
    SeverityTier,
)

__version__ = "0.1.0"
