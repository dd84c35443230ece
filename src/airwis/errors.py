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
Exception hierarchy for airwis.

Conversion and report errors are raised where they are detected and
propagate unchanged to the caller; only the command layer turns them into
user-facing text.
"""


class AirwisError(Exception):
    """Base class for all airwis errors."""


class ConversionError(AirwisError, ValueError):
    """
    A concentration could not be converted to an AQI value.

    Attributes:
        pollutant: Pollutant identifier involved (as given by the caller)
        concentration: Concentration involved, if any
        context: Where in a report the failure happened, if known
    """

    def __init__(
        self,
        message: str,
        *,
        pollutant=None,
        concentration: float | None = None,
        context: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.pollutant = pollutant
        self.concentration = concentration
        self.context = context

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} ({self.context})"
        return self.message

    def with_context(self, context: str) -> "ConversionError":
        """Return a copy of this error of the same class, tagged with ``context``."""
        return type(self)(
            self.message,
            pollutant=self.pollutant,
            concentration=self.concentration,
            context=context,
        )


class UnknownPollutantError(ConversionError):
    """The pollutant identifier is not one of the supported kinds."""


class OutOfDomainError(ConversionError):
    """The concentration lies outside every breakpoint row for its pollutant."""


class MissingCurrentValueError(AirwisError, LookupError):
    """The dominant pollutant has no current concentration in the reading."""

    def __init__(self, pollutant):
        super().__init__(
            f"Data for dominant pollutant ({pollutant}) not available."
        )
        self.pollutant = pollutant


class FeedError(AirwisError):
    """The air quality feed could not be fetched or returned an error."""


class FeedTimeoutError(FeedError):
    """The feed request did not complete within the configured timeout."""
