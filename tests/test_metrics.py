# airwis: city air quality reports from the WAQI feed
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Tests for the airwis.metrics module.

Tests cover:
- Pollutant name standardisation
- Truncation and rounding helpers
- Breakpoint interpolation
- US EPA conversion for every pollutant table
- Severity tier derivation
"""

import math

import pytest

from airwis import metrics
from airwis.errors import OutOfDomainError, UnknownPollutantError
from airwis.metrics import us_epa
from airwis.metrics.base import (
    calculate_aqi_from_breakpoints,
    parse_pollutant,
    round_half_up,
    standardise_pollutant,
    truncate,
)
from airwis.types import Breakpoint, PollutantKind, SeverityTier

# Dense concentration sweeps at each table's reporting precision
SWEEPS = {
    PollutantKind.PM25: [i / 10 for i in range(0, 5005)],
    PollutantKind.PM10: list(range(0, 605)),
    PollutantKind.O3: list(range(0, 201)),
    PollutantKind.NO2: list(range(0, 2050)),
    PollutantKind.SO2: list(range(0, 305)),
    PollutantKind.CO: [i / 10 for i in range(0, 505)],
}

ALL_ROWS = [
    (kind, bp) for kind, table in us_epa.BREAKPOINTS.items() for bp in table
]


# =============================================================================
# Pollutant Standardisation Tests
# =============================================================================


class TestPollutantStandardisation:
    """Tests for pollutant name standardisation."""

    def test_feed_identifiers(self):
        """Test that the WAQI identifiers map to their kinds."""
        assert standardise_pollutant("pm25") is PollutantKind.PM25
        assert standardise_pollutant("pm10") is PollutantKind.PM10
        assert standardise_pollutant("o3") is PollutantKind.O3
        assert standardise_pollutant("no2") is PollutantKind.NO2
        assert standardise_pollutant("so2") is PollutantKind.SO2
        assert standardise_pollutant("co") is PollutantKind.CO

    def test_aliases_case_insensitive(self):
        """Test common spellings in any case."""
        assert standardise_pollutant("PM2.5") is PollutantKind.PM25
        assert standardise_pollutant("Ozone") is PollutantKind.O3
        assert standardise_pollutant(" NO2 ") is PollutantKind.NO2
        assert standardise_pollutant("sulphur dioxide") is PollutantKind.SO2

    def test_kind_passes_through(self):
        """Test that an enum member is returned unchanged."""
        assert standardise_pollutant(PollutantKind.CO) is PollutantKind.CO

    def test_unknown_returns_none(self):
        """Test that weather fields are not pollutants."""
        assert standardise_pollutant("uvi") is None
        assert standardise_pollutant("t") is None
        assert standardise_pollutant(None) is None

    def test_parse_unknown_raises(self):
        """Test that parsing an unknown identifier fails fast."""
        with pytest.raises(UnknownPollutantError, match="xx") as exc_info:
            parse_pollutant("xx")
        assert exc_info.value.pollutant == "xx"

    def test_kind_equals_feed_string(self):
        """Test that kinds compare equal to their feed identifiers."""
        assert PollutantKind.PM25 == "pm25"
        assert str(PollutantKind.O3) == "o3"


# =============================================================================
# Truncation and Rounding Tests
# =============================================================================


class TestTruncationAndRounding:
    """Tests for truncate() and round_half_up()."""

    def test_truncate_floors(self):
        """Test that truncation never rounds up."""
        assert truncate(12.09, 1) == 12.0
        assert truncate(54.9, 0) == 54.0
        assert truncate(4.45, 1) == 4.4

    def test_truncate_exact_values_unchanged(self):
        """Test that values already at precision survive float noise."""
        assert truncate(35.4, 1) == 35.4
        assert truncate(4.4, 1) == 4.4
        assert truncate(0.3, 1) == 0.3
        assert truncate(150.5, 1) == 150.5

    def test_round_half_up(self):
        """Test halves round up, unlike Python's round()."""
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(2.4999) == 2
        assert round_half_up(99.99999999) == 100
        assert round_half_up(50.0) == 50


# =============================================================================
# Breakpoint Interpolation Tests
# =============================================================================


class TestBreakpointInterpolation:
    """Tests for the generic interpolation helper."""

    def test_midpoint(self):
        """Test linear interpolation halfway through a row."""
        table = [Breakpoint(0, 100, 0, 50)]
        assert calculate_aqi_from_breakpoints(50, table) == 25

    def test_shared_boundary_prefers_lower_row(self):
        """Test that a value on a shared bound uses the first row."""
        table = [Breakpoint(0, 10, 0, 50), Breakpoint(10, 20, 51, 100)]
        assert calculate_aqi_from_breakpoints(10, table) == 50

    def test_single_point_row(self):
        """Test a zero-width row yields its low AQI."""
        table = [Breakpoint(5, 5, 42, 42)]
        assert calculate_aqi_from_breakpoints(5, table) == 42

    def test_out_of_range_returns_none(self):
        """Test that uncovered values return None."""
        table = [Breakpoint(0, 10, 0, 50)]
        assert calculate_aqi_from_breakpoints(11, table) is None

    def test_inverted_row_rejected(self):
        """Test that breakpoint rows must be ordered."""
        with pytest.raises(ValueError, match="Inverted"):
            Breakpoint(10, 0, 0, 50)


# =============================================================================
# US EPA Conversion Tests
# =============================================================================


class TestConvert:
    """Tests for US EPA AQI conversion."""

    def test_pm25_good_upper_bound(self):
        """Test PM2.5 12.0 is the top of Good."""
        result = metrics.convert("pm25", 12.0)
        assert result.aqi == 50
        assert result.level is SeverityTier.GOOD

    def test_pm25_moderate_upper_bound(self):
        """Test PM2.5 35.4 is the top of Moderate."""
        result = metrics.convert("pm25", 35.4)
        assert result.aqi == 100
        assert result.level is SeverityTier.MODERATE

    def test_pm25_interpolation(self):
        """Test PM2.5: 0-12 is AQI 0-50, so 6.0 is AQI 25."""
        assert metrics.convert(PollutantKind.PM25, 6.0).aqi == 25

    def test_ozone_in_ppb(self):
        """Test ozone uses ppb, matching the feed."""
        assert metrics.convert("o3", 70).aqi == 100
        result = metrics.convert("o3", 90)
        assert result.aqi == 161
        assert result.level is SeverityTier.UNHEALTHY
        assert metrics.get_unit("o3") == "ppb"

    def test_truncation_fills_gaps_between_rows(self):
        """Test values between published bounds fall in the lower row."""
        assert metrics.convert("pm25", 12.05).aqi == 50
        assert metrics.convert("co", 4.45).aqi == 50
        assert metrics.convert("o3", 70.9).aqi == 100

    def test_in_row_value_interpolated_untruncated(self):
        """Test non-integer values inside a row use the raw concentration."""
        # PM10 55-154 -> 51-100: (49 / 99) * (100.9 - 55) + 51 = 73.72
        assert metrics.convert("pm10", 100.9).aqi == 74
        # O3 86-105 -> 151-200: (49 / 19) * (90.6 - 86) + 151 = 162.86
        assert metrics.convert("o3", 90.6).aqi == 163

    @pytest.mark.parametrize(
        "kind,concentration",
        [("pm10", 100.9), ("pm10", 300.5), ("no2", 77.7), ("pm25", 20.05)],
    )
    def test_matches_interpolation_formula(self, kind, concentration):
        """Test in-row values follow the linear formula exactly."""
        bp = next(
            bp
            for bp in metrics.get_breakpoints(kind)
            if bp.low_conc <= concentration <= bp.high_conc
        )
        expected = round_half_up(
            (bp.high_aqi - bp.low_aqi)
            / (bp.high_conc - bp.low_conc)
            * (concentration - bp.low_conc)
            + bp.low_aqi
        )
        assert metrics.convert(kind, concentration).aqi == expected

    def test_gap_values_use_lower_row(self):
        """Test PM10 54.5 sits between rows and resolves to the row below."""
        assert metrics.convert("pm10", 54.5).aqi == 50
        assert metrics.convert("pm10", 55).aqi == 51

    @pytest.mark.parametrize("value", [None, "12", True, [5]])
    def test_non_numeric_out_of_domain(self, value):
        """Test values that are not real numbers are rejected."""
        with pytest.raises(OutOfDomainError, match="not a number") as exc_info:
            metrics.convert("pm25", value)
        assert exc_info.value.concentration == value

    def test_result_records_input(self):
        """Test the result carries the pollutant and raw concentration."""
        result = metrics.convert("PM2.5", 12.05)
        assert result.pollutant is PollutantKind.PM25
        assert result.concentration == 12.05
        assert result.category == "Good"

    def test_zero_is_good(self):
        """Test zero concentration for every pollutant."""
        for kind in metrics.list_pollutants():
            result = metrics.convert(kind, 0)
            assert result.aqi == 0
            assert result.level is SeverityTier.GOOD

    @pytest.mark.parametrize("kind,bp", ALL_ROWS)
    def test_row_bounds(self, kind, bp):
        """Test each row's bounds map exactly to its AQI bounds."""
        assert metrics.convert(kind, bp.low_conc).aqi == bp.low_aqi
        assert metrics.convert(kind, bp.high_conc).aqi == bp.high_aqi

    @pytest.mark.parametrize("kind", list(PollutantKind))
    def test_monotonic(self, kind):
        """Test AQI never decreases as concentration rises."""
        previous = -1
        for concentration in SWEEPS[kind]:
            aqi = metrics.convert(kind, concentration).aqi
            assert aqi >= previous, f"{kind} {concentration}"
            previous = aqi

    @pytest.mark.parametrize("kind", list(PollutantKind))
    def test_level_matches_aqi(self, kind):
        """Test the tier always contains the AQI value."""
        for concentration in SWEEPS[kind]:
            result = metrics.convert(kind, concentration)
            low, high = result.level.aqi_range
            assert low <= result.aqi <= high
            assert result.level is SeverityTier.from_aqi(result.aqi)

    @pytest.mark.parametrize("kind", list(PollutantKind))
    def test_negative_out_of_domain(self, kind):
        """Test negative concentrations are rejected."""
        with pytest.raises(OutOfDomainError):
            metrics.convert(kind, -0.1)

    @pytest.mark.parametrize("kind", list(PollutantKind))
    def test_above_maximum_out_of_domain(self, kind):
        """Test concentrations above the last row are rejected."""
        upper = metrics.max_concentration(kind)
        with pytest.raises(OutOfDomainError) as exc_info:
            metrics.convert(kind, upper + 1)
        assert exc_info.value.pollutant is kind
        assert exc_info.value.concentration == upper + 1

    def test_just_above_maximum(self):
        """Test PM2.5 500.5 is beyond the 500.4 table top."""
        with pytest.raises(OutOfDomainError):
            metrics.convert("pm25", 500.5)

    def test_non_finite_out_of_domain(self):
        """Test NaN and infinity are rejected."""
        with pytest.raises(OutOfDomainError):
            metrics.convert("pm10", math.nan)
        with pytest.raises(OutOfDomainError):
            metrics.convert("pm10", math.inf)

    def test_unknown_pollutant(self):
        """Test unrecognised identifiers are rejected."""
        with pytest.raises(UnknownPollutantError):
            metrics.convert("xx", 10)

    def test_errors_are_value_errors(self):
        """Test conversion errors remain catchable as ValueError."""
        with pytest.raises(ValueError):
            metrics.convert("xx", 10)
        with pytest.raises(ValueError):
            metrics.convert("pm25", -1)


class TestTableLookups:
    """Tests for table metadata helpers."""

    def test_all_six_pollutants(self):
        """Test every kind has a table."""
        assert set(metrics.list_pollutants()) == set(PollutantKind)

    def test_tables_contiguous(self):
        """Test rows are ordered with no AQI gaps between them."""
        for table in us_epa.BREAKPOINTS.values():
            assert table[0].low_conc == 0
            assert table[0].low_aqi == 0
            for lower, upper in zip(table, table[1:]):
                assert lower.high_conc < upper.low_conc
                assert upper.low_aqi == lower.high_aqi + 1

    def test_tables_read_only(self):
        """Test the table mapping cannot be modified."""
        with pytest.raises(TypeError):
            us_epa.BREAKPOINTS[PollutantKind.CO] = ()

    def test_units_and_periods(self):
        """Test units and averaging periods."""
        assert metrics.get_unit("co") == "ppm"
        assert metrics.get_unit("pm10") == "µg/m³"
        assert metrics.get_averaging_period("o3") == "8h"
        assert metrics.get_averaging_period("so2") == "1h"

    def test_lookup_unknown_pollutant(self):
        """Test helpers reject unknown pollutants."""
        with pytest.raises(UnknownPollutantError):
            metrics.get_breakpoints("uvi")

    def test_colors_and_messages_for_every_tier(self):
        """Test every tier has a colour and health message."""
        for tier in SeverityTier:
            assert metrics.COLORS[tier].startswith("#")
            assert metrics.HEALTH_MESSAGES[tier]


# =============================================================================
# Severity Tier Tests
# =============================================================================


class TestSeverityTier:
    """Tests for tier derivation from AQI values."""

    @pytest.mark.parametrize(
        "aqi,tier",
        [
            (0, SeverityTier.GOOD),
            (50, SeverityTier.GOOD),
            (51, SeverityTier.MODERATE),
            (100, SeverityTier.MODERATE),
            (101, SeverityTier.UNHEALTHY_SENSITIVE),
            (151, SeverityTier.UNHEALTHY),
            (200, SeverityTier.UNHEALTHY),
            (201, SeverityTier.VERY_UNHEALTHY),
            (300, SeverityTier.VERY_UNHEALTHY),
            (301, SeverityTier.HAZARDOUS),
            (500, SeverityTier.HAZARDOUS),
        ],
    )
    def test_from_aqi(self, aqi, tier):
        """Test tier boundaries."""
        assert SeverityTier.from_aqi(aqi) is tier

    def test_ordering(self):
        """Test tiers are ordered by severity."""
        assert SeverityTier.GOOD < SeverityTier.MODERATE < SeverityTier.HAZARDOUS
        assert sorted(SeverityTier)[-1] is SeverityTier.HAZARDOUS

    def test_outside_scale(self):
        """Test AQI values off the scale are rejected."""
        with pytest.raises(ValueError):
            SeverityTier.from_aqi(501)
        with pytest.raises(ValueError):
            SeverityTier.from_aqi(-1)

    def test_labels(self):
        """Test human-readable labels."""
        assert SeverityTier.UNHEALTHY_SENSITIVE.label == (
            "Unhealthy for Sensitive Groups"
        )
