"""
Unit tests for SKYWATCH catalog field extractors.

Tests sexagesimal parsing, key canonicalization, the star naming chain,
unit conversions and the naked-eye row filter.
"""

import math

import pytest

from services.catalog import extractors as ex


class TestParseSexagesimal:
    """Tests for parse_sexagesimal."""

    def test_hours_minutes_seconds(self):
        """Test HH:MM:SS converts to decimal hours."""
        value = ex.parse_sexagesimal("06:45:09")
        assert value == pytest.approx(6 + 45 / 60 + 9 / 3600, abs=1e-6)

    def test_fractional_seconds(self):
        """Test fractional seconds are kept."""
        value = ex.parse_sexagesimal("00:42:44.35")
        assert value == pytest.approx(0 + 42 / 60 + 44.35 / 3600, abs=1e-9)

    def test_negative_sign_applied_after_summation(self):
        """Test the sign of the leading field applies to the whole value."""
        assert ex.parse_sexagesimal("-16:42:58") == pytest.approx(-(16 + 42 / 60 + 58 / 3600))

    def test_negative_zero_degrees(self):
        """Test -00:30:00 keeps its sign."""
        assert ex.parse_sexagesimal("-00:30:00") == pytest.approx(-0.5)

    def test_explicit_plus_sign(self):
        assert ex.parse_sexagesimal("+41:16:09") == pytest.approx(41 + 16 / 60 + 9 / 3600)

    def test_space_separated(self):
        assert ex.parse_sexagesimal("05 35 17.3") == pytest.approx(5 + 35 / 60 + 17.3 / 3600)

    def test_two_part_value(self):
        """Test HH MM.m form with no seconds field."""
        assert ex.parse_sexagesimal("12 30.5") == pytest.approx(12 + 30.5 / 60)

    @pytest.mark.parametrize("value", [None, "", "  ", "abc", "12", "1:2:3:4", "10:61:00", "10:00:75"])
    def test_unparsable_returns_none(self, value):
        """Test malformed input yields None rather than raising."""
        assert ex.parse_sexagesimal(value) is None


class TestCanonicalizeKey:
    """Tests for canonical key normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("NGC0007", "ngc7"),
        ("IC0003", "ic3"),
        ("NGC 224", "ngc224"),
        ("M031", "m31"),
        ("m 31", "m31"),
        ("NGC0224A", "ngc224a"),
        ("  Alpha   Centauri ", "alpha centauri"),
        ("Sirius", "sirius"),
    ])
    def test_canonicalization(self, raw, expected):
        assert ex.canonicalize_key(raw) == expected

    def test_non_catalog_names_keep_digits(self):
        """Test zero stripping only applies to catalog prefixes."""
        assert ex.canonicalize_key("HD 0048915") == "hd 0048915"


class TestPrimitiveParsers:
    """Tests for float and catalog-number parsing."""

    def test_parse_float_rejects_non_finite(self):
        assert ex.parse_float("nan") is None
        assert ex.parse_float("inf") is None
        assert ex.parse_float("1.5") == 1.5

    def test_parse_float_garbage(self):
        assert ex.parse_float("n/a") is None
        assert ex.parse_float(None) is None

    def test_parse_catalog_number(self):
        assert ex.parse_catalog_number("031") == 31
        assert ex.parse_catalog_number("12.0") == 12
        assert ex.parse_catalog_number("0") is None
        assert ex.parse_catalog_number("") is None
        assert ex.parse_catalog_number("12.5") is None

    def test_field_skips_blank_columns(self):
        row = {"proper": "  ", "name": "Vega"}
        assert ex.field(row, "proper", "name") == "Vega"
        assert ex.field(row, "missing") is None

    def test_split_names(self):
        assert ex.split_names("Great Orion Nebula, Orion Nebula,") == ["Great Orion Nebula", "Orion Nebula"]
        assert ex.split_names(None) == []


class TestStarNameChain:
    """Tests for the star table name precedence chain."""

    def test_bayer_flamsteed_column(self):
        assert ex.bayer_flamsteed({"bf": "9Alp CMa"}) == "9Alp CMa"

    def test_bayer_with_constellation(self):
        assert ex.bayer_flamsteed({"bayer": "Gam", "con": "Cru"}) == "Gam Cru"

    def test_flamsteed_with_constellation(self):
        assert ex.flamsteed({"flam": "61", "con": "Cyg"}) == "61 Cyg"

    def test_henry_draper(self):
        assert ex.henry_draper({"hd": "48915"}) == "HD 48915"
        assert ex.henry_draper({"hd": ""}) is None

    def test_hipparcos(self):
        assert ex.hipparcos({"hip": "32349"}) == "HIP 32349"

    def test_synthesized_name(self):
        assert ex.synthesized_star_name({"mag": "4.2", "con": "Ori"}) == "Star mag 4.20 in Ori"
        assert ex.synthesized_star_name({"mag": "4.2"}) == "Star mag 4.20"
        assert ex.synthesized_star_name({"con": "Ori"}) is None

    def test_star_aliases(self):
        row = {"proper": "Sirius", "bf": "9Alp CMa"}
        assert ex.star_aliases(row) == ["Sirius", "9Alp CMa"]


class TestCoordinateExtractors:
    """Tests for RA/Dec extractors and unit conversions."""

    def test_radians_conversion(self):
        """Test radians are converted with x180/pi/15 and x180/pi."""
        row = {"rarad": str(math.pi), "decrad": str(-math.pi / 4)}
        assert ex.ra_radians(row) == pytest.approx(12.0)
        assert ex.dec_radians(row) == pytest.approx(-45.0)

    def test_degrees_ra_divided_by_fifteen(self):
        assert ex.ra_degrees({"RA": "90.0"}) == pytest.approx(6.0)
        assert ex.ra_degrees({"RAJ2000": "180"}) == pytest.approx(12.0)

    def test_split_hms_columns(self):
        row = {"RA_h": "5", "RA_m": "35", "RA_s": "17.3"}
        assert ex.ra_split_hms(row) == pytest.approx(5 + 35 / 60 + 17.3 / 3600)

    def test_split_dms_negative(self):
        row = {"DEC_d": "-5", "DEC_m": "23", "DEC_s": "28"}
        assert ex.dec_split_dms(row) == pytest.approx(-(5 + 23 / 60 + 28 / 3600))

    def test_split_dms_negative_zero(self):
        row = {"DEC_d": "-0", "DEC_m": "30", "DEC_s": "0"}
        assert ex.dec_split_dms(row) == pytest.approx(-0.5)

    def test_first_value_falls_through(self):
        row = {"ra": "bad", "rarad": str(math.pi / 2)}
        assert ex.first_value((ex.ra_hours_lowercase, ex.ra_radians), row) == pytest.approx(6.0)


class TestAttributeExtractors:
    """Tests for optional attribute extraction."""

    def test_messier_cross_reference(self):
        assert ex.messier_cross_reference({"M": "031"}) == "m31"
        assert ex.messier_cross_reference({"M": ""}) is None

    def test_openngc_common_names(self):
        row = {"Common names": "Great Orion Nebula,Orion Nebula"}
        assert ex.openngc_common_name(row) == "Great Orion Nebula"
        assert ex.openngc_aliases(row) == ["Great Orion Nebula", "Orion Nebula"]

    def test_magnitude_columns(self):
        assert ex.magnitude({"V-Mag": "3.44"}) == pytest.approx(3.44)
        assert ex.magnitude({"mag": ""}) is None


class TestNakedEyeFilter:
    """Tests for the star table inclusion filter."""

    def test_named_row_kept(self):
        assert ex.naked_eye_filter({"proper": "Vega", "mag": "0.03"}, 6.0)

    def test_designated_faint_row_kept(self):
        assert ex.naked_eye_filter({"bf": "61Cyg", "mag": "7.5"}, 6.0)

    @pytest.mark.parametrize("column", ["BayerFlamsteed", "alt_name"])
    def test_alternate_designation_columns_keep_faint_row(self, column):
        assert ex.naked_eye_filter({column: "61Cyg", "mag": "7.5"}, 6.0)

    def test_bright_unnamed_row_kept(self):
        assert ex.naked_eye_filter({"mag": "5.9"}, 6.0)

    def test_faint_unnamed_row_dropped(self):
        assert not ex.naked_eye_filter({"mag": "6.0"}, 6.0)
        assert not ex.naked_eye_filter({"mag": "8.5"}, 6.0)

    def test_no_magnitude_dropped(self):
        assert not ex.naked_eye_filter({"hip": "123"}, 6.0)

    def test_limit_is_configurable(self):
        assert ex.naked_eye_filter({"mag": "8.5"}, 9.0)
