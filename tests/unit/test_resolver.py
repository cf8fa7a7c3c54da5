"""
Unit tests for SKYWATCH name resolver.

Tests resolution order, alias round-trips, solar system routing and the
unknown-object failure.
"""

import pytest

from skywatch.exceptions import InvalidQueryError, ObjectNotFoundError
from skywatch.types import CelestialBody
from services.catalog.catalog import CatalogEntry, CatalogStore, CatalogTable
from services.catalog.resolver import NameResolver


class TestSolarSystemRouting:
    """Tests for the solar system branch."""

    @pytest.mark.parametrize("name,body", [
        ("Mars", CelestialBody.MARS),
        ("  moon ", CelestialBody.MOON),
        ("SUN", CelestialBody.SUN),
        ("pluto", CelestialBody.PLUTO),
    ])
    def test_body_names(self, catalog_store, name, body):
        resolution = NameResolver(catalog_store).resolve(name)
        assert resolution.is_solar_system
        assert resolution.body is body
        assert resolution.entry is None
        assert resolution.coordinate is None

    def test_body_wins_over_catalog_entry(self):
        """Test a catalog entry keyed like a planet never shadows the body."""
        store = CatalogStore(
            stars={"mars": CatalogEntry("mars", 1.0, 1.0)},
            deep_sky_objects={},
            aliases={},
        )
        assert NameResolver(store).resolve("mars").body is CelestialBody.MARS


class TestCatalogResolution:
    """Tests for alias and key lookup."""

    def test_alias_round_trip(self, catalog_store):
        """Test common name and catalog key give the same coordinate."""
        resolver = NameResolver(catalog_store)
        by_name = resolver.resolve("Andromeda Galaxy")
        by_key = resolver.resolve("M31")
        assert by_name.coordinate == by_key.coordinate
        assert by_name.via_alias
        assert not by_key.via_alias
        assert by_name.canonical_key == "m31"

    def test_ngc_key_with_padding(self, catalog_store):
        resolution = NameResolver(catalog_store).resolve("NGC0224")
        assert resolution.canonical_key == "ngc224"
        assert resolution.table is CatalogTable.DEEP_SKY_OBJECTS

    def test_whitespace_and_case_ignored(self, catalog_store):
        resolution = NameResolver(catalog_store).resolve("  ORION   nebula ")
        assert resolution.canonical_key == "m42"

    def test_star_by_name(self, catalog_store):
        resolution = NameResolver(catalog_store).resolve("Sirius")
        assert resolution.table is CatalogTable.STARS
        assert resolution.coordinate.ra_hours == pytest.approx(6.752481)

    def test_star_by_designation_alias(self, catalog_store):
        resolution = NameResolver(catalog_store).resolve("9Alp CMa")
        assert resolution.canonical_key == "sirius"
        assert resolution.table is CatalogTable.STARS

    def test_alias_prefers_deep_sky_table(self):
        """Test an alias key present in both tables resolves to the deep-sky entry."""
        store = CatalogStore(
            stars={"x": CatalogEntry("x", 1.0, 1.0)},
            deep_sky_objects={"x": CatalogEntry("x", 2.0, 2.0)},
            aliases={"thing": "x"},
        )
        resolution = NameResolver(store).resolve("thing")
        assert resolution.table is CatalogTable.DEEP_SKY_OBJECTS

    def test_stars_checked_before_deep_sky_for_keys(self):
        store = CatalogStore(
            stars={"x": CatalogEntry("x", 1.0, 1.0)},
            deep_sky_objects={"x": CatalogEntry("x", 2.0, 2.0)},
            aliases={},
        )
        resolution = NameResolver(store).resolve("X")
        assert resolution.table is CatalogTable.STARS

    def test_no_partial_matching(self, catalog_store):
        with pytest.raises(ObjectNotFoundError):
            NameResolver(catalog_store).resolve("Andromeda")


class TestResolutionFailures:
    """Tests for unknown and invalid names."""

    def test_unknown_echoes_name(self, catalog_store):
        with pytest.raises(ObjectNotFoundError) as exc_info:
            NameResolver(catalog_store).resolve("Vulcan")
        assert exc_info.value.object_name == "Vulcan"
        assert "Vulcan" in str(exc_info.value)

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name(self, catalog_store, name):
        with pytest.raises(InvalidQueryError):
            NameResolver(catalog_store).resolve(name)

    def test_is_known(self, catalog_store):
        resolver = NameResolver(catalog_store)
        assert resolver.is_known("M42")
        assert resolver.is_known("Jupiter")
        assert not resolver.is_known("Vulcan")
        assert not resolver.is_known("")


class TestDegradedMode:
    """Tests for resolution against the built-in fallback tables."""

    def test_sirius_resolves_without_files(self, fallback_store):
        resolution = NameResolver(fallback_store).resolve("Sirius")
        assert resolution.coordinate.ra_hours == pytest.approx(6.7525)
        assert resolution.coordinate.dec_degrees == pytest.approx(-16.7161)

    def test_fallback_aliases(self, fallback_store):
        resolver = NameResolver(fallback_store)
        assert resolver.resolve("Andromeda Galaxy").coordinate == resolver.resolve("m31").coordinate
        assert resolver.resolve("Omega Centauri").canonical_key == "ngc5139"

    def test_multi_word_star_key(self, fallback_store):
        assert NameResolver(fallback_store).resolve("Gamma Crucis").table is CatalogTable.STARS
