"""
Pytest Fixtures for SKYWATCH Testing.

Provides sample catalog files in each supported schema family, a built
catalog store, a Vancouver observer and a fake ephemeris collaborator so
that no test touches the network or downloads a kernel.
"""

from datetime import datetime, timedelta, timezone

import pytest

from skywatch.types import (
    CelestialBody,
    EquatorialCoordinate,
    Observer,
    VisibilityWindow,
)
from services.catalog.ingest import build_catalog_store


# =============================================================================
# Sample catalog content
# =============================================================================

OPENNGC_SAMPLE = """\
Name;Type;RA;Dec;Const;V-Mag;M;Common names
NGC0224;G;00:42:44.35;+41:16:08.6;And;3.44;031;Andromeda Galaxy
NGC1976;HII;05:35:16.48;-05:23:22.8;Ori;4.0;042;Great Orion Nebula,Orion Nebula
NGC0007;G;00:08:20.96;-29:54:54.0;Scl;13.5;;
IC0003;G;00:12:06.09;-00:24:54.8;Psc;14.7;;
NGC7000;HII;20:59:17.14;+44:31:43.6;Cyg;4.0;;North America Nebula
NGC9999;G;not-a-ra;+10:00:00;Psc;;;
NGC9998;G;01:00:00;+95:00:00;Psc;;;
"""

HYG_SAMPLE = """\
id,hip,hd,hr,gl,bf,proper,ra,dec,dist,mag,con,bayer,flam
32263,32349,48915,2491,Gl 244A,9Alp CMa,Sirius,6.752481,-16.716116,2.64,-1.44,CMa,Alp,9
11734,11767,8890,424,Gl 53,1Alp UMi,Polaris,2.529750,89.264109,132.62,1.97,UMi,Alp,1
27919,27989,39801,2061,,58Alp Ori,Betelgeuse,5.919529,7.407063,152.67,0.45,Ori,Alp,58
1000,1001,1002,,,,,0.5,10.0,50.0,8.5,Psc,,
2000,2001,2002,,,,,1.5,20.0,40.0,5.2,Psc,,
3000,3001,,,,,,2.5,30.0,30.0,4.8,,,
4000,4001,4002,,,,,bad,20.0,40.0,4.1,Psc,,
"""

RADIAN_STARS_SAMPLE = """\
hip,proper,rarad,decrad,mag,con
32349,Sirius,1.767791,-0.291751,-1.44,CMa
"""

GENERIC_SAMPLE = """\
name,ra_hours,dec_degrees,common_name,type
M57,18.8933,33.0283,Ring Nebula,PN
M13,16.6958,36.4613,Hercules Cluster,GCl
"""


@pytest.fixture
def openngc_file(tmp_path):
    path = tmp_path / "ngc.csv"
    path.write_text(OPENNGC_SAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def hyg_file(tmp_path):
    path = tmp_path / "hygdata_v41.csv"
    path.write_text(HYG_SAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def catalog_store(openngc_file, hyg_file):
    """CatalogStore built from the sample OpenNGC and HYG files."""
    return build_catalog_store(openngc_file, hyg_file)


@pytest.fixture
def fallback_store(tmp_path):
    """CatalogStore built with both catalog files missing."""
    return build_catalog_store(tmp_path / "missing_dso.csv", tmp_path / "missing_stars.csv")


@pytest.fixture
def vancouver() -> Observer:
    return Observer(latitude_degrees=49.2827, longitude_degrees=-123.1207, elevation_meters=30.0)


# =============================================================================
# Fake ephemeris collaborator
# =============================================================================

class FakeEphemeris:
    """
    Deterministic EphemerisProvider for tests.

    Returns a fixed coordinate per body and a window with events at fixed
    offsets from the search start; every call is recorded.
    """

    def __init__(self, positions=None):
        self.positions = positions or {
            CelestialBody.MARS: EquatorialCoordinate(ra_hours=10.0, dec_degrees=12.0),
            CelestialBody.MOON: EquatorialCoordinate(ra_hours=3.0, dec_degrees=18.0),
            CelestialBody.SUN: EquatorialCoordinate(ra_hours=13.4, dec_degrees=-9.5),
        }
        self.position_calls = []
        self.event_calls = []

    def get_body_position(self, body, observer, when):
        self.position_calls.append((body, observer, when))
        return self.positions.get(body, EquatorialCoordinate(0.0, 0.0))

    def find_rise_transit_set(self, body, observer, start, end):
        self.event_calls.append((body, observer, start, end))
        return VisibilityWindow(
            rise=start + timedelta(hours=6),
            transit=start + timedelta(hours=12),
            set=start + timedelta(hours=18),
        )


@pytest.fixture
def fake_ephemeris() -> FakeEphemeris:
    return FakeEphemeris()


@pytest.fixture
def j2000() -> datetime:
    return datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
