"""
SKYWATCH Built-in Fallback Catalog

A deterministic set of bright stars and well-known deep-sky objects used
when a catalog file is missing or cannot be parsed, so that common
queries remain answerable in degraded mode. No file-system or network
access happens here.
"""

from services.catalog.catalog import CatalogEntry, CatalogTable

# (name, ra_hours, dec_degrees, magnitude, constellation)
_BRIGHT_STARS = [
    ("Sirius", 6.7525, -16.7161, -1.46, "CMa"),
    ("Canopus", 6.3992, -52.6956, -0.74, "Car"),
    ("Arcturus", 14.2612, 19.1822, -0.05, "Boo"),
    ("Vega", 18.6157, 38.7836, 0.03, "Lyr"),
    ("Capella", 5.2778, 45.9981, 0.08, "Aur"),
    ("Rigel", 5.2422, -8.2017, 0.13, "Ori"),
    ("Procyon", 7.6550, 5.2242, 0.34, "CMi"),
    ("Betelgeuse", 5.9194, 7.4071, 0.42, "Ori"),
    ("Achernar", 1.6285, -57.2367, 0.46, "Eri"),
    ("Polaris", 2.5301, 89.2641, 1.98, "UMi"),
    ("Altair", 19.8463, 8.8683, 0.76, "Aql"),
    ("Aldebaran", 4.5986, 16.5090, 0.86, "Tau"),
    ("Antares", 16.4901, -26.4319, 0.91, "Sco"),
    ("Spica", 13.4199, -11.1613, 0.97, "Vir"),
    ("Pollux", 7.7553, 28.0262, 1.14, "Gem"),
    ("Deneb", 20.6905, 45.2803, 1.25, "Cyg"),
    ("Regulus", 10.1395, 11.9672, 1.40, "Leo"),
    ("Fomalhaut", 22.9608, -29.6222, 1.16, "PsA"),
    ("Castor", 7.5767, 31.8882, 1.58, "Gem"),
    ("Gamma Crucis", 12.5194, -57.1132, 1.63, "Cru"),
]

# (designation, common name, ra_hours, dec_degrees, type)
_DEEP_SKY_OBJECTS = [
    ("M1", "Crab Nebula", 5.5756, 22.0145, "SNR"),
    ("M8", "Lagoon Nebula", 18.0636, -24.3800, "HII"),
    ("M13", "Hercules Globular Cluster", 16.6958, 36.4613, "GCl"),
    ("M31", "Andromeda Galaxy", 0.7122, 41.2689, "G"),
    ("M42", "Orion Nebula", 5.5883, -5.3895, "HII"),
    ("M45", "Pleiades", 3.7833, 24.1167, "OCl"),
    ("M51", "Whirlpool Galaxy", 13.4997, 47.1950, "G"),
    ("M57", "Ring Nebula", 18.8933, 33.0283, "PN"),
    ("M81", "Bode's Galaxy", 9.9256, 69.0652, "G"),
    ("M82", "Cigar Galaxy", 9.9333, 69.6797, "G"),
    ("M87", "Virgo A", 12.3987, 12.3906, "G"),
    ("M104", "Sombrero Galaxy", 12.6669, -11.6237, "G"),
    ("NGC7000", "North America Nebula", 20.9850, 44.3333, "HII"),
    ("NGC6960", "Western Veil Nebula", 20.7650, 30.7150, "SNR"),
    ("NGC5139", "Omega Centauri", 13.4467, -47.4790, "GCl"),
    ("NGC4565", "Needle Galaxy", 12.5364, 25.9876, "G"),
    ("NGC6992", "Eastern Veil Nebula", 20.9149, 31.7186, "SNR"),
]


def fallback_stars() -> tuple[dict[str, CatalogEntry], dict[str, str]]:
    """Bright-star table and its aliases."""
    entries = {}
    for name, ra, dec, mag, con in _BRIGHT_STARS:
        key = name.lower()
        entries[key] = CatalogEntry(
            canonical_key=key,
            ra_hours=ra,
            dec_degrees=dec,
            common_name=name,
            object_type="*",
            magnitude=mag,
            constellation=con,
        )
    return entries, {}


def fallback_deep_sky_objects() -> tuple[dict[str, CatalogEntry], dict[str, str]]:
    """Messier / NGC table and the common-name aliases that point into it."""
    entries = {}
    aliases = {}
    for designation, common_name, ra, dec, obj_type in _DEEP_SKY_OBJECTS:
        key = designation.lower()
        entries[key] = CatalogEntry(
            canonical_key=key,
            ra_hours=ra,
            dec_degrees=dec,
            common_name=common_name,
            object_type=obj_type,
        )
        aliases[common_name.lower()] = key
    return entries, aliases


def fallback_table(table: CatalogTable) -> tuple[dict[str, CatalogEntry], dict[str, str]]:
    if table is CatalogTable.STARS:
        return fallback_stars()
    return fallback_deep_sky_objects()
