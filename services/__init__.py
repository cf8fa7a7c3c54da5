"""
SKYWATCH Services Package

Data Management
---------------
- services.catalog: Catalog ingestion (OpenNGC, HYG, sexagesimal lists),
  the immutable CatalogStore and the NameResolver

Astronomical Calculations
-------------------------
- services.ephemeris: Sidereal time, equatorial -> horizontal conversion,
  visibility windows and the Skyfield ephemeris adapter
"""
