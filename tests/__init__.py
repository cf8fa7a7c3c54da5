"""
SKYWATCH Test Suite

Test Organization:
    tests/
    ├── __init__.py          # This file
    ├── conftest.py          # Shared fixtures (sample catalogs, fake ephemeris)
    └── unit/                # Unit tests (no network, no ephemeris download)

Running Tests:
    # Run all tests
    pytest tests/

Requirements:
    pip install -e ".[test]"
"""
