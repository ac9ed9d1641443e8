"""
Root conftest.py: sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without a database or Azure Functions host.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'geojson_api', 'config', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables to prevent import crashes.

    AppConfig requires the POSTGIS_* values; nothing here is ever
    connected to.
    """
    defaults = {
        "POSTGIS_HOST": "localhost",
        "POSTGIS_DATABASE": "testdb",
        "POSTGIS_USER": "tester",
        "POSTGIS_PASSWORD": "secret",
        "GEOJSON_SCHEMA": "public",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture
def square_wkt():
    """Closed unit square around the origin."""
    return "POLYGON((0 0, 1 0, 1 1, 0 1, 0 0))"
