from __future__ import annotations

import defusedxml
import django
import pytest

from gpxparser import conf
from tests.utils import FILES_ROOT


def pytest_configure():
    print(f"Running with Django {django.__version__}, defusedxml {defusedxml.__version__}")
    print(f"Using GPXPARSER_CHUNK_SIZE={conf.GPXPARSER_CHUNK_SIZE}")


@pytest.fixture()
def ride_gpx_path():
    """A complete GPX file, with metadata, waypoints, a route and a track."""
    return FILES_ROOT.joinpath("ride.gpx")


@pytest.fixture()
def ride_gpx(ride_gpx_path) -> bytes:
    return ride_gpx_path.read_bytes()
