"""
Root conftest.py — sys.path and shared feature fixtures.

The builders live as sibling modules under scripts/, so put that folder on
sys.path the same way the scripts see each other when run directly.
"""

import os
import sys

import pytest

SCRIPTS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts")
if SCRIPTS_DIR not in sys.path:
    sys.path.insert(0, SCRIPTS_DIR)


def make_feature(props, coords=(-123.1, 49.3), geometry=None):
    if geometry is None:
        geometry = {"type": "Point", "coordinates": list(coords)}
    return {"type": "Feature", "geometry": geometry, "properties": dict(props)}


@pytest.fixture
def five_sites():
    """2 closed campsites, 2 open campsites, 1 site with no campsites."""
    return {
        "type": "FeatureCollection",
        "features": [
            make_feature({"PROJECT_NAME": "Closed A", "DEFINED_CAMPSITES": 4, "CLOSURE_IND": "Y"}, (-123.0, 49.0)),
            make_feature({"PROJECT_NM": "Open A", "DFND_CAMP": "12", "CLOSR_IND": "N"}, (-124.0, 50.0)),
            make_feature({"PROJECT_NAME": "Closed B", "DFND_CAMP": "3", "CLOSR_IND": " y "}, (-125.0, 51.0)),
            make_feature({"PROJECT_NAME": "Day use", "DEFINED_CAMPSITES": 0, "CLOSURE_IND": "Y"}, (-126.0, 52.0)),
            make_feature({"PROJECT_NAME": "Open B", "DEFINED_CAMPSITES": 2.5}, (-127.0, 53.0)),
        ],
    }


@pytest.fixture
def crown_land():
    ring = [[-124.0, 50.0], [-123.5, 50.0], [-123.5, 50.5], [-124.0, 50.5], [-124.0, 50.0]]
    return {
        "type": "FeatureCollection",
        "features": [
            make_feature({"TENURE": "Crown"}, geometry={"type": "Polygon", "coordinates": [ring]}),
            {"type": "Feature", "geometry": None, "properties": {}},
        ],
    }
