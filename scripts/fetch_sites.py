# scripts/fetch_sites.py
# Load a GeoJSON FeatureCollection from a local path or an http(s) URL.
# One request per source, no retry. Each source fails on its own.

import json
import os
import sys
from typing import Any, Optional

import requests

from partition_sites import validate_collection

# ---------- config ----------
DEFAULT_SITES_SOURCE = os.environ.get("REC_SITES_GEOJSON", "data/bc_rec_sites.geojson")
DEFAULT_CROWN_SOURCE = os.environ.get("CROWN_LAND_GEOJSON") or None

FETCH_TIMEOUT = 45
HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; BC-RecSites-Map-Bot/1.0)",
    "Accept": "application/geo+json,application/json",
}


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_geojson(url: str, timeout: int = FETCH_TIMEOUT) -> Any:
    r = requests.get(url, headers=HEADERS, timeout=timeout)
    r.raise_for_status()
    return r.json()


def read_geojson(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_geojson(source: str, timeout: int = FETCH_TIMEOUT) -> dict:
    """Fetch or read ``source`` and check it is a FeatureCollection-shaped object."""
    data = fetch_geojson(source, timeout) if _is_url(source) else read_geojson(source)
    validate_collection(data)
    return data


def try_load_geojson(source: Optional[str], label: str, timeout: int = FETCH_TIMEOUT) -> Optional[dict]:
    """
    load_geojson() that reports instead of raising.
    Returns None when the source is unset or could not be used.
    """
    if not source:
        return None
    try:
        data = load_geojson(source, timeout=timeout)
    except requests.RequestException as e:
        print(f"Failed to fetch {label} GeoJSON from {source}: {e}", file=sys.stderr)
        return None
    except OSError as e:
        print(f"Failed to read {label} GeoJSON from {source}: {e}", file=sys.stderr)
        return None
    except ValueError as e:
        # bad JSON and GeoJSONStructureError both land here
        print(f"Invalid {label} GeoJSON from {source}: {e}", file=sys.stderr)
        return None

    print(f"Loaded {label}: {len(data['features'])} features from {source}")
    return data
