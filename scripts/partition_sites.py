# scripts/partition_sites.py
# Split a rec-site FeatureCollection into open / closed / excluded groups.
#
# One pass, input order kept inside each group. Features without usable
# geometry land in no group and are only counted (``skipped``).

from typing import Any, Iterator, List, Mapping, NamedTuple, Tuple

from classify_sites import get_props, is_campsite, is_closed, to_number
from site_fields import resolve_attribute


class GeoJSONStructureError(ValueError):
    """Payload is not an object with an array-valued ``features`` member."""


class SitePartition(NamedTuple):
    open: List[dict]
    closed: List[dict]
    excluded: List[dict]
    skipped: int = 0


def validate_collection(data: Any) -> List[Any]:
    """Return the features list or raise GeoJSONStructureError."""
    if not isinstance(data, Mapping):
        raise GeoJSONStructureError(
            f"Invalid GeoJSON structure: expected an object, got {type(data).__name__}"
        )
    features = data.get("features")
    if not isinstance(features, list):
        raise GeoJSONStructureError("Invalid GeoJSON structure: 'features' is not an array")
    return features


def _is_coord(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def iter_positions(geometry: Any) -> Iterator[Tuple[float, float]]:
    """Yield (lat, lon) for every numeric position in a GeoJSON geometry."""
    if not isinstance(geometry, Mapping):
        return
    if geometry.get("type") == "GeometryCollection":
        for part in geometry.get("geometries") or []:
            yield from iter_positions(part)
        return

    def walk(coords):
        if not isinstance(coords, (list, tuple)):
            return
        if len(coords) >= 2 and _is_coord(coords[0]) and _is_coord(coords[1]):
            yield float(coords[1]), float(coords[0])
            return
        for c in coords:
            yield from walk(c)

    yield from walk(geometry.get("coordinates"))


def has_geometry(feature: Any) -> bool:
    """Typed geometry with at least one numeric position."""
    if not isinstance(feature, Mapping):
        return False
    geom = feature.get("geometry")
    if not isinstance(geom, Mapping) or not isinstance(geom.get("type"), str):
        return False
    return next(iter_positions(geom), None) is not None


def with_point_geometry(feature: Any) -> Any:
    """
    Give a geometry-less feature a Point built from its LATITUDE/LONGITUDE
    columns. Features that already have geometry, or whose coordinates are
    missing or out of range, come back untouched.
    """
    if not isinstance(feature, Mapping) or has_geometry(feature):
        return feature

    props = get_props(feature)
    lat = to_number(resolve_attribute(props, "latitude"))
    lon = to_number(resolve_attribute(props, "longitude"))
    if lat is None or lon is None:
        return feature
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return feature

    placed = dict(feature)
    placed.setdefault("type", "Feature")
    placed["geometry"] = {"type": "Point", "coordinates": [lon, lat]}
    return placed


def partition_features(
    collection: Any,
    *,
    campsites_only: bool,
    latlon_fallback: bool = False,
) -> SitePartition:
    """
    campsites_only: drop sites with no defined campsites into ``excluded``.
      Some deployments map every rec site, so there is no default here.
    latlon_fallback: place geometry-less sites from their lat/lon columns.
    """
    features = validate_collection(collection)

    open_sites: List[dict] = []
    closed_sites: List[dict] = []
    excluded: List[dict] = []
    skipped = 0

    for feature in features:
        if latlon_fallback:
            feature = with_point_geometry(feature)
        if not has_geometry(feature):
            skipped += 1
            continue

        props = get_props(feature)
        if campsites_only and not is_campsite(props):
            excluded.append(feature)
        elif is_closed(props):
            closed_sites.append(feature)
        else:
            open_sites.append(feature)

    return SitePartition(open_sites, closed_sites, excluded, skipped)
