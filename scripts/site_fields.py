# scripts/site_fields.py
# Tolerant property lookup for rec-site features.
#
# The BC rec-site GeoJSON shows up in two schemas: the long-form column
# names (CLOSURE_IND, PROJECT_NAME, ...) and the shapefile-truncated ones
# (CLOSR_IND, PROJECT_NM, ...). Case also varies between exports. Every
# lookup goes through resolve_field() with an alias list from FIELD_ALIASES.

from typing import Any, Dict, List, Mapping, Sequence

# ---------- config ----------
# semantic attribute -> candidate field names, highest priority first
FIELD_ALIASES: Dict[str, List[str]] = {
    "name": ["PROJECT_NAME", "PROJECT_NM"],
    "campsites": ["DEFINED_CAMPSITES", "DFND_CAMP"],
    "location": ["SITE_LOCATION", "SITE_LOC"],
    "description": ["SITE_DESCRIPTION", "ST_DESC"],
    "directions": ["DRIVING_DIRECTIONS", "DRV_DIRCTN"],
    "closure_ind": ["CLOSURE_IND", "CLOSR_IND"],
    "closure_type": ["CLOSURE_TYPE", "CLOSR_TYPE"],
    "closure_date": ["CLOSURE_DATE", "CLOSR_DT"],
    "closure_comment": ["CLOSURE_COMMENT", "CLOSR_COM"],
    "site_id": ["FOREST_FILE_ID", "F_FILE_ID"],
}

# only consulted when placing geometry-less sites from their columns
COORD_ALIASES: Dict[str, List[str]] = {
    "latitude": ["LATITUDE", "LAT"],
    "longitude": ["LONGITUDE", "LONG", "LON"],
}


class _Missing:
    """Marker for "no candidate field resolved".

    Falsy so it drops out of ``value or default`` expressions, but never
    equal to 0, "" or None. Compare with ``is MISSING``.
    """

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


# ---------- helpers ----------
def resolve_field(props: Mapping[str, Any], candidates: Sequence[str]) -> Any:
    """
    Return the first non-None value among ``candidates``.

    Candidates are tried in order; for each one an exact key match beats a
    case-insensitive one. A value of 0 or "" counts as found. Returns
    MISSING when nothing resolves.
    """
    if not isinstance(props, Mapping) or not candidates:
        return MISSING

    folded = None
    for name in candidates:
        value = props.get(name)
        if value is not None:
            return value

        if folded is None:
            folded = {}
            for key, val in props.items():
                if val is None or not isinstance(key, str):
                    continue
                # first key wins if an export carries both "Name" and "NAME"
                folded.setdefault(key.lower(), val)

        value = folded.get(name.lower())
        if value is not None:
            return value

    return MISSING


def resolve_attribute(props: Mapping[str, Any], attribute: str) -> Any:
    if attribute in FIELD_ALIASES:
        return resolve_field(props, FIELD_ALIASES[attribute])
    if attribute in COORD_ALIASES:
        return resolve_field(props, COORD_ALIASES[attribute])
    raise KeyError(f"Unknown site attribute: {attribute!r}")


def resolve_site(props: Mapping[str, Any]) -> Dict[str, Any]:
    """Resolve every semantic attribute once; values are raw scalars or MISSING."""
    return {attr: resolve_field(props, names) for attr, names in FIELD_ALIASES.items()}


def is_blank(value: Any) -> bool:
    """True for MISSING, None and whitespace-only strings (0 is not blank)."""
    if value is MISSING or value is None:
        return True
    if isinstance(value, float) and value != value:  # NaN
        return True
    return isinstance(value, str) and not value.strip()
