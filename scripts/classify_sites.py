# scripts/classify_sites.py
# Campsite / closure predicates for rec-site features.
# Both predicates accept a GeoJSON feature or a bare property dict.

import math
import re
from typing import Any, Mapping, Optional

from site_fields import MISSING, resolve_attribute

# leading decimal literal, same idea as JS parseFloat ("12 sites" -> 12)
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def get_props(feature_or_props: Any) -> Mapping[str, Any]:
    if isinstance(feature_or_props, Mapping):
        props = feature_or_props.get("properties")
        if isinstance(props, Mapping):
            return props
        if "properties" in feature_or_props or "geometry" in feature_or_props:
            # a feature with a null/odd properties member
            return {}
        return feature_or_props
    return {}


def to_number(value: Any) -> Optional[float]:
    """Decimal parse; None for absent, boolean, non-finite or unparsable input."""
    if value is MISSING or value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        num = float(value)
    else:
        m = _LEADING_NUMBER.match(str(value))
        if not m:
            return None
        try:
            num = float(m.group(1))
        except (ValueError, OverflowError):
            return None

    return num if math.isfinite(num) else None


def is_campsite(feature_or_props: Any) -> bool:
    count = to_number(resolve_attribute(get_props(feature_or_props), "campsites"))
    return count is not None and count > 0


def is_closed(feature_or_props: Any) -> bool:
    ind = resolve_attribute(get_props(feature_or_props), "closure_ind")
    if ind is MISSING:
        return False
    return str(ind).strip().upper() == "Y"


def classify(feature_or_props: Any) -> dict:
    props = get_props(feature_or_props)
    return {"is_campsite": is_campsite(props), "is_closed": is_closed(props)}
