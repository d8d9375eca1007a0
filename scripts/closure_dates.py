# scripts/closure_dates.py
# Best-effort display string for the closure date column.
#
# Exports carry this field as epoch milliseconds (number or numeric string)
# or as a date-like string. Anything that does not parse is shown as-is.

import math
from typing import Any

import pandas as pd

from site_fields import MISSING

# ---------- config ----------
# locale short date
DATE_FORMAT = "%x"
DISPLAY_TZ = "America/Vancouver"

# numbers above this are taken as epoch milliseconds; smaller ones (years,
# day counts) go through the string parser. Known to misread tiny epochs.
EPOCH_MS_THRESHOLD = 1_000_000_000


def _strict_number(raw: str):
    try:
        num = float(raw)
    except (ValueError, OverflowError):
        return None
    return num if math.isfinite(num) else None


def parse_closure_date(value: Any):
    """Return a pandas Timestamp, or None when the value is not a date."""
    if value is MISSING or value is None or isinstance(value, bool):
        return None
    raw = str(value).strip()
    if not raw:
        return None

    num = _strict_number(raw)
    try:
        if num is not None and abs(num) > EPOCH_MS_THRESHOLD:
            ts = pd.to_datetime(num, unit="ms", utc=True, errors="coerce")
            if not pd.isna(ts):
                ts = ts.tz_convert(DISPLAY_TZ)
        else:
            ts = pd.to_datetime(raw, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None

    if ts is None or pd.isna(ts):
        return None
    return ts


def format_closure_date(value: Any, fmt: str = DATE_FORMAT) -> str:
    """
    Closure date -> display string.

    Empty/absent gives "". Unparsable input comes back unchanged.
    """
    if value is MISSING or value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    raw = str(value)
    if not raw.strip():
        return ""

    ts = parse_closure_date(value)
    if ts is None:
        return raw
    return ts.strftime(fmt)
