# scripts/site_popup.py
# Popup HTML for a single rec site.
# Order: name, status, closure details (closed only), campsites, location,
# description, directions, official links. Absent values produce no line.

import html
import re
from typing import Any, Dict, List
from urllib.parse import quote

from bs4 import BeautifulSoup

from classify_sites import get_props, is_closed
from closure_dates import format_closure_date
from site_fields import is_blank, resolve_site

# ---------- config ----------
UNNAMED_SITE = "Unnamed recreation site"
STATUS_CLOSED = "Status: CLOSED"
STATUS_OPEN = "Status: Open (check latest info)"

CURRENT_SITE_BASE = "https://beta.sitesandtrailsbc.ca"
LEGACY_SITE_BASE = "https://www.sitesandtrailsbc.ca/search"

CURRENT_LINK_LABEL = "Beta site page"
LEGACY_LINK_LABEL = "Original site page"

# rich-text tags the portal export leaves in free-text fields
MARKUP_TAGS = ("p", "br", "b", "i", "u", "em", "strong", "a", "ul", "ol", "li", "div", "span")
_MARKUP_RE = re.compile(
    r"</?(?:" + "|".join(MARKUP_TAGS) + r")"
    r"(?:\s+[\w:-]+\s*=\s*(?:\"[^\"]*\"|'[^']*'))*\s*/?>",
    re.IGNORECASE,
)


# ---------- helpers ----------
def clean_text(value: Any) -> str:
    """Plain, HTML-escaped text for a free-text attribute ("" when blank)."""
    if is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value)
    if _MARKUP_RE.search(text):
        # some exports keep the portal's rich-text markup in descriptions
        text = BeautifulSoup(text, "lxml").get_text(" ")
    elif "&" in text:
        # literal "<" stays text; entities still render as the browser would
        text = html.unescape(text)
    text = " ".join(text.split())
    return html.escape(text)


def current_site_url(site_id: Any, base: str = CURRENT_SITE_BASE) -> str:
    sid = quote(str(site_id).strip(), safe="")
    return f"{base.rstrip('/')}/resource/{sid}"


def legacy_site_url(site_id: Any, base: str = LEGACY_SITE_BASE) -> str:
    sid = quote(str(site_id).strip(), safe="")
    return f"{base.rstrip('/')}/search-result.aspx?site={sid}&type=Site"


def _link(url: str, label: str) -> str:
    return f'<a href="{html.escape(url)}" target="_blank" rel="noopener">{label}</a>'


# ---------- main ----------
def build_popup_html(
    site: Dict[str, Any],
    closed: bool,
    current_base: str = CURRENT_SITE_BASE,
    legacy_base: str = LEGACY_SITE_BASE,
) -> str:
    """
    site: the dict from site_fields.resolve_site().
    closed: result of classify_sites.is_closed() for the same feature.
    """
    lines: List[str] = []

    name = clean_text(site.get("name")) or UNNAMED_SITE
    lines.append(f"<strong>{name}</strong>")
    lines.append(f"<strong>{STATUS_CLOSED if closed else STATUS_OPEN}</strong>")

    if closed:
        reason = clean_text(site.get("closure_type"))
        if reason:
            lines.append(f"Reason: {reason}")
        since = clean_text(format_closure_date(site.get("closure_date")))
        if since:
            lines.append(f"Since: {since}")
        comment = clean_text(site.get("closure_comment"))
        if comment:
            lines.append(f"<em>{comment}</em>")

    campsites = clean_text(site.get("campsites"))
    if campsites:
        lines.append(f"Campsites: {campsites}")

    location = clean_text(site.get("location"))
    if location:
        lines.append(f"Location: {location}")

    description = clean_text(site.get("description"))
    if description:
        lines.append(description)

    directions = clean_text(site.get("directions"))
    if directions:
        lines.append(f"<strong>Directions:</strong> {directions}")

    site_id = site.get("site_id")
    if not is_blank(site_id):
        lines.append("<strong>Official info &amp; fees:</strong>")
        lines.append(_link(current_site_url(site_id, current_base), CURRENT_LINK_LABEL))
        lines.append(_link(legacy_site_url(site_id, legacy_base), LEGACY_LINK_LABEL))

    return "<br/>\n".join(lines)


def popup_for_feature(feature_or_props: Any, **kwargs) -> str:
    props = get_props(feature_or_props)
    return build_popup_html(resolve_site(props), is_closed(props), **kwargs)
