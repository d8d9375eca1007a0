# scripts/build_map.py
# BC recreation sites map with:
#  - open and closed sites in separate layers (green / red circle markers)
#  - optional Crown-land polygon overlay
#  - popups with closure details and links to the official site pages
#  - layer checkboxes for open / closed / Crown land, legend and
#    "last updated" badge
#
# Sources fail independently: a missing overlay only drops that layer,
# a missing primary source writes a fallback page instead of the map.

import argparse
import os
import sys
from datetime import datetime, timezone
from typing import List, Optional

import folium

from fetch_sites import DEFAULT_CROWN_SOURCE, DEFAULT_SITES_SOURCE, try_load_geojson
from partition_sites import (
    SitePartition,
    has_geometry,
    iter_positions,
    partition_features,
    validate_collection,
)
from site_popup import popup_for_feature

# ---------- config ----------
BC_CENTER = [53.7267, -127.6476]
ZOOM_START = 5
MAX_ZOOM = 18
FIT_PADDING = (20, 20)

OPEN_LAYER_NAME = "Open sites"
CLOSED_LAYER_NAME = "Closed sites"
CROWN_LAYER_NAME = "Crown land"

POINT_STYLE = {"radius": 6, "weight": 1, "opacity": 1.0, "fill_opacity": 0.9}

OPEN_STYLE = {"color": "#15803d", "fill_color": "#22c55e"}
CLOSED_STYLE = {"color": "#b91c1c", "fill_color": "#ef4444"}
CROWN_STYLE = {"color": "#a16207", "fill_color": "#facc15", "weight": 1, "fill_opacity": 0.25}

POPUP_MAX_WIDTH = 320

# default standalone output
OUT_DIR = "docs"
OUT_FILE = os.path.join(OUT_DIR, "site_map.html")


# ---------- helpers ----------
def env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


def write_error_page(msg: str, out_file: str = OUT_FILE) -> None:
    os.makedirs(os.path.dirname(out_file) or ".", exist_ok=True)
    updated = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    html = """<!doctype html><meta charset="utf-8">
<title>BC recreation sites map</title>
<meta http-equiv="Cache-Control" content="no-cache, no-store, must-revalidate"/>
<meta http-equiv="Pragma" content="no-cache"/>
<meta http-equiv="Expires" content="0"/>
<style>body{font:16px/1.45 -apple-system,BlinkMacSystemFont,"Segoe UI",Roboto,Arial,sans-serif;padding:24px;color:#233;max-width:900px;margin:auto;background:#f6f8fb}
.card{background:#fff;border-radius:12px;box-shadow:0 4px 20px rgba(0,0,0,.08);padding:20px}
h1{margin:0 0 10px 0}code{background:#f5f7fb;padding:2px 6px;border-radius:6px}</style>
<div class="card">
  <h1>BC recreation sites map</h1>
  <p><strong>Status:</strong> temporarily unavailable.</p>
  <p><strong>Reason:</strong> __MSG__</p>
  <p>Last attempt: __UPDATED__. This page updates when the generator runs.</p>
</div>""".replace("__MSG__", msg).replace("__UPDATED__", updated)
    with open(out_file, "w", encoding="utf-8") as f:
        f.write(html)
    print("Wrote fallback page:", out_file)


def bounds_of(features: List[dict]) -> Optional[List[List[float]]]:
    lats: List[float] = []
    lons: List[float] = []
    for feature in features:
        for lat, lon in iter_positions(feature.get("geometry")):
            lats.append(lat)
            lons.append(lon)
    if not lats:
        return None
    return [[min(lats), min(lons)], [max(lats), max(lons)]]


def _add_site(feature: dict, style: dict, group: folium.FeatureGroup) -> None:
    popup = folium.Popup(popup_for_feature(feature), max_width=POPUP_MAX_WIDTH)
    geom = feature["geometry"]

    if geom["type"] == "Point":
        lat, lon = next(iter_positions(geom))
        folium.CircleMarker(
            [lat, lon],
            radius=POINT_STYLE["radius"],
            weight=POINT_STYLE["weight"],
            opacity=POINT_STYLE["opacity"],
            color=style["color"],
            fill=True,
            fill_color=style["fill_color"],
            fill_opacity=POINT_STYLE["fill_opacity"],
            popup=popup,
        ).add_to(group)
        return

    # polygons, lines and multi-geometries share the same colours
    layer = folium.GeoJson(
        {"type": "Feature", "geometry": geom, "properties": {}},
        style_function=lambda _f, s=style: {
            "color": s["color"],
            "weight": POINT_STYLE["weight"],
            "opacity": POINT_STYLE["opacity"],
            "fillColor": s["fill_color"],
            "fillOpacity": POINT_STYLE["fill_opacity"],
        },
    )
    layer.add_child(popup)
    layer.add_to(group)


def _add_crown_land(collection: dict, group: folium.FeatureGroup) -> int:
    features = [f for f in validate_collection(collection) if has_geometry(f)]
    if not features:
        return 0
    folium.GeoJson(
        {"type": "FeatureCollection", "features": features},
        name=CROWN_LAYER_NAME,
        control=False,
        style_function=lambda _f: {
            "color": CROWN_STYLE["color"],
            "weight": CROWN_STYLE["weight"],
            "fillColor": CROWN_STYLE["fill_color"],
            "fillOpacity": CROWN_STYLE["fill_opacity"],
        },
    ).add_to(group)
    return len(features)


def _add_legend(m: folium.Map, with_crown: bool) -> None:
    updated = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    badge_html = r"""
<meta http-equiv="Cache-Control" content="no-cache, no-store, must-revalidate"/>
<meta http-equiv="Pragma" content="no-cache"/>
<meta http-equiv="Expires" content="0"/>
<style>
.leaflet-control-layers-expanded{ box-shadow:0 4px 14px rgba(0,0,0,.12); border-radius:10px; }
.last-updated {
  position:absolute; right:12px; bottom:24px; z-index:9999;
  background:#fff; padding:6px 8px; border-radius:8px;
  box-shadow:0 2px 8px rgba(0,0,0,.12);
  font:12px "Open Sans","Helvetica Neue",Arial,sans-serif; color:#485260;
}
.legend-box{
  position:absolute; left:12px; bottom:24px; z-index:9999;
  background:#fff; padding:6px 8px; border-radius:8px;
  box-shadow:0 2px 8px rgba(0,0,0,.12);
  font:12px "Open Sans","Helvetica Neue",Arial,sans-serif; color:#485260;
  user-select:none;
}
.legend-box .title{ font-weight:600; margin-bottom:4px; }
.legend-box .row{ display:flex; align-items:center; gap:6px; margin:3px 0; }
.legend-box .dot{
  width:10px; height:10px; border-radius:50%; display:inline-block;
  border:1px solid rgba(0,0,0,.25);
}
.legend-box .swatch{ border-radius:2px; }
</style>
<div class="last-updated">Last updated: __UPDATED__</div>
""".replace("__UPDATED__", updated)
    m.get_root().html.add_child(folium.Element(badge_html))

    rows = [
        ("dot", OPEN_STYLE["fill_color"], OPEN_LAYER_NAME),
        ("dot", CLOSED_STYLE["fill_color"], CLOSED_LAYER_NAME),
    ]
    if with_crown:
        rows.append(("dot swatch", CROWN_STYLE["fill_color"], CROWN_LAYER_NAME))
    legend_items = "".join(
        '<div class="row"><span class="{cls}" style="background:{color}"></span>{label}</div>'.format(
            cls=cls, color=color, label=label
        )
        for cls, color, label in rows
    )
    m.get_root().html.add_child(
        folium.Element(f'<div class="legend-box"><div class="title">Recreation sites</div>{legend_items}</div>')
    )


# ---------- main ----------
def build_site_map(
    sites: dict,
    crown_land: Optional[dict] = None,
    *,
    campsites_only: bool,
    latlon_fallback: bool = False,
    partition: Optional[SitePartition] = None,
) -> folium.Map:
    """
    Return a folium.Map for a rec-site FeatureCollection.

    crown_land: optional polygon FeatureCollection drawn underneath the
      sites; None leaves the overlay (and its checkbox) out.
    campsites_only / latlon_fallback: see partition_sites.partition_features.
    partition: an already computed SitePartition of ``sites``; when given
      the collection is not partitioned again.

    Raises GeoJSONStructureError when ``sites`` is not a FeatureCollection.
    """
    part = partition
    if part is None:
        part = partition_features(
            sites, campsites_only=campsites_only, latlon_fallback=latlon_fallback
        )
    print(
        f"Sites: {len(part.open)} open, {len(part.closed)} closed, "
        f"{len(part.excluded)} excluded"
    )
    if part.skipped:
        print(f"Skipped {part.skipped} features with missing or malformed geometry", file=sys.stderr)

    m = folium.Map(
        tiles="OpenStreetMap",
        location=BC_CENTER,
        zoom_start=ZOOM_START,
        max_zoom=MAX_ZOOM,
        prefer_canvas=True,
    )

    with_crown = False
    if crown_land is not None:
        crown_group = folium.FeatureGroup(name=CROWN_LAYER_NAME, show=True)
        n_crown = _add_crown_land(crown_land, crown_group)
        if n_crown:
            crown_group.add_to(m)
            with_crown = True
            print(f"Crown land: {n_crown} polygons")
        else:
            print("Crown land overlay has no drawable features", file=sys.stderr)

    open_group = folium.FeatureGroup(name=OPEN_LAYER_NAME, show=True).add_to(m)
    closed_group = folium.FeatureGroup(name=CLOSED_LAYER_NAME, show=True).add_to(m)

    for feature in part.open:
        _add_site(feature, OPEN_STYLE, open_group)
    for feature in part.closed:
        _add_site(feature, CLOSED_STYLE, closed_group)

    bounds = bounds_of(part.open + part.closed)
    if bounds:
        m.fit_bounds(bounds, padding=FIT_PADDING)
    else:
        print("No valid coordinates to fit bounds", file=sys.stderr)

    folium.LayerControl(collapsed=False).add_to(m)
    _add_legend(m, with_crown)
    return m


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Build the BC recreation sites map")
    ap.add_argument("--sites", default=DEFAULT_SITES_SOURCE, help="Rec-site GeoJSON path or URL")
    ap.add_argument("--crown-land", default=DEFAULT_CROWN_SOURCE, help="Optional Crown-land GeoJSON path or URL")
    scope = ap.add_mutually_exclusive_group()
    scope.add_argument(
        "--campsites-only",
        dest="campsites_only",
        action="store_true",
        help="Only map sites with defined campsites",
    )
    scope.add_argument(
        "--all-sites",
        dest="campsites_only",
        action="store_false",
        help="Map every rec site",
    )
    ap.set_defaults(campsites_only=env_flag("CAMPSITES_ONLY", True))
    ap.add_argument(
        "--latlon-fallback",
        action="store_true",
        help="Place sites without geometry from their LATITUDE/LONGITUDE columns",
    )
    ap.add_argument("--out", default=OUT_FILE)
    return ap


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)

    sites = try_load_geojson(args.sites, "rec sites")
    if sites is None:
        write_error_page(f"Could not load rec-site data from {args.sites}", args.out)
        return 0
    crown = try_load_geojson(args.crown_land, "Crown land")

    fmap = build_site_map(
        sites,
        crown,
        campsites_only=args.campsites_only,
        latlon_fallback=args.latlon_fallback,
    )
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    fmap.save(args.out)
    print("Wrote", args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
