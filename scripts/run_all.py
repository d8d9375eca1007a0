# scripts/run_all.py
# Build ALL outputs into docs/:
#   - docs/site_map.html  (open / closed sites + optional Crown-land overlay)
#   - docs/closures.html  (closed-sites report)
#   - docs/index.html     (dashboard showing both via iframes)
#
# Usage (in Actions or locally):
#   python scripts/run_all.py --sites data/bc_rec_sites.geojson --crown-land data/crown_land.geojson

import argparse
import os

from build_closure_table import build_closure_table_html
from build_map import build_site_map, env_flag, write_error_page
from fetch_sites import DEFAULT_CROWN_SOURCE, DEFAULT_SITES_SOURCE, try_load_geojson
from partition_sites import partition_features

DOCS_DIR = "docs"

# Use simple tokens instead of .format() to avoid brace conflicts in CSS.
DASHBOARD_TEMPLATE = r"""<!doctype html><meta charset="utf-8">
<title>__TITLE__</title>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<style>
  :root {
    --bg:#f6f8fb; --ink:#1f2937; --muted:#6b7280; --border:#e5e7eb; --card:#fff;
  }
  html,body { margin:0; padding:0; background:var(--bg); color:var(--ink); font:16px/1.45 -apple-system,BlinkMacSystemFont,"Segoe UI",Roboto,Arial,sans-serif; }
  .wrap { max-width:1200px; margin:0 auto; padding:16px 16px 20px 16px; }
  h2 { margin:0 0 8px 0; font-size:20px; }
  .card { background:var(--card); border:1px solid var(--border); border-radius:12px; box-shadow:0 2px 10px rgba(0,0,0,.05); padding:10px 10px; margin:12px 0; }
  .muted { color:var(--muted); font-size:13px; margin-bottom:6px; }
  iframe { width:100%; height:720px; border:0; border-radius:12px; box-shadow:0 2px 10px rgba(0,0,0,.05); background:#fff; }
  iframe.report { height:480px; }
  @media (max-width: 900px) { iframe { height: 520px; } }
</style>

<div class="wrap">
  <h2>__TITLE__</h2>

  <div class="card">
    <div class="muted">__SCOPE__ (__COUNTS__)</div>
    <iframe src="__MAP__" title="Recreation sites map"></iframe>
  </div>

  <div class="card">
    <div class="muted">Closed sites</div>
    <iframe class="report" src="__CLOSURES__" title="Closed sites"></iframe>
  </div>
</div>
"""


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(
        description="Build the rec-site map + closures report and publish to docs/"
    )
    ap.add_argument("--sites", default=DEFAULT_SITES_SOURCE, help="Rec-site GeoJSON path or URL")
    ap.add_argument("--crown-land", default=DEFAULT_CROWN_SOURCE, help="Optional Crown-land GeoJSON path or URL")
    ap.add_argument(
        "--all-sites",
        dest="campsites_only",
        action="store_false",
        default=env_flag("CAMPSITES_ONLY", True),
        help="Map every rec site, not just those with campsites",
    )
    ap.add_argument("--latlon-fallback", action="store_true")
    ap.add_argument("--out-dir", default=DOCS_DIR)
    args = ap.parse_args(argv)

    out_dir = args.out_dir
    map_path = os.path.join(out_dir, "site_map.html")
    closures_path = os.path.join(out_dir, "closures.html")
    index_path = os.path.join(out_dir, "index.html")
    os.makedirs(out_dir, exist_ok=True)

    sites = try_load_geojson(args.sites, "rec sites")
    if sites is None:
        write_error_page(f"Could not load rec-site data from {args.sites}", map_path)
        return 0
    crown = try_load_geojson(args.crown_land, "Crown land")

    # one partition feeds the map, the report and the counts
    part = partition_features(
        sites, campsites_only=args.campsites_only, latlon_fallback=args.latlon_fallback
    )

    # 1) Map
    fmap = build_site_map(
        sites,
        crown,
        campsites_only=args.campsites_only,
        latlon_fallback=args.latlon_fallback,
        partition=part,
    )
    fmap.save(map_path)

    # 2) Closures report
    closures_html, _df = build_closure_table_html(part.closed)
    with open(closures_path, "w", encoding="utf-8") as f:
        f.write(closures_html)

    # 3) Dashboard
    scope = "Recreation sites with campsites" if args.campsites_only else "All recreation sites"
    counts = f"{len(part.open)} open, {len(part.closed)} closed"
    dash_html = (
        DASHBOARD_TEMPLATE
        .replace("__TITLE__", "BC recreation sites")
        .replace("__SCOPE__", scope)
        .replace("__COUNTS__", counts)
        .replace("__MAP__", "site_map.html")
        .replace("__CLOSURES__", "closures.html")
    )
    with open(index_path, "w", encoding="utf-8") as f:
        f.write(dash_html)

    print("Wrote:")
    print(f"  {map_path}")
    print(f"  {closures_path}")
    print(f"  {index_path}")
    return 0


if __name__ == "__main__":
    main()
