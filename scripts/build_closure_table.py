# scripts/build_closure_table.py
# Standalone HTML report of closed rec sites (name, reason, since, comment,
# link to the official page), from the "closed" group of a partition.

import argparse
import os
import sys
from datetime import datetime, timezone
from typing import Iterable, List

import pandas as pd

from classify_sites import get_props
from closure_dates import format_closure_date
from fetch_sites import DEFAULT_SITES_SOURCE, try_load_geojson
from partition_sites import partition_features
from site_fields import is_blank, resolve_site
from site_popup import UNNAMED_SITE, clean_text, current_site_url

COLUMNS = ["name", "reason", "since", "comment", "site_id", "link"]
OUT_FILE = os.path.join("docs", "closures.html")


def closure_frame(features: Iterable[dict]) -> pd.DataFrame:
    """One row per feature; values are escaped plain text, link is a raw URL."""
    rows: List[dict] = []
    for feature in features:
        site = resolve_site(get_props(feature))
        site_id = site["site_id"]
        rows.append(
            {
                "name": clean_text(site["name"]) or UNNAMED_SITE,
                "reason": clean_text(site["closure_type"]),
                "since": clean_text(format_closure_date(site["closure_date"])),
                "comment": clean_text(site["closure_comment"]),
                "site_id": "" if is_blank(site_id) else clean_text(site_id),
                "link": "" if is_blank(site_id) else current_site_url(site_id),
            }
        )

    df = pd.DataFrame(rows, columns=COLUMNS)
    if df.empty:
        return df
    return df.sort_values("name", key=lambda s: s.str.lower(), kind="stable").reset_index(drop=True)


def _row_html(r: pd.Series) -> str:
    if r["link"]:
        name_cell = f'<a href="{r["link"]}" target="_blank" rel="noopener">{r["name"]}</a>'
    else:
        name_cell = r["name"]
    comment = r["comment"] or '<span class="muted">-</span>'
    return (
        "<tr>"
        f"<td class='name'>{name_cell}</td>"
        f"<td>{r['reason']}</td>"
        f"<td class='since'>{r['since']}</td>"
        f"<td>{comment}</td>"
        "</tr>"
    )


def build_closure_table_html(features: Iterable[dict]) -> tuple[str, pd.DataFrame]:
    df = closure_frame(features)
    updated = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")

    if df.empty:
        body = '<p class="muted">No closed sites in the current data.</p>'
    else:
        body_rows = "\n".join(_row_html(r) for _, r in df.iterrows())
        body = f"""<table id="closureTable">
      <thead>
        <tr><th>Site</th><th>Reason</th><th>Since</th><th>Comment</th></tr>
      </thead>
      <tbody>
{body_rows}
      </tbody>
    </table>"""

    page = f"""<!doctype html>
<meta charset="utf-8">
<title>BC recreation sites - closures</title>
<meta http-equiv="Cache-Control" content="no-cache, no-store, must-revalidate"/>
<meta http-equiv="Pragma" content="no-cache"/>
<meta http-equiv="Expires" content="0"/>
<style>
  body {{ margin:0; padding:24px; font:14px/1.4 -apple-system,BlinkMacSystemFont,"Segoe UI",Roboto,Arial,sans-serif; background:#f6f8fb; }}
  .wrap {{ max-width:1100px; margin:0 auto; }}
  .card {{ background:#fff; border-radius:12px; box-shadow:0 4px 20px rgba(0,0,0,.08); padding:20px; }}
  h1 {{ margin:0 0 12px 0; font-size:20px; }}
  .row {{ display:flex; gap:16px; align-items:center; flex-wrap:wrap; }}
  .muted {{ color:#6b7785; font-size:12px; }}
  table {{ width:100%; border-collapse:collapse; margin-top:14px; font-size:13px; }}
  thead th {{ text-align:left; font-weight:600; padding:6px 8px; border-bottom:1px solid #ddd; background:#fafbfc; }}
  tbody td {{ padding:6px 8px; border-bottom:1px solid #eee; vertical-align:top; }}
  td.name {{ font-weight:600; }}
  td.since {{ white-space:nowrap; }}
  a {{ color:#b91c1c; }}
</style>

<div class="wrap">
  <div class="card">
    <div class="row">
      <h1>Closed recreation sites ({len(df)})</h1>
      <div class="muted">Last updated: {updated}</div>
    </div>
    {body}
  </div>
</div>
"""
    return page, df


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Write the closed-sites report")
    ap.add_argument("--sites", default=DEFAULT_SITES_SOURCE)
    ap.add_argument("--all-sites", action="store_true", help="Include closed sites without campsites")
    ap.add_argument("--out", default=OUT_FILE)
    a = ap.parse_args(argv)

    data = try_load_geojson(a.sites, "rec sites")
    if data is None:
        print("ERROR building closures report: no rec-site data from", a.sites, file=sys.stderr)
        return 0

    part = partition_features(data, campsites_only=not a.all_sites)
    html, _df = build_closure_table_html(part.closed)
    os.makedirs(os.path.dirname(a.out) or ".", exist_ok=True)
    with open(a.out, "w", encoding="utf-8") as f:
        f.write(html)
    print("Wrote", a.out, f"({len(part.closed)} closed sites)")
    return 0


if __name__ == "__main__":
    sys.exit(main())

