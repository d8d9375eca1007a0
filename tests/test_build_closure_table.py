"""
Closed-sites report and the combined runner.
"""

import json

from bs4 import BeautifulSoup

import build_closure_table
import build_map
import partition_sites
import run_all
from build_closure_table import COLUMNS, build_closure_table_html, closure_frame
from partition_sites import partition_features


class TestClosureFrame:
    def test_rows_sorted_by_name(self, five_sites):
        part = partition_features(five_sites, campsites_only=False)
        df = closure_frame(part.closed)
        assert list(df.columns) == COLUMNS
        assert df["name"].tolist() == ["Closed A", "Closed B", "Day use"]

    def test_link_only_with_site_id(self):
        features = [
            {"properties": {"PROJECT_NAME": "b site", "CLOSR_IND": "Y", "F_FILE_ID": "REC1"}},
            {"properties": {"PROJECT_NAME": "A site", "CLOSR_IND": "Y"}},
        ]
        df = closure_frame(features)
        assert df["name"].tolist() == ["A site", "b site"]
        assert df["link"].tolist() == ["", "https://beta.sitesandtrailsbc.ca/resource/REC1"]

    def test_empty(self):
        df = closure_frame([])
        assert df.empty
        assert list(df.columns) == COLUMNS


class TestClosureTableHtml:
    def test_table_rows(self, five_sites):
        part = partition_features(five_sites, campsites_only=True)
        page, df = build_closure_table_html(part.closed)
        soup = BeautifulSoup(page, "lxml")
        rows = soup.select("#closureTable tbody tr")
        assert len(rows) == len(df) == 2
        assert "Closed recreation sites (2)" in soup.get_text()

    def test_no_closures_message(self):
        page, df = build_closure_table_html([])
        assert df.empty
        assert "No closed sites" in page

    def test_plain_ascii_placeholders(self):
        page, _df = build_closure_table_html(
            [{"properties": {"PROJECT_NAME": "No comment", "CLOSR_IND": "Y"}}]
        )
        assert "\u2014" not in page
        assert "<title>BC recreation sites - closures</title>" in page
        assert '<span class="muted">-</span>' in page


class TestClosureMain:
    def test_writes_report(self, tmp_path, five_sites):
        src = tmp_path / "sites.geojson"
        src.write_text(json.dumps(five_sites), encoding="utf-8")
        out = tmp_path / "out" / "closures.html"
        assert build_closure_table.main(["--sites", str(src), "--out", str(out)]) == 0
        assert "Closed recreation sites (2)" in out.read_text(encoding="utf-8")

    def test_missing_primary_exits_cleanly(self, tmp_path, capsys):
        out = tmp_path / "closures.html"
        assert build_closure_table.main(["--sites", str(tmp_path / "none.geojson"), "--out", str(out)]) == 0
        assert "ERROR building closures report" in capsys.readouterr().err
        assert not out.exists()


class TestRunAll:
    def test_writes_all_outputs(self, tmp_path, five_sites, crown_land):
        sites = tmp_path / "sites.geojson"
        crown = tmp_path / "crown.geojson"
        sites.write_text(json.dumps(five_sites), encoding="utf-8")
        crown.write_text(json.dumps(crown_land), encoding="utf-8")
        out_dir = tmp_path / "docs"

        run_all.main(["--sites", str(sites), "--crown-land", str(crown), "--out-dir", str(out_dir)])

        for name in ("site_map.html", "closures.html", "index.html"):
            assert (out_dir / name).exists()
        index = (out_dir / "index.html").read_text(encoding="utf-8")
        assert "2 open, 2 closed" in index
        assert 'src="site_map.html"' in index

    def test_missing_primary(self, tmp_path):
        out_dir = tmp_path / "docs"
        assert run_all.main(["--sites", str(tmp_path / "none.geojson"), "--out-dir", str(out_dir)]) == 0
        assert "temporarily unavailable" in (out_dir / "site_map.html").read_text(encoding="utf-8")
        assert not (out_dir / "index.html").exists()

    def test_partitions_once(self, tmp_path, five_sites, monkeypatch):
        sites = tmp_path / "sites.geojson"
        sites.write_text(json.dumps(five_sites), encoding="utf-8")
        calls = []

        def counting(*args, **kwargs):
            calls.append(1)
            return partition_sites.partition_features(*args, **kwargs)

        monkeypatch.setattr(run_all, "partition_features", counting)
        monkeypatch.setattr(build_map, "partition_features", counting)
        run_all.main(["--sites", str(sites), "--out-dir", str(tmp_path / "docs")])
        assert len(calls) == 1
