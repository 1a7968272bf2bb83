"""CLI tests driven through Typer's CliRunner against a site directory."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from SvgIconKit.IconLoader.cli import app
from tests.icon_loader.fakes import STAR_SVG

runner = CliRunner()

PAGE = '<p><i class="icon-star"></i><i class="icon-missing"></i><span class="icon-star"></span></p>'


@pytest.fixture
def site(tmp_path: Path) -> Path:
    icons = tmp_path / "assets" / "icons"
    icons.mkdir(parents=True)
    (icons / "star.svg").write_text(STAR_SVG, encoding="utf-8")
    (tmp_path / "index.html").write_text(PAGE, encoding="utf-8")
    return tmp_path


def test_inject_writes_output(site: Path) -> None:
    out = site / "dist" / "index.html"

    result = runner.invoke(app, ["inject", str(site / "index.html"), "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert "Processed 2 marker(s), loaded 1 icon(s)" in result.output
    html = out.read_text(encoding="utf-8")
    assert 'class="icon-star svg-icon"' in html
    assert 'class="icon-svg"' in html
    assert '<i class="icon-missing">missing</i>' in html
    assert '<span class="icon-star"></span>' in html


def test_inject_uses_external_config(site: Path) -> None:
    glyphs = site / "glyphs"
    glyphs.mkdir()
    (glyphs / "missing.svg").write_text(STAR_SVG, encoding="utf-8")
    (site / "config.json").write_text(
        json.dumps({"svgIcon": {"iconPath": "glyphs/", "iconClass": "glyph"}}), encoding="utf-8"
    )
    out = site / "out.html"

    result = runner.invoke(app, ["inject", str(site / "index.html"), "-o", str(out)])

    assert result.exit_code == 0, result.output
    html = out.read_text(encoding="utf-8")
    assert 'class="icon-missing glyph"' in html
    assert '<i class="icon-star">star</i>' in html


def test_inject_can_skip_external_config(site: Path) -> None:
    (site / "config.json").write_text(
        json.dumps({"svgIcon": {"iconPath": "glyphs/"}}), encoding="utf-8"
    )
    out = site / "out.html"

    result = runner.invoke(
        app, ["inject", str(site / "index.html"), "-o", str(out), "--no-external-config"]
    )

    assert result.exit_code == 0, result.output
    assert 'class="icon-star svg-icon"' in out.read_text(encoding="utf-8")


def test_inject_cli_overrides(site: Path) -> None:
    out = site / "out.html"

    result = runner.invoke(
        app,
        ["inject", str(site / "index.html"), "-o", str(out), "--target-tag", "span"],
    )

    assert result.exit_code == 0, result.output
    html = out.read_text(encoding="utf-8")
    assert 'class="icon-star svg-icon"' in html
    assert '<i class="icon-star"></i>' in html


def test_inject_rejects_bad_config_file(site: Path) -> None:
    bad = site / "bad.json"
    bad.write_text("{oops", encoding="utf-8")

    result = runner.invoke(app, ["inject", str(site / "index.html"), "-c", str(bad)])

    assert result.exit_code == 1
    assert "Error loading config" in result.output


def test_scan_json(site: Path) -> None:
    result = runner.invoke(app, ["scan", str(site / "index.html"), "--json"])

    assert result.exit_code == 0, result.output
    markers = json.loads(result.output)
    assert [m["icon"] for m in markers] == ["star", "missing"]
    assert markers[0]["url"] == "assets/icons/star.svg"
    assert markers[1]["classes"] == ["icon-missing"]


def test_scan_table(site: Path) -> None:
    result = runner.invoke(app, ["scan", str(site / "index.html")])

    assert result.exit_code == 0, result.output
    assert "2 marker(s)" in result.output
    assert "missing" in result.output


def test_config_defaults() -> None:
    result = runner.invoke(app, ["config", "defaults"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "iconPath": "assets/icons/",
        "iconPrefix": "icon-",
        "iconClass": "svg-icon",
        "autoInit": True,
        "cacheEnabled": True,
        "targetTag": "i",
    }


def test_config_print_merged_reads_env(tmp_path: Path) -> None:
    path = tmp_path / "icons.yaml"
    path.write_text("svgIcon:\n  iconPrefix: ico-\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["config", "print-merged"],
        env={"SVGICON_CONFIG": str(path), "SVGICON_CACHE_ENABLED": "0"},
    )

    assert result.exit_code == 0, result.output
    merged = json.loads(result.output)
    assert merged["iconPrefix"] == "ico-"
    assert merged["cacheEnabled"] is False


def test_config_export_schema(tmp_path: Path) -> None:
    out = tmp_path / "schema.json"

    result = runner.invoke(app, ["config", "export-schema", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert "iconPrefix" in json.loads(out.read_text())["properties"]
