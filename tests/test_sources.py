"""Unit tests for the CSV / TopoJSON loaders (no network)."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from labourmap.clients import sources
from labourmap.errors import SourceLoadError


def test_load_rows_from_path_keeps_strings(dataset_csv: Path) -> None:
    rows = sources.load_rows(str(dataset_csv))
    assert len(rows) == 7
    assert rows[0]["setting"] == "Russian Federation"
    assert rows[0]["estimate"] == "50.4"
    assert rows[4]["estimate"] == "40"


def test_load_rows_empty_cells_are_empty_strings(tmp_path: Path) -> None:
    path = tmp_path / "d.csv"
    path.write_text(
        "setting,indicator_name,dimension,subgroup,wbincome2024,estimate\n"
        "Chad,x,y,Urban,,NA\n",
        encoding="utf-8",
    )
    rows = sources.load_rows(str(path))
    assert rows == [{
        "setting": "Chad", "indicator_name": "x", "dimension": "y",
        "subgroup": "Urban", "wbincome2024": "", "estimate": "NA",
    }]


def test_load_rows_from_url(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def fake_get_text(url: str, timeout: float) -> str:
        seen["url"] = url
        seen["timeout"] = timeout
        return "setting,estimate\nChad,12\n"

    monkeypatch.setattr(sources, "_get_text", fake_get_text)
    rows = sources.load_rows("https://example.com/data.csv", timeout=3)

    assert rows == [{"setting": "Chad", "estimate": "12"}]
    assert seen == {"url": "https://example.com/data.csv", "timeout": 3}


def test_network_failure_is_a_load_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(url: str, timeout: float) -> str:
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(sources, "_get_text", boom)
    with pytest.raises(SourceLoadError, match="connection refused"):
        sources.load_rows("https://example.com/data.csv")


def test_missing_file_is_a_load_error(tmp_path: Path) -> None:
    with pytest.raises(SourceLoadError):
        sources.load_rows(str(tmp_path / "nope.csv"))


def test_empty_csv_is_a_load_error(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(SourceLoadError):
        sources.load_rows(str(path))


def test_load_atlas_and_names(atlas_json: Path) -> None:
    atlas = sources.load_atlas(str(atlas_json))
    assert sources.atlas_country_names(atlas) == ["Russia", "Vietnam", "France", "Greenland"]


def test_atlas_names_skip_unnamed_geometries() -> None:
    atlas = {"objects": {"countries": {"geometries": [{"properties": {}}, {"properties": {"name": "Chad"}}, {}]}}}
    assert sources.atlas_country_names(atlas) == ["Chad"]


def test_atlas_without_countries_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "land.json"
    path.write_text(json.dumps({"type": "Topology", "objects": {"land": {}}}), encoding="utf-8")
    with pytest.raises(SourceLoadError, match="objects.countries"):
        sources.load_atlas(str(path))


def test_malformed_atlas_json_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SourceLoadError):
        sources.load_atlas(str(path))


def test_get_text_retries_then_returns(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] == 1:
            return httpx.Response(503)
        return httpx.Response(200, text="ok")

    real_client = httpx.Client

    def fake_client(*args, **kwargs):
        return real_client(*args, transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(sources.httpx, "Client", fake_client)
    monkeypatch.setattr(sources._get_text.retry, "sleep", lambda _seconds: None)

    assert sources._get_text("https://example.com/x", 5) == "ok"
    assert calls["n"] == 2


def test_non_utf8_file_is_a_load_error(tmp_path: Path) -> None:
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"setting,estimate\nCura\xe7ao,12\n")
    with pytest.raises(SourceLoadError, match="Error loading data"):
        sources.load_rows(str(path))


def test_atlas_countries_must_be_an_object(tmp_path: Path) -> None:
    path = tmp_path / "odd.json"
    path.write_text(json.dumps({"objects": {"countries": ["Russia"]}}), encoding="utf-8")
    with pytest.raises(SourceLoadError, match="objects.countries"):
        sources.load_atlas(str(path))
