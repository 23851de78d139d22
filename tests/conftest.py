"""Shared fixtures: dataset row factory and small on-disk inputs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import pandas as pd
import pytest

INDICATOR = "Labour force participation rate (%) - Female"
DIMENSION = "Place of residence"


def _row(
    country: str,
    *,
    subgroup: str = "Urban",
    income: str = "Upper middle income",
    estimate: str = "50.4",
    indicator: str = INDICATOR,
    dimension: str = DIMENSION,
) -> Dict[str, str]:
    return {
        "setting": country,
        "indicator_name": indicator,
        "dimension": dimension,
        "subgroup": subgroup,
        "wbincome2024": income,
        "estimate": estimate,
    }


@pytest.fixture
def make_row() -> Callable[..., Dict[str, str]]:
    return _row


@pytest.fixture
def make_pair() -> Callable[..., List[Dict[str, str]]]:
    """Urban + rural rows for one country, adjacent as in the real dataset."""

    def _pair(country: str, **kwargs: Any) -> List[Dict[str, str]]:
        return [_row(country, subgroup="Urban", **kwargs), _row(country, subgroup="Rural", **kwargs)]

    return _pair


@pytest.fixture
def dataset_csv(tmp_path: Path) -> Path:
    rows = [
        _row("Russian Federation", subgroup="Urban", estimate="50.4"),
        _row("Russian Federation", subgroup="Rural", estimate="48.0"),
        _row("Viet Nam", subgroup="Urban", income="Lower middle income", estimate="70.26"),
        _row("Viet Nam", subgroup="Rural", income="Lower middle income", estimate="72.0"),
        _row("France", subgroup="Urban", income="High income", estimate="40"),
        _row("France", subgroup="Rural", income="High income", estimate="41"),
        _row("France", subgroup="Total", dimension="Sex", estimate="55"),
    ]
    path = tmp_path / "unicef-data.csv"
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


@pytest.fixture
def atlas_json(tmp_path: Path) -> Path:
    atlas = {
        "type": "Topology",
        "objects": {
            "countries": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "properties": {"name": "Russia"}},
                    {"type": "Polygon", "properties": {"name": "Vietnam"}},
                    {"type": "Polygon", "properties": {"name": "France"}},
                    {"type": "Polygon", "properties": {"name": "Greenland"}},
                ],
            }
        },
    }
    path = tmp_path / "countries-50m.json"
    path.write_text(json.dumps(atlas), encoding="utf-8")
    return path
