# src/labourmap/io/export.py
from __future__ import annotations
from pathlib import Path
from typing import Dict

import pandas as pd


def fills_frame(fills: Dict[str, str], palette_name: str) -> pd.DataFrame:
    return pd.DataFrame(
        [{"country": name, "fill": colour, "palette": palette_name} for name, colour in fills.items()],
        columns=["country", "fill", "palette"],
    )


def write_fills(fills: Dict[str, str], path: str | Path, palette_name: str) -> int:
    """
    Write one row per atlas country to CSV or JSON (picked by file suffix).
    - Parent directories must already exist.
    - Returns number of rows written.
    """
    path = Path(path)
    df = fills_frame(fills, palette_name)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        df.to_csv(path, index=False)
    elif suffix == ".json":
        df.to_json(path, orient="records", indent=2, force_ascii=False)
    else:
        raise ValueError(f"Unsupported output format {suffix!r}; use .csv or .json")
    return len(df)
