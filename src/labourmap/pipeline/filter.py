# src/labourmap/pipeline/filter.py
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, List, Optional

from labourmap.config import LABOUR_INDICATOR, RESIDENCE_DIMENSION
from labourmap.models import FilteredRecord, RawRecord


def parse_rate(raw: Optional[str]) -> float:
    """
    Parse a percentage estimate and round it to one decimal place, ties up.
    Anything that is not a finite number comes back as NaN; stage 3 drops those rows.
    """
    if raw is None or (isinstance(raw, str) and "_" in raw):
        return math.nan
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return math.nan
    if not math.isfinite(value):
        return math.nan
    # quantize the exact binary value, so "50.25" -> 50.3
    try:
        return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:  # too many digits to quantize
        return math.nan


def filter_labour_rows(rows: Iterable[RawRecord]) -> List[FilteredRecord]:
    """
    Keep only female labour-force rows broken down by place of residence.
    Rows are plain dicts; input order is preserved.
    """
    out: List[FilteredRecord] = []
    for r in rows:
        if r.get("indicator_name") != LABOUR_INDICATOR:
            continue
        if r.get("dimension") != RESIDENCE_DIMENSION:
            continue
        out.append({
            "country": r.get("setting", ""),
            "residence": r.get("subgroup", ""),
            "income_label": r.get("wbincome2024"),
            "labour_rate": parse_rate(r.get("estimate")),
        })
    return out
