# src/labourmap/models.py
"""
Lightweight typed dictionaries for the rows flowing through the pipeline,
from the raw dataset row to the bucketed record the map colours are read from.

Everything is a plain dict with type hints, except PipelineResult which is an
immutable tuple of the three stage outputs.
"""

from typing import NamedTuple, Optional, Tuple, TypedDict


class RawRecord(TypedDict, total=False):
    """
    One row of the socioeconomic dataset, exactly as read from the CSV.

    Notes:
    - Keys are the dataset's own column names (a contract with the CSV).
    - All values are strings; nothing is parsed or validated yet.
    - Extra columns in the CSV are simply carried along and ignored.
    """

    # Country / setting name as the dataset spells it
    setting: str

    # e.g. "Labour force participation rate (%) - Female"
    indicator_name: str

    # e.g. "Place of residence"
    dimension: str

    # e.g. "Urban" / "Rural"
    subgroup: str

    # World Bank income group label, may be empty
    wbincome2024: Optional[str]

    # Percentage estimate, still a string
    estimate: str


class FilteredRecord(TypedDict):
    country: str
    residence: str
    income_label: Optional[str]
    # rounded to one decimal place; NaN when the estimate did not parse
    labour_rate: float


class DedupedRecord(TypedDict):
    display_country: str
    income_label: str
    labour_rate: float


class BucketedRecord(TypedDict):
    display_country: str
    income_tertile: int
    labour_tertile: int


class PipelineResult(NamedTuple):
    """All three stage outputs of one pipeline run (tooltips need the middle one)."""

    filtered: Tuple[FilteredRecord, ...]
    deduped: Tuple[DedupedRecord, ...]
    bucketed: Tuple[BucketedRecord, ...]
