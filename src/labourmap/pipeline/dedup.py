# src/labourmap/pipeline/dedup.py
"""
Stage 2: collapse each urban/rural pair into a single row per country.

The dataset lists both residence variants of a country on adjacent rows, so
the pair is identified purely by position: rows 0, 2, 4, ... of the filtered
sequence are kept and their partners dropped. Nothing checks the partner is
really the same country; `find_unpaired` exists so callers can warn when that
assumption breaks.
"""

from typing import Dict, List, Mapping, Sequence

from labourmap.models import DedupedRecord, FilteredRecord


def remap_country(name: str, country_names: Mapping[str, str]) -> str:
    """Dataset name -> display name; names without an entry pass through."""
    return country_names.get(name, name)


def keep_first_of_pairs(
    filtered: Sequence[FilteredRecord],
    country_names: Mapping[str, str],
) -> List[DedupedRecord]:
    out: List[DedupedRecord] = []
    for i, rec in enumerate(filtered):
        if i % 2 != 0:
            continue
        income = rec.get("income_label")
        if not income:  # None or ""
            continue
        out.append({
            "display_country": remap_country(rec["country"], country_names),
            "income_label": income,
            "labour_rate": rec["labour_rate"],
        })
    return out


def find_unpaired(filtered: Sequence[FilteredRecord]) -> Dict[int, str]:
    """
    Return {pair start index: reason} for every pair that is not two rows of
    the same country. An odd-length sequence leaves a trailing single row.
    """
    problems: Dict[int, str] = {}
    for i in range(0, len(filtered), 2):
        first = filtered[i]["country"]
        if i + 1 >= len(filtered):
            problems[i] = f"{first!r} has no partner row"
            continue
        second = filtered[i + 1]["country"]
        if first != second:
            problems[i] = f"{first!r} is paired with {second!r}"
    return problems
