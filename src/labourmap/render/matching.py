# src/labourmap/render/matching.py
"""
Find dataset countries that will never be coloured because the atlas spells
them differently, and suggest the closest atlas name for each.
Used to maintain COUNTRY_NAMES.
"""

from typing import Dict, Iterable, List, Optional

from rapidfuzz import fuzz, process


def suggest_name(name: str, candidates: List[str], score_cutoff: int = 80) -> Optional[str]:
    """Best fuzzy match for `name` among `candidates`, or None below the cutoff."""
    if not name or not candidates:
        return None
    best = process.extractOne(
        name.lower(),
        [c.lower() for c in candidates],  # compare case-insensitively
        scorer=fuzz.WRatio,
        score_cutoff=score_cutoff,
    )
    if not best:
        return None
    _matched, _score, idx = best
    return candidates[idx]


def unmatched_countries(
    display_names: Iterable[str],
    geometry_names: Iterable[str],
    score_cutoff: int = 80,
) -> Dict[str, Optional[str]]:
    """
    {dataset display name: suggested atlas name or None} for every name that
    has no case-insensitive match in the atlas. Insertion order follows input.
    """
    geo = list(dict.fromkeys(geometry_names))
    known = {g.lower() for g in geo}
    out: Dict[str, Optional[str]] = {}
    for name in display_names:
        if name.lower() in known or name in out:
            continue
        out[name] = suggest_name(name, geo, score_cutoff=score_cutoff)
    return out
