# src/labourmap/render/colours.py
"""
The data side of drawing the map: which colour each country gets, what the
legend cells are, and what the hover tooltip says. Actually drawing SVG is
left to whatever front end consumes these.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from labourmap.config import NEUTRAL_COLOUR, PALETTES, Palette
from labourmap.models import BucketedRecord, DedupedRecord

TertilePair = Tuple[int, int]


def build_country_lookup(bucketed: Iterable[BucketedRecord]) -> Dict[str, TertilePair]:
    """Lower-cased display name -> (income, labour). Later rows overwrite earlier ones."""
    return {
        r["display_country"].lower(): (r["income_tertile"], r["labour_tertile"])
        for r in bucketed
    }


def build_tooltip_lookup(deduped: Iterable[DedupedRecord]) -> Dict[str, DedupedRecord]:
    return {r["display_country"].lower(): r for r in deduped}


def colour_for(country: str, lookup: Mapping[str, TertilePair], palette: Palette) -> str:
    """
    Palette cell for a country, or the neutral colour when the country has no
    data or its tertiles point outside the palette.
    """
    pair = lookup.get(country.lower())
    if pair is None:
        return NEUTRAL_COLOUR
    income, labour = pair
    if not (0 <= income < len(palette)) or not (0 <= labour < len(palette[income])):
        return NEUTRAL_COLOUR
    return palette[income][labour]


def assign_fills(names: Iterable[str], lookup: Mapping[str, TertilePair], palette: Palette) -> Dict[str, str]:
    return {name: colour_for(name, lookup, palette) for name in names}


def legend_cells(palette: Palette) -> List[Tuple[int, int, str]]:
    """The 3x3 legend as (income tertile, labour tertile, colour), row by row."""
    return [
        (income, labour, colour)
        for income, row in enumerate(palette)
        for labour, colour in enumerate(row)
    ]


def tooltip_text(name: str, tooltip_lookup: Mapping[str, DedupedRecord]) -> Optional[str]:
    rec = tooltip_lookup.get(name.lower())
    if rec is None:
        return None
    return f"{name}\nIncome: {rec['income_label']}\nLabour: {rec['labour_rate']}%"


class PaletteCycle:
    """
    Steps through the palettes in order, wrapping around at the end.
    Each click on the map calls `advance()`.
    """

    def __init__(self, palettes: Optional[Mapping[str, Palette]] = None, start: int = 0):
        palettes = PALETTES if palettes is None else palettes
        if not palettes:
            raise ValueError("PaletteCycle needs at least one palette")
        self._names: Sequence[str] = list(palettes)
        self._palettes = dict(palettes)
        self.index = start % len(self._names)

    @property
    def name(self) -> str:
        return self._names[self.index]

    @property
    def current(self) -> Palette:
        return self._palettes[self.name]

    def advance(self) -> Palette:
        self.index = (self.index + 1) % len(self._names)
        return self.current

    def select(self, key: str) -> Palette:
        """Jump to a palette by name (case-insensitive) or by position."""
        if key.isdigit():
            pos = int(key)
            if pos >= len(self._names):
                raise KeyError(key)
            self.index = pos
            return self.current
        for i, n in enumerate(self._names):
            if n.lower() == key.lower():
                self.index = i
                return self.current
        raise KeyError(key)
