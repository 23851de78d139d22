# src/labourmap/config.py
"""
Static configuration: lookup tables, thresholds, palettes and data sources.

The tables are bundled into `Tables` and handed to the pipeline, so tests can
run it against small synthetic tables instead of these.
"""

from __future__ import annotations
import os
from typing import Callable, Dict, List, NamedTuple

from labourmap.errors import LabourMapError

# ---- Dataset filter literals --------------------------------------------------

LABOUR_INDICATOR = "Labour force participation rate (%) - Female"
RESIDENCE_DIMENSION = "Place of residence"

# ---- Lookup tables ------------------------------------------------------------

# Dataset country name -> name used by the world-atlas geometry
COUNTRY_NAMES: Dict[str, str] = {
    "Bolivia (Plurinational State of)": "Bolivia",
    "Bosnia and Herzegovina": "Bosnia and Herz.",
    "Brunei Darussalam": "Brunei",
    "Central African Republic": "Central African Rep.",
    "Democratic People's Republic of Korea": "North Korea",
    "Democratic Republic of the Congo": "Dem. Rep. Congo",
    "Dominican Republic": "Dominican Rep.",
    "Equatorial Guinea": "Eq. Guinea",
    "Iran (Islamic Republic of)": "Iran",
    "Lao People's Democratic Republic": "Laos",
    "Netherlands (Kingdom of the)": "Netherlands",
    "North Macedonia": "Macedonia",
    "occupied Palestinian territory": "Palestine",
    "Republic of Korea": "South Korea",
    "Republic of Moldova": "Moldova",
    "Russian Federation": "Russia",
    "Saint Vincent and the Grenadines": "St. Vin. and Gren.",
    "Sao Tome and Principe": "São Tomé and Principe",
    "Solomon Islands": "Solomon Is.",
    "South Sudan": "S. Sudan",
    "Syrian Arab Republic": "Syria",
    "The United Kingdom": "United Kingdom",
    "Türkiye": "Turkey",
    "United Republic of Tanzania": "Tanzania",
    "Viet Nam": "Vietnam",
}

# Four World Bank groups squeezed into three tertiles (both lower groups -> 0)
INCOME_TERTILES: Dict[str, int] = {
    "Low income": 0,
    "Lower middle income": 0,
    "Upper middle income": 1,
    "High income": 2,
}

LOW_LABOUR_MAX = 45.0
MID_LABOUR_MAX = 58.0


def labour_tertile(rate: float) -> int:
    """
    Bucket a participation rate (percent) into 0 / 1 / 2.
    Boundaries belong to the lower bucket: 45.0 -> 0, 58.0 -> 1.
    """
    if rate <= LOW_LABOUR_MAX:
        return 0
    if rate <= MID_LABOUR_MAX:
        return 1
    return 2


class Tables(NamedTuple):
    country_names: Dict[str, str]
    income_tertiles: Dict[str, int]
    labour_tertile: Callable[[float], int]


DEFAULT_TABLES = Tables(COUNTRY_NAMES, INCOME_TERTILES, labour_tertile)

# ---- Palettes -----------------------------------------------------------------

# Each palette is indexed [income_tertile][labour_tertile]
Palette = List[List[str]]

PALETTES: Dict[str, Palette] = {
    "BuRd": [
        ["#c1b1c4", "#e39db2", "#d1607e"],
        ["#9ed0de", "#a1819b", "#a65061"],
        ["#64acbe", "#627f8c", "#785664"],
    ],
    "PuBu": [
        ["#c1c6db", "#ace4e4", "#5ac8c8"],
        ["#dfb0d6", "#a5add3", "#5698b9"],
        ["#be64ac", "#8c62aa", "#3b4994"],
    ],
    "PuYe": [
        ["#c7bcb5", "#e4d9ac", "#c8b35a"],
        ["#cbb8d7", "#c8ada0", "#af8e53"],
        ["#9972af", "#976b82", "#804d36"],
    ],
}

# Fill for countries with no data
NEUTRAL_COLOUR = "#dee3e3"

# ---- Data sources (env overridable; the CLI loads .env first) -----------------

DEFAULT_DATA_SOURCE = "assets/unicef-data.csv"
DEFAULT_ATLAS_SOURCE = "https://cdn.jsdelivr.net/npm/world-atlas@2/countries-50m.json"
DEFAULT_HTTP_TIMEOUT = 20.0


def data_source() -> str:
    return os.getenv("LABOURMAP_DATA_URL") or DEFAULT_DATA_SOURCE


def atlas_source() -> str:
    return os.getenv("LABOURMAP_ATLAS_URL") or DEFAULT_ATLAS_SOURCE


def http_timeout() -> float:
    raw = os.getenv("LABOURMAP_HTTP_TIMEOUT", "")
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        raise LabourMapError(f"LABOURMAP_HTTP_TIMEOUT must be a number of seconds, got {raw!r}")
