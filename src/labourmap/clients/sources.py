# src/labourmap/clients/sources.py

"""
Loaders for the two inputs of the map: the dataset CSV and the world-atlas TopoJSON.

Design goals:
- Keep *all* fetch details here; the pipeline only ever sees a list of dicts.
- A source is either an http(s) URL or a local file path.
- Any failure is fatal and surfaces as SourceLoadError. No partial results.
"""

from __future__ import annotations
import io
import json
import logging
from pathlib import Path
from typing import Dict, List

import httpx
import pandas as pd
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from labourmap.config import DEFAULT_HTTP_TIMEOUT
from labourmap.errors import SourceLoadError
from labourmap.models import RawRecord

log = logging.getLogger(__name__)


# ---- Internal helpers ---------------------------------------------------------

def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _default_headers() -> Dict[str, str]:
    return {"User-Agent": "labour-map/0.1"}


@retry(
    # wait 1s, 2s, 4s ... up to 16s between attempts; give up after 5
    wait=wait_exponential(min=1, max=16),
    stop=stop_after_attempt(5),
    retry=retry_if_exception_type(httpx.HTTPError),
    reraise=True,
)
def _get_text(url: str, timeout: float) -> str:
    with httpx.Client(timeout=timeout, headers=_default_headers(), follow_redirects=True) as client:
        resp = client.get(url)
        resp.raise_for_status()  # raises httpx.HTTPStatusError for 4xx/5xx
        return resp.text


def _read_text(source: str, timeout: float) -> str:
    try:
        if _is_url(source):
            log.info("fetching %s", source)
            return _get_text(source, timeout)
        return Path(source).read_text(encoding="utf-8")
    except (httpx.HTTPError, OSError, UnicodeDecodeError) as e:
        raise SourceLoadError(f"Error loading data from {source}: {e}") from e


# ---- Public API ---------------------------------------------------------------

def load_rows(source: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> List[RawRecord]:
    """
    Read the dataset CSV into a list of row dicts.

    Every column stays a string and empty cells become "" (not NaN), so the
    pipeline decides what is missing, not pandas.
    """
    text = _read_text(source, timeout)
    try:
        df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise SourceLoadError(f"Could not parse CSV from {source}: {e}") from e
    return df.to_dict(orient="records")  # type: ignore[return-value]


def load_atlas(source: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> Dict:
    """Read the TopoJSON world atlas and check it has a `countries` object."""
    text = _read_text(source, timeout)
    try:
        atlas = json.loads(text)
    except json.JSONDecodeError as e:
        raise SourceLoadError(f"Could not parse JSON from {source}: {e}") from e
    objects = atlas.get("objects") if isinstance(atlas, dict) else None
    if not isinstance(objects, dict) or not isinstance(objects.get("countries"), dict):
        raise SourceLoadError(f"{source} has no objects.countries; is it a world-atlas file?")
    return atlas


def atlas_country_names(atlas: Dict) -> List[str]:
    """Names of every country geometry, in atlas order (unnamed ones skipped)."""
    geometries = atlas["objects"]["countries"].get("geometries") or []
    names: List[str] = []
    for g in geometries:
        name = (g.get("properties") or {}).get("name")
        if name:
            names.append(name)
    return names
