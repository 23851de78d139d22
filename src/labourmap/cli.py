# src/labourmap/cli.py
"""
Command-line interface for the labour-force map data.

This module provides CLI commands to:
- Run the normalization pipeline over the dataset CSV and show the result
- Compute the fill colour of every atlas country for a palette
- Show the legend and tooltips the map front end displays
- Debug the country-name table and the urban/rural row pairing
"""

from dotenv import load_dotenv
load_dotenv(override=True)  # automatically looks for a .env file in the project root

import json
import logging
from typing import List, Optional

import typer

from labourmap import config
from labourmap.clients.sources import atlas_country_names, load_atlas, load_rows
from labourmap.errors import LabourMapError
from labourmap.io.export import write_fills
from labourmap.models import PipelineResult, RawRecord
from labourmap.pipeline.dedup import find_unpaired
from labourmap.pipeline.normalize import run_pipeline
from labourmap.render.colours import (
    PaletteCycle,
    assign_fills,
    build_country_lookup,
    build_tooltip_lookup,
    legend_cells,
    tooltip_text,
)
from labourmap.render.matching import suggest_name, unmatched_countries

# Typer app instance for CLI commands
app = typer.Typer(help="Female labour-force participation map data")


def _data_opt():
    return typer.Option(None, "--data", help="Dataset CSV (URL or path); default $LABOURMAP_DATA_URL")


def _atlas_opt():
    return typer.Option(None, "--atlas", help="world-atlas TopoJSON (URL or path); default $LABOURMAP_ATLAS_URL")


def _palette_opt():
    return typer.Option("0", "--palette", help="Palette name (BuRd, PuBu, PuYe) or index")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---- helpers ------------------------------------------------------------------

def _fail(e: Exception) -> typer.Exit:
    typer.echo(str(e), err=True)
    return typer.Exit(code=1)


def _rows(data: Optional[str]) -> List[RawRecord]:
    try:
        return load_rows(data or config.data_source(), timeout=config.http_timeout())
    except LabourMapError as e:
        raise _fail(e)


def _geometry_names(atlas: Optional[str]) -> List[str]:
    try:
        return atlas_country_names(load_atlas(atlas or config.atlas_source(), timeout=config.http_timeout()))
    except LabourMapError as e:
        raise _fail(e)


def _pipeline(data: Optional[str]) -> PipelineResult:
    return run_pipeline(_rows(data))


def _palette(key: str) -> PaletteCycle:
    cycle = PaletteCycle()
    try:
        cycle.select(key)
    except KeyError:
        raise typer.BadParameter(
            f"unknown palette {key!r}; choose one of {', '.join(config.PALETTES)} or an index",
            param_hint="--palette",
        )
    return cycle


# ---- commands -----------------------------------------------------------------

@app.command()
def normalize(
    data: Optional[str] = _data_opt(),
    limit: int = typer.Option(0, "--limit", help="Only print the first N bucketed rows (0 = all)"),
):
    """
    Dataset CSV → filter → urban/rural dedup → tertiles; print counts and rows as JSON.
    """
    rows = _rows(data)
    result = run_pipeline(rows)
    bucketed = list(result.bucketed)
    typer.echo(json.dumps({
        "rows": len(rows),
        "filtered": len(result.filtered),
        "deduped": len(result.deduped),
        "bucketed": len(bucketed),
        "records": bucketed[:limit] if limit else bucketed,
    }, indent=2, ensure_ascii=False))


@app.command()
def fills(
    data: Optional[str] = _data_opt(),
    atlas: Optional[str] = _atlas_opt(),
    palette: str = _palette_opt(),
    out: Optional[str] = typer.Option(None, "--out", help="Write to .csv or .json instead of printing"),
):
    """
    Fill colour for every country in the atlas. Countries without data get the neutral colour.
    """
    cycle = _palette(palette)
    result = _pipeline(data)
    names = _geometry_names(atlas)
    colours = assign_fills(names, build_country_lookup(result.bucketed), cycle.current)

    if out:
        try:
            written = write_fills(colours, out, cycle.name)
        except (ValueError, OSError) as e:
            raise _fail(e)
        typer.echo(f"Wrote {written} countries to {out} ({cycle.name}).")
        return

    typer.echo(json.dumps({"palette": cycle.name, "fills": colours}, indent=2, ensure_ascii=False))


@app.command()
def legend(palette: str = _palette_opt()):
    """
    Print the 3 x 3 legend cells of a palette (income tertile, labour tertile, colour).
    """
    cycle = _palette(palette)
    typer.echo(json.dumps({
        "palette": cycle.name,
        "cells": [{"income": inc, "labour": lab, "colour": colour} for inc, lab, colour in legend_cells(cycle.current)],
    }, indent=2))


@app.command()
def tooltip(country: str, data: Optional[str] = _data_opt()):
    """
    Show the hover tooltip for a country (display name, case-insensitive).
    """
    result = _pipeline(data)
    lookup = build_tooltip_lookup(result.deduped)
    text = tooltip_text(country, lookup)
    if text is None:
        guess = suggest_name(country, [r["display_country"] for r in result.deduped])
        hint = f" Did you mean {guess!r}?" if guess else ""
        typer.echo(f"No data for {country!r}.{hint}", err=True)
        raise typer.Exit(code=1)
    typer.echo(text)


@app.command()
def check_names(
    data: Optional[str] = _data_opt(),
    atlas: Optional[str] = _atlas_opt(),
    threshold: int = typer.Option(80, "--threshold", help="Fuzzy match threshold 0-100"),
):
    """
    Debug: list dataset countries that match no atlas geometry, with a suggested atlas name.
    """
    result = _pipeline(data)
    names = _geometry_names(atlas)
    missing = unmatched_countries(
        (r["display_country"] for r in result.bucketed), names, score_cutoff=threshold,
    )
    typer.echo(json.dumps({"unmatched": len(missing), "suggestions": missing}, indent=2, ensure_ascii=False))


@app.command()
def check_pairs(data: Optional[str] = _data_opt()):
    """
    Debug: list filtered rows whose urban/rural partner is not the same country.
    """
    result = _pipeline(data)
    problems = find_unpaired(result.filtered)
    typer.echo(json.dumps({
        "filtered": len(result.filtered),
        "unpaired": {str(i): reason for i, reason in sorted(problems.items())},
    }, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
