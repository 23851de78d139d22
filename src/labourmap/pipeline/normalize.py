# src/labourmap/pipeline/normalize.py
"""
Turn raw dataset rows into (country, income tertile, labour tertile) records.

Three stages, each a plain function returning a new list:
1. filter_labour_rows   - keep the female labour / place-of-residence rows
2. keep_first_of_pairs  - one row per urban/rural pair, display country names
3. bucket_tertiles      - income label and labour rate -> 0/1/2

Nothing is cached between calls: every run starts from empty lists.
"""
import logging
import math
from typing import Iterable, List, Optional, Sequence

from labourmap.config import DEFAULT_TABLES, Tables
from labourmap.models import BucketedRecord, DedupedRecord, PipelineResult, RawRecord
from labourmap.pipeline.dedup import find_unpaired, keep_first_of_pairs
from labourmap.pipeline.filter import filter_labour_rows

log = logging.getLogger(__name__)


def bucket_tertiles(deduped: Sequence[DedupedRecord], tables: Tables = DEFAULT_TABLES) -> List[BucketedRecord]:
    """
    Map each record to its income and labour tertile.

    Rows with an income label outside the table, or with an unparseable rate,
    are dropped (and logged) instead of being guessed into tertile 0.
    """
    out: List[BucketedRecord] = []
    for rec in deduped:
        country = rec["display_country"]
        income: Optional[int] = tables.income_tertiles.get(rec["income_label"])
        if income is None:
            log.warning("dropping %s: unknown income group %r", country, rec["income_label"])
            continue
        rate = rec["labour_rate"]
        if math.isnan(rate):
            log.warning("dropping %s: labour rate is not a number", country)
            continue
        out.append({
            "display_country": country,
            "income_tertile": income,
            "labour_tertile": tables.labour_tertile(rate),
        })
    return out


def run_pipeline(rows: Iterable[RawRecord], tables: Tables = DEFAULT_TABLES) -> PipelineResult:
    """Run all three stages and keep every intermediate result."""
    filtered = filter_labour_rows(rows)

    for idx, reason in sorted(find_unpaired(filtered).items()):
        log.warning("filtered row %d is not an urban/rural pair: %s", idx, reason)

    deduped = keep_first_of_pairs(filtered, tables.country_names)
    bucketed = bucket_tertiles(deduped, tables)
    log.debug(
        "pipeline: %d filtered, %d deduped, %d bucketed",
        len(filtered), len(deduped), len(bucketed),
    )
    return PipelineResult(tuple(filtered), tuple(deduped), tuple(bucketed))


def normalize(rows: Iterable[RawRecord], tables: Tables = DEFAULT_TABLES) -> List[BucketedRecord]:
    return list(run_pipeline(rows, tables).bucketed)
