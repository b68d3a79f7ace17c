"""Score filters applied before context extraction."""

from typing import Iterable, List

from loguru import logger

from ..models import PredictionRecord


def filter_by_evalue(records: Iterable[PredictionRecord], cutoff: float) -> List[PredictionRecord]:
    """Keep records whose e-value (``score``) is at most ``cutoff``."""
    records = list(records)
    kept = [r for r in records if r.score <= cutoff]

    logger.info(f"Kept {len(kept)} of {len(records)} records with expectation <= {cutoff}")
    return kept
