#!/usr/bin/env python3
"""
Context extraction module for the prediction preparation pipeline.

This module joins prediction records against a FASTA index and slices the
predicted region plus its upstream and downstream flanking windows.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from ..exceptions import RangeError
from ..models import ContextRecord, PredictionRecord
from .fasta import FastaIndex


@dataclass
class ExtractionStats:
    """Counts collected by ContextExtractor.extract_all."""

    total: int = 0
    joined: int = 0
    join_misses: int = 0
    out_of_range: int = 0


class ContextExtractor:
    """Extract core and flanking sequences for prediction records."""

    def __init__(
        self,
        fasta_index: FastaIndex,
        upstream: int = 10,
        downstream: int = 10,
        clamp_flanks: bool = False,
        legacy_tarhunter_upstream: bool = False,
    ):
        """
        Initialize extractor.

        Args:
            fasta_index: Reference sequences by identifier
            upstream: Width of the window ending at the match start
            downstream: Width of the window starting at the match end
            clamp_flanks: Clamp flank windows at the sequence ends instead
                of rejecting the record
            legacy_tarhunter_upstream: Slice ``[start:start-upstream]`` for
                the upstream window, as older TarHunter conversions did
        """
        self.fasta_index = fasta_index
        self.upstream = upstream
        self.downstream = downstream
        self.clamp_flanks = clamp_flanks
        self.legacy_tarhunter_upstream = legacy_tarhunter_upstream

    def extract(self, record: PredictionRecord) -> Optional[ContextRecord]:
        """
        Join one record against the index and slice its windows.

        Args:
            record: Parsed prediction record

        Returns:
            ContextRecord, or None if no FASTA identifier equals the
            record's join key

        Raises:
            RangeError: If the match or a flank window falls outside the
                sequence
        """
        sequence = self.fasta_index.get(record.join_key)
        if sequence is None:
            return None

        start, end = record.start, record.end
        length = len(sequence)

        if start < 0 or end > length or start > end:
            raise RangeError(
                "match lies outside the sequence",
                identifier=record.join_key, start=start, end=end, length=length
            )

        up_start = start - self.upstream
        down_end = end + self.downstream

        if self.clamp_flanks:
            up_start = max(0, up_start)
            down_end = min(length, down_end)
        elif up_start < 0 or down_end > length:
            raise RangeError(
                f"flank windows need [{up_start}:{down_end}]",
                identifier=record.join_key, start=start, end=end, length=length
            )

        if self.legacy_tarhunter_upstream:
            upstream_sequence = sequence[start:max(0, start - self.upstream)]
        else:
            upstream_sequence = sequence[up_start:start]

        return ContextRecord(
            identifier=record.join_key,
            core_sequence=sequence[start:end],
            full_sequence=sequence,
            upstream_sequence=upstream_sequence,
            downstream_sequence=sequence[end:down_end],
            prediction=record,
        )

    def extract_all(
        self, records: Iterable[PredictionRecord]
    ) -> Tuple[List[ContextRecord], ExtractionStats]:
        """
        Extract contexts for every record, skipping misses and bad ranges.

        Args:
            records: Parsed prediction records

        Returns:
            Tuple of (contexts in input order, extraction counts)
        """
        contexts = []
        stats = ExtractionStats()

        for record in records:
            stats.total += 1
            try:
                context = self.extract(record)
            except RangeError as e:
                stats.out_of_range += 1
                logger.debug(f"Skipping record: {e}")
                continue

            if context is None:
                stats.join_misses += 1
                logger.debug(f"No FASTA entry named {record.join_key}")
                continue

            stats.joined += 1
            contexts.append(context)

        logger.info(f"Extracted {stats.joined} of {stats.total} records")
        if stats.join_misses:
            logger.warning(f"{stats.join_misses} records had no matching FASTA identifier")
        if stats.out_of_range:
            logger.warning(f"{stats.out_of_range} records fell outside their sequence bounds")

        return contexts, stats
