"""Core processing modules for analyze-pred."""

from .fasta import FastaIndex
from .parsers import (
    PredictionParser, PsRNATargetParser, TapirParser, PsRNAMapParser,
    TarHunterParser, TargetFinderParser, PsRobotParser
)
from .filters import filter_by_evalue
from .extractor import ContextExtractor, ExtractionStats
from .writer import RecordWriter

__all__ = [
    "FastaIndex",
    "PredictionParser",
    "PsRNATargetParser",
    "TapirParser",
    "PsRNAMapParser",
    "TarHunterParser",
    "TargetFinderParser",
    "PsRobotParser",
    "filter_by_evalue",
    "ContextExtractor",
    "ExtractionStats",
    "RecordWriter",
]
