"""analyze-pred.

Converts the output of microRNA target prediction tools (psRNATarget,
TAPIR, psRNA read mapping, TarHunter, TargetFinder, psRobot) into
tab-separated records that pair each predicted site with its full target
sequence and upstream/downstream flanking windows, ready for deep learning
pipelines.
"""

__version__ = "1.0.0"

from .config import AnalyzerConfig
from .models import SequenceRecord, PredictionRecord, ContextRecord
from .core import (
    FastaIndex,
    PredictionParser, PsRNATargetParser, TapirParser, PsRNAMapParser,
    TarHunterParser, TargetFinderParser, PsRobotParser,
    filter_by_evalue,
    ContextExtractor, ExtractionStats,
    RecordWriter,
)
from .main import ANALYZERS, AnalyzerResult, run_analyzer

__all__ = [
    "__version__",
    "AnalyzerConfig",
    "SequenceRecord",
    "PredictionRecord",
    "ContextRecord",
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
    "ANALYZERS",
    "AnalyzerResult",
    "run_analyzer",
]
