#!/usr/bin/env python3
"""
Main pipeline module for the prediction preparation pipeline.

This module provides the command line entry point and runs one analyzer:
parse the tool output, filter, join against the FASTA reference, extract
flanking windows and write the tab-separated result.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type

from loguru import logger

from .config import AnalyzerConfig, LOG_LEVELS
from .core.extractor import ContextExtractor
from .core.fasta import FastaIndex
from .core.filters import filter_by_evalue
from .core.parsers import (
    PredictionParser,
    PsRNATargetParser,
    TapirParser,
    PsRNAMapParser,
    TarHunterParser,
    TargetFinderParser,
    PsRobotParser,
)
from .core.writer import RecordWriter
from .exceptions import ConfigurationError, PipelineError

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {message}"


@dataclass(frozen=True)
class Analyzer:
    """How one prediction tool's output is turned into a context table."""

    name: str
    command: str
    parser_class: Type[PredictionParser]
    output_name: str
    columns: Tuple[str, ...]
    input_flags: Tuple[str, str]
    help: str
    filter_evalue: bool = False
    legacy_upstream: bool = False


ANALYZERS: Dict[str, Analyzer] = {
    "psrna": Analyzer(
        name="psrna",
        command="psRNAanalyzer",
        parser_class=PsRNATargetParser,
        output_name="psRNANeural.fasta",
        columns=("label", "core", "full", "upstream", "downstream"),
        input_flags=("-p", "--psRNAPred"),
        help="Prepare psRNATarget predictions",
        filter_evalue=True,
    ),
    "tapir": Analyzer(
        name="tapir",
        command="tapiranalyzer",
        parser_class=TapirParser,
        output_name="tapirneural.fasta",
        columns=("label", "core", "full", "upstream", "downstream"),
        input_flags=("-p", "--tapir"),
        help="Prepare TAPIR target predictions",
    ),
    "psrnamap": Analyzer(
        name="psrnamap",
        command="psRNAmapanalyze",
        parser_class=PsRNAMapParser,
        output_name="psRNAMap.fasta",
        columns=("label", "core", "full", "upstream", "downstream"),
        input_flags=("-P", "--psRNAmapfile"),
        help="Prepare psRNA read-to-genome mappings",
    ),
    "tarhunter": Analyzer(
        name="tarhunter",
        command="tarHunter",
        parser_class=TarHunterParser,
        output_name="tarHunter.fasta",
        columns=("label", "join_key", "full", "upstream", "downstream"),
        input_flags=("-T", "--tarhunterfile"),
        help="Prepare TarHunter predictions",
        legacy_upstream=True,
    ),
    "targetfinder": Analyzer(
        name="targetfinder",
        command="targetFinder",
        parser_class=TargetFinderParser,
        output_name="tarFinder.fasta",
        columns=("label", "join_key", "full", "upstream", "downstream"),
        input_flags=("-T", "--targetFinderfile"),
        help="Prepare TargetFinder predictions",
    ),
    "psrobot": Analyzer(
        name="psrobot",
        command="psRobot",
        parser_class=PsRobotParser,
        output_name="psRobot.fasta",
        columns=("label", "score", "core", "full", "upstream", "downstream"),
        input_flags=("-R", "--psRobotfile"),
        help="Prepare psRobot predictions",
    ),
}

COMMANDS: Dict[str, str] = {a.command: a.name for a in ANALYZERS.values()}


@dataclass
class AnalyzerResult:
    """Summary of one analyzer run."""

    analyzer: str
    output_file: Path
    parsed: int = 0
    malformed: int = 0
    filtered: int = 0
    written: int = 0
    join_misses: int = 0
    out_of_range: int = 0


def setup_logging(log_level: str = "INFO") -> None:
    """Setup logging configuration."""
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper(), format=LOG_FORMAT)


def get_analyzer(name: str) -> Analyzer:
    """Look up an analyzer by short name or sub-command."""
    key = COMMANDS.get(name, name)
    if key not in ANALYZERS:
        raise ConfigurationError(f"Unknown analyzer: {name}", parameter="analyzer")
    return ANALYZERS[key]


def run_analyzer(
    name: str,
    config: AnalyzerConfig,
    fasta_index: Optional[FastaIndex] = None
) -> AnalyzerResult:
    """
    Run one analyzer end to end.

    Args:
        name: Analyzer short name (``psrna``) or sub-command (``psRNAanalyzer``)
        config: Run configuration
        fasta_index: Already loaded reference; loaded from
            ``config.fasta_file`` when omitted

    Returns:
        AnalyzerResult with record counts and the output path
    """
    analyzer = get_analyzer(name)
    output_file = config.output_dir / analyzer.output_name
    result = AnalyzerResult(analyzer=analyzer.name, output_file=output_file)

    logger.info(f"Starting {analyzer.command}")
    logger.info(f"Prediction file: {config.prediction_file}")
    logger.info(f"Reference: {config.fasta_file}")
    logger.info(f"Output file: {output_file}")

    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Cannot create output directory {config.output_dir}: {e}") from e

    try:
        # Step 1: Parse the tool output
        parser = analyzer.parser_class(config.prediction_file)
        records = parser.parse()
        result.parsed = len(records)
        result.malformed = parser.malformed_lines

        # Step 2: Expectation cutoff
        if analyzer.filter_evalue:
            records = filter_by_evalue(records, config.evalue)
        result.filtered = len(records)

        # Step 3: Join and slice
        if fasta_index is None:
            fasta_index = FastaIndex.load(config.fasta_file)

        extractor = ContextExtractor(
            fasta_index,
            upstream=config.upstream,
            downstream=config.downstream,
            clamp_flanks=config.clamp_flanks,
            legacy_tarhunter_upstream=config.legacy_upstream and analyzer.legacy_upstream,
        )
        contexts, stats = extractor.extract_all(records)
        result.join_misses = stats.join_misses
        result.out_of_range = stats.out_of_range

        # Step 4: Write
        writer = RecordWriter(analyzer.columns)
        result.written = writer.write(output_file, contexts)

    except PipelineError as e:
        logger.error(f"{analyzer.command} failed: {e}")
        raise

    logger.info(
        f"{analyzer.command} finished: {result.parsed} parsed, "
        f"{result.malformed} malformed, {result.filtered} after filtering, "
        f"{result.join_misses} unmatched, {result.out_of_range} out of range, "
        f"{result.written} written"
    )
    return result


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="analyze-pred",
        description="Prepare microRNA target predictions for deep learning"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for analyzer in ANALYZERS.values():
        p = sub.add_parser(analyzer.command, help=analyzer.help, description=analyzer.help)

        p.add_argument(
            *analyzer.input_flags,
            dest="prediction",
            type=Path,
            help="Prediction output file"
        )

        p.add_argument(
            "-f", "--fastapred",
            dest="fasta",
            type=Path,
            help="FASTA file of the predicted targets"
        )

        p.add_argument(
            "-U", "--upstream",
            type=int,
            help="Bases upstream of the prediction (default: 10)"
        )

        p.add_argument(
            "-D", "--downstream",
            type=int,
            help="Bases downstream of the prediction (default: 10)"
        )

        if analyzer.filter_evalue:
            p.add_argument(
                "-e", "--evalue",
                type=float,
                help="Maximum expectation value (default: 0.5)"
            )

        if analyzer.legacy_upstream:
            p.add_argument(
                "--legacy-upstream",
                action="store_true",
                help="Use the inverted [start:start-upstream] upstream slice"
            )

        p.add_argument(
            "-o", "--output-dir",
            type=Path,
            help="Directory for the output file (default: current directory)"
        )

        p.add_argument(
            "--clamp-flanks",
            action="store_true",
            help="Clamp flanking windows at sequence ends instead of skipping the record"
        )

        p.add_argument(
            "-c", "--config",
            type=Path,
            help="YAML file with default settings"
        )

        p.add_argument(
            "--log-level",
            choices=LOG_LEVELS,
            type=str.upper,
            help="Logging level (default: INFO)"
        )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or "INFO")

    try:
        config = AnalyzerConfig.from_args(vars(args), config_file=args.config)
        if args.log_level is None and config.log_level != "INFO":
            setup_logging(config.log_level)
        run_analyzer(args.command, config)
    except PipelineError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Pipeline interrupted by user")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
