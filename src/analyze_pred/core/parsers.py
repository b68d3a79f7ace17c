"""Parsers for microRNA target prediction tool output."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from ..exceptions import InputFileError, ParseError
from ..models import PredictionRecord
from .schema import Field, RecordSchema, to_float, to_int


class PredictionParser:
    """Base class for line-oriented prediction file parsers.

    Subclasses implement ``_parse_line``; lines that raise ``ParseError``
    are counted and skipped so one bad line never aborts a file.
    """

    tool_name = "prediction"
    comment_prefix: Optional[str] = "#"

    def __init__(self, input_file: Path):
        """Initialize parser with input file path."""
        self.input_file = Path(input_file)
        self.records: List[PredictionRecord] = []
        self.malformed_lines = 0
        self.defaulted_fields = 0

        if not self.input_file.exists():
            raise InputFileError("file not found", path=str(self.input_file))

    def parse(self) -> List[PredictionRecord]:
        """Parse the input file and return list of PredictionRecord objects."""
        self.records = []
        self.malformed_lines = 0
        self.defaulted_fields = 0
        self._reset()
        line_number = 0

        logger.info(f"Parsing {self.tool_name} file: {self.input_file}")

        try:
            with open(self.input_file, 'r', encoding='utf-8') as f:
                for line in f:
                    line_number += 1
                    line = line.rstrip('\r\n')

                    # Skip empty lines
                    if not line.strip():
                        continue

                    if self.comment_prefix and line.startswith(self.comment_prefix):
                        continue

                    try:
                        record = self._parse_line(line, line_number)
                        if record:
                            self.records.append(record)
                    except ParseError as e:
                        self.malformed_lines += 1
                        logger.debug(f"Skipping invalid line {line_number}: {e}")
                        continue

            self._finish()

        except (IOError, UnicodeDecodeError) as e:
            raise InputFileError(str(e), path=str(self.input_file)) from e

        if self.malformed_lines:
            logger.warning(
                f"Skipped {self.malformed_lines} malformed lines in {self.input_file}"
            )
        if self.defaulted_fields:
            logger.warning(
                f"{self.defaulted_fields} numeric fields in {self.input_file} "
                f"could not be parsed and were set to 0"
            )

        logger.info(f"Successfully parsed {len(self.records)} {self.tool_name} records")
        return self.records

    def _reset(self) -> None:
        """Clear per-file state kept between lines."""

    def _finish(self) -> None:
        """Handle state left over at end of file."""

    def _parse_line(self, line: str, line_number: int) -> PredictionRecord | None:
        raise NotImplementedError

    def _extract(self, schema: RecordSchema, line: str, line_number: int) -> Dict:
        values, defaulted = schema.extract(line.split(), line_number=line_number, line=line)
        if defaulted:
            self.defaulted_fields += len(defaulted)
            logger.debug(f"Line {line_number}: non-numeric {', '.join(defaulted)} set to 0")
        return values

    def _convert(self, converter, value: str, name: str, line_number: int):
        result, ok = converter(value)
        if not ok:
            self.defaulted_fields += 1
            logger.debug(f"Line {line_number}: non-numeric {name} set to 0")
        return result

    def get_statistics(self) -> dict:
        """Get parsing statistics."""
        return {
            "tool": self.tool_name,
            "total_records": len(self.records),
            "malformed_lines": self.malformed_lines,
            "defaulted_fields": self.defaulted_fields,
            "join_keys": len(set(r.join_key for r in self.records)),
        }


class PsRNATargetParser(PredictionParser):
    """Parser for psRNATarget result tables."""

    tool_name = "psRNATarget"

    SCHEMA = RecordSchema([
        Field("mirna", 0),
        Field("target", 1),
        Field("evalue", 2, to_float),
        Field("target_start", 6, to_int),
        Field("target_end", 7, to_int),
        Field("mirna_aligned", 8),
        Field("target_aligned", 9),
    ])

    def _parse_line(self, line: str, line_number: int) -> PredictionRecord | None:
        values = self._extract(self.SCHEMA, line, line_number)
        return PredictionRecord(
            target_id=values["target"],
            query_id=values["mirna"],
            score=values["evalue"],
            start=values["target_start"],
            end=values["target_end"],
            join_key=values["target"],
            label=values["target"],
            extra={
                "mirna_aligned": values["mirna_aligned"],
                "target_aligned": values["target_aligned"],
            },
        )


class TapirParser(PredictionParser):
    """Parser for TAPIR reports.

    One hit spans several ``key value`` lines. A ``target`` line opens a
    hit and its ``target_5'`` line closes it. The end coordinate is the
    length of the aligned 5' target string.
    """

    tool_name = "TAPIR"

    KEYS = ("target", "miRNA", "score", "mfe", "start", "target_5'")

    def _reset(self) -> None:
        self._pending: Optional[dict] = None

    def _finish(self) -> None:
        if self._pending is not None:
            self.malformed_lines += 1
            logger.debug(
                f"Hit opened on line {self._pending['line_number']} has no target_5' line"
            )
            self._pending = None

    @staticmethod
    def mirna_name(line: str, fallback: str) -> str:
        """Pull the miRNA name out of a ``miRNA`` line."""
        segments = line.split(":")
        if len(segments) > 3:
            parts = segments[3].split("=")
            if len(parts) > 2:
                return parts[2].strip()
        return fallback

    def _parse_line(self, line: str, line_number: int) -> PredictionRecord | None:
        tokens = line.split()
        key = tokens[0]
        if key not in self.KEYS:
            return None

        if len(tokens) < 2:
            raise ParseError(f"No value for {key}", line_number=line_number, line_content=line)
        value = tokens[1]

        if key == "target":
            if self._pending is not None:
                self.malformed_lines += 1
                logger.debug(
                    f"Hit opened on line {self._pending['line_number']} has no target_5' line"
                )
            self._pending = {"target": value, "line_number": line_number}
            return None

        if self._pending is None:
            raise ParseError(f"{key} line outside a hit", line_number=line_number, line_content=line)

        if key == "miRNA":
            self._pending["mirna"] = self.mirna_name(line, value)
        elif key == "score":
            self._pending["score"] = self._convert(to_float, value, key, line_number)
        elif key == "mfe":
            self._pending["mfe"] = self._convert(to_float, value, key, line_number)
        elif key == "start":
            self._pending["start"] = self._convert(to_int, value, key, line_number)
        else:
            hit, self._pending = self._pending, None
            if "start" not in hit:
                self.defaulted_fields += 1
            return PredictionRecord(
                target_id=hit["target"],
                query_id=hit.get("mirna", ""),
                score=hit.get("score", 0.0),
                start=hit.get("start", 0),
                end=len(value),
                mfe=hit.get("mfe"),
                join_key=hit["target"],
                label=hit["target"],
                extra={"target_aligned": value},
            )

        return None


class PsRNAMapParser(PredictionParser):
    """Parser for psRNA read-to-genome mapping tables."""

    tool_name = "psRNA-map"

    SCHEMA = RecordSchema([
        Field("id", 0),
        Field("ref", 1),
        Field("strand", 2),
        Field("start", 3, to_int),
        Field("stop", 4, to_int),
        Field("read", 5),
    ])

    def _parse_line(self, line: str, line_number: int) -> PredictionRecord | None:
        values = self._extract(self.SCHEMA, line, line_number)
        return PredictionRecord(
            target_id=values["id"],
            query_id=values["read"],
            score=0.0,
            start=values["start"],
            end=values["stop"],
            join_key=values["id"],
            label=values["read"],
            extra={
                "ref": values["ref"],
                "strand": values["strand"],
                "read": values["read"],
            },
        )


class TarHunterParser(PredictionParser):
    """Parser for TarHunter result tables.

    Records join on the target name column (field 1), not the target id.
    """

    tool_name = "TarHunter"

    SCHEMA = RecordSchema([
        Field("target_id", 0),
        Field("target_name", 1),
        Field("mirna_id", 2),
        Field("mirna_seq", 3),
        Field("start", 9, to_int),
        Field("end", 10, to_int),
    ])

    def _parse_line(self, line: str, line_number: int) -> PredictionRecord | None:
        values = self._extract(self.SCHEMA, line, line_number)
        return PredictionRecord(
            target_id=values["target_id"],
            query_id=values["mirna_id"],
            score=0.0,
            start=values["start"],
            end=values["end"],
            join_key=values["target_name"],
            label=values["target_id"],
            extra={
                "target_name": values["target_name"],
                "mirna_seq": values["mirna_seq"],
            },
        )


class TargetFinderParser(PredictionParser):
    """Parser for tabulated TargetFinder output."""

    tool_name = "TargetFinder"

    SCHEMA = RecordSchema([
        Field("mirna", 0),
        Field("sequence", 11),
        Field("start", 15, to_int),
        Field("end", 16, to_int),
        Field("mfe", 18, to_float),
    ])

    def _parse_line(self, line: str, line_number: int) -> PredictionRecord | None:
        values = self._extract(self.SCHEMA, line, line_number)
        return PredictionRecord(
            target_id=values["sequence"],
            query_id=values["mirna"],
            score=0.0,
            start=values["start"],
            end=values["end"],
            mfe=values["mfe"],
            join_key=values["sequence"],
            label=values["mirna"],
            extra={"sequence": values["sequence"]},
        )


class PsRobotParser(PredictionParser):
    """Parser for psRobot target reports.

    Each hit is a ``>query<TAB>Score: x`` header followed by ``Query`` and
    ``Sbjct`` alignment lines of the form ``<label> <start> <aligned> <end>``.
    """

    tool_name = "psRobot"

    ALIGNMENT = RecordSchema([
        Field("start", 1, to_int),
        Field("aligned", 2),
        Field("end", 3, to_int),
    ])

    def _reset(self) -> None:
        self._pending: Optional[dict] = None
        self.reversed_hits = 0

    def _finish(self) -> None:
        if self._pending is not None:
            self.malformed_lines += 1
            logger.debug(
                f"Hit opened on line {self._pending['line_number']} has no Sbjct line"
            )
            self._pending = None
        if self.reversed_hits:
            logger.info(f"Reordered {self.reversed_hits} descending subject ranges")

    def _parse_header(self, line: str, line_number: int) -> dict:
        fields = line.split("\t")
        query = fields[0][1:].strip()
        if not query:
            raise ParseError("Empty query name", line_number=line_number, line_content=line)

        score = 0.0
        if len(fields) > 1 and ":" in fields[1]:
            score = self._convert(to_float, fields[1].split(":")[1].strip(), "score", line_number)
        else:
            self.defaulted_fields += 1
        return {"query": query, "score": score, "line_number": line_number}

    def _parse_line(self, line: str, line_number: int) -> PredictionRecord | None:
        if line.startswith(">"):
            if self._pending is not None:
                self.malformed_lines += 1
                logger.debug(
                    f"Hit opened on line {self._pending['line_number']} has no Sbjct line"
                )
            self._pending = self._parse_header(line, line_number)
            return None

        if line.startswith("Query"):
            if self._pending is None:
                raise ParseError("Query line outside a hit", line_number=line_number, line_content=line)
            values = self._extract(self.ALIGNMENT, line, line_number)
            self._pending["query_start"] = values["start"]
            self._pending["query_end"] = values["end"]
            self._pending["query_aligned"] = values["aligned"]
            return None

        if line.startswith("Sbjct"):
            if self._pending is None:
                raise ParseError("Sbjct line outside a hit", line_number=line_number, line_content=line)
            hit, self._pending = self._pending, None
            values = self._extract(self.ALIGNMENT, line, line_number)

            # Antisense alignments print the subject range high to low
            start, end = values["start"], values["end"]
            reversed_subject = start > end
            if reversed_subject:
                start, end = end, start
                self.reversed_hits += 1

            return PredictionRecord(
                target_id=hit["query"],
                query_id=hit["query"],
                score=hit["score"],
                start=start,
                end=end,
                join_key=hit["query"],
                label=hit["query"],
                extra={
                    "query_start": hit.get("query_start", 0),
                    "query_end": hit.get("query_end", 0),
                    "query_aligned": hit.get("query_aligned", ""),
                    "subject_aligned": values["aligned"],
                    "subject_reversed": reversed_subject,
                },
            )

        # Match bars and other decoration between alignment lines
        return None
