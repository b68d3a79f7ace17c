"""Tab-separated writer for joined context records."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable, Sequence

from loguru import logger

from ..exceptions import ConfigurationError, OutputFileError
from ..models import ContextRecord


COLUMNS: Dict[str, Callable[[ContextRecord], str]] = {
    "label": lambda c: c.prediction.label,
    "join_key": lambda c: c.prediction.join_key,
    "score": lambda c: f"{c.prediction.score:g}",
    "core": lambda c: c.core_sequence,
    "full": lambda c: c.full_sequence,
    "upstream": lambda c: c.upstream_sequence,
    "downstream": lambda c: c.downstream_sequence,
}


class RecordWriter:
    """Write one tab-separated line per ContextRecord."""

    def __init__(self, columns: Sequence[str]):
        """
        Initialize writer.

        Args:
            columns: Column names, in output order, from ``COLUMNS``
        """
        unknown = [c for c in columns if c not in COLUMNS]
        if unknown:
            raise ConfigurationError(f"Unknown output columns: {', '.join(unknown)}")
        self.columns = list(columns)

    def format_row(self, context: ContextRecord) -> str:
        """Format one record as a newline-terminated line."""
        return "\t".join(COLUMNS[c](context) for c in self.columns) + "\n"

    def write(self, output_file: Path, contexts: Iterable[ContextRecord]) -> int:
        """
        Create or truncate ``output_file`` and write every record.

        Args:
            output_file: Output file path
            contexts: Joined records

        Returns:
            Number of lines written

        Raises:
            OutputFileError: If the file cannot be written
        """
        output_file = Path(output_file)
        count = 0

        logger.info(f"Writing {output_file}")

        try:
            with open(output_file, 'w', newline='\n') as f:
                for context in contexts:
                    f.write(self.format_row(context))
                    count += 1
        except IOError as e:
            raise OutputFileError(str(e), path=str(output_file)) from e

        logger.info(f"Successfully wrote {count} records")
        return count
