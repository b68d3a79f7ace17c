"""FASTA reference loader."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Optional

from loguru import logger

from ..exceptions import InputFileError
from ..models import SequenceRecord


class FastaIndex:
    """Ordered mapping from FASTA identifier to full sequence."""

    def __init__(self, records: Optional[List[SequenceRecord]] = None):
        self._sequences: Dict[str, str] = {}
        self.duplicates = 0
        for record in records or []:
            self.add(record)

    def add(self, record: SequenceRecord) -> bool:
        """Add a record; returns False if the identifier was already present."""
        if record.identifier in self._sequences:
            self.duplicates += 1
            logger.debug(f"Duplicate FASTA identifier {record.identifier}, keeping first")
            return False
        self._sequences[record.identifier] = record.sequence
        return True

    @classmethod
    def load(cls, fasta_file: Path) -> "FastaIndex":
        """
        Load a FASTA file.

        The identifier is everything after the ``>`` marker on a header
        line. Sequence lines following a header are concatenated.

        Args:
            fasta_file: Path to FASTA file

        Returns:
            FastaIndex of the file's sequences

        Raises:
            InputFileError: If the file cannot be read
        """
        fasta_file = Path(fasta_file)
        index = cls()
        current_id = None
        current_seq: List[str] = []
        orphan_lines = 0

        logger.info(f"Loading FASTA file: {fasta_file}")

        try:
            with open(fasta_file, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.rstrip('\r\n')

                    if line.startswith('>'):
                        if current_id is not None:
                            index.add(SequenceRecord(current_id, ''.join(current_seq)))
                        current_id = line[1:]
                        current_seq = []
                        continue

                    line = line.strip()
                    if not line:
                        continue

                    if current_id is None:
                        orphan_lines += 1
                        continue

                    current_seq.append(line)

                if current_id is not None:
                    index.add(SequenceRecord(current_id, ''.join(current_seq)))

        except (IOError, UnicodeDecodeError) as e:
            raise InputFileError(str(e), path=str(fasta_file)) from e

        if orphan_lines:
            logger.warning(f"Ignored {orphan_lines} sequence lines before the first header in {fasta_file}")
        if index.duplicates:
            logger.warning(f"Ignored {index.duplicates} duplicate identifiers in {fasta_file}")

        logger.info(f"Loaded {len(index)} sequences")
        return index

    def get(self, identifier: str) -> Optional[str]:
        """Get sequence by exact identifier."""
        return self._sequences.get(identifier)

    def record(self, identifier: str) -> Optional[SequenceRecord]:
        """Get SequenceRecord by exact identifier."""
        sequence = self._sequences.get(identifier)
        if sequence is None:
            return None
        return SequenceRecord(identifier, sequence)

    def to_dict(self) -> Dict[str, str]:
        """Copy of the identifier to sequence mapping."""
        return dict(self._sequences)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._sequences

    def __len__(self) -> int:
        return len(self._sequences)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sequences)
