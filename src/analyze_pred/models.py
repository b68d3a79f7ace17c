"""Data models for the prediction preparation pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class SequenceRecord:
    """One FASTA entry."""

    identifier: str
    sequence: str

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "SequenceRecord":
        """Create from dictionary."""
        return cls(**data)


@dataclass(frozen=True)
class PredictionRecord:
    """Normalized record parsed from one prediction tool's output.

    ``start`` and ``end`` are used as a half-open ``[start, end)`` slice
    of the target sequence, exactly as the tool reports them.
    ``join_key`` is the value matched against FASTA identifiers and
    ``label`` is the leading column written for the record.
    ``extra`` holds format-specific fields as a read-only mapping.
    """

    target_id: str
    query_id: str
    score: float
    start: int
    end: int
    mfe: Optional[float] = None
    join_key: str = ""
    label: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Fall back to the target identifier for both keys
        if not self.join_key:
            object.__setattr__(self, "join_key", self.target_id)
        if not self.label:
            object.__setattr__(self, "label", self.target_id)
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def get(self, name: str, default: Any = "") -> Any:
        """Get a format-specific field."""
        return self.extra.get(name, default)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["extra"] = dict(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "PredictionRecord":
        """Create from dictionary."""
        return cls(**data)


@dataclass(frozen=True)
class ContextRecord:
    """A prediction joined with its reference sequence and flanking windows."""

    identifier: str
    core_sequence: str
    full_sequence: str
    upstream_sequence: str
    downstream_sequence: str
    prediction: PredictionRecord
