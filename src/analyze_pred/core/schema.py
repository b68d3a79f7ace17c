"""Named column extraction for whitespace-delimited tool output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple

from ..exceptions import ParseError


class _Lenient:
    """Numeric converter that falls back to a default instead of raising."""

    def __init__(self, convert: Callable[[str], Any], default: Any):
        self.convert = convert
        self.default = default
        self.__name__ = convert.__name__

    def __call__(self, value: str) -> Tuple[Any, bool]:
        try:
            return self.convert(value), True
        except (TypeError, ValueError):
            return self.default, False


to_int = _Lenient(int, 0)
to_float = _Lenient(float, 0.0)


@dataclass(frozen=True)
class Field:
    """One named column: its index and an optional lenient converter."""

    name: str
    column: int
    converter: Callable = None


class RecordSchema:
    """Ordered list of named fields extracted from a split line."""

    def __init__(self, fields: Sequence[Field]):
        self.fields = list(fields)
        self.min_columns = max(f.column for f in self.fields) + 1

    def extract(
        self,
        columns: Sequence[str],
        line_number: int = None,
        line: str = None,
    ) -> Tuple[Dict[str, Any], List[str]]:
        """
        Extract named values from split columns.

        Args:
            columns: Split line
            line_number: Line number for error messages
            line: Raw line for error messages

        Returns:
            Tuple of (values by field name, names of numeric fields that
            fell back to their default)

        Raises:
            ParseError: If the line has fewer columns than the schema needs
        """
        if len(columns) < self.min_columns:
            raise ParseError(
                f"Expected at least {self.min_columns} fields, got {len(columns)}",
                line_number=line_number,
                line_content=line,
            )

        values: Dict[str, Any] = {}
        defaulted: List[str] = []
        for f in self.fields:
            raw = columns[f.column]
            if f.converter is None:
                values[f.name] = raw
                continue
            value, ok = f.converter(raw)
            values[f.name] = value
            if not ok:
                defaulted.append(f.name)

        return values, defaulted
