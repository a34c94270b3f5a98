from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from xlens_core.data import SheetTable, coerce_number
from xlens_core.errors import NoNumericColumnsError


@dataclass(frozen=True)
class ColumnClassification:
    columns: Tuple[str, ...]
    numeric: Tuple[str, ...] = field(default_factory=tuple)
    non_numeric: Tuple[str, ...] = field(default_factory=tuple)

    def is_numeric(self, column: str) -> bool:
        return column in self.numeric

    def to_dict(self) -> Dict[str, list]:
        return {"columns": list(self.columns), "numeric": list(self.numeric), "nonNumeric": list(self.non_numeric)}


def classify_columns(table: SheetTable) -> ColumnClassification:
    # Only the first row is inspected; a blank or text cell in row 1 makes the column non-numeric.
    first = table.first_row
    numeric = tuple(c for c in table.columns if coerce_number(first.get(c)) is not None)
    non_numeric = tuple(c for c in table.columns if c not in numeric)
    return ColumnClassification(columns=table.columns, numeric=numeric, non_numeric=non_numeric)


def require_numeric(classification: ColumnClassification) -> ColumnClassification:
    if not classification.numeric:
        raise NoNumericColumnsError("No numeric columns found in data")
    return classification
