from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List

from xlens_core.data import SheetTable, coerce_number
from xlens_core.errors import AnalysisError, InvalidAxisError


INCREASING = "increasing"
DECREASING = "decreasing"


@dataclass(frozen=True)
class TrendResult:
    column: str
    average: float
    direction: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def numeric_values(table: SheetTable, column: str) -> List[float]:
    values = [coerce_number(v) for v in table.column_values(column)]
    return [v for v in values if v is not None]


def trend_direction(values: List[float]) -> str:
    return INCREASING if values[-1] > values[0] else DECREASING


def analyze_column(table: SheetTable, column: str) -> TrendResult:
    values = numeric_values(table, column)
    if not values:
        raise AnalysisError(f'Column "{column}" has no numeric values to analyze', column=column)
    average = sum(values) / len(values)
    return TrendResult(column=column, average=average, direction=trend_direction(values))


def analyze_trends(table: SheetTable, columns: Iterable[str]) -> List[TrendResult]:
    columns = list(columns)
    for col in columns:
        if not table.has_column(col):
            raise InvalidAxisError(f'Selected column "{col}" not found in data', column=col)
    return [analyze_column(table, col) for col in columns]
