from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from xlens_core.errors import EmptyDataError, FormatError, InvalidAxisError


logger = logging.getLogger(__name__)

RowRecord = Mapping[str, Any]


@dataclass(frozen=True)
class SheetTable:
    columns: Tuple[str, ...]
    rows: Tuple[RowRecord, ...]

    def __post_init__(self) -> None:
        if not self.columns or not self.rows:
            raise EmptyDataError("Spreadsheet is empty or has no data rows")

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def first_row(self) -> RowRecord:
        return self.rows[0]

    @property
    def last_row(self) -> RowRecord:
        return self.rows[-1]

    def has_column(self, column: str) -> bool:
        return column in self.columns

    def column_values(self, column: str) -> List[Any]:
        if column not in self.columns:
            raise InvalidAxisError(f'Column "{column}" not found in data', column=column)
        return [row.get(column) for row in self.rows]


def _to_python(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.to_pydatetime()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT or value is pd.NA:
        return None
    return value


def coerce_number(value: Any) -> Optional[float]:
    """Best-effort numeric value of a cell, or None when it is not a finite number."""
    value = _to_python(value)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        out = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            out = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def format_label(value: Any) -> str:
    value = _to_python(value)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def frame_to_table(df: pd.DataFrame) -> SheetTable:
    df = df.dropna(how="all")
    columns = tuple(str(c) for c in df.columns)
    if len(set(columns)) != len(columns):
        raise FormatError("Spreadsheet header contains duplicate column names")
    df.columns = list(columns)
    records = df.to_dict(orient="records")
    rows = tuple(MappingProxyType({k: _to_python(v) for k, v in rec.items()}) for rec in records)
    return SheetTable(columns=columns, rows=rows)


def load_sheet(data: bytes) -> SheetTable:
    """Parse spreadsheet bytes; only the first worksheet is read."""
    if not data:
        raise FormatError("Invalid Excel file format: file is empty")
    try:
        df = pd.read_excel(io.BytesIO(data), sheet_name=0)
    except Exception as e:
        raise FormatError(f"Invalid Excel file format: {e}") from e
    table = frame_to_table(df)
    logger.info("Loaded sheet with %d rows and %d columns", table.row_count, len(table.columns))
    return table


def load_sheet_path(path: Union[str, Path]) -> SheetTable:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise FormatError(f"Could not read spreadsheet {p.name}: {e}") from e
    return load_sheet(data)
