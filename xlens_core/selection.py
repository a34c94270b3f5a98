from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from xlens_core.config import DEFAULT_CHART_CONFIG, ChartConfig
from xlens_core.errors import FormatError, InsufficientColumnsError, InvalidAxisError


@dataclass(frozen=True)
class AxisSelection:
    x_axis: str = ""
    y_axes: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {"xAxis": self.x_axis, "yAxes": list(self.y_axes)}


@dataclass(frozen=True)
class ChartRequest:
    kind: str = DEFAULT_CHART_CONFIG.default_kind
    dimension: str = DEFAULT_CHART_CONFIG.default_dimension
    selection: AxisSelection = field(default_factory=AxisSelection)

    def to_dict(self) -> Dict[str, Any]:
        return {"chartType": self.kind, "dimension": self.dimension, **self.selection.to_dict()}


def _as_str_list(values: Optional[Iterable[object]]) -> List[str]:
    if not values:
        return []
    out: List[str] = []
    for v in values:
        if v is None:
            continue
        s = str(v).strip()
        if s and s not in out:
            out.append(s)
    return out


def parse_y_axes(raw: object) -> List[str]:
    """Accept a list of column names or its JSON encoding (as posted by upload forms)."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise FormatError(f"yAxes must be a JSON list of column names: {e.msg}") from e
        if isinstance(raw, str):
            raw = [raw]
    if not isinstance(raw, (list, tuple)):
        raise FormatError("yAxes must be a list of column names")
    return _as_str_list(raw)


def normalize_request(raw: Optional[dict], *, config: ChartConfig = DEFAULT_CHART_CONFIG) -> ChartRequest:
    raw = raw or {}
    kind = str(raw.get("chartType") or raw.get("kind") or config.default_kind).strip().lower()
    dimension = str(raw.get("dimension") or config.default_dimension).strip().lower()
    x_axis = str(raw.get("xAxis") or raw.get("x_axis") or "").strip()
    y_raw = raw.get("yAxes") if "yAxes" in raw else raw.get("y_axes")
    selection = AxisSelection(x_axis=x_axis, y_axes=tuple(parse_y_axes(y_raw)))
    return ChartRequest(kind=kind, dimension=dimension, selection=selection)


def default_axes(columns: Sequence[str]) -> AxisSelection:
    x_axis = columns[0] if columns else ""
    y_axes = (columns[1],) if len(columns) > 1 else ()
    return AxisSelection(x_axis=x_axis, y_axes=y_axes)


def validate_axes(selection: AxisSelection, columns: Sequence[str]) -> None:
    if selection.x_axis and selection.x_axis not in columns:
        raise InvalidAxisError(
            f'Selected X-axis column "{selection.x_axis}" not found in data', column=selection.x_axis
        )
    for col in selection.y_axes:
        if col not in columns:
            raise InvalidAxisError(f'Selected Y-axis column "{col}" not found in data', column=col)


def resolve_y_axes(selection: AxisSelection, columns: Sequence[str]) -> Tuple[str, ...]:
    if selection.y_axes:
        return selection.y_axes
    if len(columns) < 2:
        raise InsufficientColumnsError("At least two columns are needed to pick a default Y-axis")
    return (columns[1],)
