from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import altair as alt
import pandas as pd

from xlens_core.columns import ColumnClassification, classify_columns, require_numeric
from xlens_core.config import DEFAULT_CHART_CONFIG, ChartConfig
from xlens_core.data import SheetTable, coerce_number, format_label
from xlens_core.errors import ChartConfigError, InsufficientColumnsError, InvalidAxisError
from xlens_core.selection import AxisSelection, resolve_y_axes, validate_axes


alt.data_transformers.disable_max_rows()

logger = logging.getLogger(__name__)

SNAPSHOT_SERIES_NAME = "Current Values"
SNAPSHOT_KINDS = {"pie", "doughnut", "radar"}


@dataclass(frozen=True)
class ChartSeries:
    name: str
    points: List[Any]
    style: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.name, "data": list(self.points), **self.style}


@dataclass(frozen=True)
class ChartSpec:
    kind: str
    dimension: str
    labels: Optional[List[str]]
    series: Tuple[ChartSeries, ...]
    x_column: str = ""
    value_columns: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chartType": self.kind,
            "dimension": self.dimension,
            "labels": list(self.labels) if self.labels is not None else None,
            "datasets": [s.to_dict() for s in self.series],
        }


def _hue(index: int, count: int) -> str:
    hue = index * 360 / max(count, 1)
    return str(int(hue)) if float(hue).is_integer() else str(hue)


def hsl(index: int, count: int) -> str:
    return f"hsl({_hue(index, count)}, 70%, 50%)"


def hsla(index: int, count: int, alpha: float) -> str:
    return f"hsla({_hue(index, count)}, 70%, 50%, {alpha})"


def _series_style(kind: str, index: int, count: int, is_3d: bool, config: ChartConfig) -> Dict[str, Any]:
    style: Dict[str, Any] = {
        "borderColor": hsl(index, count),
        "backgroundColor": hsla(index, count, 0.5),
    }
    if not is_3d:
        return style
    is_line = kind == "line"
    style.update(
        {
            "borderWidth": 3 if is_line else 2,
            "backgroundColor": "transparent" if is_line else hsla(index, count, 0.8),
            "fill": not is_line,
            "tension": 0.4 if is_line else 0,
            "depth": index * config.depth_step,
        }
    )
    if kind == "bar":
        style.update({"borderRadius": 4, "maxBarThickness": 30})
    return style


def _snapshot_style(labels: List[str], is_3d: bool, config: ChartConfig) -> Dict[str, Any]:
    style: Dict[str, Any] = {"colors": [hsl(i, len(labels)) for i in range(len(labels))]}
    if is_3d:
        style.update({"borderWidth": 2, "depth": config.depth_step})
    return style


def _resolve_kind(kind: str, dimension: str, config: ChartConfig) -> Tuple[str, str]:
    kind = (kind or config.default_kind).strip().lower()
    dimension = (dimension or config.default_dimension).strip().lower()
    chart_type = config.chart_type(kind)
    if chart_type is None:
        raise ChartConfigError(f'Unsupported chart type "{kind}"')
    if not config.has_dimension(dimension):
        raise ChartConfigError(f'Unsupported chart dimension "{dimension}"')
    if dimension == "3d" and not chart_type.supports_3d:
        logger.debug("%s does not support 3D; falling back to 2D", kind)
        dimension = "2d"
    return kind, dimension


def _build_series_chart(
    table: SheetTable, kind: str, dimension: str, selection: AxisSelection, config: ChartConfig
) -> ChartSpec:
    y_axes = resolve_y_axes(selection, table.columns)
    if selection.x_axis:
        labels = [format_label(v) for v in table.column_values(selection.x_axis)]
    else:
        labels = [f"Data Point {i + 1}" for i in range(table.row_count)]
    is_3d = dimension == "3d"
    series = tuple(
        ChartSeries(
            name=col,
            points=[coerce_number(v) for v in table.column_values(col)],
            style=_series_style(kind, i, len(y_axes), is_3d, config),
        )
        for i, col in enumerate(y_axes)
    )
    return ChartSpec(kind, dimension, labels, series, x_column=selection.x_axis, value_columns=y_axes)


def _build_snapshot_chart(
    table: SheetTable, kind: str, dimension: str, selection: AxisSelection, config: ChartConfig
) -> ChartSpec:
    # Each slice is the column's last-row value, not an aggregate.
    columns = resolve_y_axes(selection, table.columns)
    labels = list(columns)
    last = table.last_row
    series = ChartSeries(
        name=SNAPSHOT_SERIES_NAME,
        points=[coerce_number(last.get(col)) for col in columns],
        style=_snapshot_style(labels, dimension == "3d", config),
    )
    return ChartSpec(kind, dimension, labels, (series,), value_columns=columns)


def _build_scatter_chart(
    table: SheetTable,
    dimension: str,
    selection: AxisSelection,
    classification: ColumnClassification,
    config: ChartConfig,
) -> ChartSpec:
    # The first selected column supplies X; the first table column only fills in when too few were picked.
    if selection.x_axis:
        candidates = (selection.x_axis, *resolve_y_axes(selection, table.columns))
    elif len(selection.y_axes) >= 2:
        candidates = selection.y_axes
    else:
        candidates = (table.columns[0], *resolve_y_axes(selection, table.columns))
    selected: List[str] = []
    for col in candidates:
        if col not in selected:
            selected.append(col)

    usable = [c for c in selected if classification.is_numeric(c)]
    if len(usable) < 2:
        raise InsufficientColumnsError("Scatter plots need at least two numeric columns")
    for col in selected:
        if col not in usable:
            raise InvalidAxisError(f'Column "{col}" is not numeric and cannot be plotted', column=col)

    x_col, y_cols = selected[0], selected[1:]
    xs = [coerce_number(v) for v in table.column_values(x_col)]
    is_3d = dimension == "3d"
    series = []
    for i, col in enumerate(y_cols):
        ys = [coerce_number(v) for v in table.column_values(col)]
        points = [{"x": x, "y": y} for x, y in zip(xs, ys) if x is not None and y is not None]
        series.append(ChartSeries(name=col, points=points, style=_series_style("scatter", i, len(y_cols), is_3d, config)))
    return ChartSpec("scatter", dimension, None, tuple(series), x_column=x_col, value_columns=tuple(y_cols))


def build_chart_spec(
    table: SheetTable,
    kind: str,
    dimension: str,
    selection: AxisSelection,
    config: ChartConfig = DEFAULT_CHART_CONFIG,
    classification: Optional[ColumnClassification] = None,
) -> ChartSpec:
    kind, dimension = _resolve_kind(kind, dimension, config)
    validate_axes(selection, table.columns)
    classification = require_numeric(classification or classify_columns(table))

    if kind == "scatter":
        spec = _build_scatter_chart(table, dimension, selection, classification, config)
    elif kind in SNAPSHOT_KINDS:
        spec = _build_snapshot_chart(table, kind, dimension, selection, config)
    else:
        spec = _build_series_chart(table, kind, dimension, selection, config)
    logger.debug("Built %s/%s chart with %d series", spec.kind, spec.dimension, len(spec.series))
    return spec


def chart_to_vega(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def to_vega_spec(spec: ChartSpec) -> Dict[str, Any]:
    if spec.kind == "scatter":
        rows = [{"series": s.name, "x": p["x"], "y": p["y"]} for s in spec.series for p in s.points]
        chart = (
            alt.Chart(pd.DataFrame(rows, columns=["series", "x", "y"]))
            .mark_point(filled=True)
            .encode(
                x=alt.X("x:Q", title=spec.x_column),
                y=alt.Y("y:Q", title="Value"),
                color=alt.Color("series:N", title="Series"),
                tooltip=["series", "x", "y"],
            )
        )
        return chart_to_vega(chart)

    labels = spec.labels or []
    if spec.kind in SNAPSHOT_KINDS:
        points = spec.series[0].points if spec.series else []
        df = pd.DataFrame({"label": labels, "value": points, "slot": 1})
        color = alt.Color("label:N", title="Column", sort=labels)
        if spec.kind == "radar":
            chart = (
                alt.Chart(df)
                .mark_arc(stroke="#fff")
                .encode(
                    theta=alt.Theta("slot:Q", stack=True),
                    radius=alt.Radius("value:Q", scale=alt.Scale(type="sqrt", zero=True)),
                    color=color,
                    tooltip=["label", "value"],
                )
            )
        else:
            inner = 60 if spec.kind == "doughnut" else 0
            chart = (
                alt.Chart(df)
                .mark_arc(innerRadius=inner)
                .encode(theta=alt.Theta("value:Q"), color=color, tooltip=["label", "value"])
            )
        return chart_to_vega(chart)

    rows = [
        {"order": i, "label": label, "series": s.name, "value": value}
        for s in spec.series
        for i, (label, value) in enumerate(zip(labels, s.points))
    ]
    df = pd.DataFrame(rows, columns=["order", "label", "series", "value"])
    base = alt.Chart(df)
    mark = base.mark_bar() if spec.kind == "bar" else base.mark_line(point=True)
    encoding = {
        "x": alt.X("label:N", title=spec.x_column or "Data Point", sort=alt.SortField(field="order")),
        "y": alt.Y("value:Q", title="Value"),
        "color": alt.Color("series:N", title="Series"),
        "tooltip": ["label", "series", "value"],
    }
    if spec.kind == "bar":
        encoding["xOffset"] = alt.XOffset("series:N")
    return chart_to_vega(mark.encode(**encoding))
