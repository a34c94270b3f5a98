from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from xlens_core.charts import ChartSpec, build_chart_spec
from xlens_core.columns import classify_columns
from xlens_core.config import DEFAULT_CHART_CONFIG, ChartConfig
from xlens_core.data import SheetTable, load_sheet
from xlens_core.selection import ChartRequest, normalize_request
from xlens_core.summary import Summary, summarize
from xlens_core.trends import TrendResult, analyze_trends


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    chart: ChartSpec
    trends: Tuple[TrendResult, ...]
    summary: Summary
    columns: Tuple[str, ...]
    numeric_columns: Tuple[str, ...]
    request: ChartRequest
    row_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.chart.to_dict(),
            "analysis": self.summary.to_dict(),
            "trends": [t.to_dict() for t in self.trends],
            "columns": list(self.columns),
            "numericColumns": list(self.numeric_columns),
            "selection": self.request.to_dict(),
            "rowCount": self.row_count,
        }


def analyze_table(
    table: SheetTable, request: ChartRequest, *, config: ChartConfig = DEFAULT_CHART_CONFIG
) -> AnalysisResult:
    classification = classify_columns(table)
    chart = build_chart_spec(
        table, request.kind, request.dimension, request.selection, config=config, classification=classification
    )
    trends = tuple(analyze_trends(table, chart.value_columns))
    summary = summarize(table.row_count, trends)
    # the builder may clamp the dimension (radar has no 3D)
    resolved = ChartRequest(kind=chart.kind, dimension=chart.dimension, selection=request.selection)
    return AnalysisResult(
        chart=chart,
        trends=trends,
        summary=summary,
        columns=classification.columns,
        numeric_columns=classification.numeric,
        request=resolved,
        row_count=table.row_count,
    )


def analyze_workbook(
    data: bytes, request: Optional[ChartRequest] = None, *, config: ChartConfig = DEFAULT_CHART_CONFIG
) -> AnalysisResult:
    request = request or ChartRequest()
    table = load_sheet(data)
    result = analyze_table(table, request, config=config)
    logger.info(
        "Analyzed %d rows as %s/%s over %s", result.row_count, result.chart.kind, result.chart.dimension,
        ", ".join(result.chart.value_columns),
    )
    return result


def reanalyze(data: bytes, raw_selection: Optional[dict], *, config: ChartConfig = DEFAULT_CHART_CONFIG) -> AnalysisResult:
    """Recompute chart and summary from a stored selection record (chartType/dimension/xAxis/yAxes)."""
    return analyze_workbook(data, normalize_request(raw_selection, config=config), config=config)
