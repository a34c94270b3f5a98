import pytest

from xlens_core.errors import AnalysisError, FormatError, InvalidAxisError
from xlens_core.pipeline import analyze_workbook, reanalyze
from xlens_core.selection import AxisSelection, ChartRequest


def test_default_analysis(sales_xlsx):
    result = analyze_workbook(sales_xlsx)
    payload = result.to_dict()
    assert payload["columns"] == ["Month", "Revenue", "Units", "Region"]
    assert payload["numericColumns"] == ["Revenue", "Units"]
    assert payload["data"]["labels"] == ["Data Point 1", "Data Point 2", "Data Point 3", "Data Point 4"]
    assert payload["analysis"] == {
        "keyInsight": "Analysis of 4 rows shows trends in 1 numeric columns.",
        "trendAnalysis": "Revenue shows a increasing trend with average of 115.00",
    }
    assert payload["rowCount"] == 4


def test_explicit_selection(sales_xlsx):
    request = ChartRequest(kind="line", selection=AxisSelection("Month", ("Revenue", "Units")))
    result = analyze_workbook(sales_xlsx, request)
    assert result.chart.labels == ["Jan", "Feb", "Mar", "Apr"]
    assert [t.direction for t in result.trends] == ["increasing", "decreasing"]
    assert result.summary.trend_analysis.endswith("Units shows a decreasing trend with average of 9.75")


def test_reanalyze_from_stored_selection(sales_xlsx):
    stored = {"chartType": "radar", "dimension": "3d", "xAxis": "", "yAxes": '["Revenue", "Units"]'}
    result = reanalyze(sales_xlsx, stored)
    assert result.request.dimension == "2d"
    assert result.chart.series[0].points == [150.0, 8.0]
    assert result.to_dict()["selection"]["yAxes"] == ["Revenue", "Units"]


def test_trends_follow_scatter_series(sales_xlsx):
    result = reanalyze(sales_xlsx, {"chartType": "scatter", "xAxis": "Revenue", "yAxes": ["Units"]})
    assert [t.column for t in result.trends] == ["Units"]


def test_text_column_cannot_be_trended(sales_xlsx):
    with pytest.raises(AnalysisError):
        reanalyze(sales_xlsx, {"yAxes": ["Region"]})


def test_errors_surface_unchanged(sales_xlsx):
    with pytest.raises(InvalidAxisError):
        reanalyze(sales_xlsx, {"xAxis": "Quarter"})
    with pytest.raises(FormatError):
        analyze_workbook(b"not a workbook")
