from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ChartSelectionModel(BaseModel):
    chartType: str = "bar"
    dimension: str = "2d"
    xAxis: str = ""
    yAxes: List[str] = Field(default_factory=list)


class AnalysisModel(BaseModel):
    keyInsight: str
    trendAnalysis: str


class FileInfoModel(BaseModel):
    name: str
    size: str
    chartType: str
    dimension: str
    xAxis: str
    yAxes: List[str] = Field(default_factory=list)


class ColumnsResponse(BaseModel):
    columns: List[str]
    numeric: List[str]
    nonNumeric: List[str]
    defaults: ChartSelectionModel


class ErrorResponse(BaseModel):
    error: str
    message: str
    column: Optional[str] = None
