from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from xlens_api.schemas import (
    AnalysisModel,
    ChartSelectionModel,
    ColumnsResponse,
    ErrorResponse,
    FileInfoModel,
)
from xlens_core.charts import to_vega_spec
from xlens_core.columns import classify_columns
from xlens_core.config import ALLOWED_EXTENSIONS, DEFAULT_CHART_CONFIG, MAX_UPLOAD_BYTES
from xlens_core.data import load_sheet
from xlens_core.errors import FormatError, XlensError
from xlens_core.formatting import format_file_size
from xlens_core.pipeline import reanalyze
from xlens_core.selection import default_axes


app = FastAPI(title="Xlens Analytics API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with non-finite floats mapped to null."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(content=jsonable_encoder(data, custom_encoder={float: _safe_float}))


def _client_error(exc: XlensError) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, message=str(exc), column=getattr(exc, "column", None))
    return JSONResponse(status_code=400, content=body.model_dump())


def _server_error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": type(exc).__name__, "message": str(exc)})


def _read_upload(file: UploadFile) -> bytes:
    ext = Path(file.filename or "").suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise FormatError("Only Excel files (.xlsx or .xls) are allowed")
    data = file.file.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise FormatError(f"File size cannot exceed {format_file_size(MAX_UPLOAD_BYTES)}")
    return data


def _selection(chart_type: str, dimension: str, x_axis: str, y_axes: Optional[str]) -> dict:
    return {"chartType": chart_type, "dimension": dimension, "xAxis": x_axis, "yAxes": y_axes}


@app.get("/meta/chart-types")
def meta_chart_types():
    return _json(DEFAULT_CHART_CONFIG.to_dict())


@app.post("/columns")
def columns(file: UploadFile = File(...)):
    try:
        classification = classify_columns(load_sheet(_read_upload(file)))
        defaults = default_axes(classification.columns)
        payload = ColumnsResponse(
            columns=list(classification.columns),
            numeric=list(classification.numeric),
            nonNumeric=list(classification.non_numeric),
            defaults=ChartSelectionModel(xAxis=defaults.x_axis, yAxes=list(defaults.y_axes)),
        )
        return _json(payload.model_dump())
    except XlensError as exc:
        logger.info("columns rejected %s: %s", file.filename, exc)
        return _client_error(exc)
    except Exception as exc:
        logger.exception("columns failed")
        return _server_error(exc)


@app.post("/upload")
def upload(
    file: UploadFile = File(...),
    chartType: str = Form(default="bar"),
    dimension: str = Form(default="2d"),
    xAxis: str = Form(default=""),
    yAxes: Optional[str] = Form(default=None),
):
    try:
        data = _read_upload(file)
        result = reanalyze(data, _selection(chartType, dimension, xAxis, yAxes))
        payload = result.to_dict()
        payload["success"] = True
        payload["analysis"] = AnalysisModel(**result.summary.to_dict()).model_dump()
        payload["file"] = FileInfoModel(
            name=file.filename or "",
            size=format_file_size(len(data)),
            **result.request.to_dict(),
        ).model_dump()
        return _json(payload)
    except XlensError as exc:
        logger.info("upload rejected %s: %s", file.filename, exc)
        return _client_error(exc)
    except Exception as exc:
        logger.exception("upload failed")
        return _server_error(exc)


@app.post("/update-chart")
def update_chart(
    file: UploadFile = File(...),
    chartType: str = Form(default="bar"),
    dimension: str = Form(default="2d"),
    xAxis: str = Form(default=""),
    yAxes: Optional[str] = Form(default=None),
):
    try:
        result = reanalyze(_read_upload(file), _selection(chartType, dimension, xAxis, yAxes))
        return _json({"data": result.chart.to_dict(), "analysis": result.summary.to_dict()})
    except XlensError as exc:
        logger.info("update_chart rejected %s: %s", file.filename, exc)
        return _client_error(exc)
    except Exception as exc:
        logger.exception("update_chart failed")
        return _server_error(exc)


@app.post("/vega")
def vega(
    file: UploadFile = File(...),
    chartType: str = Form(default="bar"),
    dimension: str = Form(default="2d"),
    xAxis: str = Form(default=""),
    yAxes: Optional[str] = Form(default=None),
):
    try:
        result = reanalyze(_read_upload(file), _selection(chartType, dimension, xAxis, yAxes))
        return _json({"spec": to_vega_spec(result.chart), "analysis": result.summary.to_dict()})
    except XlensError as exc:
        logger.info("vega rejected %s: %s", file.filename, exc)
        return _client_error(exc)
    except Exception as exc:
        logger.exception("vega failed")
        return _server_error(exc)
