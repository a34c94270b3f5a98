from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple


ALLOWED_EXTENSIONS = (".xlsx", ".xls")
MAX_UPLOAD_BYTES = int(float(os.getenv("XLENS_MAX_UPLOAD_MB", "10")) * 1024 * 1024)

DEFAULT_CHART_KIND = "bar"
DEFAULT_DIMENSION = "2d"


@dataclass(frozen=True)
class ChartType:
    id: str
    label: str
    supports_3d: bool = True


@dataclass(frozen=True)
class DimensionOption:
    id: str
    label: str


CHART_TYPES: Tuple[ChartType, ...] = (
    ChartType("bar", "Bar Chart"),
    ChartType("line", "Line Chart"),
    ChartType("pie", "Pie Chart"),
    ChartType("scatter", "Scatter Plot"),
    ChartType("radar", "Radar Chart", supports_3d=False),
    ChartType("doughnut", "Doughnut Chart"),
)

DIMENSION_OPTIONS: Tuple[DimensionOption, ...] = (
    DimensionOption("2d", "2D"),
    DimensionOption("3d", "3D"),
)


@dataclass(frozen=True)
class ChartConfig:
    chart_types: Tuple[ChartType, ...] = CHART_TYPES
    dimensions: Tuple[DimensionOption, ...] = DIMENSION_OPTIONS
    default_kind: str = DEFAULT_CHART_KIND
    default_dimension: str = DEFAULT_DIMENSION
    # synthetic depth step between series when rendering in 3D
    depth_step: float = 1.0

    def chart_type(self, kind: str) -> Optional[ChartType]:
        for chart_type in self.chart_types:
            if chart_type.id == kind:
                return chart_type
        return None

    def has_dimension(self, dimension: str) -> bool:
        return any(d.id == dimension for d in self.dimensions)

    def to_dict(self) -> dict:
        return {
            "chartTypes": [
                {"id": c.id, "label": c.label, "supports3D": c.supports_3d} for c in self.chart_types
            ],
            "dimensions": [{"id": d.id, "label": d.label} for d in self.dimensions],
            "defaults": {"chartType": self.default_kind, "dimension": self.default_dimension},
        }


DEFAULT_CHART_CONFIG = ChartConfig()
