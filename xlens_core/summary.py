from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

from xlens_core.trends import TrendResult


@dataclass(frozen=True)
class Summary:
    key_insight: str
    trend_analysis: str

    def to_dict(self) -> Dict[str, str]:
        return {"keyInsight": self.key_insight, "trendAnalysis": self.trend_analysis}


def describe_trend(trend: TrendResult) -> str:
    return f"{trend.column} shows a {trend.direction} trend with average of {trend.average:.2f}"


def summarize(row_count: int, trends: Sequence[TrendResult]) -> Summary:
    key_insight = f"Analysis of {row_count} rows shows trends in {len(trends)} numeric columns."
    trend_analysis = ". ".join(describe_trend(t) for t in trends)
    return Summary(key_insight=key_insight, trend_analysis=trend_analysis)
