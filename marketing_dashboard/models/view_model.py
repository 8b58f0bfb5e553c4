"""DashboardViewModel - render-ready output consumed by the presentation layer."""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..analytics.models import (
    CampaignTableRow,
    KpiMetric,
    PerformanceSeries,
    Recommendation,
    SegmentationSlice,
    TimeRange,
    TrendBadge,
)


def _badge_dict(badge: TrendBadge) -> dict[str, Any]:
    return {
        "direction": badge.direction.value,
        "glyph": badge.glyph,
        "color": badge.color.value,
        "magnitude": badge.magnitude,
        "label": badge.label,
    }


@dataclass(frozen=True)
class DashboardViewModel:
    """Everything the dashboard draws for one render cycle.

    All values are pre-computed; presentation only maps fields to visuals.
    """

    # Metadata
    generated_at: datetime
    time_range: TimeRange

    # Performance trend
    series: PerformanceSeries
    series_change: TrendBadge  # Last vs first actual value, drives the legend

    # KPI tiles
    kpis: tuple[KpiMetric, ...]

    # Audience segmentation
    segmentation: tuple[SegmentationSlice, ...]
    total_users: int
    total_users_text: str  # "11.6K"

    # Recommendations, already ordered
    recommendations: tuple[Recommendation, ...]

    # Campaign table
    campaigns: tuple[CampaignTableRow, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "meta": {
                "generated_at": self.generated_at.isoformat(),
                "time_range": self.time_range.code,
            },
            "series": {
                "points": [
                    {"label": p.label, "actual": p.actual, "predicted": p.predicted}
                    for p in self.series.points
                ],
                "forecast_start_index": self.series.forecast_start_index,
                "forecast_start_label": self.series.forecast_start_label,
                "trend": self.series.trend,
                "change": _badge_dict(self.series_change),
            },
            "kpis": [
                {
                    "title": k.title,
                    "value": k.formatted_value,
                    "percent_change": k.percent_change,
                    "change_text": k.change_text,
                    "trend": _badge_dict(k.trend),
                }
                for k in self.kpis
            ],
            "segmentation": {
                "slices": [
                    {
                        "label": s.label,
                        "count": s.count,
                        "share_of_total": s.share_of_total,
                        "share_text": s.share_text,
                        "color": s.color,
                    }
                    for s in self.segmentation
                ],
                "total_users": self.total_users,
                "total_users_text": self.total_users_text,
            },
            "recommendations": [
                {
                    "id": r.id,
                    "insight": r.insight_text,
                    "projected_lift": r.projected_lift,
                    "action": r.action_text,
                }
                for r in self.recommendations
            ],
            "campaigns": [
                {
                    "id": row.campaign.id,
                    "name": row.campaign.name,
                    "platform": row.campaign.platform,
                    "status": row.status.status,
                    "status_color": row.status.color.value,
                    "spend": row.campaign.spend,
                    "spend_text": row.spend_text,
                    "roas": row.campaign.roas,
                    "roas_text": row.roas_text,
                    "trend": _badge_dict(row.trend),
                }
                for row in self.campaigns
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str, ensure_ascii=False)

    def get_executive_summary(self) -> dict[str, Any]:
        """Condensed summary for report headers."""
        active = [row for row in self.campaigns if row.status.status == "Active"]
        return {
            "time_range": self.time_range.code,
            "total_users": self.total_users,
            "kpis": {k.title: k.trend.label for k in self.kpis},
            "active_campaigns": len(active),
            "active_spend": round(sum(row.campaign.spend for row in active), 2),
            "top_recommendation": (
                self.recommendations[0].insight_text if self.recommendations else None
            ),
            "series_trend": self.series.trend,
        }
