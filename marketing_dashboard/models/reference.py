"""Pydantic models for reference data validation."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..analytics.models import CampaignRecord, KpiInput, Recommendation, SegmentInput


class KpiRow(BaseModel):
    """Single KPI tile definition."""

    model_config = ConfigDict(strict=True, extra="forbid")

    title: str
    value: str  # Already formatted for display ("4.2x", "$1.52")
    change: float  # Percent vs last period, signed

    def to_record(self) -> KpiInput:
        return KpiInput(title=self.title, value=self.value, change=self.change)


class SegmentRow(BaseModel):
    """Audience segment with its raw user count."""

    model_config = ConfigDict(strict=True, extra="forbid")

    name: str
    value: int = Field(ge=0)
    fill: Optional[str] = None  # Hex color

    def to_record(self) -> SegmentInput:
        return SegmentInput(label=self.name, count=self.value, color=self.fill)


class RecommendationRow(BaseModel):
    """Optimization recommendation."""

    model_config = ConfigDict(strict=True, extra="forbid")

    id: int
    insight: str
    potential_lift: str  # "+15% CTR"
    action: str

    def to_record(self) -> Recommendation:
        return Recommendation(
            id=self.id,
            insight_text=self.insight,
            projected_lift=self.potential_lift,
            action_text=self.action,
        )


class CampaignRow(BaseModel):
    """Campaign table entry."""

    model_config = ConfigDict(strict=True, extra="forbid")

    id: int
    name: str
    platform: str
    status: Literal["Active", "Paused"]
    spend: float = Field(ge=0)  # Currency, unformatted
    roas: float = Field(ge=0)
    trend: float  # Percent, signed

    def to_record(self) -> CampaignRecord:
        return CampaignRecord(
            id=self.id,
            name=self.name,
            platform=self.platform,
            status=self.status,
            spend=self.spend,
            roas=self.roas,
            trend_percent=self.trend,
        )
