"""Output models for dashboard calculations."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

import polars as pl

from ..exceptions import ValidationError


class TimeRange(Enum):
    """Selectable trend window, bound to a fixed point count."""

    INTRADAY = ("24H", 12)
    WEEK = ("7D", 7)
    MONTH = ("30D", 30)
    QUARTER = ("90D", 90)

    def __init__(self, code: str, point_count: int):
        self.code = code
        self.point_count = point_count

    @classmethod
    def from_code(cls, value: str) -> "TimeRange":
        """Resolve an enum name ("month") or display code ("30D")."""
        needle = value.strip()
        for member in cls:
            if needle.upper() in (member.name, member.code.upper()):
                return member
        raise ValidationError(
            f"Unknown time range: {value!r}. "
            f"Expected one of {[m.code for m in cls]}"
        )


DEFAULT_TIME_RANGE = TimeRange.MONTH


class Direction(str, Enum):
    """Sign category of a delta."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class ColorToken(str, Enum):
    """Semantic color tokens resolved by the presentation layer."""

    POSITIVE = "positive"  # Growth
    NEGATIVE = "negative"  # Decline
    NEUTRAL = "neutral"  # No change
    ACTIVE = "active"  # Running campaign
    MUTED = "muted"  # Paused campaign


@dataclass(frozen=True)
class TrendBadge:
    """Classified delta with its display glyph and color."""

    direction: Direction
    glyph: str
    color: ColorToken
    magnitude: float  # abs(delta)

    @property
    def label(self) -> str:
        if self.direction is Direction.FLAT:
            return self.glyph
        return f"{self.glyph} {format_number(self.magnitude)}%"


@dataclass(frozen=True)
class StatusBadge:
    """Campaign status with its badge color."""

    status: Literal["Active", "Paused"]
    color: ColorToken


@dataclass(frozen=True)
class SeriesPoint:
    """Single point of the performance trend."""

    label: str
    actual: int
    predicted: int | None = None  # Only set in the forecast tail


@dataclass(frozen=True)
class PerformanceSeries:
    """Generated trend for one time range."""

    time_range: TimeRange
    points: tuple[SeriesPoint, ...]
    forecast_start_index: int | None  # First index carrying a prediction
    trend: Literal["increasing", "decreasing", "stable"]

    @property
    def forecast_start_label(self) -> str | None:
        if self.forecast_start_index is None:
            return None
        return self.points[self.forecast_start_index].label

    def __len__(self) -> int:
        return len(self.points)

    def to_frame(self) -> pl.DataFrame:
        """Series as a DataFrame with label, actual and predicted columns."""
        return pl.DataFrame(
            {
                "label": [p.label for p in self.points],
                "actual": [p.actual for p in self.points],
                "predicted": [p.predicted for p in self.points],
            },
            schema={"label": pl.Utf8, "actual": pl.Int64, "predicted": pl.Int64},
        )


@dataclass(frozen=True)
class KpiInput:
    """Raw KPI value as supplied by reference data."""

    title: str
    value: str  # Pre-formatted, e.g. "$1.52"
    change: float  # Percent change vs last period


@dataclass(frozen=True)
class SegmentInput:
    """Raw audience segment count."""

    label: str
    count: int
    color: str | None = None


@dataclass(frozen=True)
class KpiMetric:
    """KPI tile with its classified period-over-period delta."""

    title: str
    formatted_value: str
    percent_change: float
    trend: TrendBadge

    @property
    def change_text(self) -> str:
        return f"{format_number(abs(self.percent_change))}% vs last period"


@dataclass(frozen=True)
class SegmentationSlice:
    """One audience segment and its share of the total."""

    label: str
    count: int
    share_of_total: float  # 0..1
    color: str | None = None

    @property
    def share_text(self) -> str:
        return f"{self.share_of_total * 100:.1f}%"


@dataclass(frozen=True)
class AggregationResult:
    """Output of a single aggregation pass."""

    kpis: tuple[KpiMetric, ...]
    segmentation: tuple[SegmentationSlice, ...]
    total_users: int


@dataclass(frozen=True)
class LiftValue:
    """Parsed projected lift, e.g. "+15% CTR"."""

    raw: str
    percent: float | None  # None when unparsable
    unit: str | None

    @property
    def is_parsed(self) -> bool:
        return self.percent is not None


@dataclass(frozen=True)
class Recommendation:
    """Optimization advice with its projected lift."""

    id: int
    insight_text: str
    projected_lift: str
    action_text: str


@dataclass(frozen=True)
class CampaignRecord:
    """Campaign as supplied by reference data."""

    id: int
    name: str
    platform: str
    status: Literal["Active", "Paused"]
    spend: float
    roas: float
    trend_percent: float


@dataclass(frozen=True)
class CampaignTableRow:
    """Campaign table row with all display values resolved."""

    campaign: CampaignRecord
    status: StatusBadge
    trend: TrendBadge
    spend_text: str  # "15,200"
    roas_text: str  # "4.5x"


def format_number(value: float) -> str:
    """Drop the trailing ".0" of whole numbers (12.0 -> "12", 2.1 -> "2.1")."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


COMPACT_UNITS = ((1_000, "K"), (1_000_000, "M"), (1_000_000_000, "B"))


def format_compact(value: int) -> str:
    """Compact count for headline figures (11600 -> "11.6K", 999950 -> "1M")."""
    for i in reversed(range(len(COMPACT_UNITS))):
        threshold, suffix = COMPACT_UNITS[i]
        if abs(value) >= threshold:
            scaled = round(value / threshold, 1)
            # Rounding up to 1000 of a unit moves to the next unit
            if abs(scaled) >= 1000 and i + 1 < len(COMPACT_UNITS):
                threshold, suffix = COMPACT_UNITS[i + 1]
                scaled = round(value / threshold, 1)
            return f"{format_number(scaled)}{suffix}"
    return str(value)
