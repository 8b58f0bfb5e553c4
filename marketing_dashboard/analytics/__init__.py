"""Analytics module for dashboard metric computation."""

from .aggregator import MetricAggregator, aggregate
from .models import (
    DEFAULT_TIME_RANGE,
    AggregationResult,
    CampaignRecord,
    CampaignTableRow,
    ColorToken,
    Direction,
    KpiInput,
    KpiMetric,
    LiftValue,
    PerformanceSeries,
    Recommendation,
    SegmentationSlice,
    SegmentInput,
    SeriesPoint,
    StatusBadge,
    TimeRange,
    TrendBadge,
)
from .ranking import (
    RankingPolicy,
    RecommendationRanker,
    identity_policy,
    lift_magnitude_policy,
    parse_lift,
)
from .series import (
    FixedRandomSource,
    NumpyRandomSource,
    RandomSource,
    SeriesGenerator,
    SeriesParameters,
    generate,
)
from .trend import classify, classify_status

__all__ = [
    "AggregationResult",
    "CampaignRecord",
    "CampaignTableRow",
    "ColorToken",
    "DEFAULT_TIME_RANGE",
    "Direction",
    "FixedRandomSource",
    "KpiInput",
    "KpiMetric",
    "LiftValue",
    "MetricAggregator",
    "NumpyRandomSource",
    "PerformanceSeries",
    "RandomSource",
    "RankingPolicy",
    "Recommendation",
    "RecommendationRanker",
    "SegmentationSlice",
    "SegmentInput",
    "SeriesGenerator",
    "SeriesParameters",
    "SeriesPoint",
    "StatusBadge",
    "TimeRange",
    "TrendBadge",
    "aggregate",
    "classify",
    "classify_status",
    "generate",
    "identity_policy",
    "lift_magnitude_policy",
    "parse_lift",
]
