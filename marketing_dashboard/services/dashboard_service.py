"""Dashboard service - orchestrates generation, aggregation and assembly."""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..analytics import (
    DEFAULT_TIME_RANGE,
    AggregationResult,
    CampaignRecord,
    CampaignTableRow,
    MetricAggregator,
    PerformanceSeries,
    RandomSource,
    RankingPolicy,
    Recommendation,
    RecommendationRanker,
    SeriesGenerator,
    SeriesParameters,
    TimeRange,
    classify,
    classify_status,
)
from ..analytics.models import format_compact
from ..analytics.stats import percent_change
from ..exceptions import ValidationError
from ..ingestion import ReferenceData, ReferenceDataLoader
from ..models.view_model import DashboardViewModel

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ViewModelAssembler:
    """Composes computed parts into a DashboardViewModel.

    Holds no state between calls; the clock is the only injected dependency.
    """

    def __init__(self, clock: Clock | None = None):
        self.clock = clock or utc_now

    def assemble(
        self,
        series: PerformanceSeries,
        aggregation: AggregationResult,
        recommendations: Sequence[Recommendation],
        campaigns: Sequence[CampaignRecord],
    ) -> DashboardViewModel:
        """Group all outputs into one render-ready structure.

        Raises:
            ValidationError: If a campaign has negative spend or ROAS, an
                unknown status, or a duplicate id
        """
        return DashboardViewModel(
            generated_at=self.clock(),
            time_range=series.time_range,
            series=series,
            series_change=classify(self._series_delta(series)),
            kpis=aggregation.kpis,
            segmentation=aggregation.segmentation,
            total_users=aggregation.total_users,
            total_users_text=format_compact(aggregation.total_users),
            recommendations=tuple(recommendations),
            campaigns=self.campaign_rows(campaigns),
        )

    def campaign_rows(
        self, campaigns: Sequence[CampaignRecord]
    ) -> tuple[CampaignTableRow, ...]:
        seen: set[int] = set()
        rows: list[CampaignTableRow] = []

        for campaign in campaigns:
            if campaign.id in seen:
                raise ValidationError(f"Duplicate campaign id: {campaign.id}")
            seen.add(campaign.id)

            if not campaign.spend >= 0:
                raise ValidationError(
                    f"Campaign {campaign.id} has invalid spend: {campaign.spend}"
                )
            if not campaign.roas >= 0:
                raise ValidationError(
                    f"Campaign {campaign.id} has invalid ROAS: {campaign.roas}"
                )

            rows.append(
                CampaignTableRow(
                    campaign=campaign,
                    status=classify_status(campaign.status),
                    trend=classify(campaign.trend_percent),
                    spend_text=f"{campaign.spend:,.0f}",
                    roas_text=f"{campaign.roas:.1f}x",
                )
            )

        return tuple(rows)

    def _series_delta(self, series: PerformanceSeries) -> float:
        if len(series) < 2:
            return 0.0
        return percent_change(series.points[0].actual, series.points[-1].actual)


class DashboardService:
    """Service for building the dashboard view model.

    Orchestrates:
    1. Loading reference data (KPIs, segments, recommendations, campaigns)
    2. Generating the performance series for the selected time range
    3. Aggregating KPIs and segmentation
    4. Ranking recommendations
    5. Assembling the view model

    Usage:
        service = DashboardService()
        view_model = service.build(TimeRange.WEEK)
    """

    def __init__(
        self,
        reference_path: Path | None = None,
        random_source: RandomSource | None = None,
        ranking_policy: RankingPolicy | None = None,
        series_params: SeriesParameters | None = None,
        clock: Clock | None = None,
    ):
        """Initialize service.

        Args:
            reference_path: Path to reference_data.yaml. Defaults to bundled config.
            random_source: Noise source for the series. A fresh unseeded source
                is used per build if None.
            ranking_policy: Recommendation ordering. Insertion order if None.
            series_params: Series shape constants.
            clock: Timestamp source for generated_at.
        """
        self.loader = ReferenceDataLoader(reference_path)
        self.random_source = random_source
        self.generator = SeriesGenerator(series_params)
        self.aggregator = MetricAggregator()
        self.ranker = RecommendationRanker(ranking_policy)
        self.assembler = ViewModelAssembler(clock)

    def build(
        self,
        time_range: TimeRange = DEFAULT_TIME_RANGE,
        reference: ReferenceData | None = None,
    ) -> DashboardViewModel:
        """Build the complete view model for a time range.

        Args:
            time_range: Selected trend window (default: 30D)
            reference: Pre-loaded reference data; loaded from disk if None

        Returns:
            DashboardViewModel ready for rendering
        """
        reference = reference or self.loader.load()

        series = self.generator.generate(time_range, self.random_source)
        aggregation = self.aggregator.aggregate(reference.kpis, reference.segments)
        recommendations = self.ranker.rank(reference.recommendations)

        view_model = self.assembler.assemble(
            series, aggregation, recommendations, reference.campaigns
        )
        logger.info(
            "Built dashboard for %s: %d points, %d KPIs, %d campaigns",
            time_range.code,
            len(series),
            len(view_model.kpis),
            len(view_model.campaigns),
        )
        return view_model

    def build_summary(self, time_range: TimeRange = DEFAULT_TIME_RANGE) -> dict[str, Any]:
        """Executive summary of a freshly built view model."""
        return self.build(time_range).get_executive_summary()


def assemble(
    series: PerformanceSeries,
    aggregation: AggregationResult,
    recommendations: Sequence[Recommendation],
    campaigns: Sequence[CampaignRecord],
    clock: Clock | None = None,
) -> DashboardViewModel:
    """Convenience wrapper around ViewModelAssembler.assemble()."""
    return ViewModelAssembler(clock).assemble(series, aggregation, recommendations, campaigns)
