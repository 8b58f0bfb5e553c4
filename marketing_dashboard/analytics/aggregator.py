"""KPI annotation and audience segmentation shares using Polars."""

import logging
from collections.abc import Sequence

import polars as pl

from ..exceptions import ValidationError
from .models import (
    AggregationResult,
    KpiInput,
    KpiMetric,
    SegmentationSlice,
    SegmentInput,
)
from .trend import classify

logger = logging.getLogger(__name__)


class MetricAggregator:
    """Turns raw KPI and segment inputs into annotated dashboard metrics.

    Usage:
        aggregator = MetricAggregator()
        result = aggregator.aggregate(kpi_inputs, segment_inputs)
        result.total_users
    """

    def aggregate(
        self,
        kpi_inputs: Sequence[KpiInput],
        segment_inputs: Sequence[SegmentInput],
    ) -> AggregationResult:
        """Run one aggregation pass.

        Raises:
            ValidationError: If any segment count is negative
        """
        kpis = tuple(self.annotate_kpi(kpi) for kpi in kpi_inputs)
        segmentation, total = self.segment_shares(segment_inputs)

        logger.debug(
            "Aggregated %d KPIs and %d segments (total users %d)",
            len(kpis),
            len(segmentation),
            total,
        )
        return AggregationResult(kpis=kpis, segmentation=segmentation, total_users=total)

    def annotate_kpi(self, kpi: KpiInput) -> KpiMetric:
        return KpiMetric(
            title=kpi.title,
            formatted_value=kpi.value,
            percent_change=kpi.change,
            trend=classify(kpi.change),
        )

    def segment_shares(
        self, segment_inputs: Sequence[SegmentInput]
    ) -> tuple[tuple[SegmentationSlice, ...], int]:
        """Compute each segment's share of the total count.

        A zero total yields 0.0 for every share.

        Returns:
            (slices in input order, total count)
        """
        df = pl.DataFrame(
            {
                "label": [s.label for s in segment_inputs],
                "count": [s.count for s in segment_inputs],
                "color": [s.color for s in segment_inputs],
            },
            schema={"label": pl.Utf8, "count": pl.Int64, "color": pl.Utf8},
        )

        negative = df.filter(pl.col("count") < 0)
        if len(negative) > 0:
            raise ValidationError(
                f"Segment counts must be non-negative: "
                f"{dict(zip(negative['label'], negative['count']))}"
            )

        total = int(df["count"].sum())
        share = (
            (pl.col("count") / total) if total > 0 else pl.lit(0.0, dtype=pl.Float64)
        )
        df = df.with_columns(share.alias("share_of_total"))

        slices = tuple(
            SegmentationSlice(
                label=row["label"],
                count=row["count"],
                share_of_total=row["share_of_total"],
                color=row["color"],
            )
            for row in df.to_dicts()
        )
        return slices, total


def aggregate(
    kpi_inputs: Sequence[KpiInput],
    segment_inputs: Sequence[SegmentInput],
) -> AggregationResult:
    """Convenience wrapper around MetricAggregator.aggregate()."""
    return MetricAggregator().aggregate(kpi_inputs, segment_inputs)
