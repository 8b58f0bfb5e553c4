"""Synthetic performance series for a selected time range."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .models import PerformanceSeries, SeriesPoint, TimeRange
from .stats import detect_trend

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Source of bounded noise for generated values."""

    def uniform(self, low: float, high: float) -> float: ...


class NumpyRandomSource:
    """numpy Generator backed source. Unseeded instances are non-deterministic."""

    def __init__(self, seed: int | None = None):
        self._rng = np.random.default_rng(seed)

    def uniform(self, low: float, high: float) -> float:
        return float(self._rng.uniform(low, high))


class FixedRandomSource:
    """Always returns the same point of the interval.

    fraction=0.0 disables noise entirely.
    """

    def __init__(self, fraction: float = 0.0):
        if not 0.0 <= fraction <= 1.0:
            raise ValueError(f"fraction must be within [0, 1], got {fraction}")
        self.fraction = fraction

    def uniform(self, low: float, high: float) -> float:
        return low + self.fraction * (high - low)


@dataclass
class SeriesParameters:
    """Shape of the generated series.

    base(i) = base_level + amplitude * sin(i / period_divisor)
    """

    base_level: float = 5000.0
    amplitude: float = 1000.0
    period_divisor: float = 5.0

    # Upper bound of the noise added to actual values
    actual_noise: float = 500.0

    # Predicted = predicted_uplift * base + noise in [0, predicted_noise)
    predicted_uplift: float = 1.1
    predicted_noise: float = 600.0

    # Points with index > forecast_tail * point_count carry a prediction
    forecast_tail: float = 0.7


class SeriesGenerator:
    """Builds the actual vs. predicted trend shown on the dashboard.

    Usage:
        generator = SeriesGenerator()
        series = generator.generate(TimeRange.WEEK, NumpyRandomSource(seed=7))
    """

    def __init__(self, params: SeriesParameters | None = None):
        self.params = params or SeriesParameters()

    def base(self, index: int) -> float:
        p = self.params
        return p.base_level + p.amplitude * math.sin(index / p.period_divisor)

    def label(self, time_range: TimeRange, index: int) -> str:
        if time_range is TimeRange.INTRADAY:
            return f"{index * 2}:00"
        return f"Day {index + 1}"

    def in_forecast_tail(self, index: int, point_count: int) -> bool:
        return index > self.params.forecast_tail * point_count

    def generate(
        self,
        time_range: TimeRange,
        random_source: RandomSource | None = None,
    ) -> PerformanceSeries:
        """Generate one series of time_range.point_count points.

        Args:
            time_range: Selected window
            random_source: Noise source; a fresh unseeded NumpyRandomSource if None

        Returns:
            PerformanceSeries in chronological order.
        """
        rng = random_source or NumpyRandomSource()
        p = self.params
        count = time_range.point_count

        points: list[SeriesPoint] = []
        forecast_start: int | None = None

        for i in range(count):
            base = self.base(i)
            actual = max(0, math.floor(base + rng.uniform(0, p.actual_noise)))

            predicted = None
            if self.in_forecast_tail(i, count):
                predicted = max(
                    0,
                    math.floor(
                        p.predicted_uplift * base + rng.uniform(0, p.predicted_noise)
                    ),
                )
                if forecast_start is None:
                    forecast_start = i

            points.append(SeriesPoint(self.label(time_range, i), actual, predicted))

        trend = detect_trend([pt.actual for pt in points])
        logger.debug(
            "Generated %d points for %s (forecast from index %s, trend %s)",
            count,
            time_range.name,
            forecast_start,
            trend,
        )

        return PerformanceSeries(
            time_range=time_range,
            points=tuple(points),
            forecast_start_index=forecast_start,
            trend=trend,
        )


def generate(
    time_range: TimeRange,
    random_source: RandomSource | None = None,
    params: SeriesParameters | None = None,
) -> PerformanceSeries:
    """Convenience wrapper around SeriesGenerator.generate()."""
    return SeriesGenerator(params).generate(time_range, random_source)
