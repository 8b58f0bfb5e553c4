"""Statistical helpers using scipy for trend detection."""

from typing import Literal

import numpy as np
from scipy import stats


def detect_trend(
    values: list[float] | np.ndarray,
    p_threshold: float = 0.05,
    r_threshold: float = 0.3,
) -> Literal["increasing", "decreasing", "stable"]:
    """Detect trend direction using linear regression.

    Args:
        values: Ordered metric values (e.g., actual conversions per point)
        p_threshold: P-value threshold for significance
        r_threshold: Minimum R-value for meaningful trend

    Returns:
        Trend direction based on slope significance.
    """
    if len(values) < 3:
        return "stable"

    arr = np.asarray(values, dtype=float)
    if np.std(arr) == 0:
        return "stable"

    x = np.arange(len(arr))
    slope, _, r_value, p_value, _ = stats.linregress(x, arr)

    if p_value < p_threshold and abs(r_value) > r_threshold:
        return "increasing" if slope > 0 else "decreasing"
    return "stable"


def percent_change(previous: float, current: float, decimals: int = 1) -> float:
    """Rounded percentage change from previous to current.

    Returns 0.0 when previous is 0.
    """
    if previous == 0:
        return 0.0
    return round((current - previous) / previous * 100, decimals)
