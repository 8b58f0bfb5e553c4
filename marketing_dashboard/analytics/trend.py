"""Sign and status classification shared by every dashboard surface.

KPI tiles, the campaign table and the chart legend all read their arrows and
colors from here, so a delta of zero renders the same way everywhere.
"""

import math

from ..exceptions import ValidationError
from .models import ColorToken, Direction, StatusBadge, TrendBadge

GLYPH_UP = "▲"
GLYPH_DOWN = "▼"
GLYPH_FLAT = "—"

STATUS_COLORS: dict[str, ColorToken] = {
    "Active": ColorToken.ACTIVE,
    "Paused": ColorToken.MUTED,
}


def classify(delta: float) -> TrendBadge:
    """Map a signed delta to its direction, glyph and color.

    Args:
        delta: Signed change, usually a percentage

    Returns:
        TrendBadge whose magnitude is abs(delta).

    Raises:
        ValidationError: If delta is NaN.
    """
    if math.isnan(delta):
        raise ValidationError("Cannot classify NaN delta")

    if delta > 0:
        return TrendBadge(Direction.UP, GLYPH_UP, ColorToken.POSITIVE, abs(delta))
    if delta < 0:
        return TrendBadge(Direction.DOWN, GLYPH_DOWN, ColorToken.NEGATIVE, abs(delta))
    return TrendBadge(Direction.FLAT, GLYPH_FLAT, ColorToken.NEUTRAL, 0.0)


def classify_status(status: str) -> StatusBadge:
    """Map a campaign status to its badge."""
    color = STATUS_COLORS.get(status)
    if color is None:
        raise ValidationError(
            f"Unknown campaign status: {status!r}. Expected one of {list(STATUS_COLORS)}"
        )
    return StatusBadge(status=status, color=color)  # type: ignore[arg-type]

