from .reference import CampaignRow, KpiRow, RecommendationRow, SegmentRow
from .view_model import DashboardViewModel

__all__ = [
    "CampaignRow",
    "DashboardViewModel",
    "KpiRow",
    "RecommendationRow",
    "SegmentRow",
]
