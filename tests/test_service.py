"""Tests for reference loading, view model assembly and the dashboard service."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from marketing_dashboard.analytics import (
    CampaignRecord,
    ColorToken,
    Direction,
    FixedRandomSource,
    Recommendation,
    TimeRange,
    aggregate,
    generate,
    lift_magnitude_policy,
)
from marketing_dashboard.exceptions import (
    ReferenceDataError,
    ReferenceValidationError,
    ValidationError,
)
from marketing_dashboard.ingestion import ReferenceData, ReferenceDataLoader
from marketing_dashboard.models import DashboardViewModel
from marketing_dashboard.services import DashboardService, ViewModelAssembler, assemble

FIXED_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def reference() -> ReferenceData:
    """Bundled reference data."""
    return ReferenceDataLoader().load()


@pytest.fixture
def service() -> DashboardService:
    """Service with zero noise and a fixed clock."""
    return DashboardService(
        random_source=FixedRandomSource(0.0),
        clock=lambda: FIXED_TIME,
    )


@pytest.fixture
def view_model(service: DashboardService) -> DashboardViewModel:
    return service.build(TimeRange.WEEK)


def make_campaign(**overrides) -> CampaignRecord:
    fields = dict(
        id=1,
        name="Summer Sale 2024",
        platform="Meta",
        status="Active",
        spend=15200.0,
        roas=4.5,
        trend_percent=5.0,
    )
    fields.update(overrides)
    return CampaignRecord(**fields)


# =============================================================================
# REFERENCE DATA
# =============================================================================


class TestReferenceDataLoader:
    """Tests for ReferenceDataLoader.load()."""

    def test_loads_bundled_data(self, reference: ReferenceData) -> None:
        assert len(reference.kpis) == 4
        assert len(reference.segments) == 4
        assert len(reference.recommendations) == 3
        assert len(reference.campaigns) == 4

    def test_converts_records(self, reference: ReferenceData) -> None:
        assert reference.segments[0].label == "Gen Z (18-24)"
        assert reference.segments[0].count == 3500
        assert reference.recommendations[0].projected_lift == "+15% CTR"
        assert reference.campaigns[2].status == "Paused"
        assert reference.campaigns[2].trend_percent == 0.0
        assert reference.kpis[2].change == -2.1

    def test_missing_file(self, tmp_path: Path) -> None:
        loader = ReferenceDataLoader(tmp_path / "missing.yaml")
        with pytest.raises(ReferenceDataError, match="Failed to load"):
            loader.load()

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "ref.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ReferenceDataError, match="must be a mapping"):
            ReferenceDataLoader(path).load()

    def test_collects_validation_errors(self, tmp_path: Path) -> None:
        """Every invalid record is reported, not only the first."""
        path = tmp_path / "ref.yaml"
        path.write_text(
            "segments:\n"
            "  - name: A\n"
            "    value: -5\n"
            "campaigns:\n"
            "  - id: 1\n"
            "    name: Bad\n"
            "    platform: Meta\n"
            "    status: Active\n"
            "    spend: -10.0\n"
            "    roas: 1.0\n"
            "    trend: 0.0\n"
            "  - id: 2\n"
            "    name: Unknown status\n"
            "    platform: Meta\n"
            "    status: Archived\n"
            "    spend: 10.0\n"
            "    roas: 1.0\n"
            "    trend: 0.0\n"
        )
        with pytest.raises(ReferenceValidationError) as exc_info:
            ReferenceDataLoader(path).load()

        err = exc_info.value
        assert err.record_count == 3
        assert [e["section"] for e in err.errors] == ["segments", "campaigns", "campaigns"]

    def test_empty_document(self, tmp_path: Path) -> None:
        path = tmp_path / "ref.yaml"
        path.write_text("")
        data = ReferenceDataLoader(path).load()
        assert data.kpis == ()
        assert data.campaigns == ()


# =============================================================================
# ASSEMBLY
# =============================================================================


class TestViewModelAssembler:
    """Tests for ViewModelAssembler.assemble()."""

    def test_idempotent(self, reference: ReferenceData) -> None:
        """Identical inputs give structurally equal view models."""
        series = generate(TimeRange.MONTH, FixedRandomSource(0.0))
        aggregation = aggregate(reference.kpis, reference.segments)

        assembler = ViewModelAssembler(clock=lambda: FIXED_TIME)
        first = assembler.assemble(
            series, aggregation, reference.recommendations, reference.campaigns
        )
        second = assembler.assemble(
            series, aggregation, reference.recommendations, reference.campaigns
        )
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_no_state_between_calls(self, reference: ReferenceData) -> None:
        """A second call with different inputs is unaffected by the first."""
        assembler = ViewModelAssembler(clock=lambda: FIXED_TIME)
        series = generate(TimeRange.WEEK, FixedRandomSource(0.0))

        full = assembler.assemble(
            series, aggregate([], reference.segments), [], reference.campaigns
        )
        empty = assembler.assemble(series, aggregate([], []), [], [])

        assert full.total_users == 11600
        assert empty.total_users == 0
        assert empty.total_users_text == "0"
        assert empty.campaigns == ()

    def test_flat_campaign_trend(self) -> None:
        """A zero trend renders a dash in the neutral color."""
        rows = ViewModelAssembler().campaign_rows([make_campaign(trend_percent=0)])
        assert rows[0].trend.glyph == "—"
        assert rows[0].trend.color is ColorToken.NEUTRAL
        assert rows[0].trend.label == "—"

    def test_campaign_formatting(self) -> None:
        rows = ViewModelAssembler().campaign_rows(
            [make_campaign(), make_campaign(id=2, status="Paused", trend_percent=-3)]
        )
        assert rows[0].spend_text == "15,200"
        assert rows[0].roas_text == "4.5x"
        assert rows[0].trend.label == "▲ 5%"
        assert rows[1].status.color is ColorToken.MUTED
        assert rows[1].trend.label == "▼ 3%"

    @pytest.mark.parametrize("field", ["spend", "roas"])
    def test_negative_money_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError, match="invalid"):
            ViewModelAssembler().campaign_rows([make_campaign(**{field: -1.0})])

    def test_duplicate_campaign_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate campaign id"):
            ViewModelAssembler().campaign_rows([make_campaign(), make_campaign()])

    def test_module_level_assemble(self, reference: ReferenceData) -> None:
        series = generate(TimeRange.INTRADAY, FixedRandomSource(0.0))
        vm = assemble(
            series,
            aggregate(reference.kpis, reference.segments),
            reference.recommendations,
            reference.campaigns,
            clock=lambda: FIXED_TIME,
        )
        assert vm.generated_at == FIXED_TIME
        assert vm.time_range is TimeRange.INTRADAY


# =============================================================================
# SERVICE
# =============================================================================


class TestDashboardService:
    """Tests for DashboardService.build()."""

    def test_build_week(self, view_model: DashboardViewModel) -> None:
        assert view_model.time_range is TimeRange.WEEK
        assert len(view_model.series) == 7
        assert view_model.series.forecast_start_index == 5
        assert view_model.total_users == 11600
        assert view_model.total_users_text == "11.6K"
        assert len(view_model.kpis) == 4
        assert [r.id for r in view_model.recommendations] == [1, 2, 3]

    def test_default_range_is_month(self, service: DashboardService) -> None:
        vm = service.build()
        assert vm.time_range is TimeRange.MONTH
        assert len(vm.series) == 30

    def test_series_change_badge(self, view_model: DashboardViewModel) -> None:
        """Last vs first actual value drives the legend badge."""
        assert view_model.series_change.direction is Direction.UP
        assert view_model.series_change.magnitude == pytest.approx(18.6)

    def test_paused_campaign_row(self, view_model: DashboardViewModel) -> None:
        row = view_model.campaigns[2]
        assert row.campaign.name == "Winter Collection Preview"
        assert row.status.color is ColorToken.MUTED
        assert row.trend.label == "—"

    def test_repeat_builds_equal(self, service: DashboardService) -> None:
        assert service.build(TimeRange.QUARTER) == service.build(TimeRange.QUARTER)

    def test_ranking_policy_injected(self, reference: ReferenceData) -> None:
        reordered = ReferenceData(
            kpis=reference.kpis,
            segments=reference.segments,
            recommendations=(
                Recommendation(10, "Low", "+2% CTR", "Wait"),
                Recommendation(11, "Unknown", "soon", "Check"),
                Recommendation(12, "High", "+20% ROAS", "Scale"),
            ),
            campaigns=reference.campaigns,
        )
        service = DashboardService(
            random_source=FixedRandomSource(0.0),
            ranking_policy=lift_magnitude_policy,
        )
        vm = service.build(TimeRange.WEEK, reference=reordered)
        assert [r.id for r in vm.recommendations] == [12, 10, 11]

    def test_executive_summary(self, service: DashboardService) -> None:
        summary = service.build_summary(TimeRange.WEEK)
        assert summary["time_range"] == "7D"
        assert summary["total_users"] == 11600
        assert summary["active_campaigns"] == 3
        assert summary["active_spend"] == 36100.0
        assert summary["kpis"]["Avg. CPC"] == "▼ 2.1%"
        assert summary["top_recommendation"].startswith("Video ads on TikTok")

    def test_to_json(self, view_model: DashboardViewModel) -> None:
        """JSON output carries every render field."""
        data = json.loads(view_model.to_json())
        assert set(data) == {
            "meta",
            "series",
            "kpis",
            "segmentation",
            "recommendations",
            "campaigns",
        }
        assert data["meta"]["generated_at"] == FIXED_TIME.isoformat()
        assert data["meta"]["time_range"] == "7D"
        assert len(data["series"]["points"]) == 7
        assert data["series"]["points"][0]["predicted"] is None
        assert data["segmentation"]["total_users"] == 11600
        assert data["kpis"][2]["trend"]["glyph"] == "▼"
        assert data["campaigns"][3]["trend"]["label"] == "▼ 3%"

    def test_json_shares(self, view_model: DashboardViewModel) -> None:
        """Serialized shares stay exact and carry display text."""
        slices = json.loads(view_model.to_json())["segmentation"]["slices"]
        assert sum(s["share_of_total"] for s in slices) == pytest.approx(1.0, abs=1e-9)
        assert [s["share_text"] for s in slices] == ["30.2%", "44.8%", "18.1%", "6.9%"]
