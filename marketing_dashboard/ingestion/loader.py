"""Reference data loading: YAML -> Pydantic validation -> domain records."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from ..analytics.models import CampaignRecord, KpiInput, Recommendation, SegmentInput
from ..exceptions import ReferenceDataError, ReferenceValidationError
from ..models.reference import CampaignRow, KpiRow, RecommendationRow, SegmentRow

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_PATH = Path(__file__).parent.parent / "config" / "reference_data.yaml"

# Map YAML sections to validation models
SECTION_MODELS: dict[str, type[BaseModel]] = {
    "kpis": KpiRow,
    "segments": SegmentRow,
    "recommendations": RecommendationRow,
    "campaigns": CampaignRow,
}


@dataclass(frozen=True)
class ReferenceData:
    """Validated static inputs for one dashboard."""

    kpis: tuple[KpiInput, ...]
    segments: tuple[SegmentInput, ...]
    recommendations: tuple[Recommendation, ...]
    campaigns: tuple[CampaignRecord, ...]


class ReferenceDataLoader:
    """Loads and validates the dashboard's static reference data.

    Usage:
        loader = ReferenceDataLoader(Path("marketing_dashboard/config/reference_data.yaml"))
        data = loader.load()
    """

    def __init__(self, path: Path | None = None):
        self.path = path or DEFAULT_REFERENCE_PATH

    def load(self) -> ReferenceData:
        """Full pipeline: Read -> Validate -> Convert.

        Raises:
            ReferenceDataError: If the file is missing or not a YAML mapping
            ReferenceValidationError: If any record fails validation
        """
        raw = self._read(self.path)
        rows = self._validate(raw)

        data = ReferenceData(
            kpis=tuple(row.to_record() for row in rows["kpis"]),
            segments=tuple(row.to_record() for row in rows["segments"]),
            recommendations=tuple(row.to_record() for row in rows["recommendations"]),
            campaigns=tuple(row.to_record() for row in rows["campaigns"]),
        )
        logger.info(
            "Loaded reference data from %s: %d KPIs, %d segments, "
            "%d recommendations, %d campaigns",
            self.path,
            len(data.kpis),
            len(data.segments),
            len(data.recommendations),
            len(data.campaigns),
        )
        return data

    def _read(self, path: Path) -> dict[str, Any]:
        """Load the YAML document."""
        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ReferenceDataError(f"Failed to load reference data from {path}: {e}") from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ReferenceDataError(
                f"Reference data in {path} must be a mapping, got {type(content).__name__}"
            )
        return content

    def _validate(self, raw: dict[str, Any]) -> dict[str, list[Any]]:
        """Validate every record of every section.

        Collects all errors before raising, for better debugging.
        """
        errors: list[dict[str, Any]] = []
        rows: dict[str, list[Any]] = {}
        record_count = 0

        for section, model in SECTION_MODELS.items():
            records = raw.get(section) or []
            if not isinstance(records, list):
                raise ReferenceDataError(f"Section {section!r} must be a list")

            rows[section] = []
            for i, record in enumerate(records):
                record_count += 1
                try:
                    rows[section].append(model.model_validate(record))
                except ValidationError as e:
                    errors.append({"section": section, "row": i, "errors": e.errors()})

        if errors:
            raise ReferenceValidationError(errors, record_count)

        return rows
