"""Resource requirement prediction from incident type and severity."""

from __future__ import annotations

import logging
import math

from ...data.scoring_tables import ResourceTables, get_scoring_tables
from ...models.domain import ResourceRequirements

logger = logging.getLogger(__name__)


class ResourcePredictor:
    def __init__(self, tables: ResourceTables | None = None) -> None:
        self.tables = tables or get_scoring_tables().resources

    def predict(self, incident_type: str, severity: float) -> ResourceRequirements | None:
        """Return crew/shelter counts for an incident, or None if prediction fails."""
        try:
            multipliers = self.tables.by_type.get(incident_type.strip().lower(), self.tables.default)
            level = max(0.0, float(severity))
            return ResourceRequirements(
                medical_teams=math.ceil(level * multipliers.medical_teams),
                fire_teams=math.ceil(level * multipliers.fire_teams),
                police_units=math.ceil(level * multipliers.police_units),
                shelters=math.ceil(level * multipliers.shelters),
                estimated_affected=math.ceil(level * multipliers.estimated_affected),
            )
        except Exception:
            logger.exception(f"Resource prediction failed for incident type '{incident_type}'")
            return None
