from dataclasses import asdict

import pytest

from src.emergewise.data.scoring_tables import ResourceTables
from src.emergewise.models.domain import ResourceRequirements
from src.emergewise.services.assessment.resources import ResourcePredictor


@pytest.fixture
def predictor() -> ResourcePredictor:
    return ResourcePredictor(ResourceTables())


def test_earthquake_multipliers_round_up(predictor: ResourcePredictor):
    result = predictor.predict("earthquake", 7)

    assert result == ResourceRequirements(
        medical_teams=14,
        fire_teams=11,
        police_units=7,
        shelters=21,
        estimated_affected=700,
    )


def test_fire_police_units_are_ceiled(predictor: ResourcePredictor):
    result = predictor.predict("fire", 5)

    assert result is not None
    assert result.fire_teams == 15
    assert result.police_units == 3
    assert result.estimated_affected == 250


def test_unmatched_type_uses_default_multipliers(predictor: ResourcePredictor):
    result = predictor.predict("hazmat", 3)

    assert result == ResourceRequirements(
        medical_teams=3,
        fire_teams=2,
        police_units=3,
        shelters=3,
        estimated_affected=75,
    )


@pytest.mark.parametrize("severity", [0, 1, 2.5, 9, 10])
def test_fields_are_non_negative_integers(predictor: ResourcePredictor, severity: float):
    for incident_type in ("earthquake", "flood", "fire", "other"):
        result = predictor.predict(incident_type, severity)
        assert result is not None
        for value in asdict(result).values():
            assert isinstance(value, int)
            assert value >= 0


def test_negative_severity_is_floored_at_zero(predictor: ResourcePredictor):
    result = predictor.predict("flood", -4)

    assert result is not None
    assert all(value == 0 for value in asdict(result).values())


def test_prediction_failure_returns_none(predictor: ResourcePredictor):
    assert predictor.predict("flood", "not-a-number") is None  # type: ignore[arg-type]
