import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from src.emergewise.data.scoring_tables import ScoringTables, get_scoring_tables, load_scoring_tables_file
from src.emergewise.services.assessment.severity import SeverityEstimator
from src.emergewise.services.routing.ranker import RouteRanker


def test_defaults_are_used_without_calibration_file():
    tables = get_scoring_tables()

    assert tables == ScoringTables()
    assert tables.severity.type_scores["earthquake"] == 8
    assert tables.routes.city_distances_km["kolkata-delhi"] == 1470


def test_partial_calibration_file_keeps_other_defaults(tmp_path: Path):
    path = tmp_path / "tables.json"
    path.write_text(
        json.dumps(
            {
                "severity": {"type_scores": {"cyclone": 9}, "high_density_areas": ["dhaka"]},
                "routes": {"city_distances_km": {"pune-mumbai": 150}},
            }
        ),
        encoding="utf-8",
    )

    tables = get_scoring_tables(path)

    assert tables.severity.type_scores == {"cyclone": 9}
    assert tables.severity.medium_keywords == ScoringTables().severity.medium_keywords
    assert tables.resources == ScoringTables().resources

    estimator = SeverityEstimator(tables.severity)
    assert estimator.estimate("cyclone", "calm", "Dhaka North") == 10

    ranker = RouteRanker(tables.routes)
    assert ranker.rank([], from_location="Mumbai", to_location="Pune").route.distance_km == 150


def test_unknown_keys_are_rejected(tmp_path: Path):
    path = tmp_path / "tables.json"
    path.write_text(json.dumps({"routes": {"distance_wieght": 4}}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_scoring_tables_file(path)


def test_missing_calibration_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_scoring_tables_file(tmp_path / "absent.json")


def test_tables_are_immutable():
    tables = ScoringTables()

    with pytest.raises(ValidationError):
        tables.routes.default_distance_km = 10  # type: ignore[misc]
