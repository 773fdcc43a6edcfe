import pytest

from src.emergewise.data import routes_repository
from src.emergewise.data.routes_repository import CandidateFetchError, RoutesRepository, summarize_capacity
from src.emergewise.data.scoring_tables import RouteTables
from src.emergewise.schemas.evacuation import OptimizeRouteRequest
from src.emergewise.services.routing.ranker import RouteRanker
from src.emergewise.services.routing.service import optimize_evacuation_route

ROUTE_ROWS = [
    {
        "id": "r-1",
        "name": "Ring Road North",
        "from_location": "Delhi Central",
        "to_location": "Noida Camp",
        "distance_km": 18.0,
        "estimated_time_minutes": 40,
        "capacity": 1000,
        "current_usage": 900,
        "difficulty_level": "moderate",
        "current_status": "open",
        "route_points": [[77.2, 28.6], [77.3, 28.5]],
    },
    {
        "id": "r-2",
        "name": "Yamuna Expressway",
        "from_location": "Delhi Central",
        "to_location": "Noida Camp",
        "distance_km": 18.0,
        "estimated_time_minutes": 40,
        "capacity": 1000,
        "current_usage": 100,
        "difficulty_level": "moderate",
        "current_status": "open",
        "route_points": [],
    },
]


def test_fetch_open_candidates_filters_by_origin_and_status(fake_supabase):
    fake_supabase.results[("evacuation_routes", "select")] = ROUTE_ROWS
    repository = RoutesRepository(client=fake_supabase)

    candidates = repository.fetch_open_candidates("delhi")

    assert [c.name for c in candidates] == ["Ring Road North", "Yamuna Expressway"]
    assert candidates[0].raw["id"] == "r-1"
    calls = [(name, args) for name, args, _ in fake_supabase.executed[0].calls]
    assert ("ilike", ("from_location", "%delhi%")) in calls
    assert ("eq", ("current_status", "open")) in calls


def test_fetch_failure_is_surfaced(fake_supabase):
    fake_supabase.results[("evacuation_routes", "select")] = ConnectionError("network down")
    repository = RoutesRepository(client=fake_supabase)

    with pytest.raises(CandidateFetchError):
        repository.fetch_open_candidates("delhi")


def test_unconfigured_store_is_a_fetch_error(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(routes_repository, "get_supabase_client", lambda: None)

    with pytest.raises(CandidateFetchError):
        RoutesRepository().fetch_open_candidates("delhi")


def test_optimize_picks_least_utilized_route(fake_supabase):
    fake_supabase.results[("evacuation_routes", "select")] = ROUTE_ROWS
    payload = OptimizeRouteRequest(from_location="Delhi", to_location="Noida")

    ranked = optimize_evacuation_route(
        payload,
        repository=RoutesRepository(client=fake_supabase),
        ranker=RouteRanker(RouteTables()),
    )

    result = ranked.to_dict()
    assert result["id"] == "r-2"
    assert result["optimization_factors"]["capacity_status"] == "low"


def test_optimize_respects_shortest_distance_preference(fake_supabase):
    rows = [dict(ROUTE_ROWS[0], distance_km=10.0), ROUTE_ROWS[1]]
    fake_supabase.results[("evacuation_routes", "select")] = rows
    payload = OptimizeRouteRequest(
        from_location="Delhi",
        to_location="Noida",
        preferences={"shortest_distance": True},
    )

    ranked = optimize_evacuation_route(payload, repository=RoutesRepository(client=fake_supabase))

    assert ranked.route.name == "Ring Road North"
    assert ranked.optimization_factors.capacity_status == "high"


def test_optimize_synthesizes_when_no_routes_exist(fake_supabase):
    payload = OptimizeRouteRequest(from_location="Chennai", to_location="Bangalore")

    ranked = optimize_evacuation_route(payload, repository=RoutesRepository(client=fake_supabase))

    assert ranked.synthesized
    assert ranked.route.distance_km == 350
    assert ranked.route.estimated_time_minutes == 1050


def test_optimize_does_not_fabricate_route_on_fetch_failure(fake_supabase):
    fake_supabase.results[("evacuation_routes", "select")] = TimeoutError("timed out")
    payload = OptimizeRouteRequest(from_location="Delhi", to_location="Mumbai")

    with pytest.raises(CandidateFetchError):
        optimize_evacuation_route(payload, repository=RoutesRepository(client=fake_supabase))


def test_summarize_capacity_counts_routes():
    rows = [
        {"current_status": "open", "capacity": 400, "current_usage": 100},
        {"current_status": "closed", "capacity": 100, "current_usage": None},
        {"current_status": "congested", "capacity": 500, "current_usage": 400},
    ]

    summary = summarize_capacity(rows)

    assert summary == {
        "total_capacity": 1000,
        "total_usage": 500,
        "utilization_percentage": 50.0,
        "open_routes": 1,
        "closed_routes": 1,
        "total_routes": 3,
    }
    assert summarize_capacity([])["utilization_percentage"] == 0
