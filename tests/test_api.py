"""
Tests for the guidance API.
"""

import pytest
from conftest import CARDS_JSON, DAILY_JSON, INSIGHTS_JSON, TEST_RULES, FakeUpstream
from fastapi.testclient import TestClient

from preemie_guidance.api.app import create_app
from preemie_guidance.entities import AgeBucket
from preemie_guidance.fallbacks import FALLBACK_DAILY_GUIDANCE
from preemie_guidance.handlers import health_recommendations, service_grade
from preemie_guidance.models import UsageMetrics
from preemie_guidance.repositories import InMemoryCacheRepository
from preemie_guidance.services import GuidanceService, RateLimiter

AGE = {
    "name": "Mia",
    "gestational_weeks": 32,
    "gestational_days": 3,
    "corrected_age_in_days": 95,
    "corrected_months": 3,
    "corrected_days": 5,
    "actual_months": 5,
    "actual_days": 2,
}


def make_client(upstream: FakeUpstream) -> TestClient:
    def factory() -> GuidanceService:
        return GuidanceService(
            upstream=upstream,
            cache=InMemoryCacheRepository(max_entries=100),
            limiter=RateLimiter(rules=TEST_RULES, clock=lambda: 1_000_000.0),
            max_retries=0,
        )

    return TestClient(create_app(service_factory=factory))


@pytest.fixture
def upstream():
    return FakeUpstream(DAILY_JSON)


@pytest.fixture
def client(upstream):
    """Create a test client with a running lifespan."""
    with make_client(upstream) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Preemie Guidance API"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["upstream_configured"] is True


def test_health_degraded_without_credential():
    with make_client(FakeUpstream(DAILY_JSON, configured=False)) as client:
        data = client.get("/health").json()
    assert data["status"] == "degraded"
    assert data["upstream_configured"] is False


def test_metrics_report_errors_without_credential():
    with make_client(FakeUpstream(DAILY_JSON, configured=False)) as client:
        client.post("/guidance/daily", json={"age": AGE})
        data = client.get("/metrics").json()
    assert data["service_grade"] == "F"
    assert data["metrics"]["request_count"] == 0
    assert data["metrics"]["error_count"] == 1
    assert data["metrics"]["error_rate_percent"] == 100.0


def test_daily_guidance(client, upstream):
    response = client.post(
        "/guidance/daily",
        json={
            "age": AGE,
            "feedings": [{"kind": "formula", "amount_or_duration": "90 ml"}],
            "sleeps": [
                {"start_time": "2024-05-01T13:00:00", "end_time": "2024-05-01T14:30:00"}
            ],
            "milestones": [{"title": "Social smile", "category": "social"}],
        },
        headers={"X-Caller-Id": "parent-1"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Gentle tummy time"
    assert data["urgencyLevel"] == "low"
    assert len(data["actionItems"]) == 3

    prompt = upstream.calls[0][0][1]["content"]
    assert "formula - 90 ml" in prompt
    assert "13:00 to 14:30 (90 min)" in prompt
    assert "Social smile" in prompt


def test_daily_guidance_accepts_mixed_time_zone_sleeps(client, upstream):
    response = client.post(
        "/guidance/daily",
        json={
            "age": AGE,
            "sleeps": [
                {"start_time": "2024-05-01T13:00:00Z", "end_time": "2024-05-01T14:30:00"}
            ],
        },
    )
    assert response.status_code == 200
    assert "13:00 to 14:30 (90 min)" in upstream.calls[0][0][1]["content"]


def test_daily_guidance_rejects_sleep_ending_before_start(client):
    response = client.post(
        "/guidance/daily",
        json={
            "age": AGE,
            "sleeps": [
                {"start_time": "2024-05-01T14:30:00", "end_time": "2024-05-01T13:00:00"}
            ],
        },
    )
    assert response.status_code == 422


def test_daily_guidance_rate_limited_per_caller(client, upstream):
    for i in range(6):
        body = {"age": {**AGE, "corrected_age_in_days": 95 + i}}
        response = client.post("/guidance/daily", json=body, headers={"X-Caller-Id": "busy"})
        assert response.status_code == 200

    # Five allowed by the daily budget; the sixth got fallback content.
    assert len(upstream.calls) == 5
    assert response.json()["title"] == FALLBACK_DAILY_GUIDANCE[AgeBucket.MONTHS_2_4].title


def test_daily_guidance_validates_input(client):
    response = client.post("/guidance/daily", json={"age": {"name": "Mia"}})
    assert response.status_code == 422


def test_milestone_recommendation():
    with make_client(FakeUpstream("Practise rolling with a favourite toy.")) as client:
        response = client.post(
            "/guidance/milestone",
            json={"age": AGE, "achieved_milestones": [{"title": "Head control", "category": "motor"}]},
        )
    assert response.status_code == 200
    assert response.json() == {"recommendation": "Practise rolling with a favourite toy."}


def test_growth_insights():
    with make_client(FakeUpstream(INSIGHTS_JSON)) as client:
        response = client.post(
            "/guidance/insights",
            json={"age": AGE, "feeding_count": 8, "sleep_count": 6, "milestones_count": 2},
        )
    assert response.status_code == 200
    assert response.json()["insights"] == ["Feeding is regular."]


def test_knowledge_cards():
    with make_client(FakeUpstream(CARDS_JSON)) as client:
        response = client.post("/guidance/knowledge-cards", json={"age": AGE, "card_count": 2})
    assert response.status_code == 200
    cards = response.json()["cards"]
    assert [card["title"] for card in cards] == ["High", "Mid"]


def test_metrics_and_reset(client):
    client.post("/guidance/daily", json={"age": AGE})

    data = client.get("/metrics").json()
    assert data["service_enabled"] is True
    assert data["service_grade"] == "A"
    assert data["metrics"]["request_count"] == 1
    assert data["metrics"]["tokens_consumed"] == 100

    reset = client.post("/metrics/reset").json()
    assert reset["success"] is True
    assert reset["previous"]["request_count"] == 1
    assert client.get("/metrics").json()["metrics"]["request_count"] == 0


def test_cache_stats_and_clear(client):
    client.post("/guidance/daily", json={"age": AGE})
    client.post("/guidance/daily", json={"age": AGE})

    stats = client.get("/cache/stats").json()
    assert stats["total_entries"] == 1
    assert stats["hits"] == 1

    cleared = client.delete("/cache").json()
    assert cleared["deleted_count"] == 1
    assert client.get("/cache/stats").json()["total_entries"] == 0


@pytest.mark.parametrize(
    "enabled,error_rate,grade",
    [
        (False, 0.0, "F"),
        (True, 0.25, "D"),
        (True, 0.15, "C"),
        (True, 0.07, "B"),
        (True, 0.05, "A"),
        (True, 0.0, "A"),
    ],
)
def test_service_grade(enabled, error_rate, grade):
    assert service_grade(enabled, error_rate) == grade


def test_health_recommendations():
    assert len(health_recommendations(False, UsageMetrics())) == 2

    busy = UsageMetrics(request_count=10, tokens_consumed=9000, error_count=2)
    hints = health_recommendations(True, busy)
    assert any("error rate" in hint for hint in hints)
    assert any("token usage" in hint for hint in hints)
