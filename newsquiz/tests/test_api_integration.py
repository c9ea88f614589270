from __future__ import annotations

import json

import pytest
from flask import Flask

from newsquiz.app import create_app
from newsquiz.domain.phases.entities import NewsItem
from newsquiz.infrastructure.container import Container
from newsquiz.infrastructure.db import SessionLocal
from newsquiz.infrastructure.db.models import PhaseAward, Player
from newsquiz.shared.config import AppConfig

QUIZ = json.dumps(
    [
        {
            "prompt": f"Question {i}?",
            "options": {"A": "Wind", "B": "Solar", "C": "Coal", "D": "Hydro"},
            "correct": correct,
        }
        for i, correct in enumerate(["B", "A", "D"])
    ]
)


class StubNews:
    async def fetch_top(self) -> NewsItem:
        return NewsItem(title="Solar farm opens", description="A new plant came online.")


class StubGenerator:
    async def complete(self, prompt: str) -> str:
        return QUIZ


@pytest.fixture()
def app(reset_database) -> Flask:
    container = Container()
    container.news_provider = StubNews()
    container.question_generator = StubGenerator()
    return create_app(container=container)


def _register_and_login(client, username: str, secret: str) -> dict[str, str]:
    credentials = {"username": username, "secret": secret}
    assert client.post("/api/register", json=credentials).status_code == 201
    login = client.post("/api/login", json=credentials)
    assert login.status_code == 200
    return {"Authorization": f"Bearer {login.get_json()['token']}"}


def _answer(client, auth: dict[str, str], ticket: str, index: int, answer: str):
    body = {"phaseTicket": ticket, "questionIndex": index, "answer": answer}
    return client.post("/api/quiz", json=body, headers=auth)


def test_register_login_and_points_flow(app: Flask) -> None:
    with app.test_client() as client:
        auth = _register_and_login(client, "ana", "pw1")

        duplicate = client.post("/api/register", json={"username": "ana", "secret": "other"})
        assert duplicate.status_code == 400
        assert duplicate.get_json() == {"error": "player_already_exists"}

        wrong = client.post("/api/login", json={"username": "ana", "secret": "nope"})
        unknown = client.post("/api/login", json={"username": "ghost", "secret": "pw1"})
        assert wrong.status_code == unknown.status_code == 400
        assert wrong.get_json() == unknown.get_json() == {"error": "invalid_credentials"}

        added = client.post("/api/addpoints", json={"points": 10}, headers=auth)
        assert added.get_json() == {"success": True, "points": 10}

        negative = client.post("/api/addpoints", json={"points": -5}, headers=auth)
        assert negative.status_code == 400
        assert negative.get_json()["error"] == "invalid_points"

        ranking = client.get("/api/ranking")
        assert ranking.get_json() == [{"username": "ana", "points": 10}]

    session = SessionLocal()
    try:
        stored = session.query(Player).one()
        assert stored.points == 10
        assert stored.password_hash != "pw1"
    finally:
        session.close()


def test_ranking_orders_players(app: Flask) -> None:
    with app.test_client() as client:
        ana = _register_and_login(client, "ana", "pw1")
        bob = _register_and_login(client, "bob", "pw2")
        _register_and_login(client, "cy", "pw3")

        client.post("/api/addpoints", json={"points": 20}, headers=ana)
        client.post("/api/addpoints", json={"points": 40}, headers=bob)

        ranking = client.get("/api/ranking").get_json()
        limited = client.get("/api/ranking?limit=1").get_json()

    assert ranking == [
        {"username": "bob", "points": 40},
        {"username": "ana", "points": 20},
        {"username": "cy", "points": 0},
    ]
    assert limited == [{"username": "bob", "points": 40}]


def test_phase_quiz_and_code_flow(app: Flask) -> None:
    with app.test_client() as client:
        auth = _register_and_login(client, "ana", "pw1")

        phase = client.get("/api/phase", headers=auth)
        assert phase.status_code == 200
        payload = phase.get_json()
        assert payload["problem"]["title"] == "Solar farm opens"
        assert all("correct" not in q for q in payload["questions"])
        ticket = payload["phaseTicket"]

        right = _answer(client, auth, ticket, 0, "B")
        assert right.get_json() == {"correct": True, "pointsAwarded": 10, "points": 10}

        again = _answer(client, auth, ticket, 0, "B")
        assert again.status_code == 409
        assert again.get_json() == {"error": "already_answered"}

        wrong = _answer(client, auth, ticket, 1, "C")
        assert wrong.get_json() == {"correct": False, "pointsAwarded": 0, "points": 10}

        code = client.post(
            "/api/code", json={"phaseTicket": ticket, "code": "print('solar')"}, headers=auth
        )
        assert code.get_json() == {"correct": True, "pointsAwarded": 50, "points": 60}

        code_again = client.post(
            "/api/code", json={"phaseTicket": ticket, "code": "print(1)"}, headers=auth
        )
        assert code_again.status_code == 409

    session = SessionLocal()
    try:
        assert session.query(Player).one().points == 60
        assert session.query(PhaseAward).count() == 3
    finally:
        session.close()


def test_phase_endpoints_require_token(app: Flask) -> None:
    with app.test_client() as client:
        phase = client.get("/api/phase")
        quiz = _answer(client, {}, "x", 0, "A")

    assert phase.status_code == 401
    assert quiz.status_code == 401


def test_forged_ticket_rejected(app: Flask) -> None:
    with app.test_client() as client:
        auth = _register_and_login(client, "ana", "pw1")
        response = client.post(
            "/api/quiz",
            json={"phaseTicket": "not-a-ticket", "questionIndex": 0, "answer": "A"},
            headers=auth,
        )

    assert response.status_code == 400
    assert response.get_json() == {"error": "invalid_phase_ticket"}


def test_health_and_security_headers(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_unknown_route_is_json(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.get_json() == {"error": "not_found"}


def test_metrics_exposed(app: Flask) -> None:
    with app.test_client() as client:
        auth = _register_and_login(client, "ana", "pw1")
        client.post("/api/addpoints", json={"points": 10}, headers=auth)
        client.get("/api/phase", headers=auth)
        response = client.get("/api/metrics")

    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert 'newsquiz_requests_total{endpoint="/api/addpoints",status="200"}' in body
    assert 'newsquiz_points_awarded_total{source="addpoints"}' in body
    assert 'newsquiz_phases_total{outcome="issued"}' in body


def test_create_app_builds_services_from_given_config(
    reset_database, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MAX_POINTS_PER_SUBMISSION", "5")
    app = create_app(config=AppConfig())

    with app.test_client() as client:
        auth = _register_and_login(client, "cap", "pw1")
        over = client.post("/api/addpoints", json={"points": 10}, headers=auth)
        within = client.post("/api/addpoints", json={"points": 5}, headers=auth)

    assert over.status_code == 400
    assert over.get_json()["error"] == "invalid_points"
    assert within.status_code == 200
    assert within.get_json() == {"success": True, "points": 5}
