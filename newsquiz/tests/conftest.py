from __future__ import annotations

import os
import tempfile
from datetime import UTC, datetime

_TMP_DIR = tempfile.mkdtemp(prefix="newsquiz-tests-")

# The engine and container read configuration at import time.
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'newsquiz.db')}"
os.environ["JWT_SECRET"] = "test-only-signing-secret-0123456789abcdef"
os.environ["PASSWORD_HASH_METHOD"] = "pbkdf2:sha256:1000"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "app.log")
os.environ["LOG_TO_FILE"] = "0"
os.environ["APP_ENV"] = "development"

import pytest  # noqa: E402

from newsquiz.domain.phases.entities import Phase, Problem, Question  # noqa: E402
from newsquiz.domain.players.entities import Player, RankingEntry  # noqa: E402
from newsquiz.domain.players.exceptions import (  # noqa: E402
    AlreadyAwardedError,
    PlayerAlreadyExistsError,
    UnknownPlayerError,
)


class InMemoryPlayerRepository:
    def __init__(self) -> None:
        self._players: dict[int, Player] = {}
        self._awards: set[tuple[int, str, str]] = set()
        self._seq = 1

    def find_by_username(self, username: str) -> Player | None:
        return next((p for p in self._players.values() if p.username == username), None)

    def find_by_id(self, player_id: int) -> Player | None:
        return self._players.get(player_id)

    def add(self, player: Player) -> Player:
        if self.find_by_username(player.username):
            raise PlayerAlreadyExistsError()
        stored = Player(
            id=self._seq,
            username=player.username,
            password_hash=player.password_hash,
            points=0,
            created_at=player.created_at,
        )
        self._players[stored.id] = stored
        self._seq += 1
        return stored

    def increment_points(self, player_id: int, delta: int) -> int:
        current = self._players.get(player_id)
        if current is None:
            raise UnknownPlayerError()
        updated = Player(
            id=current.id,
            username=current.username,
            password_hash=current.password_hash,
            points=current.points + delta,
            created_at=current.created_at,
        )
        self._players[player_id] = updated
        return updated.points

    def award(self, player_id: int, phase_id: str, stage: str, delta: int) -> int:
        key = (player_id, phase_id, stage)
        if key in self._awards:
            raise AlreadyAwardedError()
        total = self.increment_points(player_id, delta)
        self._awards.add(key)
        return total

    def top(self, limit: int) -> list[RankingEntry]:
        ordered = sorted(self._players.values(), key=lambda p: (-p.points, p.id))
        return [RankingEntry(username=p.username, points=p.points) for p in ordered[:limit]]


class DeterministicHasher:
    def __init__(self) -> None:
        self.verify_calls = 0
        self.hash_calls = 0

    def hash(self, password: str) -> str:
        self.hash_calls += 1
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


def make_question(prompt: str = "Which city hosted the summit?", correct: str = "B") -> Question:
    return Question(
        prompt=prompt,
        options={"A": "Lisbon", "B": "Nairobi", "C": "Lima", "D": "Oslo"},
        correct=correct,
    )


def make_phase(phase_id: str = "phase-1", answers: tuple[str, ...] = ("B", "A", "D")) -> Phase:
    return Phase(
        phase_id=phase_id,
        problem=Problem(title="Summit ends", description="Leaders met for three days."),
        questions=tuple(make_question(f"Question {i}?", correct) for i, correct in enumerate(answers)),
        explanation="Write a program.",
        created_at=datetime.now(UTC),
    )


@pytest.fixture()
def player_repo() -> InMemoryPlayerRepository:
    return InMemoryPlayerRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def reset_database():
    from newsquiz.infrastructure.db import ENGINE, Base
    from newsquiz.infrastructure.db import models  # noqa: F401

    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)
