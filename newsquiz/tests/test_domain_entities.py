from __future__ import annotations

from datetime import UTC, datetime

import pytest
from conftest import make_phase, make_question

from newsquiz.domain import InvariantViolation, Phase, Player, Question


def test_player_points_cannot_be_negative() -> None:
    with pytest.raises(InvariantViolation) as exc_info:
        Player(id=1, username="ana", password_hash="h", points=-1, created_at=datetime.now(UTC))

    assert exc_info.value.field == "points"


def test_question_requires_four_distinct_labelled_options() -> None:
    with pytest.raises(InvariantViolation):
        Question(prompt="Q?", options={"A": "x", "B": "y", "C": "z"}, correct="A")
    with pytest.raises(InvariantViolation):
        Question(prompt="Q?", options={"A": "x", "B": "x", "C": "z", "D": "w"}, correct="A")
    with pytest.raises(InvariantViolation):
        Question(prompt="Q?", options={"A": "x", "B": "y", "C": "z", "D": "w"}, correct="E")


def test_question_public_view_hides_answer() -> None:
    public = make_question(correct="C").to_public_dict()

    assert set(public) == {"prompt", "options"}
    assert list(public["options"]) == ["A", "B", "C", "D"]


def test_phase_holds_exactly_three_questions() -> None:
    phase = make_phase(answers=("A", "B", "C"))
    assert phase.answer_key == ["A", "B", "C"]

    with pytest.raises(InvariantViolation):
        Phase(
            phase_id="p",
            problem=phase.problem,
            questions=phase.questions[:2],
            explanation="",
            created_at=datetime.now(UTC),
        )
