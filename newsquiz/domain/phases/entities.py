# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Phase building blocks: the news problem and its multiple-choice questions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from newsquiz.domain.exceptions import InvariantViolation

OPTION_LABELS: tuple[str, ...] = ("A", "B", "C", "D")
QUESTIONS_PER_PHASE = 3
CODE_STAGE = "code"


def quiz_stage(question_index: int) -> str:
    return f"q{question_index}"


@dataclass(slots=True, frozen=True)
class NewsItem:
    """Top headline returned by the news provider."""

    title: str
    description: str
    url: str | None = None
    published_at: str | None = None


@dataclass(slots=True, frozen=True)
class Problem:

    title: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description}


@dataclass(slots=True, frozen=True)
class Question:
    """A multiple-choice question with exactly one correct label."""

    prompt: str
    options: dict[str, str]
    correct: str

    def __post_init__(self) -> None:
        if not self.prompt.strip():
            raise InvariantViolation("prompt must not be empty", field="prompt")
        if tuple(sorted(self.options)) != OPTION_LABELS:
            raise InvariantViolation("options must be labelled A, B, C and D", field="options")
        texts = [text.strip().casefold() for text in self.options.values()]
        if not all(texts):
            raise InvariantViolation("option text must not be empty", field="options")
        if len(set(texts)) != len(texts):
            raise InvariantViolation("option texts must be distinct", field="options")
        if self.correct not in OPTION_LABELS:
            raise InvariantViolation("correct label must be one of A-D", field="correct")

    def to_public_dict(self) -> dict[str, object]:
        """Serialize without the correct label."""

        return {
            "prompt": self.prompt,
            "options": {label: self.options[label] for label in OPTION_LABELS},
        }


@dataclass(slots=True, frozen=True)
class Phase:

    phase_id: str
    problem: Problem
    questions: tuple[Question, ...]
    explanation: str
    created_at: datetime = field(compare=False)

    def __post_init__(self) -> None:
        if len(self.questions) != QUESTIONS_PER_PHASE:
            raise InvariantViolation(
                f"a phase holds exactly {QUESTIONS_PER_PHASE} questions", field="questions"
            )

    @property
    def answer_key(self) -> list[str]:
        return [question.correct for question in self.questions]


@dataclass(slots=True, frozen=True)
class PhaseTicket:
    """Claims carried by the signed ticket handed out with a phase."""

    phase_id: str
    player_id: int
    answers: tuple[str, ...]
    expires_at: datetime
