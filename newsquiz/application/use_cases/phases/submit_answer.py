# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from newsquiz.domain.phases.entities import OPTION_LABELS, QUESTIONS_PER_PHASE, quiz_stage
from newsquiz.domain.phases.exceptions import InvalidAnswerError
from newsquiz.domain.phases.ports import PhaseTicketSigner
from newsquiz.domain.players.repositories import PlayerRepository
from newsquiz.shared.logging import logger


@dataclass(slots=True, frozen=True)
class SubmissionOutcome:
    correct: bool
    points_awarded: int
    total: int

    def to_dict(self) -> dict[str, object]:
        return {
            "correct": self.correct,
            "pointsAwarded": self.points_awarded,
            "points": self.total,
        }


class SubmitAnswerUseCase:
    """Score one quiz answer against the answer key carried by the phase ticket."""

    def __init__(
        self,
        *,
        players: PlayerRepository,
        tickets: PhaseTicketSigner,
        points_per_answer: int,
    ) -> None:
        self._players = players
        self._tickets = tickets
        self._points = points_per_answer

    def execute(
        self, player_id: int, ticket: str, question_index: int, answer: str
    ) -> SubmissionOutcome:
        claims = self._tickets.verify(ticket, player_id)
        if not 0 <= question_index < QUESTIONS_PER_PHASE:
            raise InvalidAnswerError(context={"field": "questionIndex"})
        label = answer.strip().upper()
        if label not in OPTION_LABELS:
            raise InvalidAnswerError(context={"field": "answer"})

        correct = claims.answers[question_index] == label
        awarded = self._points if correct else 0
        total = self._players.award(
            player_id, claims.phase_id, quiz_stage(question_index), awarded
        )
        logger.info(
            f"ledger.quiz: player_id={player_id} phase_id={claims.phase_id} "
            f"q={question_index} correct={correct} awarded={awarded}"
        )
        return SubmissionOutcome(correct=correct, points_awarded=awarded, total=total)
