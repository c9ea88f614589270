# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import ast
import warnings

from newsquiz.domain.phases.entities import CODE_STAGE
from newsquiz.domain.phases.ports import PhaseTicketSigner
from newsquiz.domain.players.repositories import PlayerRepository
from newsquiz.shared.logging import logger

from .submit_answer import SubmissionOutcome


def judge_code(code: str, max_length: int) -> bool:
    """Accept non-empty Python source that compiles to an AST; nothing is executed."""

    if not code.strip() or len(code) > max_length:
        return False
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", SyntaxWarning)
            ast.parse(code, mode="exec")
    except (SyntaxError, ValueError):
        return False
    return True


class SubmitCodeUseCase:
    def __init__(
        self,
        *,
        players: PlayerRepository,
        tickets: PhaseTicketSigner,
        points_for_code: int,
        max_length: int,
    ) -> None:
        self._players = players
        self._tickets = tickets
        self._points = points_for_code
        self._max_length = max_length

    def execute(self, player_id: int, ticket: str, code: str) -> SubmissionOutcome:
        claims = self._tickets.verify(ticket, player_id)
        correct = judge_code(code, self._max_length)
        awarded = self._points if correct else 0
        total = self._players.award(player_id, claims.phase_id, CODE_STAGE, awarded)
        logger.info(
            f"ledger.code: player_id={player_id} phase_id={claims.phase_id} "
            f"correct={correct} awarded={awarded}"
        )
        return SubmissionOutcome(correct=correct, points_awarded=awarded, total=total)
