# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from newsquiz.domain.players.exceptions import InvalidDeltaError
from newsquiz.domain.players.repositories import PlayerRepository
from newsquiz.shared.logging import logger


def validate_delta(delta: object, max_delta: int) -> int:
    """Return ``delta`` if it is a fair score increment, else raise."""

    if isinstance(delta, bool) or not isinstance(delta, int):
        raise InvalidDeltaError(context={"reason": "not_an_integer"})
    if delta < 0:
        raise InvalidDeltaError(context={"reason": "negative"})
    if delta > max_delta:
        raise InvalidDeltaError(context={"reason": "too_large", "max": max_delta})
    return delta


class AddPointsUseCase:
    def __init__(self, *, players: PlayerRepository, max_delta: int) -> None:
        self._players = players
        self._max_delta = max_delta

    def execute(self, player_id: int, delta: object) -> int:
        checked = validate_delta(delta, self._max_delta)
        total = self._players.increment_points(player_id, checked)
        logger.info(f"ledger.add_points: player_id={player_id} delta={checked} total={total}")
        return total
