# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from newsquiz.domain.players.entities import RankingEntry
from newsquiz.domain.players.repositories import PlayerRepository


class GetRankingUseCase:
    def __init__(self, *, players: PlayerRepository, max_limit: int) -> None:
        self._players = players
        self._max_limit = max_limit

    def execute(self, limit: int | None = None) -> list[RankingEntry]:
        if limit is None:
            limit = self._max_limit
        limit = max(1, min(int(limit), self._max_limit))
        return self._players.top(limit)
