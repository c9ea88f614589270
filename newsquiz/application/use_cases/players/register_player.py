# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from newsquiz.domain.players.entities import Player
from newsquiz.domain.players.exceptions import PlayerAlreadyExistsError
from newsquiz.domain.players.repositories import PasswordHasher, PlayerRepository
from newsquiz.shared.logging import logger


class RegisterPlayerUseCase:
    def __init__(
        self,
        *,
        players: PlayerRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._players = players
        self._password_hasher = password_hasher

    def execute(self, username: str, secret: str) -> Player:
        # Fast path only; the unique constraint on username decides races.
        if self._players.find_by_username(username):
            raise PlayerAlreadyExistsError()
        hashed = self._password_hasher.hash(secret)
        player = Player(
            id=0,
            username=username,
            password_hash=hashed,
            points=0,
            created_at=datetime.now(UTC),
        )
        persisted = self._players.add(player)
        logger.info(f"auth.register: ok player_id={persisted.id}")
        return persisted
