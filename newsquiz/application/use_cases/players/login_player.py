# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from newsquiz.domain.players.entities import Player, SessionToken
from newsquiz.domain.players.exceptions import BadCredentialError, PlayerNotFoundError
from newsquiz.domain.players.repositories import (
    PasswordHasher,
    PlayerRepository,
    SessionTokenService,
)
from newsquiz.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    token: SessionToken
    player: Player


class LoginPlayerUseCase:
    def __init__(
        self,
        *,
        players: PlayerRepository,
        tokens: SessionTokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._players = players
        self._tokens = tokens
        self._password_hasher = password_hasher
        # Hashed up front so the first unknown-username login pays no extra hash.
        self._decoy_hash = password_hasher.hash("newsquiz-decoy-secret")

    def execute(self, username: str, secret: str) -> LoginResult:
        player = self._players.find_by_username(username)
        if player is None:
            # Same verify cost whether or not the player exists.
            self._password_hasher.verify(secret, self._decoy_hash)
            logger.info("auth.login: rejected (unknown player)")
            raise PlayerNotFoundError()

        if not self._password_hasher.verify(secret, player.password_hash):
            logger.info(f"auth.login: rejected (bad credential) player_id={player.id}")
            raise BadCredentialError()

        token = self._tokens.issue(player.id)
        logger.info(f"auth.login: ok player_id={player.id}")
        return LoginResult(token=token, player=player)
