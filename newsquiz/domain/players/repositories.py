# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Player, RankingEntry, SessionToken


class PlayerRepository(Protocol):
    def find_by_username(self, username: str) -> Player | None: ...
    def find_by_id(self, player_id: int) -> Player | None: ...
    def add(self, player: Player) -> Player: ...
    def increment_points(self, player_id: int, delta: int) -> int: ...
    def award(self, player_id: int, phase_id: str, stage: str, delta: int) -> int: ...
    def top(self, limit: int) -> list[RankingEntry]: ...


class SessionTokenService(Protocol):
    def issue(self, player_id: int) -> SessionToken: ...
    def verify(self, token: str | None) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
