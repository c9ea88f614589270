# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from newsquiz.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class Player:

    id: int
    username: str
    password_hash: str
    points: int
    created_at: datetime

    def __post_init__(self) -> None:
        if self.points < 0:
            raise InvariantViolation("points must be non-negative", field="points")


@dataclass(slots=True, frozen=True)
class RankingEntry:

    username: str
    points: int


@dataclass(slots=True, frozen=True)
class SessionToken:

    player_id: int
    token: str
    expires_at: datetime
