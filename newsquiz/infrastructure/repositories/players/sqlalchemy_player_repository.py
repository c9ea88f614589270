# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from newsquiz.domain.players.entities import Player as DomainPlayer
from newsquiz.domain.players.entities import RankingEntry
from newsquiz.domain.players.exceptions import (
    AlreadyAwardedError,
    PlayerAlreadyExistsError,
    UnknownPlayerError,
)
from newsquiz.domain.players.repositories import PlayerRepository
from newsquiz.infrastructure.db.models import PhaseAward, Player
from newsquiz.infrastructure.db.session import session_scope
from newsquiz.shared.errors.base import StoreFailureError
from newsquiz.shared.logging import logger

P = ParamSpec("P")
T = TypeVar("T")


def _store_guard(fn: Callable[P, T]) -> Callable[P, T]:
    @wraps(fn)
    def inner(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.opt(exception=exc).error(f"store.{fn.__name__}: {type(exc).__name__}")
            raise StoreFailureError() from exc

    return inner


def _to_domain(row: Player) -> DomainPlayer:
    return DomainPlayer(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        points=row.points,
        created_at=row.created_at,
    )


def _apply_increment(session: Session, player_id: int, delta: int) -> int:
    """Single-statement ``points = points + delta``; never read-modify-write."""

    result = session.execute(
        update(Player)
        .where(Player.id == player_id)
        .values(points=Player.points + delta)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise UnknownPlayerError()
    # Same transaction, so this reads our own write under the row lock.
    return int(session.execute(select(Player.points).where(Player.id == player_id)).scalar_one())


class SqlAlchemyPlayerRepository(PlayerRepository):
    @_store_guard
    def find_by_username(self, username: str) -> DomainPlayer | None:
        with session_scope() as session:
            row = session.execute(
                select(Player).where(Player.username == username)
            ).scalar_one_or_none()
            return _to_domain(row) if row else None

    @_store_guard
    def find_by_id(self, player_id: int) -> DomainPlayer | None:
        with session_scope() as session:
            row = session.get(Player, player_id)
            return _to_domain(row) if row else None

    @_store_guard
    def add(self, player: DomainPlayer) -> DomainPlayer:
        try:
            with session_scope() as session:
                row = Player(
                    username=player.username,
                    password_hash=player.password_hash,
                    points=0,
                    created_at=player.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.info("store.add: username taken (unique constraint)")
            raise PlayerAlreadyExistsError() from exc

    @_store_guard
    def increment_points(self, player_id: int, delta: int) -> int:
        with session_scope() as session:
            return _apply_increment(session, player_id, delta)

    @_store_guard
    def award(self, player_id: int, phase_id: str, stage: str, delta: int) -> int:
        try:
            with session_scope() as session:
                total = _apply_increment(session, player_id, delta)
                session.add(
                    PhaseAward(player_id=player_id, phase_id=phase_id, stage=stage, points=delta)
                )
                session.flush()
                return total
        except IntegrityError as exc:
            logger.info(f"store.award: duplicate player_id={player_id} phase_id={phase_id} stage={stage}")
            raise AlreadyAwardedError() from exc

    @_store_guard
    def top(self, limit: int) -> list[RankingEntry]:
        with session_scope() as session:
            rows = session.execute(
                select(Player.username, Player.points)
                .order_by(Player.points.desc(), Player.id.asc())
                .limit(limit)
            ).all()
            return [RankingEntry(username=username, points=points) for username, points in rows]
