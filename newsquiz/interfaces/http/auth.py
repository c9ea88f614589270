# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from newsquiz.domain.players.exceptions import AuthError, TokenMalformedError
from newsquiz.domain.players.repositories import SessionTokenService
from newsquiz.shared.logging import bind_player, logger


def bearer_token() -> str | None:
    """Return the bearer credential of the current request, ``None`` if absent."""

    header = request.headers.get("Authorization", "").strip()
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        raise TokenMalformedError()
    return token.strip() or None


def bearer_required(tokens: SessionTokenService) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(f)
        def inner(*a: Any, **kw: Any) -> Any:
            try:
                player_id = tokens.verify(bearer_token())
            except AuthError as exc:
                logger.warning(f"Auth failed ({exc.code}) on {request.method} {request.path}")
                raise

            g.player_id = player_id
            bind_player(player_id)
            logger.debug(f"Auth OK: player={player_id} {request.method} {request.path}")
            return f(*a, player_id=player_id, **kw)

        return inner

    return decorator


__all__ = ["bearer_required", "bearer_token"]
