# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless bearer tokens signed with the process-wide JWT secret."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from newsquiz.domain.players.entities import SessionToken
from newsquiz.domain.players.exceptions import (
    TokenExpiredError,
    TokenMalformedError,
    TokenMissingError,
)
from newsquiz.domain.players.repositories import SessionTokenService
from newsquiz.shared.logging import logger

TOKEN_TYPE = "session"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtSessionTokenService(SessionTokenService):
    def __init__(
        self,
        *,
        secret: str,
        ttl_seconds: int,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise RuntimeError("JWT signing secret is not configured")
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, player_id: int) -> SessionToken:
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        payload = {
            "sub": str(player_id),
            "typ": TOKEN_TYPE,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        logger.debug(f"auth.token: issued player={player_id} exp={expires_at.isoformat()}")
        return SessionToken(player_id=player_id, token=token, expires_at=expires_at)

    def verify(self, token: str | None) -> int:
        if not token:
            raise TokenMissingError()
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidTokenError as exc:
            raise TokenMalformedError() from exc

        if claims.get("typ") != TOKEN_TYPE:
            raise TokenMalformedError()
        try:
            return int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise TokenMalformedError() from exc
