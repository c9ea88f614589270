# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed tickets that let the server score a phase it never stored.

The answer key travels Fernet-encrypted inside the ``ans`` claim, so a client
holding the ticket can neither read nor alter it.
"""

from __future__ import annotations

import base64
import hashlib
import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.fernet import Fernet, InvalidToken

from newsquiz.domain.phases.entities import OPTION_LABELS, QUESTIONS_PER_PHASE, Phase, PhaseTicket
from newsquiz.domain.phases.exceptions import InvalidPhaseTicketError
from newsquiz.domain.phases.ports import PhaseTicketSigner
from newsquiz.shared.logging import logger

TICKET_TYPE = "phase"
_KEY_CONTEXT = b"newsquiz.phase-ticket.answers:"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _derive_fernet_key(secret: str) -> bytes:
    digest = hashlib.sha256(_KEY_CONTEXT + secret.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest)


class JwtPhaseTicketSigner(PhaseTicketSigner):
    def __init__(
        self,
        *,
        secret: str,
        ttl_seconds: int,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._clock = clock
        self._fernet = Fernet(_derive_fernet_key(secret))

    def _seal(self, phase_id: str, answers: list[str]) -> str:
        plain = json.dumps({"pid": phase_id, "ans": answers}, separators=(",", ":"))
        return self._fernet.encrypt(plain.encode("utf-8")).decode("ascii")

    def _unseal(self, sealed: object, phase_id: str) -> list[str]:
        if not isinstance(sealed, str):
            raise InvalidPhaseTicketError()
        try:
            data = json.loads(self._fernet.decrypt(sealed.encode("utf-8")))
        except (InvalidToken, ValueError) as exc:
            raise InvalidPhaseTicketError() from exc
        # The sealed key names its phase so it cannot be moved onto another ticket.
        if not isinstance(data, dict) or data.get("pid") != phase_id:
            raise InvalidPhaseTicketError()
        answers = data.get("ans")
        if (
            not isinstance(answers, list)
            or len(answers) != QUESTIONS_PER_PHASE
            or any(answer not in OPTION_LABELS for answer in answers)
        ):
            raise InvalidPhaseTicketError()
        return answers

    def sign(self, phase: Phase, player_id: int) -> str:
        issued_at = self._clock()
        payload = {
            "sub": str(player_id),
            "typ": TICKET_TYPE,
            "pid": phase.phase_id,
            "ans": self._seal(phase.phase_id, phase.answer_key),
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, ticket: str, player_id: int) -> PhaseTicket:
        if not ticket:
            raise InvalidPhaseTicketError()
        try:
            claims = jwt.decode(
                ticket,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub", "pid", "ans"]},
            )
        except jwt.InvalidTokenError as exc:
            logger.info(f"phase.ticket: rejected player={player_id} reason={type(exc).__name__}")
            raise InvalidPhaseTicketError() from exc

        if claims.get("typ") != TICKET_TYPE or claims.get("sub") != str(player_id):
            logger.info(f"phase.ticket: claims mismatch player={player_id}")
            raise InvalidPhaseTicketError()

        phase_id = str(claims["pid"])
        try:
            answers = self._unseal(claims.get("ans"), phase_id)
        except InvalidPhaseTicketError:
            logger.info(f"phase.ticket: answer key unreadable player={player_id}")
            raise

        return PhaseTicket(
            phase_id=phase_id,
            player_id=player_id,
            answers=tuple(answers),
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )
