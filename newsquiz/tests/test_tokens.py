from __future__ import annotations

import base64
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from conftest import make_phase

from newsquiz.application.services.phase_tickets import JwtPhaseTicketSigner
from newsquiz.application.services.session_tokens import JwtSessionTokenService
from newsquiz.domain.phases.exceptions import InvalidPhaseTicketError
from newsquiz.domain.players.exceptions import (
    TokenExpiredError,
    TokenMalformedError,
    TokenMissingError,
)

SECRET = "unit-test-secret-key-0123456789abcdefghij"


def _two_hours_ago() -> datetime:
    return datetime.now(UTC) - timedelta(hours=2)


def test_session_token_roundtrip() -> None:
    service = JwtSessionTokenService(secret=SECRET, ttl_seconds=60)

    issued = service.issue(7)

    assert issued.player_id == 7
    assert issued.expires_at > datetime.now(UTC)
    assert service.verify(issued.token) == 7


@pytest.mark.parametrize("token", [None, ""])
def test_session_token_missing(token: str | None) -> None:
    service = JwtSessionTokenService(secret=SECRET, ttl_seconds=60)

    with pytest.raises(TokenMissingError) as exc_info:
        service.verify(token)

    assert exc_info.value.status == 401


def test_session_token_expired() -> None:
    stale = JwtSessionTokenService(secret=SECRET, ttl_seconds=60, clock=_two_hours_ago)
    service = JwtSessionTokenService(secret=SECRET, ttl_seconds=60)

    with pytest.raises(TokenExpiredError) as exc_info:
        service.verify(stale.issue(7).token)

    assert exc_info.value.code == "token_expired"
    assert exc_info.value.status == 401


def test_session_token_tampered_or_foreign() -> None:
    service = JwtSessionTokenService(secret=SECRET, ttl_seconds=60)
    other = JwtSessionTokenService(
        secret="another-secret-key-9876543210zyxwvutsrqp", ttl_seconds=60
    )
    token = service.issue(7).token

    for bad in (token[:-2] + "xx", "not-a-jwt", other.issue(7).token):
        with pytest.raises(TokenMalformedError) as exc_info:
            service.verify(bad)
        assert exc_info.value.code == "token_invalid"
        assert exc_info.value.status == 403


def test_phase_ticket_is_not_a_session_token() -> None:
    service = JwtSessionTokenService(secret=SECRET, ttl_seconds=60)
    signer = JwtPhaseTicketSigner(secret=SECRET, ttl_seconds=60)
    ticket = signer.sign(make_phase(), 7)

    with pytest.raises(TokenMalformedError):
        service.verify(ticket)


def test_session_token_requires_secret() -> None:
    with pytest.raises(RuntimeError):
        JwtSessionTokenService(secret="", ttl_seconds=60)


def test_phase_ticket_scores_from_hidden_answer_key() -> None:
    signer = JwtPhaseTicketSigner(secret=SECRET, ttl_seconds=60)
    phase = make_phase(answers=("C", "A", "D"))

    claims = signer.verify(signer.sign(phase, 3), 3)

    assert claims.phase_id == phase.phase_id
    assert claims.player_id == 3
    assert claims.answers == ("C", "A", "D")


def test_phase_ticket_payload_hides_answer_key() -> None:
    signer = JwtPhaseTicketSigner(secret=SECRET, ttl_seconds=60)
    ticket = signer.sign(make_phase(answers=("B", "A", "D")), 7)

    segment = ticket.split(".")[1]
    raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4)).decode("utf-8")
    unverified = jwt.decode(ticket, options={"verify_signature": False})

    assert unverified["pid"] == "phase-1"
    assert isinstance(unverified["ans"], str)
    assert '"B"' not in raw
    assert '["B","A","D"]' not in raw.replace(" ", "")


def test_phase_ticket_rejects_answer_key_from_another_phase() -> None:
    signer = JwtPhaseTicketSigner(secret=SECRET, ttl_seconds=60)
    donor = jwt.decode(
        signer.sign(make_phase(phase_id="phase-2"), 3), options={"verify_signature": False}
    )
    spliced = jwt.encode(
        {"sub": "3", "typ": "phase", "pid": "phase-1", "ans": donor["ans"], "exp": 4102444800},
        SECRET,
        algorithm="HS256",
    )
    plain = jwt.encode(
        {"sub": "3", "typ": "phase", "pid": "phase-1", "ans": ["A", "A", "A"], "exp": 4102444800},
        SECRET,
        algorithm="HS256",
    )

    for bad in (spliced, plain):
        with pytest.raises(InvalidPhaseTicketError):
            signer.verify(bad, 3)


def test_phase_ticket_bound_to_player() -> None:
    signer = JwtPhaseTicketSigner(secret=SECRET, ttl_seconds=60)
    ticket = signer.sign(make_phase(), 3)

    with pytest.raises(InvalidPhaseTicketError):
        signer.verify(ticket, 4)


def test_phase_ticket_rejects_expired_and_forged() -> None:
    signer = JwtPhaseTicketSigner(secret=SECRET, ttl_seconds=60)
    stale = JwtPhaseTicketSigner(secret=SECRET, ttl_seconds=60, clock=_two_hours_ago)
    forged = jwt.encode(
        {"sub": "3", "typ": "phase", "pid": "p", "ans": ["A", "A", "A"], "exp": 4102444800},
        "attacker-chosen-secret-key-000000",
        algorithm="HS256",
    )

    for bad in ("", stale.sign(make_phase(), 3), forged):
        with pytest.raises(InvalidPhaseTicketError):
            signer.verify(bad, 3)


def test_session_token_is_not_a_phase_ticket() -> None:
    service = JwtSessionTokenService(secret=SECRET, ttl_seconds=60)
    signer = JwtPhaseTicketSigner(secret=SECRET, ttl_seconds=60)

    with pytest.raises(InvalidPhaseTicketError):
        signer.verify(service.issue(3).token, 3)
