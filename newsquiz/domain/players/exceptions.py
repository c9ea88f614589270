# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from newsquiz.shared.errors.base import DomainError


class AuthError(DomainError):
    status = HTTPStatus.UNAUTHORIZED


class TokenMissingError(AuthError):
    code = "token_missing"
    status = HTTPStatus.UNAUTHORIZED


class TokenMalformedError(AuthError):
    code = "token_invalid"
    status = HTTPStatus.FORBIDDEN


class TokenExpiredError(AuthError):
    code = "token_expired"
    status = HTTPStatus.UNAUTHORIZED


class PlayerAlreadyExistsError(DomainError):
    code = "player_already_exists"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"


class PlayerNotFoundError(InvalidCredentialsError):
    pass


class BadCredentialError(InvalidCredentialsError):
    pass


class LedgerError(DomainError):
    pass


class InvalidDeltaError(LedgerError):
    code = "invalid_points"


class UnknownPlayerError(LedgerError):
    code = "player_not_found"
    status = HTTPStatus.NOT_FOUND


class AlreadyAwardedError(LedgerError):
    code = "already_answered"
    status = HTTPStatus.CONFLICT
