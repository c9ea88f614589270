# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from newsquiz.application.use_cases.players.login_player import LoginPlayerUseCase
from newsquiz.application.use_cases.players.register_player import RegisterPlayerUseCase
from newsquiz.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    RegisterRequestDTO,
    SuccessDTO,
)
from newsquiz.shared.errors.validation import raise_validation_error


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterPlayerUseCase,
        login_use_case: LoginPlayerUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        self._register_use_case.execute(dto.username, dto.secret)
        return jsonify(SuccessDTO().model_dump()), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.username, dto.secret)
        payload = LoginResponseDTO(
            token=result.token.token,
            player_id=result.player.id,
            username=result.player.username,
            points=result.player.points,
        ).model_dump(by_alias=True)
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
