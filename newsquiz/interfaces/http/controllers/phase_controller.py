# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from newsquiz.application.use_cases.phases.generate_phase import GeneratePhaseUseCase
from newsquiz.application.use_cases.phases.submit_answer import SubmitAnswerUseCase
from newsquiz.application.use_cases.phases.submit_code import SubmitCodeUseCase
from newsquiz.domain.phases.exceptions import PipelineError
from newsquiz.domain.players.repositories import SessionTokenService
from newsquiz.infrastructure.observability import record_phase, record_points
from newsquiz.interfaces.http.auth import bearer_required
from newsquiz.interfaces.http.dto.phase import CodeSubmissionRequestDTO, QuizAnswerRequestDTO
from newsquiz.shared.errors.validation import raise_validation_error
from newsquiz.utils.asyncio_utils import run_async


class PhaseController:
    def __init__(
        self,
        *,
        tokens: SessionTokenService,
        generate_use_case: GeneratePhaseUseCase,
        submit_answer_use_case: SubmitAnswerUseCase,
        submit_code_use_case: SubmitCodeUseCase,
    ) -> None:
        self._tokens = tokens
        self._generate_use_case = generate_use_case
        self._submit_answer_use_case = submit_answer_use_case
        self._submit_code_use_case = submit_code_use_case

    def phase(self, player_id: int) -> tuple[Response, int]:
        try:
            issued = run_async(self._generate_use_case.execute(player_id))
        except PipelineError as exc:
            record_phase(exc.code)
            raise
        record_phase("issued")
        return jsonify(issued.to_dict()), 200

    def quiz(self, player_id: int) -> tuple[Response, int]:
        try:
            dto = QuizAnswerRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        outcome = self._submit_answer_use_case.execute(
            player_id, dto.phase_ticket, dto.question_index, dto.answer
        )
        record_points("quiz", outcome.points_awarded)
        return jsonify(outcome.to_dict()), 200

    def code(self, player_id: int) -> tuple[Response, int]:
        try:
            dto = CodeSubmissionRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        outcome = self._submit_code_use_case.execute(player_id, dto.phase_ticket, dto.code)
        record_points("code", outcome.points_awarded)
        return jsonify(outcome.to_dict()), 200

    def as_blueprint(self) -> Blueprint:
        guard = bearer_required(self._tokens)
        bp = Blueprint("phase", __name__, url_prefix="/api")
        bp.add_url_rule("/phase", endpoint="phase", view_func=guard(self.phase), methods=["GET"])
        bp.add_url_rule("/quiz", endpoint="quiz", view_func=guard(self.quiz), methods=["POST"])
        bp.add_url_rule("/code", endpoint="code", view_func=guard(self.code), methods=["POST"])
        return bp
