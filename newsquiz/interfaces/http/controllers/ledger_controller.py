# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from newsquiz.application.use_cases.players.add_points import AddPointsUseCase
from newsquiz.application.use_cases.players.get_ranking import GetRankingUseCase
from newsquiz.domain.players.exceptions import InvalidDeltaError
from newsquiz.domain.players.repositories import SessionTokenService
from newsquiz.infrastructure.observability import record_points
from newsquiz.interfaces.http.auth import bearer_required
from newsquiz.interfaces.http.dto.ledger import (
    AddPointsRequestDTO,
    AddPointsResponseDTO,
    RankingEntryDTO,
    RankingQueryDTO,
)
from newsquiz.shared.errors.validation import raise_validation_error


class LedgerController:
    def __init__(
        self,
        *,
        tokens: SessionTokenService,
        add_points_use_case: AddPointsUseCase,
        ranking_use_case: GetRankingUseCase,
    ) -> None:
        self._tokens = tokens
        self._add_points_use_case = add_points_use_case
        self._ranking_use_case = ranking_use_case

    def ranking(self) -> tuple[Response, int]:
        try:
            query = RankingQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        entries = self._ranking_use_case.execute(query.limit)
        payload = [
            RankingEntryDTO(username=entry.username, points=entry.points).model_dump()
            for entry in entries
        ]
        return jsonify(payload), 200

    def add_points(self, player_id: int) -> tuple[Response, int]:
        try:
            dto = AddPointsRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise InvalidDeltaError(context={"reason": "not_an_integer"}) from exc

        total = self._add_points_use_case.execute(player_id, dto.points)
        record_points("addpoints", dto.points)
        return jsonify(AddPointsResponseDTO(points=total).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("ledger", __name__, url_prefix="/api")
        bp.add_url_rule("/ranking", view_func=self.ranking, methods=["GET"])
        bp.add_url_rule(
            "/addpoints",
            endpoint="add_points",
            view_func=bearer_required(self._tokens)(self.add_points),
            methods=["POST"],
        )
        return bp
