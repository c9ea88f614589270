# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from newsquiz.application.services.password_hashing import WerkzeugPasswordHasher
from newsquiz.application.services.phase_tickets import JwtPhaseTicketSigner
from newsquiz.application.services.session_tokens import JwtSessionTokenService
from newsquiz.application.use_cases.phases.generate_phase import GeneratePhaseUseCase
from newsquiz.application.use_cases.phases.submit_answer import SubmitAnswerUseCase
from newsquiz.application.use_cases.phases.submit_code import SubmitCodeUseCase
from newsquiz.application.use_cases.players.add_points import AddPointsUseCase
from newsquiz.application.use_cases.players.get_ranking import GetRankingUseCase
from newsquiz.application.use_cases.players.login_player import LoginPlayerUseCase
from newsquiz.application.use_cases.players.register_player import RegisterPlayerUseCase
from newsquiz.infrastructure.providers import NewsApiProvider, OpenAIChatQuestionGenerator
from newsquiz.infrastructure.repositories.players.sqlalchemy_player_repository import (
    SqlAlchemyPlayerRepository,
)
from newsquiz.interfaces.http.controllers.auth_controller import AuthController
from newsquiz.interfaces.http.controllers.ledger_controller import LedgerController
from newsquiz.interfaces.http.controllers.phase_controller import PhaseController
from newsquiz.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @property
    def config(self) -> AppConfig:
        return self._config

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self._config.security.password_hash_method)

    @cached_property
    def session_tokens(self) -> JwtSessionTokenService:
        security = self._config.security
        return JwtSessionTokenService(
            secret=security.jwt_secret,
            ttl_seconds=security.token_ttl_seconds,
            algorithm=security.jwt_algorithm,
        )

    @cached_property
    def phase_tickets(self) -> JwtPhaseTicketSigner:
        security = self._config.security
        return JwtPhaseTicketSigner(
            secret=security.jwt_secret,
            ttl_seconds=security.phase_ticket_ttl_seconds,
            algorithm=security.jwt_algorithm,
        )

    @cached_property
    def player_repository(self) -> SqlAlchemyPlayerRepository:
        return SqlAlchemyPlayerRepository()

    @cached_property
    def news_provider(self) -> NewsApiProvider:
        return NewsApiProvider(self._config.news)

    @cached_property
    def question_generator(self) -> OpenAIChatQuestionGenerator:
        return OpenAIChatQuestionGenerator(self._config.llm)

    # Use cases

    @cached_property
    def register_player_use_case(self) -> RegisterPlayerUseCase:
        return RegisterPlayerUseCase(
            players=self.player_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_player_use_case(self) -> LoginPlayerUseCase:
        return LoginPlayerUseCase(
            players=self.player_repository,
            tokens=self.session_tokens,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def add_points_use_case(self) -> AddPointsUseCase:
        return AddPointsUseCase(
            players=self.player_repository,
            max_delta=self._config.scoring.max_points_per_submission,
        )

    @cached_property
    def get_ranking_use_case(self) -> GetRankingUseCase:
        return GetRankingUseCase(
            players=self.player_repository,
            max_limit=self._config.scoring.ranking_limit,
        )

    @cached_property
    def generate_phase_use_case(self) -> GeneratePhaseUseCase:
        return GeneratePhaseUseCase(
            news=self.news_provider,
            generator=self.question_generator,
            tickets=self.phase_tickets,
            news_timeout=self._config.news.timeout,
            generation_timeout=self._config.llm.timeout,
        )

    @cached_property
    def submit_answer_use_case(self) -> SubmitAnswerUseCase:
        return SubmitAnswerUseCase(
            players=self.player_repository,
            tickets=self.phase_tickets,
            points_per_answer=self._config.scoring.quiz_points,
        )

    @cached_property
    def submit_code_use_case(self) -> SubmitCodeUseCase:
        return SubmitCodeUseCase(
            players=self.player_repository,
            tickets=self.phase_tickets,
            points_for_code=self._config.scoring.code_points,
            max_length=self._config.scoring.code_max_length,
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_player_use_case,
            login_use_case=self.login_player_use_case,
        )

    @cached_property
    def ledger_controller(self) -> LedgerController:
        return LedgerController(
            tokens=self.session_tokens,
            add_points_use_case=self.add_points_use_case,
            ranking_use_case=self.get_ranking_use_case,
        )

    @cached_property
    def phase_controller(self) -> PhaseController:
        return PhaseController(
            tokens=self.session_tokens,
            generate_use_case=self.generate_phase_use_case,
            submit_answer_use_case=self.submit_answer_use_case,
            submit_code_use_case=self.submit_code_use_case,
        )


container = Container()
