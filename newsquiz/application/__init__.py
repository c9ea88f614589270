# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.phases.generate_phase import GeneratePhaseUseCase
from .use_cases.players.add_points import AddPointsUseCase
from .use_cases.players.get_ranking import GetRankingUseCase
from .use_cases.players.login_player import LoginPlayerUseCase
from .use_cases.players.register_player import RegisterPlayerUseCase

__all__ = [
    "AddPointsUseCase",
    "GeneratePhaseUseCase",
    "GetRankingUseCase",
    "LoginPlayerUseCase",
    "RegisterPlayerUseCase",
]
