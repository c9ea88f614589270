# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation
from .phases.entities import OPTION_LABELS, NewsItem, Phase, Problem, Question
from .players.entities import Player, RankingEntry, SessionToken

__all__ = [
    "OPTION_LABELS",
    "InvariantViolation",
    "NewsItem",
    "Phase",
    "Player",
    "Problem",
    "Question",
    "RankingEntry",
    "SessionToken",
]
