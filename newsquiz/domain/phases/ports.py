# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import NewsItem, Phase, PhaseTicket


class NewsProvider(Protocol):
    async def fetch_top(self) -> NewsItem: ...


class QuestionGenerator(Protocol):
    async def complete(self, prompt: str) -> str: ...


class PhaseTicketSigner(Protocol):
    def sign(self, phase: Phase, player_id: int) -> str: ...
    def verify(self, ticket: str, player_id: int) -> PhaseTicket: ...
