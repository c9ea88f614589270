# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Phase synthesis: news item -> model questions -> validated phase."""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from newsquiz.application.services.quiz_parser import parse_questions
from newsquiz.domain.phases.entities import (
    OPTION_LABELS,
    QUESTIONS_PER_PHASE,
    NewsItem,
    Phase,
    Problem,
    Question,
)
from newsquiz.domain.phases.exceptions import (
    GenerationFailedError,
    MalformedQuizError,
    NewsUnavailableError,
)
from newsquiz.domain.phases.ports import NewsProvider, PhaseTicketSigner, QuestionGenerator
from newsquiz.shared.logging import logger

CODE_EXERCISE_NOTE = (
    "Write a Python program that tackles the problem described above. "
    "Submit the source code; it is checked for valid syntax, never executed."
)

GENERATION_ATTEMPTS = 2


def build_prompt(news: NewsItem, *, strict: bool = False) -> str:
    labels = ", ".join(OPTION_LABELS)
    prompt = (
        f"Write {QUESTIONS_PER_PHASE} multiple-choice questions ({labels}) about this news item.\n"
        f"Title: {news.title}\n"
        f"Content: {news.description}\n"
        "Return JSON: "
        '[{"prompt": "...", "options": {"A": "...", "B": "...", "C": "...", "D": "..."}, '
        '"correct": "A"}, ...]'
    )
    if strict:
        prompt += (
            "\nRespond with ONLY the JSON array and nothing else: no markdown, no comments. "
            f"The array must contain exactly {QUESTIONS_PER_PHASE} objects. Each object needs "
            f'a non-empty "prompt", an "options" object with exactly the keys {labels} holding '
            'four different answers, and "correct" set to a single one of those letters.'
        )
    return prompt


@dataclass(slots=True, frozen=True)
class IssuedPhase:
    phase: Phase
    ticket: str

    def to_dict(self) -> dict[str, object]:
        return {
            "phaseId": self.phase.phase_id,
            "phaseTicket": self.ticket,
            "problem": self.phase.problem.to_dict(),
            "questions": [q.to_public_dict() for q in self.phase.questions],
            "explanation": self.phase.explanation,
        }


class GeneratePhaseUseCase:
    def __init__(
        self,
        *,
        news: NewsProvider,
        generator: QuestionGenerator,
        tickets: PhaseTicketSigner,
        news_timeout: float,
        generation_timeout: float,
    ) -> None:
        self._news = news
        self._generator = generator
        self._tickets = tickets
        self._news_timeout = news_timeout
        self._generation_timeout = generation_timeout

    async def _fetch_news(self) -> NewsItem:
        try:
            return await asyncio.wait_for(self._news.fetch_top(), timeout=self._news_timeout)
        except TimeoutError as exc:
            logger.warning(f"phase.news: timed out after {self._news_timeout}s")
            raise NewsUnavailableError() from exc

    async def _request_questions(self, news: NewsItem, *, strict: bool) -> tuple[Question, ...]:
        prompt = build_prompt(news, strict=strict)
        try:
            text = await asyncio.wait_for(
                self._generator.complete(prompt), timeout=self._generation_timeout
            )
        except TimeoutError as exc:
            logger.warning(f"phase.generate: timed out after {self._generation_timeout}s")
            raise GenerationFailedError() from exc
        return parse_questions(text)

    async def synthesize(self) -> Phase:
        news = await self._fetch_news()
        logger.info(f"phase.news: fetched title={news.title[:80]!r}")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(GENERATION_ATTEMPTS),
            retry=retry_if_exception_type(MalformedQuizError),
            reraise=True,
        )
        questions: tuple[Question, ...] = ()
        try:
            async for attempt in retrying:
                with attempt:
                    number = attempt.retry_state.attempt_number
                    try:
                        questions = await self._request_questions(news, strict=number > 1)
                    except MalformedQuizError as exc:
                        logger.warning(f"phase.generate: malformed output attempt={number}: {exc}")
                        raise
        except MalformedQuizError as exc:
            raise GenerationFailedError() from exc

        return Phase(
            phase_id=uuid.uuid4().hex,
            problem=Problem(title=news.title, description=news.description),
            questions=questions,
            explanation=CODE_EXERCISE_NOTE,
            created_at=datetime.now(UTC),
        )

    async def execute(self, player_id: int) -> IssuedPhase:
        phase = await self.synthesize()
        ticket = self._tickets.sign(phase, player_id)
        logger.info(f"phase.issue: player_id={player_id} phase_id={phase.phase_id}")
        return IssuedPhase(phase=phase, ticket=ticket)
