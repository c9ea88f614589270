# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from newsquiz.shared.errors.base import DomainError


class PipelineError(DomainError):
    status = HTTPStatus.BAD_GATEWAY


class NewsUnavailableError(PipelineError):
    code = "news_unavailable"


class GenerationFailedError(PipelineError):
    code = "generation_failed"

    def __init__(self) -> None:
        super().__init__(context={"message": "try again"})


class InvalidPhaseTicketError(DomainError):
    code = "invalid_phase_ticket"


class InvalidAnswerError(DomainError):
    code = "invalid_answer"


class MalformedQuizError(ValueError):
    """The model response could not be turned into a valid question set."""
