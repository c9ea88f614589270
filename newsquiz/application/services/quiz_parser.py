# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Turn raw model output into validated multiple-choice questions.

The model is asked for the canonical shape::

    [{"prompt": "...", "options": {"A": "...", "B": "...", "C": "...", "D": "..."},
      "correct": "A"}, ...]

Two near-misses are repaired instead of rejected: the legacy flat shape
``{"q", "a", "b", "c", "d", "resposta"}`` and a ``{"questions": [...]}``
wrapper. Anything else raises :class:`MalformedQuizError`.
"""

from __future__ import annotations

import json
import re
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from newsquiz.domain.exceptions import InvariantViolation
from newsquiz.domain.phases.entities import OPTION_LABELS, QUESTIONS_PER_PHASE, Question
from newsquiz.domain.phases.exceptions import MalformedQuizError

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)
_LABEL_RE = re.compile(r"^\(?([A-Da-d])\s*(?:[).:\-]|$)")


def _normalize_label(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    match = _LABEL_RE.match(value.strip())
    return match.group(1).upper() if match else value.strip()


class QuestionPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    prompt: str = Field(
        min_length=1,
        max_length=1000,
        validation_alias=AliasChoices("prompt", "question", "q"),
    )
    options: dict[str, Annotated[str, Field(min_length=1, max_length=500)]]
    correct: str = Field(validation_alias=AliasChoices("correct", "answer", "resposta"))

    @model_validator(mode="before")
    @classmethod
    def _lift_flat_options(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "options" in data:
            return data
        flat = {}
        for label in OPTION_LABELS:
            for key in (label, label.lower()):
                if key in data:
                    flat[label] = data[key]
                    break
        return {**data, "options": flat}

    @field_validator("options", mode="before")
    @classmethod
    def _label_options(cls, value: Any) -> Any:
        if isinstance(value, list) and len(value) == len(OPTION_LABELS):
            return dict(zip(OPTION_LABELS, value, strict=True))
        if isinstance(value, dict):
            return {_normalize_label(str(key)): text for key, text in value.items()}
        return value

    @model_validator(mode="after")
    def _check_labels(self) -> QuestionPayload:
        if tuple(sorted(self.options)) != OPTION_LABELS:
            raise ValueError("options must be labelled exactly A, B, C and D")
        texts = [text.casefold() for text in self.options.values()]
        if len(set(texts)) != len(texts):
            raise ValueError("option texts must be distinct")

        correct = _normalize_label(self.correct)
        if correct not in OPTION_LABELS:
            # Some models answer with the option text instead of its label.
            by_text = {text.casefold(): label for label, text in self.options.items()}
            correct = by_text.get(self.correct.casefold(), correct)
        if correct not in OPTION_LABELS:
            raise ValueError("correct must name one of A, B, C or D")
        self.correct = correct
        return self


_QUIZ_ADAPTER = TypeAdapter(
    Annotated[
        list[QuestionPayload],
        Field(min_length=QUESTIONS_PER_PHASE, max_length=QUESTIONS_PER_PHASE),
    ]
)


def _load_json(text: str) -> Any:
    stripped = text.strip()
    fenced = _FENCE_RE.match(stripped)
    if fenced:
        stripped = fenced.group(1)
    try:
        return json.loads(stripped)
    except (json.JSONDecodeError, RecursionError):
        pass

    # Prose around the payload: keep the outermost array or object.
    for opener, closer in (("[", "]"), ("{", "}")):
        start, end = stripped.find(opener), stripped.rfind(closer)
        if 0 <= start < end:
            try:
                return json.loads(stripped[start : end + 1])
            except (json.JSONDecodeError, RecursionError):
                continue
    raise MalformedQuizError("response is not JSON")


def parse_questions(text: str | None) -> tuple[Question, ...]:
    """Validate a model response; raise :class:`MalformedQuizError` on any defect."""

    if not text or not text.strip():
        raise MalformedQuizError("empty response")

    data = _load_json(text)
    if isinstance(data, dict) and "questions" in data:
        data = data["questions"]

    try:
        payloads = _QUIZ_ADAPTER.validate_python(data)
    except PydanticValidationError as exc:
        raise MalformedQuizError(f"invalid quiz shape: {exc.error_count()} error(s)") from exc

    try:
        return tuple(
            Question(prompt=item.prompt, options=dict(item.options), correct=item.correct)
            for item in payloads
        )
    except InvariantViolation as exc:
        raise MalformedQuizError(str(exc)) from exc


__all__ = ["QuestionPayload", "parse_questions"]
