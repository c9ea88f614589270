# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def describe_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Field-level summary safe to echo back; input values are never included."""

    problems = []
    for error in exc.errors(include_url=False, include_input=False):
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        problems.append({"field": field, "type": error["type"], "message": error["msg"]})
    return {
        "fields": sorted({problem["field"] for problem in problems}),
        "errors": problems,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=describe_pydantic_errors(exc)) from exc


__all__ = ["describe_pydantic_errors", "raise_validation_error"]
