# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Scrub credentials from log messages before any sink sees them."""

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # provider keys
    (re.compile(r"(api[_-]?key\s*[:=]\s*['\"]?)([\w\-]{16,})", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"\bsk-[\w\-]{16,}"), f"sk-{_REDACTED}"),
    (re.compile(r"(jwt[_-]?secret\s*[:=]\s*['\"]?)([^'\"\s]{8,})", re.I), rf"\1{_REDACTED}"),
    # session tokens and phase tickets are both JWTs
    (re.compile(r"\beyJ[\w\-]+\.[\w\-]+\.[\w\-]+"), "***JWT***"),
    (re.compile(r"(bearer\s+)([\w\-.]{20,})", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"((?:token|ticket)\s*[:=]\s*['\"]?)([\w\-.]{20,})", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(authorization\s*:\s*['\"]?)([^'\"]{10,})", re.I), rf"\1{_REDACTED}"),
    # player secrets
    (re.compile(r"((?:password|secret)\s*[:=]\s*['\"]?)([^'\"\s,}]{3,})", re.I), rf"\1{_REDACTED}"),
    # credentials inside database URLs
    (
        re.compile(r"\b((?:postgresql|postgres|mysql|mariadb)(?:\+\w+)?://[^:/@\s]+):([^@\s]+)@"),
        rf"\1:{_REDACTED}@",
    ),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru ``filter`` hook: rewrites the message in place, never drops it."""

    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True
