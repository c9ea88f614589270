# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import httpx

from newsquiz.domain.phases.exceptions import GenerationFailedError, MalformedQuizError
from newsquiz.domain.phases.ports import QuestionGenerator
from newsquiz.shared.config.settings import LlmConfig
from newsquiz.shared.logging import logger


class OpenAIChatQuestionGenerator(QuestionGenerator):
    """Client for an OpenAI-compatible ``chat/completions`` endpoint."""

    def __init__(
        self, config: LlmConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._config = config
        self._transport = transport

    async def complete(self, prompt: str) -> str:
        body = {
            "model": self._config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._config.max_tokens,
        }
        headers = {"Authorization": f"Bearer {self._config.api_key}"}
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout, transport=self._transport
            ) as http:
                response = await http.post(url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning(f"phase.generate: transport error {type(exc).__name__}")
            raise GenerationFailedError() from exc

        if response.status_code != 200:
            logger.warning(f"phase.generate: provider status={response.status_code}")
            raise GenerationFailedError()

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise MalformedQuizError("completion has no message content") from exc
        if not isinstance(content, str):
            raise MalformedQuizError("completion content is not text")
        return content
