# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .llm import OpenAIChatQuestionGenerator
from .news import NewsApiProvider

__all__ = ["NewsApiProvider", "OpenAIChatQuestionGenerator"]
