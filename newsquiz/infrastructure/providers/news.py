# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import httpx

from newsquiz.domain.phases.entities import NewsItem
from newsquiz.domain.phases.exceptions import NewsUnavailableError
from newsquiz.domain.phases.ports import NewsProvider
from newsquiz.shared.config.settings import NewsConfig
from newsquiz.shared.logging import logger


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


class NewsApiProvider(NewsProvider):
    """NewsAPI ``top-headlines`` client returning the first usable article."""

    def __init__(
        self, config: NewsConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._config = config
        self._transport = transport

    async def fetch_top(self) -> NewsItem:
        params = {
            "category": self._config.category,
            "q": self._config.query,
            "apiKey": self._config.api_key,
        }
        url = f"{self._config.base_url.rstrip('/')}/top-headlines"
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout, transport=self._transport
            ) as http:
                response = await http.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning(f"phase.news: transport error {type(exc).__name__}")
            raise NewsUnavailableError() from exc

        if response.status_code != 200:
            logger.warning(f"phase.news: provider status={response.status_code}")
            raise NewsUnavailableError()
        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("phase.news: provider body is not JSON")
            raise NewsUnavailableError() from exc

        articles = payload.get("articles") if isinstance(payload, dict) else None
        if not isinstance(articles, list) or not articles:
            logger.warning("phase.news: no articles for topic")
            raise NewsUnavailableError()

        article = articles[0] if isinstance(articles[0], dict) else {}
        title = _text(article.get("title"))
        if not title:
            logger.warning("phase.news: first article has no title")
            raise NewsUnavailableError()

        return NewsItem(
            title=title,
            description=_text(article.get("description")) or _text(article.get("content")),
            url=_text(article.get("url")) or None,
            published_at=_text(article.get("publishedAt")) or None,
        )
