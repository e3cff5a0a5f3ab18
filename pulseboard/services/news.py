"""News retrieval: HTTP client, local filtering and the incremental feed loader."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from pulseboard.errors import NewsFetchError
from pulseboard.schemas.news import NewsArticle, NewsPage, NewsQuery
from pulseboard.settings import (
    DEFAULT_NEWS_API_BASE_URL,
    DEFAULT_NEWS_PAGE_SIZE,
    AppSettings,
)
from pulseboard.store.actions import SetNewsArticles
from pulseboard.store.store import Store

logger = logging.getLogger(__name__)

USER_AGENT = "Pulseboard/0.1 (+https://github.com/pulseboard/pulseboard)"
_REMOVED_MARKER = "[Removed]"


class NewsSource(Protocol):
    async def fetch_page(self, query: NewsQuery) -> NewsPage: ...


def article_id_for_url(url: str) -> str:
    """Stable identifier derived from the article URL."""

    return hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]


def _parse_published_at(raw: Any) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Ignoring unparseable publishedAt %r", raw)
        return None


def parse_article(payload: Any, category: str = "all") -> NewsArticle | None:
    """Convert one provider article into a :class:`NewsArticle`.

    Returns ``None`` for entries without a URL or title, for articles the
    provider has withdrawn (reported with a ``[Removed]`` title) and for
    malformed entries.
    """

    if not isinstance(payload, dict):
        logger.debug("Skipping non-object article entry %r", payload)
        return None
    url = payload.get("url")
    title = payload.get("title")
    if not isinstance(url, str) or not isinstance(title, str):
        return None
    title = title.strip()
    if not url or not title or title == _REMOVED_MARKER:
        return None
    source = payload.get("source")
    if not isinstance(source, dict):
        source = {}
    try:
        return NewsArticle(
            id=article_id_for_url(url),
            title=title,
            description=payload.get("description") or "",
            url=url,
            image_url=payload.get("urlToImage"),
            published_at=_parse_published_at(payload.get("publishedAt")),
            source_name=source.get("name") or "",
            category=category,
        )
    except ValidationError as exc:
        logger.debug("Skipping malformed article %s: %s", url, exc)
        return None


class NewsClient:
    """Async client for a NewsAPI-compatible provider.

    Searches go to ``/everything``; browsing goes to ``/top-headlines`` with the
    category filter applied unless it is ``all``. Every failure surfaces as
    :class:`NewsFetchError`.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = DEFAULT_NEWS_API_BASE_URL,
        page_size: int = DEFAULT_NEWS_PAGE_SIZE,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._page_size = page_size
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, active_settings: AppSettings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> NewsClient:
        return cls(
            active_settings.news_api_key,
            base_url=active_settings.news_api_base_url,
            page_size=active_settings.news_page_size,
            timeout=active_settings.news_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> NewsClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _request_for(self, query: NewsQuery) -> tuple[str, dict[str, Any]]:
        params: dict[str, Any] = {"page": query.page, "pageSize": self._page_size}
        if query.search_term:
            params["q"] = query.search_term
            params["sortBy"] = "publishedAt"
            return "/everything", params
        params["country"] = "us"
        if query.category != "all":
            params["category"] = query.category
        return "/top-headlines", params

    async def fetch_page(self, query: NewsQuery) -> NewsPage:
        if not self._api_key:
            raise NewsFetchError("NEWS_API_KEY is not configured")

        path, params = self._request_for(query)
        try:
            response = await self._client.get(
                path, params=params, headers={"X-Api-Key": self._api_key}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise NewsFetchError(
                f"News provider returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise NewsFetchError(f"News request failed: {exc}") from exc
        except ValueError as exc:
            raise NewsFetchError("News provider returned invalid JSON") from exc

        if not isinstance(payload, dict):
            raise NewsFetchError("News provider returned an unexpected payload")
        if payload.get("status") == "error":
            raise NewsFetchError(payload.get("message") or "News provider reported an error")

        raw_articles = payload.get("articles") or []
        if not isinstance(raw_articles, list):
            raise NewsFetchError("News provider returned an unexpected payload")
        articles = [
            article
            for raw in raw_articles
            if (article := parse_article(raw, query.category)) is not None
        ]
        try:
            total_results = int(payload.get("totalResults") or 0)
        except (TypeError, ValueError) as exc:
            raise NewsFetchError("News provider returned an invalid totalResults") from exc
        return NewsPage(articles=articles, total_results=total_results)


def filter_articles(
    articles: Iterable[NewsArticle], category: str = "all", search_term: str = ""
) -> list[NewsArticle]:
    """Apply the category and free-text filters locally.

    ``all`` passes every category through; the search is a case-insensitive
    substring match over title and description.
    """

    needle = search_term.strip().lower()
    selected: list[NewsArticle] = []
    for article in articles:
        if category != "all" and article.category != category:
            continue
        if needle and needle not in article.title.lower() and needle not in article.description.lower():
            continue
        selected.append(article)
    return selected


class NewsFeedLoader:
    """Load news pages one at a time and publish the accumulated list.

    ``load_next`` is a no-op while a request is in flight or after the feed is
    exhausted, so pages are requested and appended in strictly increasing
    order. Failures are recorded in :attr:`error` and leave the state alone.
    """

    def __init__(self, source: NewsSource, store: Store, query: NewsQuery | None = None) -> None:
        self._source = source
        self._store = store
        self.query = query or NewsQuery()
        self.page = 1
        self.busy = False
        self.exhausted = False
        self.error: str | None = None
        self.articles: list[NewsArticle] = []

    def reset(self, query: NewsQuery | None = None) -> None:
        """Start over, optionally with a new category or search term."""

        if query is not None:
            self.query = query
        self.page = 1
        self.exhausted = False
        self.error = None
        self.articles = []

    async def load_next(self) -> list[NewsArticle]:
        """Fetch the next page; returns the newly added articles."""

        if self.busy or self.exhausted:
            return []

        self.busy = True
        self.error = None
        query = self.query.model_copy(update={"page": self.page})
        try:
            result = await self._source.fetch_page(query)
        except NewsFetchError as exc:
            logger.warning("Failed to load news page %d: %s", query.page, exc)
            self.error = str(exc)
            return []
        finally:
            self.busy = False

        # A reset while the request was in flight makes this page stale.
        if query.page != self.page or (query.category, query.search_term) != (
            self.query.category,
            self.query.search_term,
        ):
            return []

        known = {article.id for article in self.articles}
        added = [article for article in result.articles if article.id not in known]
        self.articles = [*self.articles, *added]
        self.page += 1
        if not result.articles or len(self.articles) >= result.total_results:
            self.exhausted = True

        self._store.dispatch(SetNewsArticles(articles=self.articles))
        return added


__all__ = [
    "NewsClient",
    "NewsFeedLoader",
    "NewsSource",
    "article_id_for_url",
    "filter_articles",
    "parse_article",
]
