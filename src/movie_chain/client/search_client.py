# ABOUTME: Free-text performer and film search against the authority's search endpoints.
# ABOUTME: Guards short queries, de-duplicates results by id, and caches fresh results per query.

from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from movie_chain.client.exceptions import TransportError
from movie_chain.client.http import JsonHttpClient
from movie_chain.client.query_cache import QueryCache
from movie_chain.models.entities import Film, Performer

SEARCH_PEOPLE_PATH = "/search/people"
SEARCH_MOVIES_PATH = "/search/movies"

ModelT = TypeVar("ModelT", bound=BaseModel)


class SearchClient:
    """Stateless search contract with a query cache in front of it"""

    def __init__(
        self,
        http: JsonHttpClient,
        min_query_length: int = 2,
        cache: QueryCache | None = None,
    ):
        """
        Initialize search client.

        Args:
            http: JSON HTTP helper pointed at the authority's base URL
            min_query_length: Queries shorter than this return [] without a request
            cache: Result cache (default: 30 second staleness window)
        """
        self.http = http
        self.min_query_length = min_query_length
        self.cache = cache if cache is not None else QueryCache(ttl_seconds=30.0)

    async def search_performers(self, query: str) -> list[Performer]:
        """Ranked performers matching query; [] for queries below the minimum length"""
        return await self._search("people", SEARCH_PEOPLE_PATH, query, Performer)

    async def search_films(self, query: str) -> list[Film]:
        """Ranked films matching query; [] for queries below the minimum length"""
        return await self._search("movies", SEARCH_MOVIES_PATH, query, Film)

    def is_searchable(self, query: str) -> bool:
        return len(query.strip()) >= self.min_query_length

    async def _search(
        self,
        kind: str,
        path: str,
        query: str,
        model: type[BaseModel],
    ) -> list:
        if not self.is_searchable(query):
            return []

        cached = self.cache.get(kind, query)
        if cached is not None:
            logger.debug(f"Search cache hit: {kind} '{query}'")
            return cached

        data = await self.http.get_json(
            path,
            operation=f"search_{kind}",
            params={"q": query.strip()},
        )
        if not isinstance(data, list):
            raise TransportError(
                f"search_{kind} returned an unexpected body: expected a list, got {type(data).__name__}"
            )

        unique = dedupe_by_id(parse_items(data, model, kind))
        self.cache.put(kind, query, unique)
        return unique


def dedupe_by_id(items: list[ModelT]) -> list[ModelT]:
    """Keep the first occurrence of each id, preserving rank order"""
    seen: set[int] = set()
    unique = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def parse_items(data: list[Any], model: type[ModelT], kind: str) -> list[ModelT]:
    """Validate each result on its own; malformed entries are logged and skipped"""
    items = []
    for position, raw in enumerate(data):
        try:
            items.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {kind} result #{position}: {e.error_count()} error(s)")
    return items
