# ABOUTME: Client layer exports for the game authority and search endpoints.
# ABOUTME: Provides the HTTP helper, authority client, search client, and query cache.

from movie_chain.client.authority_client import AuthorityClient
from movie_chain.client.exceptions import NotFound, TransportError
from movie_chain.client.http import JsonHttpClient
from movie_chain.client.query_cache import QueryCache, normalize_query
from movie_chain.client.search_client import SearchClient

__all__ = [
    "AuthorityClient",
    "SearchClient",
    "JsonHttpClient",
    "QueryCache",
    "normalize_query",
    "TransportError",
    "NotFound",
]
