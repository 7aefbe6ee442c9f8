# ABOUTME: Shared HTTP plumbing for authority requests built on a requests Session.
# ABOUTME: Maps transport failures to TransportError and runs blocking calls off the event loop.

import asyncio
import time
from typing import Any

import requests
from loguru import logger

from movie_chain.client.exceptions import TransportError
from movie_chain.utils.logging import log_remote_call

JSON_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


class JsonHttpClient:
    """
    Thin JSON-over-HTTP helper shared by the authority and search clients.

    The session is a plain requests.Session with no retry adapter: a failed
    request is reported once and retried only when the player asks again.
    Blocking calls are pushed to a worker thread so each request is an
    awaitable suspend point for the event loop.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get_json(
        self,
        path: str,
        *,
        operation: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """GET path and decode the JSON body"""
        return await asyncio.to_thread(
            self._request, "GET", path, operation, params=params
        )

    async def post_json(self, path: str, payload: dict[str, Any], *, operation: str) -> Any:
        """POST a JSON payload and decode the JSON body"""
        return await asyncio.to_thread(
            self._request, "POST", path, operation, json=payload
        )

    def _request(self, method: str, path: str, operation: str, **kwargs: Any) -> Any:
        url = self.url_for(path)
        started = time.perf_counter()
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method, url, headers=JSON_HEADERS, timeout=self.timeout, **kwargs
            )
        except requests.Timeout as e:
            log_remote_call(operation, "timeout", _elapsed_ms(started))
            raise TransportError(f"Request to {url} timed out: {e}") from e
        except requests.RequestException as e:
            log_remote_call(operation, "transport error", _elapsed_ms(started))
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            log_remote_call(
                operation,
                f"HTTP {response.status_code}",
                _elapsed_ms(started),
                url=url,
            )
            raise TransportError(
                f"{operation} failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            log_remote_call(operation, "invalid JSON", _elapsed_ms(started))
            raise TransportError(f"{operation} returned invalid JSON: {e}") from e

        log_remote_call(operation, "ok", _elapsed_ms(started))
        return data


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
