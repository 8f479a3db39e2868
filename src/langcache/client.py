"""Retrying JSON-over-HTTP client shared by both pipelines.

Requests go through a :class:`requests.Session` in a worker thread so the
event loop keeps servicing other units while a response is pending.
Network errors and non-success statuses are retried with exponential
backoff via tenacity; a body that is not JSON fails immediately.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

import requests
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from langcache.config import FetchConfig
from langcache.exceptions import SchemaError, TransientError

logger = logging.getLogger(__name__)


class JsonApiClient:
    """GET JSON documents with bounded retries.

    Usage::

        client = JsonApiClient(FetchConfig())
        data = await client.get_json(
            "https://en.wikipedia.org/w/api.php",
            {"action": "query", "titles": "Gravity"},
        )
        client.close()
    """

    def __init__(
        self,
        config: FetchConfig,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", config.user_agent)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> JsonApiClient:
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def _get(self, url: str, params: Mapping[str, str] | None) -> requests.Response:
        """Blocking single attempt. Raises TransientError on any transport problem."""
        try:
            response = self._session.get(
                url, params=params, timeout=self._config.timeout_seconds
            )
        except requests.RequestException as e:
            raise TransientError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            raise TransientError(
                f"Server returned {response.status_code} for {response.url}",
                status_code=response.status_code,
            )
        return response

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Attempt %d/%d failed, retrying in %.1fs: %s",
            retry_state.attempt_number,
            self._config.max_attempts,
            retry_state.next_action.sleep if retry_state.next_action else 0.0,
            exc,
        )

    async def get_json(self, url: str, params: Mapping[str, str] | None = None) -> Any:
        """Fetch *url* and decode its JSON body.

        Args:
            url: Endpoint URL without query string.
            params: Query parameters.

        Returns:
            The decoded JSON value.

        Raises:
            TransientError: After ``max_attempts`` failed attempts.
            SchemaError: If the body is not valid JSON.
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._config.max_attempts),
            wait=wait_exponential(
                min=self._config.backoff_min, max=self._config.backoff_max
            ),
            retry=retry_if_exception_type(TransientError),
            before_sleep=self._log_retry,
            reraise=True,
        ):
            with attempt:
                response = await asyncio.to_thread(self._get, url, params)

        logger.debug("GET %s -> %d", response.url, response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise SchemaError(response.url, [("", f"body is not JSON: {e}")]) from e
