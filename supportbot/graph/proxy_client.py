"""Client for the query proxy service that runs Cypher on the backend's behalf."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RUN_CYPHER_TOOL = "run-neo4j-cypher"


class QueryProxyError(Exception):
    """Raised when the proxy cannot return rows, whatever the cause."""

    pass


class QueryProxyClient:
    """
    Forwards query plans to the proxy over HTTP.

    Every call is a single attempt with the configured transport timeout.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Proxy base URL, e.g. ``http://localhost:5000``.
            timeout: Transport timeout in seconds; None waits indefinitely.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self._url = f"{base_url.rstrip('/')}/{RUN_CYPHER_TOOL}"
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "QueryProxyClient":
        from supportbot.config import get_settings

        settings = get_settings()
        return cls(base_url=settings.mcp_url, timeout=settings.mcp_timeout_seconds)

    async def run(self, query: str, parameters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """
        Execute a query through the proxy.

        Args:
            query: Cypher query string.
            parameters: Named query parameters.

        Returns:
            The rows found under the response's ``result`` field.

        Raises:
            QueryProxyError: On transport errors, error statuses, or a
                response whose ``result`` is missing or not a list.
        """
        payload = {
            "tool": RUN_CYPHER_TOOL,
            "cypher": query,
            "params": parameters or {},
        }
        logger.info("Sending query to proxy at %s", self._url)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Proxy returned HTTP %s: %s",
                e.response.status_code,
                e.response.text[:500],
            )
            raise QueryProxyError(f"Failed to communicate with query proxy: {e}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Proxy request failed: %s", e)
            raise QueryProxyError(f"Failed to communicate with query proxy: {e}") from e

        if not isinstance(data, dict) or "result" not in data:
            raise QueryProxyError("Query proxy response missing 'result' field.")

        rows = data["result"]
        if not isinstance(rows, list):
            raise QueryProxyError(
                f"Query proxy 'result' must be a list, got {type(rows).__name__}."
            )

        logger.info("Proxy returned %d rows", len(rows))
        return rows
