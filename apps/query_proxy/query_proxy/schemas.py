"""Request and response schemas for the query proxy."""

from typing import Any

from pydantic import BaseModel


class RunCypherRequest(BaseModel):
    """A single Cypher call."""

    tool: str | None = None
    cypher: str | None = None
    params: dict[str, Any] | None = None


class RunCypherResponse(BaseModel):
    result: list[dict[str, Any]]
