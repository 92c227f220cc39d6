"""Conversion of Neo4j record values to JSON-safe Python values."""

from datetime import date, datetime, time, timedelta
from typing import Any

from neo4j.graph import Node, Path, Relationship


def to_jsonable(value: Any) -> Any:
    """
    Recursively convert a record value into plain JSON types.

    Temporal values become ISO-8601 strings, nodes and relationships their
    property maps, and paths the list of their nodes.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (Node, Relationship)):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, Path):
        return [to_jsonable(node) for node in value.nodes]
    # neo4j.time types
    if hasattr(value, "iso_format"):
        return value.iso_format()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    return str(value)


def record_to_dict(record: Any) -> dict[str, Any]:
    """Convert a neo4j Record to a JSON-safe dict keyed by its return aliases."""
    return {key: to_jsonable(record[key]) for key in record.keys()}
