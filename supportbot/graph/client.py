"""
Neo4j client for the store graph.

Thin wrapper over the official driver: one session per query, records
returned as JSON-safe dicts.
"""

import logging
from typing import Any

from neo4j import Driver, GraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from supportbot.graph.serialization import record_to_dict

logger = logging.getLogger(__name__)


class GraphQueryError(Exception):
    """Raised when a Cypher query cannot be executed."""

    pass


class GraphClient:
    """Runs Cypher statements against a Neo4j database."""

    def __init__(
        self,
        uri: str,
        user: str,
        password: str,
        database: str = "neo4j",
        driver: Driver | None = None,
    ):
        """
        Initialize the client.

        Args:
            uri: Bolt/neo4j URI of the server.
            user: Username for basic auth.
            password: Password for basic auth.
            database: Database name to open sessions on.
            driver: Pre-built driver (tests inject a mock here).
        """
        self._database = database
        self._driver = driver or GraphDatabase.driver(uri, auth=(user, password))

    @classmethod
    def from_settings(cls) -> "GraphClient":
        """Create a client from NEO4J_* environment settings."""
        from supportbot.config import get_graph_settings

        settings = get_graph_settings()
        return cls(
            uri=settings.neo4j_uri,
            user=settings.neo4j_user,
            password=settings.neo4j_password,
            database=settings.neo4j_database,
        )

    def execute(self, query: str, parameters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """
        Execute a Cypher query.

        Args:
            query: Cypher query string.
            parameters: Query parameters.

        Returns:
            One dict per record, keyed by the query's return aliases.

        Raises:
            GraphQueryError: If the driver or the server rejects the query.
        """
        try:
            with self._driver.session(database=self._database) as session:
                result = session.run(query, parameters or {})
                return [record_to_dict(record) for record in result]
        except (Neo4jError, DriverError) as e:
            logger.error("Cypher query failed: %s", e)
            raise GraphQueryError(str(e)) from e

    def verify_connectivity(self) -> bool:
        """Check the server is reachable."""
        try:
            self._driver.verify_connectivity()
            return True
        except (Neo4jError, DriverError) as e:
            logger.warning("Neo4j connectivity check failed: %s", e)
            return False

    def close(self) -> None:
        """Close the driver connection."""
        logger.info("Closing Neo4j driver connection")
        self._driver.close()

    def __enter__(self) -> "GraphClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
