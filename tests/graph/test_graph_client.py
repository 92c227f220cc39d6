"""Tests for the Neo4j GraphClient with a mocked driver."""

from unittest.mock import MagicMock

import pytest
from neo4j.exceptions import CypherSyntaxError, ServiceUnavailable

from supportbot.graph import GraphClient, GraphQueryError


@pytest.fixture
def session() -> MagicMock:
    return MagicMock()


@pytest.fixture
def driver(session: MagicMock) -> MagicMock:
    driver = MagicMock()
    driver.session.return_value.__enter__.return_value = session
    return driver


@pytest.fixture
def client(driver: MagicMock) -> GraphClient:
    return GraphClient("bolt://unused", "neo4j", "pw", database="store", driver=driver)


class TestGraphClient:
    """Tests for GraphClient."""

    def test_execute_returns_dicts(self, client, driver, session) -> None:
        session.run.return_value = [{"name": "Kettle", "price": 39.5}]

        rows = client.execute("MATCH (p:Product) RETURN p.name AS name", {"x": 1})

        assert rows == [{"name": "Kettle", "price": 39.5}]
        driver.session.assert_called_once_with(database="store")
        session.run.assert_called_once_with("MATCH (p:Product) RETURN p.name AS name", {"x": 1})

    def test_execute_defaults_parameters(self, client, session) -> None:
        session.run.return_value = []

        client.execute("RETURN 1")

        session.run.assert_called_once_with("RETURN 1", {})

    def test_cypher_error_wrapped(self, client, session) -> None:
        session.run.side_effect = CypherSyntaxError("Invalid input 'MATC'")

        with pytest.raises(GraphQueryError):
            client.execute("MATC (n) RETURN n")

    def test_driver_error_wrapped(self, client, session) -> None:
        session.run.side_effect = ServiceUnavailable("connection refused")

        with pytest.raises(GraphQueryError):
            client.execute("RETURN 1")

    def test_verify_connectivity(self, client, driver) -> None:
        assert client.verify_connectivity() is True

        driver.verify_connectivity.side_effect = ServiceUnavailable("down")
        assert client.verify_connectivity() is False

    def test_context_manager_closes_driver(self, client, driver) -> None:
        with client:
            pass
        driver.close.assert_called_once()
