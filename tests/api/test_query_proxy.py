"""Tests for the query proxy service."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from query_proxy.main import app
from supportbot.graph import GraphClient, GraphQueryError


@pytest.fixture
def graph() -> MagicMock:
    return MagicMock(spec=GraphClient)


@pytest.fixture
def client(graph: MagicMock):
    app.state.graph = graph
    try:
        yield TestClient(app)
    finally:
        app.state.graph = None


class TestRunCypher:
    """Tests for POST /run-neo4j-cypher."""

    def test_returns_rows(self, client, graph) -> None:
        graph.execute.return_value = [{"name": "Kettle", "price": 39.5}]

        response = client.post("/run-neo4j-cypher", json={
            "tool": "run-neo4j-cypher",
            "cypher": "MATCH (p:Product {name: $name}) RETURN p.name AS name, p.price AS price",
            "params": {"name": "Kettle"},
        })

        assert response.status_code == 200
        assert response.json() == {"result": [{"name": "Kettle", "price": 39.5}]}
        graph.execute.assert_called_once_with(
            "MATCH (p:Product {name: $name}) RETURN p.name AS name, p.price AS price",
            {"name": "Kettle"},
        )

    def test_params_optional(self, client, graph) -> None:
        graph.execute.return_value = []

        response = client.post("/run-neo4j-cypher", json={"tool": "run-neo4j-cypher", "cypher": "RETURN 1"})

        assert response.json() == {"result": []}
        graph.execute.assert_called_once_with("RETURN 1", {})

    @pytest.mark.parametrize(
        "payload",
        [
            {"tool": "other-tool", "cypher": "RETURN 1"},
            {"tool": "run-neo4j-cypher"},
            {"tool": "run-neo4j-cypher", "cypher": "   "},
            {"cypher": "RETURN 1"},
        ],
    )
    def test_bad_request(self, client, graph, payload) -> None:
        response = client.post("/run-neo4j-cypher", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()
        graph.execute.assert_not_called()

    def test_query_failure(self, client, graph) -> None:
        graph.execute.side_effect = GraphQueryError("Invalid input 'MATC'")

        response = client.post("/run-neo4j-cypher", json={"tool": "run-neo4j-cypher", "cypher": "MATC (n)"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to execute Cypher query."
        assert "MATC" in body["details"]


def test_healthz(client) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}
