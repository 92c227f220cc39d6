"""
Query proxy entry point.

Exposes one tool, ``run-neo4j-cypher``, so the chat backend never holds
database credentials. Run with::

    uvicorn query_proxy.main:app --port 5000
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from query_proxy.schemas import RunCypherRequest, RunCypherResponse
from supportbot.graph import GraphClient, GraphQueryError
from supportbot.graph.proxy_client import RUN_CYPHER_TOOL

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the Neo4j driver on startup and close it on shutdown."""
    # Startup
    if getattr(app.state, "graph", None) is None:
        app.state.graph = GraphClient.from_settings()
    logger.info("Query proxy ready")
    yield
    # Shutdown
    app.state.graph.close()
    app.state.graph = None


app = FastAPI(
    title="Store Graph Query Proxy",
    version="0.1.0",
    description="Runs Cypher queries on behalf of the support backend",
    lifespan=lifespan,
)


def get_graph(request: Request) -> GraphClient:
    return request.app.state.graph


GraphDep = Annotated[GraphClient, Depends(get_graph)]


@app.get("/healthz")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.post(f"/{RUN_CYPHER_TOOL}", response_model=RunCypherResponse)
async def run_cypher(payload: RunCypherRequest, graph: GraphDep):
    """
    Run a Cypher query with named parameters.

    Returns ``{"result": rows}``; 400 for an unknown tool or an empty query,
    500 with ``error`` and ``details`` when the database rejects it.
    """
    if payload.tool != RUN_CYPHER_TOOL or not (payload.cypher and payload.cypher.strip()):
        logger.warning("Rejected proxy request: tool=%r", payload.tool)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid tool or missing cypher query."},
        )

    logger.info("Executing Cypher: %s", payload.cypher[:200])
    try:
        rows = await run_in_threadpool(graph.execute, payload.cypher, payload.params or {})
    except GraphQueryError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to execute Cypher query.", "details": str(e)},
        )

    logger.info("Query returned %d rows", len(rows))
    return RunCypherResponse(result=rows)
