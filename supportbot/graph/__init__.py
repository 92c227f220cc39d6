"""Store graph access: direct Neo4j client and the query proxy client."""

from supportbot.graph.client import GraphClient, GraphQueryError
from supportbot.graph.proxy_client import QueryProxyClient, QueryProxyError

__all__ = [
    "GraphClient",
    "GraphQueryError",
    "QueryProxyClient",
    "QueryProxyError",
]
