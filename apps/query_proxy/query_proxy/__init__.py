"""HTTP proxy that runs Cypher queries against the store graph."""
