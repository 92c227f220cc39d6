"""Read-only product catalog backed by the store graph."""

import logging
from typing import Any

from supportbot.graph import GraphClient

logger = logging.getLogger(__name__)

_PRODUCT_FIELDS = """
    p.id AS id, p.name AS name, p.description AS description,
    p.price AS price, p.stock AS stock, p.imageUrl AS imageUrl,
    c.name AS category
"""

LIST_PRODUCTS = f"""
MATCH (p:Product)
OPTIONAL MATCH (p)-[:HAS_CATEGORY]->(c:Category)
RETURN {_PRODUCT_FIELDS}
ORDER BY p.name ASC
"""

GET_PRODUCT = f"""
MATCH (p:Product {{id: $productId}})
OPTIONAL MATCH (p)-[:HAS_CATEGORY]->(c:Category)
RETURN {_PRODUCT_FIELDS}
"""

GET_REVIEWS = """
MATCH (p:Product {id: $productId})<-[:REVIEWS]-(r:Review)<-[:WROTE]-(u:User)
RETURN r.id AS reviewId, r.rating AS rating, r.comment AS comment,
       r.reviewDate AS reviewDate, u.name AS userName, u.id AS userId
ORDER BY r.reviewDate DESC
"""


class CatalogService:
    """Product lookups for the storefront pages."""

    def __init__(self, graph: GraphClient):
        self._graph = graph

    def list_products(self) -> list[dict[str, Any]]:
        products = self._graph.execute(LIST_PRODUCTS)
        logger.info("Fetched %d products", len(products))
        return products

    def get_product(self, product_id: str) -> dict[str, Any] | None:
        """Return one product, or None if no product has this id."""
        rows = self._graph.execute(GET_PRODUCT, {"productId": product_id})
        if not rows:
            logger.info("Product %s not found", product_id)
            return None
        return rows[0]

    def get_reviews(self, product_id: str) -> list[dict[str, Any]]:
        """Reviews for a product, newest first."""
        reviews = self._graph.execute(GET_REVIEWS, {"productId": product_id})
        logger.info("Fetched %d reviews for product %s", len(reviews), product_id)
        return reviews

    def close(self) -> None:
        self._graph.close()


_catalog_service: CatalogService | None = None


def get_catalog_service() -> CatalogService:
    """Get the catalog service instance."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService(GraphClient.from_settings())
    return _catalog_service


def close_catalog_service() -> None:
    """Release the graph driver, if one was opened."""
    global _catalog_service
    if _catalog_service is not None:
        _catalog_service.close()
        _catalog_service = None
