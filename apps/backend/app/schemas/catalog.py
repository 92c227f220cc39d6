"""Product catalog schemas."""

from pydantic import BaseModel, ConfigDict


class ProductSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    description: str | None = None
    price: float | None = None
    stock: int | None = None
    imageUrl: str | None = None
    category: str | None = None


class ReviewSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    reviewId: str | None = None
    rating: int | None = None
    comment: str | None = None
    reviewDate: str | None = None
    userName: str | None = None
    userId: str | None = None
