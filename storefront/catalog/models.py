"""
Catalog Pydantic Models

Products and categories as delivered by the two catalog endpoints.
Both are immutable once fetched.
"""
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from storefront.money import to_decimal

ProductId = Union[int, str]


class Product(BaseModel):
    """Catalog product. Extra fields from the endpoint are ignored."""

    model_config = ConfigDict(frozen=True)

    id: ProductId
    title: str = ""
    category: str = ""
    price: Decimal = Field(ge=0)
    rate: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_rating(cls, data):
        # Some sources nest the rating as {"rating": {"rate": 3.9, "count": 120}}
        if isinstance(data, dict) and "rate" not in data:
            rating = data.get("rating")
            if isinstance(rating, dict):
                data = {**data, "rate": rating.get("rate")}
        return data

    @field_validator("price", mode="before")
    @classmethod
    def _price_from_float(cls, value):
        if isinstance(value, float):
            return to_decimal(value)
        return value

    def to_snapshot(self) -> dict:
        """Plain dict in the persisted cart schema."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "price": float(self.price),
            "rate": self.rate,
        }


class Category(BaseModel):
    """Catalog category shown in the side filter list."""

    model_config = ConfigDict(frozen=True)

    id: ProductId
    name: str
