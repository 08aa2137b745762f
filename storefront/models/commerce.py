"""Commerce backend models (Shopify Storefront API shapes)"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CommerceModel(BaseModel):
    """Base for models read from camelCase GraphQL payloads"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _flatten_edges(value: Any) -> Any:
    """Turn a GraphQL connection ``{"edges": [{"node": ...}]}`` into a list"""
    if isinstance(value, dict) and "edges" in value:
        edges = value["edges"]
        if not isinstance(edges, list):
            raise ValueError("Connection edges must be a list")
        if not all(isinstance(edge, dict) and "node" in edge for edge in edges):
            raise ValueError("Every connection edge must have a node")
        return [edge["node"] for edge in edges]
    return value


class Money(CommerceModel):
    amount: Decimal
    currency_code: str = "AUD"


class Image(CommerceModel):
    url: str
    alt_text: Optional[str] = None


class ProductSummary(CommerceModel):
    handle: str
    title: str
    tags: list[str] = []


class Merchandise(CommerceModel):
    """Product variant attached to a cart line"""
    id: str
    title: str
    quantity_available: Optional[int] = None
    currently_not_in_stock: bool = False
    image: Optional[Image] = None
    product: ProductSummary


class CartLineCost(CommerceModel):
    amount_per_quantity: Money
    total_amount: Optional[Money] = None


class ResolvedCartLine(CommerceModel):
    id: str
    quantity: int
    merchandise: Merchandise
    cost: CartLineCost


class CartCost(CommerceModel):
    subtotal_amount: Money
    total_amount: Optional[Money] = None


class ResolvedCart(CommerceModel):
    """Cart priced and stocked by the commerce backend"""
    id: str
    checkout_url: str
    total_quantity: int = 0
    cost: CartCost
    lines: list[ResolvedCartLine] = []

    @field_validator("lines", mode="before")
    @classmethod
    def flatten_lines(cls, value: Any) -> Any:
        return _flatten_edges(value)


class Shop(CommerceModel):
    """Shop details shown in the page layout"""
    name: str
    description: Optional[str] = None
