"""Cart models for the session-held cart and its validation results"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .commerce import ResolvedCart


class CartLineItem(BaseModel):
    """One variant and the quantity the shopper wants"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    variant_id: str = Field(alias="variantId", min_length=1)
    quantity: int = Field(gt=0)


class Cart(BaseModel):
    """Shopper's cart as stored in the session cookie"""
    model_config = ConfigDict(frozen=True)

    lines: tuple[CartLineItem, ...] = ()

    @model_validator(mode="after")
    def unique_variants(self) -> "Cart":
        seen = set()
        for line in self.lines:
            if line.variant_id in seen:
                raise ValueError(f"Duplicate line for variant {line.variant_id}")
            seen.add(line.variant_id)
        return self

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)

    def get(self, variant_id: str) -> Optional[CartLineItem]:
        """Line for a variant, if present"""
        return next((line for line in self.lines if line.variant_id == variant_id), None)

    def __len__(self) -> int:
        return len(self.lines)


class CartSuccess(BaseModel):
    """The commerce backend resolved every line"""
    type: Literal["success"] = "success"
    cart: ResolvedCart


class CartEmpty(BaseModel):
    """Nothing to validate"""
    type: Literal["empty"] = "empty"


class CartError(BaseModel):
    """The commerce backend rejected the cart or could not be reached"""
    type: Literal["error"] = "error"
    message: Optional[str] = None


ValidatedCartResult = Annotated[
    Union[CartSuccess, CartEmpty, CartError],
    Field(discriminator="type"),
]
