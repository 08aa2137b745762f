"""Form submission schemas"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, TypeAdapter, ValidationError, field_validator
from pydantic_core import PydanticCustomError

_http_url = TypeAdapter(HttpUrl)


class CartIntent(str, Enum):
    """Operation requested by a cart form"""
    CHECKOUT = "checkout"
    INCREMENT = "increment"
    DECREMENT = "decrement"
    REMOVE = "remove"


class FormModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


def _require_variant(value: str, message: str = "Variant ID is required") -> str:
    if not value:
        raise PydanticCustomError("variant_required", message)
    return value


class CheckoutForm(FormModel):
    checkout_url: str = Field("", alias="checkoutUrl", validate_default=True)

    @field_validator("checkout_url")
    @classmethod
    def valid_url(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("checkout_url_required", "Checkout URL is required")
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise PydanticCustomError("checkout_url_invalid", "Checkout URL must be a valid URL")
        return value


class QuantityForm(FormModel):
    """Absolute quantity for a line, computed by the client"""
    variant_id: str = Field("", alias="variantId", validate_default=True)
    quantity: int

    @field_validator("variant_id")
    @classmethod
    def variant_required(cls, value: str) -> str:
        return _require_variant(value)

    @field_validator("quantity")
    @classmethod
    def not_negative(cls, value: int) -> int:
        if value < 0:
            raise PydanticCustomError("quantity_negative", "Quantity must be positive")
        return value


class RemoveForm(FormModel):
    variant_id: str = Field("", alias="variantId", validate_default=True)

    @field_validator("variant_id")
    @classmethod
    def variant_required(cls, value: str) -> str:
        return _require_variant(value)


class AddToCartForm(FormModel):
    variant_id: str = Field("", alias="variantId", validate_default=True)
    quantity: int = Field(1, ge=1)

    @field_validator("variant_id")
    @classmethod
    def option_selected(cls, value: str) -> str:
        return _require_variant(value, "Please select an option")


class ContactForm(FormModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone_number: str = ""
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)
    agree_to_privacy_policy: bool = Field(False, validate_default=True)
    token: str = ""

    @field_validator("agree_to_privacy_policy")
    @classmethod
    def must_agree(cls, value: bool) -> bool:
        if not value:
            raise PydanticCustomError("privacy_policy", "You must agree to the Privacy Policy")
        return value


class NewsletterForm(FormModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    gender: str = Field(min_length=1)
    token: str = ""
