"""Pydantic request/response schemas for the marketplace API.

Request bodies accept camelCase keys (``shippingAddress``, ``productId``)
as well as their snake_case field names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel):
    """Envelope wrapping every response body."""

    success: bool = True
    message: str | None = None
    data: Any = None


# --- Orders ---


class AddressIn(CamelModel):
    name: str = Field(..., max_length=100)
    phone: str = Field(..., max_length=20)
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    zip_code: str = Field(..., max_length=20)
    country: str = Field("India", max_length=100)
    landmark: str | None = Field(None, max_length=255)


class BillingAddressIn(CamelModel):
    name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=20)
    street: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)


class CustomizationIn(CamelModel):
    options: list[dict[str, Any]] = Field(default_factory=list)
    instructions: str | None = None


class OrderItemIn(CamelModel):
    product: str
    quantity: int = Field(1, ge=1)
    customization: CustomizationIn | None = None


class PaymentIn(CamelModel):
    method: str = Field(..., pattern="^(card|upi|netbanking|wallet|cod)$")


class PlaceOrderRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "items": [{"product": "5f0c...", "quantity": 2}],
                    "shippingAddress": {
                        "name": "Asha Rao",
                        "phone": "9876543210",
                        "street": "12 Temple Road",
                        "city": "Jaipur",
                        "state": "Rajasthan",
                        "zipCode": "302001",
                    },
                    "payment": {"method": "upi"},
                }
            ]
        },
    )

    items: list[OrderItemIn] = Field(..., min_length=1)
    shipping_address: AddressIn
    billing_address: BillingAddressIn | None = None
    payment: PaymentIn


class UpdateStatusRequest(CamelModel):
    status: str
    note: str | None = Field(None, max_length=500)


class CancelOrderRequest(CamelModel):
    reason: str | None = Field(None, max_length=500)


class RecordPaymentRequest(CamelModel):
    transaction_id: str | None = Field(None, max_length=255)


class ReturnRequest(CamelModel):
    reason: str = Field(..., min_length=1, max_length=500)


# --- Reviews ---


class RatingIn(CamelModel):
    overall: int = Field(..., ge=1, le=5)
    quality: int | None = Field(None, ge=1, le=5)
    craftsmanship: int | None = Field(None, ge=1, le=5)
    packaging: int | None = Field(None, ge=1, le=5)
    shipping: int | None = Field(None, ge=1, le=5)

    def aspects(self) -> dict | None:
        values = {
            "quality": self.quality,
            "craftsmanship": self.craftsmanship,
            "packaging": self.packaging,
            "shipping": self.shipping,
        }
        values = {key: value for key, value in values.items() if value is not None}
        return values or None


class CreateReviewRequest(CamelModel):
    product_id: str
    order_id: str
    rating: RatingIn
    title: str | None = Field(None, max_length=100)
    comment: str = Field(..., min_length=1, max_length=1000)
    pros: list[str] | None = None
    cons: list[str] | None = None
    would_recommend: bool = True


class EditReviewRequest(CamelModel):
    rating: RatingIn | None = None
    title: str | None = Field(None, max_length=100)
    comment: str | None = Field(None, min_length=1, max_length=1000)
    pros: list[str] | None = None
    cons: list[str] | None = None
    would_recommend: bool | None = None


class HelpfulVoteRequest(CamelModel):
    helpful: bool = True


class RespondRequest(CamelModel):
    comment: str = Field(..., min_length=1, max_length=1000)


class ModerateRequest(CamelModel):
    status: str
    notes: str | None = None


# --- Catalogue ---


class LocationIn(CamelModel):
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    country: str = Field("India", max_length=100)


class RegisterArtisanRequest(CamelModel):
    business_name: str = Field(..., min_length=2, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    specialties: list[str] | None = None
    experience: int = Field(0, ge=0)
    location: LocationIn


class PriceIn(CamelModel):
    amount: float = Field(..., ge=0)
    discount: float | None = Field(None, ge=0, le=100)
    currency: str = Field("INR", max_length=3)


class InventoryIn(CamelModel):
    quantity: int = Field(..., ge=0)
    track_inventory: bool = True
    low_stock_threshold: int = Field(5, ge=0)


class ImageIn(CamelModel):
    url: str = Field(..., max_length=500)
    alt: str | None = Field(None, max_length=255)
    is_primary: bool = False


class CreateProductRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    short_description: str | None = Field(None, max_length=200)
    category: str
    price: PriceIn
    inventory: InventoryIn
    images: list[ImageIn] | None = None
    tags: list[str] | None = None


class UpdatePriceRequest(CamelModel):
    amount: float = Field(..., ge=0)
    discount: float | None = Field(None, ge=0, le=100)


class RestockRequest(CamelModel):
    quantity: int = Field(..., ge=0)


# --- Cart ---


class AddToCartRequest(CamelModel):
    product_id: str
    quantity: int = Field(1, ge=1)
    customization: CustomizationIn | None = None


class UpdateCartItemRequest(CamelModel):
    quantity: int = Field(..., ge=1)
