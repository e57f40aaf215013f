"""FastAPI endpoints for artisans and products."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.access import Actor
from marketplace.api.auth import get_actor
from marketplace.api.presenters import present_artisan, present_product
from marketplace.api.schemas import (
    ApiResponse,
    CreateProductRequest,
    RegisterArtisanRequest,
    RestockRequest,
    UpdatePriceRequest,
)
from marketplace.catalogue.listing import CreateProduct, DeactivateProduct, RestockProduct, UpdateProductPrice
from marketplace.catalogue.product import Product
from marketplace.catalogue.queries import get_artisan, get_product, list_artisan_products
from marketplace.catalogue.registration import RegisterArtisan

artisan_router = APIRouter(prefix="/api/artisans", tags=["artisans"])
product_router = APIRouter(prefix="/api/products", tags=["products"])


# --- Artisan endpoints ---


@artisan_router.post("", status_code=201, response_model=ApiResponse)
async def register_artisan(body: RegisterArtisanRequest, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    command = RegisterArtisan(
        user_id=actor.user_id,
        actor_role=actor.role,
        business_name=body.business_name,
        description=body.description,
        location=json.dumps(body.location.model_dump()),
        specialties=json.dumps(body.specialties) if body.specialties else None,
        experience_years=body.experience,
    )
    artisan_id = current_domain.process(command, asynchronous=False)
    return ApiResponse(
        message="Artisan profile created successfully",
        data={"artisan": present_artisan(get_artisan(artisan_id))},
    )


@artisan_router.get("/{artisan_id}", response_model=ApiResponse)
async def read_artisan(artisan_id: str) -> ApiResponse:
    return ApiResponse(data={"artisan": present_artisan(get_artisan(artisan_id))})


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ApiResponse)
async def create_product(body: CreateProductRequest, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    command = CreateProduct(
        actor_id=actor.user_id,
        actor_role=actor.role,
        title=body.title,
        description=body.description,
        short_description=body.short_description,
        category=body.category,
        price=body.price.amount,
        discount=body.price.discount,
        currency=body.price.currency,
        quantity=body.inventory.quantity,
        track_inventory=body.inventory.track_inventory,
        low_stock_threshold=body.inventory.low_stock_threshold,
        tags=json.dumps(body.tags) if body.tags else None,
        images=json.dumps([image.model_dump() for image in body.images]) if body.images else None,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ApiResponse(
        message="Product created successfully",
        data={"product": present_product(get_product(product_id))},
    )


@product_router.get("/artisan/{artisan_id}", response_model=ApiResponse)
async def artisan_products(artisan_id: str, page: int = 1, limit: int | None = None) -> ApiResponse:
    result = list_artisan_products(artisan_id, page, limit)
    return ApiResponse(
        data={
            "products": [present_product(product) for product in result.items],
            "pagination": result.to_dict(),
        }
    )


@product_router.get("/{product_id}", response_model=ApiResponse)
async def read_product(product_id: str) -> ApiResponse:
    return ApiResponse(data={"product": present_product(get_product(product_id))})


@product_router.put("/{product_id}/price", response_model=ApiResponse)
async def update_price(
    product_id: str,
    body: UpdatePriceRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = UpdateProductPrice(
        product_id=product_id,
        actor_id=actor.user_id,
        actor_role=actor.role,
        amount=body.amount,
        discount=body.discount,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Price updated", data={"product": present_product(get_product(product_id))})


@product_router.put("/{product_id}/restock", response_model=ApiResponse)
async def restock(
    product_id: str,
    body: RestockRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = RestockProduct(
        product_id=product_id,
        actor_id=actor.user_id,
        actor_role=actor.role,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Product restocked", data={"product": present_product(get_product(product_id))})


@product_router.delete("/{product_id}", response_model=ApiResponse)
async def deactivate(product_id: str, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    command = DeactivateProduct(product_id=product_id, actor_id=actor.user_id, actor_role=actor.role)
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ApiResponse(message="Product deactivated", data={"product": present_product(product)})
