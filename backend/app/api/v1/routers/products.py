# app/api/v1/routers/products.py
from fastapi import APIRouter, Depends

from app.api.v1.deps import Capability, CallerIdentity, get_caller
from app.api.v1.route_table import Route, register_routes
from app.schemas.product import ProductIdOut, ProductIn, ProductOut, ProductUpdateIn
from app.services import product_service

router = APIRouter(prefix="/products", tags=["products"])


async def add_product(body: ProductIn, caller: CallerIdentity = Depends(get_caller)) -> ProductIdOut:
    return await product_service.create_product(caller.subject_id, body.title, body.description, body.price)


async def list_products() -> list[ProductOut]:
    return await product_service.list_products()


async def get_product(product_id: str) -> ProductOut:
    """
    Error codes:
        - 404 PRODUCT_NOT_FOUND
    """
    return await product_service.get_product(product_id)


async def update_product(
    product_id: str,
    body: ProductUpdateIn,
    caller: CallerIdentity = Depends(get_caller),
) -> ProductOut:
    """
    Update a product owned by the caller. Omitted fields are left untouched.

    Error codes:
        - 403 PRODUCT_DOES_NOT_BELONG_USER
        - 404 PRODUCT_NOT_FOUND
    """
    return await product_service.update_product(
        product_id, caller.subject_id, body.model_dump(exclude_unset=True)
    )


async def remove_product(product_id: str, caller: CallerIdentity = Depends(get_caller)) -> ProductIdOut:
    return await product_service.delete_product(product_id, caller.subject_id)


ROUTES = [
    Route("POST", "", add_product, Capability.BEARER, status_code=201, summary="Creates a product"),
    Route("GET", "", list_products, Capability.PUBLIC, summary="Lists all products"),
    Route("GET", "/{product_id}", get_product, Capability.PUBLIC, summary="Returns one product"),
    Route("PATCH", "/{product_id}", update_product, Capability.BEARER, summary="Updates own product"),
    Route("DELETE", "/{product_id}", remove_product, Capability.BEARER, summary="Deletes own product"),
]

register_routes(router, ROUTES)
