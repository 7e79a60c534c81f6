# app/services/product_service.py
"""
Product CRUD. Listing and reading are public; changes are restricted to the
product's owner.
"""
import logging
import uuid

from app.core.errors import Forbidden, NotFound
from app.models.product import Product
from app.models.user import User

logger = logging.getLogger("uvicorn.error")

UPDATABLE_FIELDS = ("title", "description", "price")


def _product_to_dict(p: Product) -> dict:
    return {
        "id": str(p.id),
        "title": p.title,
        "description": p.description,
        "price": p.price,
    }


async def create_product(user_id: str, title: str, description: str, price: float) -> dict:
    if not await User.filter(id=user_id).exists():
        raise Forbidden()
    product = await Product.create(user_id=user_id, title=title, description=description, price=price)
    logger.info("[products] created id=%s owner=%s", product.id, user_id)
    return {"id": str(product.id)}


async def list_products() -> list[dict]:
    rows = await Product.all().order_by("-created_at")
    return [_product_to_dict(p) for p in rows]


async def find_product(product_id: str) -> Product:
    try:
        uuid.UUID(str(product_id))
    except ValueError:
        raise NotFound("PRODUCT_NOT_FOUND", f"Could not find product {product_id}")
    product = await Product.get_or_none(id=product_id)
    if not product:
        raise NotFound("PRODUCT_NOT_FOUND", f"Could not find product {product_id}")
    return product


async def get_product(product_id: str) -> dict:
    return _product_to_dict(await find_product(product_id))


async def find_owned_product(product_id: str, user_id: str) -> Product:
    product = await find_product(product_id)
    if str(product.user_id) != str(user_id):
        raise Forbidden("PRODUCT_DOES_NOT_BELONG_USER")
    return product


async def update_product(product_id: str, user_id: str, changes: dict) -> dict:
    product = await find_owned_product(product_id, user_id)
    for field in UPDATABLE_FIELDS:
        if changes.get(field) is not None:
            setattr(product, field, changes[field])
    await product.save()
    return _product_to_dict(product)


async def delete_product(product_id: str, user_id: str) -> dict:
    product = await find_owned_product(product_id, user_id)
    await product.delete()
    logger.info("[products] deleted id=%s owner=%s", product_id, user_id)
    return {"id": str(product_id)}
