"""
Unit tests for services.product_service module.
"""
import uuid

import pytest

from app.core.errors import Forbidden, NotFound
from app.models.product import Product
from app.services import product_service


pytestmark = pytest.mark.asyncio


async def test_create_get_list(db, create_user):
    owner, _ = await create_user()
    created = await product_service.create_product(str(owner.id), "Lamp", "Desk lamp", 499.5)

    product = await product_service.get_product(created["id"])
    assert product == {"id": created["id"], "title": "Lamp", "description": "Desk lamp", "price": 499.5}
    assert await product_service.list_products() == [product]


async def test_create_for_unknown_owner(db):
    with pytest.raises(Forbidden):
        await product_service.create_product(str(uuid.uuid4()), "Lamp", "Desk lamp", 1.0)


async def test_get_missing_or_malformed_id(db):
    with pytest.raises(NotFound):
        await product_service.get_product(str(uuid.uuid4()))
    with pytest.raises(NotFound) as exc:
        await product_service.get_product("not-a-uuid")
    assert exc.value.code == "PRODUCT_NOT_FOUND"


async def test_owner_can_update_partially(db, create_user):
    owner, _ = await create_user()
    created = await product_service.create_product(str(owner.id), "Lamp", "Desk lamp", 10.0)
    updated = await product_service.update_product(created["id"], str(owner.id), {"price": 12.5})
    assert updated["price"] == 12.5
    assert updated["title"] == "Lamp"


async def test_other_user_cannot_update_or_delete(db, create_user):
    owner, _ = await create_user()
    intruder, _ = await create_user()
    created = await product_service.create_product(str(owner.id), "Lamp", "Desk lamp", 10.0)

    with pytest.raises(Forbidden) as exc:
        await product_service.update_product(created["id"], str(intruder.id), {"title": "Mine"})
    assert exc.value.code == "PRODUCT_DOES_NOT_BELONG_USER"
    with pytest.raises(Forbidden):
        await product_service.delete_product(created["id"], str(intruder.id))


async def test_owner_can_delete(db, create_user):
    owner, _ = await create_user()
    created = await product_service.create_product(str(owner.id), "Lamp", "Desk lamp", 10.0)
    assert await product_service.delete_product(created["id"], str(owner.id)) == {"id": created["id"]}
    assert await Product.all().count() == 0


async def test_products_removed_with_owner(db, create_user):
    owner, _ = await create_user()
    await product_service.create_product(str(owner.id), "Lamp", "Desk lamp", 10.0)
    await owner.delete()
    assert await Product.all().count() == 0
