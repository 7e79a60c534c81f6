# app/models/product.py
"""
Database model for products owned by user accounts.
"""
import uuid
from tortoise import fields, models


class Product(models.Model):
    """
    Product database model.

    Relationships:
    - Belongs to a User (many-to-one, via user foreign key); removed together
      with its owner.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="products",
        on_delete=fields.CASCADE,
    )  # Owner of the product
    title = fields.CharField(max_length=256)
    description = fields.TextField()
    price = fields.FloatField()
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "products"
