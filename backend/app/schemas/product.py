# app/schemas/product.py
"""
Pydantic schemas for product endpoints.
Defines request/response models for product CRUD.
"""
from pydantic import BaseModel, Field


class ProductIn(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float


class ProductUpdateIn(BaseModel):
    title: str | None = None
    description: str | None = None
    price: float | None = None


class ProductOut(BaseModel):
    id: str
    title: str
    description: str
    price: float


class ProductIdOut(BaseModel):
    id: str
