"""
Request and response schemas for the products API
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


# --- Requests ---

class ProductCreate(BaseModel):
    name: str
    price: float


class ProductUpdate(ProductCreate):
    availability: bool


# --- Responses ---

class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    availability: bool
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class ProductEnvelope(BaseModel):
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    data: List[ProductResponse]


class MessageEnvelope(BaseModel):
    data: str


# --- Errors ---

class FieldError(BaseModel):
    """One failed validation rule; ``value`` is left unset for absent fields"""
    type: str = "field"
    value: Any = None
    msg: str
    path: str
    location: str


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]


class NotFoundResponse(BaseModel):
    error: str
