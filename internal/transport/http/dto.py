"""
Data Transfer Objects for Catalog Service API.

Contains Pydantic models for request/response bodies. Field rules are owned by
the domain entity; request models only fix the shape and types so that rule
violations come back as domain validation errors.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from internal.domain.catalog_item import CatalogItem


class CreateItemRequest(BaseModel):
    """Request body for creating a catalog item."""

    name: str = Field(..., description="Item name (2-255 characters)")
    code: str = Field(..., description="Unique code, [A-Z0-9-_]{3,50}")
    description: Optional[str] = Field(None, description="Free text, up to 1000 characters")
    price: Decimal = Field(..., description="Non-negative price with up to 2 decimals")
    category: Optional[str] = Field(None, description="Category, up to 100 characters")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Wireless Mouse",
                "code": "MOUSE-001",
                "description": "2.4 GHz optical mouse",
                "price": "59.90",
                "category": "peripherals",
            }
        }
    )


class UpdateItemRequest(BaseModel):
    """Request body for replacing the editable fields of an item."""

    name: str = Field(..., description="Item name (2-255 characters)")
    description: Optional[str] = Field(None, description="Free text, up to 1000 characters")
    price: Decimal = Field(..., description="Non-negative price with up to 2 decimals")
    category: Optional[str] = Field(None, description="Category, up to 100 characters")


class PriceUpdateRequest(BaseModel):
    """Request body for changing the price of an item."""

    price: Decimal = Field(..., description="New price")

    model_config = ConfigDict(json_schema_extra={"example": {"price": "49.90"}})


class ItemResponse(BaseModel):
    """Catalog item representation."""

    id: int = Field(..., description="Item identifier")
    name: str = Field(..., description="Item name")
    code: str = Field(..., description="Unique item code")
    description: Optional[str] = Field(None, description="Description")
    price: Decimal = Field(..., description="Price")
    category: Optional[str] = Field(None, description="Category")
    active: bool = Field(..., description="Whether the item is sellable")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    formatted_price: str = Field(..., description="Display price, e.g. 'R$ 59,90'")
    category_code: str = Field(..., description="Code qualified by category")

    @classmethod
    def from_entity(cls, item: CatalogItem) -> ItemResponse:
        """Build the response from a domain item."""
        return cls(
            id=item.id,
            name=item.name,
            code=item.code,
            description=item.description,
            price=item.price,
            category=item.category,
            active=item.active,
            created_at=item.created_at,
            updated_at=item.updated_at,
            formatted_price=item.formatted_price,
            category_code=item.category_code,
        )


class ItemListResponse(BaseModel):
    """List of catalog items."""

    data: List[ItemResponse] = Field(default_factory=list, description="Items")
    total: int = Field(..., description="Number of items returned")


class StatsResponse(BaseModel):
    """Catalog counters."""

    total_items: int = Field(..., description="Number of items")
    active_items: int = Field(..., description="Number of active items")


class ErrorResponse(BaseModel):
    """Error response body."""

    detail: str
    code: str
    field: Optional[str] = None
    request_id: Optional[str] = None
