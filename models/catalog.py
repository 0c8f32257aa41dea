"""
Catalog API schemas for upload, search and related products.
"""

from pydantic import ConfigDict, Field
from typing import Optional
from datetime import datetime

from models.base import BaseSchema
from models.product import QueryMode


class ValidationReportResponse(BaseSchema):
    """Column validation for the last import. Informational only."""

    missing: list[str] = Field(default_factory=list, description="Canonical fields with no source column")
    extra: list[str] = Field(default_factory=list, description="Source columns that were ignored")
    duplicates: list[str] = Field(default_factory=list, description="Source columns shadowed by an earlier column")


class SessionResponse(BaseSchema):
    """A browsing session handle."""

    session_id: str
    product_count: int = 0
    source: Optional[str] = None
    loaded_at: Optional[datetime] = None


class UploadResponse(BaseSchema):
    """Response from a catalog upload."""

    session_id: str
    product_count: int
    source: Optional[str] = None
    report: ValidationReportResponse
    message: str


class ProductItem(BaseSchema):
    """One product with its position in the current catalog."""

    # Record values are served exactly as imported
    model_config = ConfigDict(str_strip_whitespace=False)

    position: int = Field(..., description="Zero-based position in upload order")
    product: dict[str, str]


class SearchResultItem(ProductItem):
    """Product with its match score for the current query."""

    score: int = Field(..., ge=0, description="Sum of per-token scores, 0 when unfiltered")


class SearchResponse(BaseSchema):
    """Ranked search results."""

    query: str
    mode: Optional[QueryMode] = Field(None, description="None for an empty query")
    total: int
    data: list[SearchResultItem]


class RelatedResponse(BaseSchema):
    """Products related to one focal product."""

    position: int
    total: int
    data: list[ProductItem]
