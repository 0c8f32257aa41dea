"""
Schemas and canonical product definitions.
"""

from models.base import BaseSchema
from models.product import (
    CanonicalField,
    PRODUCT_FIELDS,
    ProductRecord,
    QueryMode,
    empty_record,
)
from models.catalog import (
    ValidationReportResponse,
    SessionResponse,
    UploadResponse,
    ProductItem,
    SearchResultItem,
    SearchResponse,
    RelatedResponse,
)

__all__ = [
    "BaseSchema",

    # Product schema
    "CanonicalField",
    "PRODUCT_FIELDS",
    "ProductRecord",
    "QueryMode",
    "empty_record",

    # Catalog API
    "ValidationReportResponse",
    "SessionResponse",
    "UploadResponse",
    "ProductItem",
    "SearchResultItem",
    "SearchResponse",
    "RelatedResponse",
]
