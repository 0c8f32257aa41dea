"""
Business logic services.

Each service handles one domain area.
"""

from services.schema_service import AliasTable, get_alias_table
from services.import_service import ImportResult, ValidationReport, import_rows
from services.search_service import (
    SearchResult,
    classify_query,
    search_products,
    sort_by_category,
)
from services.recommendation_service import (
    RelatedProduct,
    rank_related,
    get_related_products,
)
from services.catalog_service import CatalogSession, CatalogSnapshot
from services.export_service import ExportService, get_export_service, export_rows

__all__ = [
    "AliasTable",
    "get_alias_table",
    "ImportResult",
    "ValidationReport",
    "import_rows",
    "SearchResult",
    "classify_query",
    "search_products",
    "sort_by_category",
    "RelatedProduct",
    "rank_related",
    "get_related_products",
    "CatalogSession",
    "CatalogSnapshot",
    "ExportService",
    "get_export_service",
    "export_rows",
]
