"""
Export service — Write the catalog back out in canonical column order.

A file produced here re-imports to the same records.
"""

from io import BytesIO
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
import pandas as pd
import structlog

from models.product import PRODUCT_FIELDS, ProductRecord

logger = structlog.get_logger(__name__)

SHEET_TITLE = "Produkter"


def export_rows(products: Iterable[ProductRecord]) -> list[dict[str, str]]:
    """Records as rows keyed by column title, in canonical column order."""
    return [
        {field: product.get(field, "") for field in PRODUCT_FIELDS}
        for product in products
    ]


class ExportService:
    """Service for generating catalog export files."""

    def generate_csv(self, products: Sequence[ProductRecord]) -> bytes:
        """
        Generate a UTF-8 CSV with a BOM so spreadsheet apps keep å, ä, ö.

        Args:
            products: Records in upload order

        Returns:
            CSV file content
        """
        logger.info("generating_catalog_csv", product_count=len(products))

        df = pd.DataFrame(export_rows(products), columns=list(PRODUCT_FIELDS))
        return df.to_csv(index=False).encode("utf-8-sig")

    def generate_excel(self, products: Sequence[ProductRecord]) -> BytesIO:
        """
        Generate an XLSX workbook with one sheet of products.

        Args:
            products: Records in upload order

        Returns:
            BytesIO containing the Excel file
        """
        logger.info("generating_catalog_excel", product_count=len(products))

        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        bold_font = Font(bold=True)

        ws.append(list(PRODUCT_FIELDS))
        for cell in ws[1]:
            cell.font = bold_font

        for row in export_rows(products):
            ws.append([row[field] for field in PRODUCT_FIELDS])

        ws.freeze_panes = "A2"

        # Save to BytesIO
        output = BytesIO()
        wb.save(output)
        output.seek(0)

        return output


_export_service = None


def get_export_service() -> ExportService:
    """Get or create ExportService instance."""
    global _export_service
    if _export_service is None:
        _export_service = ExportService()
    return _export_service
