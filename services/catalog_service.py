"""
Catalog session — the caller-owned handle on the active product list.

A session holds one snapshot and one query. Uploading builds a new snapshot
off to the side and swaps it in only when the import succeeds, so a failed
or slow upload never leaves a half-filled catalog behind.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional
import structlog

from exceptions import ProductNotFoundError
from models.product import ProductRecord
from services.import_service import ImportResult, ValidationReport, import_rows
from services.recommendation_service import RelatedProduct, rank_related
from services.schema_service import AliasTable
from services.search_service import SearchResult, search_products

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable result of one upload."""
    records: tuple[ProductRecord, ...] = ()
    report: ValidationReport = field(default_factory=ValidationReport)
    source: Optional[str] = None
    loaded_at: Optional[datetime] = None

    @classmethod
    def from_import(cls, result: ImportResult, source: Optional[str] = None) -> "CatalogSnapshot":
        return cls(
            records=result.records,
            report=result.report,
            source=source,
            loaded_at=datetime.now(timezone.utc),
        )

    @property
    def product_count(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def get(self, position: int) -> ProductRecord:
        """
        Product at a zero-based position.

        Raises:
            ProductNotFoundError: If position is out of range
        """
        if position < 0 or position >= len(self.records):
            raise ProductNotFoundError(position)
        return self.records[position]


class CatalogSession:
    """
    One browsing session.

    Search and related lookups always run against the snapshot current at
    call time; neither mutates it.
    """

    def __init__(
        self,
        snapshot: Optional[CatalogSnapshot] = None,
        alias_table: Optional[AliasTable] = None,
    ):
        self.snapshot = snapshot or CatalogSnapshot()
        self.query = ""
        self.alias_table = alias_table

    def load_rows(
        self,
        rows: Iterable[Mapping],
        source: Optional[str] = None,
    ) -> CatalogSnapshot:
        """
        Import rows and make them the current catalog.

        The current snapshot is replaced only if the import succeeds. The
        current query is cleared on success.

        Raises:
            EmptyFileError: If there are no rows
            DecodeError: If the rows cannot be read
        """
        result = import_rows(rows, alias_table=self.alias_table, source=source)
        snapshot = CatalogSnapshot.from_import(result, source=source)

        previous = self.snapshot.product_count
        self.snapshot = snapshot
        self.query = ""

        logger.info(
            "catalog_snapshot_swapped",
            source=source,
            previous_count=previous,
            product_count=snapshot.product_count
        )
        return snapshot

    def search(self, query: str) -> list[SearchResult]:
        """Set the current query and rank the current snapshot for it."""
        self.query = query or ""
        return search_products(self.snapshot.records, self.query)

    def get_product(self, position: int) -> ProductRecord:
        return self.snapshot.get(position)

    def related(self, position: int, limit: Optional[int] = None) -> list[RelatedProduct]:
        """
        Products related to the product at a position.

        Raises:
            ProductNotFoundError: If position is out of range
        """
        focal = self.snapshot.get(position)
        return rank_related(
            focal,
            self.snapshot.records,
            limit=limit,
            focal_position=position,
        )
