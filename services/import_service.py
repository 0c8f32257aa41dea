"""
Import pipeline: raw spreadsheet rows → canonical product records.

Missing and extra columns are reported, never fatal. An empty upload or a
decoder failure aborts the whole import; no partial record list is ever
returned.
"""

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any, Iterable, Optional
import math
import structlog

from exceptions import AppError, DecodeError, EmptyFileError
from models.product import ProductRecord
from services.schema_service import AliasTable, get_alias_table

logger = structlog.get_logger(__name__)


@dataclass
class ValidationReport:
    """Column validation for one import."""
    missing: list[str] = field(default_factory=list)
    extra: list[str] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """True if any column was missing, ignored or shadowed."""
        return bool(self.missing or self.extra or self.duplicates)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "missing": list(self.missing),
            "extra": list(self.extra),
            "duplicates": list(self.duplicates),
        }


@dataclass(frozen=True)
class ImportResult:
    """Records and validation report of one import."""
    records: tuple[ProductRecord, ...]
    report: ValidationReport

    @property
    def product_count(self) -> int:
        return len(self.records)


def import_rows(
    rows: Iterable[Mapping],
    alias_table: Optional[AliasTable] = None,
    source: Optional[str] = None,
) -> ImportResult:
    """
    Map raw rows onto the canonical product schema.

    Args:
        rows: Ordered raw rows (header → cell) from the spreadsheet decoder.
              All rows are expected to share the first row's headers.
        alias_table: Header lookup (defaults to the canonical table)
        source: Filename or label, used for logging and errors only

    Returns:
        ImportResult with one record per row, in row order

    Raises:
        EmptyFileError: If there are no rows
        DecodeError: If the rows cannot be read or a row is not a mapping
    """
    alias_table = alias_table or get_alias_table()
    logger.info("catalog_import_started", source=source)

    raw_rows = _materialize(rows, source)
    if not raw_rows:
        logger.warning("catalog_import_empty", source=source)
        raise EmptyFileError(source)

    headers = list(raw_rows[0].keys())
    header_map = alias_table.map_headers(headers)
    field_to_header, report = _validate_columns(header_map, alias_table.fields)

    if report.missing:
        logger.warning("columns_missing", source=source, missing=report.missing)
    if report.extra:
        logger.info("columns_ignored", source=source, extra=report.extra)
    if report.duplicates:
        logger.warning("columns_shadowed", source=source, duplicates=report.duplicates)

    records = tuple(
        _build_record(row, field_to_header, alias_table.fields)
        for row in raw_rows
    )

    logger.info(
        "catalog_imported",
        source=source,
        product_count=len(records),
        missing_count=len(report.missing),
        extra_count=len(report.extra)
    )

    return ImportResult(records=records, report=report)


def _materialize(rows: Iterable[Mapping], source: Optional[str]) -> list[Mapping]:
    """Pull every row out of the decoder before building anything."""
    try:
        raw_rows = list(rows)
    except AppError:
        raise
    except Exception as e:
        logger.error("catalog_rows_unreadable", source=source, error=str(e))
        raise DecodeError(
            message="Failed to read rows from the file",
            details={"source": source, "original_error": str(e)}
        ) from e

    for idx, row in enumerate(raw_rows):
        if not isinstance(row, Mapping):
            logger.error("catalog_row_invalid", source=source, row=idx + 1)
            raise DecodeError(
                message="Row is not a header → value mapping",
                details={
                    "source": source,
                    "row": idx + 1,
                    "type": type(row).__name__,
                }
            )

    return raw_rows


def _validate_columns(
    header_map: dict[Any, Optional[str]],
    fields: tuple[str, ...],
) -> tuple[dict[str, Any], ValidationReport]:
    """
    Resolve which header feeds each field and build the report.

    The first header mapped to a field supplies it; later headers mapped to
    the same field are reported as duplicates.
    """
    field_to_header: dict[str, Any] = {}
    report = ValidationReport()

    for header, canonical in header_map.items():
        if canonical is None:
            report.extra.append(str(header))
        elif canonical in field_to_header:
            report.duplicates.append(str(header))
        else:
            field_to_header[canonical] = header

    report.missing = [f for f in fields if f not in field_to_header]
    return field_to_header, report


def _build_record(
    row: Mapping,
    field_to_header: dict[str, Any],
    fields: tuple[str, ...],
) -> ProductRecord:
    """Full canonical record; unmapped fields are empty strings."""
    record: ProductRecord = {}
    for canonical in fields:
        header = field_to_header.get(canonical)
        record[canonical] = "" if header is None else cell_to_str(row.get(header))
    return record


def cell_to_str(value: Any) -> str:
    """
    Coerce a raw cell to a string.

    None and NaN become "". Integral floats lose their ".0" so that a
    workbook cell holding 1042 reads as "1042".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)

