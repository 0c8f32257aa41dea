"""
Catalog API routes.

Upload a product spreadsheet into a browsing session, then search it and
look up related products.
"""

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import JSONResponse, Response
from typing import Optional
import structlog

from config import settings
from exceptions import AppError, FileTooLargeError
from models.catalog import (
    ProductItem,
    RelatedResponse,
    SearchResponse,
    SearchResultItem,
    SessionResponse,
    UploadResponse,
    ValidationReportResponse,
)
from parsers import parse_spreadsheet
from services import session_store
from services.catalog_service import CatalogSession
from services.export_service import get_export_service
from services.search_service import classify_query, sort_by_category, tokenize_query

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["Catalog"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def _session_response(session_id: str, session: CatalogSession) -> SessionResponse:
    snapshot = session.snapshot
    return SessionResponse(
        session_id=session_id,
        product_count=snapshot.product_count,
        source=snapshot.source,
        loaded_at=snapshot.loaded_at,
    )


# ===================
# SESSIONS
# ===================

@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session():
    """Start an empty browsing session."""
    session_id, session = session_store.create_session()
    logger.info("catalog_session_created", session_id=session_id)
    return _session_response(session_id, session)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    """Current state of a session."""
    try:
        session = session_store.get_session(session_id)
        return _session_response(session_id, session)
    except Exception as e:
        return handle_error(e)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str):
    """End a session."""
    session_store.delete_session(session_id)
    return Response(status_code=204)


# ===================
# UPLOAD
# ===================

@router.post("/sessions/{session_id}/upload", response_model=UploadResponse)
async def upload_catalog(session_id: str, file: UploadFile = File(...)):
    """
    Replace the session's catalog with an uploaded spreadsheet.

    Accepts .csv, .xlsx and .xls. Missing or unknown columns are reported
    as warnings. On any error the previous catalog stays in place.

    Raises:
        404: Unknown session
        422: Empty file, unreadable file, unsupported type or too large
    """
    logger.info(
        "catalog_upload_started",
        session_id=session_id,
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        session = session_store.get_session(session_id)

        content = await file.read()
        if len(content) > settings.max_upload_bytes:
            raise FileTooLargeError(len(content), settings.max_upload_bytes)

        rows = parse_spreadsheet(content, file.filename or "")
        snapshot = session.load_rows(rows, source=file.filename)

        report = snapshot.report
        if report.missing:
            message = (
                f"Loaded {snapshot.product_count} products. "
                f"Missing columns: {', '.join(report.missing)}"
            )
        else:
            message = f"Loaded {snapshot.product_count} products"

        logger.info(
            "catalog_upload_completed",
            session_id=session_id,
            product_count=snapshot.product_count
        )

        return UploadResponse(
            session_id=session_id,
            product_count=snapshot.product_count,
            source=snapshot.source,
            report=ValidationReportResponse(**report.to_dict()),
            message=message,
        )

    except Exception as e:
        logger.warning("catalog_upload_failed", session_id=session_id, error=str(e))
        return handle_error(e)


@router.get("/sessions/{session_id}/report", response_model=ValidationReportResponse)
async def get_report(session_id: str):
    """Column validation of the current catalog."""
    try:
        session = session_store.get_session(session_id)
        return ValidationReportResponse(**session.snapshot.report.to_dict())
    except Exception as e:
        return handle_error(e)


# ===================
# BROWSE
# ===================

@router.get("/sessions/{session_id}/products", response_model=SearchResponse)
async def search_products(
    session_id: str,
    q: str = Query("", max_length=200, description="Search query"),
    sort: str = Query("score", pattern="^(score|category)$", description="score or category (grid order)"),
):
    """
    Search the current catalog.

    Without a query every product is returned in upload order. sort=category
    orders the results by sub category, then parent category.
    """
    try:
        session = session_store.get_session(session_id)
        results = session.search(q)
        if sort == "category":
            results = sort_by_category(results)
        mode = classify_query(q) if tokenize_query(q) else None

        return SearchResponse(
            query=q,
            mode=mode,
            total=len(results),
            data=[
                SearchResultItem(position=r.position, product=r.product, score=r.score)
                for r in results
            ],
        )
    except Exception as e:
        return handle_error(e)


@router.get("/sessions/{session_id}/products/{position}", response_model=ProductItem)
async def get_product(session_id: str, position: int):
    """One product by its position in upload order."""
    try:
        session = session_store.get_session(session_id)
        return ProductItem(position=position, product=session.get_product(position))
    except Exception as e:
        return handle_error(e)


@router.get("/sessions/{session_id}/products/{position}/related", response_model=RelatedResponse)
async def get_related(
    session_id: str,
    position: int,
    limit: Optional[int] = Query(None, ge=1, le=50),
):
    """Products related to one product, best match first."""
    try:
        session = session_store.get_session(session_id)
        related = session.related(position, limit=limit)
        return RelatedResponse(
            position=position,
            total=len(related),
            data=[ProductItem(position=r.position, product=r.product) for r in related],
        )
    except Exception as e:
        return handle_error(e)


# ===================
# EXPORT
# ===================

@router.get("/sessions/{session_id}/export")
async def export_catalog(
    session_id: str,
    file_format: str = Query("csv", alias="format", pattern="^(csv|xlsx)$"),
):
    """Download the current catalog in canonical column order."""
    try:
        session = session_store.get_session(session_id)
        records = session.snapshot.records
        service = get_export_service()

        if file_format == "xlsx":
            content = service.generate_excel(records).getvalue()
            media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        else:
            content = service.generate_csv(records)
            media_type = "text/csv; charset=utf-8"

        logger.info("catalog_exported", session_id=session_id, format=file_format, product_count=len(records))

        return Response(
            content=content,
            media_type=media_type,
            headers={"Content-Disposition": f'attachment; filename="produkter.{file_format}"'},
        )
    except Exception as e:
        return handle_error(e)
