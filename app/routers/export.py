"""
API Router for report downloads (PDF and Excel).
"""

import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.auth import get_current_user, CurrentUser
from app.services.comparison_repository import PriceComparisonRepository
from app.services.history_repository import PriceHistoryRepository
from app.services.report_common import export_filename
from app.services.report_pdf import generate_comparison_pdf, generate_history_pdf
from app.services.report_excel import generate_comparison_excel, generate_history_excel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["Export"])

PDF_MEDIA_TYPE = "application/pdf"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COMPARISON_PREFIX = "comparacao-precos"
HISTORY_PREFIX = "historico-precos"


def _download(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _render(renderer, data, kind: str) -> bytes:
    try:
        return renderer(data)
    except Exception as e:
        logger.error(f"Error generating {kind}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate {kind}"
        )


@router.get("/comparison/pdf")
def export_comparison_pdf(
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """Download the comparison matrix as PDF."""
    rows = PriceComparisonRepository.get_comparison_matrix(db)
    content = _render(generate_comparison_pdf, rows, "PDF")
    return _download(content, PDF_MEDIA_TYPE, export_filename(COMPARISON_PREFIX, "pdf", datetime.now()))


@router.get("/comparison/xlsx")
def export_comparison_excel(
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """Download the comparison matrix as an Excel workbook."""
    rows = PriceComparisonRepository.get_comparison_matrix(db)
    content = _render(generate_comparison_excel, rows, "Excel")
    return _download(content, XLSX_MEDIA_TYPE, export_filename(COMPARISON_PREFIX, "xlsx", datetime.now()))


@router.get("/history/pdf")
def export_history_pdf(
    db: Session = Depends(get_db),
    days: Optional[int] = Query(None, ge=1, description="Only changes in the last N days"),
    _: CurrentUser = Depends(get_current_user)
):
    """Download the price history as PDF."""
    entries = PriceHistoryRepository.get_history(db, days=days)
    content = _render(generate_history_pdf, entries, "PDF")
    return _download(content, PDF_MEDIA_TYPE, export_filename(HISTORY_PREFIX, "pdf", datetime.now()))


@router.get("/history/xlsx")
def export_history_excel(
    db: Session = Depends(get_db),
    days: Optional[int] = Query(None, ge=1, description="Only changes in the last N days"),
    _: CurrentUser = Depends(get_current_user)
):
    """Download the price history as an Excel workbook."""
    entries = PriceHistoryRepository.get_history(db, days=days)
    content = _render(generate_history_excel, entries, "Excel")
    return _download(content, XLSX_MEDIA_TYPE, export_filename(HISTORY_PREFIX, "xlsx", datetime.now()))
