"""Quote export endpoints for the current snapshot."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from tourcalc.api.deps import get_trip_session
from tourcalc.export.csv_export import build_csv
from tourcalc.export.pdf_export import build_pdf
from tourcalc.export.rows import export_filename
from tourcalc.session import TripSession

router = APIRouter(prefix="/export", tags=["export"])

SessionDep = Annotated[TripSession, Depends(get_trip_session)]


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/csv")
async def export_csv(session: SessionDep) -> Response:
    """Current quote as CSV, built from the session's computed breakdown."""
    params, breakdown = session.params, session.breakdown
    return _attachment(
        build_csv(params, breakdown), "text/csv; charset=utf-8", export_filename(params, "csv")
    )


@router.get("/pdf")
async def export_pdf(session: SessionDep) -> Response:
    """Current quote as PDF, built from the session's computed breakdown."""
    params, breakdown = session.params, session.breakdown
    return _attachment(
        build_pdf(params, breakdown), "application/pdf", export_filename(params, "pdf")
    )
