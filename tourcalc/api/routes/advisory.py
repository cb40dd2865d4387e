"""Advisory text endpoints - proposal drafts and cost analysis."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tourcalc.api.deps import get_advisory_session, get_trip_session
from tourcalc.llm.session import AdvisoryOutcome, AdvisorySession
from tourcalc.models.common import CamelModel
from tourcalc.session import TripSession

router = APIRouter(prefix="/advisory", tags=["advisory"])

SessionDep = Annotated[TripSession, Depends(get_trip_session)]
AdvisoryDep = Annotated[AdvisorySession, Depends(get_advisory_session)]


class AdvisoryResponse(CamelModel):
    """Text produced by one advisory request."""

    request_id: int
    kind: str
    text: str


class AdvisoryStatusResponse(CamelModel):
    """Whether a request is pending and the newest result, if any."""

    busy: bool
    latest: AdvisoryResponse | None = None
    latest_error: str | None = None


def _to_response(outcome: AdvisoryOutcome | None) -> AdvisoryResponse:
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Superseded by a newer advisory request",
        )
    if outcome.text is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=outcome.error)
    return AdvisoryResponse(request_id=outcome.request_id, kind=outcome.kind, text=outcome.text)


@router.post("/proposal", response_model=AdvisoryResponse)
async def draft_proposal(session: SessionDep, advisory: AdvisoryDep) -> AdvisoryResponse:
    """Draft a client proposal for the current snapshot."""
    params, breakdown = session.params, session.breakdown
    return _to_response(await advisory.request_proposal(params, breakdown))


@router.post("/analysis", response_model=AdvisoryResponse)
async def analyze_costs(session: SessionDep, advisory: AdvisoryDep) -> AdvisoryResponse:
    """Suggest cost reductions for the current breakdown."""
    return _to_response(await advisory.request_analysis(session.breakdown))


@router.get("", response_model=AdvisoryStatusResponse)
async def advisory_status(advisory: AdvisoryDep) -> AdvisoryStatusResponse:
    latest = advisory.latest
    if latest is None:
        return AdvisoryStatusResponse(busy=advisory.busy)
    if latest.text is None:
        return AdvisoryStatusResponse(busy=advisory.busy, latest_error=latest.error)
    return AdvisoryStatusResponse(
        busy=advisory.busy,
        latest=AdvisoryResponse(request_id=latest.request_id, kind=latest.kind, text=latest.text),
    )
