"""Request and response bodies shared by the API routes."""

from pydantic import Field

from tourcalc.models.common import CamelModel, ExtraDaysSide, StaffRoleName
from tourcalc.models.costs import CostBreakdown
from tourcalc.models.trip import TripParameters
from tourcalc.pricing.engine import compute_breakdown
from tourcalc.pricing.reconciler import hotel_nights_warning
from tourcalc.session import TripSession


class SnapshotResponse(CamelModel):
    """A snapshot, its breakdown and the hotel-nights warning if any."""

    params: TripParameters
    breakdown: CostBreakdown
    hotel_nights_warning: str | None = None

    @classmethod
    def from_session(cls, session: TripSession) -> "SnapshotResponse":
        return cls(
            params=session.params,
            breakdown=session.breakdown,
            hotel_nights_warning=session.hotel_nights_warning,
        )

    @classmethod
    def from_params(cls, params: TripParameters) -> "SnapshotResponse":
        return cls(
            params=params,
            breakdown=compute_breakdown(params),
            hotel_nights_warning=hotel_nights_warning(params),
        )


class SetDurationRequest(CamelModel):
    """Request body for POST /session/duration."""

    days: int = Field(..., description="New tour length; values below the minimum are clamped")


class SetExtraDaysRequest(CamelModel):
    """Request body for POST /session/extra-days."""

    role: StaffRoleName
    side: ExtraDaysSide
    count: int = Field(..., description="New extra-day count; negative values are clamped to 0")


class AddHotelStayRequest(CamelModel):
    """Request body for POST /session/hotel-stays."""

    name: str = Field("New Hotel", min_length=1, max_length=200)
    cost_per_night: float | None = Field(None, ge=0)


class SaveTripRequest(CamelModel):
    """Request body for POST /session/save."""

    name: str | None = Field(None, max_length=200, description="Defaults to the trip name")
