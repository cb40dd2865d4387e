"""Models package - re-exports for convenience."""

from tourcalc.models.common import CamelModel, ExtraDaysSide, StaffRoleName
from tourcalc.models.costs import CommercialCosts, CostBreakdown, FixedCosts, VariableCosts
from tourcalc.models.trip import (
    DEFAULT_DURATION_DAYS,
    HotelStay,
    SavedTrip,
    StaffRole,
    TripParameters,
    default_trip_parameters,
)

__all__ = [
    # Common
    "CamelModel",
    "StaffRoleName",
    "ExtraDaysSide",
    # Trip
    "TripParameters",
    "StaffRole",
    "HotelStay",
    "SavedTrip",
    "DEFAULT_DURATION_DAYS",
    "default_trip_parameters",
    # Costs
    "CostBreakdown",
    "FixedCosts",
    "VariableCosts",
    "CommercialCosts",
]
