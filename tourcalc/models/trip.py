"""Trip parameter models - the operator-edited snapshot."""

import uuid
from datetime import datetime, timezone

from pydantic import Field

from tourcalc.models.common import CamelModel

DailyCosts = list[float]


class StaffRole(CamelModel):
    """Pay and extra-day windows for one staff member (guide or driver)."""

    included: bool = True
    daily_rates_during: DailyCosts = Field(default_factory=list)
    daily_rates_before: DailyCosts = Field(default_factory=list)
    daily_rates_after: DailyCosts = Field(default_factory=list)
    travel_cost: float = 0.0
    extra_days_before: int = Field(default=0, ge=0)
    extra_days_after: int = Field(default=0, ge=0)


class HotelStay(CamelModel):
    """Consecutive nights the clients spend at one hotel."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = "Hotel"
    nights: int = Field(default=1, ge=0)
    cost_per_night: float = 0.0
    payment_terms: str = ""
    cancellation_policy: str = ""
    # Single-use-of-double supplement; recorded but not part of any cost total.
    dus_supplement: float = 0.0


class TripParameters(CamelModel):
    """Complete pricing input for one trip.

    Per-day vectors follow fixed length rules: "during" vectors match
    duration_days, role Before/After rates match that role's extra days, van
    and fuel Before/After match the driver's extra days, and the staff lunch
    and accommodation Before/After vectors match the larger of the two roles'
    extra days on that side.
    """

    trip_name: str = ""
    participant_count: int = Field(default=0, ge=0)
    duration_days: int = Field(default=0, ge=0)
    profit_margin_percent: float = 0.0

    # Staff
    guide: StaffRole = Field(default_factory=StaffRole)
    driver: StaffRole = Field(default_factory=StaffRole)
    guide_bike_daily_costs: DailyCosts = Field(default_factory=list)

    # Shared staff logistics
    staff_daily_lunch_costs: DailyCosts = Field(default_factory=list)
    staff_daily_lunch_costs_before: DailyCosts = Field(default_factory=list)
    staff_daily_lunch_costs_after: DailyCosts = Field(default_factory=list)
    staff_daily_accommodation_costs: DailyCosts = Field(default_factory=list)
    staff_daily_accommodation_costs_before: DailyCosts = Field(default_factory=list)
    staff_daily_accommodation_costs_after: DailyCosts = Field(default_factory=list)

    # Vehicle
    van_daily_rental_costs: DailyCosts = Field(default_factory=list)
    van_daily_rental_costs_before: DailyCosts = Field(default_factory=list)
    van_daily_rental_costs_after: DailyCosts = Field(default_factory=list)
    fuel_daily_costs: DailyCosts = Field(default_factory=list)
    fuel_daily_costs_before: DailyCosts = Field(default_factory=list)
    fuel_daily_costs_after: DailyCosts = Field(default_factory=list)

    staff_tolls_cost: float = 0.0
    scouting_cost: float = 0.0

    # Clients
    hotel_stays: list[HotelStay] = Field(default_factory=list)
    has_bike_rental: bool = True
    bike_daily_rental_costs: DailyCosts = Field(default_factory=list)
    client_daily_dinner_costs: DailyCosts = Field(default_factory=list)
    client_total_transfer_cost: float = 0.0
    client_experience_cost: float = 0.0
    client_insurance_cost: float = 0.0

    # Commercial
    banking_fee_percent: float = 0.0
    agency_commission_percent: float = 0.0


class SavedTrip(CamelModel):
    """Named snapshot stored by a persistence collaborator."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    params: TripParameters


DEFAULT_DURATION_DAYS = 7


def default_trip_parameters() -> TripParameters:
    """Build the snapshot a new session starts from."""
    days = DEFAULT_DURATION_DAYS
    return TripParameters(
        trip_name="Tour Ciclistico Toscana",
        participant_count=8,
        duration_days=days,
        profit_margin_percent=25,
        guide=StaffRole(
            included=True,
            daily_rates_during=[150.0] * days,
            travel_cost=200,
        ),
        driver=StaffRole(
            included=True,
            daily_rates_during=[120.0] * days,
            daily_rates_before=[120.0],
            daily_rates_after=[120.0],
            travel_cost=200,
            extra_days_before=1,
            extra_days_after=1,
        ),
        guide_bike_daily_costs=[0.0] * days,
        staff_daily_lunch_costs=[25.0] * days,
        staff_daily_lunch_costs_before=[25.0],
        staff_daily_lunch_costs_after=[25.0],
        staff_daily_accommodation_costs=[90.0] * days,
        staff_daily_accommodation_costs_before=[90.0],
        staff_daily_accommodation_costs_after=[90.0],
        van_daily_rental_costs=[160.0] * days,
        van_daily_rental_costs_before=[160.0],
        van_daily_rental_costs_after=[160.0],
        fuel_daily_costs=[40.0] * days,
        fuel_daily_costs_before=[40.0],
        fuel_daily_costs_after=[40.0],
        hotel_stays=[
            HotelStay(
                id="1",
                name="Hotel Base",
                nights=days,
                cost_per_night=90,
                payment_terms="30% alla conferma, saldo 30gg prima",
                cancellation_policy="Penale 100% da 15gg prima",
                dus_supplement=30,
            )
        ],
        has_bike_rental=True,
        bike_daily_rental_costs=[30.0] * days,
        client_daily_dinner_costs=[0.0] * days,
    )
