"""Cost breakdown models - derived output of the pricing engine."""

from tourcalc.models.common import CamelModel


class FixedCosts(CamelModel):
    """Costs that do not scale with the number of participants."""

    staff_fees: float
    staff_travel: float
    staff_accommodation: float
    staff_lunch: float
    guide_bike: float
    van_rental: float
    fuel: float
    tolls: float
    scouting: float
    total: float


class VariableCosts(CamelModel):
    """Client-side costs scaled by participant count (transfer is a group total)."""

    client_accommodation: float
    client_bike: float
    client_dinner: float
    client_transfer: float
    client_experience: float
    client_insurance: float
    total: float


class CommercialCosts(CamelModel):
    """Fees charged as a share of the final sale price."""

    banking_fees: float
    agency_commissions: float
    total: float


class CostBreakdown(CamelModel):
    """Full cost and pricing projection of one TripParameters snapshot.

    break_even_participants is None when the contribution margin is not
    positive; is_break_even_impossible is then True.
    """

    fixed_costs: FixedCosts
    variable_costs: VariableCosts
    commercial_costs: CommercialCosts
    total_cost: float
    cost_per_person: float
    suggested_price_per_person: float
    total_revenue: float
    total_profit: float
    variable_cost_per_person: float
    contribution_margin: float
    break_even_participants: int | None
    is_break_even_impossible: bool
