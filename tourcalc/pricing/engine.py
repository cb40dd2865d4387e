"""Cost and pricing derivation for one trip snapshot.

compute_breakdown is a pure function with no I/O or side effects. It assumes
the snapshot already satisfies the per-day vector length rules maintained by
tourcalc.pricing.reconciler and does not re-validate them. Values keep full
float precision; rounding belongs to display and export.
"""

import math
from dataclasses import dataclass

from tourcalc.models.costs import CommercialCosts, CostBreakdown, FixedCosts, VariableCosts
from tourcalc.models.trip import DailyCosts, StaffRole, TripParameters

# Lower bound for (1 - commission fraction) so the price stays finite and positive
MIN_PRICE_DIVISOR = 0.01


@dataclass(frozen=True)
class RoleCosts:
    """Fixed costs attributable to one staff member."""

    fees: float = 0.0
    travel: float = 0.0
    accommodation: float = 0.0
    lunch: float = 0.0


NO_ROLE_COSTS = RoleCosts()


def _window_total(before: DailyCosts, during: DailyCosts, after: DailyCosts) -> float:
    return sum(before) + sum(during) + sum(after)


def role_costs(role: StaffRole, params: TripParameters) -> RoleCosts:
    """Fees, travel, lodging and meals for one included staff member.

    The shared Before/After lodging and lunch vectors are sized for the
    longest-staying role; each role only draws its own prefix of them.
    """
    if not role.included:
        return NO_ROLE_COSTS

    accommodation = _window_total(
        params.staff_daily_accommodation_costs_before[: role.extra_days_before],
        params.staff_daily_accommodation_costs,
        params.staff_daily_accommodation_costs_after[: role.extra_days_after],
    )
    lunch = _window_total(
        params.staff_daily_lunch_costs_before[: role.extra_days_before],
        params.staff_daily_lunch_costs,
        params.staff_daily_lunch_costs_after[: role.extra_days_after],
    )
    return RoleCosts(
        fees=_window_total(role.daily_rates_before, role.daily_rates_during, role.daily_rates_after),
        travel=role.travel_cost,
        accommodation=accommodation,
        lunch=lunch,
    )


def hotel_cost_per_person(params: TripParameters) -> float:
    """Client lodging per person; the DUS supplement is not included."""
    return sum(stay.nights * stay.cost_per_night for stay in params.hotel_stays)


def compute_fixed_costs(params: TripParameters) -> FixedCosts:
    """Costs independent of headcount: staff, vehicle, tolls, guide bike, scouting."""
    guide = role_costs(params.guide, params)
    driver = role_costs(params.driver, params)

    van_rental = 0.0
    fuel = 0.0
    if params.driver.included:
        van_rental = _window_total(
            params.van_daily_rental_costs_before,
            params.van_daily_rental_costs,
            params.van_daily_rental_costs_after,
        )
        fuel = _window_total(
            params.fuel_daily_costs_before, params.fuel_daily_costs, params.fuel_daily_costs_after
        )

    guide_bike = sum(params.guide_bike_daily_costs) if params.guide.included else 0.0

    staff_fees = guide.fees + driver.fees
    staff_travel = guide.travel + driver.travel
    staff_accommodation = guide.accommodation + driver.accommodation
    staff_lunch = guide.lunch + driver.lunch
    tolls = params.staff_tolls_cost
    scouting = params.scouting_cost

    total = (
        staff_fees
        + staff_travel
        + staff_accommodation
        + staff_lunch
        + guide_bike
        + van_rental
        + fuel
        + tolls
        + scouting
    )
    return FixedCosts(
        staff_fees=staff_fees,
        staff_travel=staff_travel,
        staff_accommodation=staff_accommodation,
        staff_lunch=staff_lunch,
        guide_bike=guide_bike,
        van_rental=van_rental,
        fuel=fuel,
        tolls=tolls,
        scouting=scouting,
        total=total,
    )


def bike_cost_per_person(params: TripParameters) -> float:
    return sum(params.bike_daily_rental_costs) if params.has_bike_rental else 0.0


def compute_variable_costs(params: TripParameters) -> VariableCosts:
    """Client costs scaled by participants; transfer is already a group total."""
    participants = params.participant_count

    client_accommodation = hotel_cost_per_person(params) * participants
    client_bike = bike_cost_per_person(params) * participants
    client_dinner = sum(params.client_daily_dinner_costs) * participants
    client_transfer = params.client_total_transfer_cost
    client_experience = params.client_experience_cost * participants
    client_insurance = params.client_insurance_cost * participants

    total = (
        client_accommodation
        + client_bike
        + client_dinner
        + client_transfer
        + client_experience
        + client_insurance
    )
    return VariableCosts(
        client_accommodation=client_accommodation,
        client_bike=client_bike,
        client_dinner=client_dinner,
        client_transfer=client_transfer,
        client_experience=client_experience,
        client_insurance=client_insurance,
        total=total,
    )


def variable_cost_per_person(params: TripParameters) -> float:
    """Unit variable cost used by the break-even computation."""
    return (
        hotel_cost_per_person(params)
        + bike_cost_per_person(params)
        + sum(params.client_daily_dinner_costs)
        + params.client_total_transfer_cost / max(params.participant_count, 1)
        + params.client_experience_cost
        + params.client_insurance_cost
    )


def compute_breakdown(params: TripParameters) -> CostBreakdown:
    """Project a trip snapshot into its full cost breakdown and pricing.

    Degenerate inputs never raise: zero participants give a zero cost per
    person, commissions at or above 100% are capped through
    MIN_PRICE_DIVISOR, and a non-positive contribution margin marks
    break-even as impossible.

    Args:
        params: Shape-consistent trip snapshot

    Returns:
        CostBreakdown with fixed, variable and commercial groups plus pricing
    """
    participants = params.participant_count

    fixed = compute_fixed_costs(params)
    variable = compute_variable_costs(params)
    total_cost = fixed.total + variable.total

    cost_per_person = total_cost / max(participants, 1) if participants > 0 else 0.0

    # Margin on cost, then gross up so commissions on the sale price are covered
    target_net_price = cost_per_person * (1 + params.profit_margin_percent / 100)
    commission_fraction = (params.banking_fee_percent + params.agency_commission_percent) / 100
    safe_divisor = max(MIN_PRICE_DIVISOR, 1 - commission_fraction)
    suggested_price = target_net_price / safe_divisor

    total_revenue = suggested_price * participants
    banking_fees = total_revenue * params.banking_fee_percent / 100
    agency_commissions = total_revenue * params.agency_commission_percent / 100
    total_profit = total_revenue - total_cost - banking_fees - agency_commissions

    unit_variable_cost = variable_cost_per_person(params)
    commission_per_person = suggested_price * commission_fraction
    contribution_margin = suggested_price - unit_variable_cost - commission_per_person

    break_even: int | None
    if contribution_margin <= 0:
        break_even = None
        impossible = True
    else:
        # 0 when there are no fixed costs to cover
        break_even = math.ceil(fixed.total / contribution_margin)
        impossible = False

    return CostBreakdown(
        fixed_costs=fixed,
        variable_costs=variable,
        commercial_costs=CommercialCosts(
            banking_fees=banking_fees,
            agency_commissions=agency_commissions,
            total=banking_fees + agency_commissions,
        ),
        total_cost=total_cost,
        cost_per_person=cost_per_person,
        suggested_price_per_person=suggested_price,
        total_revenue=total_revenue,
        total_profit=total_profit,
        variable_cost_per_person=unit_variable_cost,
        contribution_margin=contribution_margin,
        break_even_participants=break_even,
        is_break_even_impossible=impossible,
    )
