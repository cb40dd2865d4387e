"""Tabular quote content shared by the CSV and PDF exports.

Totals come from the CostBreakdown as computed; nothing here re-derives
them. Amounts are rounded to two decimals only when formatted.
"""

from dataclasses import dataclass

from tourcalc.models.costs import CostBreakdown
from tourcalc.models.trip import StaffRole, TripParameters
from tourcalc.pricing.engine import role_costs

UNNAMED_TRIP = "Untitled trip"


def money(value: float) -> str:
    return f"{value:.2f}"


def format_break_even(breakdown: CostBreakdown) -> str:
    if breakdown.is_break_even_impossible or breakdown.break_even_participants is None:
        return "IMPOSSIBLE"
    return str(breakdown.break_even_participants)


def export_filename(params: TripParameters, extension: str) -> str:
    """File name for an exported quote, e.g. "Tour_Toscana_quote.csv"."""
    stem = "_".join((params.trip_name or UNNAMED_TRIP).split())
    return f"{stem}_quote.{extension}"


@dataclass(frozen=True)
class QuoteSection:
    title: str
    header: list[str]
    rows: list[list[str]]


def summary_section(params: TripParameters) -> QuoteSection:
    return QuoteSection(
        title="TRIP SUMMARY",
        header=["Field", "Value"],
        rows=[
            ["Trip name", params.trip_name or UNNAMED_TRIP],
            ["Participants", str(params.participant_count)],
            ["Duration (days)", str(params.duration_days)],
        ],
    )


def hotel_section(params: TripParameters) -> QuoteSection:
    return QuoteSection(
        title="HOTEL DETAIL",
        header=["Hotel", "Nights", "Cost/night", "Total per person"],
        rows=[
            [stay.name, str(stay.nights), money(stay.cost_per_night),
             money(stay.nights * stay.cost_per_night)]
            for stay in params.hotel_stays
        ],
    )


def _role_detail(role: StaffRole, duration_days: int) -> str:
    extra = role.extra_days_before + role.extra_days_after
    return f"Tour ({duration_days}d) + extra ({extra}d)"


def staff_section(params: TripParameters) -> QuoteSection:
    rows = []
    for label, role in (("Cycling guide", params.guide), ("Driver", params.driver)):
        if not role.included:
            continue
        costs = role_costs(role, params)
        rows.append([label, _role_detail(role, params.duration_days), money(costs.fees)])
        rows.append([f"{label} travel", "Flight/transfer", money(costs.travel)])
    return QuoteSection(title="STAFF", header=["Role", "Detail", "Cost"], rows=rows)


def fixed_section(breakdown: CostBreakdown) -> QuoteSection:
    fixed = breakdown.fixed_costs
    return QuoteSection(
        title="FIXED COSTS",
        header=["Item", "Amount"],
        rows=[
            ["Staff fees", money(fixed.staff_fees)],
            ["Staff travel", money(fixed.staff_travel)],
            ["Staff accommodation", money(fixed.staff_accommodation)],
            ["Staff lunches", money(fixed.staff_lunch)],
            ["Guide bike", money(fixed.guide_bike)],
            ["Van rental", money(fixed.van_rental)],
            ["Fuel", money(fixed.fuel)],
            ["Tolls", money(fixed.tolls)],
            ["Scouting", money(fixed.scouting)],
            ["TOTAL FIXED COSTS", money(fixed.total)],
        ],
    )


def variable_section(breakdown: CostBreakdown) -> QuoteSection:
    variable = breakdown.variable_costs
    return QuoteSection(
        title="VARIABLE COSTS",
        header=["Item", "Amount"],
        rows=[
            ["Client accommodation", money(variable.client_accommodation)],
            ["Bike rental", money(variable.client_bike)],
            ["Client dinners", money(variable.client_dinner)],
            ["Transfers", money(variable.client_transfer)],
            ["Experiences", money(variable.client_experience)],
            ["Insurance", money(variable.client_insurance)],
            ["TOTAL VARIABLE COSTS", money(variable.total)],
        ],
    )


def commercial_section(breakdown: CostBreakdown) -> QuoteSection:
    commercial = breakdown.commercial_costs
    return QuoteSection(
        title="COMMERCIAL COSTS",
        header=["Item", "Amount"],
        rows=[
            ["Banking fees", money(commercial.banking_fees)],
            ["Agency commissions", money(commercial.agency_commissions)],
            ["TOTAL COMMERCIAL COSTS", money(commercial.total)],
        ],
    )


def results_section(params: TripParameters, breakdown: CostBreakdown) -> QuoteSection:
    return QuoteSection(
        title="RESULTS",
        header=["Item", "Value"],
        rows=[
            ["Total cost", money(breakdown.total_cost)],
            ["Cost per person", money(breakdown.cost_per_person)],
            ["Margin (%)", f"{params.profit_margin_percent:g}"],
            ["SUGGESTED PRICE PER PERSON", money(breakdown.suggested_price_per_person)],
            ["Total revenue", money(breakdown.total_revenue)],
            ["Total profit", money(breakdown.total_profit)],
            ["Break-even (participants)", format_break_even(breakdown)],
        ],
    )


def quote_sections(params: TripParameters, breakdown: CostBreakdown) -> list[QuoteSection]:
    """All sections of a quote in document order."""
    return [
        summary_section(params),
        staff_section(params),
        hotel_section(params),
        fixed_section(breakdown),
        variable_section(breakdown),
        commercial_section(breakdown),
        results_section(params, breakdown),
    ]
