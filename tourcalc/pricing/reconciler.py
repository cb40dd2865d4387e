"""Shape reconciliation for per-day cost vectors and hotel nights.

Every function here is pure: it takes a TripParameters snapshot and returns a
new one. The input snapshot is never mutated.
"""

from dataclasses import dataclass

from pydantic.alias_generators import to_camel

from tourcalc.config import HotelShrinkPolicy, Settings
from tourcalc.errors import HotelStayError, TripAlreadyCoveredError
from tourcalc.models.common import ExtraDaysSide, StaffRoleName
from tourcalc.models.trip import DailyCosts, HotelStay, StaffRole, TripParameters


@dataclass(frozen=True)
class ReshapePolicy:
    """Clamp floor, hotel shrink rule and the defaults used to grow empty vectors."""

    min_duration_days: int = 0
    hotel_shrink_policy: HotelShrinkPolicy = HotelShrinkPolicy.floor_zero
    guide_daily_rate: float = 150.0
    driver_daily_rate: float = 120.0
    staff_lunch_cost: float = 25.0
    staff_accommodation_cost: float = 90.0
    van_rental_cost: float = 160.0
    fuel_cost: float = 40.0
    bike_rental_cost: float = 30.0
    client_dinner_cost: float = 0.0
    guide_bike_cost: float = 0.0
    hotel_cost_per_night: float = 90.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReshapePolicy":
        """Build a policy from application settings."""
        return cls(
            min_duration_days=settings.min_duration_days,
            hotel_shrink_policy=settings.hotel_shrink_policy,
            guide_daily_rate=settings.default_guide_daily_rate,
            driver_daily_rate=settings.default_driver_daily_rate,
            staff_lunch_cost=settings.default_staff_lunch_cost,
            staff_accommodation_cost=settings.default_staff_accommodation_cost,
            van_rental_cost=settings.default_van_rental_cost,
            fuel_cost=settings.default_fuel_cost,
            bike_rental_cost=settings.default_bike_rental_cost,
            client_dinner_cost=settings.default_client_dinner_cost,
            guide_bike_cost=settings.default_guide_bike_cost,
            hotel_cost_per_night=settings.default_hotel_cost_per_night,
        )


DEFAULT_POLICY = ReshapePolicy()


def resize_daily_costs(values: DailyCosts, new_length: int, default: float) -> DailyCosts:
    """Resize a per-day vector.

    Growing appends copies of the last element (or `default` when the vector is
    empty); shrinking truncates from the tail. Always returns a new list.
    """
    new_length = max(0, new_length)
    if new_length <= len(values):
        return list(values[:new_length])
    fill = values[-1] if values else default
    return list(values) + [fill] * (new_length - len(values))


def hotel_nights_total(params: TripParameters) -> int:
    """Sum of nights over all hotel stays."""
    return sum(stay.nights for stay in params.hotel_stays)


def hotel_nights_warning(params: TripParameters) -> str | None:
    """Describe a mismatch between hotel nights and trip duration, if any."""
    total = hotel_nights_total(params)
    if total == params.duration_days:
        return None
    return f"Hotel nights total ({total}) differs from trip duration ({params.duration_days})"


def shared_extra_days(guide: StaffRole, driver: StaffRole) -> tuple[int, int]:
    """Lengths of the shared staff logistics pool (before, after).

    Staff lunch and accommodation outside the tour window are one cost curve
    sized to whichever role stays longest; each role later draws only its own
    prefix of it.
    """
    return (
        max(guide.extra_days_before, driver.extra_days_before),
        max(guide.extra_days_after, driver.extra_days_after),
    )


def _shrink_stays(stays: list[HotelStay], nights: int, policy: HotelShrinkPolicy) -> None:
    """Remove `nights` nights from the end of `stays`, in place."""
    index = len(stays) - 1
    while index >= 0 and nights > 0:
        stay = stays[index]
        if policy is HotelShrinkPolicy.floor_zero:
            taken = min(stay.nights, nights)
            stays[index] = stay.model_copy(update={"nights": stay.nights - taken})
            nights -= taken
        elif stay.nights > nights:
            stays[index] = stay.model_copy(update={"nights": stay.nights - nights})
            nights = 0
        else:
            # floor_one: a stay that cannot keep a night is dropped
            nights -= stay.nights
            del stays[index]
        index -= 1


def _reconcile_hotel_nights(
    stays: list[HotelStay], duration: int, policy: ReshapePolicy
) -> list[HotelStay]:
    new_stays = [stay.model_copy() for stay in stays]
    delta = duration - sum(stay.nights for stay in new_stays)

    if delta > 0:
        if not new_stays:
            new_stays.append(
                HotelStay(name="Hotel Standard", nights=0, cost_per_night=policy.hotel_cost_per_night)
            )
        last = new_stays[-1]
        new_stays[-1] = last.model_copy(update={"nights": last.nights + delta})
    elif delta < 0:
        _shrink_stays(new_stays, -delta, policy.hotel_shrink_policy)

    return new_stays


def set_duration(
    params: TripParameters, new_duration: int, policy: ReshapePolicy = DEFAULT_POLICY
) -> TripParameters:
    """Change trip duration and resize everything that depends on it.

    Args:
        params: Current snapshot
        new_duration: Requested duration, clamped to policy.min_duration_days
        policy: Clamp floor, hotel shrink rule and growth defaults

    Returns:
        New snapshot whose "during" vectors all have length equal to the
        clamped duration and whose hotel nights sum to it.
    """
    duration = max(0, policy.min_duration_days, new_duration)
    base = params.model_copy(deep=True)

    guide = base.guide.model_copy(
        update={
            "daily_rates_during": resize_daily_costs(
                base.guide.daily_rates_during, duration, policy.guide_daily_rate
            )
        }
    )
    driver = base.driver.model_copy(
        update={
            "daily_rates_during": resize_daily_costs(
                base.driver.daily_rates_during, duration, policy.driver_daily_rate
            )
        }
    )

    return base.model_copy(
        update={
            "duration_days": duration,
            "hotel_stays": _reconcile_hotel_nights(base.hotel_stays, duration, policy),
            "guide": guide,
            "driver": driver,
            "bike_daily_rental_costs": resize_daily_costs(
                base.bike_daily_rental_costs, duration, policy.bike_rental_cost
            ),
            "van_daily_rental_costs": resize_daily_costs(
                base.van_daily_rental_costs, duration, policy.van_rental_cost
            ),
            "fuel_daily_costs": resize_daily_costs(
                base.fuel_daily_costs, duration, policy.fuel_cost
            ),
            "staff_daily_lunch_costs": resize_daily_costs(
                base.staff_daily_lunch_costs, duration, policy.staff_lunch_cost
            ),
            "staff_daily_accommodation_costs": resize_daily_costs(
                base.staff_daily_accommodation_costs, duration, policy.staff_accommodation_cost
            ),
            "client_daily_dinner_costs": resize_daily_costs(
                base.client_daily_dinner_costs, duration, policy.client_dinner_cost
            ),
            "guide_bike_daily_costs": resize_daily_costs(
                base.guide_bike_daily_costs, duration, policy.guide_bike_cost
            ),
        }
    )


def set_extra_days(
    params: TripParameters,
    role: StaffRoleName | str,
    side: ExtraDaysSide | str,
    new_count: int,
    policy: ReshapePolicy = DEFAULT_POLICY,
) -> TripParameters:
    """Change one role's extra days before or after the tour.

    Resizes that role's rates for the side; for the driver also the van and
    fuel vectors for the side. The shared staff lunch and accommodation
    Before/After vectors are then resized to the max of both roles' counts,
    computed after the new count is applied.
    """
    role = StaffRoleName(role)
    side = ExtraDaysSide(side)
    count = max(0, new_count)
    base = params.model_copy(deep=True)

    staff: StaffRole = getattr(base, role.value)
    rate_default = (
        policy.guide_daily_rate if role is StaffRoleName.guide else policy.driver_daily_rate
    )
    rates_field = f"daily_rates_{side.value}"
    updated_staff = staff.model_copy(
        update={
            f"extra_days_{side.value}": count,
            rates_field: resize_daily_costs(getattr(staff, rates_field), count, rate_default),
        }
    )

    update: dict[str, object] = {role.value: updated_staff}
    if role is StaffRoleName.driver:
        van_field = f"van_daily_rental_costs_{side.value}"
        fuel_field = f"fuel_daily_costs_{side.value}"
        update[van_field] = resize_daily_costs(getattr(base, van_field), count, policy.van_rental_cost)
        update[fuel_field] = resize_daily_costs(getattr(base, fuel_field), count, policy.fuel_cost)

    guide = updated_staff if role is StaffRoleName.guide else base.guide
    driver = updated_staff if role is StaffRoleName.driver else base.driver
    shared_before, shared_after = shared_extra_days(guide, driver)

    update["staff_daily_lunch_costs_before"] = resize_daily_costs(
        base.staff_daily_lunch_costs_before, shared_before, policy.staff_lunch_cost
    )
    update["staff_daily_lunch_costs_after"] = resize_daily_costs(
        base.staff_daily_lunch_costs_after, shared_after, policy.staff_lunch_cost
    )
    update["staff_daily_accommodation_costs_before"] = resize_daily_costs(
        base.staff_daily_accommodation_costs_before, shared_before, policy.staff_accommodation_cost
    )
    update["staff_daily_accommodation_costs_after"] = resize_daily_costs(
        base.staff_daily_accommodation_costs_after, shared_after, policy.staff_accommodation_cost
    )

    return base.model_copy(update=update)


def add_hotel_stay(
    params: TripParameters,
    name: str = "New Hotel",
    cost_per_night: float | None = None,
    policy: ReshapePolicy = DEFAULT_POLICY,
) -> TripParameters:
    """Append a hotel stay covering the nights no stay covers yet.

    Raises:
        TripAlreadyCoveredError: If hotel nights already cover the duration
    """
    uncovered = params.duration_days - hotel_nights_total(params)
    if uncovered <= 0:
        raise TripAlreadyCoveredError("All nights of the trip are already covered by hotel stays")

    base = params.model_copy(deep=True)
    stay = HotelStay(
        name=name,
        nights=uncovered,
        cost_per_night=policy.hotel_cost_per_night if cost_per_night is None else cost_per_night,
    )
    return base.model_copy(update={"hotel_stays": [*base.hotel_stays, stay]})


def remove_hotel_stay(params: TripParameters, stay_id: str) -> TripParameters:
    """Remove a hotel stay chosen by the operator.

    Nights are not redistributed; hotel_nights_warning reports the gap.

    Raises:
        HotelStayError: If the id is unknown or it is the only stay
    """
    if not any(stay.id == stay_id for stay in params.hotel_stays):
        raise HotelStayError(f"Unknown hotel stay: {stay_id}")
    if len(params.hotel_stays) == 1:
        raise HotelStayError("Cannot remove the only hotel stay")

    base = params.model_copy(deep=True)
    return base.model_copy(
        update={"hotel_stays": [stay for stay in base.hotel_stays if stay.id != stay_id]}
    )


def _expected_lengths(params: TripParameters) -> dict[str, int]:
    shared_before, shared_after = shared_extra_days(params.guide, params.driver)
    duration = params.duration_days
    return {
        "guide.daily_rates_during": duration,
        "guide.daily_rates_before": params.guide.extra_days_before,
        "guide.daily_rates_after": params.guide.extra_days_after,
        "driver.daily_rates_during": duration,
        "driver.daily_rates_before": params.driver.extra_days_before,
        "driver.daily_rates_after": params.driver.extra_days_after,
        "guide_bike_daily_costs": duration,
        "staff_daily_lunch_costs": duration,
        "staff_daily_lunch_costs_before": shared_before,
        "staff_daily_lunch_costs_after": shared_after,
        "staff_daily_accommodation_costs": duration,
        "staff_daily_accommodation_costs_before": shared_before,
        "staff_daily_accommodation_costs_after": shared_after,
        "van_daily_rental_costs": duration,
        "van_daily_rental_costs_before": params.driver.extra_days_before,
        "van_daily_rental_costs_after": params.driver.extra_days_after,
        "fuel_daily_costs": duration,
        "fuel_daily_costs_before": params.driver.extra_days_before,
        "fuel_daily_costs_after": params.driver.extra_days_after,
        "bike_daily_rental_costs": duration,
        "client_daily_dinner_costs": duration,
    }


def find_shape_violations(params: TripParameters) -> list[str]:
    """List every per-day vector whose length breaks its window rule.

    Field names in the messages use the camelCase JSON contract. Hotel
    nights are not checked here; a mismatch there is only a warning.
    """
    problems: list[str] = []
    for path, expected in _expected_lengths(params).items():
        target: object = params
        for part in path.split("."):
            target = getattr(target, part)
        actual = len(target)  # type: ignore[arg-type]
        if actual != expected:
            name = ".".join(to_camel(part) for part in path.split("."))
            problems.append(f"{name} has {actual} entries, expected {expected}")
    return problems
