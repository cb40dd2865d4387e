"""Tests for per-day vector and hotel night reconciliation."""

from collections.abc import Callable

import pytest

from tourcalc.config import HotelShrinkPolicy, Settings
from tourcalc.errors import HotelStayError, TripAlreadyCoveredError
from tourcalc.models.trip import HotelStay, StaffRole, TripParameters
from tourcalc.pricing.reconciler import (
    ReshapePolicy,
    add_hotel_stay,
    find_shape_violations,
    hotel_nights_total,
    hotel_nights_warning,
    remove_hotel_stay,
    resize_daily_costs,
    set_duration,
    set_extra_days,
    shared_extra_days,
)

DURING_VECTORS = [
    "bike_daily_rental_costs",
    "van_daily_rental_costs",
    "fuel_daily_costs",
    "staff_daily_lunch_costs",
    "staff_daily_accommodation_costs",
    "client_daily_dinner_costs",
    "guide_bike_daily_costs",
]


def _stays(*nights: int) -> list[HotelStay]:
    return [
        HotelStay(id=str(i), name=f"H{i}", nights=n, cost_per_night=80)
        for i, n in enumerate(nights)
    ]


class TestResizeDailyCosts:
    def test_grow_copies_last_value(self) -> None:
        assert resize_daily_costs([10.0, 20.0], 4, 99.0) == [10.0, 20.0, 20.0, 20.0]

    def test_grow_empty_uses_default(self) -> None:
        assert resize_daily_costs([], 3, 25.0) == [25.0, 25.0, 25.0]

    def test_shrink_truncates_tail(self) -> None:
        assert resize_daily_costs([1.0, 2.0, 3.0], 1, 0.0) == [1.0]

    def test_negative_length_is_empty(self) -> None:
        assert resize_daily_costs([1.0], -3, 0.0) == []

    def test_returns_new_list(self) -> None:
        values = [5.0, 6.0]
        result = resize_daily_costs(values, 2, 0.0)
        assert result == values
        assert result is not values


class TestSetDuration:
    def test_grow_resizes_every_during_vector(self, default_params: TripParameters) -> None:
        result = set_duration(default_params, 10)

        assert result.duration_days == 10
        assert len(result.guide.daily_rates_during) == 10
        assert len(result.driver.daily_rates_during) == 10
        for field in DURING_VECTORS:
            assert len(getattr(result, field)) == 10, field
        assert result.bike_daily_rental_costs[-1] == 30.0
        assert find_shape_violations(result) == []

    def test_grow_adds_nights_to_last_stay(self, default_params: TripParameters) -> None:
        result = set_duration(default_params, 9)

        assert [stay.nights for stay in result.hotel_stays] == [9]
        assert hotel_nights_warning(result) is None

    def test_shrink_keeps_prefix(self, default_params: TripParameters) -> None:
        params = default_params.model_copy(
            update={"bike_daily_rental_costs": [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]}
        )

        result = set_duration(params, 3)

        assert result.bike_daily_rental_costs == [1.0, 2.0, 3.0]
        assert find_shape_violations(result) == []

    def test_does_not_mutate_input(self, default_params: TripParameters) -> None:
        before = default_params.model_dump()

        set_duration(default_params, 2)

        assert default_params.model_dump() == before

    def test_negative_is_clamped_to_zero(self, default_params: TripParameters) -> None:
        result = set_duration(default_params, -4)

        assert result.duration_days == 0
        assert result.bike_daily_rental_costs == []
        assert hotel_nights_total(result) == 0

    def test_min_duration_policy_clamps(self, default_params: TripParameters) -> None:
        result = set_duration(default_params, 0, ReshapePolicy(min_duration_days=1))

        assert result.duration_days == 1
        assert len(result.fuel_daily_costs) == 1

    def test_same_duration_is_idempotent(self, default_params: TripParameters) -> None:
        once = set_duration(default_params, 5)
        twice = set_duration(once, 5)

        assert twice.model_dump(exclude={"hotel_stays"}) == once.model_dump(exclude={"hotel_stays"})
        assert [s.nights for s in twice.hotel_stays] == [s.nights for s in once.hotel_stays]

    def test_grow_then_shrink_restores_vectors(self, default_params: TripParameters) -> None:
        params = default_params.model_copy(
            update={"van_daily_rental_costs": [100.0, 110.0, 120.0, 130.0, 140.0, 150.0, 160.0]}
        )

        result = set_duration(set_duration(params, 12), 7)

        assert result.van_daily_rental_costs == params.van_daily_rental_costs

    def test_grow_from_empty_trip_creates_hotel(self) -> None:
        result = set_duration(TripParameters(), 3)

        assert len(result.hotel_stays) == 1
        assert result.hotel_stays[0].name == "Hotel Standard"
        assert result.hotel_stays[0].nights == 3
        assert result.hotel_stays[0].cost_per_night == 90.0
        assert result.guide.daily_rates_during == [150.0, 150.0, 150.0]
        assert result.driver.daily_rates_during == [120.0, 120.0, 120.0]

    def test_policy_defaults_from_settings(self) -> None:
        settings = Settings(default_bike_rental_cost=42.0, hotel_shrink_policy="floor_one")
        policy = ReshapePolicy.from_settings(settings)

        result = set_duration(TripParameters(), 2, policy)

        assert policy.hotel_shrink_policy is HotelShrinkPolicy.floor_one
        assert result.bike_daily_rental_costs == [42.0, 42.0]

    @pytest.mark.parametrize("seed", range(20))
    def test_random_durations_keep_shape(
        self, seed: int, random_params: Callable[[int], TripParameters]
    ) -> None:
        params = random_params(seed)
        for days in (0, 1, seed % 9, 15):
            params = set_duration(params, days)
            assert find_shape_violations(params) == []
            assert hotel_nights_total(params) == days


class TestHotelShrinkPolicies:
    def _params(self, *nights: int) -> TripParameters:
        return set_duration(TripParameters(), sum(nights)).model_copy(
            update={"hotel_stays": _stays(*nights)}
        )

    def test_floor_zero_keeps_empty_stays(self) -> None:
        result = set_duration(self._params(3, 2, 2), 3)

        assert [stay.nights for stay in result.hotel_stays] == [3, 0, 0]

    def test_floor_zero_partial_take(self) -> None:
        result = set_duration(self._params(3, 4), 5)

        assert [stay.nights for stay in result.hotel_stays] == [3, 2]

    def test_floor_one_drops_exhausted_stays(self) -> None:
        policy = ReshapePolicy(hotel_shrink_policy=HotelShrinkPolicy.floor_one)

        result = set_duration(self._params(3, 2, 2), 3, policy)

        assert [stay.nights for stay in result.hotel_stays] == [3]

    def test_floor_one_keeps_at_least_one_night(self) -> None:
        policy = ReshapePolicy(hotel_shrink_policy=HotelShrinkPolicy.floor_one)

        result = set_duration(self._params(3, 4), 5, policy)

        assert [stay.nights for stay in result.hotel_stays] == [3, 2]
        assert all(stay.nights >= 1 for stay in result.hotel_stays)

    def test_growth_goes_to_last_stay(self) -> None:
        result = set_duration(self._params(3, 2), 8)

        assert [stay.nights for stay in result.hotel_stays] == [3, 5]


class TestSetExtraDays:
    def test_driver_resizes_van_fuel_and_rates(self, default_params: TripParameters) -> None:
        result = set_extra_days(default_params, "driver", "before", 3)

        assert result.driver.extra_days_before == 3
        assert result.driver.daily_rates_before == [120.0, 120.0, 120.0]
        assert len(result.van_daily_rental_costs_before) == 3
        assert len(result.fuel_daily_costs_before) == 3
        assert len(result.staff_daily_lunch_costs_before) == 3
        assert find_shape_violations(result) == []

    def test_guide_does_not_touch_van(self, default_params: TripParameters) -> None:
        result = set_extra_days(default_params, "guide", "after", 2)

        assert result.guide.daily_rates_after == [150.0, 150.0]
        assert result.van_daily_rental_costs_after == default_params.van_daily_rental_costs_after
        assert len(result.staff_daily_accommodation_costs_after) == 2

    def test_shared_pool_uses_max_after_update(self, default_params: TripParameters) -> None:
        params = set_extra_days(default_params, "guide", "before", 4)
        params = set_extra_days(params, "driver", "before", 2)

        assert shared_extra_days(params.guide, params.driver) == (4, 1)
        assert len(params.staff_daily_lunch_costs_before) == 4

        params = set_extra_days(params, "guide", "before", 0)

        assert len(params.staff_daily_lunch_costs_before) == 2
        assert len(params.staff_daily_accommodation_costs_before) == 2

    def test_negative_count_clamped(self, default_params: TripParameters) -> None:
        result = set_extra_days(default_params, "driver", "after", -2)

        assert result.driver.extra_days_after == 0
        assert result.van_daily_rental_costs_after == []
        assert find_shape_violations(result) == []

    def test_unknown_role_rejected(self, default_params: TripParameters) -> None:
        with pytest.raises(ValueError):
            set_extra_days(default_params, "chef", "before", 1)


class TestHotelStayEdits:
    def test_add_covers_uncovered_nights(self, default_params: TripParameters) -> None:
        params = default_params.model_copy(update={"hotel_stays": _stays(4)})

        result = add_hotel_stay(params, "Agriturismo", 70.0)

        assert [stay.nights for stay in result.hotel_stays] == [4, 3]
        assert result.hotel_stays[-1].name == "Agriturismo"
        assert result.hotel_stays[-1].cost_per_night == 70.0
        assert hotel_nights_warning(result) is None

    def test_add_when_covered_raises(self, default_params: TripParameters) -> None:
        with pytest.raises(TripAlreadyCoveredError):
            add_hotel_stay(default_params)

    def test_remove_leaves_warning(self, default_params: TripParameters) -> None:
        params = default_params.model_copy(update={"hotel_stays": _stays(4, 3)})

        result = remove_hotel_stay(params, "1")

        assert [stay.id for stay in result.hotel_stays] == ["0"]
        assert hotel_nights_warning(result) == "Hotel nights total (4) differs from trip duration (7)"

    def test_remove_only_stay_raises(self, default_params: TripParameters) -> None:
        with pytest.raises(HotelStayError):
            remove_hotel_stay(default_params, "1")

    def test_remove_unknown_raises(self, default_params: TripParameters) -> None:
        with pytest.raises(HotelStayError, match="Unknown"):
            remove_hotel_stay(default_params, "nope")


class TestFindShapeViolations:
    def test_default_is_consistent(self, default_params: TripParameters) -> None:
        assert find_shape_violations(default_params) == []

    def test_reports_camel_case_names(self, default_params: TripParameters) -> None:
        params = default_params.model_copy(
            update={
                "bike_daily_rental_costs": [30.0] * 5,
                "guide": StaffRole(daily_rates_during=[150.0] * 7, extra_days_before=1),
            }
        )

        problems = find_shape_violations(params)

        assert "bikeDailyRentalCosts has 5 entries, expected 7" in problems
        assert "guide.dailyRatesBefore has 0 entries, expected 1" in problems

    def test_hotel_mismatch_is_not_a_violation(self, default_params: TripParameters) -> None:
        params = default_params.model_copy(update={"hotel_stays": _stays(2)})

        assert find_shape_violations(params) == []
        assert hotel_nights_warning(params) is not None
