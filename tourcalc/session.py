"""Single owner of the current trip snapshot and its derived breakdown."""

import time
from typing import Any

from tourcalc.db.snapshots import dump_params, load_params
from tourcalc.models.common import ExtraDaysSide, StaffRoleName
from tourcalc.models.costs import CostBreakdown
from tourcalc.models.trip import SavedTrip, TripParameters, default_trip_parameters
from tourcalc.pricing import reconciler
from tourcalc.pricing.engine import compute_breakdown
from tourcalc.pricing.reconciler import DEFAULT_POLICY, ReshapePolicy
from tourcalc.utils.logging import trip_logger
from tourcalc.utils.metrics import metrics

SOURCE = "session"


class TripSession:
    """Holds the operator's current TripParameters and its CostBreakdown.

    Every edit builds a new snapshot, replaces the old one wholesale and
    recomputes the breakdown synchronously. A failing edit raises before the
    snapshot is replaced, so the current state is never partially updated.
    """

    def __init__(
        self, params: TripParameters | None = None, policy: ReshapePolicy = DEFAULT_POLICY
    ) -> None:
        self._policy = policy
        self._params = params if params is not None else default_trip_parameters()
        self._breakdown = compute_breakdown(self._params)

    @property
    def params(self) -> TripParameters:
        return self._params

    @property
    def breakdown(self) -> CostBreakdown:
        return self._breakdown

    @property
    def hotel_nights_warning(self) -> str | None:
        return reconciler.hotel_nights_warning(self._params)

    def replace(self, params: TripParameters, edit: str = "replace") -> CostBreakdown:
        """Install a new snapshot and recompute the breakdown."""
        start = time.perf_counter()
        breakdown = compute_breakdown(params)
        elapsed_ms = (time.perf_counter() - start) * 1000

        self._params = params
        self._breakdown = breakdown

        metrics.record_recompute(edit, elapsed_ms)
        trip_logger.log_edit(
            edit,
            trip_name=params.trip_name,
            duration_days=params.duration_days,
            participant_count=params.participant_count,
            latency_ms=elapsed_ms,
            warning=self.hotel_nights_warning,
        )
        return breakdown

    def update(self, **changes: Any) -> CostBreakdown:
        """Apply plain field edits (not duration or extra days).

        The merged snapshot goes through the same fail-closed loader as an
        import, so an edit that leaves a per-day vector at the wrong length
        is refused.

        Raises:
            ValidationError: If a changed value has the wrong type or range
            SnapshotRejectedError: If the result breaks a vector length rule
        """
        data = self._params.model_dump()
        data.update(changes)
        merged = TripParameters.model_validate(data)
        return self.replace(load_params(dump_params(merged), source=SOURCE), edit="update")

    def set_duration(self, days: int) -> CostBreakdown:
        return self.replace(
            reconciler.set_duration(self._params, days, self._policy), edit="duration"
        )

    def set_extra_days(
        self, role: StaffRoleName | str, side: ExtraDaysSide | str, count: int
    ) -> CostBreakdown:
        return self.replace(
            reconciler.set_extra_days(self._params, role, side, count, self._policy),
            edit="extra_days",
        )

    def add_hotel_stay(
        self, name: str = "New Hotel", cost_per_night: float | None = None
    ) -> CostBreakdown:
        return self.replace(
            reconciler.add_hotel_stay(self._params, name, cost_per_night, self._policy),
            edit="add_hotel_stay",
        )

    def remove_hotel_stay(self, stay_id: str) -> CostBreakdown:
        return self.replace(
            reconciler.remove_hotel_stay(self._params, stay_id), edit="remove_hotel_stay"
        )

    def load(self, saved: SavedTrip) -> CostBreakdown:
        """Make a saved trip's parameters the current snapshot."""
        return self.replace(saved.params.model_copy(deep=True), edit="load")

    def to_saved_trip(self, name: str | None = None) -> SavedTrip:
        """Capture the current snapshot as a new SavedTrip record."""
        trip_name = name or self._params.trip_name or "Untitled trip"
        return SavedTrip(name=trip_name, params=self._params.model_copy(deep=True))
