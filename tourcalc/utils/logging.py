"""Structured logging for snapshot edits and persistence."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredTripLogger:
    """Structured logger for edits applied to the current trip snapshot."""

    def log_edit(
        self,
        edit: str,
        trip_name: str,
        duration_days: int,
        participant_count: int,
        latency_ms: float,
        warning: str | None = None,
    ) -> None:
        """Log one snapshot replacement with structured data."""
        log_data: dict[str, Any] = {
            "edit": edit,
            "trip_name": trip_name,
            "duration_days": duration_days,
            "participant_count": participant_count,
            "latency_ms": round(latency_ms, 3),
        }

        if warning:
            log_data["warning"] = warning

        log_msg = f"Trip edit: {edit}"

        if warning:
            logger.warning(log_msg, extra={"structured": log_data})
        else:
            logger.info(log_msg, extra={"structured": log_data})

    def log_persistence(self, operation: str, outcome: str, trip_id: str | None = None) -> None:
        """Log a persistence round trip."""
        log_data: dict[str, Any] = {"operation": operation, "outcome": outcome}
        if trip_id:
            log_data["trip_id"] = trip_id

        log_msg = f"Persistence: {operation} - {outcome}"
        if outcome == "ok":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})


trip_logger = StructuredTripLogger()
