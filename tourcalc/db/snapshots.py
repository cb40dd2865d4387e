"""Serialization boundary for trip snapshots.

Everything that reaches the pricing engine from storage or an import goes
through here. Loading fails closed: a snapshot with missing fields, wrong
types or inconsistent per-day vector lengths raises SnapshotRejectedError
instead of being coerced.
"""

import json
from typing import Any

from pydantic import BaseModel, ValidationError

from tourcalc.errors import SnapshotRejectedError
from tourcalc.models.trip import HotelStay, SavedTrip, StaffRole, TripParameters
from tourcalc.pricing.reconciler import find_shape_violations
from tourcalc.utils.metrics import metrics


def dump_params(params: TripParameters) -> dict[str, Any]:
    """Serialize parameters to the camelCase JSON contract."""
    return params.model_dump(mode="json", by_alias=True)


def dump_saved_trip(trip: SavedTrip) -> dict[str, Any]:
    """Serialize a saved trip to the camelCase JSON contract."""
    return trip.model_dump(mode="json", by_alias=True)


def _missing_keys(model: type[BaseModel], data: dict[str, Any], prefix: str = "") -> list[str]:
    missing = []
    for name, field in model.model_fields.items():
        alias = field.alias or name
        if alias not in data and name not in data:
            missing.append(f"{prefix}{alias}")
    return missing


def _find_missing_fields(data: dict[str, Any]) -> list[str]:
    missing = _missing_keys(TripParameters, data)
    for role in ("guide", "driver"):
        role_data = data.get(role)
        if isinstance(role_data, dict):
            missing.extend(_missing_keys(StaffRole, role_data, prefix=f"{role}."))
    stays = data.get("hotelStays", data.get("hotel_stays"))
    if isinstance(stays, list):
        for index, stay in enumerate(stays):
            if isinstance(stay, dict):
                missing.extend(_missing_keys(HotelStay, stay, prefix=f"hotelStays[{index}]."))
    return missing


def _reject(message: str, problems: list[str], source: str) -> SnapshotRejectedError:
    metrics.inc_rejection(source)
    return SnapshotRejectedError(message, problems=problems)


def load_params(data: Any, source: str = "import") -> TripParameters:
    """Validate a decoded JSON object and build TripParameters from it.

    Args:
        data: Decoded JSON (expected to be an object)
        source: Label for metrics (e.g. "import", "local", "sql")

    Returns:
        Shape-consistent TripParameters

    Raises:
        SnapshotRejectedError: If the snapshot is incomplete, mistyped or
            violates a per-day vector length rule
    """
    if not isinstance(data, dict):
        raise _reject("Trip parameters must be a JSON object", [], source)

    missing = _find_missing_fields(data)
    if missing:
        raise _reject(
            "Trip parameters are missing fields", [f"missing field: {m}" for m in missing], source
        )

    try:
        # JSON-mode strict validation: no string-to-number or int-to-bool coercion
        params = TripParameters.model_validate_json(json.dumps(data), strict=True)
    except (ValidationError, TypeError, ValueError) as e:
        problems = (
            [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            if isinstance(e, ValidationError)
            else [str(e)]
        )
        raise _reject("Trip parameters failed validation", problems, source) from e

    shape_problems = find_shape_violations(params)
    if shape_problems:
        raise _reject("Trip parameters have inconsistent day vectors", shape_problems, source)

    return params


def load_params_json(raw: str | bytes, source: str = "import") -> TripParameters:
    """Decode and validate parameters from JSON text."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise _reject("Trip parameters are not valid JSON", [str(e)], source) from e
    return load_params(data, source=source)


def load_saved_trip(data: Any, source: str = "import") -> SavedTrip:
    """Validate a decoded SavedTrip record, including its parameters.

    Raises:
        SnapshotRejectedError: If the record or its parameters are invalid
    """
    if not isinstance(data, dict) or "params" not in data:
        raise _reject("Saved trip must be an object with params", [], source)

    params = load_params(data["params"], source=source)
    try:
        return SavedTrip.model_validate({**data, "params": params})
    except ValidationError as e:
        problems = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise _reject("Saved trip failed validation", problems, source) from e
