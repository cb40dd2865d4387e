"""Helper functions for UI - TourCalc API client + display data builders."""

from typing import Any

import httpx

DEFAULT_TIMEOUT = 10.0
# Advisory text can take a while to generate
ADVISORY_TIMEOUT = 60.0


def _request(
    method: str,
    backend_url: str,
    path: str,
    timeout: float = DEFAULT_TIMEOUT,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request to the API and raise on HTTP errors.

    Raises:
        httpx.HTTPStatusError: If request fails
    """
    response = httpx.request(method, f"{backend_url}{path}", timeout=timeout, **kwargs)
    response.raise_for_status()
    return response


def get_session(backend_url: str) -> dict[str, Any]:
    """Current snapshot, breakdown and hotel-nights warning."""
    result: dict[str, Any] = _request("GET", backend_url, "/session").json()
    return result


def patch_session(backend_url: str, changes: dict[str, Any]) -> dict[str, Any]:
    """Apply camelCase field edits to the current snapshot."""
    result: dict[str, Any] = _request("PATCH", backend_url, "/session", json=changes).json()
    return result


def replace_session(backend_url: str, params: dict[str, Any]) -> dict[str, Any]:
    """Replace the current snapshot with a complete one (e.g. an imported file)."""
    result: dict[str, Any] = _request("PUT", backend_url, "/session", json=params).json()
    return result


def reset_session(backend_url: str) -> dict[str, Any]:
    result: dict[str, Any] = _request("POST", backend_url, "/session/reset").json()
    return result


def set_duration(backend_url: str, days: int) -> dict[str, Any]:
    result: dict[str, Any] = _request(
        "POST", backend_url, "/session/duration", json={"days": days}
    ).json()
    return result


def set_extra_days(backend_url: str, role: str, side: str, count: int) -> dict[str, Any]:
    """Change a staff member's extra days before or after the tour.

    Args:
        backend_url: Backend base URL (e.g. http://localhost:8000)
        role: "guide" or "driver"
        side: "before" or "after"
        count: New number of extra days

    Returns:
        Updated session dict
    """
    result: dict[str, Any] = _request(
        "POST",
        backend_url,
        "/session/extra-days",
        json={"role": role, "side": side, "count": count},
    ).json()
    return result


def add_hotel_stay(backend_url: str, name: str = "New Hotel") -> dict[str, Any]:
    result: dict[str, Any] = _request(
        "POST", backend_url, "/session/hotel-stays", json={"name": name}
    ).json()
    return result


def remove_hotel_stay(backend_url: str, stay_id: str) -> dict[str, Any]:
    result: dict[str, Any] = _request(
        "DELETE", backend_url, f"/session/hotel-stays/{stay_id}"
    ).json()
    return result


def save_trip(backend_url: str, name: str | None = None) -> dict[str, Any]:
    result: dict[str, Any] = _request(
        "POST", backend_url, "/session/save", json={"name": name}
    ).json()
    return result


def load_trip(backend_url: str, trip_id: str) -> dict[str, Any]:
    result: dict[str, Any] = _request("POST", backend_url, f"/session/load/{trip_id}").json()
    return result


def get_autosave(backend_url: str) -> dict[str, Any] | None:
    """Last autosaved snapshot, or None when nothing was autosaved."""
    response = httpx.get(f"{backend_url}/session/autosave", timeout=DEFAULT_TIMEOUT)
    if response.status_code == 404:
        return None
    response.raise_for_status()
    result: dict[str, Any] = response.json()
    return result


def restore_autosave(backend_url: str) -> dict[str, Any]:
    result: dict[str, Any] = _request("POST", backend_url, "/session/restore-autosave").json()
    return result


def list_trips(backend_url: str) -> list[dict[str, Any]]:
    result: list[dict[str, Any]] = _request("GET", backend_url, "/trips").json()
    return result


def delete_trip(backend_url: str, trip_id: str) -> None:
    _request("DELETE", backend_url, f"/trips/{trip_id}")


def download_backup(backend_url: str) -> bytes:
    return _request("GET", backend_url, "/trips/backup").content


def upload_backup(backend_url: str, raw: bytes, overwrite: bool) -> list[dict[str, Any]]:
    result: list[dict[str, Any]] = _request(
        "POST",
        backend_url,
        "/trips/backup",
        params={"overwrite": str(overwrite).lower()},
        content=raw,
        headers={"Content-Type": "application/json"},
    ).json()
    return result


def download_export(backend_url: str, fmt: str) -> bytes:
    """Download the current quote as "csv" or "pdf"."""
    return _request("GET", backend_url, f"/export/{fmt}").content


def request_advisory(backend_url: str, kind: str) -> dict[str, Any]:
    """Request a "proposal" or an "analysis" for the current snapshot.

    Raises:
        httpx.HTTPStatusError: 409 when superseded, 502 when generation failed
    """
    result: dict[str, Any] = _request(
        "POST", backend_url, f"/advisory/{kind}", timeout=ADVISORY_TIMEOUT
    ).json()
    return result


def error_message(exc: httpx.HTTPError) -> str:
    """Human-readable message for a failed API call."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            return f"HTTP {exc.response.status_code}"
        detail = body.get("detail", "") if isinstance(body, dict) else ""
        problems = body.get("problems", []) if isinstance(body, dict) else []
        if problems:
            return f"{detail}: " + "; ".join(problems)
        return str(detail) or f"HTTP {exc.response.status_code}"
    return str(exc) or type(exc).__name__


# --- Pure display helpers ---


def day_labels(count: int, variant: str = "during") -> list[str]:
    """Labels for a per-day cost row.

    Tour days read "G1".."Gn", days before the tour count down to "-1" and
    days after count up from "+1".
    """
    if variant == "before":
        return [f"-{count - index}" for index in range(count)]
    if variant == "after":
        return [f"+{index + 1}" for index in range(count)]
    return [f"G{index + 1}" for index in range(count)]


def fill_all(values: list[float]) -> list[float]:
    """Copy the first day's value onto every day."""
    if not values:
        return []
    return [values[0]] * len(values)


def build_cost_chart_data(breakdown: dict[str, Any]) -> list[dict[str, Any]]:
    """Cost slices for the pie chart; empty slices are left out.

    Args:
        breakdown: CostBreakdown dict (camelCase)

    Returns:
        List of {"name", "value"} dicts
    """
    fixed = breakdown["fixedCosts"]
    variable = breakdown["variableCosts"]
    other_client = (
        variable["clientDinner"]
        + variable["clientTransfer"]
        + variable["clientExperience"]
        + variable["clientInsurance"]
    )
    staff_board = fixed["staffAccommodation"] + fixed["staffLunch"]
    slices = [
        {"name": "Staff (fees)", "value": fixed["staffFees"]},
        {"name": "Staff (travel)", "value": fixed["staffTravel"]},
        {"name": "Staff (board/lodging)", "value": staff_board},
        {"name": "Van (rental)", "value": fixed["vanRental"]},
        {"name": "Van (fuel)", "value": fixed["fuel"]},
        {"name": "Clients (lodging)", "value": variable["clientAccommodation"]},
        {"name": "Clients (bikes)", "value": variable["clientBike"]},
        {"name": "Clients (other)", "value": other_client},
    ]
    return [item for item in slices if item["value"] > 0]


def format_break_even(breakdown: dict[str, Any]) -> str:
    if breakdown["isBreakEvenImpossible"] or breakdown["breakEvenParticipants"] is None:
        return "Impossible"
    return f"{breakdown['breakEvenParticipants']} pax"


def build_summary_metrics(breakdown: dict[str, Any]) -> dict[str, str]:
    """Headline figures, rounded to two decimals for display.

    Args:
        breakdown: CostBreakdown dict (camelCase)

    Returns:
        Dict of label -> formatted value
    """
    return {
        "Suggested price / person": f"EUR {breakdown['suggestedPricePerPerson']:.2f}",
        "Cost / person": f"EUR {breakdown['costPerPerson']:.2f}",
        "Total cost": f"EUR {breakdown['totalCost']:.2f}",
        "Total revenue": f"EUR {breakdown['totalRevenue']:.2f}",
        "Total profit": f"EUR {breakdown['totalProfit']:.2f}",
        "Break-even": format_break_even(breakdown),
    }
