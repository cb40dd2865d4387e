"""Unit tests for UI helper functions."""

from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest

from tourcalc.db.snapshots import dump_params
from tourcalc.models.trip import TripParameters
from tourcalc.pricing.engine import compute_breakdown
from ui.helpers import (
    build_cost_chart_data,
    build_summary_metrics,
    day_labels,
    error_message,
    fill_all,
    format_break_even,
    get_autosave,
    set_extra_days,
)


@pytest.fixture
def breakdown_json(default_params: TripParameters) -> dict[str, Any]:
    return compute_breakdown(default_params).model_dump(mode="json", by_alias=True)


def test_day_labels() -> None:
    assert day_labels(3) == ["G1", "G2", "G3"]
    assert day_labels(3, "before") == ["-3", "-2", "-1"]
    assert day_labels(2, "after") == ["+1", "+2"]
    assert day_labels(0) == []


def test_fill_all() -> None:
    assert fill_all([5.0, 1.0, 2.0]) == [5.0, 5.0, 5.0]
    assert fill_all([]) == []


def test_cost_chart_excludes_zero_slices(breakdown_json: dict[str, Any]) -> None:
    data = build_cost_chart_data(breakdown_json)

    names = [item["name"] for item in data]
    assert names == [
        "Staff (fees)",
        "Staff (travel)",
        "Staff (board/lodging)",
        "Van (rental)",
        "Van (fuel)",
        "Clients (lodging)",
        "Clients (bikes)",
    ]
    assert data[2]["value"] == pytest.approx(1840.0)


def test_cost_chart_includes_other_client_costs(default_params: TripParameters) -> None:
    params = default_params.model_copy(update={"client_insurance_cost": 10.0})
    breakdown = compute_breakdown(params).model_dump(mode="json", by_alias=True)

    data = build_cost_chart_data(breakdown)

    assert data[-1] == {"name": "Clients (other)", "value": pytest.approx(80.0)}


def test_summary_metrics(breakdown_json: dict[str, Any]) -> None:
    metrics = build_summary_metrics(breakdown_json)

    assert metrics["Suggested price / person"] == "EUR 2014.06"
    assert metrics["Total cost"] == "EUR 12890.00"
    assert metrics["Break-even"] == "6 pax"


def test_format_break_even_impossible(default_params: TripParameters) -> None:
    params = default_params.model_copy(update={"participant_count": 0})
    breakdown = compute_breakdown(params).model_dump(mode="json", by_alias=True)

    assert format_break_even(breakdown) == "Impossible"


def test_error_message_includes_problems() -> None:
    request = httpx.Request("PUT", "http://test/session")
    response = httpx.Response(
        422,
        json={"detail": "Trip parameters are missing fields", "problems": ["missing field: x"]},
        request=request,
    )
    exc = httpx.HTTPStatusError("422", request=request, response=response)

    assert error_message(exc) == "Trip parameters are missing fields: missing field: x"


def test_error_message_plain_detail() -> None:
    request = httpx.Request("GET", "http://test/trips/x")
    response = httpx.Response(404, json={"detail": "Saved trip x not found"}, request=request)
    exc = httpx.HTTPStatusError("404", request=request, response=response)

    assert error_message(exc) == "Saved trip x not found"


@patch("ui.helpers.httpx.request")
def test_set_extra_days_posts_payload(mock_request: MagicMock) -> None:
    mock_request.return_value = httpx.Response(
        200, json={"params": {}}, request=httpx.Request("POST", "http://test")
    )

    set_extra_days("http://test", "driver", "after", 2)

    mock_request.assert_called_once()
    args, kwargs = mock_request.call_args
    assert args == ("POST", "http://test/session/extra-days")
    assert kwargs["json"] == {"role": "driver", "side": "after", "count": 2}


@patch("ui.helpers.httpx.get")
def test_get_autosave_missing_returns_none(mock_get: MagicMock) -> None:
    mock_get.return_value = httpx.Response(
        404, json={"detail": "No autosave found"}, request=httpx.Request("GET", "http://test")
    )

    assert get_autosave("http://test") is None


@patch("ui.helpers.httpx.get")
def test_get_autosave_returns_params(
    mock_get: MagicMock, default_params: TripParameters
) -> None:
    mock_get.return_value = httpx.Response(
        200, json=dump_params(default_params), request=httpx.Request("GET", "http://test")
    )

    result = get_autosave("http://test")

    assert result is not None
    assert result["durationDays"] == 7
