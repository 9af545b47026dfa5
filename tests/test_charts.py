"""Unit tests for the per-mode chart builder."""

from __future__ import annotations

import pytest

from ui.charts import GREEN, build_chart, records_frame

pytestmark = pytest.mark.unit


def _mark(vl: dict) -> dict:
    mark = vl["mark"]
    return mark if isinstance(mark, dict) else {"type": mark}


def test_daily_is_monotone_line(payload) -> None:
    vl = build_chart(payload["daily"], "daily").to_dict()

    assert _mark(vl)["type"] == "line"
    assert _mark(vl)["interpolate"] == "monotone"
    assert _mark(vl)["color"] == GREEN
    assert vl["encoding"]["x"]["field"] == "date"
    assert vl["encoding"]["y"]["field"] == "co2"
    assert vl["height"] == 320


def test_weekly_is_bar(payload) -> None:
    vl = build_chart(payload["weekly"], "weekly").to_dict()

    assert _mark(vl)["type"] == "bar"
    assert vl["encoding"]["x"]["field"] == "week"


def test_monthly_is_translucent_area(payload) -> None:
    vl = build_chart(payload["monthly"], "monthly").to_dict()

    assert _mark(vl)["type"] == "area"
    assert _mark(vl)["fillOpacity"] == 0.3
    assert vl["encoding"]["x"]["field"] == "month"


def test_frame_keeps_order_and_formats_tooltip(payload) -> None:
    df = records_frame(payload["weekly"], "week")

    assert df["week"].tolist() == ["W1", "W2"]
    assert df["tooltip"].tolist() == ["3.2 kg CO₂", "4.8 kg CO₂"]


def test_empty_records_build_a_chart() -> None:
    vl = build_chart([], "daily").to_dict()

    assert _mark(vl)["type"] == "line"
    assert records_frame([], "date").empty
