"""Pytest fixtures shared across the analytics tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest


@pytest.fixture
def payload() -> dict:
    """Return a small payload covering all three granularities."""

    return {
        "daily": [
            {"date": "2024-01-15", "co2": 1.5},
            {"date": "2024-01-16", "co2": 2.25},
            {"date": "2024-01-17", "co2": 0.0},
        ],
        "weekly": [
            {"week": "W1", "co2": 3.2},
            {"week": "W2", "co2": 4.8},
        ],
        "monthly": [
            {"month": "2024-01", "co2": 42.0},
        ],
    }


@pytest.fixture
def emissions_csv(tmp_path, monkeypatch):
    """Write an emissions CSV and point the API at it."""

    path = tmp_path / "emissions.csv"
    path.write_text(
        "date,item,co2\n"
        "2024-01-29,beef,5.0\n"
        "2024-01-29,lentils,0.5\n"
        "2024-01-31,milk,1.25\n"
        "2024-02-05,cheese,2.0\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("EMISSIONS_CSV", str(path))
    return path


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests.
    - `integration`: tests running the API, the Streamlit page, or touching files.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            invalid.append(item.nodeid)

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n" + joined
        )
