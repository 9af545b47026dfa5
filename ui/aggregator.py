from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

UNIT = "kg CO₂"


class InvalidModeError(ValueError):
    pass


class ViewMode(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ChartKind(str, Enum):
    LINE = "line"
    BAR = "bar"
    AREA = "area"


DEFAULT_MODE = ViewMode.WEEKLY

# ---- lookup tables (one row per mode)
AXIS_KEYS: Dict[ViewMode, str] = {
    ViewMode.DAILY: "date",
    ViewMode.WEEKLY: "week",
    ViewMode.MONTHLY: "month",
}
CHART_KINDS: Dict[ViewMode, ChartKind] = {
    ViewMode.DAILY: ChartKind.LINE,
    ViewMode.WEEKLY: ChartKind.BAR,
    ViewMode.MONTHLY: ChartKind.AREA,
}
TOTAL_HEADINGS: Dict[ViewMode, str] = {
    ViewMode.DAILY: "Daily Total",
    ViewMode.WEEKLY: "Weekly Total",
    ViewMode.MONTHLY: "Monthly Total",
}

Record = Mapping[str, Any]
ModeLike = Union[ViewMode, str]


def parse_mode(mode: ModeLike) -> ViewMode:
    try:
        return ViewMode(mode)
    except ValueError:
        raise InvalidModeError(f"unknown view mode: {mode!r}") from None


def select_dataset(payload: Optional[Mapping[str, Any]], mode: ModeLike) -> Sequence[Record]:
    """
    Return the record collection for `mode`, or an empty list when the
    payload, the mode or its collection is missing. Never raises.
    """
    if not payload or not isinstance(payload, Mapping):
        return []
    try:
        key = parse_mode(mode).value
    except InvalidModeError:
        return []
    records = payload.get(key)
    # only list-like collections count; strings, numbers and objects do not
    return records if isinstance(records, (list, tuple)) else []


def compute_total(records: Sequence[Record]) -> float:
    # plain left-to-right sum; NaN propagates
    total: float = 0
    for r in records:
        total = total + r["co2"]
    return total


def axis_key_for(mode: ModeLike) -> str:
    return AXIS_KEYS[parse_mode(mode)]


def chart_kind_for(mode: ModeLike) -> ChartKind:
    return CHART_KINDS[parse_mode(mode)]


def total_heading(mode: ModeLike) -> str:
    return TOTAL_HEADINGS[parse_mode(mode)]


def toggle_label(mode: ModeLike) -> str:
    return parse_mode(mode).value.upper()


def format_total(total: float) -> str:
    return f"{float(total):.1f} {UNIT}"


def format_emission(value: float) -> str:
    return f"{value} {UNIT}"


