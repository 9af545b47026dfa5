from typing import Sequence

import altair as alt
import pandas as pd

from ui.aggregator import ChartKind, ModeLike, Record, axis_key_for, chart_kind_for, format_emission

GREEN = "#2ecc71"
GRID = "#ddd"
HEIGHT = 320


def records_frame(records: Sequence[Record], x_key: str) -> pd.DataFrame:
    # keep payload order; extra record fields are ignored
    df = pd.DataFrame(list(records), columns=[x_key, "co2"])
    df["tooltip"] = df["co2"].map(format_emission)
    return df


def build_chart(records: Sequence[Record], mode: ModeLike) -> alt.Chart:
    """
    daily -> line, weekly -> bar, monthly -> area; x is the axis key in
    payload order, y is co2.
    """
    x_key = axis_key_for(mode)
    kind = chart_kind_for(mode)
    base = alt.Chart(records_frame(records, x_key))

    if kind is ChartKind.LINE:
        chart = base.mark_line(interpolate="monotone", color=GREEN, strokeWidth=2)
    elif kind is ChartKind.BAR:
        chart = base.mark_bar(color=GREEN)
    else:
        chart = base.mark_area(interpolate="monotone", color=GREEN, stroke=GREEN, fillOpacity=0.3)

    return chart.encode(
        x=alt.X(f"{x_key}:N", sort=None, title=None),
        y=alt.Y("co2:Q", title=None),
        tooltip=[
            alt.Tooltip(f"{x_key}:N"),
            alt.Tooltip("tooltip:N", title="co2"),
        ],
    ).properties(height=HEIGHT).configure_axis(gridColor=GRID)
