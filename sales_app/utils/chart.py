"""
Altair chart for the samples + fitted line, and the canvas that owns the
Streamlit placeholder it is drawn into.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import altair as alt
import pandas as pd

from sales_app.utils.predictor import ChartPayload

SCATTER_SERIES = "Actual Sales Data"
SCATTER_COLOR = "rgba(75, 192, 192, 0.8)"
LINE_COLOR = "red"


def build_chart(
    payload: ChartPayload,
    x_title: str = "Temperature (°C)",
    y_title: str = "Ice Cream Sales (Cones)",
    title: str = "Ice Cream Sales vs. Temperature",
) -> alt.LayerChart:
    pts = pd.DataFrame(payload.points, columns=["x", "y"]).assign(series=SCATTER_SERIES)
    line = pd.DataFrame(payload.endpoints, columns=["x", "y"]).assign(series=payload.label)

    color = alt.Color(
        "series:N",
        title=None,
        scale=alt.Scale(domain=[SCATTER_SERIES, payload.label], range=[SCATTER_COLOR, LINE_COLOR]),
        legend=alt.Legend(orient="top"),
    )

    scatter = alt.Chart(pts).mark_circle(size=120, opacity=0.8).encode(
        x=alt.X("x:Q", title=x_title, scale=alt.Scale(zero=False)),
        y=alt.Y("y:Q", title=y_title, scale=alt.Scale(zero=True)),
        color=color,
        tooltip=[
            alt.Tooltip("x:Q", title="Temp (°C)"),
            alt.Tooltip("y:Q", title="Sales (cones)"),
        ],
    )

    fit = alt.Chart(line).mark_line(strokeDash=[5, 5], strokeWidth=2).encode(
        x="x:Q",
        y="y:Q",
        color=color,
        tooltip=[alt.Tooltip("series:N", title="Model")],
    )

    return (scatter + fit).properties(title=title, height=400)


class ChartCanvas:
    """
    Drawing surface backed by a placeholder (`st.empty()`).

    The previous drawing is always destroyed before a new container is
    acquired, and again if drawing into it fails.
    """

    def __init__(self, slot: Any, **chart_kwargs: str):
        self._slot = slot
        self._surface = None
        self._chart_kwargs = chart_kwargs
        self.draw_count = 0
        self.last_payload = None

    @property
    def is_drawn(self) -> bool:
        return self._surface is not None

    def destroy(self) -> None:
        if self._surface is not None:
            self._slot.empty()
            self._surface = None

    @contextmanager
    def drawing_context(self) -> Iterator[Any]:
        self.destroy()
        self._surface = self._slot.container()
        try:
            yield self._surface
        except Exception:
            self.destroy()
            raise

    def redraw(self, payload: ChartPayload) -> None:
        chart = build_chart(payload, **self._chart_kwargs)
        with self.drawing_context() as surface:
            surface.altair_chart(chart, use_container_width=True)
        self.draw_count += 1
        self.last_payload = payload
