# utils/timeline.py
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import List, Optional, Tuple

import pandas as pd
import plotly.express as px

from models.gantt import GanttBar, GanttItem

TIMELINE_COLUMNS = ["id", "Item", "Start", "Finish", "Color", "Progress"]


def timeline_frame(items: Sequence[GanttItem]) -> pd.DataFrame:
    rows = [
        {
            "id": item.id,
            "Item": item.name,
            "Start": item.start_date,
            "Finish": item.end_date,
            "Color": item.color_hex,
            "Progress": float(item.progress),
        }
        for item in items
    ]
    if not rows:
        return pd.DataFrame(columns=TIMELINE_COLUMNS)
    df = pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
    df["Start"] = pd.to_datetime(df["Start"])
    df["Finish"] = pd.to_datetime(df["Finish"])
    return df


def timeline_range(items: Sequence[GanttItem]) -> Optional[Tuple[datetime, datetime]]:
    """Earliest start and latest end across ``items``; None when there are none."""
    if not items:
        return None
    return min(i.start_date for i in items), max(i.end_date for i in items)


def layout_gantt(items: Sequence[GanttItem], available_width: float) -> List[GanttBar]:
    """
    Map each item onto ``available_width`` pixels.

    Offsets and lengths are whole calendar days measured from the earliest
    start. Every bar is at least one day wide and the total span is at least
    one day, so single-day and single-item timelines stay finite.
    """
    df = timeline_frame(items)
    if df.empty:
        return []

    starts = df["Start"].dt.normalize()
    finishes = df["Finish"].dt.normalize()
    global_start = starts.min()
    global_end = finishes.max()

    total_days = max((global_end - global_start).days, 1)
    unit = float(available_width) / total_days

    offset_days = (starts - global_start).dt.days.clip(lower=0)
    length_days = (finishes - starts).dt.days.clip(lower=1)

    df["x"] = offset_days * unit
    df["width"] = length_days * unit
    df["progress_width"] = df["width"] * df["Progress"]

    return [
        GanttBar(
            id=row.id,
            name=row.Item,
            x=float(row.x),
            width=float(row.width),
            progress_width=float(row.progress_width),
            color_hex=row.Color,
        )
        for row in df.itertuples(index=False)
    ]


def gantt_figure(items: Sequence[GanttItem]):
    df = timeline_frame(items)
    if df.empty:
        return None
    df["Percent"] = (df["Progress"] * 100).round().astype(int)
    fig = px.timeline(
        df,
        x_start="Start",
        x_end="Finish",
        y="Item",
        color="Item",
        color_discrete_map=dict(zip(df["Item"], df["Color"])),
        hover_data=["Percent"],
    )
    fig.update_yaxes(autorange="reversed")
    fig.update_layout(showlegend=False)
    return fig
