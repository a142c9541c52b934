# models/gantt.py
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class GanttItem:
    """Timeline row for one project. Derived from the stores, never persisted."""

    id: UUID
    name: str
    start_date: datetime
    end_date: datetime
    color_hex: str
    progress: float


@dataclass(frozen=True, slots=True)
class GanttBar:
    """Horizontal geometry of one GanttItem inside a fixed pixel width."""

    id: UUID
    name: str
    x: float
    width: float
    progress_width: float
    color_hex: str
