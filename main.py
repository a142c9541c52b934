# main.py

#============================================================#
#                          TaskPilot                         #
#============================================================#
# Author      : Aktham Almomani                              #
# Created     : 2025-10-15                                   #
# Version     : V1.0.0                                       #
#------------------------------------------------------------#
# Purpose     : Headless dashboard: project progress, Gantt  #
#               timeline and overdue tasks from local data   #
#============================================================#

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from app import AppContext, build_context
from config import load_settings
from logging_setup import setup_logging
from models.task import STATUS_ORDER
from utils.timeline import gantt_figure

logger = logging.getLogger(__name__)

BAR_WIDTH = 40


def render_dashboard(ctx: AppContext, width: int = BAR_WIDTH) -> str:
    lines: list[str] = []
    user = ctx.profile_view.current_user
    lines.append(f"{ctx.settings.app_name} - {user.full_name} ({user.initials})")
    lines.append("")

    pv = ctx.project_view
    if not pv.projects:
        lines.append("No projects yet.")
    else:
        lines.append("Timeline")
        for item, bar in zip(pv.gantt_items, pv.gantt_bars(width)):
            start = int(round(bar.x))
            length = max(int(round(bar.width)), 1)
            done = int(round(bar.progress_width))
            track = " " * start + "#" * done + "-" * (length - done)
            lines.append(f"  {item.name[:20]:<20} |{track:<{width}}| {int(item.progress * 100):>3}%")

    lines.append("")
    groups = ctx.task_view.tasks_grouped_by_status
    counts = ", ".join(f"{s.label}: {len(groups.get(s, []))}" for s in STATUS_ORDER)
    lines.append(f"Tasks  {counts}")

    overdue = ctx.task_view.overdue_tasks
    if overdue:
        lines.append("Overdue")
        for t in overdue:
            lines.append(f"  ! {t.title} (due {t.due_date:%Y-%m-%d}, {t.status.label})")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="TaskPilot dashboard")
    ap.add_argument("--data-dir", type=Path, default=None)
    ap.add_argument("--gantt-html", type=Path, default=None, help="write the Gantt chart to this HTML file")
    args = ap.parse_args(argv)

    settings = load_settings(args.data_dir)
    setup_logging(log_dir=settings.log_dir, console_level=settings.log_level)

    ctx = build_context(settings)
    try:
        print(render_dashboard(ctx))
        if args.gantt_html is not None:
            fig = gantt_figure(ctx.project_view.gantt_items)
            if fig is None:
                logger.info("No projects to chart; %s not written", args.gantt_html)
            else:
                fig.write_html(str(args.gantt_html))
                logger.info("Gantt chart written to %s", args.gantt_html)
    finally:
        ctx.close()


if __name__ == "__main__":
    main()
