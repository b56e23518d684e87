"""Matplotlib charts for the statistics screen."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from ..logging_config import get_logger
from .formatting import format_currency, format_currency_short
from .stats import CategoryExpense, ExpenseTimePoint, HabitDayData

logger = get_logger(__name__)

ACCENT = "#2563EB"
MUTED = "#666"


def _placeholder(ax, message: str) -> None:
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=14, color=MUTED)
    ax.axis("off")


def build_category_chart(
    breakdown: Sequence[CategoryExpense], *, title: str = "Gastos por categoría"
) -> Figure:
    """Donut chart of spending per category with the period total in the centre."""

    fig, ax = plt.subplots(figsize=(8, 6))
    if not breakdown:
        _placeholder(ax, "Sin gastos en este periodo")
        return fig

    sizes = [item.amount for item in breakdown]
    total = sum(sizes)
    cmap = plt.get_cmap("tab20c")
    colors = [cmap(i / max(len(sizes), 1)) for i in range(len(sizes))]

    wedges, _texts, autotexts = ax.pie(
        sizes,
        labels=None,
        autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
        wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
        startangle=90,
        colors=colors,
        pctdistance=0.78,
    )
    for autotext in autotexts:
        autotext.set_fontsize(9)
        autotext.set_fontweight("bold")
        autotext.set_color("white")

    ax.text(0, 0.08, "Total", ha="center", va="center", fontsize=11, color=MUTED)
    ax.text(
        0, -0.08, format_currency(total),
        ha="center", va="center", fontsize=18, fontweight="bold", color="#1F2937",
    )
    ax.legend(
        wedges,
        [f"{item.category}: {format_currency(item.amount)} ({item.percentage:.1f}%)" for item in breakdown],
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        fontsize=9,
        framealpha=0.9,
    )
    ax.axis("equal")
    ax.set_title(title, fontsize=16, fontweight="bold", pad=20)
    fig.tight_layout()
    return fig


def build_habits_per_day_chart(
    days: Sequence[HabitDayData], *, title: str = "Hábitos completados"
) -> Figure:
    """Bar chart of completed habits over the last seven days."""

    fig, ax = plt.subplots(figsize=(8, 4))
    if not days:
        _placeholder(ax, "Sin datos de hábitos")
        return fig

    labels = [day.day_label for day in days]
    counts = [day.count for day in days]
    bars = ax.bar(labels, counts, color=ACCENT, alpha=0.85)
    for bar, count in zip(bars, counts):
        if count:
            ax.text(
                bar.get_x() + bar.get_width() / 2, bar.get_height(), str(count),
                ha="center", va="bottom", fontsize=9,
            )
    ax.yaxis.set_major_locator(mticker.MaxNLocator(integer=True))
    ax.set_ylim(bottom=0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.set_title(title, fontsize=14, fontweight="bold")
    fig.tight_layout()
    return fig


def build_expenses_over_time_chart(
    points: Sequence[ExpenseTimePoint], *, title: str = "Evolución de gastos"
) -> Figure:
    """Line chart of bucketed spending with compact currency ticks."""

    fig, ax = plt.subplots(figsize=(9, 4))
    if not points:
        _placeholder(ax, "Sin gastos en este periodo")
        return fig

    labels = [point.period_label for point in points]
    amounts = [point.amount for point in points]
    positions = range(len(points))
    ax.plot(positions, amounts, marker="o", color=ACCENT, linewidth=2)
    ax.fill_between(positions, amounts, color=ACCENT, alpha=0.1)
    ax.set_xticks(list(positions))
    ax.set_xticklabels(labels)
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda value, _pos: format_currency_short(value)))
    ax.set_ylim(bottom=0)
    ax.grid(axis="y", alpha=0.3)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.set_title(title, fontsize=14, fontweight="bold")
    fig.tight_layout()
    return fig


def export_chart_png(figure: Figure, output_path: Path) -> Path:
    """Render ``figure`` to PNG, close it and return the path."""

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        figure.savefig(output_path, bbox_inches="tight", dpi=120)
    finally:
        plt.close(figure)
    logger.info("Chart written", extra={"path": str(output_path)})
    return output_path


__all__ = [
    "build_category_chart",
    "build_expenses_over_time_chart",
    "build_habits_per_day_chart",
    "export_chart_png",
]
