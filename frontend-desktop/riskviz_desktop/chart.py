"""Matplotlib drawing for the metric score chart (no Qt needed here)."""
from __future__ import annotations

from typing import Sequence

from matplotlib.axes import Axes

from .aggregation import ChartPoint

X_DOMAIN = (0, 4)
Y_DOMAIN = (0, 9)

MARKER_FILL = "#4CAF50"
MARKER_EDGE = "#FF5733"


def chart_title(hotspot: str, title: str) -> str:
    return f"{hotspot} - {title}"


def tooltip_text(point: ChartPoint) -> str:
    return f"{point.metric}\nScore: {point.score}\n{point.risk_level}"


def draw_metric_scores(ax: Axes, points: Sequence[ChartPoint], title: str) -> None:
    """
    Draw one square marker per metric, labelled with its mean score.

    The axes always span x 0..4 and y 0..9 whatever the data is.
    """
    ax.clear()
    ax.set_title(title)
    ax.grid(True, color="#cccccc")

    if points:
        xs = [p.metric_index for p in points]
        ys = [p.score for p in points]
        ax.plot(
            xs,
            ys,
            linestyle="none",
            marker="s",
            markersize=10,
            markerfacecolor=MARKER_FILL,
            markeredgecolor=MARKER_EDGE,
            markeredgewidth=2,
        )
        for p in points:
            ax.annotate(
                f"{p.score}",
                (p.metric_index, p.score),
                textcoords="offset points",
                xytext=(0, 10),
                ha="center",
                fontsize=9,
            )

    ax.set_xlim(*X_DOMAIN)
    ax.set_ylim(*Y_DOMAIN)
    ax.set_xticks(range(X_DOMAIN[0], X_DOMAIN[1] + 1))
    ax.set_yticks(range(Y_DOMAIN[0], Y_DOMAIN[1] + 1))
    ax.set_xlabel("Metric")
    ax.set_ylabel("Mean RP score")


def point_at(points: Sequence[ChartPoint], x: float | None, y: float | None, tolerance: float = 0.25) -> ChartPoint | None:
    """The point closest to data coordinates (x, y), if one is within ``tolerance``."""
    if x is None or y is None:
        return None
    best = None
    best_distance = tolerance
    for p in points:
        distance = max(abs(p.metric_index - x), abs(p.score - y) / 2)
        if distance <= best_distance:
            best, best_distance = p, distance
    return best
