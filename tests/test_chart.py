from matplotlib.figure import Figure

from riskviz_desktop.aggregation import ChartPoint
from riskviz_desktop.chart import chart_title, draw_metric_scores, point_at, tooltip_text

POINTS = [ChartPoint(1, "Trafficking", 6.0), ChartPoint(2, "Extortion", 2.5)]


def test_axes_use_fixed_domain():
    ax = Figure().add_subplot(111)
    draw_metric_scores(ax, POINTS, chart_title("HS1", "CRIMINAL NETWORKS"))

    assert ax.get_xlim() == (0, 4)
    assert ax.get_ylim() == (0, 9)
    assert list(ax.get_yticks()) == list(range(10))
    assert ax.get_title() == "HS1 - CRIMINAL NETWORKS"
    assert [t.get_text() for t in ax.texts] == ["6.0", "2.5"]


def test_empty_chart_still_has_domain():
    ax = Figure().add_subplot(111)
    draw_metric_scores(ax, [], "HS1 - X")

    assert ax.get_xlim() == (0, 4)
    assert len(ax.lines) == 0


def test_tooltip_mentions_band():
    assert tooltip_text(POINTS[0]) == "Trafficking\nScore: 6.0\nHigh Risk"
    assert tooltip_text(POINTS[1]).endswith("Low Risk")


def test_point_at():
    assert point_at(POINTS, 1.1, 6.2) is POINTS[0]
    assert point_at(POINTS, 3.0, 6.0) is None
    assert point_at(POINTS, None, None) is None
