"""Tests for the geometry stage: canvas mapping of every chart family."""

import pytest

from vizassist.core.geometry import (
    BOTTOM,
    PADDING,
    PLOT_H,
    fmt,
    heat_color,
    layout_bars,
    layout_box,
    layout_chart,
    layout_density,
    layout_heatmap,
    layout_line,
    layout_ridgeline,
    layout_scatter,
    layout_violin,
    scale,
)
from vizassist.models.schemas import (
    BarData,
    BoxData,
    BoxGroup,
    DensityData,
    DensityGroup,
    FiveNumberSummary,
    HeatmapData,
    LineData,
    Point,
    RidgelineData,
    ScatterData,
    ViolinData,
)


def test_scale_linear():
    assert scale(5, 0, 10, 0, 100) == 50
    assert scale(0, 0, 10, 290, 60) == 290


def test_scale_degenerate_range_maps_to_midpoint():
    assert scale(5, 3, 3, 0, 100) == 50
    assert scale(3, 3, 3, 290, 60) == 175


def test_fmt_drops_trailing_zero():
    assert fmt(60.0) == "60"
    assert fmt(60.5) == "60.5"
    assert fmt(-3) == "-3"


def test_bars_fill_seventy_percent_of_slot():
    data = BarData(values=[1, 2, 4], labels=["a", "b", "c"], x_label="x", y_label="y")
    g = layout_bars(data)
    first, last = g.bars[0].rect, g.bars[2].rect
    assert (first.x, first.width) == pytest.approx((84, 112))
    assert (first.y, first.height) == pytest.approx((232.5, 57.5))
    assert (last.x, last.y, last.height) == pytest.approx((404, 60, 230))
    assert g.bars[0].value_label.text == "1"
    assert [t.text for t in g.tick_labels] == ["a", "b", "c"]


def test_bar_tick_labels_hidden_from_twelve_bars():
    twelve = BarData(values=[1] * 12, labels=[str(i) for i in range(12)], x_label="x", y_label="y")
    eleven = BarData(values=[1] * 11, labels=[str(i) for i in range(11)], x_label="x", y_label="y")
    assert layout_bars(twelve).tick_labels == []
    assert len(layout_bars(eleven).tick_labels) == 11


def test_bar_tick_labels_truncated():
    data = BarData(values=[1], labels=["Northwest"], x_label="x", y_label="y")
    assert layout_bars(data).tick_labels[0].text == "Northw"


def test_line_and_area_polylines():
    line = layout_line(LineData(values=[0, 10], labels=["a", "b"], x_label="x", y_label="y"))
    assert line.polyline == "60,290 540,60"
    assert line.area_polygon is None

    area = layout_line(LineData(values=[0, 10], labels=["a", "b"], x_label="x", y_label="y", is_area=True))
    assert area.area_polygon == "60,290 60,290 540,60 540,290"


def test_single_point_line_sits_at_center():
    g = layout_line(LineData(values=[7], labels=["a"], x_label="x", y_label="y"))
    assert g.polyline == "300,175"


def test_scatter_scales_each_axis():
    data = ScatterData(points=[Point(x=0, y=0), Point(x=10, y=5)], x_label="x", y_label="y")
    g = layout_scatter(data)
    assert [(c.cx, c.cy) for c in g.circles] == [(60, 290), (540, 60)]
    assert all(c.r == 5 for c in g.circles)


def test_box_shapes():
    stats = FiveNumberSummary(min=0, q1=1, median=2, q3=3, max=4)
    data = BoxData(groups=[BoxGroup(label="All", stats=stats)], y_range=(0, 4), x_label="", y_label="v")
    box = layout_box(data).boxes[0]
    assert box.center_x == 300
    assert (box.box.x, box.box.y, box.box.width, box.box.height) == (108, 117.5, 384, 115)
    assert (box.median.y1, box.median.x1, box.median.x2) == (175, 108, 492)
    assert (box.upper_whisker.y1, box.upper_whisker.y2) == (60, 117.5)
    assert (box.lower_whisker.y1, box.lower_whisker.y2) == (290, 232.5)


def test_violin_widths_share_one_max_density():
    data = ViolinData(
        groups=[
            DensityGroup(label="A", points=[Point(x=0, y=2)]),
            DensityGroup(label="B", points=[Point(x=1, y=1)]),
        ],
        y_range=(0, 1),
        x_label="",
        y_label="v",
    )
    g = layout_violin(data)
    assert g.max_density == 2
    assert g.violins[0].path == "M 180,290 L 288,290 L 180,60 L 72,290 Z"
    assert g.violins[1].path == "M 420,290 L 474,60 L 420,60 L 366,60 Z"


def test_ridgeline_layers_step_up_and_close_to_baseline():
    data = RidgelineData(
        groups=[
            DensityGroup(label="a", points=[Point(x=0, y=1), Point(x=10, y=0)]),
            DensityGroup(label="b", points=[Point(x=5, y=1)]),
        ],
        x_range=(0, 10),
        x_label="v",
    )
    g = layout_ridgeline(data)
    assert g.layer_height == pytest.approx(PLOT_H / 3)
    assert g.layers[0].baseline_y == BOTTOM
    assert g.layers[1].baseline_y == pytest.approx(BOTTOM - g.layer_height * 0.7)
    assert g.layers[0].polygon.startswith("60,290 60,")
    assert g.layers[0].polygon.endswith("540,290 540,290")


def test_density_curve_and_area():
    data = DensityData(
        points=[Point(x=0, y=0), Point(x=5, y=2), Point(x=10, y=1)],
        x_range=(0, 10),
        x_label="v",
    )
    g = layout_density(data)
    assert g.polyline == "60,290 300,60 540,175"
    assert g.area_polygon == "60,290 60,290 300,60 540,175 540,290"


def test_heat_color_sign_and_opacity():
    assert heat_color(1.0) == "rgba(99, 102, 241, 1)"
    assert heat_color(-0.5) == "rgba(244, 63, 94, 0.5)"
    assert heat_color(0) == "rgba(244, 63, 94, 0)"


def test_heatmap_cells():
    data = HeatmapData(labels=["a", "b"], matrix=[[1, -0.5], [-0.5, 1]])
    g = layout_heatmap(data)
    assert g.cell_size == 115
    assert len(g.cells) == 4
    off = next(c for c in g.cells if (c.row, c.col) == (0, 1))
    assert (off.rect.x, off.rect.y, off.rect.width) == (175, PADDING, 113)
    assert off.fill == "rgba(244, 63, 94, 0.5)"
    assert off.value_label.text == "-0.5"
    assert off.value_label.fill == "#475569"
    diag = next(c for c in g.cells if (c.row, c.col) == (1, 1))
    assert diag.value_label.fill == "white"


def test_layout_chart_dispatches_and_passes_none_through():
    data = BarData(values=[1], labels=["a"], x_label="x", y_label="y")
    assert layout_chart(data).kind == "bar"
    assert layout_chart(None) is None


def test_geometry_stays_on_canvas(sales_summary):
    """Every coordinate the bar and scatter layouts emit lies inside the canvas."""
    from vizassist.core.chart_data import chart_data_for

    bars = layout_chart(chart_data_for(sales_summary, "histogram"))
    for bar in bars.bars:
        assert 0 <= bar.rect.x <= 600 and 0 <= bar.rect.y <= 350
    scatter = layout_chart(chart_data_for(sales_summary, "scatter"))
    for c in scatter.circles:
        assert PADDING <= c.cx <= 540 and PADDING <= c.cy <= BOTTOM
