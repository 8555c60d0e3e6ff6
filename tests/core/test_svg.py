"""Tests for SVG rendering of chart geometry."""

from vizassist.core.chart_data import chart_data_for
from vizassist.core.geometry import layout_chart
from vizassist.models.schemas import BarData, ChartType
from vizassist.visualization.svg import render_placeholder, render_svg


def test_none_renders_placeholder():
    svg = render_svg(None)
    assert svg.startswith("<svg")
    assert "Insufficient Data" in svg
    assert svg == render_placeholder()


def test_bar_chart_has_one_rect_per_bar():
    data = BarData(values=[1, 2, 3], labels=["a", "b", "c"], x_label="x", y_label="y")
    svg = render_svg(layout_chart(data))
    assert svg.count("<rect") == 3
    assert 'viewBox="0 0 600 350"' in svg


def test_labels_are_escaped():
    data = BarData(values=[1], labels=["<b>"], x_label="a&b", y_label="y")
    svg = render_svg(layout_chart(data))
    assert "&lt;b&gt;" in svg
    assert "a&amp;b" in svg
    assert "<b>" not in svg


def test_heatmap_cells_use_correlation_colors(numeric_summary):
    svg = render_svg(layout_chart(chart_data_for(numeric_summary, ChartType.HEATMAP)))
    assert svg.count("<rect") == 9
    assert 'fill="rgba(99, 102, 241, 1)"' in svg


def test_every_family_renders(sales_summary):
    for chart_type in ChartType:
        svg = render_svg(layout_chart(chart_data_for(sales_summary, chart_type)))
        assert svg.rstrip().endswith("</svg>")
        assert "Insufficient Data" not in svg
