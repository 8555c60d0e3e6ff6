"""Tests for the aggregation stage of the chart engine."""

import pytest

from vizassist.core.chart_data import build_chart_data, chart_data_for
from vizassist.core.errors import UnknownChartTypeError
from vizassist.core.profiler import profile
from vizassist.models.schemas import ChartType


def _summary(text: str):
    return profile(text.encode())


def test_histogram_bins_first_numeric_column(sales_summary):
    data = chart_data_for(sales_summary, ChartType.HISTOGRAM)
    assert data.kind == "bar"
    assert len(data.values) == 15
    assert sum(data.values) == 6
    assert data.labels[0] == "10.0"
    assert data.x_label == "sales"
    assert data.y_label == "Count"


def test_histogram_counts_only_numeric_cells():
    """Missing and non-numeric cells after the inference rows are not counted."""
    summary = _summary("v,c\n1,a\n2,b\n3,c\n4,d\n5,e\n,f\nx,g\n7,h\n")
    data = chart_data_for(summary, "histogram")
    assert sum(data.values) == 6


def test_density_has_thirty_points(sales_summary):
    data = chart_data_for(sales_summary, "density")
    assert data.kind == "density"
    assert len(data.points) == 30
    assert data.x_range == (10, 60)


def test_bar_sums_per_category_in_first_seen_order(sales_summary):
    data = chart_data_for(sales_summary, ChartType.BAR)
    assert data.labels == ["North", "South", "East", "West"]
    assert data.values == [40, 80, 40, 50]
    assert data.x_label == "region"
    assert data.y_label == "sales"


def test_bar_keeps_first_eight_categories():
    lines = ["cat,val"] + [f"c{i},{i}" for i in range(10)]
    data = chart_data_for(_summary("\n".join(lines) + "\n"), "bar")
    assert data.labels == [f"c{i}" for i in range(8)]


def test_bar_without_categorical_column_is_insufficient(numeric_summary):
    assert chart_data_for(numeric_summary, "bar") is None


def test_line_uses_second_numeric_column_for_x(sales_summary):
    data = chart_data_for(sales_summary, ChartType.LINE)
    assert data.kind == "line"
    assert data.is_area is False
    assert data.values == [10, 20, 30, 40, 50, 60]
    assert data.labels == ["2", "5", "4", "8", "10", "11"]
    assert data.x_label == "profit"


def test_line_falls_back_to_date_column():
    data = chart_data_for(_summary("date,value\n2024-01,1\n2024-02,3\n"), "line")
    assert data.x_label == "date"
    assert data.labels == ["2024-01", "2024-02"]


def test_line_falls_back_to_row_index():
    data = chart_data_for(_summary("value,name\n1,a\n2,b\n"), "line")
    assert data.x_label == "Index"
    assert data.labels == ["0", "1"]


def test_line_non_numeric_values_become_zero():
    data = chart_data_for(_summary("v\n1\n2\n3\n4\n5\nabc\n"), "line")
    assert data.values == [1, 2, 3, 4, 5, 0]


def test_line_limited_to_fifty_rows():
    lines = ["v"] + [str(i) for i in range(80)]
    data = chart_data_for(_summary("\n".join(lines) + "\n"), "line")
    assert len(data.values) == 50


def test_area_is_flagged(sales_summary):
    data = chart_data_for(sales_summary, ChartType.AREA)
    assert data.kind == "line"
    assert data.is_area is True


def test_scatter_pairs_first_two_numeric_columns(sales_summary):
    data = chart_data_for(sales_summary, ChartType.SCATTER)
    assert [(p.x, p.y) for p in data.points][:2] == [(10, 2), (20, 5)]
    assert (data.x_label, data.y_label) == ("sales", "profit")


def test_scatter_needs_two_numeric_columns():
    assert chart_data_for(_summary("a,b\n1,x\n2,y\n"), "scatter") is None


def test_box_groups_by_first_categorical_column(sales_summary):
    data = chart_data_for(sales_summary, ChartType.BOX)
    assert [g.label for g in data.groups] == ["North", "South", "East", "West"]
    north = data.groups[0].stats
    assert (north.min, north.q1, north.median, north.q3, north.max) == (10, 10, 30, 30, 30)
    assert data.y_range == (10, 60)


def test_box_without_categories_uses_single_group(numeric_summary):
    data = chart_data_for(numeric_summary, "box")
    assert [g.label for g in data.groups] == ["All"]


def test_box_caps_groups_at_five():
    lines = ["cat,val"] + [f"g{i},{i}" for i in range(7)]
    data = chart_data_for(_summary("\n".join(lines) + "\n"), "box")
    assert len(data.groups) == 5


def test_violin_groups_have_twenty_points(sales_summary):
    data = chart_data_for(sales_summary, ChartType.VIOLIN)
    assert data.kind == "violin"
    assert all(len(g.points) == 20 for g in data.groups)
    assert data.y_range == (10, 60)


def test_ridgeline_default_group_and_forty_points(numeric_summary):
    data = chart_data_for(numeric_summary, "ridgeline")
    assert [g.label for g in data.groups] == ["Group 1"]
    assert len(data.groups[0].points) == 40


def test_heatmap_matrix_is_symmetric_with_unit_diagonal(numeric_summary):
    data = chart_data_for(numeric_summary, ChartType.HEATMAP)
    assert data.labels == ["x", "y", "z"]
    n = data.size
    for i in range(n):
        assert data.matrix[i][i] == pytest.approx(1.0)
        for j in range(n):
            assert data.matrix[i][j] == data.matrix[j][i]
            assert -1.0 <= data.matrix[i][j] <= 1.0 + 1e-9
    assert data.matrix[0][1] == 1.0


def test_heatmap_limited_to_six_columns():
    header = ",".join(f"c{i}" for i in range(8))
    rows = [",".join(str(i * j + j) for j in range(8)) for i in range(4)]
    data = chart_data_for(_summary("\n".join([header] + rows) + "\n"), "heatmap")
    assert data.size == 6


def test_heatmap_needs_two_numeric_columns():
    assert chart_data_for(_summary("a,b\n1,x\n2,y\n"), "heatmap") is None


@pytest.mark.parametrize("chart_type", list(ChartType))
def test_every_family_accepts_a_mixed_dataset(sales_summary, chart_type):
    """The mixed sample has both column kinds, so no family is insufficient."""
    assert chart_data_for(sales_summary, chart_type) is not None


def test_unknown_chart_type_raises(sales_summary):
    with pytest.raises(UnknownChartTypeError):
        build_chart_data("pie", sales_summary.rows, sales_summary.columns)


def test_numeric_looking_categories_share_a_label():
    """A category cell "2.0" and a cell "2" are the same key, labelled "2"."""
    data = chart_data_for(_summary("cat,val\na,1\n2.0,2\n2,3\n"), "bar")
    assert data.labels == ["a", "2"]
    assert data.values == [1, 5]


def test_columns_chosen_by_profiled_type_in_header_order():
    summary = _summary("name,b,region,a\nx,1,n,10\ny,2,s,20\n")
    scatter = chart_data_for(summary, "scatter")
    assert (scatter.x_label, scatter.y_label) == ("b", "a")
    bars = chart_data_for(summary, "bar")
    assert (bars.x_label, bars.y_label) == ("name", "b")
