"""
chart_data.py - Chart Engine, Aggregation Stage

Turns the sampled rows of a DatasetSummary into the aggregate each chart
family needs (bins, group sums, five-number summaries, density curves,
a correlation matrix).

Column selection is positional: the first numeric column(s) and the first
categorical column, in header order. When a chart needs a column kind the
dataset does not have, its builder returns None ("insufficient data");
that is a normal outcome, not an error.
"""

import numbers
from typing import Callable, Optional

import pandas as pd

from .errors import UnknownChartTypeError
from .geometry import fmt
from .stats import (
    RIDGELINE_BINS,
    VIOLIN_BINS,
    five_number_summary,
    histogram_bins,
    pearson,
    pseudo_density,
)
from ..models.schemas import (
    BarData,
    BoxData,
    BoxGroup,
    ChartData,
    ChartType,
    ColumnProfile,
    DatasetSummary,
    DensityData,
    DensityGroup,
    HeatmapData,
    LineData,
    Point,
    RidgelineData,
    ScatterData,
    ViolinData,
)

MAX_BAR_GROUPS = 8
MAX_LINE_POINTS = 50
MAX_SCATTER_POINTS = 100
MAX_DISTRIBUTION_GROUPS = 5
MAX_HEATMAP_COLUMNS = 6


# ──────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────

def _is_number(v) -> bool:
    return isinstance(v, numbers.Real) and not isinstance(v, bool)


def _is_set(v) -> bool:
    """Non-empty text or a non-zero number."""
    if _is_number(v):
        return v != 0 and not pd.isna(v)
    return bool(v)


def _numeric(series: pd.Series) -> pd.Series:
    """Cells the profiler stored as numbers; everything else becomes NaN."""
    return series.where(series.map(_is_number)).astype(float)


def _numeric_values(df: pd.DataFrame, col: str) -> list[float]:
    return _numeric(df[col]).dropna().tolist()


def _label(v) -> str:
    """Text for a category key or axis label; 2.0 and 2 both read "2"."""
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return ""
    if _is_number(v):
        return fmt(v)
    return str(v)


def rows_to_frame(rows: list[dict], columns: list[ColumnProfile]) -> pd.DataFrame:
    """Sampled records as a DataFrame with one column per header."""
    names = list(dict.fromkeys(c.name for c in columns))
    return pd.DataFrame.from_records(rows, columns=names)


def _grouped_values(df: pd.DataFrame, num_col: str, cat_col: Optional[str], default_key: str) -> dict[str, list[float]]:
    """Numeric values per category, first-seen order, capped at 5 groups."""
    values = _numeric(df[num_col])
    if cat_col is not None:
        keys = df[cat_col].map(_label)
    else:
        keys = pd.Series(default_key, index=df.index)

    frame = pd.DataFrame({"key": keys, "value": values}).dropna(subset=["value"])
    groups = {}
    for key, group in frame.groupby("key", sort=False):
        groups[key] = group["value"].tolist()
        if len(groups) == MAX_DISTRIBUTION_GROUPS:
            break
    return groups


# ──────────────────────────────────────────────────────────────────
# Per-family Builders
# ──────────────────────────────────────────────────────────────────

def build_histogram(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[BarData]:
    """15 fixed-width bins over the first numeric column."""
    if not numeric_cols:
        return None
    col = numeric_cols[0]
    vals = _numeric_values(df, col)
    if not vals:
        return None
    counts, lo, width = histogram_bins(vals)
    return BarData(
        values=counts,
        labels=[f"{lo + i * width:.1f}" for i in range(len(counts))],
        x_label=col,
        y_label="Count",
    )


def build_density(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[DensityData]:
    if not numeric_cols:
        return None
    col = numeric_cols[0]
    vals = _numeric_values(df, col)
    if not vals:
        return None
    return DensityData(
        points=pseudo_density(vals),
        x_range=(min(vals), max(vals)),
        x_label=col,
    )


def build_category_bars(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[BarData]:
    """Sum of the first numeric column per category, first 8 categories seen."""
    if not cat_cols or not numeric_cols:
        return None
    cat, num = cat_cols[0], numeric_cols[0]
    keys = df[cat].map(_label)
    amounts = _numeric(df[num]).fillna(0)
    sums = amounts.groupby(keys, sort=False).sum().head(MAX_BAR_GROUPS)
    return BarData(
        values=[float(v) for v in sums.tolist()],
        labels=[str(k) for k in sums.index.tolist()],
        x_label=cat,
        y_label=num,
    )


def _build_series(df: pd.DataFrame, numeric_cols: list, is_area: bool) -> Optional[LineData]:
    if not numeric_cols:
        return None
    head = df.head(MAX_LINE_POINTS)
    y_col = numeric_cols[0]
    if len(numeric_cols) > 1:
        x_col = numeric_cols[1]
    elif "date" in df.columns and len(df) > 0 and _is_set(df["date"].iloc[0]):
        x_col = "date"
    else:
        x_col = None

    values = _numeric(head[y_col]).fillna(0).tolist()
    if x_col is None:
        labels = [str(i) for i in range(len(head))]
    else:
        labels = [_label(v) for v in head[x_col].tolist()]

    return LineData(
        values=values,
        labels=labels,
        x_label=x_col or "Index",
        y_label=y_col,
        is_area=is_area,
    )


def build_line(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[LineData]:
    return _build_series(df, numeric_cols, is_area=False)


def build_area(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[LineData]:
    return _build_series(df, numeric_cols, is_area=True)


def build_scatter(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[ScatterData]:
    """First two numeric columns paired row by row, first 100 rows."""
    if len(numeric_cols) < 2:
        return None
    x_col, y_col = numeric_cols[0], numeric_cols[1]
    head = df.head(MAX_SCATTER_POINTS)
    pairs = pd.DataFrame({"x": _numeric(head[x_col]), "y": _numeric(head[y_col])}).dropna()
    return ScatterData(
        points=[Point(x=x, y=y) for x, y in zip(pairs["x"].tolist(), pairs["y"].tolist())],
        x_label=x_col,
        y_label=y_col,
    )


def build_box(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[BoxData]:
    if not numeric_cols:
        return None
    num_col = numeric_cols[0]
    cat_col = cat_cols[0] if cat_cols else None
    groups = _grouped_values(df, num_col, cat_col, default_key="All")
    if not groups:
        return None

    boxes = [BoxGroup(label=k, stats=five_number_summary(v)) for k, v in groups.items()]
    return BoxData(
        groups=boxes,
        y_range=(min(b.stats.min for b in boxes), max(b.stats.max for b in boxes)),
        x_label=cat_col or "",
        y_label=num_col,
    )


def build_violin(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[ViolinData]:
    if not numeric_cols:
        return None
    num_col = numeric_cols[0]
    cat_col = cat_cols[0] if cat_cols else None
    groups = _grouped_values(df, num_col, cat_col, default_key="All")
    if not groups:
        return None

    all_vals = [v for vals in groups.values() for v in vals]
    return ViolinData(
        groups=[DensityGroup(label=k, points=pseudo_density(v, VIOLIN_BINS)) for k, v in groups.items()],
        y_range=(min(all_vals), max(all_vals)),
        x_label=cat_col or "",
        y_label=num_col,
    )


def build_ridgeline(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[RidgelineData]:
    if not numeric_cols:
        return None
    num_col = numeric_cols[0]
    cat_col = cat_cols[0] if cat_cols else None
    groups = _grouped_values(df, num_col, cat_col, default_key="Group 1")
    if not groups:
        return None

    all_vals = [v for vals in groups.values() for v in vals]
    return RidgelineData(
        groups=[DensityGroup(label=k, points=pseudo_density(v, RIDGELINE_BINS)) for k, v in groups.items()],
        x_range=(min(all_vals), max(all_vals)),
        x_label=num_col,
    )


def build_heatmap(df: pd.DataFrame, numeric_cols: list, cat_cols: list) -> Optional[HeatmapData]:
    """Full Pearson matrix over the first 6 numeric columns."""
    if len(numeric_cols) < 2:
        return None
    cols = numeric_cols[:MAX_HEATMAP_COLUMNS]
    series = {c: _numeric_values(df, c) for c in cols}
    matrix = [[pearson(series[a], series[b]) for b in cols] for a in cols]
    return HeatmapData(labels=cols, matrix=matrix)


# ──────────────────────────────────────────────────────────────────
# Dispatcher
# ──────────────────────────────────────────────────────────────────

_BUILDERS: dict[ChartType, Callable] = {
    ChartType.HISTOGRAM: build_histogram,
    ChartType.DENSITY: build_density,
    ChartType.BAR: build_category_bars,
    ChartType.LINE: build_line,
    ChartType.AREA: build_area,
    ChartType.SCATTER: build_scatter,
    ChartType.BOX: build_box,
    ChartType.VIOLIN: build_violin,
    ChartType.RIDGELINE: build_ridgeline,
    ChartType.HEATMAP: build_heatmap,
}


def parse_chart_type(chart_type: ChartType | str) -> ChartType:
    try:
        return ChartType(chart_type)
    except ValueError:
        raise UnknownChartTypeError(str(chart_type)) from None


def build_chart_data(
    chart_type: ChartType | str,
    rows: list[dict],
    columns: list[ColumnProfile],
) -> Optional[ChartData]:
    """
    Compute the aggregate for one chart type.

    Returns None when the dataset lacks the column kinds the chart needs.

    Raises:
        UnknownChartTypeError: `chart_type` is not a supported selector.
    """
    kind = parse_chart_type(chart_type)
    df = rows_to_frame(rows, columns)
    numeric_cols = [c.name for c in columns if c.type == "numeric"]
    cat_cols = [c.name for c in columns if c.type == "categorical"]
    return _BUILDERS[kind](df, numeric_cols, cat_cols)


def chart_data_for(summary: DatasetSummary, chart_type: ChartType | str) -> Optional[ChartData]:
    return build_chart_data(chart_type, summary.rows, summary.columns)
