"""
geometry.py - Chart Engine, Geometry Stage

Maps chart aggregates into drawing primitives inside a fixed logical
canvas (600 x 350, 60px padding on every side, so the plot area is
480 x 230). Every family goes through the same linear `scale()`.

Point lists are emitted as SVG-style strings ("x,y x,y ...") with
numbers formatted the way a browser prints them (60, not 60.0), so the
output can be dropped straight into a polyline/polygon/path.
"""

from typing import Callable, Optional

from ..models.schemas import (
    Bar,
    BarData,
    BarGeometry,
    BoxData,
    BoxGeometry,
    BoxShape,
    ChartData,
    ChartGeometry,
    Circle,
    DensityData,
    DensityGeometry,
    HeatmapCell,
    HeatmapData,
    HeatmapGeometry,
    LineData,
    LineGeometry,
    Rect,
    RidgeLayer,
    RidgelineData,
    RidgelineGeometry,
    ScatterData,
    ScatterGeometry,
    Segment,
    TextLabel,
    ViolinData,
    ViolinGeometry,
    ViolinShape,
)

WIDTH = 600
HEIGHT = 350
PADDING = 60
PLOT_W = WIDTH - PADDING * 2
PLOT_H = HEIGHT - PADDING * 2

BOTTOM = HEIGHT - PADDING
RIGHT = WIDTH - PADDING

MAX_TICK_LABELS = 12
GRID_LINES = 5

POSITIVE_RGB = "99, 102, 241"    # indigo
NEGATIVE_RGB = "244, 63, 94"     # rose

_TITLE = dict(font_size=12, bold=True, fill="#475569")
_RANGE = dict(fill="#94a3b8")


# ──────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────

def scale(v: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """
    Linear map of `v` from [in_min, in_max] onto [out_min, out_max].

    A degenerate input range maps everything to the middle of the output.
    """
    if in_max == in_min:
        return (out_min + out_max) / 2
    return out_min + ((v - in_min) / (in_max - in_min)) * (out_max - out_min)


def fmt(v: float) -> str:
    """Shortest round-trip text for a coordinate, without a trailing .0."""
    if float(v).is_integer():
        return str(int(v))
    return repr(float(v))


def _pair(x: float, y: float) -> str:
    return f"{fmt(x)},{fmt(y)}"


def _fixed1(v: float) -> str:
    return f"{v:.1f}"


def _axes() -> list[Segment]:
    return [
        Segment(x1=PADDING, y1=PADDING, x2=PADDING, y2=BOTTOM),
        Segment(x1=PADDING, y1=BOTTOM, x2=RIGHT, y2=BOTTOM),
    ]


def _grid(count: int = GRID_LINES) -> list[Segment]:
    lines = []
    for i in range(count):
        y = PADDING + (i / (count - 1)) * PLOT_H
        lines.append(Segment(x1=PADDING, y1=y, x2=RIGHT, y2=y))
    return lines


def _x_title(text: str) -> TextLabel:
    return TextLabel(x=WIDTH / 2, y=HEIGHT - 15, text=text, **_TITLE)


def _y_title(text: str) -> TextLabel:
    return TextLabel(x=15, y=HEIGHT / 2, text=text, rotate=-90, **_TITLE)


def _y_range_labels(lo: float, hi: float) -> list[TextLabel]:
    return [
        TextLabel(x=PADDING - 10, y=PADDING, text=_fixed1(hi), anchor="end", **_RANGE),
        TextLabel(x=PADDING - 10, y=BOTTOM, text=_fixed1(lo), anchor="end", **_RANGE),
    ]


def _baseline_polygon(points: str, baseline: float) -> str:
    return f"{_pair(PADDING, baseline)} {points} {_pair(RIGHT, baseline)}"


# ──────────────────────────────────────────────────────────────────
# Per-family Layouts
# ──────────────────────────────────────────────────────────────────

def layout_bars(data: BarData) -> BarGeometry:
    """Bars fill 70% of each slot; tick labels only when fewer than 12 bars."""
    n = len(data.values)
    max_val = max(data.values) if data.values else 0
    slot = PLOT_W / n if n else PLOT_W
    bar_w = slot * 0.7
    gap = slot * 0.3

    bars = []
    ticks = []
    for i, v in enumerate(data.values):
        bar_h = scale(v, 0, max_val, 0, PLOT_H)
        x = PADDING + gap / 2 + i * (bar_w + gap)
        y = BOTTOM - bar_h
        bars.append(Bar(
            rect=Rect(x=x, y=y, width=bar_w, height=bar_h),
            value=v,
            value_label=TextLabel(x=x + bar_w / 2, y=y - 5, text=fmt(v)),
        ))
        if n < MAX_TICK_LABELS:
            ticks.append(TextLabel(x=x + bar_w / 2, y=BOTTOM + 15, text=data.labels[i][:6]))

    return BarGeometry(
        axes=_axes(),
        grid=_grid(),
        labels=[_x_title(data.x_label), _y_title(data.y_label)],
        bars=bars,
        tick_labels=ticks,
        data=data,
    )


def _series_points(values: list[float]) -> str:
    lo, hi = min(values), max(values)
    last = len(values) - 1
    return " ".join(
        _pair(scale(i, 0, last, PADDING, RIGHT), scale(v, lo, hi, BOTTOM, PADDING))
        for i, v in enumerate(values)
    )


def layout_line(data: LineData) -> LineGeometry:
    """Polyline through the series; the area variant closes it to the baseline."""
    points = _series_points(data.values) if data.values else ""
    lo = min(data.values) if data.values else 0
    hi = max(data.values) if data.values else 0
    return LineGeometry(
        axes=_axes(),
        grid=_grid(),
        labels=_y_range_labels(lo, hi) + [_x_title(data.x_label), _y_title(data.y_label)],
        polyline=points,
        area_polygon=_baseline_polygon(points, BOTTOM) if data.is_area else None,
        data=data,
    )


def layout_scatter(data: ScatterData) -> ScatterGeometry:
    """Each axis scaled independently from its observed min/max."""
    xs = [p.x for p in data.points]
    ys = [p.y for p in data.points]
    x_min, x_max = (min(xs), max(xs)) if xs else (0, 0)
    y_min, y_max = (min(ys), max(ys)) if ys else (0, 0)

    circles = [
        Circle(
            cx=scale(p.x, x_min, x_max, PADDING, RIGHT),
            cy=scale(p.y, y_min, y_max, BOTTOM, PADDING),
        )
        for p in data.points
    ]
    labels = [
        TextLabel(x=RIGHT, y=HEIGHT - 15, text=_fixed1(x_max), anchor="end", **_RANGE),
        TextLabel(x=PADDING, y=HEIGHT - 15, text=_fixed1(x_min), anchor="start", **_RANGE),
        TextLabel(x=PADDING - 10, y=PADDING, text=_fixed1(y_max), anchor="end", **_RANGE),
        _x_title(data.x_label),
        _y_title(data.y_label),
    ]
    return ScatterGeometry(axes=_axes(), grid=_grid(), labels=labels, circles=circles, data=data)


def layout_box(data: BoxData) -> BoxGeometry:
    lo, hi = data.y_range
    box_w = PLOT_W / len(data.groups)

    def y(v: float) -> float:
        return scale(v, lo, hi, BOTTOM, PADDING)

    boxes = []
    for i, group in enumerate(data.groups):
        s = group.stats
        cx = PADDING + i * box_w + box_w / 2
        w = box_w * 0.4
        y_max, y_min, y_q3, y_q1, y_med = y(s.max), y(s.min), y(s.q3), y(s.q1), y(s.median)
        boxes.append(BoxShape(
            center_x=cx,
            upper_whisker=Segment(x1=cx, y1=y_max, x2=cx, y2=y_q3),
            lower_whisker=Segment(x1=cx, y1=y_min, x2=cx, y2=y_q1),
            box=Rect(x=cx - w, y=y_q3, width=w * 2, height=abs(y_q1 - y_q3)),
            median=Segment(x1=cx - w, y1=y_med, x2=cx + w, y2=y_med),
            label=TextLabel(x=cx, y=BOTTOM + 15, text=group.label[:8]),
        ))

    return BoxGeometry(
        axes=_axes(),
        grid=_grid(),
        labels=_y_range_labels(lo, hi) + [_y_title(data.y_label)],
        boxes=boxes,
        data=data,
    )


def layout_violin(data: ViolinData) -> ViolinGeometry:
    """
    Mirrored density outline around each group's center line.

    Half-width is density / max density over ALL groups, times 45% of the
    group's slot, so widths are comparable between groups.
    """
    lo, hi = data.y_range
    section_w = PLOT_W / len(data.groups)
    max_density = max((p.y for g in data.groups for p in g.points), default=0)

    violins = []
    for i, group in enumerate(data.groups):
        cx = PADDING + i * section_w + section_w / 2
        offsets = []
        for p in group.points:
            x_off = (p.y / max_density) * (section_w * 0.45) if max_density else 0
            offsets.append((scale(p.x, lo, hi, BOTTOM, PADDING), x_off))

        right = [_pair(cx + off, y) for y, off in offsets]
        left = [_pair(cx - off, y) for y, off in reversed(offsets)]
        path = (
            f"M {_pair(cx, BOTTOM)} L {' L '.join(right)} "
            f"L {_pair(cx, PADDING)} L {' L '.join(left)} Z"
        )
        violins.append(ViolinShape(
            center_x=cx,
            path=path,
            label=TextLabel(x=cx, y=BOTTOM + 15, text=group.label[:8]),
        ))

    return ViolinGeometry(
        axes=_axes(),
        labels=[_y_title(data.y_label)],
        violins=violins,
        max_density=max_density,
        data=data,
    )


def layout_ridgeline(data: RidgelineData) -> RidgelineGeometry:
    """
    Stacked density ridges. Layer i sits `i * layer_h * 0.7` above the
    bottom edge and its height is amplified 2.5x, so ridges overlap.
    """
    lo, hi = data.x_range
    layer_h = PLOT_H / (len(data.groups) + 1)
    max_freq = max((p.y for g in data.groups for p in g.points), default=0)

    layers = []
    for i, group in enumerate(data.groups):
        base = BOTTOM - (i * layer_h * 0.7)
        points = " ".join(
            _pair(
                scale(p.x, lo, hi, PADDING, RIGHT),
                base - ((p.y / max_freq) if max_freq else 0) * layer_h * 2.5,
            )
            for p in group.points
        )
        layers.append(RidgeLayer(
            baseline_y=base,
            polygon=_baseline_polygon(points, base),
            label=TextLabel(
                x=PADDING - 10, y=base, text=group.label[:8],
                anchor="end", bold=True, fill="#475569",
            ),
        ))

    return RidgelineGeometry(
        labels=[_x_title(data.x_label)],
        layers=layers,
        layer_height=layer_h,
        data=data,
    )


def layout_density(data: DensityData) -> DensityGeometry:
    lo, hi = data.x_range
    max_freq = max((p.y for p in data.points), default=0)
    points = " ".join(
        _pair(scale(p.x, lo, hi, PADDING, RIGHT), scale(p.y, 0, max_freq, BOTTOM, PADDING))
        for p in data.points
    )
    return DensityGeometry(
        axes=_axes(),
        labels=[_x_title(data.x_label)],
        polyline=points,
        area_polygon=_baseline_polygon(points, BOTTOM),
        data=data,
    )


def heat_color(value: float) -> str:
    """Opacity is |r|; indigo for positive, rose otherwise."""
    rgb = POSITIVE_RGB if value > 0 else NEGATIVE_RGB
    return f"rgba({rgb}, {fmt(abs(value))})"


def layout_heatmap(data: HeatmapData) -> HeatmapGeometry:
    size = data.size
    cell = min(PLOT_W, PLOT_H) / size

    cells = []
    for r, row in enumerate(data.matrix):
        for c, value in enumerate(row):
            x = PADDING + c * cell
            y = PADDING + r * cell
            cells.append(HeatmapCell(
                row=r,
                col=c,
                value=value,
                rect=Rect(x=x, y=y, width=cell - 2, height=cell - 2),
                fill=heat_color(value),
                value_label=TextLabel(
                    x=x + cell / 2, y=y + cell / 2 + 5, text=_fixed1(value),
                    font_size=12, bold=True,
                    fill="white" if abs(value) > 0.5 else "#475569",
                ),
            ))

    labels = []
    for i, name in enumerate(data.labels):
        center = PADDING + i * cell + cell / 2
        labels.append(TextLabel(x=center, y=PADDING - 10, text=name[:6], font_size=11, bold=True))
        labels.append(TextLabel(x=PADDING - 10, y=center, text=name[:6], anchor="end", font_size=11, bold=True))

    return HeatmapGeometry(labels=labels, cells=cells, cell_size=cell, data=data)


# ──────────────────────────────────────────────────────────────────
# Dispatcher
# ──────────────────────────────────────────────────────────────────

_LAYOUTS: dict[type, Callable] = {
    BarData: layout_bars,
    LineData: layout_line,
    ScatterData: layout_scatter,
    BoxData: layout_box,
    ViolinData: layout_violin,
    RidgelineData: layout_ridgeline,
    DensityData: layout_density,
    HeatmapData: layout_heatmap,
}


def layout_chart(data: Optional[ChartData]) -> Optional[ChartGeometry]:
    """Geometry for any aggregate variant; None stays None (insufficient data)."""
    if data is None:
        return None
    try:
        layout = _LAYOUTS[type(data)]
    except KeyError:
        raise TypeError(f"No layout for chart data of kind {getattr(data, 'kind', type(data).__name__)!r}") from None
    return layout(data)
