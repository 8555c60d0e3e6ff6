"""
svg.py — SVG Chart Renderer

Turns ChartGeometry into a standalone SVG document. The geometry already
holds every coordinate; this module only picks element types, fills and
strokes. A missing geometry renders the "Insufficient Data" placeholder.
"""

from html import escape
from typing import Optional

from ..core.geometry import HEIGHT, WIDTH, fmt
from ..models.schemas import (
    BarGeometry,
    BoxGeometry,
    ChartGeometry,
    DensityGeometry,
    Frame,
    HeatmapGeometry,
    LineGeometry,
    Rect,
    RidgelineGeometry,
    ScatterGeometry,
    Segment,
    TextLabel,
    ViolinGeometry,
)


def _attrs(**kwargs) -> str:
    parts = []
    for key, value in kwargs.items():
        if value is None:
            continue
        name = key.rstrip("_").replace("_", "-")
        if isinstance(value, float) or isinstance(value, int):
            value = fmt(value)
        parts.append(f'{name}="{escape(str(value), quote=True)}"')
    return " ".join(parts)


def _line(seg: Segment, **style) -> str:
    return f"<line {_attrs(x1=seg.x1, y1=seg.y1, x2=seg.x2, y2=seg.y2, **style)} />"


def _rect(rect: Rect, **style) -> str:
    return f"<rect {_attrs(x=rect.x, y=rect.y, width=rect.width, height=rect.height, **style)} />"


def _text(label: TextLabel) -> str:
    transform = None
    if label.rotate is not None:
        transform = f"rotate({fmt(label.rotate)}, {fmt(label.x)}, {fmt(label.y)})"
    attrs = _attrs(
        x=label.x,
        y=label.y,
        text_anchor=label.anchor,
        font_size=label.font_size,
        font_weight="bold" if label.bold else None,
        fill=label.fill,
        transform=transform,
    )
    return f"<text {attrs}>{escape(label.text)}</text>"


def _frame(geometry: Frame) -> list[str]:
    parts = [_line(g, stroke="#f1f5f9", stroke_dasharray="4 4") for g in geometry.grid]
    parts += [_line(a, stroke="#cbd5e1", stroke_width=2) for a in geometry.axes]
    return parts


def _document(body: list[str]) -> str:
    inner = "\n  ".join(body)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {WIDTH} {HEIGHT}" '
        f'font-family="sans-serif">\n  {inner}\n</svg>\n'
    )


# ──────────────────────────────────────────────────────────────────
# Per-family Drawing
# ──────────────────────────────────────────────────────────────────

def _draw_bars(g: BarGeometry) -> list[str]:
    parts = [
        '<defs><linearGradient id="barGrad" x1="0" y1="0" x2="0" y2="1">'
        '<stop offset="0%" stop-color="#818cf8" /><stop offset="100%" stop-color="#6366f1" />'
        "</linearGradient></defs>"
    ]
    parts += _frame(g)
    for bar in g.bars:
        parts.append(_rect(bar.rect, fill="url(#barGrad)", rx=4))
    parts += [_text(t) for t in g.tick_labels]
    return parts


def _draw_line(g: LineGeometry) -> list[str]:
    parts = _frame(g)
    if g.area_polygon is not None:
        parts.append(f"<polygon {_attrs(points=g.area_polygon, fill='rgba(99, 102, 241, 0.2)')} />")
    parts.append(
        f"<polyline {_attrs(points=g.polyline, fill='none', stroke='#6366f1', stroke_width=3, stroke_linecap='round', stroke_linejoin='round')} />"
    )
    return parts


def _draw_scatter(g: ScatterGeometry) -> list[str]:
    parts = _frame(g)
    for c in g.circles:
        parts.append(f"<circle {_attrs(cx=c.cx, cy=c.cy, r=c.r, fill='rgba(236, 72, 153, 0.6)')} />")
    return parts


def _draw_box(g: BoxGeometry) -> list[str]:
    parts = _frame(g)
    for b in g.boxes:
        parts.append(_line(b.upper_whisker, stroke="#475569"))
        parts.append(_line(b.lower_whisker, stroke="#475569"))
        parts.append(_rect(b.box, fill="rgba(129, 140, 248, 0.5)", stroke="#6366f1"))
        parts.append(_line(b.median, stroke="#312e81", stroke_width=2))
        parts.append(_text(b.label))
    return parts


def _draw_violin(g: ViolinGeometry) -> list[str]:
    parts = _frame(g)
    for v in g.violins:
        parts.append(f"<path {_attrs(d=v.path, fill='rgba(236, 72, 153, 0.4)', stroke='#db2777')} />")
        parts.append(_text(v.label))
    return parts


def _draw_ridgeline(g: RidgelineGeometry) -> list[str]:
    parts = _frame(g)
    for layer in g.layers:
        parts.append(f"<polygon {_attrs(points=layer.polygon, fill='rgba(20, 184, 166, 0.6)', stroke='#0d9488')} />")
        parts.append(_text(layer.label))
    return parts


def _draw_density(g: DensityGeometry) -> list[str]:
    parts = [
        '<defs><linearGradient id="densGrad" x1="0" y1="0" x2="0" y2="1">'
        '<stop offset="0%" stop-color="#fbbf24" stop-opacity="0.5" />'
        '<stop offset="100%" stop-color="#fbbf24" stop-opacity="0.1" />'
        "</linearGradient></defs>"
    ]
    parts += _frame(g)
    parts.append(f"<polygon {_attrs(points=g.area_polygon, fill='url(#densGrad)')} />")
    parts.append(f"<polyline {_attrs(points=g.polyline, fill='none', stroke='#d97706', stroke_width=2)} />")
    return parts


def _draw_heatmap(g: HeatmapGeometry) -> list[str]:
    parts = []
    for cell in g.cells:
        parts.append(_rect(cell.rect, fill=cell.fill, rx=4))
        parts.append(_text(cell.value_label))
    return parts


_DRAWERS = {
    "bar": _draw_bars,
    "line": _draw_line,
    "scatter": _draw_scatter,
    "box": _draw_box,
    "violin": _draw_violin,
    "ridgeline": _draw_ridgeline,
    "density": _draw_density,
    "heatmap": _draw_heatmap,
}


def render_placeholder(message: str = "Insufficient Data") -> str:
    label = TextLabel(x=WIDTH / 2, y=HEIGHT / 2, text=message, font_size=14, fill="#94a3b8")
    return _document([_text(label)])


def render_svg(geometry: Optional[ChartGeometry]) -> str:
    """SVG markup for a chart geometry, or the placeholder when it is None."""
    if geometry is None:
        return render_placeholder()
    body = _DRAWERS[geometry.kind](geometry)
    body += [_text(label) for label in geometry.labels]
    return _document(body)
