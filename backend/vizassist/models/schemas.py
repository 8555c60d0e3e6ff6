"""
schemas.py — Pydantic Data Models (Schemas)

Pydantic models define the SHAPE of data flowing through the service:
the dataset summary produced by the profiler, the per-chart aggregates,
the drawing geometry built from them, and the AI detection payload.

Chart aggregates and chart geometry are tagged unions keyed by `kind`,
so a renderer can match on the variant instead of probing object shape.
"""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class ChartType(str, Enum):
    """Chart selectors offered to the user."""
    HISTOGRAM = "histogram"
    BAR = "bar"
    BOX = "box"
    VIOLIN = "violin"
    SCATTER = "scatter"
    LINE = "line"
    DENSITY = "density"
    RIDGELINE = "ridgeline"
    HEATMAP = "heatmap"
    AREA = "area"


ColumnType = Literal["numeric", "categorical"]
CellValue = Union[int, float, str]


# ── Dataset Summary ─────────────────────────────────────────────

class ColumnProfile(BaseModel):
    """Inferred type and uniqueness of one CSV column."""
    model_config = ConfigDict(frozen=True)

    name: str
    type: ColumnType
    unique_count: int
    sample_values: List[str] = Field(default_factory=list, max_length=3)


class DatasetSummary(BaseModel):
    """Profile of the sampled prefix of an uploaded CSV."""
    model_config = ConfigDict(frozen=True)

    estimated_row_count: int
    column_count: int
    columns: List[ColumnProfile]
    rows: List[Dict[str, CellValue]] = Field(default_factory=list, max_length=100)


# ── Chart Aggregates ────────────────────────────────────────────

class Point(BaseModel):
    x: float
    y: float


class FiveNumberSummary(BaseModel):
    min: float
    q1: float
    median: float
    q3: float
    max: float


class BarData(BaseModel):
    """Histogram bins or per-category sums."""
    kind: Literal["bar"] = "bar"
    values: List[float]
    labels: List[str]
    x_label: str
    y_label: str


class LineData(BaseModel):
    kind: Literal["line"] = "line"
    values: List[float]
    labels: List[str]
    x_label: str
    y_label: str
    is_area: bool = False


class ScatterData(BaseModel):
    kind: Literal["scatter"] = "scatter"
    points: List[Point]
    x_label: str
    y_label: str


class BoxGroup(BaseModel):
    label: str
    stats: FiveNumberSummary


class BoxData(BaseModel):
    kind: Literal["box"] = "box"
    groups: List[BoxGroup]
    y_range: Tuple[float, float]
    x_label: str
    y_label: str


class DensityGroup(BaseModel):
    label: str
    points: List[Point]


class ViolinData(BaseModel):
    kind: Literal["violin"] = "violin"
    groups: List[DensityGroup]
    y_range: Tuple[float, float]
    x_label: str
    y_label: str


class DensityData(BaseModel):
    kind: Literal["density"] = "density"
    points: List[Point]
    x_range: Tuple[float, float]
    x_label: str


class RidgelineData(BaseModel):
    kind: Literal["ridgeline"] = "ridgeline"
    groups: List[DensityGroup]
    x_range: Tuple[float, float]
    x_label: str


class HeatmapData(BaseModel):
    """Pearson correlation matrix; `matrix[i][j]` pairs labels[i] with labels[j]."""
    kind: Literal["heatmap"] = "heatmap"
    labels: List[str]
    matrix: List[List[float]]

    @property
    def size(self) -> int:
        return len(self.labels)


ChartData = Annotated[
    Union[BarData, LineData, ScatterData, BoxData, ViolinData, DensityData, RidgelineData, HeatmapData],
    Field(discriminator="kind"),
]


# ── Chart Geometry ──────────────────────────────────────────────
# Coordinates are in the fixed 600x350 logical canvas.

class TextLabel(BaseModel):
    x: float
    y: float
    text: str
    anchor: Literal["start", "middle", "end"] = "middle"
    rotate: Optional[float] = None
    fill: str = "#64748b"
    font_size: int = 10
    bold: bool = False


class Rect(BaseModel):
    x: float
    y: float
    width: float
    height: float


class Segment(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float


class Circle(BaseModel):
    cx: float
    cy: float
    r: float = 5


class Frame(BaseModel):
    """Canvas chrome shared by every geometry variant."""
    width: float = 600
    height: float = 350
    padding: float = 60
    axes: List[Segment] = Field(default_factory=list)
    grid: List[Segment] = Field(default_factory=list)
    labels: List[TextLabel] = Field(default_factory=list)


class Bar(BaseModel):
    rect: Rect
    value: float
    value_label: TextLabel


class BarGeometry(Frame):
    kind: Literal["bar"] = "bar"
    bars: List[Bar]
    tick_labels: List[TextLabel]
    data: BarData


class LineGeometry(Frame):
    kind: Literal["line"] = "line"
    polyline: str
    area_polygon: Optional[str] = None
    data: LineData


class ScatterGeometry(Frame):
    kind: Literal["scatter"] = "scatter"
    circles: List[Circle]
    data: ScatterData


class BoxShape(BaseModel):
    center_x: float
    upper_whisker: Segment
    lower_whisker: Segment
    box: Rect
    median: Segment
    label: TextLabel


class BoxGeometry(Frame):
    kind: Literal["box"] = "box"
    boxes: List[BoxShape]
    data: BoxData


class ViolinShape(BaseModel):
    center_x: float
    path: str
    label: TextLabel


class ViolinGeometry(Frame):
    kind: Literal["violin"] = "violin"
    violins: List[ViolinShape]
    max_density: float
    data: ViolinData


class DensityGeometry(Frame):
    kind: Literal["density"] = "density"
    polyline: str
    area_polygon: str
    data: DensityData


class RidgeLayer(BaseModel):
    baseline_y: float
    polygon: str
    label: TextLabel


class RidgelineGeometry(Frame):
    kind: Literal["ridgeline"] = "ridgeline"
    layers: List[RidgeLayer]
    layer_height: float
    data: RidgelineData


class HeatmapCell(BaseModel):
    row: int
    col: int
    value: float
    rect: Rect
    fill: str
    value_label: TextLabel


class HeatmapGeometry(Frame):
    kind: Literal["heatmap"] = "heatmap"
    cells: List[HeatmapCell]
    cell_size: float
    data: HeatmapData


ChartGeometry = Annotated[
    Union[
        BarGeometry, LineGeometry, ScatterGeometry, BoxGeometry,
        ViolinGeometry, DensityGeometry, RidgelineGeometry, HeatmapGeometry,
    ],
    Field(discriminator="kind"),
]


# ── Chart Catalog ───────────────────────────────────────────────

class ChartDefinition(BaseModel):
    id: ChartType
    name: str
    description: str
    color: str


class CodeSnippets(BaseModel):
    r: str
    python: str


# ── AI Detection ────────────────────────────────────────────────

class DetectionResult(BaseModel):
    """Chart type guessed from an image, with recreation code."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chart_type: str = Field(alias="chartType")
    confidence: float = Field(ge=0, le=100)
    explanation: str
    r_code: str = Field(alias="rCode")
    python_code: str = Field(alias="pythonCode")
    source: Literal["model", "fallback"] = "model"


# ── Response Models ─────────────────────────────────────────────

class ChartResponse(BaseModel):
    """Geometry for one chart selection, or an insufficient-data marker."""
    session_id: str
    chart_type: ChartType
    status: Literal["ok", "insufficient_data"]
    geometry: Optional[ChartGeometry] = None
    code: CodeSnippets
