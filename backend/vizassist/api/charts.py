"""
charts.py - Chart Endpoints

Serves the chart menu, and for a selected chart type the geometry built
from the session's sampled rows (or an insufficient-data marker), the
matching SVG, and the canned R/Python recreation code.
"""

import traceback

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..core.chart_catalog import CHART_TYPES, code_for
from ..core.chart_data import chart_data_for, parse_chart_type
from ..core.errors import UnknownChartTypeError
from ..core.geometry import layout_chart
from ..core.session import AppState, ClearChart, SelectChart, SessionStore
from ..models.schemas import ChartResponse, ChartType
from ..visualization.svg import render_svg
from .sessions import get_store, require_state

router = APIRouter()


def _chart_type(value: str) -> ChartType:
    try:
        return parse_chart_type(value)
    except UnknownChartTypeError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _require_summary(state: AppState):
    if state.summary is None:
        raise HTTPException(
            status_code=409,
            detail="No dataset profiled for this session. Upload a CSV first.",
        )
    return state.summary


def _geometry(store: SessionStore, session_id: str, chart_type: ChartType):
    summary = _require_summary(require_state(store, session_id))
    try:
        geometry = layout_chart(chart_data_for(summary, chart_type))
    except Exception as e:
        traceback.print_exc()
        raise HTTPException(status_code=500, detail=f"Chart generation failed: {str(e)}")
    store.apply(session_id, SelectChart(chart_type=chart_type))
    return geometry


@router.get("/catalog")
async def get_catalog():
    """All chart types the user can pick from."""
    return {"charts": [c.model_dump(mode="json") for c in CHART_TYPES], "count": len(CHART_TYPES)}


@router.get("/{session_id}/{chart_type}", response_model=ChartResponse)
async def get_chart(session_id: str, chart_type: str, store: SessionStore = Depends(get_store)):
    """
    Geometry for one chart type over the session's sampled rows.

    `status` is "insufficient_data" (and `geometry` null) when the dataset
    lacks the column kinds the chart needs.
    """
    kind = _chart_type(chart_type)
    geometry = _geometry(store, session_id, kind)
    return ChartResponse(
        session_id=session_id,
        chart_type=kind,
        status="ok" if geometry is not None else "insufficient_data",
        geometry=geometry,
        code=code_for(kind),
    )


@router.get("/{session_id}/{chart_type}/svg")
async def get_chart_svg(session_id: str, chart_type: str, store: SessionStore = Depends(get_store)):
    """The same chart rendered as an SVG document."""
    kind = _chart_type(chart_type)
    geometry = _geometry(store, session_id, kind)
    return Response(content=render_svg(geometry), media_type="image/svg+xml")


@router.delete("/{session_id}/selection")
async def clear_selection(session_id: str, store: SessionStore = Depends(get_store)):
    """Back to the chart menu."""
    require_state(store, session_id)
    state = store.apply(session_id, ClearChart())
    return {"session_id": session_id, "selected_chart": state.selected_chart}
