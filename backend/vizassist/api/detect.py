"""
detect.py - Chart Image Detection Endpoint

Accepts a chart image and returns the detected chart type with
recreation code. The detector never fails: when the model is unavailable
the response is a fixed fallback payload (`source: "fallback"`).
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..agent.chart_detector import detect_chart_type
from ..config import settings
from ..core.session import CompleteDetection, SessionStore, StartDetection
from .sessions import apply_action, get_store, require_state

router = APIRouter()


@router.post("/{session_id}")
async def detect_chart(
    session_id: str,
    file: UploadFile = File(...),
    store: SessionStore = Depends(get_store),
):
    """
    Identify the chart type in an uploaded image.

    Response keys: chartType, confidence (0-100), explanation, rCode,
    pythonCode, source.
    """
    require_state(store, session_id)

    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail=f"Expected an image upload, got '{file.content_type}'.")

    contents = await file.read()
    size_mb = round(len(contents) / (1024 * 1024), 2)
    if size_mb > settings.MAX_IMAGE_SIZE_MB:
        raise HTTPException(
            status_code=400,
            detail=f"Image too large ({size_mb} MB). Maximum allowed: {settings.MAX_IMAGE_SIZE_MB} MB",
        )
    if not contents:
        raise HTTPException(status_code=400, detail="Empty image upload.")

    generation = store.apply(session_id, StartDetection(filename=file.filename or "image")).generation
    result = await detect_chart_type(contents)

    state = apply_action(store, session_id, CompleteDetection(generation=generation, result=result))
    if state.generation != generation:
        raise HTTPException(status_code=409, detail="Detection superseded by a newer request.")

    return result.model_dump(mode="json", by_alias=True)
