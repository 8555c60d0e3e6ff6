"""
sessions.py - Session Endpoints

A session holds the state of one browser tab: current mode, the profiled
dataset, the selected chart and the last detection result.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from ..core.errors import SessionNotFoundError
from ..core.session import Action, AppState, Reset, SelectMode, SessionStore

router = APIRouter()

MODES = {"csv": "csv", "image": "image", "none": None}


def get_store(request: Request) -> SessionStore:
    """The app-wide SessionStore, created at startup in main.py."""
    return request.app.state.sessions


def require_state(store: SessionStore, session_id: str) -> AppState:
    try:
        return store.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def apply_action(store: SessionStore, session_id: str, action: Action) -> AppState:
    """store.apply, with a session deleted mid-request reported as 404."""
    try:
        return store.apply(session_id, action)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _session_view(session_id: str, state: AppState) -> dict:
    return {"session_id": session_id, "state": state.model_dump(mode="json", by_alias=True)}


@router.post("")
async def create_session(store: SessionStore = Depends(get_store)):
    """Start a new session with an empty state."""
    session_id, state = store.create()
    return _session_view(session_id, state)


@router.get("/{session_id}")
async def get_session(session_id: str, store: SessionStore = Depends(get_store)):
    return _session_view(session_id, require_state(store, session_id))


@router.post("/{session_id}/mode/{mode}")
async def select_mode(session_id: str, mode: str, store: SessionStore = Depends(get_store)):
    """Switch between CSV analysis and image detection ("none" returns to the menu)."""
    if mode not in MODES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown mode '{mode}'. Allowed: {', '.join(MODES)}",
        )
    require_state(store, session_id)
    return _session_view(session_id, store.apply(session_id, SelectMode(mode=MODES[mode])))


@router.post("/{session_id}/reset")
async def reset_session(session_id: str, store: SessionStore = Depends(get_store)):
    """Clear everything; uploads still in flight will be discarded."""
    require_state(store, session_id)
    return _session_view(session_id, store.apply(session_id, Reset()))


@router.delete("/{session_id}")
async def delete_session(session_id: str, store: SessionStore = Depends(get_store)):
    try:
        store.delete(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "deleted", "session_id": session_id}
