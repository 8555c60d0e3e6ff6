"""
session.py - Per-session Application State

Each browser session owns one immutable AppState. The only way to change
it is `dispatch(state, action)`, which returns a new state.

Async work (reading an upload, calling the detection model) is tagged
with the `generation` that was current when it started. Starting new
work or resetting bumps the generation, so a completion that arrives
late for a superseded request is dropped instead of overwriting newer
results.
"""

import uuid
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import SessionNotFoundError
from ..models.schemas import ChartType, DatasetSummary, DetectionResult

Mode = Literal["csv", "image"]


class AppState(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: int = 0
    generation: int = 0
    mode: Optional[Mode] = None
    pending: bool = False
    upload_name: Optional[str] = None
    summary: Optional[DatasetSummary] = None
    selected_chart: Optional[ChartType] = None
    detection: Optional[DetectionResult] = None
    error: Optional[str] = None


# ── Actions ─────────────────────────────────────────────────────

class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SelectMode(_Action):
    mode: Optional[Mode]


class StartUpload(_Action):
    filename: str


class CompleteUpload(_Action):
    generation: int
    summary: DatasetSummary


class FailUpload(_Action):
    generation: int
    message: str


class SelectChart(_Action):
    chart_type: ChartType


class ClearChart(_Action):
    pass


class StartDetection(_Action):
    filename: str


class CompleteDetection(_Action):
    generation: int
    result: DetectionResult


class Reset(_Action):
    pass


Action = Union[
    SelectMode, StartUpload, CompleteUpload, FailUpload, SelectChart,
    ClearChart, StartDetection, CompleteDetection, Reset,
]


def is_stale(state: AppState, action: Action) -> bool:
    """True for a completion whose request has been superseded."""
    generation = getattr(action, "generation", None)
    return generation is not None and generation != state.generation


def _next(state: AppState, **changes) -> AppState:
    return state.model_copy(update={"version": state.version + 1, **changes})


def dispatch(state: AppState, action: Action) -> AppState:
    """Apply one action; stale completions return `state` unchanged."""
    if is_stale(state, action):
        print(
            f"[Session] Discarding {type(action).__name__} for generation "
            f"{action.generation} (current: {state.generation})."
        )
        return state

    if isinstance(action, SelectMode):
        return _next(state, mode=action.mode)

    if isinstance(action, StartUpload):
        return _next(
            state,
            mode="csv",
            generation=state.generation + 1,
            pending=True,
            upload_name=action.filename,
            summary=None,
            selected_chart=None,
            error=None,
        )

    if isinstance(action, CompleteUpload):
        return _next(state, pending=False, summary=action.summary, error=None)

    if isinstance(action, FailUpload):
        return _next(state, pending=False, summary=None, error=action.message)

    if isinstance(action, SelectChart):
        if state.summary is None:
            return state
        return _next(state, selected_chart=action.chart_type)

    if isinstance(action, ClearChart):
        return _next(state, selected_chart=None)

    if isinstance(action, StartDetection):
        return _next(
            state,
            mode="image",
            generation=state.generation + 1,
            pending=True,
            upload_name=action.filename,
            detection=None,
            error=None,
        )

    if isinstance(action, CompleteDetection):
        return _next(state, pending=False, detection=action.result)

    if isinstance(action, Reset):
        # Keep counting so in-flight work from before the reset is discarded
        return AppState(version=state.version + 1, generation=state.generation + 1)

    raise TypeError(f"Unhandled action: {type(action).__name__}")


class SessionStore:
    """
    In-memory map of session id -> AppState.

    Only touched from the event loop thread, so no locking.
    """

    def __init__(self):
        self._sessions: dict[str, AppState] = {}

    def create(self) -> tuple[str, AppState]:
        session_id = uuid.uuid4().hex[:12]
        state = AppState()
        self._sessions[session_id] = state
        return session_id, state

    def get(self, session_id: str) -> AppState:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def apply(self, session_id: str, action: Action) -> AppState:
        state = dispatch(self.get(session_id), action)
        self._sessions[session_id] = state
        return state

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)

    def __len__(self) -> int:
        return len(self._sessions)
