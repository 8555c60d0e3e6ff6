"""
upload.py — CSV Upload Endpoint

Reads only the leading sample of an uploaded CSV, profiles it, and stores
the DatasetSummary in the session. The rest of the file is never read.
"""

import os
import traceback

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..config import settings
from ..core.errors import ProfilingError
from ..core.profiler import profile
from ..core.session import CompleteUpload, FailUpload, SessionStore, StartUpload
from .sessions import apply_action, get_store, require_state

router = APIRouter()

ALLOWED_EXTENSIONS = {".csv", ".txt"}


def _upload_size(file: UploadFile) -> int:
    """Total upload size without reading the body into memory."""
    if file.size is not None:
        return file.size
    position = file.file.tell()
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(position)
    return size


@router.post("/{session_id}")
async def upload_csv(
    session_id: str,
    file: UploadFile = File(...),
    store: SessionStore = Depends(get_store),
):
    """
    Upload a CSV file for profiling.

    Returns:
        - session_id, filename, file_size_bytes
        - summary: estimated row count, column profiles, up to 100 typed rows
    """
    require_state(store, session_id)

    filename = file.filename or "upload.csv"
    ext = os.path.splitext(filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
        )

    generation = store.apply(session_id, StartUpload(filename=filename)).generation

    try:
        chunk_size = settings.SAMPLE_CHUNK_BYTES
        prefix = await file.read(chunk_size)
        file_size = _upload_size(file)
        summary = profile(prefix, file_size=file_size, chunk_size=chunk_size)
    except ProfilingError as e:
        apply_action(store, session_id, FailUpload(generation=generation, message=str(e)))
        raise HTTPException(status_code=400, detail=f"Failed to parse file: {str(e)}")
    except Exception as e:
        traceback.print_exc()
        apply_action(store, session_id, FailUpload(generation=generation, message=str(e)))
        raise HTTPException(status_code=500, detail=f"Profiling failed: {str(e)}")

    state = apply_action(store, session_id, CompleteUpload(generation=generation, summary=summary))
    if state.generation != generation:
        raise HTTPException(status_code=409, detail="Upload superseded by a newer request.")

    return {
        "session_id": session_id,
        "filename": filename,
        "file_size_bytes": file_size,
        "summary": summary.model_dump(mode="json"),
    }
