"""
profiler.py — CSV Prefix Sampler & Column Profiler

Reads only a bounded leading chunk of an uploaded CSV and produces a
DatasetSummary: column names, a numeric/categorical guess per column,
a uniqueness estimate, up to 100 typed sample rows, and a total row
count extrapolated from the file size.

Bytes past the chunk are never decoded. The chart engine only sees the
first 100 rows.

Parsing is a plain split on ","; quoted fields and escaped delimiters
are not handled.
"""

import math
import os
import re

from .errors import EmptyContentError, InsufficientRowsError
from ..models.schemas import CellValue, ColumnProfile, DatasetSummary

CHUNK_SIZE = 50 * 1024      # bytes read from the front of the file
TYPE_INFERENCE_ROWS = 5     # rows that decide numeric vs categorical
MAX_SAMPLE_ROWS = 100       # rows kept for charts and uniqueness counts
SAMPLE_VALUE_COUNT = 3

_INT_PATTERN = re.compile(r"[+-]?\d+")


def parse_number(text: str | None) -> int | float | None:
    """
    Parse a CSV cell as a number.

    Returns an int for integral text ("42"), a float for other finite
    numerics ("1.5", "1e3"), and None for anything else, including
    empty cells, "nan" and "inf".
    """
    if text is None:
        return None
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    if _INT_PATTERN.fullmatch(text):
        return int(text)
    return value


def _cell(cells: list[str], index: int) -> str:
    """Trimmed cell at `index`; rows shorter than the header yield ""."""
    if index < len(cells):
        return cells[index].strip()
    return ""


def _coerce(value: str) -> CellValue:
    number = parse_number(value)
    return value if number is None else number


def profile(
    file_bytes: bytes,
    file_size: int | None = None,
    chunk_size: int = CHUNK_SIZE,
) -> DatasetSummary:
    """
    Profile the leading `chunk_size` bytes of a CSV file.

    Args:
        file_bytes: Raw bytes of the file, or at least its first `chunk_size` bytes.
        file_size: Total size of the file in bytes (defaults to len(file_bytes)).
        chunk_size: Byte budget for the sample.

    Returns:
        DatasetSummary for the sampled rows.

    Raises:
        EmptyContentError: the decoded prefix is empty.
        InsufficientRowsError: fewer than 2 non-blank lines remain.
    """
    if file_size is None:
        file_size = len(file_bytes)

    text = file_bytes[:chunk_size].decode("utf-8-sig", errors="replace")
    if not text:
        raise EmptyContentError()

    lines = text.split("\n")
    truncated = file_size > chunk_size
    if truncated:
        # The chunk boundary most likely cut the final line in half
        lines.pop()
        print(f"[Profiler] Sampled {chunk_size} of {file_size} bytes; dropped the trailing partial line.")
    lines = [line for line in lines if line.strip()]

    if len(lines) < 2:
        raise InsufficientRowsError(len(lines))

    headers = [h.strip() for h in lines[0].split(",")]

    # Extrapolates from *line* count (header included), unlike the exact
    # branch which counts data rows. Kept as a known approximation.
    if truncated:
        estimated_rows = math.floor((file_size / chunk_size) * len(lines))
    else:
        estimated_rows = len(lines) - 1

    sample_rows = [line.split(",") for line in lines[1:MAX_SAMPLE_ROWS + 1]]
    inference_rows = sample_rows[:TYPE_INFERENCE_ROWS]

    columns = []
    for index, name in enumerate(headers):
        values = [_cell(row, index) for row in inference_rows]
        is_numeric = all(parse_number(v) is not None for v in values)
        unique_count = len({_cell(row, index) for row in sample_rows})
        columns.append(ColumnProfile(
            name=name,
            type="numeric" if is_numeric else "categorical",
            unique_count=unique_count,
            sample_values=values[:SAMPLE_VALUE_COUNT],
        ))

    rows = [
        {h: _coerce(_cell(cells, i)) for i, h in enumerate(headers)}
        for cells in sample_rows
    ]

    return DatasetSummary(
        estimated_row_count=estimated_rows,
        column_count=len(headers),
        columns=columns,
        rows=rows,
    )


def profile_file(file_path: str, chunk_size: int = CHUNK_SIZE) -> DatasetSummary:
    """Profile a CSV on disk, reading only its first `chunk_size` bytes."""
    file_size = os.path.getsize(file_path)
    with open(file_path, "rb") as f:
        prefix = f.read(chunk_size)
    return profile(prefix, file_size=file_size, chunk_size=chunk_size)
