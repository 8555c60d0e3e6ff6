"""Unit tests for the CSV prefix profiler."""

import pytest

from vizassist.core.errors import EmptyContentError, InsufficientRowsError, ProfilingError
from vizassist.core.profiler import parse_number, profile, profile_file


def test_small_file_counts_rows_exactly():
    """A file that fits in one chunk reports its exact data-row count and column types."""
    summary = profile(b"a,b\n1,x\n2,y\n3,z\n")
    assert summary.estimated_row_count == 3
    assert summary.column_count == 2
    types = {c.name: c.type for c in summary.columns}
    assert types == {"a": "numeric", "b": "categorical"}


def test_rows_are_typed_records():
    """Numeric-looking cells are stored as numbers, others as text."""
    summary = profile(b"a,b\n1,x\n2.5,y\n")
    assert summary.rows == [{"a": 1, "b": "x"}, {"a": 2.5, "b": "y"}]
    assert isinstance(summary.rows[0]["a"], int)


def test_empty_content_raises():
    """Empty bytes have no text to profile."""
    with pytest.raises(EmptyContentError):
        profile(b"")


def test_header_only_raises_insufficient_rows():
    """A header alone is not enough."""
    with pytest.raises(InsufficientRowsError) as exc:
        profile(b"a,b\n")
    assert exc.value.line_count == 1


def test_blank_lines_are_dropped_before_row_check():
    """Whitespace-only lines do not count as rows."""
    with pytest.raises(InsufficientRowsError):
        profile(b"   \n\n\t\n")


def test_profiling_errors_are_value_errors():
    """Callers can catch profiling failures as ValueError."""
    assert issubclass(ProfilingError, ValueError)
    assert issubclass(EmptyContentError, ProfilingError)
    assert issubclass(InsufficientRowsError, ProfilingError)


def test_truncated_sample_drops_last_line_and_extrapolates():
    """Only the chunk is read; the cut line is dropped and the row count is extrapolated."""
    content = b"x,y\n1,2\n3,4\n5,6\n"  # 16 bytes
    summary = profile(content, file_size=len(content), chunk_size=10)
    # chunk "x,y\n1,2\n3," -> "3," is discarded
    assert summary.rows == [{"x": 1, "y": 2}]
    # floor((16 / 10) * 2 lines)
    assert summary.estimated_row_count == 3


def test_bytes_past_the_chunk_are_ignored():
    """Passing the whole file gives the same result as passing only the prefix."""
    content = b"x,y\n1,2\n3,4\n5,6\n"
    whole = profile(content, file_size=len(content), chunk_size=10)
    prefix = profile(content[:10], file_size=len(content), chunk_size=10)
    assert whole == prefix


def test_rows_capped_at_one_hundred():
    """At most 100 data rows are materialized; uniqueness is counted over them."""
    lines = ["id,double"] + [f"{i},{i * 2}" for i in range(250)]
    summary = profile(("\n".join(lines) + "\n").encode())
    assert len(summary.rows) == 100
    assert summary.estimated_row_count == 250
    assert summary.columns[0].unique_count == 100


def test_type_inference_uses_first_five_rows_only():
    """A non-numeric value after row 5 does not change the column type."""
    summary = profile(b"v\n1\n2\n3\n4\n5\nabc\n")
    assert summary.columns[0].type == "numeric"
    assert summary.rows[5] == {"v": "abc"}


def test_empty_cell_in_first_rows_makes_column_categorical():
    """An empty value among the first five rows rules out numeric."""
    summary = profile(b"v,w\n1,a\n,b\n3,c\n")
    assert summary.columns[0].type == "categorical"


def test_short_rows_fill_missing_cells_with_empty_text():
    """Rows with fewer cells than the header get "" for the missing ones."""
    summary = profile(b"a,b\n1\n2\n")
    assert summary.columns[1].type == "categorical"
    assert summary.rows[0] == {"a": 1, "b": ""}


def test_header_tokens_are_trimmed_and_counted():
    """Column count equals the number of header tokens."""
    summary = profile(b" a , b ,c\n1,2,3\n")
    assert [c.name for c in summary.columns] == ["a", "b", "c"]
    assert summary.column_count == 3


def test_sample_values_at_most_three():
    """Each column keeps up to three sample values from the first rows."""
    summary = profile(b"c\nx\ny\nz\nw\n")
    assert summary.columns[0].sample_values == ["x", "y", "z"]


def test_byte_order_mark_is_stripped():
    """A UTF-8 BOM does not leak into the first column name."""
    summary = profile(b"\xef\xbb\xbfa,b\n1,2\n")
    assert summary.columns[0].name == "a"


def test_crlf_line_endings():
    """Windows line endings are trimmed from the last cell."""
    summary = profile(b"a,b\r\n1,2\r\n")
    assert summary.rows == [{"a": 1, "b": 2}]
    assert summary.columns[1].type == "numeric"


def test_profiling_is_deterministic():
    """Profiling identical bytes twice yields identical summaries."""
    content = b"a,b,c\n1,x,3.5\n2,y,4.5\n"
    assert profile(content) == profile(content)


def test_profile_file_reads_prefix_from_disk(tmp_path):
    """profile_file uses the on-disk size for extrapolation."""
    path = tmp_path / "data.csv"
    path.write_bytes(b"x,y\n1,2\n3,4\n5,6\n")
    summary = profile_file(str(path), chunk_size=10)
    assert summary.estimated_row_count == 3


@pytest.mark.parametrize(
    "text,expected",
    [
        ("42", 42),
        (" 7 ", 7),
        ("-3", -3),
        ("1.5", 1.5),
        ("1e3", 1000.0),
        ("", None),
        ("   ", None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
        ("1_000", None),
        (None, None),
    ],
)
def test_parse_number(text, expected):
    """Only finite numerics parse; integral text becomes int."""
    assert parse_number(text) == expected
