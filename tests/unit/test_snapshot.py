from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st
import pytest

from quietretry.history import ErrorHistory, ErrorRecord
from quietretry.snapshot import capture_last_error, did_error_occur

pytestmark = pytest.mark.unit

A = ErrorRecord("first")
B = ErrorRecord("second")


@pytest.mark.parametrize(
    ("before", "after", "expected"),
    [
        (None, None, False),
        (None, A, True),
        (A, A, False),
        (A, B, True),
        (A, None, False),
    ],
    ids=["none-none", "none-some", "same", "different", "cleared"],
)
def test_did_error_occur_truth_table(
    before: ErrorRecord | None, after: ErrorRecord | None, expected: bool
) -> None:
    assert did_error_occur(before, after) is expected


def test_records_with_equal_text_are_distinct_errors() -> None:
    assert did_error_occur(ErrorRecord("boom"), ErrorRecord("boom")) is True


@given(messages=st.lists(st.text(max_size=20), max_size=5))
@settings(max_examples=25, deadline=None, derandomize=True)
def test_snapshot_pair_detects_exactly_new_records(messages: list[str]) -> None:
    history = ErrorHistory()
    history.record("pre-existing")
    before = capture_last_error(history)
    for message in messages:
        history.record(message)
    after = capture_last_error(history)

    assert did_error_occur(before, after) is bool(messages)


def test_capture_last_error_on_empty_history_is_none() -> None:
    assert capture_last_error(ErrorHistory()) is None


def test_capture_last_error_uses_process_history_by_default(fresh_error_state) -> None:
    rec = fresh_error_state.record("boom")
    assert capture_last_error() is rec


def test_clearing_history_between_snapshots_is_not_an_error() -> None:
    history = ErrorHistory()
    history.record("old")
    before = capture_last_error(history)
    history.record("new")
    history.clear()
    after = capture_last_error(history)

    assert did_error_occur(before, after) is False
