"""Unit tests for request status resolution."""

import pytest

from lims_core.lifecycle import all_complete, completion_for, is_terminal, resolve_status
from lims_core.schemas import AnalysisLine, CompletionState, LifecycleStatus


def _make_lines(*states: str) -> list[AnalysisLine]:
    """Helper to build analysis lines with the given completion states."""
    codes = ["GLU", "CBC", "LFT", "RFT", "TSH"]
    return [
        AnalysisLine(code=codes[i], price=100.0, completion_state=CompletionState(state))
        for i, state in enumerate(states)
    ]


# ============================================================================
# RESOLVER RULES
# ============================================================================


class TestResolveStatus:
    """Tests for the status precedence rules."""

    def test_keeps_published_with_all_complete(self):
        """Terminal lock holds even when every line is complete."""
        status = resolve_status(
            LifecycleStatus.PUBLISHED, _make_lines("Complete", "Complete")
        )
        assert status == LifecycleStatus.PUBLISHED

    @pytest.mark.parametrize("terminal", [LifecycleStatus.PUBLISHED, LifecycleStatus.REJECTED])
    @pytest.mark.parametrize(
        "states",
        [(), ("Pending",), ("Complete", "Pending"), ("Complete", "Complete"), ("Flagged",)],
    )
    def test_terminal_statuses_never_change(self, terminal, states):
        """Published and Rejected come back unchanged whatever the analyses say."""
        assert resolve_status(terminal, _make_lines(*states)) == terminal

    def test_received_with_partial_results_moves_to_testing(self):
        """First result entry moves a pre-testing request into Testing."""
        status = resolve_status(
            LifecycleStatus.RECEIVED, _make_lines("Complete", "Pending")
        )
        assert status == LifecycleStatus.TESTING

    @pytest.mark.parametrize(
        "current",
        [LifecycleStatus.RECEIVED, LifecycleStatus.COLLECTED, LifecycleStatus.IN_LAB],
    )
    def test_pre_testing_statuses_move_to_testing(self, current):
        assert resolve_status(current, _make_lines("Pending", "Pending")) == LifecycleStatus.TESTING

    def test_testing_with_all_complete_moves_to_verified(self):
        status = resolve_status(
            LifecycleStatus.TESTING, _make_lines("Complete", "Complete")
        )
        assert status == LifecycleStatus.VERIFIED

    def test_received_with_all_complete_skips_straight_to_verified(self):
        """Full completion wins over the work-has-started rule."""
        status = resolve_status(
            LifecycleStatus.RECEIVED, _make_lines("Complete", "Complete")
        )
        assert status == LifecycleStatus.VERIFIED

    def test_testing_with_incomplete_lines_stays_testing(self):
        status = resolve_status(
            LifecycleStatus.TESTING, _make_lines("Complete", "Pending")
        )
        assert status == LifecycleStatus.TESTING

    def test_verified_with_incomplete_lines_stays_verified(self):
        """Re-opening a verified request is the caller's job, not the resolver's."""
        status = resolve_status(
            LifecycleStatus.VERIFIED, _make_lines("Complete", "Pending")
        )
        assert status == LifecycleStatus.VERIFIED

    def test_flagged_line_blocks_verification(self):
        """Flagged is not the same as Complete."""
        status = resolve_status(
            LifecycleStatus.TESTING, _make_lines("Complete", "Flagged")
        )
        assert status == LifecycleStatus.TESTING

    def test_empty_analyses_do_not_verify(self):
        """A request with no lines keeps its status instead of becoming Verified."""
        assert resolve_status(LifecycleStatus.TESTING, []) == LifecycleStatus.TESTING

    def test_empty_analyses_still_start_testing(self):
        assert resolve_status(LifecycleStatus.RECEIVED, []) == LifecycleStatus.TESTING

    def test_input_lines_are_not_mutated(self):
        lines = _make_lines("Complete", "Pending")
        snapshot = [line.model_dump() for line in lines]
        resolve_status(LifecycleStatus.RECEIVED, lines)
        assert [line.model_dump() for line in lines] == snapshot


# ============================================================================
# HELPERS
# ============================================================================


class TestLifecycleHelpers:
    """Tests for completion helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("5.4", CompletionState.COMPLETE),
            ("  Negative ", CompletionState.COMPLETE),
            ("", CompletionState.PENDING),
            ("   ", CompletionState.PENDING),
            (None, CompletionState.PENDING),
        ],
    )
    def test_completion_for(self, value, expected):
        assert completion_for(value) == expected

    def test_all_complete_requires_at_least_one_line(self):
        assert all_complete([]) is False
        assert all_complete(_make_lines("Complete")) is True
        assert all_complete(_make_lines("Complete", "Flagged")) is False

    def test_is_terminal(self):
        assert is_terminal(LifecycleStatus.PUBLISHED)
        assert is_terminal(LifecycleStatus.REJECTED)
        assert not is_terminal(LifecycleStatus.VERIFIED)

    def test_is_entered_ignores_whitespace(self):
        assert AnalysisLine(code="GLU", result_value=" 98 ").is_entered
        assert not AnalysisLine(code="GLU", result_value="  ").is_entered
        assert not AnalysisLine(code="GLU").is_entered
