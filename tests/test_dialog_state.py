"""Tests for the print dialog state machine."""

import pytest

from wit.dialog.state import DialogPhase, DialogState, InvalidTransition
from wit.models.label import LabelSizePreset

from conftest import make_item_label


class TestDialogState:
    """Tests for DialogState transitions."""

    def test_defaults(self):
        state = DialogState()
        assert state.phase == DialogPhase.IDLE
        assert not state.loading
        assert state.labels == ()
        assert state.error is None
        assert state.columns == 2
        assert state.label_size == LabelSizePreset.MEDIUM
        assert state.show_qr_only is False

    def test_load_and_succeed(self):
        state = DialogState()
        state.start_loading()
        assert state.loading
        state.succeed([make_item_label()])
        assert state.phase == DialogPhase.READY
        assert not state.loading
        assert len(state.labels) == 1

    def test_fail_clears_labels(self):
        state = DialogState()
        state.start_loading()
        state.fail("Network timeout")
        assert state.phase == DialogPhase.FAILED
        assert state.error == "Network timeout"
        assert state.labels == ()

    def test_start_loading_clears_previous_result(self):
        state = DialogState()
        state.start_loading()
        state.fail("boom")
        state.start_loading()
        assert state.error is None
        assert state.loading

    def test_abort(self):
        state = DialogState()
        state.start_loading()
        state.abort()
        assert state.phase == DialogPhase.IDLE
        assert not state.loading

    @pytest.mark.parametrize("operation", ["succeed", "fail", "abort"])
    def test_requires_loading(self, operation):
        state = DialogState()
        args = {"succeed": ([],), "fail": ("boom",), "abort": ()}[operation]
        with pytest.raises(InvalidTransition):
            getattr(state, operation)(*args)

    def test_cannot_succeed_twice(self):
        state = DialogState()
        state.start_loading()
        state.succeed([])
        with pytest.raises(InvalidTransition, match="Cannot succeed while ready"):
            state.succeed([])

    def test_reset(self):
        state = DialogState()
        state.columns = 4
        state.show_qr_only = True
        state.label_size = LabelSizePreset.SHELF
        state.start_loading()
        state.succeed([make_item_label()])
        state.reset()
        assert state.phase == DialogPhase.IDLE
        assert state.labels == ()
        assert state.columns == 2
        assert state.show_qr_only is False
        assert state.label_size == LabelSizePreset.MEDIUM

    @pytest.mark.parametrize("columns", [0, 5, -1])
    def test_columns_out_of_range(self, columns):
        state = DialogState()
        with pytest.raises(ValueError):
            state.columns = columns

    @pytest.mark.parametrize("columns", [1, 2, 3, 4])
    def test_columns_in_range(self, columns):
        state = DialogState()
        state.columns = columns
        assert state.columns == columns
