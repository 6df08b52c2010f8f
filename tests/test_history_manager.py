"""
Tests for the bounded undo/redo stacks.

Covers:
- Initial entry convention (undo needs two entries)
- Undo hands back the top entry and moves the current state to redo
- New captures drop redo history
- FIFO eviction at capacity
- Captures are ignored while restoring
- Stored states are isolated copies
- Listener notifications
"""
import pytest

from utils.history_manager import HistoryManager, HistoryPhase


@pytest.fixture
def hm():
    return HistoryManager(max_history=5)


# ══════════════════════════════════════════════════════════════════════════
# Basic stack behaviour
# ══════════════════════════════════════════════════════════════════════════

class TestHistoryStacks:

    def test_initial_state_empty(self, hm):
        assert not hm.can_undo()
        assert not hm.can_redo()

    def test_single_capture_no_undo(self, hm):
        hm.capture({"v": 0}, "initial")
        assert not hm.can_undo()  # the bottom entry is the initial state
        assert hm.undo({"v": 0}) is None

    def test_undo_returns_state_before_action(self, hm):
        hm.capture({"v": 0}, "initial")
        hm.capture({"v": 0}, "Stroke")  # state right before the stroke
        restored = hm.undo({"v": 1})
        assert restored == {"v": 0}
        assert len(hm.undo_stack) == 1
        assert len(hm.redo_stack) == 1

    def test_redo_returns_state_that_was_current(self, hm):
        hm.capture({"v": 0}, "initial")
        hm.capture({"v": 0}, "Stroke")
        hm.undo({"v": 1})
        assert hm.redo({"v": 0}) == {"v": 1}
        assert len(hm.undo_stack) == 2
        assert not hm.can_redo()

    def test_redo_at_end_returns_none(self, hm):
        hm.capture({"v": 0}, "initial")
        assert hm.redo({"v": 0}) is None

    def test_capture_clears_redo(self, hm):
        hm.capture({"v": 0}, "initial")
        hm.capture({"v": 0}, "a")
        hm.undo({"v": 1})
        assert hm.can_redo()
        hm.capture({"v": 0}, "b")
        assert not hm.can_redo()

    def test_callable_state_is_evaluated(self, hm):
        hm.capture(lambda: {"v": 7}, "lazy")
        assert hm.undo_stack[-1].state == {"v": 7}

    def test_descriptions(self, hm):
        hm.capture({"v": 0}, "New Canvas")
        hm.capture({"v": 0}, "Brush Stroke")
        assert hm.get_undo_description() == "Brush Stroke"
        hm.undo({"v": 1})
        assert hm.get_redo_description() == "Brush Stroke"
        assert hm.get_undo_description() == ""

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            HistoryManager(max_history=0)

    def test_clear(self, hm):
        hm.capture({"v": 0})
        hm.capture({"v": 1})
        hm.clear()
        assert hm.undo_stack == [] and hm.redo_stack == []


# ══════════════════════════════════════════════════════════════════════════
# Capacity
# ══════════════════════════════════════════════════════════════════════════

class TestEviction:

    def test_oldest_entries_evicted_first(self, hm):
        for i in range(8):
            hm.capture({"v": i}, f"step {i}")
        assert len(hm.undo_stack) == 5
        assert [e.state["v"] for e in hm.undo_stack] == [3, 4, 5, 6, 7]

    def test_redo_respects_capacity(self):
        hm = HistoryManager(max_history=2)
        hm.capture({"v": 0})
        hm.capture({"v": 1})
        hm.undo({"v": 2})
        hm.capture({"v": 1})
        assert len(hm.undo_stack) == 2


# ══════════════════════════════════════════════════════════════════════════
# Restoring phase and isolation
# ══════════════════════════════════════════════════════════════════════════

class TestRestoringPhase:

    def test_capture_is_noop_while_restoring(self, hm):
        hm.capture({"v": 0}, "initial")
        with hm.restoring():
            assert hm.is_restoring
            assert hm.capture({"v": 1}, "ignored") is False
        assert hm.phase is HistoryPhase.RECORDING
        assert len(hm.undo_stack) == 1

    def test_lazy_state_not_built_while_restoring(self, hm):
        calls = []
        with hm.restoring():
            hm.capture(lambda: calls.append(1), "ignored")
        assert calls == []

    def test_phase_restored_after_error(self, hm):
        with pytest.raises(RuntimeError):
            with hm.restoring():
                raise RuntimeError("boom")
        assert not hm.is_restoring

    def test_nested_restoring_keeps_outer_phase(self, hm):
        with hm.restoring():
            with hm.restoring():
                pass
            assert hm.is_restoring
        assert not hm.is_restoring


class TestIsolation:

    def test_saved_state_is_deep_copy(self, hm):
        data = {"nested": [1, 2, 3]}
        hm.capture(data, "save")
        data["nested"].append(999)
        assert hm.undo_stack[-1].state == {"nested": [1, 2, 3]}

    def test_returned_state_is_a_copy(self, hm):
        hm.capture({"nested": [1]}, "a")
        hm.capture({"nested": [1]}, "b")
        restored = hm.undo({"nested": [2]})
        restored["nested"].append(5)
        assert hm.undo_stack[-1].state == {"nested": [1]}


class TestListeners:

    def test_listener_receives_flags(self, hm):
        seen = []
        hm.add_listener(lambda can_undo, can_redo: seen.append((can_undo, can_redo)))
        hm.capture({"v": 0})
        hm.capture({"v": 0})
        hm.undo({"v": 1})
        assert seen == [(False, False), (True, False), (False, True)]

    def test_failing_listener_does_not_break_history(self, hm):
        def broken(can_undo, can_redo):
            raise RuntimeError("listener failure")
        hm.add_listener(broken)
        assert hm.capture({"v": 0}) is True

    def test_remove_listener(self, hm):
        seen = []
        callback = lambda *flags: seen.append(flags)
        hm.add_listener(callback)
        hm.remove_listener(callback)
        hm.capture({"v": 0})
        assert seen == []
