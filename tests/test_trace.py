"""
Tests for RunTrace construction and the TracePlayer cursor.
"""

import pytest

from pathviz import config
from pathviz.core.bfs import BFSAlgo
from pathviz.core.trace import RunTrace, TracePlayer
from pathviz.core.types import CursorState, Display, SearchResult, TraceCursor, TraceEvent, TraceKind

EXPLORED = [(0, 1), (2, 1), (1, 0), (1, 2), (0, 0), (0, 2), (2, 0)]


@pytest.fixture
def player(layout) -> TracePlayer:
    """Player over a BFS run on a 3x3 grid, Source (1,1), Target (2,2)."""
    grid = layout(
        "...",
        ".S.",
        "..T",
    )
    result = BFSAlgo().solve(grid)
    return TracePlayer.from_result(result, grid.source, grid.target, algorithm="BFS")


class TestRunTrace:
    """Trace building."""

    def test_explored_then_path_without_specials(self, player):
        """Explored cells come first, then path cells; Source/Target are left out."""
        trace = player.trace
        assert [e.pos for e in trace.events] == EXPLORED + [(2, 1)]
        assert [e.kind for e in trace.events] == [TraceKind.EXPLORED] * 7 + [TraceKind.PATH_STEP]
        assert len(trace) == 8
        assert trace.found
        assert trace.algorithm == "BFS"

    def test_raw_orders_kept(self, player):
        """The trace also records the unfiltered engine output."""
        assert player.trace.visited_order[0] == (1, 1)
        assert player.trace.path_order == ((1, 1), (2, 1), (2, 2))

    def test_metrics_carried(self, player):
        """The engine's final counters ride along on the trace."""
        assert player.trace.metrics["popped"] == 9
        assert player.trace.metrics["frontier_size"] == 0
        assert player.trace.metrics["path_len"] == 3

    def test_unreachable_trace(self):
        """No path means explored events only and found=False."""
        result = SearchResult(visited_order=((0, 0), (0, 1)), path_order=())
        trace = RunTrace.build(result, (0, 0), (3, 3))
        assert [e.pos for e in trace.events] == [(0, 1)]
        assert not trace.found
        assert trace.metrics == {}

    def test_trace_is_immutable(self, player):
        """Traces cannot be modified after construction."""
        with pytest.raises(AttributeError):
            player.trace.events = ()


class TestPlayback:
    """Cursor movement."""

    def test_starts_idle(self, player):
        """A fresh player sits at position 0, IDLE."""
        assert player.cursor.position == 0
        assert player.cursor.state is CursorState.IDLE

    def test_step_returns_cell_states_in_order(self, player):
        """step() walks the trace and tags explored vs. path cells."""
        first = player.step()
        assert first.pos == (0, 1)
        assert first.display is Display.EXPLORED
        assert first.index == 0
        assert player.cursor.state is CursorState.PLAYING

        rest = player.run_to_end()
        assert [s.pos for s in rest] == EXPLORED[1:] + [(2, 1)]
        assert rest[-1].display is Display.PATH

    def test_complete_at_end(self, player):
        """Consuming the last event completes the cursor; further steps return None."""
        player.run_to_end()
        assert player.is_complete
        assert player.remaining == 0
        assert player.step() is None
        assert player.cursor.position == 8

    def test_pause_blocks_step_and_play(self, player):
        """While paused, step() and play() change nothing."""
        player.play()
        player.step()
        player.pause()
        assert player.step() is None
        player.play()
        assert player.cursor == TraceCursor(position=1, state=CursorState.PAUSED)

    def test_resume_continues(self, player):
        """resume() picks up where pause() left off."""
        player.step()
        player.pause()
        player.resume()
        assert player.cursor.state is CursorState.PLAYING
        assert player.step().pos == (2, 1)

    def test_reset_rewinds_without_recompute(self, player):
        """reset() returns to 0/IDLE and replays the same trace."""
        trace = player.trace
        first_pass = player.run_to_end()
        player.reset()
        assert player.cursor.position == 0
        assert player.cursor.state is CursorState.IDLE
        assert player.trace is trace
        assert player.run_to_end() == first_pass

    def test_empty_trace(self):
        """A run with nothing to show completes on the first step."""
        player = TracePlayer.from_result(SearchResult(path_order=((1, 1),)), (1, 1), (1, 1))
        assert len(player.trace) == 0
        assert player.step() is None
        assert player.is_complete

    def test_play_on_empty_trace_completes(self):
        """play() on an empty trace goes straight to COMPLETE."""
        player = TracePlayer.from_result(SearchResult(), (0, 0), (1, 1))
        assert player.play().state is CursorState.COMPLETE


class TestCadence:
    """Interval policies; the player itself never waits."""

    def test_default_delays(self, player):
        """Explored and path steps use the configured delays."""
        assert player.next_delay() == config.EXPLORED_STEP_DELAY
        for _ in range(7):
            player.step()
        assert player.next_delay() == config.PATH_STEP_DELAY
        player.step()
        assert player.next_delay() is None

    def test_custom_policy(self, player):
        """play(policy) installs the caller's cadence."""
        seen = []

        def policy(event: TraceEvent) -> float:
            seen.append(event.pos)
            return 0.5

        player.play(policy)
        assert player.next_delay() == 0.5
        assert seen == [(0, 1)]

    def test_states_so_far(self, player):
        """states_so_far() reflects exactly the consumed events."""
        for _ in range(3):
            player.step()
        assert player.states_so_far() == {
            (0, 1): Display.EXPLORED,
            (2, 1): Display.EXPLORED,
            (1, 0): Display.EXPLORED,
        }
        player.run_to_end()
        assert player.states_so_far()[(2, 1)] is Display.PATH
