"""
Tests for the Session: run invocation, locking and playback passthrough.
"""

import pytest

from conftest import metadata
from pathviz.core.algorithms import Algorithm
from pathviz.core.errors import AlreadyRunning, GridLocked, UnknownAlgorithm
from pathviz.core.session import Session
from pathviz.core.types import CursorState, Display


@pytest.fixture
def session(open_5x5) -> Session:
    return Session(open_5x5)


class TestRun:
    """Run invocation."""

    @pytest.mark.parametrize("name", ["bfs", "BFS", " Dijkstra ", "dfs", Algorithm.DIJKSTRA])
    def test_accepts_names_and_enum(self, session, name):
        """Algorithm names are case-insensitive; the enum works too."""
        trace = session.run(name)
        assert trace.found
        assert session.running

    def test_unknown_algorithm(self, session):
        """Anything else raises UnknownAlgorithm and leaves the grid unlocked."""
        with pytest.raises(UnknownAlgorithm):
            session.run("astar")
        assert not session.running
        assert not session.grid.locked

    def test_run_locks_grid(self, session):
        """Edits are rejected while the trace is active."""
        session.run("bfs")
        assert session.grid.locked
        with pytest.raises(GridLocked):
            session.set_obstacle((2, 2))
        with pytest.raises(GridLocked):
            session.move_target((3, 3))
        with pytest.raises(GridLocked):
            session.clear_obstacles()

    def test_second_run_rejected(self, session):
        """A new run needs an explicit stop first."""
        session.run("bfs")
        with pytest.raises(AlreadyRunning):
            session.run("dfs")

    def test_completed_playback_still_locked(self, session):
        """Reaching the end of the trace does not unlock the grid."""
        session.run("bfs")
        session.player.run_to_end()
        assert session.cursor.state is CursorState.COMPLETE
        with pytest.raises(AlreadyRunning):
            session.run("bfs")

    def test_stop_discards_and_unlocks(self, session):
        """stop() drops the trace and allows edits and runs again."""
        session.run("bfs")
        session.step()
        session.stop()
        assert session.trace is None
        assert session.cursor is None
        session.set_obstacle((2, 2))
        assert session.run("dijkstra").found

    def test_unreachable_is_not_an_error(self, walled):
        """A walled-off target completes normally with found=False."""
        session = Session(walled)
        trace = session.run("dijkstra")
        assert not trace.found
        assert len(trace) == 9

    def test_run_leaves_grid_metadata_alone(self, session):
        """The editable grid carries no search metadata after a run."""
        before = metadata(session.grid)
        session.run("dijkstra")
        assert metadata(session.grid) == before

    def test_default_grid(self):
        """A session without a grid builds the default one."""
        assert Session().grid.rows == 20


class TestPlayback:
    """Playback calls forwarded to the active player."""

    def test_no_run_no_playback(self, session):
        """Without a run every playback call returns None."""
        assert session.step() is None
        assert session.play() is None
        assert session.pause() is None
        assert session.resume() is None
        assert session.reset() is None

    def test_play_pause_resume_reset(self, session):
        """Cursor states follow the player."""
        session.run("bfs")
        assert session.play().state is CursorState.PLAYING
        state = session.step()
        assert state.display is Display.EXPLORED
        assert session.pause().state is CursorState.PAUSED
        assert session.step() is None
        assert session.resume().state is CursorState.PLAYING
        cursor = session.reset()
        assert (cursor.position, cursor.state) == (0, CursorState.IDLE)

    def test_path_cells_last(self, session):
        """The final transitions of a successful run are path cells."""
        trace = session.run("bfs")
        states = session.player.run_to_end()
        path_states = [s for s in states if s.display is Display.PATH]
        assert len(path_states) == len(trace.path_order) - 2
        assert states[-len(path_states):] == path_states
