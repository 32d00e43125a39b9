"""
╔══════════════════════════════════════════════════════════════════╗
║       Graph Traversal Visualizer v1.0 — ANIMATION PLAYER         ║
║                                                                  ║
║  Replays a traversal's Step list on the live graph, one visual   ║
║  change per tick.                                                ║
║                                                                  ║
║  State machine                                                   ║
║  ─────────────                                                   ║
║    ┌──────┐  play(steps≠[])  ┌─────────┐                         ║
║    │ IDLE │ ───────────────► │ RUNNING │ ──tick──► apply step    ║
║    └──────┘ ◄─────────────── └─────────┘                         ║
║          finalisation tick / stop()                              ║
║                                                                  ║
║  The timer is injected: the window passes ``widget.after`` /     ║
║  ``widget.after_cancel``; tests drive ``tick()`` from a virtual  ║
║  clock.                                                          ║
╚══════════════════════════════════════════════════════════════════╝
"""

import logging
from dataclasses import replace

from graph_model import DEFAULT, VISITING, VISITED

_LOGGER = logging.getLogger(__name__)

IDLE    = "idle"
RUNNING = "running"

DEFAULT_INTERVAL_MS = 800


class AnimationPlayer:
    """
    Timed replay of a traversal.

    Each tick while RUNNING either:
        • applies the next step — after first downgrading any
          "visiting" node to "visited" so that at most one node is
          shown as visiting — or
        • when every step has been applied, turns every touched node
          "visited", stops the timer and returns to IDLE.

    A run of k steps therefore applies its steps on ticks 1..k and
    returns to IDLE on tick k + 1.

    Attributes:
        graph       : Object exposing ``nodes`` and ``get_node(id)``.
        interval_ms (int)            : Delay between ticks.
        state       (str)            : IDLE or RUNNING.
        steps       (list[Step])     : Steps of the current run.
        cursor      (int)            : Index of the next step to apply.
        ticks       (int)            : Ticks processed in the current run.
        after_id                     : Handle of the pending tick, if any.
    """

    def __init__(self, graph, schedule=None, cancel=None,
                 interval_ms=DEFAULT_INTERVAL_MS,
                 on_frame=None, on_finish=None):
        """
        Args:
            graph:       The Graph whose node states are animated.
            schedule:    ``schedule(delay_ms, callback) -> handle``; None
                         means the caller drives ``tick()`` itself.
            cancel:      ``cancel(handle)`` counterpart of *schedule*.
            interval_ms: Milliseconds per tick.
            on_frame:    Called after every tick (redraw hook).
            on_finish:   Called once when the run returns to IDLE.
        """
        self.graph = graph
        self._schedule = schedule
        self._cancel = cancel
        self.interval_ms = interval_ms
        self.on_frame = on_frame
        self.on_finish = on_finish

        self.state = IDLE
        self.steps = []
        self.cursor = 0
        self.ticks = 0
        self.after_id = None

    @property
    def is_animating(self) -> bool:
        return self.state == RUNNING

    @property
    def current_step(self):
        """The most recently applied step, or None."""
        if self.cursor == 0:
            return None
        return self.steps[self.cursor - 1]

    # ── Control ───────────────────────────────────────────────

    def play(self, steps) -> bool:
        """
        Start replaying *steps*.

        Returns:
            False for an empty sequence (stays IDLE), True otherwise.
        """
        steps = list(steps)
        if not steps:
            return False
        if self.is_animating:
            raise RuntimeError("animation already running")
        self.steps = steps
        self.cursor = 0
        self.ticks = 0
        self.state = RUNNING
        _LOGGER.info("animation started: %d steps, %d ms/tick",
                     len(steps), self.interval_ms)
        self._schedule_next()
        return True

    def stop(self) -> None:
        """Abort the run without finalising (used by a full reset)."""
        self._cancel_pending()
        if self.is_animating:
            _LOGGER.info("animation stopped at step %d/%d",
                         self.cursor, len(self.steps))
        self.state = IDLE
        self.steps = []
        self.cursor = 0

    # ── Tick ──────────────────────────────────────────────────

    def tick(self) -> None:
        """Advance the state machine by one tick."""
        if not self.is_animating:
            return
        self.after_id = None
        self.ticks += 1

        if self.cursor >= len(self.steps):
            self._finalise()
            return

        for node in self.graph.nodes:
            if node.state == VISITING:
                node.state = VISITED

        step = self.steps[self.cursor]
        node = self.graph.get_node(step.id)
        if node is not None:
            node.state = step.state
        self.cursor += 1

        if self.on_frame:
            self.on_frame()
        self._schedule_next()

    def _finalise(self) -> None:
        for node in self.graph.nodes:
            if node.state != DEFAULT:
                node.state = VISITED
        self.state = IDLE
        _LOGGER.info("animation finished after %d ticks", self.ticks)
        if self.on_frame:
            self.on_frame()
        if self.on_finish:
            self.on_finish()

    # ── Scheduling ────────────────────────────────────────────

    def _schedule_next(self) -> None:
        if self._schedule is not None and self.is_animating:
            self.after_id = self._schedule(self.interval_ms, self.tick)

    def _cancel_pending(self) -> None:
        if self.after_id is not None and self._cancel is not None:
            self._cancel(self.after_id)
        self.after_id = None


# ══════════════════════════════════════════════════════════════
#  OFF-LINE REPLAY
# ══════════════════════════════════════════════════════════════

class _Snapshot:
    """Detached copy of a graph's nodes, all in the default state."""

    def __init__(self, graph):
        self.nodes = [replace(n, state=DEFAULT) for n in graph.nodes]
        self._by_id = {n.id: n for n in self.nodes}

    def get_node(self, node_id):
        return self._by_id.get(node_id)

    def states(self) -> dict:
        return {n.id: n.state for n in self.nodes}


def replay_frames(graph, steps) -> list:
    """
    Compute the node states after every tick of a run.

    Uses a detached copy of *graph*, so the live graph is untouched.

    Returns:
        list[dict[str, str]]: one ``{node_id: state}`` per tick,
        including the final finalisation tick.
    """
    board = _Snapshot(graph)
    player = AnimationPlayer(board)
    frames = []
    if not player.play(steps):
        return frames
    while player.is_animating:
        player.tick()
        frames.append(board.states())
    return frames
