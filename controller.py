"""
╔══════════════════════════════════════════════════════════════════╗
║         Graph Traversal Visualizer v1.0 — CONTROLLER             ║
║                                                                  ║
║  Owns the Graph and the AnimationPlayer and turns discrete       ║
║  commands / canvas clicks into calls on them.  No tkinter here;  ║
║  the window forwards events and redraws on ``on_change``.        ║
║                                                                  ║
║  Click handling                                                  ║
║  ──────────────                                                  ║
║    animating?            → ignored                               ║
║    algorithm selected    → node: run traversal, clear selection  ║
║                            empty space: ignored                  ║
║    node, none pending    → select it (edge gesture starts)       ║
║    node, other pending   → add edge, clear pending               ║
║    node, same pending    → cancel pending                        ║
║    empty space           → add node, clear pending               ║
╚══════════════════════════════════════════════════════════════════╝
"""

import logging
from dataclasses import dataclass

from animation import AnimationPlayer, DEFAULT_INTERVAL_MS
from graph_model import Graph
from matrix import build_matrix
from traversal import ALGORITHMS, traverse

_LOGGER = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════
#  COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AddNode:
    x: float
    y: float


@dataclass(frozen=True)
class AddEdge:
    a: str
    b: str


@dataclass(frozen=True)
class RunTraversal:
    kind: str
    start: str


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class ShowMatrix:
    pass


# ══════════════════════════════════════════════════════════════
#  CONTROLLER
# ══════════════════════════════════════════════════════════════

class GraphController:
    """
    Command dispatcher for the visualizer.

    Attributes:
        graph              (Graph)          : The graph being edited.
        player             (AnimationPlayer): Replays traversal steps.
        selected_node      (Node | None)    : First end of a pending edge.
        selected_algorithm (str | None)     : "bfs" / "dfs" awaiting a start.
        last_steps         (list[Step])     : Steps of the latest traversal.
        last_kind          (str | None)     : Algorithm of the latest traversal.
    """

    def __init__(self, graph=None, schedule=None, cancel=None,
                 interval_ms=DEFAULT_INTERVAL_MS,
                 on_change=None, on_status=None, on_finish=None):
        """
        Args:
            graph:       Graph to edit (a new empty one by default).
            schedule:    Timer hook forwarded to AnimationPlayer.
            cancel:      Timer-cancel hook forwarded to AnimationPlayer.
            interval_ms: Milliseconds per animation tick.
            on_change:   Called whenever something visible changed.
            on_status:   Called with a human-readable status message.
            on_finish:   Called when a traversal animation completes.
        """
        self.graph = graph if graph is not None else Graph()
        self.on_change = on_change
        self.on_status = on_status
        self._on_finish = on_finish
        self.player = AnimationPlayer(
            self.graph, schedule=schedule, cancel=cancel,
            interval_ms=interval_ms,
            on_frame=self._changed, on_finish=self._finished)

        self.selected_node = None
        self.selected_algorithm = None
        self.last_steps = []
        self.last_kind = None

        self._handlers = {
            AddNode:      lambda c: self.graph.add_node(c.x, c.y),
            AddEdge:      lambda c: self._add_edge(c.a, c.b),
            RunTraversal: lambda c: self.run_traversal(c.kind, c.start),
            Reset:        lambda c: self.reset(),
            ShowMatrix:   lambda c: self.show_matrix(),
        }

    # ── Status ────────────────────────────────────────────────

    @property
    def is_animating(self) -> bool:
        return self.player.is_animating

    def stats(self) -> dict:
        return {"nodes": self.graph.node_count,
                "edges": self.graph.edge_count}

    def _changed(self):
        if self.on_change:
            self.on_change()

    def _status(self, msg):
        _LOGGER.info(msg)
        if self.on_status:
            self.on_status(msg)

    def _finished(self):
        self._status("Traversal finished.")
        if self._on_finish:
            self._on_finish()

    # ── Dispatch ──────────────────────────────────────────────

    def dispatch(self, command):
        """Execute one command object and return its result."""
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"unsupported command {command!r}")
        _LOGGER.debug("dispatch %r", command)
        result = handler(command)
        self._changed()
        return result

    def _add_edge(self, a, b):
        return self.graph.add_edge(a, b)

    # ── Interaction ───────────────────────────────────────────

    def select_algorithm(self, kind) -> bool:
        """Arm a traversal; the next click on a node starts it."""
        if self.is_animating:
            _LOGGER.debug("algorithm selection dropped: animation running")
            return False
        if kind not in ALGORITHMS:
            raise ValueError(f"unknown traversal {kind!r}")
        self.selected_algorithm = kind
        self.selected_node = None
        self._status(f"{kind.upper()} selected. Click a node to start.")
        self._changed()
        return True

    def handle_click(self, x, y):
        """
        Apply one canvas click.

        Returns:
            The command that was dispatched, or None if the click
            only changed the selection or was ignored.
        """
        if self.is_animating:
            return None

        clicked = self.graph.find_node_at(x, y)

        if self.selected_algorithm:
            if clicked is None:
                return None
            command = RunTraversal(self.selected_algorithm, clicked.id)
            self.selected_algorithm = None
            self.dispatch(command)
            return command

        if clicked is not None:
            if self.selected_node is None:
                self.selected_node = clicked
                self._changed()
                return None
            pending, self.selected_node = self.selected_node, None
            if pending.id == clicked.id:
                self._changed()
                return None
            command = AddEdge(pending.id, clicked.id)
            self.dispatch(command)
            return command

        self.selected_node = None
        command = AddNode(x, y)
        self.dispatch(command)
        return command

    # ── Operations ────────────────────────────────────────────

    def run_traversal(self, kind, start):
        """
        Reset node colours, compute the steps and start the animation.

        Returns:
            The generated steps, or None if an animation is running.
        """
        if self.is_animating:
            _LOGGER.debug("traversal request dropped: animation running")
            return None
        self.graph.reset_states()
        steps = traverse(kind, self.graph.adjacency, start)
        self.last_steps = steps
        self.last_kind = kind
        self._status(f"Running {kind.upper()} from {start} ({len(steps)} steps).")
        self.player.play(steps)
        return steps

    def show_matrix(self):
        """
        Build the adjacency matrix.

        Returns:
            AdjacencyMatrix, None for an empty graph, or False if
            an animation is running and the request was dropped.
        """
        if self.is_animating:
            _LOGGER.debug("matrix request dropped: animation running")
            return False
        return build_matrix(self.graph.nodes, self.graph.edges)

    def reset(self):
        """Stop any animation and clear the graph and selections."""
        self.player.stop()
        self.graph.clear()
        self.selected_node = None
        self.selected_algorithm = None
        self.last_steps = []
        self.last_kind = None
        self._status("Graph cleared.")
