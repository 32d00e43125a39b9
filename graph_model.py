"""
╔══════════════════════════════════════════════════════════════════╗
║         Graph Traversal Visualizer v1.0 — GRAPH MODEL            ║
║                                                                  ║
║  License : MIT                                                   ║
║                                                                  ║
║  Description:                                                    ║
║    Mutable store for the user-drawn undirected graph: nodes,     ║
║    edges and an insertion-ordered adjacency index.  Pure logic,  ║
║    no GUI code — the visualizer window and the exporters only    ║
║    read from it.                                                 ║
║                                                                  ║
║  Invariants:                                                     ║
║    • Node ids are unique (A, B, …, Z, AA, AB, …)                 ║
║    • At most one edge per unordered pair, no self loops          ║
║    • Adjacency is symmetric: 2 × edges == Σ len(neighbours)      ║
╚══════════════════════════════════════════════════════════════════╝
"""

# ══════════════════════════════════════════════════════════════
#  IMPORTS
# ══════════════════════════════════════════════════════════════
import logging
import math
from dataclasses import dataclass

_LOGGER = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════
#  CONSTANTS
# ══════════════════════════════════════════════════════════════
NODE_RADIUS = 20             # Node circle radius (pixels) on canvas

DEFAULT  = "default"         # Never touched by a traversal
IN_QUEUE = "in-queue"        # Discovered, waiting in queue / stack
VISITING = "visiting"        # Currently being expanded
VISITED  = "visited"         # Fully processed

NODE_STATES = (DEFAULT, IN_QUEUE, VISITING, VISITED)


# ══════════════════════════════════════════════════════════════
#  LABEL GENERATOR
# ══════════════════════════════════════════════════════════════

def next_label(counter: int) -> str:
    """
    Map an insertion counter to a node label.

    Bijective base-26 using A–Z (spreadsheet column naming):
    0 → "A", 25 → "Z", 26 → "AA", 27 → "AB", 702 → "AAA".

    Args:
        counter: Non-negative insertion index.

    Returns:
        Upper-case label string.
    """
    if counter < 0:
        raise ValueError(f"label counter must be non-negative, got {counter}")
    label = ""
    num = counter
    while num >= 0:
        label = chr(ord("A") + num % 26) + label
        num = num // 26 - 1
    return label


# ══════════════════════════════════════════════════════════════
#  NODE / EDGE
# ══════════════════════════════════════════════════════════════

@dataclass
class Node:
    """
    A labelled point of the graph, drawn as a circle.

    Attributes:
        id:     Label from next_label(), immutable once assigned
        x, y:   Canvas-local centre coordinates
        radius: Circle radius used for hit testing and drawing
        state:  One of NODE_STATES
    """
    id: str
    x: float
    y: float
    radius: float = NODE_RADIUS
    state: str = DEFAULT

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies strictly inside the circle."""
        return math.hypot(x - self.x, y - self.y) < self.radius


@dataclass(frozen=True)
class Edge:
    """Undirected connection; (a, b) and (b, a) are the same edge."""
    source: str
    target: str

    def connects(self, a: str, b: str) -> bool:
        return {self.source, self.target} == {a, b}


def _node_id(node) -> str:
    return node.id if isinstance(node, Node) else node


# ══════════════════════════════════════════════════════════════
#  GRAPH
# ══════════════════════════════════════════════════════════════

class Graph:
    """
    Undirected graph built interactively from canvas clicks.

    Attributes:
        nodes     (list[Node])          : In creation order (draw order).
        edges     (list[Edge])          : In insertion order.
        _adjacency(dict[str, list[str]]): Neighbour ids per node, in the
                                          order the edges were added.
        _counter  (int)                 : Next label index.
    """

    def __init__(self):
        self.nodes = []
        self.edges = []
        self._adjacency = {}
        self._by_id = {}
        self._counter = 0

    # ── Queries ───────────────────────────────────────────────

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def adjacency(self) -> dict:
        """Snapshot of the adjacency index (lists copied)."""
        return {nid: list(nbrs) for nid, nbrs in self._adjacency.items()}

    def get_node(self, node_id: str):
        """Return the node with this id, or None."""
        return self._by_id.get(node_id)

    def neighbors(self, node) -> list:
        return list(self._adjacency[_node_id(node)])

    def has_edge(self, a, b) -> bool:
        a, b = _node_id(a), _node_id(b)
        return any(e.connects(a, b) for e in self.edges)

    def find_node_at(self, x: float, y: float):
        """
        Hit-test a canvas point.

        Scans in reverse creation order so that, where circles
        overlap, the most recently added (top-most) node wins.

        Returns:
            The Node under (x, y), or None.
        """
        for node in reversed(self.nodes):
            if node.contains(x, y):
                return node
        return None

    # ── Mutations ─────────────────────────────────────────────

    def add_node(self, x: float, y: float, radius: float = NODE_RADIUS) -> Node:
        """Create a node at (x, y) labelled with the next label."""
        node = Node(next_label(self._counter), x, y, radius)
        self._counter += 1
        self.nodes.append(node)
        self._by_id[node.id] = node
        self._adjacency[node.id] = []
        _LOGGER.debug("added node %s at (%s, %s)", node.id, x, y)
        return node

    def add_edge(self, a, b) -> bool:
        """
        Connect two existing nodes.

        Args:
            a, b: Node objects or node ids.

        Returns:
            False (and no mutation) for a self loop or an existing
            pair in either direction, True otherwise.
        """
        a, b = _node_id(a), _node_id(b)
        if a == b:
            _LOGGER.debug("rejected self loop on %s", a)
            return False
        if a not in self._adjacency or b not in self._adjacency:
            raise KeyError(f"unknown node in edge {a!r}-{b!r}")
        if self.has_edge(a, b):
            _LOGGER.debug("edge %s-%s already exists", a, b)
            return False
        self.edges.append(Edge(a, b))
        self._adjacency[a].append(b)
        self._adjacency[b].append(a)
        _LOGGER.debug("added edge %s-%s", a, b)
        return True

    def reset_states(self) -> None:
        """Put every node back into the default visual state."""
        for node in self.nodes:
            node.state = DEFAULT

    def clear(self) -> None:
        """Drop everything and restart labels at "A"."""
        self.nodes.clear()
        self.edges.clear()
        self._adjacency.clear()
        self._by_id.clear()
        self._counter = 0
