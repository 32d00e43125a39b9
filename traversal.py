"""
Traversal engine: BFS / DFS step generation.

Both algorithms read an adjacency snapshot and return the ordered list
of visual transitions the animation player replays.  They never touch
the Graph itself or any rendering concern.

Step Schema
───────────
  Step(id="B", state="in-queue")   # B discovered
  Step(id="B", state="visiting")   # B being expanded
  Step(id="B", state="visited")    # B done
"""

import logging
from collections import deque
from dataclasses import dataclass

from graph_model import IN_QUEUE, VISITING, VISITED

_LOGGER = logging.getLogger(__name__)


class UnknownNodeError(KeyError):
    """Raised when a traversal starts from an id absent from the graph."""


@dataclass(frozen=True)
class Step:
    """One discrete visual transition of a traversal."""
    id: str
    state: str


def _check_start(adjacency: dict, start: str) -> None:
    if start not in adjacency:
        raise UnknownNodeError(start)


def bfs(adjacency: dict, start: str) -> list:
    """
    Breadth-first traversal.

    Neighbours are enqueued in adjacency (edge-insertion) order, so ties
    within a level are broken by insertion order, not alphabetically.

    Args:
        adjacency: node id → ordered neighbour ids
        start:     id of the first node

    Returns:
        list[Step]
    """
    _check_start(adjacency, start)
    steps = []
    visited = {start}
    queue = deque([start])
    steps.append(Step(start, IN_QUEUE))

    while queue:
        current = queue.popleft()
        steps.append(Step(current, VISITING))
        for neighbor in adjacency[current]:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
                steps.append(Step(neighbor, IN_QUEUE))
        steps.append(Step(current, VISITED))

    _LOGGER.debug("bfs from %s: %d steps", start, len(steps))
    return steps


def dfs(adjacency: dict, start: str) -> list:
    """
    Depth-first traversal with an explicit stack.

    A node may sit on the stack more than once; stale entries are
    skipped when popped.  Neighbours are pushed in reverse so the
    first-added neighbour is explored first.

    Args:
        adjacency: node id → ordered neighbour ids
        start:     id of the first node

    Returns:
        list[Step]
    """
    _check_start(adjacency, start)
    steps = []
    visited = set()
    stack = [start]

    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        steps.append(Step(current, VISITING))
        for neighbor in reversed(adjacency[current]):
            if neighbor not in visited:
                stack.append(neighbor)
                steps.append(Step(neighbor, IN_QUEUE))
        steps.append(Step(current, VISITED))

    _LOGGER.debug("dfs from %s: %d steps", start, len(steps))
    return steps


ALGORITHMS = {
    "bfs": bfs,
    "dfs": dfs,
}


def traverse(kind: str, adjacency: dict, start: str) -> list:
    """Run the algorithm named by *kind* ("bfs" or "dfs")."""
    try:
        algorithm = ALGORITHMS[kind]
    except KeyError:
        raise ValueError(f"unknown traversal {kind!r}") from None
    return algorithm(adjacency, start)
