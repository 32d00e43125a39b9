"""Adjacency matrix of the current graph snapshot."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AdjacencyMatrix:
    """
    Square 0/1 matrix with its row/column labels.

    Attributes:
        labels: Node ids sorted lexicographically.
        matrix: matrix[i][j] == 1 iff labels[i] and labels[j] share an edge.
    """
    labels: list
    matrix: list

    @property
    def size(self) -> int:
        return len(self.labels)

    def rows(self):
        """Yield (label, row) pairs, for table rendering."""
        return zip(self.labels, self.matrix)


def _endpoints(edge):
    if isinstance(edge, (tuple, list)):
        return edge[0], edge[1]
    return edge.source, edge.target


def build_matrix(nodes, edges):
    """
    Build the adjacency matrix for *nodes* and *edges*.

    Labels follow plain string ordering ("AA" sorts before "B"), unlike
    the insertion-ordered adjacency index the traversals use.

    Args:
        nodes: Node objects or node ids.
        edges: Edge objects or (a, b) pairs.

    Returns:
        AdjacencyMatrix, or None when the graph has no nodes.
    """
    labels = sorted(getattr(n, "id", n) for n in nodes)
    if not labels:
        return None

    index = {label: i for i, label in enumerate(labels)}
    size = len(labels)
    grid = [[0] * size for _ in range(size)]
    for edge in edges:
        a, b = _endpoints(edge)
        i, j = index[a], index[b]
        grid[i][j] = 1
        grid[j][i] = 1
    return AdjacencyMatrix(labels, grid)
