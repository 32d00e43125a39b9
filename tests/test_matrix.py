from matrix import AdjacencyMatrix, build_matrix


def test_path_graph_matrix(make_graph):
    g = make_graph(3, [("A", "B"), ("B", "C")])
    result = build_matrix(g.nodes, g.edges)
    assert result.labels == ["A", "B", "C"]
    assert result.matrix == [[0, 1, 0], [1, 0, 1], [0, 1, 0]]
    assert result.size == 3


def test_empty_graph_is_signalled(graph):
    assert build_matrix(graph.nodes, graph.edges) is None


def test_labels_sorted_lexicographically(make_graph):
    g = make_graph(28, [("AB", "B")])
    result = build_matrix(g.nodes, g.edges)
    assert result.labels[:4] == ["A", "AA", "AB", "B"]
    i, j = result.labels.index("AB"), result.labels.index("B")
    assert result.matrix[i][j] == result.matrix[j][i] == 1


def test_matrix_is_symmetric_with_zero_diagonal(make_graph):
    g = make_graph(5, [("E", "A"), ("C", "B"), ("A", "C"), ("D", "E")])
    m = build_matrix(g.nodes, g.edges).matrix
    for i in range(5):
        assert m[i][i] == 0
        for j in range(5):
            assert m[i][j] == m[j][i]
    assert sum(map(sum, m)) == 2 * g.edge_count


def test_accepts_plain_ids_and_pairs():
    result = build_matrix(["B", "A"], [("A", "B")])
    assert result == AdjacencyMatrix(["A", "B"], [[0, 1], [1, 0]])
    assert list(result.rows()) == [("A", [0, 1]), ("B", [1, 0])]


def test_isolated_nodes_are_zero_rows(make_graph):
    g = make_graph(2, [])
    assert build_matrix(g.nodes, g.edges).matrix == [[0, 0], [0, 0]]
