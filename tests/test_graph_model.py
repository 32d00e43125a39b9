import pytest

from graph_model import (DEFAULT, VISITED, VISITING, Graph, Node,
                         next_label)


@pytest.mark.parametrize("counter,label", [
    (0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"),
    (51, "AZ"), (52, "BA"), (701, "ZZ"), (702, "AAA"),
])
def test_next_label(counter, label):
    assert next_label(counter) == label


def test_next_label_rejects_negative():
    with pytest.raises(ValueError):
        next_label(-1)


def test_add_node_labels_follow_sequence(graph):
    ids = [graph.add_node(i, i).id for i in range(27)]
    assert ids == [chr(ord("A") + i) for i in range(26)] + ["AA"]


def test_new_node_defaults(graph):
    node = graph.add_node(10, 20)
    assert node.state == DEFAULT
    assert node.radius == 20
    assert graph.neighbors(node) == []


def test_add_edge_keeps_adjacency_symmetric(make_graph):
    g = make_graph(5, [("A", "B"), ("A", "C"), ("C", "D"), ("E", "B")])
    total = sum(len(v) for v in g.adjacency.values())
    assert g.edge_count * 2 == total
    for a, nbrs in g.adjacency.items():
        for b in nbrs:
            assert a in g.adjacency[b]


def test_reversed_duplicate_edge_is_rejected(graph):
    a, b = graph.add_node(0, 0), graph.add_node(100, 0)
    assert graph.add_edge(a, b) is True
    assert graph.add_edge(b, a) is False
    assert graph.add_edge(a, b) is False
    assert graph.edge_count == 1
    assert graph.neighbors("A") == ["B"]


def test_self_loop_is_rejected(graph):
    a = graph.add_node(0, 0)
    assert graph.add_edge(a, a) is False
    assert graph.edge_count == 0
    assert graph.neighbors(a) == []


def test_edge_to_unknown_node_raises(graph):
    graph.add_node(0, 0)
    with pytest.raises(KeyError):
        graph.add_edge("A", "Z")


def test_adjacency_keeps_insertion_order(graph):
    for i in range(3):
        graph.add_node(i * 50, 0)
    graph.add_edge("A", "C")
    graph.add_edge("A", "B")
    assert graph.neighbors("A") == ["C", "B"]


def test_adjacency_snapshot_is_a_copy(make_graph):
    g = make_graph(2, [("A", "B")])
    snap = g.adjacency
    snap["A"].append("X")
    assert g.neighbors("A") == ["B"]


def test_find_node_at_uses_strict_radius(graph):
    graph.add_node(100, 100)
    assert graph.find_node_at(110, 105).id == "A"
    assert graph.find_node_at(120, 100) is None
    assert graph.find_node_at(300, 300) is None


def test_find_node_at_prefers_latest_on_overlap(graph):
    graph.add_node(100, 100)
    graph.add_node(110, 100)
    assert graph.find_node_at(105, 100).id == "B"
    assert graph.find_node_at(85, 100).id == "A"


def test_node_contains():
    node = Node("A", 0, 0, radius=5)
    assert node.contains(3, 3)
    assert not node.contains(5, 0)


def test_reset_states(make_graph):
    g = make_graph(3, [])
    g.nodes[0].state = VISITED
    g.nodes[2].state = VISITING
    g.reset_states()
    assert {n.state for n in g.nodes} == {DEFAULT}


def test_clear_restarts_labels(make_graph):
    g = make_graph(3, [("A", "B")])
    g.clear()
    assert g.node_count == 0
    assert g.edge_count == 0
    assert g.adjacency == {}
    assert g.get_node("A") is None
    assert g.add_node(0, 0).id == "A"
