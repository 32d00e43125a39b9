import pytest

from graph_model import IN_QUEUE, VISITED, VISITING
from traversal import Step, UnknownNodeError, bfs, dfs, traverse


def _order(steps, state):
    return [s.id for s in steps if s.state == state]


def test_bfs_triangle_exact_steps(triangle):
    assert bfs(triangle.adjacency, "A") == [
        Step("A", IN_QUEUE),
        Step("A", VISITING),
        Step("B", IN_QUEUE),
        Step("C", IN_QUEUE),
        Step("A", VISITED),
        Step("B", VISITING),
        Step("B", VISITED),
        Step("C", VISITING),
        Step("C", VISITED),
    ]


def test_bfs_neighbours_wait_for_start(triangle):
    steps = bfs(triangle.adjacency, "A")
    a_visiting = steps.index(Step("A", VISITING))
    a_visited = steps.index(Step("A", VISITED))
    for nid in ("B", "C"):
        assert steps.index(Step(nid, VISITING)) > a_visiting
        assert steps.index(Step(nid, VISITED)) > a_visited


def test_bfs_breaks_ties_by_insertion_order(make_graph):
    g = make_graph(4, [("A", "C"), ("A", "B"), ("C", "D")])
    assert _order(bfs(g.adjacency, "A"), VISITING) == ["A", "C", "B", "D"]


def test_bfs_is_level_order(make_graph):
    g = make_graph(5, [("A", "B"), ("B", "D"), ("A", "C"), ("C", "E")])
    assert _order(bfs(g.adjacency, "A"), VISITING) == ["A", "B", "C", "D", "E"]


def test_dfs_chain_visits_in_order(chain):
    assert _order(dfs(chain.adjacency, "A"), VISITING) == ["A", "B", "C", "D"]


def test_dfs_chain_exact_steps(chain):
    assert dfs(chain.adjacency, "A") == [
        Step("A", VISITING), Step("B", IN_QUEUE), Step("A", VISITED),
        Step("B", VISITING), Step("C", IN_QUEUE), Step("B", VISITED),
        Step("C", VISITING), Step("D", IN_QUEUE), Step("C", VISITED),
        Step("D", VISITING), Step("D", VISITED),
    ]


def test_dfs_explores_first_added_neighbour_first(make_graph):
    g = make_graph(4, [("A", "B"), ("A", "C"), ("A", "D")])
    steps = dfs(g.adjacency, "A")
    assert _order(steps, IN_QUEUE) == ["D", "C", "B"]
    assert _order(steps, VISITING) == ["A", "B", "C", "D"]


def test_dfs_goes_deep_before_wide(make_graph):
    g = make_graph(5, [("A", "B"), ("A", "C"), ("B", "D"), ("D", "E")])
    assert _order(dfs(g.adjacency, "A"), VISITING) == ["A", "B", "D", "E", "C"]


def test_dfs_skips_stale_stack_entries(triangle):
    steps = dfs(triangle.adjacency, "A")
    assert _order(steps, IN_QUEUE) == ["C", "B", "C"]
    assert _order(steps, VISITING) == ["A", "B", "C"]
    assert _order(steps, VISITED) == ["A", "B", "C"]


@pytest.mark.parametrize("algorithm", [bfs, dfs])
def test_each_reachable_node_visited_once(make_graph, algorithm):
    g = make_graph(6, [("A", "B"), ("B", "C"), ("C", "A"), ("C", "D"),
                       ("E", "F")])
    steps = algorithm(g.adjacency, "A")
    assert sorted(_order(steps, VISITING)) == ["A", "B", "C", "D"]
    assert sorted(_order(steps, VISITED)) == ["A", "B", "C", "D"]
    assert not {"E", "F"} & {s.id for s in steps}


def test_isolated_start(make_graph):
    g = make_graph(2, [])
    assert bfs(g.adjacency, "B") == [
        Step("B", IN_QUEUE), Step("B", VISITING), Step("B", VISITED)]
    assert dfs(g.adjacency, "B") == [Step("B", VISITING), Step("B", VISITED)]


@pytest.mark.parametrize("algorithm", [bfs, dfs])
def test_unknown_start_raises(triangle, algorithm):
    with pytest.raises(UnknownNodeError):
        algorithm(triangle.adjacency, "Q")
    with pytest.raises(KeyError):
        algorithm(triangle.adjacency, "Q")


@pytest.mark.parametrize("kind", ["bfs", "dfs"])
def test_traversal_does_not_mutate_graph(triangle, kind):
    before = triangle.adjacency
    traverse(kind, triangle.adjacency, "B")
    assert triangle.adjacency == before
    assert {n.state for n in triangle.nodes} == {"default"}


def test_traverse_dispatch(chain):
    assert traverse("bfs", chain.adjacency, "A") == bfs(chain.adjacency, "A")
    assert traverse("dfs", chain.adjacency, "A") == dfs(chain.adjacency, "A")
    with pytest.raises(ValueError):
        traverse("dijkstra", chain.adjacency, "A")


def test_step_is_immutable():
    step = Step("A", VISITING)
    with pytest.raises(AttributeError):
        step.state = VISITED
