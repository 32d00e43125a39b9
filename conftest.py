import pytest

from graph_model import Graph


class VirtualClock:
    """Stand-in for ``widget.after`` / ``after_cancel`` driven by tests."""

    def __init__(self):
        self.now = 0
        self._pending = {}
        self._next_id = 0
        self.delays = []

    def schedule(self, delay_ms, callback):
        self._next_id += 1
        self._pending[self._next_id] = (self.now + delay_ms, callback)
        self.delays.append(delay_ms)
        return self._next_id

    def cancel(self, handle):
        self._pending.pop(handle, None)

    @property
    def pending(self):
        return len(self._pending)

    def advance(self, ms):
        """Move time forward, firing due callbacks in schedule order."""
        target = self.now + ms
        while True:
            due = [(t, h) for h, (t, _) in self._pending.items() if t <= target]
            if not due:
                break
            t, handle = min(due)
            _, callback = self._pending.pop(handle)
            self.now = t
            callback()
        self.now = target

    def run_until_idle(self, limit=10_000):
        fired = 0
        while self._pending and fired < limit:
            t, handle = min((t, h) for h, (t, _) in self._pending.items())
            _, callback = self._pending.pop(handle)
            self.now = t
            callback()
            fired += 1
        return fired


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("GRAPH_VIZ_SETTINGS", str(tmp_path / "settings.json"))


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def graph():
    return Graph()


def _build_graph(n_nodes, edges):
    """Graph with nodes A.. laid out on a row and the given id pairs."""
    g = Graph()
    for i in range(n_nodes):
        g.add_node(50 + 60 * i, 100)
    for a, b in edges:
        assert g.add_edge(a, b)
    return g


@pytest.fixture
def make_graph():
    return _build_graph


@pytest.fixture
def triangle():
    return _build_graph(3, [("A", "B"), ("B", "C"), ("A", "C")])


@pytest.fixture
def chain():
    return _build_graph(4, [("A", "B"), ("B", "C"), ("C", "D")])
