import pytest

from pathminer.graph import ReactionGraph


def _build(names, edges):
    g = ReactionGraph()
    for name in names:
        g.add_vertex(name)
    for u, v, weight, label in edges:
        g.add_edge(g.handle(u), g.handle(v), weight=weight, label=label)
    return g.freeze()


@pytest.fixture
def single_path():
    # Weight:
    #     [1]     [1]
    #  s──────►a──────►t
    return _build(
        ["s", "a", "t"],
        [
            ("s", "a", 1.0, ""),
            ("a", "t", 1.0, ""),
        ],
    )


@pytest.fixture
def two_routes():
    # Weight:
    #       [1]        [2]
    #   ┌────────►a─────────┐
    #   │                   │
    #   │                   ▼
    #   s                   t
    #   │                   ▲
    #   │   [1]        [2]  │
    #   └────────►b─────────┘
    return _build(
        ["s", "a", "b", "t"],
        [
            ("s", "a", 1.0, ""),
            ("a", "t", 2.0, "x"),
            ("s", "b", 1.0, ""),
            ("b", "t", 2.0, "y"),
        ],
    )


@pytest.fixture
def ladder():
    # Weight:
    #       [1]       [1]       [1]
    #   s────────►A────────►C────────►t
    #   │         │         │         ▲
    #   │[2]      │[3]      │[1]      │[1]
    #   ▼         ▼         ▼         │
    #   B────────►D─────────┴─────────┘
    #       [1]
    #
    # Plus B->C [1].
    #
    # Six loopless s->t paths:
    #   sACt=3, sACDt=4, sBCt=4, sBDt=4, sADt=5, sBCDt=5
    return _build(
        ["s", "A", "B", "C", "D", "t"],
        [
            ("s", "A", 1.0, ""),
            ("s", "B", 2.0, ""),
            ("A", "C", 1.0, "ac"),
            ("A", "D", 3.0, "ad"),
            ("B", "C", 1.0, "bc"),
            ("B", "D", 1.0, "bd"),
            ("C", "t", 1.0, ""),
            ("C", "D", 1.0, "cd"),
            ("D", "t", 1.0, ""),
        ],
    )


@pytest.fixture
def scope_graph():
    # Weight:
    #     [0.1]     [1]
    #   s──────►a───────►t
    #   │                ▲
    #   │[1]             │[1]
    #   ▼       [5]      │
    #   b───────────────►c
    #
    # Targets feeding t: a (1 edge from s, score 0.1) and c (2 edges, score 6).
    return _build(
        ["s", "a", "b", "c", "t"],
        [
            ("s", "a", 0.1, ""),
            ("a", "t", 1.0, ""),
            ("s", "b", 1.0, ""),
            ("b", "c", 5.0, "bc"),
            ("c", "t", 1.0, ""),
        ],
    )


@pytest.fixture
def detour_graph():
    # Weight:
    #         [8]
    #   s───────────►y───►t
    #   │            ▲ [1]
    #   │[1]    [1]  │
    #   └─────►x─────┘
    #
    # y is reachable with one edge (score 8) or two edges (score 2).
    return _build(
        ["s", "x", "y", "t"],
        [
            ("s", "y", 8.0, ""),
            ("s", "x", 1.0, ""),
            ("x", "y", 1.0, "xy"),
            ("y", "t", 1.0, ""),
        ],
    )


@pytest.fixture
def back_edge_graph():
    # Weight:
    #      [1]      [5]      [1]
    #   s◄──────►a───────►b───────►t
    #      [1]
    #
    # The only way back to s is a loop.
    return _build(
        ["s", "a", "b", "t"],
        [
            ("s", "a", 1.0, ""),
            ("a", "s", 1.0, ""),
            ("a", "b", 5.0, "ab"),
            ("b", "t", 1.0, ""),
        ],
    )


@pytest.fixture
def no_terminals():
    # Weight:
    #     [1]
    #  A──────►B
    return _build(["A", "B"], [("A", "B", 1.0, "")])


@pytest.fixture
def unbalanced_branches():
    # Weight:
    #       [0.5]     [0.5]
    #   ┌────────►a────────►x
    #   │
    #   s                 ┌──►y1
    #   │   [5]       [5] │
    #   └────────►b───────┼──►y2
    #                     │
    #                     └──►y3
    #
    # Four loopless 2-edge paths from s: sax=1 and three sby*=10.
    # A walk from s picks the a-branch half of the time.
    return _build(
        ["s", "a", "x", "b", "y1", "y2", "y3"],
        [
            ("s", "a", 0.5, ""),
            ("a", "x", 0.5, ""),
            ("s", "b", 5.0, ""),
            ("b", "y1", 5.0, ""),
            ("b", "y2", 5.0, ""),
            ("b", "y3", 5.0, ""),
        ],
    )


@pytest.fixture
def dead_end_branches():
    # unbalanced_branches plus s<->d. A walk entering d can only go back to
    # s, so it dead-ends and is retried.
    return _build(
        ["s", "a", "x", "b", "y1", "y2", "y3", "d"],
        [
            ("s", "a", 0.5, ""),
            ("a", "x", 0.5, ""),
            ("s", "b", 5.0, ""),
            ("b", "y1", 5.0, ""),
            ("b", "y2", 5.0, ""),
            ("b", "y3", 5.0, ""),
            ("s", "d", 1.0, ""),
            ("d", "s", 1.0, ""),
        ],
    )
