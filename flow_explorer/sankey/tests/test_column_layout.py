"""
Test suite for the column layout engine.

Run with:
    python -m pytest flow_explorer/sankey/tests/test_column_layout.py -v

Or directly:
    python flow_explorer/sankey/tests/test_column_layout.py
"""

import sys
from pathlib import Path

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from flow_explorer.sankey.processor import (
    ColumnLayoutEngine, LayoutSettings, SolvedLink, build_flow_graph,
    compute_layout, parse_node_name,
)


NODE_NAME_CASES = [
    ("A12", ("A", 12)),
    ("B", ("B", 0)),
    ("AB3x", ("AB", 3)),
    ("Stage007", ("Stage", 7)),
    ("A-1", ("A", 0)),
    ("9lives", ("9", 0)),
    ("_A1", ("_", 0)),
]


def _graph(*pairs, key="K1"):
    return build_flow_graph(
        [{"source": s, "destination": d, "key": key} for s, d in pairs]
    )


def test_parse_node_name():
    """Test prefix/suffix split, including the first-character fallback."""
    for name, expected in NODE_NAME_CASES:
        assert parse_node_name(name) == expected, f"{name}: got {parse_node_name(name)}"

    print("test_parse_node_name: PASSED")


def test_column_membership_and_rows():
    """Test A1/A2 share a column apart from B1, with A2 below A1."""
    layout = compute_layout(_graph(("A2", "B1"), ("A1", "B1")), 1000, 600)

    a1, a2, b1 = layout.node("A1"), layout.node("A2"), layout.node("B1")
    assert a1.column == a2.column
    assert a1.column != b1.column
    assert a2.row > a1.row, "Rows follow the numeric suffix, not encounter order"

    print("test_column_membership_and_rows: PASSED")


def test_columns_sorted_by_prefix():
    """Test alphabetical column order regardless of node order."""
    layout = compute_layout(_graph(("C1", "A1"), ("B1", "C1")), 900, 600)

    assert layout.columns == ("A", "B", "C")
    assert [layout.node(n).column for n in ("A1", "B1", "C1")] == [0, 1, 2]

    print("test_columns_sorted_by_prefix: PASSED")


def test_equal_suffix_keeps_encounter_order():
    """Test the stable tie-break between A01 and A1 (both suffix 1)."""
    forward = compute_layout(_graph(("A01", "B1"), ("A1", "B1")), 800, 600)
    assert forward.node("A01").row == 0
    assert forward.node("A1").row == 1

    backward = compute_layout(_graph(("A1", "B1"), ("A01", "B1")), 800, 600)
    assert backward.node("A1").row == 0
    assert backward.node("A01").row == 1

    print("test_equal_suffix_keeps_encounter_order: PASSED")


def test_geometry():
    """Test node sizes, centering and stacking for a 1000x600 viewport."""
    layout = compute_layout(_graph(("A1", "B1"), ("A2", "B1")), 1000, 600)

    assert layout.column_width == 500
    assert layout.node_width == 10
    assert layout.node_height == 60
    assert layout.node_padding == 15

    a1, a2, b1 = layout.node("A1"), layout.node("A2"), layout.node("B1")
    assert (a1.x0, a1.y0, a1.x1, a1.y1) == (245, 232.5, 255, 292.5)
    assert (a2.x0, a2.y0, a2.x1, a2.y1) == (245, 307.5, 255, 367.5)
    assert (b1.x0, b1.y0, b1.x1, b1.y1) == (745, 270, 755, 330)

    print("test_geometry: PASSED")


def test_size_clamps():
    """Test minimum node width/height and padding on a small viewport."""
    names = [(f"A{i}", "B1") for i in range(1, 11)]
    layout = compute_layout(_graph(*names), 100, 100)

    assert layout.node_width == 6
    assert layout.node_height == 30
    assert layout.node_padding == 10

    print("test_size_clamps: PASSED")


def test_size_clamps_upper():
    """Test maximum node width/height on a large viewport."""
    layout = compute_layout(_graph(("A1", "B1")), 5000, 5000)

    assert layout.node_width == 12
    assert layout.node_height == 60
    assert layout.node_padding == 15

    print("test_size_clamps_upper: PASSED")


def test_custom_settings():
    """Test that LayoutSettings overrides the sizing rules."""
    settings = LayoutSettings(min_node_height=10, max_node_height=20, min_padding=2)
    layout = compute_layout(_graph(("A1", "B1")), 1000, 600, settings=settings)

    assert layout.node_height == 20
    assert layout.node_padding == 5

    print("test_custom_settings: PASSED")


def test_single_node_column_is_centered():
    """Test that a one-node column sits in the vertical middle."""
    layout = compute_layout(_graph(("A1", "B1")), 400, 300)
    b1 = layout.node("B1")

    assert b1.y0 + b1.height / 2 == 150

    print("test_single_node_column_is_centered: PASSED")


def test_layout_is_deterministic():
    """Test identical output for repeated runs."""
    graph = _graph(("A1", "B2"), ("A3", "B1"), ("B1", "C1"), ("B2", "C1"))

    first = compute_layout(graph, 1280, 720)
    second = compute_layout(graph, 1280, 720)
    assert first == second
    assert first.to_dict() == second.to_dict()

    print("test_layout_is_deterministic: PASSED")


def test_empty_graph():
    """Test that an empty graph gives an empty layout."""
    layout = compute_layout(build_flow_graph([]), 800, 600)

    assert layout.is_empty
    assert layout.columns == ()
    assert layout.links == ()

    print("test_empty_graph: PASSED")


def test_negative_size_rejected():
    """Test that negative viewport sizes raise ValueError."""
    with pytest.raises(ValueError):
        compute_layout(_graph(("A1", "B1")), -1, 600)

    print("test_negative_size_rejected: PASSED")


def test_link_endpoints_use_layout_rectangles():
    """Test link anchors and cubic control points."""
    layout = compute_layout(_graph(("A1", "B1")), 1000, 600)
    (plink,) = layout.links

    assert plink.source is layout.node("A1")
    assert plink.target is layout.node("B1")
    assert plink.source_point == (255, 300)
    assert plink.target_point == (745, 300)
    assert plink.control_points() == ((500, 300), (500, 300))
    assert plink.control_points(0.25) == ((377.5, 300), (622.5, 300))

    print("test_link_endpoints_use_layout_rectangles: PASSED")


def test_circular_links():
    """Test loop detection: back edges of cycles and self-loops only."""
    graph = _graph(("A1", "B1"), ("B1", "A1"), ("B1", "C1"), ("C1", "C1"))
    layout = compute_layout(graph, 900, 600)
    circular = {p.link.id: p.circular for p in layout.links}

    assert circular[("A1", "B1")] is False
    assert circular[("B1", "A1")] is True
    assert circular[("B1", "C1")] is False
    assert circular[("C1", "C1")] is True

    print("test_circular_links: PASSED")


def test_backward_link_without_cycle_is_not_circular():
    """Test that pointing left alone does not make a link circular."""
    layout = compute_layout(_graph(("B1", "A1")), 900, 600)

    assert layout.links[0].circular is False

    print("test_backward_link_without_cycle_is_not_circular: PASSED")


class _StubSolver:
    """Solver that marks every link circular."""

    def __init__(self):
        self.calls = []

    def solve(self, graph, columns):
        self.calls.append(dict(columns))
        return [
            SolvedLink(link=l, source=graph.node(l.source), target=graph.node(l.target), circular=True)
            for l in graph.links
        ]


def test_custom_solver():
    """Test that a substitute solver decides circularity but not positions."""
    solver = _StubSolver()
    engine = ColumnLayoutEngine(solver=solver)
    layout = engine.layout(_graph(("A1", "B1")), 1000, 600)

    assert solver.calls == [{"A1": 0, "B1": 1}]
    assert layout.links[0].circular is True
    assert layout.links[0].source is layout.node("A1")

    print("test_custom_solver: PASSED")


def run_all_tests():
    """Run all tests."""
    print("=" * 60)
    print("Column Layout Tests")
    print("=" * 60)
    print()

    tests = [
        test_parse_node_name,
        test_column_membership_and_rows,
        test_columns_sorted_by_prefix,
        test_equal_suffix_keeps_encounter_order,
        test_geometry,
        test_size_clamps,
        test_size_clamps_upper,
        test_custom_settings,
        test_single_node_column_is_centered,
        test_layout_is_deterministic,
        test_empty_graph,
        test_negative_size_rejected,
        test_link_endpoints_use_layout_rectangles,
        test_circular_links,
        test_backward_link_without_cycle_is_not_circular,
        test_custom_solver,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except AssertionError as e:
            print(f"{test.__name__}: FAILED - {e}")
            failed += 1
        except Exception as e:
            print(f"{test.__name__}: ERROR - {e}")
            failed += 1

    print()
    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
