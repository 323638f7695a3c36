"""Tests for the layout engine."""

import pytest

from umlbox.core import ir
from umlbox.core.builder import build_diagram
from umlbox.core.dsl_parser_impl import parse_dsl
from umlbox.layout import (
    LayoutConfig,
    NodeBox,
    apply_layout,
    compute_layout,
    grid_positions,
    layout,
    move_node,
)

CONFIG = LayoutConfig()


def build(text: str) -> ir.Diagram:
    return build_diagram(parse_dsl(text))


class TestNodeBox:
    """Box geometry."""

    def test_edges(self):
        box = NodeBox(100, 50, 40, 20)
        assert (box.left, box.right, box.top, box.bottom) == (80, 120, 40, 60)

    def test_touching_boxes_do_not_intersect(self):
        assert not NodeBox(0, 0, 10, 10).intersects(NodeBox(10, 0, 10, 10))
        assert NodeBox(0, 0, 10, 10).intersects(NodeBox(9, 0, 10, 10))

    def test_contains_with_inset(self):
        outer = NodeBox(0, 0, 100, 100)
        assert outer.contains(NodeBox(0, 0, 80, 80), inset_x=10, inset_y=10)
        assert not outer.contains(NodeBox(0, 0, 90, 80), inset_x=10, inset_y=10)

    def test_translated(self):
        assert NodeBox(1, 2, 3, 4).translated(10, 20) == NodeBox(11, 22, 3, 4)


class TestSizing:
    """Pass 1: leaf sizes, stacking and container padding."""

    def test_single_leaf_on_grid(self):
        boxes = compute_layout(build("[A]"))
        assert boxes["A"] == NodeBox(125, 90, 150, 80)

    def test_container_encloses_child(self):
        """Container = child plus side, top (with label band) and bottom padding."""
        boxes = compute_layout(build("[P] {\n[C]\n}"))

        parent, child = boxes["P"], boxes["C"]
        assert (parent.width, parent.height) == (250, 215)
        assert parent == NodeBox(175, 157.5, 250, 215)
        assert child == NodeBox(175, 175, 150, 80)
        assert child.top - parent.top == CONFIG.vertical_padding + CONFIG.label_band
        assert parent.bottom - child.bottom == CONFIG.vertical_padding

    def test_children_stack_vertically(self):
        boxes = compute_layout(build("[P] {\n[A]\n[B]\n[C]\n}"))
        a, b, c = boxes["A"], boxes["B"], boxes["C"]
        assert a.x == b.x == c.x == boxes["P"].x
        assert b.top - a.bottom == CONFIG.child_spacing
        assert c.top - b.bottom == CONFIG.child_spacing

    def test_nested_containers_grow(self):
        boxes = compute_layout(build("[O] {\n[M] {\n[I]\n}\n}"))
        assert boxes["M"].width == 250
        assert boxes["O"].width == 350
        assert boxes["O"].contains(
            boxes["M"], CONFIG.side_padding, CONFIG.vertical_padding
        )
        assert boxes["M"].contains(
            boxes["I"], CONFIG.side_padding, CONFIG.vertical_padding
        )

    def test_minimum_container_size(self):
        config = LayoutConfig(leaf_width=10, leaf_height=10, side_padding=5, vertical_padding=5)
        boxes = compute_layout(build("[P] {\n[C]\n}"), config)
        assert (boxes["P"].width, boxes["P"].height) == (200, 120)
        assert boxes["P"].contains(boxes["C"], 5, 5)


class TestPlacement:
    """Pass 2: grid, pinned and port-anchored roots."""

    def test_grid_columns(self):
        """Four roots fill a 2x2 grid, row-major."""
        boxes = compute_layout(build("[A]\n[B]\n[C]\n[D]"))
        assert (boxes["A"].x, boxes["A"].y) == (125, 90)
        assert (boxes["B"].x, boxes["B"].y) == (475, 90)
        assert (boxes["C"].x, boxes["C"].y) == (125, 320)
        assert (boxes["D"].x, boxes["D"].y) == (475, 320)

    def test_grid_cells_fit_largest_box(self):
        """Mixed sizes never overlap: column width and row height follow the largest box."""
        boxes = compute_layout(build("[A]\n[B] {\n[B1]\n[B2]\n}\n[C] {\n[C1]\n}\n[D]\n[E]"))
        roots = [boxes[k] for k in "ABCDE"]
        for i, first in enumerate(roots):
            for second in roots[i + 1 :]:
                assert not first.intersects(second)

    def test_grid_positions_empty(self):
        assert grid_positions([], CONFIG) == []

    def test_pinned_root(self):
        """Authored coordinates are the root's centre; children follow."""
        boxes = compute_layout(build("[P] @ 500,600 {\n[C]\n}"))
        assert (boxes["P"].x, boxes["P"].y) == (500, 600)
        assert boxes["C"].x == 500
        assert boxes["P"].contains(boxes["C"], CONFIG.side_padding, CONFIG.vertical_padding)

    def test_pinned_roots_do_not_shift_grid(self):
        boxes = compute_layout(build("[A] @ 1000,1000\n[B]"))
        assert (boxes["B"].x, boxes["B"].y) == (125, 90)

    def test_anchored_left_of_port(self):
        """The outer end of a crossing sits a fixed standoff from its port."""
        diagram = build("[O] {\n[I]\n}\n[X]\nX -> I")
        boxes = compute_layout(diagram)

        outer, anchored = boxes["O"], boxes["X"]
        assert outer == NodeBox(175, 157.5, 250, 215)
        assert anchored.right == outer.left - CONFIG.port_standoff
        assert anchored.y == outer.y

    def test_anchored_right_of_port(self):
        boxes = compute_layout(build("[O] {\n[I]\n}\n[X]\nI -> X"))
        assert boxes["X"].left == boxes["O"].right + CONFIG.port_standoff
        assert boxes["X"].y == boxes["O"].y

    def test_anchored_above_top_port(self):
        boxes = compute_layout(build("[O] {\n[I]\n}\nport [t] on [O] top\n[X]\nX -> I.t"))
        assert boxes["X"].bottom == boxes["O"].top - CONFIG.port_standoff
        assert boxes["X"].x == boxes["O"].x

    def test_anchored_collision_slides_down(self):
        """Two roots anchored to the same point do not overlap."""
        boxes = compute_layout(build("[O] {\n[I]\n}\n[X]\n[Y]\nX -> I\nY -> I"))
        first, second = boxes["X"], boxes["Y"]
        assert first.x == second.x
        assert not first.intersects(second)
        assert second.top == first.bottom + CONFIG.child_spacing

    def test_unresolved_port_falls_back_to_grid(self):
        diagram = ir.Diagram(
            nodes=[ir.DiagramNode(id="A"), ir.DiagramNode(id="B")],
            connectors=[
                ir.PlainConnector(
                    id="edge-0",
                    source_id="A",
                    target_id="B",
                    target_port="missing",
                    origin=ir.ConnectorOrigin.CROSS_LEVEL,
                )
            ],
        )
        boxes = compute_layout(diagram)
        assert (boxes["A"].x, boxes["A"].y) == (125, 90)
        assert (boxes["B"].x, boxes["B"].y) == (475, 90)

    def test_anchor_cycle_falls_back_to_grid(self):
        diagram = ir.Diagram(
            nodes=[ir.DiagramNode(id="A"), ir.DiagramNode(id="B")],
            ports=[
                ir.DiagramPort(id="p", node_id="A", side=ir.Side.LEFT),
                ir.DiagramPort(id="q", node_id="B", side=ir.Side.LEFT),
            ],
            connectors=[
                ir.PlainConnector(
                    id="edge-0",
                    source_id="A",
                    target_id="B",
                    target_port="q",
                    origin=ir.ConnectorOrigin.CROSS_LEVEL,
                ),
                ir.PlainConnector(
                    id="edge-1",
                    source_id="B",
                    target_id="A",
                    target_port="p",
                    origin=ir.ConnectorOrigin.CROSS_LEVEL,
                ),
            ],
        )
        boxes = compute_layout(diagram)
        assert (boxes["A"].x, boxes["B"].x) == (125, 475)


class TestEngine:
    """Entry points and invariants."""

    def test_compute_layout_is_pure(self, component_source):
        diagram = build(component_source)
        before = diagram.model_dump()
        compute_layout(diagram)
        assert diagram.model_dump() == before

    def test_apply_layout_writes_back(self):
        diagram = build("[P] {\n[C]\n}")
        boxes = compute_layout(diagram)
        apply_layout(diagram, boxes)
        child = diagram.get_node("C")
        assert (child.x, child.y, child.width, child.height) == (175, 175, 150, 80)

    def test_layout_is_idempotent(self, component_source):
        diagram = build(component_source)
        first = layout(diagram)
        second = layout(diagram)
        assert first == second

    def test_containment_and_no_sibling_overlap(self, component_source):
        diagram = build(component_source)
        boxes = layout(diagram)

        for node in diagram.nodes:
            children = diagram.children_of(node.id)
            for child in children:
                assert boxes[node.id].contains(
                    boxes[child.id], CONFIG.side_padding, CONFIG.vertical_padding
                )
            for i, first in enumerate(children):
                for second in children[i + 1 :]:
                    assert not boxes[first.id].intersects(boxes[second.id])

    def test_custom_config(self):
        config = LayoutConfig(grid_start_x=0, grid_start_y=0)
        boxes = compute_layout(build("[A]"), config)
        assert (boxes["A"].x, boxes["A"].y) == (75, 40)


class TestMoveNode:
    """The drag rule."""

    def test_moves_subtree_and_pins(self):
        diagram = build("[P] {\n[C]\n}")
        layout(diagram)

        move_node(diagram, "P", 10, 20)

        parent, child = diagram.get_node("P"), diagram.get_node("C")
        assert parent.pinned
        assert (parent.x, parent.y) == (185, 177.5)
        assert (child.x, child.y) == (185, 195)

    def test_moved_root_stays_after_relayout(self):
        diagram = build("[P] {\n[C]\n}\n[Q]")
        layout(diagram)
        move_node(diagram, "P", -30, 40)
        expected = (diagram.get_node("P").x, diagram.get_node("P").y)

        layout(diagram)

        assert (diagram.get_node("P").x, diagram.get_node("P").y) == expected

    def test_updates_tree_view(self):
        ast = parse_dsl("[P] @ 100,100 {\n[C]\n}")
        diagram = build_diagram(ast)
        layout(diagram)

        move_node(diagram, "P", 5, -5, ast=ast)

        parent = ast.root_nodes[0]
        assert (parent.x, parent.y) == (105, 95)
        child = diagram.get_node("C")
        assert (parent.children[0].x, parent.children[0].y) == (child.x, child.y)

    def test_unknown_node(self):
        with pytest.raises(KeyError):
            move_node(build("[A]"), "missing", 1, 1)
