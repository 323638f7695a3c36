"""Tests for the diagram builder and boundary-crossing synthesis."""

from umlbox.core import ir
from umlbox.core.builder import build_diagram
from umlbox.core.dsl_parser_impl import parse_dsl


def build(text: str) -> ir.Diagram:
    return build_diagram(parse_dsl(text))


class TestFlattening:
    """Tree to flat view."""

    def test_parent_child_links(self):
        """Depth, parent and child links come from the nesting."""
        diagram = build("[uml2.5-component]{[P] Parent{[C] Child}}")

        parent = diagram.get_node("P")
        child = diagram.get_node("C")
        assert (parent.depth, parent.parent_id, parent.child_ids) == (0, None, ["C"])
        assert (child.depth, child.parent_id) == (1, "P")

    def test_pre_order(self):
        diagram = build("[A] {\n[A1] {\n[A2]\n}\n}\n[B]")
        assert [n.id for n in diagram.nodes] == ["A", "A1", "A2", "B"]
        assert [n.id for n in diagram.roots()] == ["A", "B"]
        assert [n.id for n in diagram.descendants_of("A")] == ["A1", "A2"]

    def test_pinned_only_with_coordinates(self):
        diagram = build("[A] @ 10,20\n[B]")
        a, b = diagram.get_node("A"), diagram.get_node("B")
        assert a.pinned and (a.x, a.y) == (10.0, 20.0)
        assert not b.pinned

    def test_ports_flattened_with_owner(self):
        diagram = build("[A] {\n[B]\n}\nport [p] on [B] top : feed")
        port = diagram.find_port("B", "p")
        assert port is not None
        assert (port.node_id, port.side, port.label) == ("B", ir.Side.TOP, "feed")
        assert diagram.ports_of("A") == []

    def test_lookup_follows_replaced_nodes(self):
        """Swapping a node for another of the same count still finds the new one."""
        diagram = build("[A]\n[B]")
        assert diagram.get_node("A") is not None

        replacement = ir.DiagramNode(id="Z", label="Zed")
        diagram.nodes[0] = replacement
        assert diagram.get_node("Z") is replacement
        assert diagram.get_node("A") is None

        diagram.nodes.reverse()
        assert diagram.get_node("B") is diagram.nodes[0]

    def test_ast_is_not_modified(self):
        ast = parse_dsl("[O] {\n[I]\n}\n[X]\nX -> I")
        before = ast.model_dump()
        build_diagram(ast)
        assert ast.model_dump() == before


class TestPassThrough:
    """Connectors that stay as declared."""

    def test_same_level(self):
        diagram = build("[A]\n[B]\nA -> B : calls")
        assert len(diagram.connectors) == 1
        connector = diagram.connectors[0]
        assert connector.origin == ir.ConnectorOrigin.DECLARED
        assert not connector.is_cross_level
        assert connector.label == "calls"

    def test_unknown_nodes_count_as_roots(self):
        diagram = build("A -())- B")
        assert len(diagram.connectors) == 1
        assert diagram.ports == []

    def test_sibling_subtrees(self):
        """Crossing two boundaries at once passes through unchanged."""
        diagram = build("[A] {\n[A1]\n}\n[B] {\n[B1]\n}\nA1 -> B1")
        assert len(diagram.connectors) == 1
        assert diagram.connectors[0].origin == ir.ConnectorOrigin.DECLARED
        assert diagram.ports == []

    def test_two_levels_deep(self):
        diagram = build("[O] {\n[M] {\n[I]\n}\n}\n[X]\nI -> X")
        assert len(diagram.connectors) == 1
        assert diagram.ports == []

    def test_parent_to_own_child(self):
        diagram = build("[O] {\n[I]\n}\nO -> I")
        assert len(diagram.connectors) == 1
        assert diagram.connectors[0].origin == ir.ConnectorOrigin.DECLARED

    def test_declared_port_on_container(self):
        """A same-level edge to a declared container port is not rerouted."""
        diagram = build("[O] {\n[I]\n}\nport [p1] on [O] left\nExt -())- O.p1")
        assert len(diagram.connectors) == 1
        assert len(diagram.ports) == 1


class TestBoundaryCrossing:
    """Edges crossing exactly one component boundary."""

    def test_undeclared_container_port(self):
        """An edge into an undeclared port of a container is delegated to its first child."""
        diagram = build("[uml2.5-component]{[O] Outer{[I] Inner} Ext -())- O.p1}")

        port = diagram.find_port("O", "p1")
        assert port is not None
        assert port.side == ir.Side.LEFT

        external, internal = diagram.connectors
        assert (external.source_id, external.target_id, external.target_port) == (
            "Ext",
            "O",
            "p1",
        )
        assert external.edge_type == "-())-"
        assert external.origin == ir.ConnectorOrigin.CROSS_LEVEL

        assert (internal.source_id, internal.source_port, internal.target_id) == (
            "O",
            "p1",
            "I",
        )
        assert internal.edge_type == "-(()-"
        assert internal.is_auto_generated
        assert internal.id == "edge-0-interface"

    def test_nested_source(self):
        """Nested source: external into a right-side port, internal delegate inward."""
        diagram = build("[O] {\n[I]\n}\n[X]\nI -> X : sends")

        internal, external = diagram.connectors
        port = diagram.find_port("O", "port-edge-0")
        assert port is not None
        assert port.side == ir.Side.RIGHT
        assert port.label == "sends"

        assert isinstance(internal, ir.DelegateConnector)
        assert (internal.source_id, internal.source_port, internal.target_id) == (
            "O",
            "port-edge-0",
            "I",
        )
        assert internal.origin == ir.ConnectorOrigin.SYNTHESIZED

        assert isinstance(external, ir.PlainConnector)
        assert external.id == "edge-0"
        assert (external.source_id, external.target_id, external.target_port) == (
            "X",
            "O",
            "port-edge-0",
        )
        assert external.label == "sends"
        assert external.is_cross_level and not external.is_auto_generated

    def test_nested_source_keeps_provider_inside(self):
        """A nested provider stays the provider on the internal connector."""
        diagram = build("[O] {\n[I]\n}\n[X]\nI -())- X")

        internal, external = diagram.connectors
        assert (internal.source_id, internal.target_id) == ("O", "I")
        assert internal.edge_type == "-(()-"
        assert internal.target_role == ir.InterfaceRole.PROVIDED
        assert (external.source_id, external.target_id) == ("X", "O")
        assert external.edge_type == "-())-"

    def test_nested_target(self):
        """Nested target: external into a left-side port, internal out of it."""
        diagram = build("[X]\n[O] {\n[I]\n}\nX -())- I")

        external, internal = diagram.connectors
        assert diagram.find_port("O", "port-edge-0").side == ir.Side.LEFT
        assert (external.source_id, external.target_id) == ("X", "O")
        assert external.edge_type == "-())-"
        assert (internal.source_id, internal.target_id) == ("O", "I")
        assert internal.edge_type == "-(()-"

    def test_interface_polarity_inverted_inside(self):
        diagram = build("[X]\n[O] {\n[I]\n}\nX -(()- I")
        external, internal = diagram.connectors
        assert external.source_role == ir.InterfaceRole.REQUIRED
        assert internal.source_role == ir.InterfaceRole.PROVIDED

    def test_reuses_port_by_connector_name(self):
        """`port [in] with [feed]` on the boundary carries the `feed` edge."""
        diagram = build(
            "[O] {\n    port [in] with [feed] left\n    [I]\n}\n[X]\n[feed] X -> I"
        )
        assert [p.id for p in diagram.ports] == ["in"]
        assert diagram.connectors[0].target_port == "in"

    def test_reuses_port_by_qualifier(self):
        diagram = build("[O] {\n[I]\n}\nport [api] on [O] top\n[X]\nX -> I.api")
        assert [p.id for p in diagram.ports] == ["api"]
        assert diagram.find_port("O", "api").side == ir.Side.TOP
        assert diagram.connectors[0].target_port == "api"

    def test_creates_port_named_after_qualifier(self):
        diagram = build("[O] {\n[I]\n}\n[X]\nX -> I.api")
        assert diagram.find_port("O", "api") is not None

    def test_second_level_crossing(self):
        """A crossing between a grandchild and a child of the same parent."""
        diagram = build("[R] {\n[O] {\n[I]\n}\n[X]\n}\nI -> X")
        internal, external = diagram.connectors
        assert (internal.source_id, internal.target_id) == ("O", "I")
        assert (external.source_id, external.target_id) == ("X", "O")

    def test_connector_arity(self, component_source):
        """Every declared connector yields one or two connectors."""
        ast = parse_dsl(component_source)
        diagram = build_diagram(ast)

        declared_ids = [c.id for c in ast.connectors]
        for connector_id in declared_ids:
            related = [
                c for c in diagram.connectors if c.id in (connector_id, f"{connector_id}-interface")
            ]
            assert 1 <= len(related) <= 2

        # Client -())- Cart.api reuses the declared `api` port
        assert [p.id for p in diagram.ports] == ["api", "port-edge-1"]
