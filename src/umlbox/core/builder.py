"""
Diagram builder for umlbox.

Turns the nested AST into the flat Diagram consumed by layout and rendering,
and reroutes connectors that cross a component boundary through a port on
that boundary.
"""

import logging

from . import ir

logger = logging.getLogger(__name__)


def build_diagram(ast: ir.DiagramAST) -> ir.Diagram:
    """
    Build the flat Diagram for an AST.

    Performs:
    1. Pre-order flattening of nodes and ports (depth, parent, child links)
    2. Connector routing: same-level connectors pass through, connectors
       crossing one boundary are split into an external connector to a
       boundary port and an internal connector from that port

    Args:
        ast: Parser output

    Returns:
        A new Diagram; the AST is not modified
    """
    nodes, ports = flatten_nodes(ast)
    diagram = ir.Diagram(type=ast.type, nodes=nodes, ports=ports)

    for connector in ast.connectors:
        diagram.connectors.extend(route_connector(diagram, connector))

    logger.debug(
        "Built diagram: %d nodes, %d ports, %d connectors",
        len(diagram.nodes),
        len(diagram.ports),
        len(diagram.connectors),
    )
    return diagram


def flatten_nodes(ast: ir.DiagramAST) -> tuple[list[ir.DiagramNode], list[ir.DiagramPort]]:
    """Flatten the node tree in pre-order."""
    nodes: list[ir.DiagramNode] = []
    ports: list[ir.DiagramPort] = []

    def visit(node: ir.ASTNode, parent_id: str | None, depth: int) -> None:
        nodes.append(
            ir.DiagramNode(
                id=node.id,
                label=node.label,
                x=node.x or 0.0,
                y=node.y or 0.0,
                width=node.width,
                height=node.height,
                parent_id=parent_id,
                depth=depth,
                child_ids=[child.id for child in node.children],
                pinned=node.x is not None and node.y is not None,
            )
        )
        for port in node.ports:
            ports.append(
                ir.DiagramPort(
                    id=port.id,
                    node_id=node.id,
                    label=port.label,
                    side=port.side,
                    offset=port.offset or 0.0,
                    connector_ref=port.connector_ref,
                )
            )
        for child in node.children:
            visit(child, node.id, depth + 1)

    for root in ast.root_nodes:
        visit(root, None, 0)

    return nodes, ports


def parent_id_of(diagram: ir.Diagram, node_id: str | None) -> str | None:
    """Parent of a node; unknown nodes count as roots."""
    if node_id is None:
        return None
    node = diagram.get_node(node_id)
    return node.parent_id if node else None


def route_connector(diagram: ir.Diagram, connector: ir.Connector) -> list[ir.Connector]:
    """
    Route one declared connector.

    Returns:
        The connectors that replace it in the flat view (one or two)
    """
    source_parent = parent_id_of(diagram, connector.source_id)
    target_parent = parent_id_of(diagram, connector.target_id)

    if source_parent == target_parent:
        container = undeclared_container_port(diagram, connector)
        if container:
            boundary_id, nested_is_source = container
            nested_id = diagram.get_node(boundary_id).child_ids[0]
            return synthesize_crossing(
                diagram, connector, nested_id, boundary_id, nested_is_source
            )
        return [connector.model_copy(deep=True)]

    if (
        source_parent is not None
        and source_parent != connector.target_id
        and parent_id_of(diagram, source_parent) == target_parent
    ):
        return synthesize_crossing(
            diagram, connector, connector.source_id, source_parent, nested_is_source=True
        )

    if (
        target_parent is not None
        and target_parent != connector.source_id
        and parent_id_of(diagram, target_parent) == source_parent
    ):
        return synthesize_crossing(
            diagram, connector, connector.target_id, target_parent, nested_is_source=False
        )

    # Sibling subtrees, multi-level crossings, parent-to-own-child edges
    logger.debug("Connector %s crosses levels without a single boundary, passing through", connector.id)
    return [connector.model_copy(deep=True)]


def undeclared_container_port(
    diagram: ir.Diagram, connector: ir.Connector
) -> tuple[str, bool] | None:
    """
    Detect a same-level connector aimed at an undeclared port of a container.

    `Ext -())- O.p1` where O has children and no port p1 is treated as a
    crossing into O, delegated to O's first child.

    Returns:
        (container ID, whether the container is the connector's source) or None
    """
    ends = (
        (connector.target_id, connector.target_port, False),
        (connector.source_id, connector.source_port, True),
    )
    for node_id, port_id, is_source in ends:
        if port_id is None:
            continue
        node = diagram.get_node(node_id)
        if node and node.child_ids and diagram.find_port(node_id, port_id) is None:
            return node_id, is_source
    return None


def resolve_boundary_port(
    diagram: ir.Diagram,
    connector: ir.Connector,
    boundary_id: str,
    qualifier: str | None,
    default_side: ir.Side,
) -> ir.DiagramPort:
    """
    Find or create the port a crossing connector passes through.

    Reuse order: a port declared `with [connector name]`, then a port whose
    ID matches the endpoint's port qualifier, then a new port.
    """
    if connector.name:
        for port in diagram.ports_of(boundary_id):
            if port.connector_ref == connector.name:
                return port

    port_id = qualifier or f"port-{connector.id}"
    port = diagram.find_port(boundary_id, port_id)
    if port:
        return port

    port = ir.DiagramPort(
        id=port_id,
        node_id=boundary_id,
        label=connector.label,
        side=default_side,
        offset=0.0,
    )
    diagram.ports.append(port)
    logger.debug("Created port %s on %s for connector %s", port_id, boundary_id, connector.id)
    return port


def internal_connector(connector: ir.Connector, **endpoints: str | None) -> ir.Connector:
    """
    Build the connector inside the boundary.

    Interface connectors get the opposite notation (a ball on the public
    face is a socket on the private face); arrows become delegate arrows.
    """
    payload = dict(
        id=f"{connector.id}-interface",
        origin=ir.ConnectorOrigin.SYNTHESIZED,
        **endpoints,
    )
    if isinstance(connector, ir.InterfaceConnector):
        return ir.InterfaceConnector(notation=connector.inverted_notation(), **payload)
    return ir.DelegateConnector(**payload)


def synthesize_crossing(
    diagram: ir.Diagram,
    connector: ir.Connector,
    nested_id: str,
    boundary_id: str,
    nested_is_source: bool,
) -> list[ir.Connector]:
    """
    Split a boundary-crossing connector into external and internal parts.

    Both parts point at the boundary: the external connector runs from the
    outer endpoint to the port, the internal one from the port to the
    nested endpoint.

    Args:
        diagram: Diagram under construction (ports may be added)
        connector: Declared connector
        nested_id: Endpoint inside the boundary
        boundary_id: Node whose boundary is crossed
        nested_is_source: Whether the nested endpoint was the source

    Returns:
        Both connectors; the internal one first when the nested endpoint
        was the source
    """
    if nested_is_source:
        qualifier, outer_id, outer_port = (
            connector.source_port,
            connector.target_id,
            connector.target_port,
        )
    else:
        qualifier, outer_id, outer_port = (
            connector.target_port,
            connector.source_id,
            connector.source_port,
        )
    side = ir.Side.RIGHT if nested_is_source else ir.Side.LEFT
    port = resolve_boundary_port(diagram, connector, boundary_id, qualifier, side)

    external = connector.model_copy(
        update={
            "origin": ir.ConnectorOrigin.CROSS_LEVEL,
            "source_id": outer_id,
            "source_port": outer_port,
            "target_id": boundary_id,
            "target_port": port.id,
        },
        deep=True,
    )
    internal = internal_connector(
        connector, source_id=boundary_id, source_port=port.id, target_id=nested_id
    )
    if nested_is_source:
        return [internal, external]
    return [external, internal]
