"""
umlbox Intermediate Representation (IR) types.

Types are organized into submodules:
- ast.py: nested tree produced by the parser
- connectors.py: connector tagged union shared by both views
- diagram.py: flattened view produced by the builder

All types are re-exported from this package.
"""

from .ast import (
    DIAGRAM_TYPE_NAMES,
    ASTNode,
    ASTPort,
    DiagramAST,
    DiagramType,
    ParseDiagnostic,
    Side,
)
from .connectors import (
    PROVIDER_NOTATION,
    REQUIRER_NOTATION,
    Connector,
    ConnectorBase,
    ConnectorOrigin,
    DelegateConnector,
    InterfaceConnector,
    InterfaceRole,
    PlainConnector,
)
from .diagram import Diagram, DiagramNode, DiagramPort

__all__ = [
    # AST
    "ASTNode",
    "ASTPort",
    "DiagramAST",
    "DiagramType",
    "DIAGRAM_TYPE_NAMES",
    "ParseDiagnostic",
    "Side",
    # Connectors
    "Connector",
    "ConnectorBase",
    "ConnectorOrigin",
    "DelegateConnector",
    "InterfaceConnector",
    "InterfaceRole",
    "PlainConnector",
    "PROVIDER_NOTATION",
    "REQUIRER_NOTATION",
    # Flat view
    "Diagram",
    "DiagramNode",
    "DiagramPort",
]
