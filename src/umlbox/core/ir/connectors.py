"""
Connector types for umlbox IR.

Connectors are a tagged union over their kind. The three variants share the
endpoint/label payload; only the interface variant carries a notation, and
only the delegate variant is drawn dashed.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

INTERFACE_NOTATION = re.compile(r"^-(?:\(\)|[()])+-$")

# Canonical notations for each source role
PROVIDER_NOTATION = "-())-"
REQUIRER_NOTATION = "-(()-"


class ConnectorOrigin(str, Enum):
    """Where a connector came from."""

    DECLARED = "declared"  # Written by the user
    CROSS_LEVEL = "cross_level"  # User edge rerouted through a boundary port
    SYNTHESIZED = "synthesized"  # Created by the builder, never in source


class InterfaceRole(str, Enum):
    """Role of one connector end in a ball-and-socket pair."""

    PROVIDED = "provided"  # Ball
    REQUIRED = "required"  # Socket

    def opposite(self) -> InterfaceRole:
        if self is InterfaceRole.PROVIDED:
            return InterfaceRole.REQUIRED
        return InterfaceRole.PROVIDED


class ConnectorBase(BaseModel):
    """
    Payload shared by every connector kind.

    Attributes:
        id: Connector identifier (`edge-<n>` for parsed edges)
        name: Optional user name from `[name] a -> b`, referenced by `port ... with`
        source_id: Source node ID
        target_id: Target node ID
        source_port: Port ID on the source node (`node.port` syntax)
        target_port: Port ID on the target node
        label: Optional label after `:`
        interface_name: Optional interface name written before the source
        origin: Declared by the user or produced by boundary synthesis
    """

    id: str
    name: str | None = None
    source_id: str
    target_id: str
    source_port: str | None = None
    target_port: str | None = None
    label: str | None = None
    interface_name: str | None = None
    origin: ConnectorOrigin = ConnectorOrigin.DECLARED

    @property
    def is_cross_level(self) -> bool:
        return self.origin is not ConnectorOrigin.DECLARED

    @property
    def is_auto_generated(self) -> bool:
        return self.origin is ConnectorOrigin.SYNTHESIZED

    @property
    def is_delegate(self) -> bool:
        return False

    @property
    def edge_type(self) -> str | None:
        """Raw interface notation, None for arrows."""
        return None

    @property
    def stereotype(self) -> str | None:
        return None


class PlainConnector(ConnectorBase):
    """Solid arrow (`->` or `-->`)."""

    kind: Literal["plain"] = "plain"
    arrow: Literal["->", "-->"] = "->"


class DelegateConnector(ConnectorBase):
    """Dashed delegate arrow (`->delegate->`)."""

    kind: Literal["delegate"] = "delegate"

    @property
    def is_delegate(self) -> bool:
        return True

    @property
    def stereotype(self) -> str | None:
        return "delegate"


class InterfaceConnector(ConnectorBase):
    """
    Lollipop connector written in compact interface notation.

    A `()` pair is a ball (provided interface) and a lone parenthesis is a
    socket (required interface). The end whose side of the notation starts
    with a ball provides the interface: `-())-` means the source provides
    and the target requires, `-(()-` the reverse.
    """

    kind: Literal["interface"] = "interface"
    notation: str

    @field_validator("notation")
    @classmethod
    def check_notation(cls, value: str) -> str:
        if not INTERFACE_NOTATION.match(value):
            raise ValueError(f"Invalid interface notation: {value!r}")
        return value

    @property
    def edge_type(self) -> str | None:
        return self.notation

    @property
    def source_role(self) -> InterfaceRole:
        if self.notation[1:].startswith("()"):
            return InterfaceRole.PROVIDED
        return InterfaceRole.REQUIRED

    @property
    def target_role(self) -> InterfaceRole:
        return self.source_role.opposite()

    def inverted_notation(self) -> str:
        """Notation with the source and target roles swapped."""
        if self.source_role is InterfaceRole.PROVIDED:
            return REQUIRER_NOTATION
        return PROVIDER_NOTATION


Connector = Annotated[
    PlainConnector | DelegateConnector | InterfaceConnector,
    Field(discriminator="kind"),
]
