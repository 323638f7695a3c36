"""
Geometry types for the layout engine.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NodeBox:
    """
    Axis-aligned box of a node.

    Attributes:
        x: Centre X
        y: Centre Y
        width: Box width
        height: Box height
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2

    def translated(self, dx: float, dy: float) -> NodeBox:
        return NodeBox(self.x + dx, self.y + dy, self.width, self.height)

    def moved_to(self, x: float, y: float) -> NodeBox:
        return NodeBox(x, y, self.width, self.height)

    def intersects(self, other: NodeBox) -> bool:
        """True when the interiors overlap; touching edges do not count."""
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def contains(self, other: NodeBox, inset_x: float = 0, inset_y: float = 0) -> bool:
        """True when `other` fits inside this box shrunk by the insets."""
        return (
            self.left + inset_x <= other.left
            and other.right <= self.right - inset_x
            and self.top + inset_y <= other.top
            and other.bottom <= self.bottom - inset_y
        )


def union_bounds(boxes: list[NodeBox]) -> tuple[float, float, float, float]:
    """Return (left, top, right, bottom) of the union of boxes."""
    return (
        min(b.left for b in boxes),
        min(b.top for b in boxes),
        max(b.right for b in boxes),
        max(b.bottom for b in boxes),
    )
