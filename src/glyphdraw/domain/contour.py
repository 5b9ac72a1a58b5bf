"""Contours and the points they are made of.

This module defines:
- PointType: the closed set of point kinds a contour can hold
- Node: one typed point on a contour
- Contour: an ordered, open or closed outline path
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from fontTools.misc.transform import Transform

from glyphdraw.domain.geometry import Point, apply


class PointType(Enum):
    """Kind of a point on a contour.

    - OFF_CURVE: control point, not on the outline itself
    - MOVE / SMOOTH_MOVE: start of an open (sub)path
    - LINE / SMOOTH_LINE: end of a straight segment
    - CURVE / SMOOTH_CURVE: end of a cubic segment
    - QCURVE / SMOOTH_QCURVE: end of a quadratic segment

    The ``SMOOTH_*`` kinds additionally ask editors to keep tangent
    continuity through the point. The model records the flag only.
    """

    OFF_CURVE = auto()
    MOVE = auto()
    SMOOTH_MOVE = auto()
    LINE = auto()
    SMOOTH_LINE = auto()
    CURVE = auto()
    SMOOTH_CURVE = auto()
    QCURVE = auto()
    SMOOTH_QCURVE = auto()

    @property
    def segment_type(self) -> str | None:
        """fontTools point pen segment type (``None`` for off-curve points)."""
        return _SEGMENT_TYPES[self][0]

    @property
    def is_smooth(self) -> bool:
        """Whether tangent continuity is requested through this point."""
        return _SEGMENT_TYPES[self][1]

    @property
    def is_on_curve(self) -> bool:
        """Whether the point lies on the outline."""
        return self is not PointType.OFF_CURVE

    @classmethod
    def from_segment(cls, segment_type: str | None, smooth: bool = False) -> "PointType":
        """Map a fontTools ``(segmentType, smooth)`` pair to a PointType.

        Smoothness is ignored for off-curve points, as fontTools does.

        Args:
            segment_type: ``None``, ``"move"``, ``"line"``, ``"curve"`` or ``"qcurve"``
            smooth: Smooth flag reported by the producer

        Returns:
            Matching PointType

        Raises:
            ValueError: If the segment type is unknown
        """
        if segment_type is None:
            return cls.OFF_CURVE
        try:
            return _FROM_SEGMENT[(segment_type, bool(smooth))]
        except KeyError:
            raise ValueError(f"Unknown segment type: {segment_type!r}") from None


_SEGMENT_TYPES: dict[PointType, tuple[str | None, bool]] = {
    PointType.OFF_CURVE: (None, False),
    PointType.MOVE: ("move", False),
    PointType.SMOOTH_MOVE: ("move", True),
    PointType.LINE: ("line", False),
    PointType.SMOOTH_LINE: ("line", True),
    PointType.CURVE: ("curve", False),
    PointType.SMOOTH_CURVE: ("curve", True),
    PointType.QCURVE: ("qcurve", False),
    PointType.SMOOTH_QCURVE: ("qcurve", True),
}

_FROM_SEGMENT: dict[tuple[str | None, bool], PointType] = {
    value: point_type for point_type, value in _SEGMENT_TYPES.items()
}


@dataclass
class Node:
    """One point on a contour.

    Attributes:
        pt: Position in font units
        typ: Kind of point
    """

    pt: Point
    typ: PointType

    @classmethod
    def new(cls, x: float, y: float, typ: PointType) -> "Node":
        """Create a node from raw coordinates."""
        return cls(pt=Point(x, y), typ=typ)


@dataclass
class Contour:
    """An ordered outline path.

    Node order is traversal order. An empty contour is legal.

    Attributes:
        nodes: Points of the contour, in drawing order
    """

    nodes: list[Node] = field(default_factory=list)

    @classmethod
    def new(cls) -> "Contour":
        """Create an empty contour."""
        return cls()

    @classmethod
    def from_nodes(cls, nodes: list[Node]) -> "Contour":
        """Create a contour holding ``nodes`` in the given order."""
        return cls(nodes=list(nodes))

    @property
    def is_open(self) -> bool:
        """True if the contour starts with a move point (an open path)."""
        if not self.nodes:
            return False
        return self.nodes[0].typ in (PointType.MOVE, PointType.SMOOTH_MOVE)

    def apply_affine(self, transform: Transform) -> None:
        """Map every node point through ``transform``; node types are kept."""
        for node in self.nodes:
            node.pt = apply(transform, node.pt)

    def bounding_box(self) -> tuple[float, float, float, float] | None:
        """Calculate the control point bounds of the contour.

        Off-curve points are included, so curves are not measured exactly.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y), or None for an empty contour
        """
        if not self.nodes:
            return None

        xs = [node.pt.x for node in self.nodes]
        ys = [node.pt.y for node in self.nodes]
        return (min(xs), min(ys), max(xs), max(ys))

    def draw_points(self, point_pen: Any) -> None:
        """Draw the contour with a fontTools point pen."""
        point_pen.beginPath()
        for node in self.nodes:
            point_pen.addPoint(
                node.pt.to_tuple(),
                segmentType=node.typ.segment_type,
                smooth=node.typ.is_smooth,
            )
        point_pen.endPath()
