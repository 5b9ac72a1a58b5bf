"""glyphdraw - In-memory glyph outlines built through a point pen.

glyphdraw models a single glyph's drawing (anchors, component references and
contours of on/off-curve points) and provides a point pen that builds such a
drawing incrementally from any outline producer.

Example:
    >>> from glyphdraw import Drawing, PointType, translate
    >>> drawing = Drawing.new()
    >>> with drawing.point_pen() as pen:
    ...     pen.begin_path()
    ...     pen.add_point(0, 0, PointType.MOVE)
    ...     pen.add_point(1, 1, PointType.LINE)
    ...     pen.end_path()
    >>> drawing.apply_affine(translate(10, 0))
    >>> drawing.contours[0].nodes[0].pt
    Point(x=10.0, y=0.0)
"""

from glyphdraw.domain import (
    IDENTITY,
    Anchor,
    Component,
    Contour,
    Drawing,
    Name,
    Node,
    Point,
    PointType,
    Transform,
    apply,
    compose,
    rotate,
    scale,
    translate,
)
from glyphdraw.exceptions import (
    DrawingBorrowedError,
    GlyphDrawError,
    NameValidationError,
    PenProtocolError,
)
from glyphdraw.pens import DrawingPointPen

__version__ = "0.1.0"

__all__ = [
    "IDENTITY",
    "Anchor",
    "Component",
    "Contour",
    "Drawing",
    "DrawingBorrowedError",
    "DrawingPointPen",
    "GlyphDrawError",
    "Name",
    "NameValidationError",
    "Node",
    "PenProtocolError",
    "Point",
    "PointType",
    "Transform",
    "__version__",
    "apply",
    "compose",
    "rotate",
    "scale",
    "translate",
]
