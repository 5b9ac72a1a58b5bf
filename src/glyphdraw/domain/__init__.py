"""Domain models for glyphdraw.

This module contains the glyph drawing model and the small substrate it is
built on. Models are plain mutable dataclasses compared field by field;
points and names are immutable.

Key classes:
- Name: Validated glyph or anchor name
- Point: A 2D point
- PointType: The closed set of contour point kinds
- Node: One typed point on a contour
- Contour: An ordered outline path
- Anchor: A named point of interest
- Component: A placed reference to another glyph
- Drawing: The aggregate glyph representation
"""

from fontTools.misc.transform import Transform

from glyphdraw.domain.contour import Contour, Node, PointType
from glyphdraw.domain.drawing import Anchor, Component, Drawing
from glyphdraw.domain.geometry import (
    IDENTITY,
    Point,
    apply,
    compose,
    rotate,
    scale,
    translate,
)
from glyphdraw.domain.names import Name, is_valid_name

__all__: list[str] = [
    # Substrate
    "IDENTITY",
    "Name",
    "Point",
    "Transform",
    "apply",
    "compose",
    "is_valid_name",
    "rotate",
    "scale",
    "translate",
    # Enums
    "PointType",
    # Core types
    "Node",
    "Contour",
    "Anchor",
    "Component",
    "Drawing",
]
