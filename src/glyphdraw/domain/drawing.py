"""Glyph drawing representation.

This module defines the aggregate glyph model:
- Anchor: a named point of interest
- Component: a placed reference to another glyph
- Drawing: anchors, components and contours of a single glyph

A Drawing can be borrowed by one point pen session at a time. While the
borrow is held, the Drawing refuses to be transformed, drawn or lent again.
"""

import copy
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import structlog
from fontTools.misc.transform import Transform
from fontTools.pens.pointPen import PointToSegmentPen

from glyphdraw.domain.contour import Contour
from glyphdraw.domain.geometry import IDENTITY, Point, apply, compose, translate
from glyphdraw.domain.names import Name
from glyphdraw.exceptions import DrawingBorrowedError

if TYPE_CHECKING:
    from glyphdraw.config import GlyphDrawSettings
    from glyphdraw.pens import DrawingPointPen

logger = structlog.get_logger(__name__)


@dataclass
class Anchor:
    """A named point of interest, such as a mark attachment point.

    The name is validated on construction and never changes afterwards.

    Attributes:
        pt: Anchor position in font units
        name: Validated anchor name
    """

    pt: Point
    name: Name

    def __post_init__(self) -> None:
        self.name = Name.validate(self.name)

    @classmethod
    def new(cls, x: float, y: float, name: str) -> "Anchor":
        """Create an anchor from raw coordinates and a name.

        Raises:
            NameValidationError: If ``name`` violates identifier restrictions
        """
        return cls(pt=Point(x, y), name=Name.validate(name))

    @property
    def x(self) -> float:
        return self.pt.x

    @property
    def y(self) -> float:
        return self.pt.y

    def apply_affine(self, transform: Transform) -> None:
        """Map the anchor position through ``transform``."""
        self.pt = apply(transform, self.pt)


@dataclass
class Component:
    """A reference to another glyph, placed by an affine transform.

    Attributes:
        base: Validated name of the referenced glyph
        transform: Placement of the referenced outline within this glyph
    """

    base: Name
    transform: Transform = IDENTITY

    def __post_init__(self) -> None:
        self.base = Name.validate(self.base)
        self.transform = Transform(*self.transform)

    @classmethod
    def new(cls, base: str, transform: Transform = IDENTITY) -> "Component":
        """Create a component from a base glyph name and a transform.

        Raises:
            NameValidationError: If ``base`` violates identifier restrictions
        """
        return cls(base=Name.validate(base), transform=transform)

    def apply_affine(self, transform: Transform) -> None:
        """Reposition the component by ``transform``.

        The existing placement is applied first and ``transform`` second.
        """
        self.transform = compose(transform, self.transform)

    def draw_points(self, point_pen: Any) -> None:
        """Draw the component with a fontTools point pen."""
        point_pen.addComponent(str(self.base), self.transform)


@dataclass
class Drawing:
    """The outline and composition data of a single glyph.

    Every sequence keeps insertion order. Any combination of empty and
    populated fields is a valid drawing.

    While a point pen session holds the drawing, its methods and attribute
    assignment (``drawing.width = ...``) raise DrawingBorrowedError. Reads
    and in-place list mutation (``drawing.contours.append(...)``) are not
    intercepted; callers must leave the drawing alone until the session ends.
    Copies never inherit a borrow.

    Attributes:
        height_and_origin: (height, origin Y) when set by a layout source
        width: Advance width
        anchors: Anchors in insertion order
        components: Components in insertion order
        contours: Contours in drawing order
    """

    height_and_origin: tuple[float, float] | None = None
    width: float = 0
    anchors: list[Anchor] = field(default_factory=list)
    components: list[Component] = field(default_factory=list)
    contours: list[Contour] = field(default_factory=list)
    _borrowed: bool = field(default=False, init=False, repr=False, compare=False)

    @classmethod
    def new(cls) -> "Drawing":
        """Create an empty drawing."""
        return cls()

    def __setattr__(self, name: str, value: Any) -> None:
        if name != "_borrowed" and self.__dict__.get("_borrowed", False):
            raise DrawingBorrowedError(f"set {name}")
        super().__setattr__(name, value)

    def __copy__(self) -> "Drawing":
        return replace(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> "Drawing":
        return replace(
            self,
            height_and_origin=copy.deepcopy(self.height_and_origin, memo),
            anchors=copy.deepcopy(self.anchors, memo),
            components=copy.deepcopy(self.components, memo),
            contours=copy.deepcopy(self.contours, memo),
        )

    @property
    def is_borrowed(self) -> bool:
        """True while a point pen session holds this drawing."""
        return self._borrowed

    def _ensure_available(self, operation: str) -> None:
        if self._borrowed:
            raise DrawingBorrowedError(operation)

    def _acquire(self) -> None:
        self._ensure_available("start a point pen session")
        self._borrowed = True

    def _release(self) -> None:
        self._borrowed = False

    def apply_affine(self, transform: Transform) -> None:
        """Transform the whole drawing in place.

        Anchors are processed first, then components, then contours. Each
        element follows its own rule: anchor and node points are mapped,
        component transforms are composed with ``transform`` applied last.

        Args:
            transform: Affine transform to apply

        Raises:
            DrawingBorrowedError: If a point pen session holds the drawing
        """
        self._ensure_available("apply a transform")
        transform = Transform(*transform)

        for anchor in self.anchors:
            anchor.apply_affine(transform)
        logger.debug("Anchors transformed", count=len(self.anchors))

        for component in self.components:
            component.apply_affine(transform)
        logger.debug("Components transformed", count=len(self.components))

        for contour in self.contours:
            contour.apply_affine(transform)
        logger.debug("Contours transformed", count=len(self.contours))

    def move(self, dx: float, dy: float) -> None:
        """Move the whole drawing by ``(dx, dy)``."""
        self._ensure_available("move")
        self.apply_affine(translate(dx, dy))

    def add_anchor(self, x: float, y: float, name: str) -> None:
        """Create an anchor and append it.

        Nothing is appended when the name is rejected.

        Raises:
            NameValidationError: If ``name`` violates identifier restrictions
            DrawingBorrowedError: If a point pen session holds the drawing
        """
        self._ensure_available("add an anchor")
        anchor = Anchor.new(x, y, name)
        self.anchors.append(anchor)

    def is_empty(self) -> bool:
        """Check if the drawing has no anchors, components or contours."""
        return not (self.anchors or self.components or self.contours)

    def control_point_bounds(self) -> tuple[float, float, float, float] | None:
        """Calculate the control point bounds of all contours.

        Components are not resolved, so they do not contribute.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y), or None without any node
        """
        boxes = [
            box for box in (contour.bounding_box() for contour in self.contours)
            if box is not None
        ]
        if not boxes:
            return None

        return (
            min(box[0] for box in boxes),
            min(box[1] for box in boxes),
            max(box[2] for box in boxes),
            max(box[3] for box in boxes),
        )

    # -----------
    # Pen Methods
    # -----------

    def point_pen(self, settings: "GlyphDrawSettings | None" = None) -> "DrawingPointPen":
        """Start a point pen session that exclusively borrows this drawing.

        Args:
            settings: Settings for the session (defaults apply when None)

        Returns:
            A new DrawingPointPen bound to this drawing

        Raises:
            DrawingBorrowedError: If another session already holds the drawing
        """
        from glyphdraw.pens import DrawingPointPen

        return DrawingPointPen(self, settings=settings)

    def draw_points(self, point_pen: Any) -> None:
        """Draw the contours, then the components, with a fontTools point pen.

        Anchors are not part of the point pen protocol and are not drawn.
        """
        self._ensure_available("draw")
        for contour in self.contours:
            contour.draw_points(point_pen)
        for component in self.components:
            component.draw_points(point_pen)

    def draw(self, pen: Any) -> None:
        """Draw the drawing with a fontTools segment pen."""
        self.draw_points(PointToSegmentPen(pen))
