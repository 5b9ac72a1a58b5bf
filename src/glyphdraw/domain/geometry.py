"""2D points and affine transforms.

Transforms are ``fontTools.misc.transform.Transform`` six-tuples
``(xx, xy, yx, yy, dx, dy)``. Composition follows the fontTools convention:
``outer.transform(inner)`` is the transform that applies ``inner`` first and
``outer`` second, which is what :func:`compose` returns.
"""

from dataclasses import dataclass

from fontTools.misc.transform import Identity, Transform

IDENTITY: Transform = Identity


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space, in font units.

    Immutable and hashable.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to a plain ``(x, y)`` tuple."""
        return (self.x, self.y)


def apply(transform: Transform, point: Point) -> Point:
    """Map a point through an affine transform.

    Args:
        transform: Transform to apply
        point: Point to map

    Returns:
        The mapped point

    Examples:
        >>> apply(translate(10, 20), Point(1.0, 2.0))
        Point(x=11.0, y=22.0)
    """
    x, y = Transform(*transform).transformPoint((point.x, point.y))
    return Point(float(x), float(y))


def compose(outer: Transform, inner: Transform) -> Transform:
    """Compose two transforms so that ``inner`` is applied before ``outer``.

    For every point ``p``:
    ``apply(compose(outer, inner), p) == apply(outer, apply(inner, p))``.

    Args:
        outer: Transform applied second
        inner: Transform applied first

    Returns:
        The composed transform
    """
    return Transform(*outer).transform(inner)


def translate(dx: float, dy: float) -> Transform:
    """Return a pure translation by ``(dx, dy)``."""
    return Identity.translate(dx, dy)


def scale(sx: float, sy: float | None = None) -> Transform:
    """Return a scale about the origin; ``sy`` defaults to ``sx``."""
    return Identity.scale(sx, sy)


def rotate(angle: float) -> Transform:
    """Return a counter-clockwise rotation about the origin, in radians."""
    return Identity.rotate(angle)
