"""Pens for building glyph drawings.

Key classes:
- DrawingPointPen: Builds contours and components into a Drawing, speaking
  both the snake_case builder protocol and the fontTools point pen protocol
"""

from glyphdraw.pens.point_pen import DrawingPointPen

__all__ = ["DrawingPointPen"]
