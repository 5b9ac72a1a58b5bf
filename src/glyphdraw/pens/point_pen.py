"""Point pen that builds a Drawing incrementally.

The pen is a two-state machine: idle (no contour open) and path-open (one
contour under construction). Calls made in the wrong state raise
PenProtocolError. Components can be added in either state.

Two call surfaces are offered:
- snake_case: ``begin_path``, ``add_point``, ``end_path``, ``add_component``
- the fontTools point pen protocol: ``beginPath``, ``addPoint``, ``endPath``,
  ``addComponent``, so ``glyph.drawPoints(pen)`` fills a Drawing directly

A pen exclusively borrows its Drawing from creation until :meth:`close`
(or the end of a ``with`` block). If the pen is garbage collected without
being closed, the borrow is released and any open contour is lost.
"""

import weakref
from typing import Any

import structlog
from fontTools.misc.transform import Transform
from fontTools.pens.pointPen import AbstractPointPen

from glyphdraw.config import GlyphDrawSettings, UnclosedPathPolicy, get_default_settings
from glyphdraw.domain.contour import Contour, Node, PointType
from glyphdraw.domain.drawing import Component, Drawing
from glyphdraw.exceptions import PenProtocolError
from glyphdraw.utils import summarize_drawing

logger = structlog.get_logger(__name__)


class DrawingPointPen(AbstractPointPen):
    """Builds contours and components into a bound Drawing.

    Example:
        drawing = Drawing.new()
        with drawing.point_pen() as pen:
            pen.begin_path()
            pen.add_point(0, 0, PointType.MOVE)
            pen.add_point(100, 0, PointType.LINE)
            pen.end_path()
            pen.add_component("acutecomb", translate(40, 500))
    """

    def __init__(self, drawing: Drawing, settings: GlyphDrawSettings | None = None) -> None:
        """Start a session on ``drawing``.

        Args:
            drawing: Drawing to build into
            settings: Library settings (defaults apply when None)

        Raises:
            DrawingBorrowedError: If another session already holds the drawing
        """
        drawing._acquire()
        self._drawing = drawing
        self._settings = settings if settings is not None else get_default_settings()
        self._contour: Contour | None = None
        self._closed = False
        self._contours_added = 0
        self._components_added = 0
        self._finalizer = weakref.finalize(self, drawing._release)

    @property
    def drawing(self) -> Drawing:
        return self._drawing

    @property
    def is_path_open(self) -> bool:
        """True between begin_path and end_path."""
        return self._contour is not None

    @property
    def closed(self) -> bool:
        """True once the session has ended."""
        return self._closed

    def _ensure_session(self) -> None:
        if self._closed:
            raise PenProtocolError("Point pen session is closed")

    def _open_contour(self, operation: str) -> Contour:
        self._ensure_session()
        if self._contour is None:
            raise PenProtocolError(f"{operation} called without an open path; call begin_path first")
        return self._contour

    # --------
    # Protocol
    # --------

    def begin_path(self) -> None:
        """Open a new, empty contour.

        Raises:
            PenProtocolError: If a path is already open
        """
        self._ensure_session()
        if self._contour is not None:
            raise PenProtocolError("begin_path called while a path is already open")
        self._contour = Contour.new()

    def add_point(self, x: float, y: float, typ: PointType) -> None:
        """Append a point to the open contour.

        Raises:
            PenProtocolError: If no path is open
        """
        contour = self._open_contour("add_point")
        contour.nodes.append(Node.new(x, y, typ))

    def end_path(self) -> None:
        """Append the open contour to the drawing and return to idle.

        Raises:
            PenProtocolError: If no path is open
        """
        contour = self._open_contour("end_path")
        self._drawing.contours.append(contour)
        self._contour = None
        self._contours_added += 1
        logger.debug("Path ended", nodes=len(contour.nodes), index=len(self._drawing.contours) - 1)

    def add_component(self, base_name: str, transform: Transform) -> None:
        """Append a component to the drawing, whether or not a path is open.

        Nothing is appended when the name is rejected.

        Raises:
            NameValidationError: If ``base_name`` violates identifier restrictions
        """
        self._ensure_session()
        component = Component.new(base_name, transform)
        self._drawing.components.append(component)
        self._components_added += 1
        logger.debug("Component added", base=str(component.base))

    def close(self) -> None:
        """End the session and release the drawing.

        Closing an already closed session does nothing.

        Raises:
            PenProtocolError: If a path is still open and the unclosed path
                policy is ``error``. The drawing is released and the partial
                contour discarded before raising.
        """
        if self._closed:
            return

        unfinished = self._release()

        if unfinished is None:
            logger.debug(
                "Point pen session closed",
                contours_added=self._contours_added,
                components_added=self._components_added,
                **summarize_drawing(self._drawing).to_dict(),
            )
            return

        if self._settings.pen.unclosed_path is UnclosedPathPolicy.ERROR:
            raise PenProtocolError(
                f"Point pen session closed with an open path of {len(unfinished.nodes)} points"
            )
        logger.warning("Unclosed path discarded", nodes=len(unfinished.nodes))

    def _release(self) -> Contour | None:
        unfinished = self._contour
        self._contour = None
        self._closed = True
        self._finalizer()
        return unfinished

    def __enter__(self) -> "DrawingPointPen":
        """Context manager entry."""
        self._ensure_session()
        return self

    def __exit__(self, exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit.

        An exception leaving the block propagates unchanged; any open
        contour is discarded.
        """
        if exc_type is not None:
            self._release()
            return
        self.close()

    # ---------------------------
    # fontTools point pen methods
    # ---------------------------

    def beginPath(self, identifier: str | None = None, **kwargs: Any) -> None:
        self.begin_path()

    def endPath(self) -> None:
        self.end_path()

    def addPoint(
        self,
        pt: tuple[float, float],
        segmentType: str | None = None,
        smooth: bool = False,
        name: str | None = None,
        identifier: str | None = None,
        **kwargs: Any,
    ) -> None:
        x, y = pt
        self.add_point(x, y, PointType.from_segment(segmentType, smooth))

    def addComponent(
        self,
        baseGlyphName: str,
        transformation: Transform,
        identifier: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.add_component(baseGlyphName, Transform(*transformation))
