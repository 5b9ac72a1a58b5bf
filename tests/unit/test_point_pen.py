"""Unit tests for the drawing point pen."""

import copy
import gc

import pytest
from fontTools.pens.pointPen import SegmentToPointPen
from fontTools.pens.recordingPen import RecordingPen, RecordingPointPen

from glyphdraw.config import GlyphDrawSettings, PenConfig, UnclosedPathPolicy
from glyphdraw.domain import (
    Anchor,
    Component,
    Contour,
    Drawing,
    Node,
    PointType,
    Transform,
    translate,
)
from glyphdraw.exceptions import (
    DrawingBorrowedError,
    GlyphDrawError,
    NameValidationError,
    PenProtocolError,
)
from glyphdraw.pens import DrawingPointPen


@pytest.fixture
def drawing() -> Drawing:
    """Create an empty drawing."""
    return Drawing.new()


@pytest.fixture
def discard_settings() -> GlyphDrawSettings:
    """Create settings that silently discard unclosed paths."""
    return GlyphDrawSettings(pen=PenConfig(unclosed_path=UnclosedPathPolicy.DISCARD))


class TestBuilderProtocol:
    """Tests for begin_path / add_point / end_path / add_component."""

    def test_pen_scenario(self, drawing: Drawing) -> None:
        """Test building and transforming a drawing through the pen."""
        drawing.add_anchor(0, 0, "a")
        with drawing.point_pen() as pen:
            pen.begin_path()
            pen.add_point(0, 0, PointType.MOVE)
            pen.add_point(1, 1, PointType.LINE)
            pen.end_path()
            pen.add_component("b", translate(1, 1))
        drawing.apply_affine(translate(123, 456))

        assert drawing == Drawing(
            height_and_origin=None,
            width=0,
            anchors=[Anchor.new(123, 456, "a")],
            components=[Component.new("b", Transform(1, 0, 0, 1, 124, 457))],
            contours=[
                Contour.from_nodes(
                    [
                        Node.new(123, 456, PointType.MOVE),
                        Node.new(124, 457, PointType.LINE),
                    ]
                )
            ],
        )

    def test_point_order_preserved(self, drawing: Drawing) -> None:
        """Test that nodes follow add_point call order."""
        calls = [
            (0, 0, PointType.LINE),
            (10, 0, PointType.OFF_CURVE),
            (20, 10, PointType.OFF_CURVE),
            (20, 20, PointType.SMOOTH_CURVE),
            (0, 20, PointType.QCURVE),
        ]
        with drawing.point_pen() as pen:
            pen.begin_path()
            for x, y, typ in calls:
                pen.add_point(x, y, typ)
            pen.end_path()

        nodes = drawing.contours[0].nodes
        assert [(n.pt.x, n.pt.y, n.typ) for n in nodes] == calls

    def test_contour_order_preserved(self, drawing: Drawing) -> None:
        """Test that contours follow end_path order across cycles."""
        with drawing.point_pen() as pen:
            for i in range(3):
                pen.begin_path()
                pen.add_point(i, i, PointType.MOVE)
                pen.end_path()

        assert [c.nodes[0].pt.x for c in drawing.contours] == [0, 1, 2]

    def test_empty_path(self, drawing: Drawing) -> None:
        """Test that an empty path produces an empty contour."""
        with drawing.point_pen() as pen:
            pen.begin_path()
            pen.end_path()
        assert drawing.contours == [Contour.new()]

    def test_state_reporting(self, drawing: Drawing) -> None:
        """Test is_path_open across the state machine."""
        with drawing.point_pen() as pen:
            assert not pen.is_path_open
            pen.begin_path()
            assert pen.is_path_open
            pen.end_path()
            assert not pen.is_path_open
            assert pen.drawing is drawing

    def test_contour_counted_when_ended(self, drawing: Drawing) -> None:
        """Test that only ended paths reach the drawing."""
        pen = drawing.point_pen()
        pen.begin_path()
        pen.add_point(0, 0, PointType.MOVE)
        pen.end_path()
        pen.begin_path()
        pen.add_point(5, 5, PointType.MOVE)
        with pytest.raises(PenProtocolError):
            pen.close()
        assert len(drawing.contours) == 1

    def test_component_while_path_open(self, drawing: Drawing) -> None:
        """Test that components can be added in the middle of a path."""
        with drawing.point_pen() as pen:
            pen.begin_path()
            pen.add_point(0, 0, PointType.MOVE)
            pen.add_component("acutecomb", translate(40, 500))
            pen.add_point(5, 5, PointType.LINE)
            pen.end_path()

        assert [c.base for c in drawing.components] == ["acutecomb"]
        assert len(drawing.contours[0].nodes) == 2

    def test_component_bad_name(self, drawing: Drawing) -> None:
        """Test that a rejected component name appends nothing."""
        with drawing.point_pen() as pen:
            with pytest.raises(NameValidationError):
                pen.add_component("", translate(0, 0))
            with pytest.raises(NameValidationError):
                pen.add_component("a\tb", translate(0, 0))
            pen.add_component("ok", translate(0, 0))
        assert [c.base for c in drawing.components] == ["ok"]


class TestPreconditions:
    """Tests for fatal protocol violations."""

    def test_add_point_without_begin(self, drawing: Drawing) -> None:
        """Test add_point outside a path."""
        pen = drawing.point_pen()
        with pytest.raises(PenProtocolError, match="add_point"):
            pen.add_point(0, 0, PointType.MOVE)

    def test_end_path_without_begin(self, drawing: Drawing) -> None:
        """Test end_path outside a path."""
        pen = drawing.point_pen()
        with pytest.raises(PenProtocolError, match="end_path"):
            pen.end_path()

    def test_double_begin(self, drawing: Drawing) -> None:
        """Test begin_path while a path is open."""
        pen = drawing.point_pen()
        pen.begin_path()
        with pytest.raises(PenProtocolError, match="already open"):
            pen.begin_path()

    def test_end_path_twice(self, drawing: Drawing) -> None:
        """Test that end_path closes the path only once."""
        pen = drawing.point_pen()
        pen.begin_path()
        pen.end_path()
        with pytest.raises(PenProtocolError):
            pen.end_path()

    def test_protocol_error_is_fatal_kind(self, drawing: Drawing) -> None:
        """Test that protocol errors are assertions, not recoverable errors."""
        pen = drawing.point_pen()
        with pytest.raises(AssertionError) as excinfo:
            pen.end_path()
        assert not isinstance(excinfo.value, GlyphDrawError)


class TestSession:
    """Tests for the exclusive borrow and session lifetime."""

    def test_drawing_borrowed_while_open(self, drawing: Drawing) -> None:
        """Test that the drawing refuses other access during a session."""
        pen = drawing.point_pen()
        assert drawing.is_borrowed

        with pytest.raises(DrawingBorrowedError):
            drawing.apply_affine(translate(1, 1))
        with pytest.raises(DrawingBorrowedError):
            drawing.move(1, 1)
        with pytest.raises(DrawingBorrowedError):
            drawing.add_anchor(0, 0, "a")
        with pytest.raises(DrawingBorrowedError):
            drawing.draw_points(RecordingPointPen())
        with pytest.raises(DrawingBorrowedError):
            drawing.point_pen()
        with pytest.raises(DrawingBorrowedError):
            DrawingPointPen(drawing)

        pen.close()
        assert not drawing.is_borrowed
        drawing.add_anchor(0, 0, "a")

    def test_field_assignment_refused_while_open(self, drawing: Drawing) -> None:
        """Test that attribute writes are refused during a session."""
        pen = drawing.point_pen()
        with pytest.raises(DrawingBorrowedError, match="set width"):
            drawing.width = 500
        with pytest.raises(DrawingBorrowedError, match="set contours"):
            drawing.contours = []
        assert drawing.width == 0

        pen.close()
        drawing.width = 500
        drawing.height_and_origin = (1000, -200)
        assert drawing.width == 500

    @pytest.mark.parametrize("copier", [copy.copy, copy.deepcopy])
    def test_copy_does_not_inherit_borrow(self, drawing: Drawing, copier) -> None:
        """Test that a copy taken during a session is usable on its own."""
        with drawing.point_pen() as pen:
            pen.begin_path()
            pen.add_point(0, 0, PointType.MOVE)
            pen.end_path()
            clone = copier(drawing)
            assert not clone.is_borrowed
            assert drawing.is_borrowed

        clone.apply_affine(translate(1, 1))
        with clone.point_pen() as pen:
            pen.add_component("b", translate(0, 0))
        assert [c.base for c in clone.components] == ["b"]

    def test_deepcopy_is_independent(self, drawing: Drawing) -> None:
        """Test that a deep copy shares no contours with the original."""
        drawing.add_anchor(0, 0, "a")
        with drawing.point_pen() as pen:
            pen.begin_path()
            pen.add_point(0, 0, PointType.MOVE)
            pen.end_path()

        clone = copy.deepcopy(drawing)
        clone.move(10, 10)

        assert clone != drawing
        assert drawing.contours[0].nodes[0].pt.to_tuple() == (0, 0)
        assert drawing.anchors[0].pt.to_tuple() == (0, 0)

    def test_borrow_error_is_protocol_error(self, drawing: Drawing) -> None:
        """Test that borrow violations are protocol violations."""
        _pen = drawing.point_pen()
        with pytest.raises(PenProtocolError, match="borrowed"):
            drawing.point_pen()

    def test_sequential_sessions(self, drawing: Drawing) -> None:
        """Test that a new session can start after the previous one ends."""
        with drawing.point_pen() as pen:
            pen.add_component("a", translate(0, 0))
        with drawing.point_pen() as pen:
            pen.add_component("b", translate(0, 0))
        assert [c.base for c in drawing.components] == ["a", "b"]

    def test_calls_after_close(self, drawing: Drawing) -> None:
        """Test that a closed session rejects every call."""
        pen = drawing.point_pen()
        pen.close()
        assert pen.closed
        with pytest.raises(PenProtocolError, match="closed"):
            pen.begin_path()
        with pytest.raises(PenProtocolError, match="closed"):
            pen.add_component("a", translate(0, 0))
        with pytest.raises(PenProtocolError, match="closed"):
            with pen:
                pass

    def test_close_twice(self, drawing: Drawing) -> None:
        """Test that closing twice is a no-op."""
        pen = drawing.point_pen()
        pen.close()
        pen.close()
        assert not drawing.is_borrowed

    def test_released_on_garbage_collection(self, drawing: Drawing) -> None:
        """Test that dropping an unclosed pen releases the drawing."""
        pen = drawing.point_pen()
        pen.begin_path()
        pen.add_point(0, 0, PointType.MOVE)
        del pen
        gc.collect()

        assert not drawing.is_borrowed
        assert drawing.contours == []


class TestUnclosedPath:
    """Tests for ending a session with an open path."""

    def test_close_raises_by_default(self, drawing: Drawing) -> None:
        """Test that the default policy treats an open path as fatal."""
        pen = drawing.point_pen()
        pen.begin_path()
        pen.add_point(0, 0, PointType.MOVE)

        with pytest.raises(PenProtocolError, match="open path of 1 points"):
            pen.close()

        assert drawing.contours == []
        assert not drawing.is_borrowed
        assert pen.closed

    def test_with_block_raises_by_default(self, drawing: Drawing) -> None:
        """Test that leaving a with block with an open path is fatal."""
        with pytest.raises(PenProtocolError):
            with drawing.point_pen() as pen:
                pen.begin_path()
        assert drawing.contours == []
        assert not drawing.is_borrowed

    def test_discard_policy(self, drawing: Drawing, discard_settings: GlyphDrawSettings) -> None:
        """Test that the discard policy drops the partial contour silently."""
        with drawing.point_pen(settings=discard_settings) as pen:
            pen.begin_path()
            pen.add_point(0, 0, PointType.MOVE)
            pen.end_path()
            pen.begin_path()
            pen.add_point(5, 5, PointType.MOVE)

        assert len(drawing.contours) == 1
        assert not drawing.is_borrowed

    def test_exception_in_block_propagates(self, drawing: Drawing) -> None:
        """Test that an error inside the block is not masked."""
        with pytest.raises(KeyError):
            with drawing.point_pen() as pen:
                pen.begin_path()
                raise KeyError("producer failed")

        assert drawing.contours == []
        assert not drawing.is_borrowed


class TestFontToolsProtocol:
    """Tests for interoperability with fontTools pens."""

    def test_segment_producer(self, drawing: Drawing) -> None:
        """Test drawing segments through SegmentToPointPen into the pen."""
        with drawing.point_pen() as pen:
            seg = SegmentToPointPen(pen, guessSmooth=False)
            seg.moveTo((0, 0))
            seg.curveTo((10, 0), (20, 10), (20, 20))
            seg.lineTo((0, 20))
            seg.closePath()
            seg.moveTo((50, 50))
            seg.lineTo((60, 60))
            seg.endPath()
            seg.addComponent("b", (1, 0, 0, 1, 5, 5))

        closed, opened = drawing.contours
        assert [(n.pt.to_tuple(), n.typ) for n in closed.nodes] == [
            ((0, 0), PointType.LINE),
            ((10, 0), PointType.OFF_CURVE),
            ((20, 10), PointType.OFF_CURVE),
            ((20, 20), PointType.CURVE),
            ((0, 20), PointType.LINE),
        ]
        assert [(n.pt.to_tuple(), n.typ) for n in opened.nodes] == [
            ((50, 50), PointType.MOVE),
            ((60, 60), PointType.LINE),
        ]
        assert drawing.components == [Component.new("b", translate(5, 5))]

    def test_add_point_smooth(self, drawing: Drawing) -> None:
        """Test that fontTools segment types and smooth flags are mapped."""
        with drawing.point_pen() as pen:
            pen.beginPath(identifier="contour1")
            pen.addPoint((0, 0), "move", smooth=True, name="start", identifier="p1")
            pen.addPoint((1, 0), None)
            pen.addPoint((2, 0), "qcurve", True)
            pen.endPath()
            pen.addComponent("a", (1, 0, 0, 1, 0, 0), identifier="c1")

        assert [n.typ for n in drawing.contours[0].nodes] == [
            PointType.SMOOTH_MOVE,
            PointType.OFF_CURVE,
            PointType.SMOOTH_QCURVE,
        ]
        assert isinstance(drawing.components[0].transform, Transform)

    def test_fonttools_calls_enforce_protocol(self, drawing: Drawing) -> None:
        """Test that the camelCase surface shares the state machine."""
        pen = drawing.point_pen()
        with pytest.raises(PenProtocolError):
            pen.addPoint((0, 0), "line")
        pen.beginPath()
        with pytest.raises(PenProtocolError):
            pen.beginPath()

    def test_draw_points_replay(self, drawing: Drawing) -> None:
        """Test that a drawing replays into another drawing unchanged."""
        with drawing.point_pen() as pen:
            pen.begin_path()
            pen.add_point(0, 0, PointType.SMOOTH_LINE)
            pen.add_point(10, 0, PointType.OFF_CURVE)
            pen.add_point(10, 10, PointType.QCURVE)
            pen.end_path()
            pen.add_component("b", translate(3, 4))

        recording = RecordingPointPen()
        drawing.draw_points(recording)
        assert [entry[0] for entry in recording.value] == [
            "beginPath",
            "addPoint",
            "addPoint",
            "addPoint",
            "endPath",
            "addComponent",
        ]

        replayed = Drawing.new()
        with replayed.point_pen() as pen:
            recording.replay(pen)
        assert replayed.contours == drawing.contours
        assert replayed.components == drawing.components

    def test_draw_segments(self, drawing: Drawing) -> None:
        """Test drawing an open contour and a component with a segment pen."""
        with drawing.point_pen() as pen:
            pen.begin_path()
            pen.add_point(0, 0, PointType.MOVE)
            pen.add_point(1, 1, PointType.LINE)
            pen.end_path()
            pen.add_component("b", translate(1, 1))

        recording = RecordingPen()
        drawing.draw(recording)
        assert recording.value == [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((1, 1),)),
            ("endPath", ()),
            ("addComponent", ("b", translate(1, 1))),
        ]
