from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal as D

import pytest

from gpxparser.exceptions import InvalidChildElement, InvalidElementValue, UnterminatedElement
from gpxparser.parsers.ast import (
    GpxElement,
    GpxNode,
    TagNameEnum,
    TagRegistry,
    TextChild,
    get_attribute,
    iter_child_elements,
    read_text,
    skip_extensions,
    tag_registry,
)
from gpxparser.parsers.gpx11 import Gpx, Track, Waypoint, parse_gpx_node
from gpxparser.parsers.values import FixType, parse_decimal
from gpxparser.parsers.xml import Characters, EndElement, StartElement
from tests.utils import element, nested_extensions, start_cursor


class TestReadText:
    """Prove that text elements are read completely."""

    def test_text(self):
        cursor, start = start_cursor(element("name", "  track ", "name  "))
        assert read_text(cursor, start) == "track name"
        assert list(cursor) == []

    def test_empty(self):
        cursor, start = start_cursor(element("name"))
        assert read_text(cursor, start) == ""

    def test_no_strip(self, settings):
        settings.GPXPARSER_STRIP_TEXT = False
        cursor, start = start_cursor(element("name", " track name\n"))
        assert read_text(cursor, start) == " track name\n"

    def test_typed_no_strip(self, settings):
        """Typed values are always trimmed, only plain text keeps its whitespace."""
        settings.GPXPARSER_STRIP_TEXT = False
        cursor, start = start_cursor(element("ele", "\n  2.5\n"))
        builder = {}
        TextChild("elevation", parser=parse_decimal).consume(cursor, start, builder)
        assert builder == {"elevation": D("2.5")}

        point = parse_gpx_node(
            "<trkpt lat=' 1 ' lon='2'><name> start </name>"
            "<time>\n  2020-07-12T18:30:00Z\n</time><fix> 3d </fix></trkpt>"
        )
        assert point.latitude == D("1")
        assert point.name == " start "
        assert point.time == datetime(2020, 7, 12, 18, 30, tzinfo=timezone.utc)
        assert point.fix is FixType.FIX_3D

    def test_child_element(self):
        cursor, start = start_cursor(element("name", "track", element("b", "name")))
        with pytest.raises(InvalidChildElement) as exc_info:
            read_text(cursor, start)

        assert exc_info.value.tag == "b"
        assert exc_info.value.parent == "name"

    def test_unterminated(self):
        cursor, start = start_cursor([StartElement("name"), Characters("track")])
        with pytest.raises(UnterminatedElement) as exc_info:
            read_text(cursor, start)

        assert exc_info.value.kind == "name"


class TestSkipExtensions:
    """Prove that extensions of any depth are skipped completely."""

    @pytest.mark.parametrize("depth", [0, 1, 2, 3, 10])
    def test_depth(self, depth):
        cursor, start = start_cursor([*nested_extensions(depth), StartElement("name")])
        skip_extensions(cursor, start)

        # The cursor is positioned at the next sibling.
        assert next(cursor) == StartElement("name")
        assert cursor.path == ["name"]

    def test_unterminated(self):
        events = nested_extensions(3)[:-2]
        cursor, start = start_cursor(events)
        with pytest.raises(UnterminatedElement) as exc_info:
            skip_extensions(cursor, start)

        assert exc_info.value.kind == "extensions"

    @pytest.mark.parametrize("depth", [1, 2, 5])
    def test_parent_resumes(self, depth):
        """Prove that the parent element continues with the siblings after the extensions."""
        events = element(
            "trk",
            element("name", "before"),
            nested_extensions(depth),
            element("cmt", "after"),
            nested_extensions(depth),
        )
        cursor, start = start_cursor(events)
        track = Track.from_events(cursor, start)
        assert track.name == "before"
        assert track.comment == "after"
        assert list(cursor) == []


class TestIterChildElements:
    def test_children(self):
        events = element("trkseg", "\n", element("trkpt"), nested_extensions(2), element("trkpt"))
        cursor, start = start_cursor(events)

        tags = []
        for child in iter_child_elements(cursor, start):
            tags.append(child.local_name)
            assert next(cursor) == EndElement("trkpt")  # consume the child

        assert tags == ["trkpt", "trkpt"]
        assert list(cursor) == []

    def test_unterminated(self):
        cursor, start = start_cursor([StartElement("trkseg")])
        with pytest.raises(UnterminatedElement, match="No end tag found for <trkseg>"):
            list(iter_child_elements(cursor, start))


def test_get_attribute():
    start = StartElement("trkpt", {"lat": "52.1", "lon": "x"})
    assert get_attribute(start, "lat") == "52.1"
    assert get_attribute(start, "ele", required=False) is None

    with pytest.raises(InvalidElementValue, match="missing required attribute 'ele'"):
        get_attribute(start, "ele")

    with pytest.raises(InvalidElementValue) as exc_info:
        get_attribute(start, "lon", parse_decimal)

    assert exc_info.value.name == "trkpt lon"


class TestGpxNode:
    """Prove how the consumer protocol builds objects."""

    def test_defaults(self):
        """An empty element gives an object with all default values."""
        cursor, start = start_cursor(element("trk"))
        assert Track.from_events(cursor, start) == Track()

    def test_frozen(self):
        cursor, start = start_cursor(element("trk", element("name", "a")))
        track = Track.from_events(cursor, start)
        with pytest.raises(AttributeError):
            track.name = "b"

    def test_last_write_wins(self):
        cursor, start = start_cursor(element("trk", element("name", "a"), element("name", "b")))
        assert Track.from_events(cursor, start).name == "b"

    def test_invalid_child(self):
        cursor, start = start_cursor(element("trk", element("name", "a"), element("trkpt")))
        with pytest.raises(InvalidChildElement) as exc_info:
            Track.from_events(cursor, start)

        assert exc_info.value.tag == "trkpt"
        assert exc_info.value.parent == "trk"

    def test_xml_name(self):
        assert Track.xml_name == "trk"
        assert Waypoint.xml_name == "wpt"
        assert Waypoint._xml_tags == ["wpt", "rtept", "trkpt"]


class TestTagRegistry:
    def test_registered(self):
        assert tag_registry.parsers["gpx"] is Gpx
        assert tag_registry.parsers["trkpt"] is Waypoint

    def test_resolve_class(self):
        assert tag_registry.resolve_class(StartElement("trk")) is Track

        with pytest.raises(InvalidChildElement) as exc_info:
            tag_registry.resolve_class(StartElement("trk"), allowed_types=(Gpx,))

        assert exc_info.value.parent == "#document"

        with pytest.raises(InvalidChildElement):
            tag_registry.resolve_class(StartElement("unknown"))

    def test_register(self):
        registry = TagRegistry()

        @dataclass(frozen=True)
        @registry.register(GpxElement.trk)
        class SimpleTrack(GpxNode):
            name: str | None = None

            xml_children = {"name": TextChild("name")}

        assert registry.resolve_class(StartElement("trk")) is SimpleTrack

        cursor, start = start_cursor(element("trk", element("name", "x")))
        assert registry.node_from_events(cursor, start) == SimpleTrack(name="x")

    def test_register_enum(self):
        registry = TagRegistry()

        class PointTag(TagNameEnum):
            rtept = "route"
            trkpt = "track"

        @registry.register(PointTag)
        class Point(GpxNode):
            pass

        assert registry.parsers == {"rtept": Point, "trkpt": Point}
        assert Point.xml_name == "rtept"

    def test_register_errors(self):
        registry = TagRegistry()

        class Node(GpxNode):
            pass

        with pytest.raises(RuntimeError, match="not a known GPX element"):
            registry.register("foo")(Node)

        registry.register("trk")(Node)
        with pytest.raises(RuntimeError, match="already registered"):
            registry.register(GpxElement.trk)(Node)

        with pytest.raises(TypeError):
            registry.register("rte")(object)


def test_gpx_element_enum():
    assert GpxElement["trkseg"] is GpxElement.trkseg
    assert repr(GpxElement.trk) == "GpxElement.trk"
