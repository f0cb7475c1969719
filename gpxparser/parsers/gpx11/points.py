"""The GPX 1.1 elements that describe locations: waypoints, routes and tracks.

Inheritance structure:

* :class:`Waypoint` (``<wpt>``, ``<rtept>`` and ``<trkpt>``)
* :class:`Route` (``<rte>``)
* :class:`TrackSegment` (``<trkseg>``)
* :class:`Track` (``<trk>``)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal as D

from gpxparser.parsers.ast import (
    GpxElement,
    GpxNode,
    NodeChild,
    TagNameEnum,
    TextChild,
    get_attribute,
    tag_registry,
)
from gpxparser.parsers.values import (
    FixType,
    parse_decimal,
    parse_fix,
    parse_int,
    parse_iso_datetime,
)

from .base import Link

__all__ = (
    "WaypointTag",
    "Waypoint",
    "Route",
    "TrackSegment",
    "Track",
)


class WaypointTag(TagNameEnum):
    """The elements that all share the ``wptType`` of the XML schema."""

    wpt = GpxElement.wpt.value
    rtept = GpxElement.rtept.value
    trkpt = GpxElement.trkpt.value


@dataclass(frozen=True)
@tag_registry.register(WaypointTag)
class Waypoint(GpxNode):
    """A point on the map. This parses the ``<wpt>``, ``<rtept>`` and ``<trkpt>`` elements::

        <trkpt lat="47.644548" lon="-122.326897">
            <ele>4.46</ele>
            <time>2009-10-17T18:37:26Z</time>
        </trkpt>
    """

    latitude: D
    longitude: D

    # Position info
    elevation: D | None = None
    time: datetime | None = None
    magnetic_variation: D | None = None
    geoid_height: D | None = None

    # Description info
    name: str | None = None
    comment: str | None = None
    description: str | None = None
    source: str | None = None
    links: tuple[Link, ...] = ()
    symbol: str | None = None
    type: str | None = None

    # Accuracy info
    fix: FixType | None = None
    satellites: int | None = None
    hdop: D | None = None
    vdop: D | None = None
    pdop: D | None = None
    age_of_dgps_data: D | None = None
    dgps_id: int | None = None

    xml_children = {
        "ele": TextChild("elevation", parse_decimal),
        "time": TextChild("time", parse_iso_datetime),
        "magvar": TextChild("magnetic_variation", parse_decimal),
        "geoidheight": TextChild("geoid_height", parse_decimal),
        "name": TextChild("name"),
        "cmt": TextChild("comment"),
        "desc": TextChild("description"),
        "src": TextChild("source"),
        "link": NodeChild("links", Link, many=True),
        "sym": TextChild("symbol"),
        "type": TextChild("type"),
        "fix": TextChild("fix", parse_fix),
        "sat": TextChild("satellites", parse_int),
        "hdop": TextChild("hdop", parse_decimal),
        "vdop": TextChild("vdop", parse_decimal),
        "pdop": TextChild("pdop", parse_decimal),
        "ageofdgpsdata": TextChild("age_of_dgps_data", parse_decimal),
        "dgpsid": TextChild("dgps_id", parse_int),
    }

    @classmethod
    def attributes_from_event(cls, element):
        return {
            "latitude": get_attribute(element, "lat", parse_decimal),
            "longitude": get_attribute(element, "lon", parse_decimal),
        }


@dataclass(frozen=True)
@tag_registry.register(GpxElement.rte)
class Route(GpxNode):
    """An ordered list of ``<rtept>`` waypoints, leading to a destination."""

    name: str | None = None
    comment: str | None = None
    description: str | None = None
    source: str | None = None
    links: tuple[Link, ...] = ()
    number: int | None = None
    type: str | None = None
    points: tuple[Waypoint, ...] = ()

    xml_children = {
        "name": TextChild("name"),
        "cmt": TextChild("comment"),
        "desc": TextChild("description"),
        "src": TextChild("source"),
        "link": NodeChild("links", Link, many=True),
        "number": TextChild("number", parse_int),
        "type": TextChild("type"),
        "rtept": NodeChild("points", Waypoint, many=True),
    }


@dataclass(frozen=True)
@tag_registry.register(GpxElement.trkseg)
class TrackSegment(GpxNode):
    """A list of track points which are logically connected in order.
    A new segment starts when the GPS reception was lost, or the receiver was turned off.
    """

    points: tuple[Waypoint, ...] = ()

    xml_children = {
        "trkpt": NodeChild("points", Waypoint, many=True),
    }


@dataclass(frozen=True)
@tag_registry.register(GpxElement.trk)
class Track(GpxNode):
    """The ``<trk>`` element, an ordered list of segments describing a path.

    This parses the syntax::

        <trk>
            <name>track name</name>
            <cmt>track comment</cmt>
            <desc>track description</desc>
            <src>track source</src>
            <type>track type</type>
            <trkseg>...</trkseg>
        </trk>
    """

    name: str | None = None
    comment: str | None = None
    description: str | None = None
    source: str | None = None
    links: tuple[Link, ...] = ()
    number: int | None = None
    type: str | None = None
    segments: tuple[TrackSegment, ...] = ()

    xml_children = {
        "name": TextChild("name"),
        "cmt": TextChild("comment"),
        "desc": TextChild("description"),
        "src": TextChild("source"),
        "link": NodeChild("links", Link, many=True),
        "number": TextChild("number", parse_int),
        "type": TextChild("type"),
        "trkseg": NodeChild("segments", TrackSegment, many=True),
    }

    @property
    def points(self) -> list[Waypoint]:
        """All points of the track, across all segments."""
        return [point for segment in self.segments for point in segment.points]
