"""Parsing of GPX 1.1 documents.

The document is read as a stream of XML events, which each element class consumes
up to its own closing tag. See :mod:`gpxparser.parsers.ast` for the mechanics.
"""

from __future__ import annotations

import typing
from collections.abc import Iterable

from gpxparser.exceptions import UnterminatedElement
from gpxparser.parsers.ast import DOCUMENT, GpxNode, tag_registry
from gpxparser.parsers.xml import EventCursor, StartElement, XmlEvent, iter_events

from .base import Bounds, Copyright, Email, Link, Person
from .document import Gpx, Metadata
from .points import Route, Track, TrackSegment, Waypoint, WaypointTag

__all__ = [
    "Gpx",
    "Metadata",
    "Person",
    "Email",
    "Copyright",
    "Link",
    "Bounds",
    "Waypoint",
    "WaypointTag",
    "Route",
    "TrackSegment",
    "Track",
    "parse_gpx",
    "parse_gpx_events",
    "parse_gpx_node",
]


def parse_gpx(source: str | bytes | typing.IO) -> Gpx:
    """Parse a complete GPX document from a string or (binary) file object."""
    return parse_gpx_events(iter_events(source))


def parse_gpx_events(events: Iterable[XmlEvent]) -> Gpx:
    """Parse a complete GPX document from a stream of XML events."""
    return Gpx.from_stream(EventCursor(events))


def parse_gpx_node(
    source: str | bytes | typing.IO | Iterable[XmlEvent],
    allowed_types: tuple[type[GpxNode], ...] | None = None,
) -> GpxNode:
    """Parse a single GPX element, such as a ``<trk>`` fragment.
    The class that parses the data is determined by the root element.
    """
    if isinstance(source, (str, bytes)) or hasattr(source, "read"):
        source = iter_events(source)

    cursor = EventCursor(source)
    for event in cursor:
        if isinstance(event, StartElement):
            node = tag_registry.node_from_events(cursor, event, allowed_types=allowed_types)
            cursor.finish()
            return node

    # No start tag at all. Report the expected element when there is only one option.
    if allowed_types is not None and len(allowed_types) == 1:
        raise UnterminatedElement(allowed_types[0].xml_name)
    raise UnterminatedElement(DOCUMENT)
