"""The root of a GPX 1.1 document, and its ``<metadata>``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from gpxparser.exceptions import UnterminatedElement
from gpxparser.parsers.ast import (
    DOCUMENT,
    GpxElement,
    GpxNode,
    NodeChild,
    TextChild,
    get_attribute,
    tag_registry,
)
from gpxparser.parsers.values import parse_iso_datetime
from gpxparser.parsers.xml import EventCursor, StartElement

from .base import Bounds, Copyright, Link, Person
from .points import Route, Track, Waypoint

logger = logging.getLogger(__name__)

__all__ = (
    "Metadata",
    "Gpx",
)


@dataclass(frozen=True)
@tag_registry.register(GpxElement.metadata)
class Metadata(GpxNode):
    """Information about the GPX file, author, and copyright restrictions."""

    name: str | None = None
    description: str | None = None
    author: Person | None = None
    copyright: Copyright | None = None
    links: tuple[Link, ...] = ()
    time: datetime | None = None
    keywords: str | None = None
    bounds: Bounds | None = None

    xml_children = {
        "name": TextChild("name"),
        "desc": TextChild("description"),
        "author": NodeChild("author", Person),
        "copyright": NodeChild("copyright", Copyright),
        "link": NodeChild("links", Link, many=True),
        "time": TextChild("time", parse_iso_datetime),
        "keywords": TextChild("keywords"),
        "bounds": NodeChild("bounds", Bounds),
    }


@dataclass(frozen=True)
@tag_registry.register(GpxElement.gpx)
class Gpx(GpxNode):
    """The ``<gpx>`` root element of the document.

    This parses the syntax::

        <gpx version="1.1" creator="...">
            <metadata>...</metadata>
            <wpt lat="..." lon="...">...</wpt>
            <rte>...</rte>
            <trk>...</trk>
            <extensions>...</extensions>
        </gpx>
    """

    version: str | None = None
    creator: str | None = None
    metadata: Metadata | None = None
    waypoints: tuple[Waypoint, ...] = ()
    routes: tuple[Route, ...] = ()
    tracks: tuple[Track, ...] = ()

    xml_children = {
        "metadata": NodeChild("metadata", Metadata),
        "wpt": NodeChild("waypoints", Waypoint, many=True),
        "rte": NodeChild("routes", Route, many=True),
        "trk": NodeChild("tracks", Track, many=True),
    }

    @classmethod
    def attributes_from_event(cls, element):
        return {
            "version": get_attribute(element, "version", required=False),
            "creator": get_attribute(element, "creator", required=False),
        }

    @classmethod
    def from_stream(cls, cursor: EventCursor) -> Gpx:
        """Consume the complete document, starting at the beginning of the event stream."""
        for event in cursor:
            if isinstance(event, StartElement):
                # Only <gpx> is allowed as root element.
                tag_registry.resolve_class(event, allowed_types=(cls,), parent=DOCUMENT)
                gpx = cls.from_events(cursor, event)
                break
        else:
            raise UnterminatedElement(cls.xml_name)

        cursor.finish()
        logger.debug(
            "Parsed GPX %s document with %d waypoints, %d routes and %d tracks",
            gpx.version,
            len(gpx.waypoints),
            len(gpx.routes),
            len(gpx.tracks),
        )
        return gpx
