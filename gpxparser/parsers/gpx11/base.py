"""The shared building blocks of GPX 1.1 (``linkType``, ``personType``, etc).

These elements appear inside the metadata, waypoints, routes and tracks.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal as D

from gpxparser.parsers.ast import (
    GpxElement,
    GpxNode,
    NodeChild,
    TextChild,
    get_attribute,
    tag_registry,
)
from gpxparser.parsers.values import parse_decimal, parse_year

__all__ = (
    "Link",
    "Email",
    "Person",
    "Copyright",
    "Bounds",
)


@dataclass(frozen=True)
@tag_registry.register(GpxElement.link)
class Link(GpxNode):
    """The ``<link>`` element, a reference to an external resource.

    This parses the syntax::

        <link href="http://www.garmin.com">
            <text>Garmin International</text>
            <type>text/html</type>
        </link>
    """

    href: str
    text: str | None = None
    type: str | None = None

    xml_children = {
        "text": TextChild("text"),
        "type": TextChild("type"),
    }

    @classmethod
    def attributes_from_event(cls, element):
        return {"href": get_attribute(element, "href")}


@dataclass(frozen=True)
@tag_registry.register(GpxElement.email)
class Email(GpxNode):
    """The ``<email id="..." domain="..."/>`` element.
    The address is split in two parts to avoid harvesting by spam bots.
    """

    id: str
    domain: str

    @property
    def address(self) -> str:
        return f"{self.id}@{self.domain}"

    @classmethod
    def attributes_from_event(cls, element):
        return {
            "id": get_attribute(element, "id"),
            "domain": get_attribute(element, "domain"),
        }


@dataclass(frozen=True)
@tag_registry.register(GpxElement.author)
class Person(GpxNode):
    """A person or organization, given in ``<metadata><author>``."""

    name: str | None = None
    email: Email | None = None
    link: Link | None = None

    xml_children = {
        "name": TextChild("name"),
        "email": NodeChild("email", Email),
        "link": NodeChild("link", Link),
    }


@dataclass(frozen=True)
@tag_registry.register(GpxElement.copyright)
class Copyright(GpxNode):
    """The ``<copyright author="...">`` element with the year and license of the data."""

    author: str
    year: int | None = None
    license: str | None = None

    xml_children = {
        "year": TextChild("year", parse_year),
        "license": TextChild("license"),
    }

    @classmethod
    def attributes_from_event(cls, element):
        return {"author": get_attribute(element, "author")}


@dataclass(frozen=True)
@tag_registry.register(GpxElement.bounds)
class Bounds(GpxNode):
    """The extent of the data, as ``<bounds minlat=".." minlon=".." maxlat=".." maxlon=".."/>``."""

    minlat: D
    minlon: D
    maxlat: D
    maxlon: D

    @classmethod
    def attributes_from_event(cls, element):
        return {
            name: get_attribute(element, name, parse_decimal)
            for name in ("minlat", "minlon", "maxlat", "maxlon")
        }
