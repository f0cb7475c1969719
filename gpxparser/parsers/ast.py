"""Utilities for building typed Python objects from the GPX event stream.

Each GPX element kind is handled by a :class:`GpxNode` subclass.
The class declares which child elements it supports in :attr:`GpxNode.xml_children`,
and the inherited :meth:`GpxNode.from_events` consumes the element:
it reads all events up to its own closing tag, dispatches each child tag
to a text reader (:func:`read_text`) or another node class,
and skips the ``<extensions>`` content (:func:`skip_extensions`).

All consumers share the same :class:`~gpxparser.parsers.xml.EventCursor`.
When a consumer returns, the cursor is positioned directly after its closing tag,
so the parent element can continue with the next sibling.

Node classes register themselves at the :data:`tag_registry`,
which allows parsing any registered element as the root of a fragment.
The registered tag names are restricted to the :class:`GpxElement` enumeration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any, TypeVar

from django.utils.functional import classproperty

from gpxparser import conf
from gpxparser.exceptions import (
    InvalidChildElement,
    InvalidElementValue,
    UnterminatedElement,
    wrap_value_errors,
)
from gpxparser.parsers.xml import Characters, EndElement, EventCursor, StartElement

logger = logging.getLogger(__name__)

__all__ = (
    "TagNameEnum",
    "GpxElement",
    "GpxNode",
    "Child",
    "TextChild",
    "NodeChild",
    "TagRegistry",
    "tag_registry",
    "iter_child_elements",
    "read_text",
    "skip_extensions",
    "get_attribute",
    "EXTENSIONS",
    "DOCUMENT",
)

#: The tag that holds vendor specific content, which the parser ignores.
EXTENSIONS = "extensions"

#: The pseudo parent name of the root element.
DOCUMENT = "#document"


class TagNameEnum(Enum):
    """A base class for enumerations of XML tag names.

    All enumerations that represent tag names inherit from this.
    Each member name should be exactly the XML tag that it refers to.
    """

    def __repr__(self):
        # Make repr() easier to copy-paste
        return f"{self.__class__.__name__}.{self.name}"


class GpxElement(TagNameEnum):
    """All composite element kinds of GPX 1.1.
    The value describes the XML schema type of the element.
    """

    gpx = "gpxType"
    metadata = "metadataType"
    wpt = "wptType"
    rte = "rteType"
    rtept = "wptType (route point)"
    trk = "trkType"
    trkseg = "trksegType"
    trkpt = "wptType (track point)"
    author = "personType"
    email = "emailType"
    link = "linkType"
    copyright = "copyrightType"
    bounds = "boundsType"


def iter_child_elements(cursor: EventCursor, element: StartElement) -> Iterator[StartElement]:
    """Iterate over the start tags of all direct children of an element.

    The caller must consume the subtree of each child before asking for the next one.
    The ``<extensions>`` children are skipped, and character data between elements is ignored.
    The iteration ends after the closing tag of the element was read.
    """
    for event in cursor:
        if isinstance(event, StartElement):
            if event.local_name == EXTENSIONS:
                skip_extensions(cursor, event)
            else:
                yield event
        elif isinstance(event, EndElement):
            return

    raise UnterminatedElement(element.local_name)


def skip_extensions(cursor: EventCursor, element: StartElement) -> None:
    """Discard the complete contents of an ``<extensions>`` element.

    The content is schema-free, so it can have any nesting depth.
    The cursor is positioned after the matching ``</extensions>`` tag afterwards.
    """
    depth = 1
    skipped = 0
    for event in cursor:
        if isinstance(event, StartElement):
            depth += 1
            skipped += 1
        elif isinstance(event, EndElement):
            depth -= 1
            if depth == 0:
                logger.debug(
                    "Skipped %d extension elements in <%s>", skipped, "/".join(cursor.path)
                )
                return

    raise UnterminatedElement(element.local_name)


def read_text(cursor: EventCursor, element: StartElement) -> str:
    """Read the text content of an element that can't have child elements (e.g. ``<name>``)."""
    parts = []
    for event in cursor:
        if isinstance(event, Characters):
            parts.append(event.text)
        elif isinstance(event, StartElement):
            raise InvalidChildElement(event.local_name, element.local_name)
        elif isinstance(event, EndElement):
            text = "".join(parts)
            return text.strip() if conf.GPXPARSER_STRIP_TEXT else text

    raise UnterminatedElement(element.local_name)


def get_attribute(
    element: StartElement,
    name: str,
    parser: Callable[[str], Any] | None = None,
    required: bool = True,
):
    """Resolve an attribute, raise an error when a required attribute is missing."""
    raw_value = element.get(name)
    if raw_value is None:
        if required:
            raise InvalidElementValue(
                element.local_name, f"missing required attribute '{name}'"
            )
        return None

    if parser is None:
        return raw_value

    with wrap_value_errors(f"{element.local_name} {name}"):
        return parser(raw_value.strip())


class Child:
    """Declaration of a child element, and the field it is stored in."""

    def __init__(self, field: str, many: bool = False):
        self.field = field
        self.many = many

    def __repr__(self):
        return f"{self.__class__.__name__}({self.field!r})"

    def read(self, cursor: EventCursor, element: StartElement):
        raise NotImplementedError()

    def consume(self, cursor: EventCursor, element: StartElement, builder: dict):
        """Read the child element, and store its value in the builder of the parent."""
        value = self.read(cursor, element)
        if self.many:
            builder.setdefault(self.field, []).append(value)
        else:
            # A repeated element just replaces the previous value.
            builder[self.field] = value


class TextChild(Child):
    """A child element with text content, optionally converted into another type."""

    def __init__(self, field: str, parser: Callable[[str], Any] | None = None, many=False):
        super().__init__(field, many=many)
        self.parser = parser

    def read(self, cursor: EventCursor, element: StartElement):
        text = read_text(cursor, element)
        if self.parser is None:
            return text

        # The XML schema types collapse whitespace, regardless of GPXPARSER_STRIP_TEXT.
        with wrap_value_errors(element.local_name):
            return self.parser(text.strip())


class NodeChild(Child):
    """A child element that is parsed by another :class:`GpxNode` class."""

    def __init__(self, field: str, node_class: type[GpxNode], many=False):
        super().__init__(field, many=many)
        self.node_class = node_class

    def read(self, cursor: EventCursor, element: StartElement):
        return self.node_class.from_events(cursor, element)


class GpxNode:
    """The base node for all classes that represent a GPX element.

    Subclasses are (frozen) dataclasses. They declare their child elements
    in :attr:`xml_children` and read their attributes in :meth:`attributes_from_event`.
    The object is only created once the complete element was read,
    so a partially parsed element is never exposed.
    """

    #: The supported child elements, by their local tag name.
    xml_children: dict[str, Child] = {}

    _xml_tags = []

    @classproperty
    def xml_name(cls) -> str:
        """Tell the default tag by which this class is registered"""
        return cls._xml_tags[0]

    def __init_subclass__(cls):
        # Each class level has a fresh list of supported tags.
        cls._xml_tags = []

    @classmethod
    def from_events(cls, cursor: EventCursor, element: StartElement):
        """Consume the element from the event stream.

        The cursor should be positioned directly after the start tag of the element,
        which is passed as ``element``. When this returns,
        the cursor is positioned after the closing tag.
        """
        builder = cls.attributes_from_event(element)
        for child in iter_child_elements(cursor, element):
            try:
                handler = cls.xml_children[child.local_name]
            except KeyError:
                raise InvalidChildElement(child.local_name, element.local_name) from None

            handler.consume(cursor, child, builder)

        return cls.from_builder(builder)

    @classmethod
    def attributes_from_event(cls, element: StartElement) -> dict:
        """Read the attributes of the start tag. This provides the initial builder values."""
        return {}

    @classmethod
    def from_builder(cls, builder: dict):
        """Create the object from the collected values."""
        return cls(
            **{
                name: tuple(value) if isinstance(value, list) else value
                for name, value in builder.items()
            }
        )


N = TypeVar("N", bound=GpxNode)


class TagRegistry:
    """Registration of all classes that can parse GPX elements.

    The same class can be registered multiple times for different tag names.
    """

    parsers: dict[str, type[GpxNode]]

    def __init__(self):
        self.parsers = {}

    def register(self, tag: GpxElement | type[TagNameEnum] | str | None = None):
        """Decorator to register a class as GPX element parser.

        Usage:

        .. code-block:: python

            @dataclass(frozen=True)
            @tag_registry.register(GpxElement.trkseg)
            class TrackSegment(GpxNode):
                xml_children = {...}

        It's also possible to register tag names using an enum;
        each member name is assumed to be an XML tag name.
        """

        def _dec(node_class: type[GpxNode]) -> type[GpxNode]:
            if tag is None or isinstance(tag, str):
                self._register_tag_parser(node_class, tag=tag or node_class.__name__.lower())
            elif isinstance(tag, GpxElement):
                self._register_tag_parser(node_class, tag=tag.name)
            elif isinstance(tag, type) and issubclass(tag, TagNameEnum):
                # Allow tags to be an Enum listing possible tag names.
                for member_name in tag.__members__:
                    self._register_tag_parser(node_class, tag=member_name)
            else:
                raise TypeError("tag type incorrect")

            return node_class

        return _dec

    def _register_tag_parser(self, node_class: type[GpxNode], tag: str):
        """Register a Python (data) class as parser for a GPX element."""
        if not issubclass(node_class, GpxNode):
            raise TypeError(f"{node_class} must be a subclass of GpxNode")

        if tag not in GpxElement.__members__:
            raise RuntimeError(f"<{tag}> is not a known GPX element kind.")

        if tag in self.parsers:
            raise RuntimeError(f"Another class is already registered to parse the <{tag}> tag.")

        self.parsers[tag] = node_class  # Track this parser to resolve the tag.
        node_class._xml_tags.append(tag)  # Allow fetching all names later

    def resolve_class(
        self,
        element: StartElement,
        allowed_types: tuple[type[N], ...] | None = None,
        parent: str = DOCUMENT,
    ) -> type[N]:
        """Find the :class:`GpxNode` subclass that corresponds to the given start tag."""
        try:
            node_class = self.parsers[element.local_name]
        except KeyError:
            raise InvalidChildElement(element.local_name, parent) from None

        # Check whether the resolved class is indeed a valid option here.
        if allowed_types is not None and not issubclass(node_class, allowed_types):
            raise InvalidChildElement(element.local_name, parent)

        return node_class

    def node_from_events(
        self,
        cursor: EventCursor,
        element: StartElement,
        allowed_types: tuple[type[N], ...] | None = None,
    ) -> N:
        """Find the :class:`GpxNode` subclass that corresponds to the given start tag,
        and let it consume the element. This is a convenience shortcut.
        """
        node_class = self.resolve_class(element, allowed_types)
        return node_class.from_events(cursor, element)


#: The tag registry to register new parsing classes at.
tag_registry = TagRegistry()
