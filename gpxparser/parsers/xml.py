"""XML tokenizing for incoming GPX data.

The parser doesn't build an element tree. Instead, the XML is translated
into a flat stream of lexical events (:class:`StartElement`, :class:`EndElement`
and :class:`Characters`) that the element consumers read through an :class:`EventCursor`.

The events are produced by the expat parser from the standard library,
wrapped by defusedxml so incoming DOS attacks (entity expansion, external references)
are prevented.
Any other iterable of events can be handed to the cursor as well.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from defusedxml.common import DefusedXmlException
from defusedxml.ElementTree import DefusedXMLParser, ParseError

from gpxparser import conf
from gpxparser.exceptions import TokenizationFailure

logger = logging.getLogger(__name__)

__all__ = (
    "StartElement",
    "EndElement",
    "Characters",
    "XmlEvent",
    "EventCursor",
    "iter_events",
    "split_ns",
)


@dataclass(frozen=True)
class StartElement:
    """An opening tag, including its attributes."""

    tag: str
    attrib: dict[str, str] = field(default_factory=dict)

    @property
    def local_name(self) -> str:
        """The tag name without its XML namespace."""
        return split_ns(self.tag)[1]

    def get(self, name: str, default=None) -> str | None:
        return self.attrib.get(name, default)


@dataclass(frozen=True)
class EndElement:
    """A closing tag."""

    tag: str

    @property
    def local_name(self) -> str:
        return split_ns(self.tag)[1]


@dataclass(frozen=True)
class Characters:
    """A piece of character data. Text content may be split over multiple events."""

    text: str


XmlEvent = StartElement | EndElement | Characters


class EventCursor:
    """The shared, forward-only handle over the XML events.

    The cursor is handed down to all element consumers, which advance it
    until their own closing tag was read. It's never copied or rewound.
    Tokenizer errors are translated into a :class:`~gpxparser.exceptions.TokenizationFailure`
    that mentions the element that was being parsed.
    """

    def __init__(self, events: Iterable[XmlEvent]):
        self._events = iter(events)
        #: The local names of all currently opened elements.
        self.path: list[str] = []

    def __repr__(self):
        return f"<{self.__class__.__name__} at /{'/'.join(self.path)}>"

    def __iter__(self) -> Iterator[XmlEvent]:
        return self

    def __next__(self) -> XmlEvent:
        try:
            event = next(self._events)
        except (ParseError, DefusedXmlException) as e:
            # Offer consistent results for callers to check for invalid data.
            logger.debug("Parsing XML error at /%s: %s", "/".join(self.path), e)
            raise TokenizationFailure(str(e), element="/".join(self.path)) from e

        if isinstance(event, StartElement):
            self.path.append(event.local_name)
        elif isinstance(event, EndElement) and self.path:
            self.path.pop()
        return event

    def finish(self):
        """Read any remaining events.
        This lets the tokenizer report errors after the last element.
        """
        for _event in self:
            pass


class EventCollector:
    """Parser target that records the events of the expat parser."""

    def __init__(self):
        self.events = []
        self.depth = 0

    def start(self, tag, attrs):
        self.depth += 1
        self.events.append(StartElement(tag, dict(attrs)))

    def end(self, tag):
        self.depth -= 1
        self.events.append(EndElement(tag))

    def data(self, data):
        self.events.append(Characters(data))

    def close(self):
        return None

    def drain(self) -> list[XmlEvent]:
        """Take all events that were collected so far."""
        events = self.events
        self.events = []
        return events


def _read_chunks(source, chunk_size: int) -> Iterator[str | bytes]:
    if isinstance(source, (str, bytes)):
        for start in range(0, len(source), chunk_size):
            yield source[start : start + chunk_size]
    else:
        while chunk := source.read(chunk_size):
            yield chunk


def iter_events(source: str | bytes | typing.IO) -> Iterator[XmlEvent]:
    """Tokenize the XML data into a stream of events.

    The source is fed to the parser in chunks of ``GPXPARSER_CHUNK_SIZE``,
    and the events are yielded as soon as each chunk is tokenized.
    When the data ends while elements are still open, the stream just ends.
    The element consumers will then report which element isn't terminated.
    """
    collector = EventCollector()

    # Passing a custom parser potentially circumvents defusedxml,
    # so note the parser is again configured in the same way:
    parser = DefusedXMLParser(
        target=collector,
        forbid_dtd=conf.GPXPARSER_FORBID_DTD,
        forbid_entities=True,
        forbid_external=True,
    )

    for chunk in _read_chunks(source, conf.GPXPARSER_CHUNK_SIZE):
        try:
            parser.feed(chunk)
        except (ParseError, DefusedXmlException):
            # Hand out the events before the error, so it's raised at the right element.
            yield from collector.drain()
            raise

        yield from collector.drain()

    if collector.depth > 0:
        logger.debug("XML data ended with %d unclosed elements", collector.depth)
        return

    parser.close()
    yield from collector.drain()


def split_ns(xml_name: str) -> tuple[str | None, str]:
    """Split the element tag or attribute/text value into the namespace and
    local name. The stdlib etree doesn't have the properties for this (lxml does).
    """
    # Tags may start with a `{ns}`
    if xml_name.startswith("{"):
        end = xml_name.index("}")
        return xml_name[1:end], xml_name[end + 1 :]
    else:
        return None, xml_name
