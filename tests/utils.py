from __future__ import annotations

from pathlib import Path

from gpxparser.parsers.xml import Characters, EndElement, EventCursor, StartElement

PROJECT_ROOT = Path(__file__).parent.parent
FILES_ROOT = Path(__file__).parent.joinpath("files")

# Namespaces for building test documents
GPX11_NS = "http://www.topografix.com/GPX/1/1"
GPXX_NS = "http://www.garmin.com/xmlschemas/GpxExtensions/v3"


def element(tag: str, *children, **attrib) -> list:
    """Build the event stream of an element. Strings become character data."""
    events = [StartElement(tag, attrib)]
    for child in children:
        if isinstance(child, str):
            events.append(Characters(child))
        else:
            events.extend(child)
    events.append(EndElement(tag))
    return events


def nested_extensions(depth: int) -> list:
    """Build an ``<extensions>`` element where the content is nested ``depth`` levels deep.
    Each level also has a sibling element, so a closing tag is seen before the next level opens.
    """
    content = [Characters("value")]
    for level in reversed(range(depth)):
        content = [
            *element(f"{{{GPXX_NS}}}Sibling{level}", "text"),
            *element(f"{{{GPXX_NS}}}Level{level}", content),
        ]
    return element("extensions", content)


def start_cursor(events: list) -> tuple[EventCursor, StartElement]:
    """Provide a cursor that is positioned after the first start tag, like a parent would."""
    cursor = EventCursor(events)
    first = next(cursor)
    assert isinstance(first, StartElement)
    return cursor, first
