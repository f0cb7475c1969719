"""Exceptions for parsing GPX documents.

All errors raised by the parser inherit from :class:`GpxParsingError`,
which is a :class:`ValueError` since they all describe malformed external input.
A single error aborts the whole parse; no partial results are returned.
"""

from __future__ import annotations

from contextlib import contextmanager

__all__ = (
    "GpxParsingError",
    "TokenizationFailure",
    "InvalidChildElement",
    "UnterminatedElement",
    "InvalidElementValue",
    "wrap_value_errors",
)


@contextmanager
def wrap_value_errors(name: str):
    """Convert the errors of scalar conversions into an :class:`InvalidElementValue`.
    This catches the typical exceptions of ``int()``, ``Decimal()`` and friends.
    """
    try:
        yield
    except GpxParsingError:
        raise
    except (TypeError, ValueError, ArithmeticError) as e:
        # decimal.InvalidOperation is an ArithmeticError, not a ValueError.
        raise InvalidElementValue(name, str(e) or e.__class__.__name__) from e


class GpxParsingError(ValueError):
    """Raise a ValueError for a parsing problem."""


class TokenizationFailure(GpxParsingError):
    """The XML tokenizer reported a lexical or well-formedness error."""

    def __init__(self, message: str, element: str | None = None):
        self.message = message
        self.element = element or None
        if self.element:
            super().__init__(f"{message} (while parsing <{self.element}>)")
        else:
            super().__init__(message)


class InvalidChildElement(GpxParsingError):
    """A tag was found where the parent element doesn't allow it."""

    def __init__(self, tag: str, parent: str):
        self.tag = tag
        self.parent = parent
        super().__init__(f"Element <{parent}> does not support a <{tag}> child node.")


class UnterminatedElement(GpxParsingError):
    """The event stream ended before the closing tag of an element was seen."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"No end tag found for <{kind}>.")


class InvalidElementValue(GpxParsingError):
    """The text or attribute value of an element can't be converted."""

    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        super().__init__(f"Invalid value for <{name}>: {message}")
