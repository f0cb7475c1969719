"""Parsing of scalar values in the GPX data."""

import re
from datetime import datetime
from decimal import Decimal as D
from enum import Enum

from django.utils.dateparse import parse_datetime

# The lexical forms of the XML schema types, which are stricter than Python's own parsing.
RE_DECIMAL = re.compile(r"\A[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)\Z")
RE_INTEGER = re.compile(r"\A[+-]?[0-9]+\Z")
RE_YEAR = re.compile(r"\A-?[0-9]{4,}\Z")


class FixType(Enum):
    """Values for the ``<fix>`` element of a waypoint (``fixType`` in the XML schema)."""

    NONE = "none"
    FIX_2D = "2d"
    FIX_3D = "3d"
    DGPS = "dgps"
    PPS = "pps"


def parse_decimal(raw_value: str) -> D:
    """Translate a ``xsd:decimal`` value. This also handles latitudes and longitudes."""
    if not RE_DECIMAL.match(raw_value):
        # Also rejects NaN, Infinity, exponents and "1_000".
        raise ValueError(f"'{raw_value}' is not a decimal number.")
    return D(raw_value)


def parse_int(raw_value: str) -> int:
    """Translate a ``xsd:nonNegativeInteger`` value."""
    if not RE_INTEGER.match(raw_value):
        raise ValueError(f"'{raw_value}' is not an integer.")

    value = int(raw_value)
    if value < 0:
        raise ValueError(f"'{raw_value}' is not a non-negative integer.")
    return value


def parse_year(raw_value: str) -> int:
    """Translate a ``xsd:gYear`` value (e.g. in ``<copyright>``)."""
    if not RE_YEAR.match(raw_value):
        raise ValueError("Year must be in YYYY format.")
    return int(raw_value)


def parse_iso_datetime(raw_value: str) -> datetime:
    """Translate ISO datetimes into a Python datetime value."""
    value = parse_datetime(raw_value)
    if value is None:
        raise ValueError("Date must be in YYYY-MM-DDTHH:MM[:ss[.uuuuuu]][TZ] format.")
    return value


def parse_fix(raw_value: str) -> FixType:
    """Translate the ``<fix>`` element."""
    try:
        return FixType(raw_value)
    except ValueError:
        choices = ", ".join(member.value for member in FixType)
        raise ValueError(f"Expected one of: {choices}") from None
