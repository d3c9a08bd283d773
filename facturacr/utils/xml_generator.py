"""
XML helpers for Costa Rica electronic documents.
Element construction, the mandated timestamp format and final text rendering.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Mapping, Optional
from xml.dom import minidom
from xml.etree.ElementTree import Element, SubElement, tostring

from facturacr.core.config import settings

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def format_datetime(value: datetime) -> str:
    """
    Format a timestamp as date + time + offset.

    Naive datetimes are taken to be local Costa Rica time.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone(timedelta(hours=settings.DEFAULT_UTC_OFFSET_HOURS)))
    return value.isoformat(timespec="seconds")


def format_value(value: Any) -> str:
    """Render a field value as element text."""
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def add_element(parent: Element, tag: str, value: Any = None) -> Element:
    """Append ``tag`` to ``parent`` with ``value`` as its text (when given)."""
    element = SubElement(parent, tag)
    if value is not None:
        element.text = format_value(value)
    return element


def add_optional_element(parent: Element, tag: str, value: Any) -> Optional[Element]:
    """Append ``tag`` only when ``value`` is not None or an empty string."""
    if value is None or value == "":
        return None
    return add_element(parent, tag, value)


def create_root(tag: str, namespaces: Mapping[str, str]) -> Element:
    """Create the document root with the namespace declarations attached verbatim."""
    root = Element(tag)
    for name, uri in namespaces.items():
        root.set(name, uri)
    return root


def format_xml(root: Element) -> str:
    """Format XML with proper indentation."""
    rough_string = tostring(root, encoding="unicode")

    reparsed = minidom.parseString(rough_string)
    formatted = reparsed.toprettyxml(indent="  ")

    # Remove empty lines and the declaration added by minidom
    lines = [line for line in formatted.split("\n") if line.strip()]
    if lines[0].startswith("<?xml"):
        lines = lines[1:]

    return XML_DECLARATION + "\n" + "\n".join(lines)
