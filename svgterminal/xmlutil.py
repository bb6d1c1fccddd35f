"""Helpers for building compact SVG documents with lxml"""

import math
import re

from lxml import etree
from wcwidth import wcswidth

SVG_NS = 'http://www.w3.org/2000/svg'
XML_NS = 'http://www.w3.org/XML/1998/namespace'

NSMAP = {None: SVG_NS}

# Width of a monospace character as a fraction of the font size
CHAR_WIDTH_RATIO = 0.6

# ANSI SGR sequences and characters XML 1.0 cannot represent, lone surrogates
# included
_ANSI_RE = re.compile(r'\x1b\[[0-9;]*m')
_XML_UNSAFE_RE = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')


def round_coord(value, decimals=1):
    """Round half up like most SVG producers do, so that 0.25 -> 0.3"""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def format_number(value):
    """Return the shortest string representation of value rounded to one
    decimal place ('12' rather than '12.0')"""
    rounded = round_coord(value)
    if rounded == int(rounded):
        return str(int(rounded))
    return str(rounded)


def text_width(text, font_size):
    """Approximate rendered width in pixels of text in a monospace font"""
    columns = wcswidth(text)
    if columns < 0:
        columns = len(text)
    return round_coord(columns * font_size * CHAR_WIDTH_RATIO)


def xml_safe(text):
    """Remove ANSI escape codes and control characters from text.

    Markup characters such as '<' or '&' are left untouched: lxml escapes them
    when the document is serialized.
    """
    if not text:
        return ''
    return _XML_UNSAFE_RE.sub('', _ANSI_RE.sub('', text))


def _stringify(attributes):
    stringified = {}
    for key, value in attributes.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        elif isinstance(value, (int, float)):
            value = format_number(value)
        stringified[key] = str(value)
    return stringified


def svg_element(tag, attributes=None, nsmap=None):
    """Create an element in the SVG namespace. Numeric attribute values are
    rounded and attributes set to None are skipped"""
    return etree.Element('{{{}}}{}'.format(SVG_NS, tag),
                         _stringify(attributes or {}), nsmap=nsmap)


def svg_subelement(parent, tag, attributes=None):
    return etree.SubElement(parent, '{{{}}}{}'.format(SVG_NS, tag),
                            _stringify(attributes or {}))


def preserve_space(element):
    element.set('{{{}}}space'.format(XML_NS), 'preserve')


def tostring(root):
    return etree.tostring(root, encoding='unicode')
