"""Module containing utilities and helper methods regarding xml."""

import sys

from lxml import etree as etree_
from lxml.etree import _Element

from hvtypes.exceptions import XmlParseError

if sys.version_info >= (3, 10):
    from typing import TypeAlias

    LxmlElement: TypeAlias = _Element
else:
    from typing_extensions import TypeAlias

    LxmlElement: TypeAlias = _Element


def mk_parser() -> etree_.XMLParser:
    """Return a parser that neither resolves entities nor accesses the network."""
    return etree_.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def parse_xml_string(xml_text) -> LxmlElement:
    """Parse a str or bytes xml document and return its root element.

    :param xml_text: str or bytes
    :return: root element
    """
    if isinstance(xml_text, str):
        xml_text = xml_text.encode('utf-8')
    try:
        return etree_.fromstring(xml_text, parser=mk_parser())
    except etree_.XMLSyntaxError as ex:
        raise XmlParseError(f'xml is not well-formed: {ex}') from ex


def to_string(node: LxmlElement, pretty_print: bool = False) -> str:
    """Serialize node to a unicode string without xml declaration."""
    return etree_.tostring(node, encoding='unicode', pretty_print=pretty_print)
