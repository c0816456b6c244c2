"""Base class of all thing types."""
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from hvtypes import xml_utils
from hvtypes.exceptions import XmlParseError
from hvtypes.xml_types.basetypes import XMLTypeBase

if TYPE_CHECKING:
    from typing_extensions import Self


class ThingBase(XMLTypeBase):
    """A thing type is the root of a record item, identified by TYPE_ID and written as ROOT_TAG element."""

    TYPE_ID: uuid.UUID = None
    ROOT_TAG: str = None

    @classmethod
    def from_xml(cls, xml_data: str | bytes | xml_utils.LxmlElement) -> Self:
        """Create an instance from a xml string or an element.

        :raise XmlParseError: if xml is not well-formed or the root element is not ROOT_TAG.
        """
        if isinstance(xml_data, (str, bytes)):
            node = xml_utils.parse_xml_string(xml_data)
        else:
            node = xml_data
        if node.tag != cls.ROOT_TAG:
            raise XmlParseError(f'expected root element {cls.ROOT_TAG}, got {node.tag}')
        return cls.from_node(node)

    def to_xml(self) -> xml_utils.LxmlElement:
        return self.write_xml(self.ROOT_TAG)

    def to_xml_string(self, pretty_print: bool = False) -> str:
        return xml_utils.to_string(self.to_xml(), pretty_print=pretty_print)
