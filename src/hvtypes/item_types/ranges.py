"""Closed intervals [min, max] over an ordinal type.

The range does not enforce min <= max, some ranges are only annotations where an inversion has no meaning.
"""
from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Generic, TypeVar

from lxml import etree as etree_

from hvtypes.exceptions import XmlParseError
from hvtypes.xml_types.basetypes import XMLTypeBase
from hvtypes.xml_types.dataconverters import DoubleConverter, IntegerConverter

if TYPE_CHECKING:
    from hvtypes import xml_utils
    from hvtypes.xml_types.dataconverters import DataConverterProtocol

T = TypeVar('T')

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


class Range(XMLTypeBase, Generic[T]):
    """Base class of ranges.

    Derived classes define the value converter and the default bounds.
    Unset bounds have the default value of the derived class.
    """
    MIN_ELEMENT = 'minimum-range'
    MAX_ELEMENT = 'maximum-range'
    VALUE_CONVERTER: DataConverterProtocol = None
    _props = ()

    def __init__(self, min_range: T | None = None, max_range: T | None = None):
        super().__init__()
        self._min_range = None
        self._max_range = None
        if min_range is not None:
            self.min_range = min_range
        if max_range is not None:
            self.max_range = max_range

    @property
    def default_min_value(self) -> T:
        raise NotImplementedError

    @property
    def default_max_value(self) -> T:
        raise NotImplementedError

    @property
    def min_range(self) -> T:
        return self.default_min_value if self._min_range is None else self._min_range

    @min_range.setter
    def min_range(self, value: T):
        self.VALUE_CONVERTER.check_valid(value)
        self.verify_range_value(value)
        self._min_range = value

    @property
    def max_range(self) -> T:
        return self.default_max_value if self._max_range is None else self._max_range

    @max_range.setter
    def max_range(self, value: T):
        self.VALUE_CONVERTER.check_valid(value)
        self.verify_range_value(value)
        self._max_range = value

    def verify_range_value(self, value: T):
        """Check a bound before it is set. Derived classes raise OutOfRangeError for unacceptable values."""

    def read_range_value(self, node: xml_utils.LxmlElement) -> T:
        return self.VALUE_CONVERTER.to_py(node.text)

    def write_range_value(self, node_name: str, value: T, parent_node: xml_utils.LxmlElement):
        sub_node = etree_.SubElement(parent_node, node_name)
        sub_node.text = self.VALUE_CONVERTER.to_xml(value)

    def update_from_node(self, node: xml_utils.LxmlElement):
        for attr_name, node_name in (('_min_range', self.MIN_ELEMENT), ('_max_range', self.MAX_ELEMENT)):
            sub_node = node.find(node_name)
            value = None
            if sub_node is not None:
                if sub_node.text is None:
                    raise XmlParseError(f'element {node_name} in {node.tag} has no value')
                value = self.read_range_value(sub_node)
            setattr(self, attr_name, value)

    def update_node(self, node: xml_utils.LxmlElement):
        for node_name in (self.MIN_ELEMENT, self.MAX_ELEMENT):
            for sub_node in node.findall(node_name):
                node.remove(sub_node)
        self.write_range_value(self.MIN_ELEMENT, self.min_range, node)
        self.write_range_value(self.MAX_ELEMENT, self.max_range, node)

    def __contains__(self, value: T) -> bool:
        return self.min_range <= value <= self.max_range

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.min_range == other.min_range and self.max_range == other.max_range

    __hash__ = None

    def __repr__(self):
        return f'{self.__class__.__name__}(min_range={self.min_range!r}, max_range={self.max_range!r})'

    def __str__(self):
        return f'{self.min_range} - {self.max_range}'


class DoubleRange(Range[float]):
    VALUE_CONVERTER = DoubleConverter

    @property
    def default_min_value(self) -> float:
        return -sys.float_info.max

    @property
    def default_max_value(self) -> float:
        return sys.float_info.max


class IntRange(Range[int]):
    VALUE_CONVERTER = IntegerConverter

    @property
    def default_min_value(self) -> int:
        return INT32_MIN

    @property
    def default_max_value(self) -> int:
        return INT32_MAX
