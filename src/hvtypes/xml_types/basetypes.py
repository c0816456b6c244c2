from __future__ import annotations

import inspect
import traceback
from math import isclose
from typing import TYPE_CHECKING

from lxml import etree as etree_

from hvtypes.exceptions import ItemTypeError

if TYPE_CHECKING:
    from hvtypes import xml_utils


class XMLTypeBase:
    """Base class of all types that are read from and written to xml.

    Members are declared with xml_structure properties. The _props tuple of each class lists the
    names of these members in document order; derived classes append their own _props after those of the base.
    - creation: every derived class can be instantiated without arguments
    - reading: class method 'from_node'
    - writing: 'write_xml' (new root element) or 'as_etree_node' (sub element of a parent)
    """

    def __init__(self):
        for _, prop in self.sorted_container_properties():
            prop.init_instance_data(self)

    def as_etree_node(self, node_name: str, parent_node: xml_utils.LxmlElement | None = None):
        if parent_node is None:
            node = etree_.Element(node_name)
        else:
            node = etree_.SubElement(parent_node, node_name)
        self.update_node(node)
        return node

    def write_xml(self, node_name: str) -> xml_utils.LxmlElement:
        """Return a new element with name node_name that contains the data of this object."""
        return self.as_etree_node(node_name)

    def update_node(self, node: xml_utils.LxmlElement):
        for prop_name, prop in self.sorted_container_properties():
            try:
                prop.update_xml_value(self, node)
            except ItemTypeError:
                raise
            except Exception as ex:
                # re-raise with the name of the member that failed
                raise ValueError(
                    f'In {self.__class__.__name__}.{prop_name}, {prop!s} could not update: {traceback.format_exc()}') from ex

    def update_from_node(self, node: xml_utils.LxmlElement):
        for _, prop in self.sorted_container_properties():
            prop.update_from_node(self, node)

    def sorted_container_properties(self) -> list:
        """Return (name, property) tuples of all members declared in _props, base classes first."""
        ret = []
        for cls in reversed(inspect.getmro(self.__class__)):
            for name in cls.__dict__.get('_props', ()):  # only the names declared by cls itself
                ret.append((name, getattr(cls, name)))
        return ret

    def __eq__(self, other):
        """Compare all declared members, floats are compared with isclose."""
        if not isinstance(other, self.__class__):
            return False
        try:
            for name, _ in self.sorted_container_properties():
                my_value = getattr(self, name)
                other_value = getattr(other, name)
                if my_value == other_value:
                    continue
                if (isinstance(my_value, float) or isinstance(other_value, float)) and isclose(my_value, other_value):
                    continue
                return False
            return True
        except (TypeError, AttributeError):
            return False

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        values = ', '.join(f'{name}={getattr(self, name)!r}' for name, _ in self.sorted_container_properties())
        return f'{self.__class__.__name__}({values})'

    @classmethod
    def from_node(cls, node: xml_utils.LxmlElement):
        """Create an instance with the no-argument constructor and read its data from node."""
        obj = cls()
        obj.update_from_node(node)
        return obj
