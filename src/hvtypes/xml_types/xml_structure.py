"""Classes in this module are used to declare the place where a xml value is located inside a document.

They also provide a mapping between XML data types (which are always stings in specific formats) and
python types. By doing so these classes completely hide the XML nature of data.
The basic offered types are Element, list of elements and attribute.
They are the buildings blocks that are needed to declare XML data types.

Element names of the health record service are plain local names (no namespace),
therefore element and attribute names are simple strings.
"""
from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

from lxml import etree as etree_

from hvtypes.exceptions import ThingSerializationError, XmlParseError

from .dataconverters import (
    BooleanConverter,
    ClassCheckConverter,
    DoubleConverter,
    EnumConverter,
    IntegerConverter,
    ListConverter,
    StringConverter,
    UuidConverter,
)

if TYPE_CHECKING:
    from hvtypes import xml_utils
    from hvtypes.xml_types.basetypes import XMLTypeBase

    from .dataconverters import DataConverterProtocol

    ValueCheck = Callable[[Any], None]

STRICT_TYPES = True  # if True, only the expected types are excepted.
MANDATORY_VALUE_CHECKING = True  # checks if mandatory values are present when xml is generated


class ElementNotFoundError(Exception):  # noqa: D101
    pass


class _NumberStack:
    # uses as a part of _local_var_name in _XmlStructureBaseProperty.
    # This makes duplicate names impossible
    _value = 0

    @classmethod
    def unique_number(cls) -> str:
        cls._value += 1
        return str(cls._value)


def _var_name(xml_name: str) -> str:
    return xml_name.replace('-', '_').lower()


class _XmlStructureBaseProperty(ABC):
    """_XmlStructureBaseProperty defines a python property that converts between Python Data Types and XML data types.

    It has knowledge about three things:
    - how to covert data from xml to python type and vice versa
    - name/ location of the xml data in a node.
    - which domain rules a value must fulfill (value_check)

    All derived Properties have the same interface:
    __get__ and __set__ : read and write access, using Python data types.
    get_py_value_from_node: reads the value from XML data and converts it to Python data type.
    update_xml_value: convert the Python data type to XML type and write it to XML node.
    """

    def __init__(self, local_var_name: str,  # noqa: PLR0913
                 value_converter: DataConverterProtocol,
                 default_py_value: Any | None = None,
                 is_optional: bool = False,
                 value_check: ValueCheck | None = None):
        """Construct an instance.

        :param local_var_name: a member with this same is added to instance
        :param value_converter: DataConverterProtocol
        :param default_py_value: initial value when initialized
                                 (should be set for mandatory elements, otherwise created xml might violate schema)
                                 and if the xml element does not exist.
        :param is_optional: reflects if this element is optional in schema
        :param value_check: callable that is called with every value that is assigned from python side.
                            It raises an exception if the value is not acceptable.
        """
        if not hasattr(value_converter, 'check_valid'):
            raise TypeError
        self._converter = value_converter
        if STRICT_TYPES:
            if default_py_value is not None:
                self._converter.check_valid(default_py_value)
        self._default_py_value = default_py_value
        self._is_optional = is_optional
        self._local_var_name = local_var_name
        self._value_check = value_check

    @property
    def is_optional(self) -> bool:
        return self._is_optional

    def __get__(self, instance, owner) -> Any:  # noqa: ANN001
        """Return a python value, use the locally stored value."""
        if instance is None:  # if called via class
            return self
        try:
            return getattr(instance, self._local_var_name)
        except AttributeError:
            return None

    def __set__(self, instance, py_value):  # noqa: ANN001
        """Value is the representation on the program side, e.g a float."""
        if STRICT_TYPES:
            self._converter.check_valid(py_value)
        if self._value_check is not None:
            self._value_check(py_value)
        setattr(instance, self._local_var_name, py_value)

    def init_instance_data(self, instance: Any):
        """Set initial values to default_py_value.

        This method is used internally and should not be called by application.
        :param instance: the instance that has the property as member
        :return: None
        """
        if self._default_py_value is not None:
            setattr(instance, self._local_var_name, copy.deepcopy(self._default_py_value))

    def _get_py_value(self, instance: Any) -> Any:
        try:
            return getattr(instance, self._local_var_name)
        except AttributeError:
            # this can only happen if there is no default value defined and __set__ has never been called
            return self._default_py_value

    def _raise_if_mandatory(self, xml_name: str):
        if MANDATORY_VALUE_CHECKING and not self.is_optional:
            raise ThingSerializationError(f'mandatory value {xml_name} missing')

    @abstractmethod
    def update_xml_value(self, instance: Any, node: xml_utils.LxmlElement):
        """Update node with current data from instance.

        This method is used internally and should not be called by application.
        :param instance: the instance that has the property as member
        :param node: the etree node that shall be updated
        :return: None
        """

    @abstractmethod
    def get_py_value_from_node(self, instance: Any, node: xml_utils.LxmlElement):
        """Read data from node.

        This method is used internally and should not be called by application.
        :param instance: the instance that has the property as member
        :param node: the etree node that provides the value
        :return: value
        """

    def update_from_node(self, instance: Any, node: xml_utils.LxmlElement):
        """Update instance data with data from node.

        This method is used internally and should not be called by application.
        :param instance:the instance that has the property as member
        :param node:the etree node that provides the value
        :return: value
        """
        value = self.get_py_value_from_node(instance, node)
        setattr(instance, self._local_var_name, value)


class _AttributeBase(_XmlStructureBaseProperty):
    """Base class that represents an XML Attribute.

    The XML Representation is a string.
    The python representation is determined by value_converter.
    """

    def __init__(self, attribute_name: str,  # noqa: PLR0913
                 value_converter: DataConverterProtocol | None = None,
                 default_py_value: Any = None,
                 is_optional: bool = True,
                 value_check: ValueCheck | None = None):
        """Construct an instance.

        :param attribute_name: name of the attribute in xml node
        :param value_converter: converter between xml value and python value
        :param default_py_value: see base class doc.
        :param is_optional: see base class doc.
        :param value_check: see base class doc.
        """
        local_var_name = f'_a_{_var_name(attribute_name)}_{_NumberStack.unique_number()}'
        super().__init__(local_var_name, value_converter, default_py_value, is_optional,
                         value_check)
        self._attribute_name = attribute_name

    def get_py_value_from_node(self, instance: Any,  # noqa: ARG002
                               node: xml_utils.LxmlElement | None) -> Any:
        xml_value = None if node is None else node.attrib.get(self._attribute_name)
        if xml_value is None or (xml_value == '' and self.is_optional):
            if not self.is_optional:
                raise XmlParseError(f'mandatory attribute {self._attribute_name} missing in {node.tag}')
            return None
        return self._converter.to_py(xml_value)

    def update_xml_value(self, instance: Any, node: xml_utils.LxmlElement):
        """Write value to node."""
        py_value = self._get_py_value(instance)
        if py_value is None or (py_value == '' and self.is_optional):
            if py_value is None:
                self._raise_if_mandatory(self._attribute_name)
            if self._attribute_name in node.attrib:
                del node.attrib[self._attribute_name]
        else:
            xml_value = self._converter.to_xml(py_value)
            node.set(self._attribute_name, xml_value)

    def __str__(self) -> str:
        return f'{self.__class__.__name__} attribute {self._attribute_name}'


class StringAttributeProperty(_AttributeBase):
    """Python representation is a string."""

    def __init__(self, attribute_name: str,  # noqa: PLR0913
                 default_py_value: Any = None,
                 is_optional: bool = True,
                 value_check: ValueCheck | None = None):
        super().__init__(attribute_name, StringConverter, default_py_value, is_optional,
                         value_check)


class _ElementBase(_XmlStructureBaseProperty, ABC):
    """_ElementBase represents an XML Element."""

    def __init__(self, sub_element_name: str | None,  # noqa: PLR0913
                 value_converter: DataConverterProtocol,
                 default_py_value: Any = None,
                 is_optional: bool = False,
                 value_check: ValueCheck | None = None):
        """Construct the representation of a (sub) element in xml.

        :param sub_element_name: a name or None. If None, the property represents the node itself,
                                 otherwise the sub node with given name.
        :param value_converter: see base class doc.
        :param default_py_value: see base class doc.
        :param is_optional: see base class doc.
        :param value_check: see base class doc.
        """
        if sub_element_name is None:
            local_var_name = f'_e_{_NumberStack.unique_number()}'
        else:
            local_var_name = f'_e_{_var_name(sub_element_name)}_{_NumberStack.unique_number()}'
        super().__init__(local_var_name, value_converter, default_py_value, is_optional,
                         value_check)
        self._sub_element_name = sub_element_name

    @property
    def sub_element_name(self) -> str | None:
        return self._sub_element_name

    @staticmethod
    def _get_element_by_child_name(node: xml_utils.LxmlElement,
                                   sub_element_name: str | None,
                                   create_missing_nodes: bool) -> xml_utils.LxmlElement:
        if sub_element_name is None:
            return node
        sub_node = node.find(sub_element_name)
        if sub_node is None:
            if not create_missing_nodes:
                raise ElementNotFoundError(f'Element {sub_element_name} not found in {node.tag}')
            sub_node = etree_.SubElement(node, sub_element_name)  # create this node
        return sub_node

    def _get_sub_node_for_reading(self, node: xml_utils.LxmlElement) -> xml_utils.LxmlElement | None:
        """Return the sub node, None if an optional node does not exist.

        Raises XmlParseError if a mandatory sub node does not exist.
        """
        try:
            return self._get_element_by_child_name(node, self._sub_element_name, create_missing_nodes=False)
        except ElementNotFoundError as ex:
            if self.is_optional:
                return None
            raise XmlParseError(f'mandatory element {self._sub_element_name} missing in {node.tag}') from ex

    def remove_sub_element(self, node: xml_utils.LxmlElement):
        if self._sub_element_name is None:
            return
        sub_node = node.find(self._sub_element_name)
        if sub_node is not None:
            node.remove(sub_node)

    def __str__(self) -> str:
        return f'{self.__class__.__name__} in sub element {self._sub_element_name}'


class NodeTextProperty(_ElementBase):
    """Represents the text of an XML Element.

    Python representation depends on value converter.
    """

    def get_py_value_from_node(self, instance: Any, node: xml_utils.LxmlElement) -> Any:  # noqa: ARG002
        """Read value from node.

        :return: None if an optional element was not found, else result of converter.
        """
        sub_node = self._get_sub_node_for_reading(node)
        if sub_node is None:
            return None
        if sub_node.text is None and self._converter is not StringConverter:
            if self.is_optional:
                return None
            raise XmlParseError(f'mandatory element {self._sub_element_name or node.tag} has no value')
        return self._converter.to_py(sub_node.text)

    def update_xml_value(self, instance: Any, node: xml_utils.LxmlElement):
        """Write value to node.

        Optional elements with value None or an empty string are not written.
        """
        py_value = self._get_py_value(instance)
        if py_value is None or (py_value == '' and self.is_optional):
            if py_value is None:
                self._raise_if_mandatory(self._sub_element_name or node.tag)
            if not self._sub_element_name:
                # update text of this element
                node.text = None
            elif self.is_optional:
                self.remove_sub_element(node)
            else:
                sub_node = self._get_element_by_child_name(node, self._sub_element_name, create_missing_nodes=True)
                sub_node.text = None
        else:
            sub_node = self._get_element_by_child_name(node, self._sub_element_name, create_missing_nodes=True)
            sub_node.text = self._converter.to_xml(py_value)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__} in sub-element {self._sub_element_name}'


class NodeStringProperty(NodeTextProperty):
    """Represents the text of an XML Element.

    Python representation is a string.
    libxml sets text of element to None, if text in xml is empty. In this case the python value is an empty string.
    if the xml element that should contain the text does not exist, the python value is None.
    """

    def __init__(self, sub_element_name: str | None = None,  # noqa: PLR0913
                 default_py_value: str | None = None,
                 is_optional: bool = False,
                 value_check: ValueCheck | None = None):
        super().__init__(sub_element_name, StringConverter, default_py_value,
                         is_optional, value_check)


class NodeIntProperty(NodeTextProperty):
    """Python representation is an int."""

    def __init__(self, sub_element_name: str | None = None,  # noqa: PLR0913
                 default_py_value: int | None = None,
                 is_optional: bool = False,
                 value_check: ValueCheck | None = None):
        super().__init__(sub_element_name, IntegerConverter, default_py_value,
                         is_optional, value_check)


class NodeDoubleProperty(NodeTextProperty):
    """Python representation is a float, xml representation is a xsd:double."""

    def __init__(self, sub_element_name: str | None = None,  # noqa: PLR0913
                 default_py_value: float | None = None,
                 is_optional: bool = False,
                 value_check: ValueCheck | None = None):
        super().__init__(sub_element_name, DoubleConverter, default_py_value,
                         is_optional, value_check)


class NodeBooleanProperty(NodeTextProperty):
    """Python representation is a bool."""

    def __init__(self, sub_element_name: str | None = None,  # noqa: PLR0913
                 default_py_value: bool | None = None,
                 is_optional: bool = False,
                 value_check: ValueCheck | None = None):
        super().__init__(sub_element_name, BooleanConverter, default_py_value,
                         is_optional, value_check)


class NodeUuidProperty(NodeTextProperty):
    """Python representation is a uuid.UUID."""

    def __init__(self, sub_element_name: str | None = None,  # noqa: PLR0913
                 default_py_value: Any | None = None,
                 is_optional: bool = False,
                 value_check: ValueCheck | None = None):
        super().__init__(sub_element_name, UuidConverter, default_py_value,
                         is_optional, value_check)


class NodeEnumTextProperty(NodeTextProperty):
    """Represents the text of an XML Element.

    Python representation is an enum.
    If unknown_value is given, xml values that are not a member of the enum are read as unknown_value,
    and unknown_value itself is not written.
    """

    def __init__(self, sub_element_name: str | None,  # noqa: PLR0913
                 enum_cls: Any,
                 default_py_value: Any | None = None,
                 is_optional: bool = False,
                 unknown_value: Any | None = None):
        super().__init__(sub_element_name, EnumConverter(enum_cls), default_py_value,
                         is_optional)
        self.enum_cls = enum_cls
        self._unknown_value = unknown_value

    def get_py_value_from_node(self, instance: Any, node: xml_utils.LxmlElement) -> Any:
        try:
            return super().get_py_value_from_node(instance, node)
        except XmlParseError:
            if self._unknown_value is None:
                raise
            return self._unknown_value

    def update_xml_value(self, instance: Any, node: xml_utils.LxmlElement):
        py_value = self._get_py_value(instance)
        if self._unknown_value is not None and py_value == self._unknown_value:
            self.remove_sub_element(node)
            return
        super().update_xml_value(instance, node)


class SubElementProperty(_ElementBase):
    """Uses a value that has an "as_etree_node" method."""

    def __init__(self, sub_element_name: str | None,  # noqa: PLR0913
                 value_class: type[XMLTypeBase],
                 default_py_value: Any | None = None,
                 is_optional: bool = False):
        super().__init__(sub_element_name, ClassCheckConverter(value_class), default_py_value,
                         is_optional)
        self.value_class = value_class

    def get_py_value_from_node(self, instance: Any, node: xml_utils.LxmlElement) -> Any:  # noqa: ARG002
        """Read value from node."""
        sub_node = self._get_sub_node_for_reading(node)
        if sub_node is None:
            return self._default_py_value
        return self.value_class.from_node(sub_node)

    def update_xml_value(self, instance: Any, node: xml_utils.LxmlElement):
        """Write value to node."""
        py_value = self._get_py_value(instance)
        self.remove_sub_element(node)
        if py_value is None:
            self._raise_if_mandatory(self._sub_element_name)
        else:
            py_value.as_etree_node(self._sub_element_name, node)


class SubElementWithContentProperty(SubElementProperty):
    """Class represents an optional Element that is only present if its value is not empty.

    value_class must have an is_empty method.
    """

    def __init__(self, sub_element_name: str | None,
                 value_class: type[XMLTypeBase],
                 is_optional: bool = True):
        assert hasattr(value_class, 'is_empty')
        super().__init__(sub_element_name, value_class=value_class, is_optional=is_optional)

    def update_xml_value(self, instance: Any, node: xml_utils.LxmlElement):
        """Write value to node."""
        py_value = self._get_py_value(instance)
        if py_value is None or py_value.is_empty():
            self.remove_sub_element(node)
            self._raise_if_mandatory(self._sub_element_name)
            return
        super().update_xml_value(instance, node)


class _ElementListProperty(_ElementBase, ABC):
    def __init__(self, sub_element_name: str | None,
                 value_converter: DataConverterProtocol,
                 is_optional: bool = True):
        super().__init__(sub_element_name, value_converter, is_optional=is_optional)

    def __get__(self, instance, owner):  # noqa: ANN001
        """Return a python value, uses the locally stored value."""
        if instance is None:  # if called via class
            return self
        try:
            return getattr(instance, self._local_var_name)
        except AttributeError:
            setattr(instance, self._local_var_name, [])
            return getattr(instance, self._local_var_name)

    def __set__(self, instance, py_value):  # noqa: ANN001
        if isinstance(py_value, tuple):
            py_value = list(py_value)
        super().__set__(instance, py_value)

    def init_instance_data(self, instance: Any):
        setattr(instance, self._local_var_name, [])

    def update_from_node(self, instance: Any, node: xml_utils.LxmlElement):
        """Update instance data with data from node.

        This method is used internally and should not be called by application.
        :param instance:the instance that has the property as member
        :param node:the etree node that provides the value
        :return:
        """
        value: list | None = self.get_py_value_from_node(instance, node)
        if value is not None:
            setattr(instance, self._local_var_name, value)


class SubElementListProperty(_ElementListProperty):
    """SubElementListProperty is a list of values that have an "as_etree_node" method.

    Used for elements with maxOccurs="unbounded".
    """

    def __init__(self, sub_element_name: str,
                 value_class: type[XMLTypeBase],
                 is_optional: bool = True):
        super().__init__(sub_element_name, ListConverter(ClassCheckConverter(value_class)), is_optional=is_optional)
        self.value_class = value_class

    def get_py_value_from_node(self, instance: Any, node: xml_utils.LxmlElement) -> Any:  # noqa: ARG002
        """Read value from node."""
        return [self.value_class.from_node(_node) for _node in node.findall(self._sub_element_name)]

    def update_xml_value(self, instance: Any, node: xml_utils.LxmlElement):
        """Write value to node."""
        py_value = self._get_py_value(instance)
        for _node in node.findall(self._sub_element_name):
            node.remove(_node)
        # ... and create new ones
        if py_value is not None:
            for val in py_value:
                if val is not None:
                    val.as_etree_node(self._sub_element_name, node)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__} datatype {self.value_class.__name__} in subelement {self._sub_element_name}'
