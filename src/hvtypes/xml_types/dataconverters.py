from __future__ import annotations

import math
import uuid
from typing import Protocol, Any

from hvtypes.exceptions import XmlParseError

STRICT_VALUE_CHECK = True


class DataConverterProtocol(Protocol):
    def to_py(self, xml_value: str):
        ...

    def to_xml(self, py_value: Any) -> str:
        ...

    def check_valid(self, py_value: Any):
        ...


class NullConverter:
    @staticmethod
    def to_py(xml_value):
        return xml_value

    @staticmethod
    def to_xml(py_value):
        return py_value

    @staticmethod
    def check_valid(py_value):
        pass


class ClassCheckConverter(NullConverter):
    """No conversion, only type checking"""

    def __init__(self, *klass):
        self._klass = klass

    def check_valid(self, py_value):
        if STRICT_VALUE_CHECK and py_value is not None:
            for cls in self._klass:
                if isinstance(py_value, cls):
                    return
            raise ValueError(f'Value can only be {[cls.__name__ for cls in self._klass]}, got {type(py_value)}')


class EnumConverter(NullConverter):
    """
    Converts between enums and strings
    """

    def __init__(self, klass):
        self._klass = klass

    def to_py(self, xml_value):
        try:
            return self._klass(self._klass_value_type(xml_value))
        except ValueError as ex:
            raise XmlParseError(f'"{xml_value}" is not a valid {self._klass.__name__}') from ex

    def _klass_value_type(self, xml_value):
        # int based enums are written as their number
        if issubclass(self._klass, int):
            return IntegerConverter.to_py(xml_value)
        return xml_value

    def to_xml(self, py_value):
        value = py_value.value if hasattr(py_value, 'value') else py_value
        return str(value)

    def check_valid(self, py_value) -> bool:
        if STRICT_VALUE_CHECK and py_value is not None:
            if not isinstance(py_value, self._klass):
                raise ValueError(f'Value can only be {self._klass.__name__}, got {type(py_value)}')


class StringConverter(NullConverter):
    """Convert None to empty string, everything else is unchanged."""

    @staticmethod
    def to_py(xml_value):
        return xml_value or ''

    @staticmethod
    def check_valid(py_value) -> bool:
        if STRICT_VALUE_CHECK and py_value is not None:
            if not isinstance(py_value, str):
                raise ValueError(f'Value can only be str, got {type(py_value)}')


class ListConverter(NullConverter):
    """Each element in list is checked and converted with provided element_converter."""

    def __init__(self, element_converter):
        if not hasattr(element_converter, 'check_valid'):
            raise TypeError
        self._element_converter = element_converter

    def check_valid(self, py_value) -> bool:
        if STRICT_VALUE_CHECK and py_value is not None:
            if not isinstance(py_value, list):
                raise ValueError(f'Value must be an instance of {type(list)}, got {type(py_value)}')
            for elem in py_value:
                self._element_converter.check_valid(elem)


class DoubleConverter(NullConverter):
    """xsd:double.

    XML representation is locale invariant: '.' as decimal separator, 'INF', '-INF' and 'NaN' for special values.
    Integral values are written without fraction ('25' instead of '25.0').
    Python representation is a float.
    """

    @staticmethod
    def to_py(xml_value: str) -> float | None:
        if xml_value is None:
            return None
        text = xml_value.strip()
        special = {'INF': math.inf, '+INF': math.inf, '-INF': -math.inf, 'NaN': math.nan}
        if text in special:
            return special[text]
        try:
            return float(text)
        except ValueError as ex:
            raise XmlParseError(f'"{xml_value}" is not a valid double') from ex

    @staticmethod
    def to_xml(py_value) -> str:
        py_value = float(py_value)
        if math.isnan(py_value):
            return 'NaN'
        if math.isinf(py_value):
            return 'INF' if py_value > 0 else '-INF'
        xml_value = repr(py_value)
        if xml_value.endswith('.0'):
            xml_value = xml_value[:-2]
        return xml_value.upper() if 'e' in xml_value else xml_value

    @staticmethod
    def check_valid(py_value):
        if STRICT_VALUE_CHECK and py_value is not None:
            if isinstance(py_value, bool) or not isinstance(py_value, (float, int)):
                raise ValueError(f'expected a float, got {type(py_value)}')


class IntegerConverter(NullConverter):
    @staticmethod
    def to_py(xml_value):
        if xml_value is None:
            return None
        try:
            return int(xml_value)
        except ValueError as ex:
            raise XmlParseError(f'"{xml_value}" is not a valid integer') from ex

    @staticmethod
    def to_xml(py_value):
        return str(py_value)

    @staticmethod
    def check_valid(py_value):
        if STRICT_VALUE_CHECK and py_value is not None:
            if isinstance(py_value, bool) or not isinstance(py_value, int):
                raise ValueError(f'expected an integer, got {type(py_value)}')


class BooleanConverter(NullConverter):
    @staticmethod
    def to_py(xml_value):
        if xml_value is None:
            return None
        value = xml_value.strip()
        if value in ('true', '1'):
            return True
        if value in ('false', '0'):
            return False
        raise XmlParseError(f'"{xml_value}" is not a valid boolean')

    @staticmethod
    def to_xml(py_value):
        if py_value:
            return 'true'
        return 'false'

    @staticmethod
    def check_valid(py_value):
        if STRICT_VALUE_CHECK and py_value is not None:
            if not isinstance(py_value, bool):
                raise ValueError(f'expected a boolean, got {type(py_value)}')


class UuidConverter(NullConverter):
    @staticmethod
    def to_py(xml_value):
        if xml_value is None:
            return None
        try:
            return uuid.UUID(xml_value.strip())
        except ValueError as ex:
            raise XmlParseError(f'"{xml_value}" is not a valid uuid') from ex

    @staticmethod
    def to_xml(py_value):
        return str(py_value)

    @staticmethod
    def check_valid(py_value):
        if STRICT_VALUE_CHECK and py_value is not None:
            if not isinstance(py_value, uuid.UUID):
                raise ValueError(f'expected a uuid, got {type(py_value)}')
