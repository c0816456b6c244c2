"""Exceptions raised by the item type classes.

Three kinds of errors are distinguished:
 - XmlParseError: the xml that shall be parsed misses mandatory content or has malformed values.
 - ThingSerializationError: an object shall be written to xml, but a mandatory value is not set.
 - OutOfRangeError: a value that is assigned violates a domain rule (e.g. a negative flow).
"""
import enum


class ErrorKind(str, enum.Enum):
    PARSE = 'parse'
    SERIALIZATION = 'serialization'
    RANGE = 'range'

    def __str__(self):
        return str(self.value)


class ItemTypeError(Exception):
    """Base class of all errors that are specific to item types."""
    kind: ErrorKind = None

    def __repr__(self):
        return f'{self.__class__.__name__}(kind={self.kind}, {self.args})'


class XmlParseError(ItemTypeError, ValueError):
    """Mandatory xml content is missing, or a value in xml cannot be converted."""
    kind = ErrorKind.PARSE


class ThingSerializationError(ItemTypeError):
    """A mandatory value is not set when xml shall be written."""
    kind = ErrorKind.SERIALIZATION


class OutOfRangeError(ItemTypeError, ValueError):
    """A value is outside the range that is allowed for it."""
    kind = ErrorKind.RANGE

    def __init__(self, name, value, reason=None):
        """
        :param name: name of the value that was checked
        :param value: the rejected value
        :param reason: optional human readable explanation
        """
        text = f'{name}={value!r} is out of range'
        if reason:
            text = f'{text}: {reason}'
        super().__init__(text)
        self.name = name
        self.value = value

