"""Dates and times with optional precision.

Comparison of values with different precision: components are compared from the most significant to
the least significant one. If one side lacks a component the other side has, the side without it sorts first.
Values are compared as literal calendar components, there is no time zone normalization.
"""
from __future__ import annotations

import datetime
from typing import Any

from lxml import etree as etree_

from hvtypes import validators
from hvtypes.exceptions import ThingSerializationError, XmlParseError
from hvtypes.xml_types.basetypes import XMLTypeBase
from hvtypes.xml_types.xml_structure import NodeIntProperty
from hvtypes.xml_utils import LxmlElement

from .codable import CodableValue


def compare_optional(left: Any, right: Any) -> int:
    """Compare two values where None sorts before any value."""
    if left is None:
        return 0 if right is None else -1
    if right is None:
        return 1
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


class ComparableMixin:
    """Rich comparison operators based on a compare_to method.

    Equality with a datetime.date or datetime.time also follows compare_to, so == agrees with <= and >=.
    """

    def compare_to(self, other: Any) -> int:
        raise NotImplementedError

    def __eq__(self, other):
        if isinstance(other, (datetime.date, datetime.time)):
            try:
                return self.compare_to(other) == 0
            except TypeError:
                return False
        return super().__eq__(other)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __lt__(self, other):
        return self.compare_to(other) < 0

    def __le__(self, other):
        return self.compare_to(other) <= 0

    def __gt__(self, other):
        return self.compare_to(other) > 0

    def __ge__(self, other):
        return self.compare_to(other) >= 0


class ApproximateDate(ComparableMixin, XMLTypeBase):
    """A date where only the year is mandatory."""

    year: int = NodeIntProperty('y', value_check=validators.in_range('year', 1000, 9999, allow_none=False))
    month: int | None = NodeIntProperty('m', is_optional=True, value_check=validators.in_range('month', 1, 12))
    day: int | None = NodeIntProperty('d', is_optional=True, value_check=validators.in_range('day', 1, 31))
    _props = ('year', 'month', 'day')

    def __init__(self, year: int | None = None, month: int | None = None, day: int | None = None):
        super().__init__()
        if year is not None:
            self.year = year
        self.month = month
        self.day = day

    @classmethod
    def from_date(cls, value: datetime.date) -> ApproximateDate:
        return cls(value.year, value.month, value.day)

    def has_full_date(self) -> bool:
        return self.year is not None and self.month is not None and self.day is not None

    def as_date(self) -> datetime.date | None:
        """Return a datetime.date if year, month and day are set, else None."""
        if not self.has_full_date():
            return None
        return datetime.date(self.year, self.month, self.day)

    def compare_to(self, other: ApproximateDate | datetime.date | None) -> int:
        """Compare to another ApproximateDate, a date or a datetime.

        :return: a negative number if self sorts before other, 0 if equal, a positive number otherwise.
        """
        if other is None:
            return 1
        if isinstance(other, datetime.date):  # datetime.datetime is a subclass of date
            other = ApproximateDate(other.year, other.month, other.day)
        if not isinstance(other, ApproximateDate):
            raise TypeError(f'cannot compare ApproximateDate with {type(other)}')
        for mine, theirs in ((self.year, other.year), (self.month, other.month), (self.day, other.day)):
            result = compare_optional(mine, theirs)
            if result != 0:
                return result
        return 0

    def __str__(self):
        result = f'{self.year:04d}' if self.year is not None else ''
        if self.month is not None:
            result += f'-{self.month:02d}'
            if self.day is not None:
                result += f'-{self.day:02d}'
        return result


class ApproximateTime(ComparableMixin, XMLTypeBase):
    """A time of day, hour and minute are mandatory."""

    hour: int = NodeIntProperty('h', value_check=validators.in_range('hour', 0, 23, allow_none=False))
    minute: int = NodeIntProperty('m', value_check=validators.in_range('minute', 0, 59, allow_none=False))
    second: int | None = NodeIntProperty('s', is_optional=True, value_check=validators.in_range('second', 0, 59))
    millisecond: int | None = NodeIntProperty('f', is_optional=True,
                                              value_check=validators.in_range('millisecond', 0, 999))
    _props = ('hour', 'minute', 'second', 'millisecond')

    def __init__(self, hour: int | None = None,
                 minute: int | None = None,
                 second: int | None = None,
                 millisecond: int | None = None):
        super().__init__()
        if hour is not None:
            self.hour = hour
        if minute is not None:
            self.minute = minute
        self.second = second
        self.millisecond = millisecond

    @classmethod
    def from_time(cls, value: datetime.time | datetime.datetime) -> ApproximateTime:
        return cls(value.hour, value.minute, value.second, value.microsecond // 1000)

    def as_time(self) -> datetime.time:
        return datetime.time(self.hour, self.minute, self.second or 0, (self.millisecond or 0) * 1000)

    def compare_to(self, other: ApproximateTime | datetime.time | datetime.datetime | None) -> int:
        if other is None:
            return 1
        if isinstance(other, (datetime.time, datetime.datetime)):
            other = ApproximateTime.from_time(other)
        if not isinstance(other, ApproximateTime):
            raise TypeError(f'cannot compare ApproximateTime with {type(other)}')
        for mine, theirs in ((self.hour, other.hour), (self.minute, other.minute),
                             (self.second, other.second), (self.millisecond, other.millisecond)):
            result = compare_optional(mine, theirs)
            if result != 0:
                return result
        return 0

    def __str__(self):
        result = f'{self.hour:02d}:{self.minute:02d}'
        if self.second is not None:
            result += f':{self.second:02d}'
            if self.millisecond is not None:
                result += f'.{self.millisecond:03d}'
        return result


class ApproximateDateTime(ComparableMixin, XMLTypeBase):
    """A point in time that is either structured (date, optional time and time zone) or a free text description.

    Setting one form clears the other one.
    xml: <structured><date/><time/>?<tz/>?</structured> or <descriptive>text</descriptive>
    """
    _props = ()

    def __init__(self, approximate_date: ApproximateDate | None = None,
                 approximate_time: ApproximateTime | None = None,
                 time_zone: CodableValue | None = None,
                 description: str | None = None):
        super().__init__()
        self._approximate_date = None
        self._approximate_time = None
        self._time_zone = None
        self._description = None
        if description is not None:
            self.description = description
        if approximate_date is not None:
            self.approximate_date = approximate_date
        self.approximate_time = approximate_time
        self.time_zone = time_zone

    @classmethod
    def from_datetime(cls, value: datetime.datetime) -> ApproximateDateTime:
        return cls(ApproximateDate.from_date(value), ApproximateTime.from_time(value))

    @property
    def approximate_date(self) -> ApproximateDate | None:
        return self._approximate_date

    @approximate_date.setter
    def approximate_date(self, value: ApproximateDate | None):
        if value is not None and not isinstance(value, ApproximateDate):
            raise ValueError(f'Value can only be ApproximateDate, got {type(value)}')
        self._approximate_date = value
        if value is not None:
            self._description = None

    @property
    def approximate_time(self) -> ApproximateTime | None:
        return self._approximate_time

    @approximate_time.setter
    def approximate_time(self, value: ApproximateTime | None):
        if value is not None and not isinstance(value, ApproximateTime):
            raise ValueError(f'Value can only be ApproximateTime, got {type(value)}')
        self._approximate_time = value

    @property
    def time_zone(self) -> CodableValue | None:
        return self._time_zone

    @time_zone.setter
    def time_zone(self, value: CodableValue | None):
        if value is not None and not isinstance(value, CodableValue):
            raise ValueError(f'Value can only be CodableValue, got {type(value)}')
        self._time_zone = value

    @property
    def description(self) -> str | None:
        return self._description

    @description.setter
    def description(self, value: str | None):
        validators.not_whitespace('description')(value)
        self._description = value
        if value:
            self._approximate_date = None
            self._approximate_time = None
            self._time_zone = None

    def is_structured(self) -> bool:
        return self._approximate_date is not None

    def update_from_node(self, node: LxmlElement):
        structured = node.find('structured')
        if structured is not None:
            date_node = structured.find('date')
            if date_node is None:
                raise XmlParseError(f'mandatory element date missing in {structured.tag}')
            self._approximate_date = ApproximateDate.from_node(date_node)
            time_node = structured.find('time')
            self._approximate_time = None if time_node is None else ApproximateTime.from_node(time_node)
            tz_node = structured.find('tz')
            self._time_zone = None if tz_node is None else CodableValue.from_node(tz_node)
            self._description = None
        else:
            descriptive = node.find('descriptive')
            if descriptive is None:
                raise XmlParseError(f'element structured or descriptive missing in {node.tag}')
            if descriptive.text is None or not descriptive.text.strip():
                raise XmlParseError(f'element descriptive in {node.tag} has no text')
            self._description = descriptive.text
            self._approximate_date = None
            self._approximate_time = None
            self._time_zone = None

    def update_node(self, node: LxmlElement):
        if self._approximate_date is None and not self._description:
            raise ThingSerializationError('ApproximateDateTime needs a date or a description')
        for child in list(node):
            node.remove(child)
        if self._approximate_date is not None:
            structured = etree_.SubElement(node, 'structured')
            self._approximate_date.as_etree_node('date', structured)
            if self._approximate_time is not None:
                self._approximate_time.as_etree_node('time', structured)
            if self._time_zone is not None and not self._time_zone.is_empty():
                self._time_zone.as_etree_node('tz', structured)
        else:
            descriptive = etree_.SubElement(node, 'descriptive')
            descriptive.text = self._description

    def compare_to(self, other: ApproximateDateTime | datetime.datetime | datetime.date | None) -> int:
        """Compare to another ApproximateDateTime, a datetime or a date.

        A descriptive value sorts before a structured one, two descriptive values compare by their text.
        A date converts to a value without time.
        """
        if other is None:
            return 1
        if isinstance(other, datetime.datetime):
            other = ApproximateDateTime.from_datetime(other)
        elif isinstance(other, datetime.date):
            other = ApproximateDateTime(ApproximateDate.from_date(other))
        if not isinstance(other, ApproximateDateTime):
            raise TypeError(f'cannot compare ApproximateDateTime with {type(other)}')
        if self._approximate_date is None:
            if other.approximate_date is not None:
                return -1
            return compare_optional(self._description, other.description)
        if other.approximate_date is None:
            return 1
        result = self._approximate_date.compare_to(other.approximate_date)
        if result != 0:
            return result
        return compare_optional(self._approximate_time, other.approximate_time)

    def __eq__(self, other):
        if not isinstance(other, ApproximateDateTime):
            return super().__eq__(other)
        return (self._approximate_date == other.approximate_date
                and self._approximate_time == other.approximate_time
                and self._time_zone == other.time_zone
                and self._description == other.description)

    __hash__ = None

    def __repr__(self):
        if self._approximate_date is None:
            return f'{self.__class__.__name__}(description={self._description!r})'
        return (f'{self.__class__.__name__}(approximate_date={self._approximate_date!r}, '
                f'approximate_time={self._approximate_time!r}, time_zone={self._time_zone!r})')

    def __str__(self):
        if self._approximate_date is None:
            return self._description or ''
        parts = [str(self._approximate_date)]
        if self._approximate_time is not None:
            parts.append(str(self._approximate_time))
        if self._time_zone is not None and self._time_zone.text:
            parts.append(self._time_zone.text)
        return ' '.join(parts)
