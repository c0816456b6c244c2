"""Precise dates as used by the "when" element of thing types."""
from __future__ import annotations

import datetime

from hvtypes import validators
from hvtypes.xml_types.basetypes import XMLTypeBase
from hvtypes.xml_types.xml_structure import NodeIntProperty, SubElementProperty, SubElementWithContentProperty

from .approximate import ApproximateTime, ComparableMixin, compare_optional
from .codable import CodableValue


class HealthServiceDate(ComparableMixin, XMLTypeBase):
    """A calendar date, year, month and day are mandatory."""

    year: int = NodeIntProperty('y', value_check=validators.in_range('year', 1000, 9999, allow_none=False))
    month: int = NodeIntProperty('m', value_check=validators.in_range('month', 1, 12, allow_none=False))
    day: int = NodeIntProperty('d', value_check=validators.in_range('day', 1, 31, allow_none=False))
    _props = ('year', 'month', 'day')

    def __init__(self, year: int | None = None, month: int | None = None, day: int | None = None):
        super().__init__()
        if year is not None:
            self.year = year
        if month is not None:
            self.month = month
        if day is not None:
            self.day = day

    @classmethod
    def from_date(cls, value: datetime.date) -> HealthServiceDate:
        return cls(value.year, value.month, value.day)

    def as_date(self) -> datetime.date:
        return datetime.date(self.year, self.month, self.day)

    def compare_to(self, other: HealthServiceDate | datetime.date | None) -> int:
        if other is None:
            return 1
        if isinstance(other, datetime.date):
            other = HealthServiceDate(other.year, other.month, other.day)
        if not isinstance(other, HealthServiceDate):
            raise TypeError(f'cannot compare HealthServiceDate with {type(other)}')
        return compare_optional((self.year, self.month, self.day), (other.year, other.month, other.day))

    def __str__(self):
        return f'{self.year:04d}-{self.month:02d}-{self.day:02d}'


class HealthServiceDateTime(ComparableMixin, XMLTypeBase):
    """A date with optional time and time zone."""

    date: HealthServiceDate = SubElementProperty('date', value_class=HealthServiceDate)
    time: ApproximateTime | None = SubElementProperty('time', value_class=ApproximateTime, is_optional=True)
    time_zone: CodableValue | None = SubElementWithContentProperty('tz', value_class=CodableValue)
    _props = ('date', 'time', 'time_zone')

    def __init__(self, date: HealthServiceDate | None = None,
                 time: ApproximateTime | None = None,
                 time_zone: CodableValue | None = None):
        super().__init__()
        self.date = date
        self.time = time
        self.time_zone = time_zone

    @classmethod
    def from_datetime(cls, value: datetime.datetime) -> HealthServiceDateTime:
        return cls(HealthServiceDate.from_date(value), ApproximateTime.from_time(value))

    @classmethod
    def now(cls) -> HealthServiceDateTime:
        return cls.from_datetime(datetime.datetime.now())

    def as_datetime(self) -> datetime.datetime:
        """Return a naive datetime, a missing time is midnight."""
        time = self.time.as_time() if self.time is not None else datetime.time()
        return datetime.datetime.combine(self.date.as_date(), time)

    def compare_to(self, other: HealthServiceDateTime | datetime.datetime | datetime.date | None) -> int:
        if other is None:
            return 1
        if isinstance(other, datetime.datetime):
            other = HealthServiceDateTime.from_datetime(other)
        elif isinstance(other, datetime.date):
            other = HealthServiceDateTime(HealthServiceDate.from_date(other))
        if not isinstance(other, HealthServiceDateTime):
            raise TypeError(f'cannot compare HealthServiceDateTime with {type(other)}')
        result = compare_optional(self.date, other.date)
        if result != 0:
            return result
        return compare_optional(self.time, other.time)

    def __str__(self):
        parts = [str(self.date)]
        if self.time is not None:
            parts.append(str(self.time))
        if self.time_zone is not None and self.time_zone.text:
            parts.append(self.time_zone.text)
        return ' '.join(parts)
