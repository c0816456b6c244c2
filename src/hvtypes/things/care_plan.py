"""A task of a care plan."""
from __future__ import annotations

import uuid

from hvtypes import loghelper, validators
from hvtypes.exceptions import XmlParseError
from hvtypes.item_types.approximate import ApproximateDateTime
from hvtypes.item_types.codable import CodableValue
from hvtypes.xml_types.basetypes import XMLTypeBase
from hvtypes.xml_types.xml_structure import (
    NodeIntProperty,
    NodeStringProperty,
    NodeUuidProperty,
    SubElementProperty,
    SubElementWithContentProperty,
)

_logger = loghelper.get_logger_adapter('hvtypes.things.care_plan')


def _not_nil_uuid(value):
    if value is not None and value.int == 0:
        raise ValueError('thing_type_version_id must not be the nil uuid')


class AssociatedTypeInfo(XMLTypeBase):
    """Points to the thing type (and optionally the xpath of its value) that records progress of a task."""

    thing_type_version_id: uuid.UUID = NodeUuidProperty('thing-type-version-id', value_check=_not_nil_uuid)
    thing_type_value_xpath: str | None = NodeStringProperty(
        'thing-type-value-xpath', is_optional=True, value_check=validators.not_whitespace('thing_type_value_xpath'))
    thing_type_display_xpath: str | None = NodeStringProperty(
        'thing-type-display-xpath', is_optional=True,
        value_check=validators.not_whitespace('thing_type_display_xpath'))
    _props = ('thing_type_version_id', 'thing_type_value_xpath', 'thing_type_display_xpath')

    def __init__(self, thing_type_version_id: uuid.UUID | None = None):
        super().__init__()
        if thing_type_version_id is not None:
            self.thing_type_version_id = thing_type_version_id

    def update_from_node(self, node):
        super().update_from_node(node)
        if self.thing_type_version_id.int == 0:
            raise XmlParseError(f'thing-type-version-id in {node.tag} must not be the nil uuid')


class CarePlanTaskRecurrence(XMLTypeBase):
    """How often a task repeats, as iCalendar rule or as a count per interval."""

    ical_recurrence: str | None = NodeStringProperty('ical-recurrence', is_optional=True,
                                                     value_check=validators.not_whitespace('ical_recurrence'))
    interval: CodableValue | None = SubElementWithContentProperty('interval', value_class=CodableValue)
    times_in_interval: int | None = NodeIntProperty('times-in-interval', is_optional=True,
                                                    value_check=validators.in_range('times_in_interval', lower=1))
    _props = ('ical_recurrence', 'interval', 'times_in_interval')


def validate_task_dates(start_date: ApproximateDateTime | None, end_date: ApproximateDateTime | None):
    """Raise ValueError if start_date is after end_date.

    The dates are only compared if both are structured, a descriptive date can not be ordered.
    """
    if start_date is None or end_date is None:
        return
    if not (start_date.is_structured() and end_date.is_structured()):
        _logger.debug('date order of care plan task not checked, start={} end={}', start_date, end_date)
        return
    if start_date.compare_to(end_date) > 0:
        raise ValueError(f'start date {start_date} of task is after end date {end_date}')


class CarePlanTask(XMLTypeBase):
    NODE_NAME = 'task'
    name: CodableValue = SubElementProperty('name', value_class=CodableValue)
    description: str | None = NodeStringProperty('description', is_optional=True,
                                                 value_check=validators.not_whitespace('description'))
    _start_date = SubElementProperty('start-date', value_class=ApproximateDateTime, is_optional=True)
    _end_date = SubElementProperty('end-date', value_class=ApproximateDateTime, is_optional=True)
    target_completion_date: ApproximateDateTime | None = SubElementProperty('target-completion-date',
                                                                            value_class=ApproximateDateTime,
                                                                            is_optional=True)
    sequence_number: int | None = NodeIntProperty('sequence-number', is_optional=True,
                                                  value_check=validators.non_negative('sequence_number'))
    associated_type_info: AssociatedTypeInfo | None = SubElementProperty('associated-type-info',
                                                                         value_class=AssociatedTypeInfo,
                                                                         is_optional=True)
    recurrence: CarePlanTaskRecurrence | None = SubElementProperty('recurrence', value_class=CarePlanTaskRecurrence,
                                                                   is_optional=True)
    reference_id: str | None = NodeStringProperty('reference-id', is_optional=True,
                                                  value_check=validators.not_whitespace('reference_id'))
    _props = ('name', 'description', '_start_date', '_end_date', 'target_completion_date', 'sequence_number',
              'associated_type_info', 'recurrence', 'reference_id')

    def __init__(self, name: CodableValue | None = None):
        super().__init__()
        self.name = name

    @property
    def start_date(self) -> ApproximateDateTime | None:
        return self._start_date

    @start_date.setter
    def start_date(self, value: ApproximateDateTime | None):
        validate_task_dates(value, self._end_date)
        self._start_date = value

    @property
    def end_date(self) -> ApproximateDateTime | None:
        return self._end_date

    @end_date.setter
    def end_date(self, value: ApproximateDateTime | None):
        validate_task_dates(self._start_date, value)
        self._end_date = value

    def write_xml(self, node_name: str = NODE_NAME):
        return super().write_xml(node_name)

    def __str__(self):
        return str(self.name) if self.name is not None else ''
