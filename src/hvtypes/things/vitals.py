"""Thing types for vital signs and body measurements."""
from __future__ import annotations

import enum
import uuid

from hvtypes import validators
from hvtypes.item_types.approximate import ApproximateDateTime
from hvtypes.item_types.codable import CodableValue
from hvtypes.item_types.dates import HealthServiceDateTime
from hvtypes.item_types.measurements import (
    BloodGlucoseMeasurement,
    FlowMeasurement,
    Length,
    VolumeMeasurement,
    WeightValue,
)
from hvtypes.xml_types.xml_structure import (
    NodeBooleanProperty,
    NodeEnumTextProperty,
    NodeIntProperty,
    SubElementListProperty,
    SubElementProperty,
    SubElementWithContentProperty,
)

from .thing_base import ThingBase


class _WhenMixin:
    """Thing types with a mandatory "when" element that defaults to now."""

    def _init_when(self, when: HealthServiceDateTime | None):
        self.when = HealthServiceDateTime.now() if when is None else when


class Weight(_WhenMixin, ThingBase):
    TYPE_ID = uuid.UUID('3d34d87e-7fc1-4153-800f-f56592cb0d17')
    ROOT_TAG = 'weight'
    when: HealthServiceDateTime = SubElementProperty('when', value_class=HealthServiceDateTime)
    value: WeightValue = SubElementProperty('value', value_class=WeightValue)
    _props = ('when', 'value')

    def __init__(self, when: HealthServiceDateTime | None = None, value: WeightValue | None = None):
        super().__init__()
        self._init_when(when)
        self.value = value

    def __str__(self):
        return str(self.value) if self.value is not None else ''


class Height(_WhenMixin, ThingBase):
    TYPE_ID = uuid.UUID('40750a6a-89b2-455c-bd8d-b420a4cb500b')
    ROOT_TAG = 'height'
    when: HealthServiceDateTime = SubElementProperty('when', value_class=HealthServiceDateTime)
    value: Length = SubElementProperty('value', value_class=Length)
    _props = ('when', 'value')

    def __init__(self, when: HealthServiceDateTime | None = None, value: Length | None = None):
        super().__init__()
        self._init_when(when)
        self.value = value

    def __str__(self):
        return str(self.value) if self.value is not None else ''


class BloodPressure(_WhenMixin, ThingBase):
    TYPE_ID = uuid.UUID('ca3c57f4-f4c1-4e15-be67-0a3caf5414ed')
    ROOT_TAG = 'blood-pressure'
    when: HealthServiceDateTime = SubElementProperty('when', value_class=HealthServiceDateTime)
    systolic: int = NodeIntProperty('systolic', value_check=validators.non_negative('systolic', allow_none=False))
    diastolic: int = NodeIntProperty('diastolic', value_check=validators.non_negative('diastolic', allow_none=False))
    pulse: int | None = NodeIntProperty('pulse', is_optional=True, value_check=validators.non_negative('pulse'))
    irregular_heartbeat_detected: bool | None = NodeBooleanProperty('irregular-heartbeat', is_optional=True)
    _props = ('when', 'systolic', 'diastolic', 'pulse', 'irregular_heartbeat_detected')

    def __init__(self, when: HealthServiceDateTime | None = None,
                 systolic: int | None = None,
                 diastolic: int | None = None):
        super().__init__()
        self._init_when(when)
        if systolic is not None:
            self.systolic = systolic
        if diastolic is not None:
            self.diastolic = diastolic

    def __str__(self):
        return f'{self.systolic}/{self.diastolic}'


class HeartRate(_WhenMixin, ThingBase):
    TYPE_ID = uuid.UUID('b81eb4a6-6eac-4292-ae93-3872d6870994')
    ROOT_TAG = 'heart-rate'
    when: HealthServiceDateTime = SubElementProperty('when', value_class=HealthServiceDateTime)
    value: int = NodeIntProperty('value', value_check=validators.non_negative('value', allow_none=False))
    measurement_method: CodableValue | None = SubElementWithContentProperty('measurement-method',
                                                                           value_class=CodableValue)
    measurement_conditions: CodableValue | None = SubElementWithContentProperty('measurement-conditions',
                                                                               value_class=CodableValue)
    measurement_flags: CodableValue | None = SubElementWithContentProperty('measurement-flags',
                                                                          value_class=CodableValue)
    _props = ('when', 'value', 'measurement_method', 'measurement_conditions', 'measurement_flags')

    def __init__(self, when: HealthServiceDateTime | None = None, value: int | None = None):
        super().__init__()
        self._init_when(when)
        if value is not None:
            self.value = value

    def __str__(self):
        return f'{self.value} bpm'


class Normalcy(enum.IntEnum):
    """How a blood glucose reading compares to the normal range. UNKNOWN is never written."""

    UNKNOWN = 0
    WELL_BELOW_NORMAL = 1
    BELOW_NORMAL = 2
    NORMAL = 3
    ABOVE_NORMAL = 4
    WELL_ABOVE_NORMAL = 5


class BloodGlucose(_WhenMixin, ThingBase):
    TYPE_ID = uuid.UUID('879e7c04-4e8a-4707-9ad3-b054df467ce4')
    ROOT_TAG = 'blood-glucose'
    when: HealthServiceDateTime = SubElementProperty('when', value_class=HealthServiceDateTime)
    value: BloodGlucoseMeasurement = SubElementProperty('value', value_class=BloodGlucoseMeasurement)
    glucose_measurement_type: CodableValue = SubElementProperty('glucose-measurement-type',
                                                                value_class=CodableValue)
    outside_operating_temperature: bool | None = NodeBooleanProperty('outside-operating-temp', is_optional=True)
    is_control_test: bool | None = NodeBooleanProperty('is-control-test', is_optional=True)
    normalcy: Normalcy | None = NodeEnumTextProperty('normalcy', Normalcy, is_optional=True,
                                                     unknown_value=Normalcy.UNKNOWN)
    measurement_context: CodableValue | None = SubElementWithContentProperty('measurement-context',
                                                                            value_class=CodableValue)
    _props = ('when', 'value', 'glucose_measurement_type', 'outside_operating_temperature', 'is_control_test',
              'normalcy', 'measurement_context')

    def __init__(self, when: HealthServiceDateTime | None = None,
                 value: BloodGlucoseMeasurement | None = None,
                 glucose_measurement_type: CodableValue | None = None):
        super().__init__()
        self._init_when(when)
        self.value = value
        self.glucose_measurement_type = glucose_measurement_type

    def __str__(self):
        return str(self.value) if self.value is not None else ''


class PeakFlow(ThingBase):
    TYPE_ID = uuid.UUID('5d8419af-90f0-4875-a370-0f881c18f6b3')
    ROOT_TAG = 'peak-flow'
    when: ApproximateDateTime = SubElementProperty('when', value_class=ApproximateDateTime)
    peak_expiratory_flow: FlowMeasurement | None = SubElementProperty('pef', value_class=FlowMeasurement,
                                                                      is_optional=True)
    forced_expiratory_volume1: VolumeMeasurement | None = SubElementProperty('fev1', value_class=VolumeMeasurement,
                                                                             is_optional=True)
    forced_expiratory_volume6: VolumeMeasurement | None = SubElementProperty('fev6', value_class=VolumeMeasurement,
                                                                             is_optional=True)
    measurement_flags: list[CodableValue] = SubElementListProperty('measurement-flags', value_class=CodableValue)
    _props = ('when', 'peak_expiratory_flow', 'forced_expiratory_volume1', 'forced_expiratory_volume6',
              'measurement_flags')

    def __init__(self, when: ApproximateDateTime | None = None):
        super().__init__()
        self.when = when

    def __str__(self):
        return str(self.peak_expiratory_flow) if self.peak_expiratory_flow is not None else ''


class BodyDimension(ThingBase):
    TYPE_ID = uuid.UUID('dd710b31-2b6f-45bd-9552-253562b9a7c1')
    ROOT_TAG = 'body-dimension'
    when: ApproximateDateTime = SubElementProperty('when', value_class=ApproximateDateTime)
    measurement_name: CodableValue = SubElementProperty('measurement-name', value_class=CodableValue)
    value: Length = SubElementProperty('value', value_class=Length)
    _props = ('when', 'measurement_name', 'value')

    def __init__(self, when: ApproximateDateTime | None = None,
                 measurement_name: CodableValue | None = None,
                 value: Length | None = None):
        super().__init__()
        self.when = when
        self.measurement_name = measurement_name
        self.value = value

    def __str__(self):
        return f'{self.measurement_name} {self.value}'
