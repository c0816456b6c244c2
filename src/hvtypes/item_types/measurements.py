"""Measurements: a canonical value in a fixed base unit plus an optional display value.

Each concrete measurement only declares the element of its base unit, the python type and the bound check.
"""
from __future__ import annotations

from typing import Generic, TypeVar

from hvtypes import validators
from hvtypes.xml_types.basetypes import XMLTypeBase
from hvtypes.xml_types.xml_structure import NodeDoubleProperty, SubElementProperty

from .display_value import DisplayValue, format_number

T = TypeVar('T')


class Measurement(XMLTypeBase, Generic[T]):
    """Base class of all measurements.

    Derived classes declare the property "value" and add it in front of "display" in _props.
    """
    UNIT_LABEL = ''
    display: DisplayValue | None = SubElementProperty('display', value_class=DisplayValue, is_optional=True)
    _props = ()

    def __init__(self, value: T | None = None, display: DisplayValue | None = None):
        super().__init__()
        if value is not None:
            self.value = value
        self.display = display

    def get_value_string(self) -> str:
        """Return the value formatted for the current locale, followed by the unit."""
        value = self.value
        if value is None:
            return ''
        result = format_number(value)
        if self.UNIT_LABEL:
            result = f'{result} {self.UNIT_LABEL}'
        return result

    def __str__(self):
        if self.display is not None:
            return str(self.display)
        return self.get_value_string()


class Length(Measurement[float]):
    UNIT_LABEL = 'm'
    value: float = NodeDoubleProperty('m', value_check=validators.non_negative('meters', allow_none=False))
    _props = ('value', 'display')


class WeightValue(Measurement[float]):
    UNIT_LABEL = 'kg'
    value: float = NodeDoubleProperty('kg', value_check=validators.non_negative('kilograms', allow_none=False))
    _props = ('value', 'display')


class TemperatureMeasurement(Measurement[float]):
    UNIT_LABEL = '°C'
    value: float = NodeDoubleProperty('celsius',
                                      value_check=validators.in_range('celsius', lower=0,
                                                                      lower_inclusive=False, allow_none=False))
    _props = ('value', 'display')


class FlowMeasurement(Measurement[float]):
    UNIT_LABEL = 'L/s'
    value: float = NodeDoubleProperty('liters-per-second',
                                      value_check=validators.in_range('liters_per_second', lower=0,
                                                                      lower_inclusive=False, allow_none=False))
    _props = ('value', 'display')


class VolumeMeasurement(Measurement[float]):
    UNIT_LABEL = 'L'
    value: float = NodeDoubleProperty('liters', value_check=validators.non_negative('liters', allow_none=False))
    _props = ('value', 'display')


class ConcentrationMeasurement(Measurement[float]):
    UNIT_LABEL = 'mmol/L'
    value: float = NodeDoubleProperty('mmolPerL', value_check=validators.non_negative('mmol_per_l', allow_none=False))
    _props = ('value', 'display')


class BloodGlucoseMeasurement(Measurement[float]):
    UNIT_LABEL = 'mmol/L'
    value: float = NodeDoubleProperty('mmolPerL', value_check=validators.non_negative('mmol_per_l', allow_none=False))
    _props = ('value', 'display')


class PressureMeasurement(Measurement[float]):
    UNIT_LABEL = 'kPa'
    value: float = NodeDoubleProperty('kPa', value_check=validators.non_negative('kilopascals', allow_none=False))
    _props = ('value', 'display')


class SpeedMeasurement(Measurement[float]):
    UNIT_LABEL = 'm/s'
    value: float = NodeDoubleProperty('meters-per-second',
                                      value_check=validators.non_negative('meters_per_second', allow_none=False))
    _props = ('value', 'display')


class PowerMeasurement(Measurement[float]):
    UNIT_LABEL = 'W'
    value: float = NodeDoubleProperty('watts', value_check=validators.non_negative('watts', allow_none=False))
    _props = ('value', 'display')
