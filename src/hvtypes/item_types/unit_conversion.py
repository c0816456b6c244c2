"""Affine conversion between a display unit and a base unit."""
from __future__ import annotations

from hvtypes.exceptions import OutOfRangeError
from hvtypes.xml_types.basetypes import XMLTypeBase
from hvtypes.xml_types.xml_structure import NodeDoubleProperty


class UnitConversion(XMLTypeBase):
    """convert(v) = v * multiplier + offset, terms that are not set are not applied."""

    NODE_NAME = 'unit-conversion'
    multiplier: float | None = NodeDoubleProperty('multiplier', is_optional=True)
    offset: float | None = NodeDoubleProperty('offset', is_optional=True)
    _props = ('multiplier', 'offset')

    def __init__(self, multiplier: float | None = None, offset: float | None = None):
        super().__init__()
        self.multiplier = multiplier
        self.offset = offset

    def convert(self, value: float) -> float:
        result = value
        if self.multiplier is not None:
            result = result * self.multiplier
        if self.offset is not None:
            result = result + self.offset
        return result

    def reverse_convert(self, value: float) -> float:
        """Inverse of convert: first the offset is subtracted, then the result is divided by the multiplier."""
        result = value
        if self.offset is not None:
            result = result - self.offset
        if self.multiplier is not None:
            if self.multiplier == 0:
                raise OutOfRangeError('multiplier', self.multiplier, 'reverse conversion needs a multiplier != 0')
            result = result / self.multiplier
        return result

    def write_xml(self, node_name: str = NODE_NAME):
        return super().write_xml(node_name)
