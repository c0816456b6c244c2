"""The value and unit as a user entered it."""
from __future__ import annotations

import locale

from hvtypes import validators
from hvtypes.xml_types.basetypes import XMLTypeBase
from hvtypes.xml_types.xml_structure import NodeDoubleProperty, StringAttributeProperty


def format_number(value: float) -> str:
    """Format value for display with the conventions of the current locale."""
    return locale.format_string('%.12g', value, grouping=True)


class DisplayValue(XMLTypeBase):
    """Display form of a measurement: <display units=".." units-code=".." text="..">number</display>.

    It is purely descriptive, the canonical value of a measurement is stored separately.
    """

    value: float = NodeDoubleProperty(None, default_py_value=0.0)  # the text of the node
    units: str = StringAttributeProperty('units', is_optional=False)
    units_code: str | None = StringAttributeProperty('units-code')
    text: str | None = StringAttributeProperty('text', value_check=validators.not_empty('text'))
    _props = ('value', 'units', 'units_code', 'text')

    def __init__(self, value: float = 0.0,
                 units: str | None = None,
                 units_code: str | None = None,
                 text: str | None = None):
        super().__init__()
        self.value = value
        self.units = units
        self.units_code = units_code
        self.text = text

    def __str__(self):
        if self.text is not None:
            return self.text
        result = format_number(self.value)
        if self.units:
            result = f'{result} {self.units}'
        return result
