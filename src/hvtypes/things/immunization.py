from __future__ import annotations

import uuid

from hvtypes import validators
from hvtypes.item_types.approximate import ApproximateDate, ApproximateDateTime
from hvtypes.item_types.codable import CodableValue
from hvtypes.xml_types.xml_structure import NodeStringProperty, SubElementProperty, SubElementWithContentProperty

from .thing_base import ThingBase


class Immunization(ThingBase):
    """A vaccine that was administered."""

    TYPE_ID = uuid.UUID('cd3587b5-b6e1-4565-ab3b-1c3ad45eb04f')
    ROOT_TAG = 'immunization'
    name: CodableValue = SubElementProperty('name', value_class=CodableValue)
    date_administrated: ApproximateDateTime | None = SubElementProperty('administration-date',
                                                                        value_class=ApproximateDateTime,
                                                                        is_optional=True)
    manufacturer: CodableValue | None = SubElementWithContentProperty('manufacturer', value_class=CodableValue)
    lot: str | None = NodeStringProperty('lot', is_optional=True, value_check=validators.not_whitespace('lot'))
    route: CodableValue | None = SubElementWithContentProperty('route', value_class=CodableValue)
    expiration_date: ApproximateDate | None = SubElementProperty('expiration-date', value_class=ApproximateDate,
                                                                 is_optional=True)
    sequence: str | None = NodeStringProperty('sequence', is_optional=True,
                                              value_check=validators.not_whitespace('sequence'))
    anatomic_surface: CodableValue | None = SubElementWithContentProperty('anatomic-surface',
                                                                         value_class=CodableValue)
    adverse_event: str | None = NodeStringProperty('adverse-event', is_optional=True,
                                                   value_check=validators.not_whitespace('adverse_event'))
    consent: str | None = NodeStringProperty('consent', is_optional=True,
                                             value_check=validators.not_whitespace('consent'))
    _props = ('name', 'date_administrated', 'manufacturer', 'lot', 'route', 'expiration_date', 'sequence',
              'anatomic_surface', 'adverse_event', 'consent')

    def __init__(self, name: CodableValue | None = None):
        super().__init__()
        self.name = name

    def __str__(self):
        return str(self.name) if self.name is not None else ''
