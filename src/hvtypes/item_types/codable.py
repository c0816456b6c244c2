"""Coded and codable values.

A CodedValue is one code of a vocabulary. A CodableValue is a human readable text
that is optionally backed by any number of codes.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from hvtypes import validators
from hvtypes.xml_types.basetypes import XMLTypeBase
from hvtypes.xml_types.xml_structure import NodeStringProperty, SubElementListProperty

if TYPE_CHECKING:
    from .vocabulary import VocabularyItem, VocabularyKey


class CodedValue(XMLTypeBase):
    value: str = NodeStringProperty('value', value_check=validators.not_blank('value'))
    family: str | None = NodeStringProperty('family', is_optional=True,
                                            value_check=validators.not_whitespace('family'))
    vocabulary_name: str = NodeStringProperty('type', value_check=validators.not_blank('vocabulary_name'))
    version: str | None = NodeStringProperty('version', is_optional=True,
                                             value_check=validators.not_whitespace('version'))
    _props = ('value', 'family', 'vocabulary_name', 'version')

    def __init__(self, value: str | None = None,
                 vocabulary_name: str | None = None,
                 family: str | None = None,
                 version: str | None = None):
        super().__init__()
        if value is not None:
            self.value = value
        if vocabulary_name is not None:
            self.vocabulary_name = vocabulary_name
        self.family = family
        self.version = version

    @classmethod
    def from_vocabulary_item(cls, item: VocabularyItem) -> CodedValue:
        return cls(item.value, item.vocabulary_name, item.family, item.version)

    def __str__(self):
        return ', '.join(v for v in (self.family, self.vocabulary_name, self.version, self.value) if v)


class CodableValue(XMLTypeBase):
    """Text with optional codes. Behaves like a list of CodedValue."""

    text: str | None = NodeStringProperty('text', is_optional=True, value_check=validators.not_empty('text'))
    codes: list[CodedValue] = SubElementListProperty('code', value_class=CodedValue)
    _props = ('text', 'codes')

    def __init__(self, text: str | None = None, code: CodedValue | None = None):
        super().__init__()
        self.text = text
        if code is not None:
            self.codes.append(code)

    @classmethod
    def from_vocabulary_key(cls, text: str, code: str, key: VocabularyKey) -> CodableValue:
        """Create a value with one code of the vocabulary that is identified by key."""
        return cls(text, CodedValue(code, key.name, key.family, key.version))

    @classmethod
    def from_vocabulary_item(cls, item: VocabularyItem, text: str | None = None) -> CodableValue:
        """Create a value from a vocabulary item, text defaults to the display text of the item."""
        obj = cls(text)
        obj.add_vocabulary_item(item)
        return obj

    def add_vocabulary_item(self, item: VocabularyItem):
        self.codes.append(CodedValue.from_vocabulary_item(item))
        if not self.text and item.display_text:
            self.text = item.display_text

    def is_empty(self) -> bool:
        return not self.text and len(self.codes) == 0

    def append(self, code: CodedValue):
        self.codes.append(code)

    def insert(self, index: int, code: CodedValue):
        self.codes.insert(index, code)

    def remove(self, code: CodedValue):
        self.codes.remove(code)

    def clear(self):
        """Remove all codes and the text."""
        self.codes.clear()
        self.text = None

    def __len__(self):
        return len(self.codes)

    def __iter__(self) -> Iterator[CodedValue]:
        return iter(self.codes)

    def __getitem__(self, index: int) -> CodedValue:
        return self.codes[index]

    def __contains__(self, code: CodedValue) -> bool:
        return code in self.codes

    def __bool__(self):
        return not self.is_empty()

    def __str__(self):
        return self.text or ''
