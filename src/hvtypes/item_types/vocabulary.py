"""Plain data shapes of vocabulary keys and items.

Lookup of vocabularies is done by the remote service, these classes only carry the result.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass()
class VocabularyKey:
    """Identifies a vocabulary, optionally a single code in it."""

    name: str
    family: str | None = None
    version: str | None = None
    code_value: str | None = None
    description: str = ''

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError('name must not be None, empty or whitespace')

    def __str__(self):
        return ', '.join(v for v in (self.family, self.name, self.version, self.code_value) if v)


@dataclass()
class VocabularyItem:
    """One code of a vocabulary with its display texts."""

    value: str
    vocabulary_name: str
    family: str | None = None
    version: str | None = None
    display_text: str = ''
    abbreviation_text: str = ''

    def __str__(self):
        return self.display_text or self.value
