"""Entry — one output property and the ordered maps that can produce it."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from psetmap.models.host import BuiltInParameter, LanguageType
from psetmap.properties.entry_map import EntryMap


class Entry(BaseModel):
    """Base class for property, quantity and predefined entries.

    Maps are tried in order; the first one that yields a value wins.
    Single-map conveniences (calculator, localized names, parameter
    name) act on the first map.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    property_name: str
    is_element_type_property: bool = False
    maps: list[Any] = Field(default_factory=list)

    @classmethod
    def map_class(cls) -> type[EntryMap]:
        return EntryMap

    def _first_map(self) -> EntryMap:
        if not self.maps:
            self.maps.append(self.map_class()())
        return self.maps[0]

    @property
    def calculator(self) -> Any:
        return self.maps[0].calculator if self.maps else None

    def set_calculator(self, calculator: Any) -> None:
        self._first_map().calculator = calculator

    def add_localized_parameter_name(self, language: LanguageType, name: str) -> None:
        self._first_map().add_localized_parameter_name(language, name)

    def add_entry(self, entry_map: EntryMap) -> None:
        entry_map.update_entry()
        self.maps.append(entry_map)

    def update_entry(self) -> None:
        for entry_map in self.maps:
            entry_map.update_entry()

    def set_parameter_name(self, name: str) -> None:
        self._first_map().parameter_name = name
        self.update_entry()

    def set_builtin_parameter(self, builtin: BuiltInParameter | None) -> None:
        self._first_map().builtin = builtin
        self.update_entry()
