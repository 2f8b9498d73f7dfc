"""Minimal host object model: elements, element types and their parameters.

This is not a CAD API.  It carries just enough of the host application's
parameter model for property resolution: lookup by name, lookup by
built-in id, and the element -> type link.  Values are stored in host
internal units (feet, square feet, cubic feet, radians).
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr


class StorageType(str, Enum):
    """How a parameter value is stored on the host."""

    NONE = "none"
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    ELEMENT_ID = "element_id"


class SpecType(str, Enum):
    """Unit category (data type) of a parameter."""

    NUMBER = "number"
    YES_NO = "yes_no"
    TEXT = "text"
    LENGTH = "length"
    AREA = "area"
    VOLUME = "volume"
    ANGLE = "angle"
    SLOPE = "slope"
    CURRENCY = "currency"
    COLOR_TEMPERATURE = "color_temperature"
    ELECTRICAL_EFFICACY = "electrical_efficacy"
    ELECTRICAL_POTENTIAL = "electrical_potential"
    ELECTRICAL_CURRENT = "electrical_current"
    ELECTRICAL_FREQUENCY = "electrical_frequency"
    ELECTRICAL_POWER = "electrical_power"
    ILLUMINANCE = "illuminance"
    LUMINOUS_FLUX = "luminous_flux"
    LUMINOUS_INTENSITY = "luminous_intensity"
    TEMPERATURE = "temperature"
    FORCE = "force"
    PRESSURE = "pressure"
    AIR_FLOW = "air_flow"
    MASS_DENSITY = "mass_density"
    INVALID = "invalid"


class BuiltInParameter(str, Enum):
    """Well-known host parameter ids referenced by the mapping layer."""

    ALL_MODEL_MANUFACTURER = "ALL_MODEL_MANUFACTURER"
    ALL_MODEL_MODEL = "ALL_MODEL_MODEL"
    ALL_MODEL_DESCRIPTION = "ALL_MODEL_DESCRIPTION"
    ALL_MODEL_TYPE_MARK = "ALL_MODEL_TYPE_MARK"
    CEILING_THICKNESS = "CEILING_THICKNESS"
    LIGHTING_FIXTURE_WATTAGE = "LIGHTING_FIXTURE_WATTAGE"
    HOST_AREA_COMPUTED = "HOST_AREA_COMPUTED"
    HOST_VOLUME_COMPUTED = "HOST_VOLUME_COMPUTED"
    INSTANCE_LENGTH_PARAM = "INSTANCE_LENGTH_PARAM"
    ROOM_FINISH_CEILING = "ROOM_FINISH_CEILING"
    ROOM_FINISH_WALL = "ROOM_FINISH_WALL"
    ROOM_FINISH_FLOOR = "ROOM_FINISH_FLOOR"
    FIRE_RATING = "FIRE_RATING"
    ANALYTICAL_HEAT_TRANSFER_COEFFICIENT = "ANALYTICAL_HEAT_TRANSFER_COEFFICIENT"
    DOOR_HEIGHT = "DOOR_HEIGHT"
    DOOR_WIDTH = "DOOR_WIDTH"
    WINDOW_HEIGHT = "WINDOW_HEIGHT"
    WINDOW_WIDTH = "WINDOW_WIDTH"
    FLOOR_PARAM_IS_STRUCTURAL = "FLOOR_PARAM_IS_STRUCTURAL"
    WALL_STRUCTURAL_USAGE_PARAM = "WALL_STRUCTURAL_USAGE_PARAM"
    STRUCTURAL_BEAM_END0_ELEVATION = "STRUCTURAL_BEAM_END0_ELEVATION"
    STRUCTURAL_BEAM_END1_ELEVATION = "STRUCTURAL_BEAM_END1_ELEVATION"
    RAMP_ATTR_MIN_INV_SLOPE = "RAMP_ATTR_MIN_INV_SLOPE"

    @classmethod
    def parse(cls, name: str) -> BuiltInParameter | None:
        """Return the member called *name*, or None when unknown."""
        try:
            return cls[name.strip()]
        except KeyError:
            return None


class LanguageType(str, Enum):
    """Locales for which localized parameter names can be registered."""

    ENGLISH_USA = "ENGLISH_USA"
    ENGLISH_GB = "ENGLISH_GB"
    GERMAN = "GERMAN"
    FRENCH = "FRENCH"
    ITALIAN = "ITALIAN"
    SPANISH = "SPANISH"
    DUTCH = "DUTCH"
    JAPANESE = "JAPANESE"
    CHINESE_SIMPLIFIED = "CHINESE_SIMPLIFIED"


class Parameter(BaseModel):
    """A single named parameter on a host element."""

    name: str
    storage: StorageType = StorageType.STRING
    spec: SpecType = SpecType.TEXT
    value: Any = None
    display_value: str | None = None
    builtin: BuiltInParameter | None = None

    @property
    def has_value(self) -> bool:
        return self.value is not None

    def as_double(self) -> float | None:
        if not self.has_value or self.storage not in (StorageType.DOUBLE, StorageType.INTEGER):
            return None
        try:
            return float(self.value)
        except (TypeError, ValueError):
            return None

    def as_integer(self) -> int | None:
        if not self.has_value or self.storage != StorageType.INTEGER:
            return None
        try:
            return int(self.value)
        except (TypeError, ValueError):
            return None

    def as_string(self) -> str | None:
        """String form of the value; element ids use their display value."""
        if not self.has_value:
            return None
        if self.storage == StorageType.ELEMENT_ID:
            return self.display_value
        if self.storage == StorageType.STRING:
            return str(self.value)
        if self.display_value is not None:
            return self.display_value
        return str(self.value)


class HostElement(BaseModel):
    """A host element or element type with its parameters."""

    id: int
    name: str = ""
    category: str = ""
    global_id: str | None = None
    is_type: bool = False
    family_name: str = ""
    parameters: list[Parameter] = Field(default_factory=list)
    type_element: HostElement | None = None

    _by_name: dict[str, Parameter] = PrivateAttr(default_factory=dict)
    _by_builtin: dict[BuiltInParameter, Parameter] = PrivateAttr(default_factory=dict)

    def model_post_init(self, context: Any, /) -> None:
        for param in self.parameters:
            self._index(param)

    def _index(self, param: Parameter) -> None:
        self._by_name.setdefault(param.name, param)
        if param.builtin is not None:
            self._by_builtin.setdefault(param.builtin, param)

    def add_parameter(self, param: Parameter) -> Parameter:
        self.parameters.append(param)
        self._index(param)
        return param

    def get_parameter(self, name: str | None) -> Parameter | None:
        if not name:
            return None
        return self._by_name.get(name)

    def get_builtin_parameter(self, builtin: BuiltInParameter | None) -> Parameter | None:
        if builtin is None:
            return None
        return self._by_builtin.get(builtin)

    def _candidates(
        self,
        names: tuple[str | None, ...],
        builtin: BuiltInParameter | None,
        include_type: bool,
    ) -> Iterator[Parameter]:
        for candidate in (self, self.type_element if include_type else None):
            if candidate is None:
                continue
            for name in names:
                param = candidate.get_parameter(name)
                if param is not None and param.has_value:
                    yield param
            param = candidate.get_builtin_parameter(builtin)
            if param is not None and param.has_value:
                yield param

    def lookup(
        self,
        *names: str | None,
        builtin: BuiltInParameter | None = None,
        include_type: bool = True,
    ) -> Parameter | None:
        """Find a parameter with a value on this element or its type.

        Names are tried in order, then *builtin*; the same sequence is then
        repeated on the element type when *include_type* is set.
        """
        return next(self._candidates(names, builtin, include_type), None)

    def _lookup_as(self, convert, names, builtin):
        # Keep walking when a candidate's storage does not convert
        for param in self._candidates(names, builtin, True):
            value = convert(param)
            if value is not None:
                return value
        return None

    def lookup_double(self, *names: str | None, builtin: BuiltInParameter | None = None) -> float | None:
        return self._lookup_as(Parameter.as_double, names, builtin)

    def lookup_string(self, *names: str | None, builtin: BuiltInParameter | None = None) -> str | None:
        return self._lookup_as(Parameter.as_string, names, builtin)

    def lookup_integer(self, *names: str | None, builtin: BuiltInParameter | None = None) -> int | None:
        return self._lookup_as(Parameter.as_integer, names, builtin)


HostElement.model_rebuild()
