"""PropertyInfoCache — reuse property entities across elements.

Only values that fall on a coarse grid are cached: a wall 3.0 m high
shares its ``Height`` property with every other 3.0 m wall, while a
3.137 m wall gets its own.  Each numeric kind has its own grid.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable

import ifcopenshell

from psetmap.properties.types import PropertyType, PropertyValueType

logger = logging.getLogger(__name__)

_TOLERANCE = 1e-6


def _on_grid(value: float, step: float) -> float | None:
    """Return *value* snapped to a multiple of *step*, or None if it is off-grid."""
    steps = value / step
    nearest = round(steps)
    if abs(steps - nearest) > _TOLERANCE:
        return None
    return round(nearest * step, 6)


def _real_key(value: float) -> float | None:
    if abs(value) < _TOLERANCE:
        return 0.0
    if 0.0 < value <= 10.0:
        return _on_grid(value, 0.5)
    return None


def _length_key(value: float) -> float | None:
    size = abs(value)
    if size <= 10.0:
        snapped = _on_grid(size, 0.5)
    elif size <= 10000.0:
        snapped = _on_grid(size, 50.0)
    else:
        return None
    if snapped is None:
        return None
    return -snapped if value < 0 else snapped


def _angle_key(value: float) -> float | None:
    return _on_grid(value, 15.0)


def _voltage_key(value: float) -> float | None:
    return _on_grid(value, 5.0)


def _frequency_key(value: float) -> float | None:
    if not 0.0 <= value <= 1000.0:
        return None
    return _on_grid(value, 1.0)


def _power_key(value: float) -> float | None:
    if not 0.0 <= value <= 300.0:
        return None
    return _on_grid(value, 5.0)


def _temperature_key(value: float) -> float | None:
    return _on_grid(value, 0.5)


def _transmittance_key(value: float) -> float | None:
    if not 0.0 <= value <= 6.0:
        return None
    return _on_grid(value, 0.05)


ROUNDING: dict[PropertyType, Callable[[float], float | None]] = {
    PropertyType.REAL: _real_key,
    PropertyType.LENGTH: _length_key,
    PropertyType.POSITIVE_LENGTH: _length_key,
    PropertyType.PLANE_ANGLE: _angle_key,
    PropertyType.POSITIVE_PLANE_ANGLE: _angle_key,
    PropertyType.ELECTRIC_VOLTAGE: _voltage_key,
    PropertyType.FREQUENCY: _frequency_key,
    PropertyType.POWER: _power_key,
    PropertyType.THERMODYNAMIC_TEMPERATURE: _temperature_key,
    PropertyType.THERMAL_TRANSMITTANCE: _transmittance_key,
}

# Kinds whose values are always cached as-is
_ALWAYS_CACHED = frozenset({PropertyType.BOOLEAN, PropertyType.LOGICAL, PropertyType.IDENTIFIER})

# Integers are only cached on this closed range
_INTEGER_RANGE = (-10, 10)

_STRING_TYPES = frozenset({PropertyType.LABEL, PropertyType.TEXT, PropertyType.IDENTIFIER})


class PropertyInfoCache:
    """Per-export map from (kind, name, value type, rounded value) to a property entity."""

    def __init__(self) -> None:
        self._entries: dict[Hashable, ifcopenshell.entity_instance] = {}
        self.hits = 0

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def key_for(
        property_type: PropertyType,
        name: str,
        value_type: PropertyValueType,
        value: Any,
        *,
        unscaled: float | None = None,
        cache_strings: bool = False,
    ) -> tuple | None:
        """Cache key for a value, or None when the value is not cacheable.

        Lengths read from the host are put on the grid by their *unscaled*
        host value and keyed apart from lengths that were calculated.
        """
        if property_type in _ALWAYS_CACHED:
            return (property_type.value, name, value_type.value, value)
        if property_type in _STRING_TYPES:
            if value == "" or cache_strings:
                return (property_type.value, name, value_type.value, value)
            return None
        if property_type == PropertyType.INTEGER:
            low, high = _INTEGER_RANGE
            if isinstance(value, int) and low <= value <= high:
                return (property_type.value, name, value_type.value, value)
            return None
        policy = ROUNDING.get(property_type)
        if policy is None:
            return None
        source = "calc"
        if policy is _length_key and unscaled is not None:
            value, source = unscaled, "host"
        try:
            rounded = policy(float(value))
        except (TypeError, ValueError):
            return None
        if rounded is None:
            return None
        return (property_type.value, name, value_type.value, rounded, source)

    def find(self, key: Hashable | None) -> ifcopenshell.entity_instance | None:
        if key is None:
            return None
        found = self._entries.get(key)
        if found is not None:
            self.hits += 1
        return found

    def add(self, key: Hashable | None, prop: ifcopenshell.entity_instance | None) -> None:
        if key is None or prop is None:
            return
        self._entries[key] = prop
        logger.debug("Cached property %s for key %s", prop.Name, key)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
