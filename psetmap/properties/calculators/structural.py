"""LoadBearingCalculator."""

from __future__ import annotations

from typing import Any

from psetmap.config import STRUCTURAL_CATEGORIES
from psetmap.models.host import BuiltInParameter, StorageType
from psetmap.properties.calculator import PropertyCalculator

# Host wall structural usage values; 1 is "bearing"
_WALL_USAGE_BEARING = 1


class LoadBearingCalculator(PropertyCalculator):
    name = "LoadBearingCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        if element.category == "Walls":
            usage = element.lookup(builtin=BuiltInParameter.WALL_STRUCTURAL_USAGE_PARAM)
            value = usage.as_integer() if usage is not None else None
            return value == _WALL_USAGE_BEARING

        if element.category in STRUCTURAL_CATEGORIES:
            return True

        floor_flag = element.get_builtin_parameter(BuiltInParameter.FLOOR_PARAM_IS_STRUCTURAL)
        if floor_flag is not None and floor_flag.has_value and floor_flag.storage == StorageType.INTEGER:
            return floor_flag.as_integer() != 0

        flag = element.lookup_integer(entry_map.parameter_name, entry_map.compatible_parameter_name)
        if flag is None:
            return None
        return flag != 0
