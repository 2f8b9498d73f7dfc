"""Text calculators: element reference and finish."""

from __future__ import annotations

from typing import Any

from psetmap.properties.calculator import PropertyCalculator


class ReferenceCalculator(PropertyCalculator):
    """Reference of an element: its type name, or ``family:type``.

    Element types get no reference unless a parameter forces one.
    """

    name = "ReferenceCalculator"
    cache_string_values = True

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        reference = element.lookup_string(entry_map.parameter_name, entry_map.compatible_parameter_name)
        if reference:
            return reference
        if element.is_type:
            return None
        if element_type is None:
            return element.name

        type_name = element_type.name
        if ctx.options.use_family_and_type_name_for_reference or not type_name:
            if type_name:
                return f"{element_type.family_name}:{type_name}"
            return element_type.family_name
        return type_name


class FinishCalculator(PropertyCalculator):
    """Finish description from the mapped parameter.

    Several finishes separated by ``;`` become a list of values.
    """

    name = "FinishCalculator"
    calculates_multiple_values = True
    cache_string_values = True

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        finish = element.lookup_string(entry_map.parameter_name, entry_map.compatible_parameter_name)
        if not finish:
            return None
        values = [part.strip() for part in finish.split(";") if part.strip()]
        return values or None
