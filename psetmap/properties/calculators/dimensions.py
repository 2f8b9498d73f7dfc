"""Height, width, length, depth and span."""

from __future__ import annotations

from typing import Any

from psetmap.config import EPS
from psetmap.models.host import BuiltInParameter
from psetmap.properties.calculator import PropertyCalculator
from psetmap.properties.calculators.base import is_slab, positive, scaled_parameter

_HEIGHT_BY_CATEGORY = {
    "Doors": BuiltInParameter.DOOR_HEIGHT,
    "Windows": BuiltInParameter.WINDOW_HEIGHT,
}

_WIDTH_BY_CATEGORY = {
    "Doors": BuiltInParameter.DOOR_WIDTH,
    "Windows": BuiltInParameter.WINDOW_WIDTH,
}


class HeightCalculator(PropertyCalculator):
    """Door/window height, then the mapped parameter, then the body height."""

    name = "HeightCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        builtin = _HEIGHT_BY_CATEGORY.get(element.category)
        if builtin is not None:
            raw = element.lookup_double(builtin=builtin)
            height = positive(ctx.scaler.scale_length(raw)) if raw is not None else None
            if height is not None:
                return height

        height = scaled_parameter(ctx, element, entry_map, "IfcQtyHeight")
        if height is not None:
            return height
        return positive(body.scaled_height) if body is not None else None


class WidthCalculator(PropertyCalculator):
    name = "WidthCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        builtin = _WIDTH_BY_CATEGORY.get(element.category)
        width = scaled_parameter(ctx, element, entry_map, "IfcQtyWidth", builtin=builtin)
        if width is not None:
            return width
        if body is None:
            return None
        # The lesser edge of a slab profile is stored as the body height
        if is_slab(ctx, element):
            return positive(body.scaled_height)
        return positive(body.scaled_width)


class LengthCalculator(PropertyCalculator):
    name = "LengthCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        length = scaled_parameter(ctx, element, entry_map, "IfcQtyLength", "Length")
        if length is not None:
            return length
        return positive(body.scaled_length) if body is not None else None


class DepthCalculator(PropertyCalculator):
    name = "DepthCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        depth = scaled_parameter(ctx, element, entry_map, "IfcQtyDepth")
        if depth is not None:
            return depth
        if body is None:
            return None
        # Slab depth is the extrusion length
        if is_slab(ctx, element):
            return positive(body.scaled_length)
        return positive(body.scaled_height)


class SpanCalculator(PropertyCalculator):
    name = "SpanCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        span = scaled_parameter(ctx, element, entry_map, builtin=BuiltInParameter.INSTANCE_LENGTH_PARAM)
        if span is not None:
            return span
        return positive(body.scaled_length) if body is not None else None


class DiameterCalculator(PropertyCalculator):
    name = "DiameterCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        return scaled_parameter(ctx, element, entry_map, "IfcQtyDiameter", "Diameter", tolerance=EPS * EPS)
