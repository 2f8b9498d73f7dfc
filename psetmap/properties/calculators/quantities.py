"""Area and volume calculators."""

from __future__ import annotations

from typing import Any

from psetmap.config import EPS
from psetmap.models.host import BuiltInParameter
from psetmap.properties.calculator import PropertyCalculator
from psetmap.properties.calculators.base import positive, scaled_parameter

_AREA_EPS = EPS * EPS
_VOLUME_EPS = EPS * EPS * EPS

# Category -> (height, width) built-ins used to compute an opening area
_OPENING_DIMENSIONS = {
    "Doors": (BuiltInParameter.DOOR_HEIGHT, BuiltInParameter.DOOR_WIDTH),
    "Windows": (BuiltInParameter.WINDOW_HEIGHT, BuiltInParameter.WINDOW_WIDTH),
}


class AreaCalculator(PropertyCalculator):
    """Opening area for doors and windows, then parameters, then the body area."""

    name = "AreaCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        dimensions = _OPENING_DIMENSIONS.get(element.category)
        if dimensions is not None:
            height = element.lookup_double(builtin=dimensions[0])
            width = element.lookup_double(builtin=dimensions[1])
            if height is not None and width is not None:
                area = positive(ctx.scaler.scale_area(height * width), _AREA_EPS)
                if area is not None:
                    return area

        area = scaled_parameter(ctx, element, entry_map, "IfcQtyArea", "Area", unit="area", tolerance=_AREA_EPS)
        if area is not None:
            return area
        return positive(body.scaled_area, _AREA_EPS) if body is not None else None


class GrossFloorAreaCalculator(PropertyCalculator):
    name = "GrossFloorAreaCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        area = scaled_parameter(
            ctx, element, entry_map, "IfcQtyGrossFloorArea", unit="area", tolerance=_AREA_EPS
        )
        if area is not None:
            return area
        return positive(body.scaled_area, _AREA_EPS) if body is not None else None


class VolumeCalculator(PropertyCalculator):
    """Volume parameter, or body area times body height."""

    name = "VolumeCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        volume = scaled_parameter(
            ctx, element, entry_map, "IfcQtyVolume", "QtyVolume", unit="volume", tolerance=_VOLUME_EPS
        )
        if volume is not None:
            return volume
        if body is None:
            return None
        return positive(body.scaled_area * body.scaled_height, _VOLUME_EPS)


class NetVolumeCalculator(PropertyCalculator):
    name = "NetVolumeCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        volume = scaled_parameter(
            ctx,
            element,
            entry_map,
            "IfcQtyNetVolume",
            unit="volume",
            builtin=BuiltInParameter.HOST_VOLUME_COMPUTED,
            tolerance=_VOLUME_EPS,
        )
        if volume is not None:
            return volume
        if body is None:
            return None
        return positive(body.scaled_area * body.scaled_height, _VOLUME_EPS)


class GrossVolumeCalculator(PropertyCalculator):
    """Gross volume parameter, or body area times extrusion length."""

    name = "GrossVolumeCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        volume = scaled_parameter(
            ctx, element, entry_map, "IfcQtyGrossVolume", unit="volume", tolerance=_VOLUME_EPS
        )
        if volume is not None:
            return volume
        if body is None:
            return None
        # Area and length may use different base units; go back to host units first
        area = body.scaled_area / ctx.scaler.factor("area")
        length = body.scaled_length / ctx.scaler.factor("length")
        return positive(ctx.scaler.scale_volume(area * length), _VOLUME_EPS)


class GrossSurfaceAreaCalculator(PropertyCalculator):
    """Surface area parameter, or perimeter times length plus both end faces."""

    name = "GrossSurfaceAreaCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        area = scaled_parameter(
            ctx,
            element,
            entry_map,
            "IfcQtyGrossSurfaceArea",
            "IfcGrossSurfaceArea",
            "GrossSurfaceArea",
            unit="area",
            tolerance=_AREA_EPS,
        )
        if area is not None:
            return area
        if body is None:
            return None
        if positive(body.scaled_length) is None or positive(body.scaled_outer_perimeter) is None:
            return None
        return body.scaled_outer_perimeter * body.scaled_length + 2 * body.scaled_area


class NetFloorAreaCalculator(PropertyCalculator):
    name = "NetFloorAreaCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        area = scaled_parameter(
            ctx, element, entry_map, "IfcQtyNetFloorArea", unit="area", tolerance=_AREA_EPS
        )
        if area is not None:
            return area
        raw = element.lookup_double(builtin=BuiltInParameter.HOST_AREA_COMPUTED)
        return positive(ctx.scaler.scale_area(raw), _AREA_EPS) if raw is not None else None
