"""SlopeCalculator — slope angle of beams, ramps and sloped bodies."""

from __future__ import annotations

import math
from typing import Any

from psetmap.config import EPS
from psetmap.models.host import BuiltInParameter, HostElement
from psetmap.properties.calculator import PropertyCalculator


def _element_double(element: HostElement, builtin: BuiltInParameter) -> float | None:
    param = element.lookup(builtin=builtin, include_type=False)
    return param.as_double() if param is not None else None


class SlopeCalculator(PropertyCalculator):
    """Slope in export angle units.

    Sources, in order: beam end elevations over the beam length (only
    when the body has no length), the ramp's minimum inverse slope, an
    ``IfcSlope`` / ``Slope`` parameter, and finally the body slope.
    """

    name = "SlopeCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        if body is None or abs(body.scaled_length) < EPS:
            slope = self._beam_slope(ctx, element)
            if slope is not None:
                return slope

        inverse = _element_double(element, BuiltInParameter.RAMP_ATTR_MIN_INV_SLOPE)
        if inverse is not None and abs(inverse) > EPS:
            return ctx.scaler.scale_angle(math.atan(inverse))

        raw = element.lookup_double("IfcSlope", "Slope")
        if raw is not None:
            slope = ctx.scaler.scale_angle(raw)
            if slope > EPS:
                return slope

        return body.slope if body is not None else None

    @staticmethod
    def _beam_slope(ctx, element: HostElement) -> float | None:
        start = _element_double(element, BuiltInParameter.STRUCTURAL_BEAM_END0_ELEVATION)
        end = _element_double(element, BuiltInParameter.STRUCTURAL_BEAM_END1_ELEVATION)
        length = _element_double(element, BuiltInParameter.INSTANCE_LENGTH_PARAM)
        if start is None or end is None or length is None or abs(length) < EPS:
            return None
        factor = min(1.0, abs(end - start) / length)
        return ctx.scaler.scale_angle(math.asin(factor))
