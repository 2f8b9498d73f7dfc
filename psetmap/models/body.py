"""BodyParams — scaled extrusion data gathered while exporting geometry."""

from __future__ import annotations

from pydantic import BaseModel


class BodyParams(BaseModel):
    """Dimensions of the exported body, already in export units.

    Calculators fall back to these values when the host element carries
    no usable parameter.
    """

    scaled_length: float = 0.0
    scaled_width: float = 0.0
    scaled_height: float = 0.0
    scaled_area: float = 0.0
    scaled_outer_perimeter: float = 0.0
    slope: float = 0.0
