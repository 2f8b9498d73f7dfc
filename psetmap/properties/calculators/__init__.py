"""Built-in property calculators."""

from psetmap.properties.calculators.dimensions import (
    DepthCalculator,
    DiameterCalculator,
    HeightCalculator,
    LengthCalculator,
    SpanCalculator,
    WidthCalculator,
)
from psetmap.properties.calculators.quantities import (
    AreaCalculator,
    GrossFloorAreaCalculator,
    GrossSurfaceAreaCalculator,
    GrossVolumeCalculator,
    NetFloorAreaCalculator,
    NetVolumeCalculator,
    VolumeCalculator,
)
from psetmap.properties.calculators.reference import FinishCalculator, ReferenceCalculator
from psetmap.properties.calculators.slope import SlopeCalculator
from psetmap.properties.calculators.structural import LoadBearingCalculator
from psetmap.properties.calculators.temperature import TemperatureCalculator

BUILTIN_CALCULATORS = [
    HeightCalculator,
    WidthCalculator,
    LengthCalculator,
    DepthCalculator,
    SpanCalculator,
    DiameterCalculator,
    AreaCalculator,
    GrossFloorAreaCalculator,
    NetFloorAreaCalculator,
    GrossSurfaceAreaCalculator,
    VolumeCalculator,
    GrossVolumeCalculator,
    NetVolumeCalculator,
    SlopeCalculator,
    LoadBearingCalculator,
    ReferenceCalculator,
    FinishCalculator,
    TemperatureCalculator,
]

__all__ = [
    "BUILTIN_CALCULATORS",
    "AreaCalculator",
    "DepthCalculator",
    "DiameterCalculator",
    "FinishCalculator",
    "GrossFloorAreaCalculator",
    "GrossSurfaceAreaCalculator",
    "GrossVolumeCalculator",
    "HeightCalculator",
    "LengthCalculator",
    "LoadBearingCalculator",
    "NetFloorAreaCalculator",
    "NetVolumeCalculator",
    "ReferenceCalculator",
    "SlopeCalculator",
    "SpanCalculator",
    "TemperatureCalculator",
    "VolumeCalculator",
    "WidthCalculator",
]
