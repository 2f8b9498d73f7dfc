"""Measure table and value conversions.

Every :class:`~psetmap.properties.types.PropertyType` that has an IFC
measure gets a :class:`MeasureSpec` in :data:`MEASURES`.  Types that are
entity references (IfcMaterial, IfcOrganization, ...) have no entry and
resolve to "no property".

Values come from two places: host parameters (scaled from host units)
and strings (table cells and other textual sources, already in export
units).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import ifcopenshell

from psetmap.config import EPS
from psetmap.ifc import schema
from psetmap.ifc.units import UnitScaler, has_monetary_unit
from psetmap.models.host import Parameter, SpecType, StorageType
from psetmap.properties.types import PropertyType

logger = logging.getLogger(__name__)


class ValueKind(str, Enum):
    """Python representation of a measure's wrapped value."""

    TEXT = "text"
    BOOL = "bool"
    LOGICAL = "logical"
    INT = "int"
    COUNT = "count"
    REAL = "real"


def _positive(value: float) -> bool:
    return value > EPS


def _non_negative(value: float) -> bool:
    return value > -EPS


def _normalised(value: float) -> bool:
    return -EPS < value < 1.0 + EPS


@dataclass(frozen=True)
class MeasureSpec:
    """How one property type maps onto an IFC defined type."""

    ifc_type: str
    kind: ValueKind = ValueKind.REAL
    unit: str | None = None
    check: Callable[[float], bool] | None = None

    def is_valid(self, value: Any) -> bool:
        if self.check is None or self.kind != ValueKind.REAL:
            return True
        return self.check(value)


_T = PropertyType
_K = ValueKind

MEASURES: dict[PropertyType, MeasureSpec] = {
    _T.LABEL: MeasureSpec("IfcLabel", _K.TEXT),
    _T.TEXT: MeasureSpec("IfcText", _K.TEXT),
    _T.IDENTIFIER: MeasureSpec("IfcIdentifier", _K.TEXT),
    _T.DATE: MeasureSpec("IfcDate", _K.TEXT),
    _T.DATE_TIME: MeasureSpec("IfcDateTime", _K.TEXT),
    _T.DURATION: MeasureSpec("IfcDuration", _K.TEXT),
    _T.BOOLEAN: MeasureSpec("IfcBoolean", _K.BOOL),
    _T.LOGICAL: MeasureSpec("IfcLogical", _K.LOGICAL),
    _T.INTEGER: MeasureSpec("IfcInteger", _K.INT),
    _T.COUNT: MeasureSpec("IfcCountMeasure", _K.COUNT),
    _T.REAL: MeasureSpec("IfcReal"),
    _T.NUMERIC: MeasureSpec("IfcNumericMeasure"),
    _T.ELECTRICAL_EFFICACY: MeasureSpec("IfcReal"),
    _T.LENGTH: MeasureSpec("IfcLengthMeasure", unit="length"),
    _T.POSITIVE_LENGTH: MeasureSpec("IfcPositiveLengthMeasure", unit="length", check=_positive),
    _T.NON_NEGATIVE_LENGTH: MeasureSpec("IfcNonNegativeLengthMeasure", unit="length", check=_non_negative),
    _T.AREA: MeasureSpec("IfcAreaMeasure", unit="area"),
    _T.VOLUME: MeasureSpec("IfcVolumeMeasure", unit="volume"),
    _T.PLANE_ANGLE: MeasureSpec("IfcPlaneAngleMeasure", unit="angle"),
    _T.POSITIVE_PLANE_ANGLE: MeasureSpec("IfcPositivePlaneAngleMeasure", unit="angle", check=_positive),
    _T.RATIO: MeasureSpec("IfcRatioMeasure"),
    _T.POSITIVE_RATIO: MeasureSpec("IfcPositiveRatioMeasure", check=_non_negative),
    _T.NORMALISED_RATIO: MeasureSpec("IfcNormalisedRatioMeasure", check=_normalised),
    _T.THERMODYNAMIC_TEMPERATURE: MeasureSpec("IfcThermodynamicTemperatureMeasure", unit="temperature"),
    _T.COLOR_TEMPERATURE: MeasureSpec("IfcThermodynamicTemperatureMeasure", unit="temperature"),
    _T.THERMAL_TRANSMITTANCE: MeasureSpec("IfcThermalTransmittanceMeasure", unit="thermal_transmittance"),
    _T.VOLUMETRIC_FLOW_RATE: MeasureSpec("IfcVolumetricFlowRateMeasure", unit="volumetric_flow_rate"),
    _T.POWER: MeasureSpec("IfcPowerMeasure", unit="power"),
    _T.FREQUENCY: MeasureSpec("IfcFrequencyMeasure"),
    _T.ELECTRIC_CURRENT: MeasureSpec("IfcElectricCurrentMeasure"),
    _T.ELECTRIC_VOLTAGE: MeasureSpec("IfcElectricVoltageMeasure"),
    _T.LUMINOUS_FLUX: MeasureSpec("IfcLuminousFluxMeasure"),
    _T.LUMINOUS_INTENSITY: MeasureSpec("IfcLuminousIntensityMeasure"),
    _T.ILLUMINANCE: MeasureSpec("IfcIlluminanceMeasure"),
    _T.FORCE: MeasureSpec("IfcForceMeasure", unit="force"),
    _T.PRESSURE: MeasureSpec("IfcPressureMeasure", unit="pressure"),
    _T.LINEAR_VELOCITY: MeasureSpec("IfcLinearVelocityMeasure"),
    _T.MASS_DENSITY: MeasureSpec("IfcMassDensityMeasure", unit="mass_density"),
    _T.MASS: MeasureSpec("IfcMassMeasure", unit="mass"),
    _T.TORQUE: MeasureSpec("IfcTorqueMeasure"),
    _T.SOUND_POWER: MeasureSpec("IfcSoundPowerMeasure"),
    _T.SOUND_PRESSURE: MeasureSpec("IfcSoundPressureMeasure"),
    _T.TIME: MeasureSpec("IfcTimeMeasure"),
    _T.ENERGY: MeasureSpec("IfcEnergyMeasure"),
    _T.LINEAR_FORCE: MeasureSpec("IfcLinearForceMeasure"),
    _T.PLANAR_FORCE: MeasureSpec("IfcPlanarForceMeasure"),
    _T.THERMAL_CONDUCTIVITY: MeasureSpec("IfcThermalConductivityMeasure"),
    _T.THERMAL_RESISTANCE: MeasureSpec("IfcThermalResistanceMeasure"),
    _T.ROTATIONAL_FREQUENCY: MeasureSpec("IfcRotationalFrequencyMeasure"),
    _T.AREA_DENSITY: MeasureSpec("IfcAreaDensityMeasure"),
    _T.MASS_FLOW_RATE: MeasureSpec("IfcMassFlowRateMeasure"),
    _T.MASS_PER_LENGTH: MeasureSpec("IfcMassPerLengthMeasure"),
    _T.ELECTRIC_RESISTANCE: MeasureSpec("IfcElectricResistanceMeasure"),
    _T.ELECTRIC_CONDUCTANCE: MeasureSpec("IfcElectricConductanceMeasure"),
    _T.ELECTRIC_CAPACITANCE: MeasureSpec("IfcElectricCapacitanceMeasure"),
    _T.SPECIFIC_HEAT_CAPACITY: MeasureSpec("IfcSpecificHeatCapacityMeasure"),
    _T.MOLECULAR_WEIGHT: MeasureSpec("IfcMolecularWeightMeasure"),
    _T.HEATING_VALUE: MeasureSpec("IfcHeatingValueMeasure"),
    _T.ISOTHERMAL_MOISTURE_CAPACITY: MeasureSpec("IfcIsothermalMoistureCapacityMeasure"),
    _T.VAPOR_PERMEABILITY: MeasureSpec("IfcVaporPermeabilityMeasure"),
    _T.MOISTURE_DIFFUSIVITY: MeasureSpec("IfcMoistureDiffusivityMeasure"),
    _T.DYNAMIC_VISCOSITY: MeasureSpec("IfcDynamicViscosityMeasure"),
    _T.MODULUS_OF_ELASTICITY: MeasureSpec("IfcModulusOfElasticityMeasure"),
    _T.THERMAL_EXPANSION_COEFFICIENT: MeasureSpec("IfcThermalExpansionCoefficientMeasure"),
    _T.ION_CONCENTRATION: MeasureSpec("IfcIonConcentrationMeasure"),
    _T.PH: MeasureSpec("IfcPHMeasure"),
    _T.MOMENT_OF_INERTIA: MeasureSpec("IfcMomentOfInertiaMeasure"),
    _T.WARPING_CONSTANT: MeasureSpec("IfcWarpingConstantMeasure"),
    _T.SECTION_MODULUS: MeasureSpec("IfcSectionModulusMeasure"),
    _T.TEMPERATURE_RATE_OF_CHANGE: MeasureSpec("IfcTemperatureRateOfChangeMeasure"),
    _T.RADIO_ACTIVITY: MeasureSpec("IfcRadioActivityMeasure"),
    _T.HEAT_FLUX_DENSITY: MeasureSpec("IfcHeatFluxDensityMeasure"),
    # Resolved per model: IfcMonetaryMeasure or IfcReal
    _T.CURRENCY: MeasureSpec("IfcMonetaryMeasure"),
}

TEXT_TYPES = frozenset(t for t, m in MEASURES.items() if m.kind == ValueKind.TEXT)


def measure_for(property_type: PropertyType) -> MeasureSpec | None:
    return MEASURES.get(property_type)


def ifc_type_for(model: ifcopenshell.file, property_type: PropertyType) -> str | None:
    """IFC defined type to use for *property_type* in *model*, or None."""
    spec = MEASURES.get(property_type)
    if spec is None:
        return None
    if property_type == PropertyType.CURRENCY and not has_monetary_unit(model):
        return "IfcReal"
    if not schema.has_declaration(model, spec.ifc_type):
        logger.debug("%s is not part of %s", spec.ifc_type, model.schema)
        return None
    return spec.ifc_type


def coerce(model: ifcopenshell.file, spec: MeasureSpec, value: Any) -> Any:
    """Convert *value* to the python type the IFC defined type wraps.

    Returns None when the value cannot be converted or fails the
    measure's validity check.
    """
    if value is None:
        return None
    try:
        if spec.kind == ValueKind.TEXT:
            return str(value)
        if spec.kind == ValueKind.BOOL:
            return bool(value)
        if spec.kind == ValueKind.LOGICAL:
            if isinstance(value, str):
                return "UNKNOWN" if value.strip().upper() == "UNKNOWN" else None
            return bool(value)
        if spec.kind == ValueKind.INT:
            return int(value)
        if spec.kind == ValueKind.COUNT:
            count = int(round(float(value)))
            return count if schema.is_ifc4x3(model) else float(count)
        real = float(value)
    except (TypeError, ValueError):
        return None
    return real if spec.is_valid(real) else None


def value_from_parameter(
    param: Parameter | None,
    property_type: PropertyType,
    scaler: UnitScaler,
) -> tuple[Any, float | None] | None:
    """Read *param* as a value of *property_type*.

    Returns ``(value, unscaled)``; ``unscaled`` is the raw host number for
    real-valued measures and None otherwise.  Returns None when the
    parameter has no usable value.
    """
    spec = MEASURES.get(property_type)
    if param is None or spec is None or not param.has_value:
        return None

    if spec.kind == ValueKind.TEXT:
        text = param.as_string()
        return (text, None) if text is not None else None

    if spec.kind in (ValueKind.BOOL, ValueKind.LOGICAL):
        if isinstance(param.value, bool):
            return param.value, None
        number = param.as_integer()
        return (number != 0, None) if number is not None else None

    if spec.kind == ValueKind.INT:
        number = param.as_integer()
        return (number, None) if number is not None else None

    raw = param.as_double()
    if raw is None:
        return None
    if spec.kind == ValueKind.COUNT:
        return raw, None
    if param.spec == SpecType.NUMBER or param.storage == StorageType.INTEGER:
        value = raw
    else:
        value = scaler.scale(spec.unit, raw)
    if not spec.is_valid(value):
        logger.debug("Value %s of %s is not a valid %s", value, param.name, property_type.value)
        return None
    return value, raw


def value_from_string(text: str | None, property_type: PropertyType) -> Any:
    """Parse *text* as a value of *property_type*; None when it cannot be.

    Anything after the first space is dropped for every kind, so a unit
    symbol ("230 V") or a trailing remark does not reach the value.  Text
    that starts with a space is kept as it is.
    """
    spec = MEASURES.get(property_type)
    if text is None or spec is None:
        return None
    index = text.find(" ")
    if index > 0:
        text = text[:index]
    if spec.kind == ValueKind.TEXT:
        return text

    token = text.strip()
    if not token:
        return None
    try:
        if spec.kind in (ValueKind.BOOL, ValueKind.LOGICAL):
            if spec.kind == ValueKind.LOGICAL and token.upper() == "UNKNOWN":
                return "UNKNOWN"
            lowered = token.lower()
            if lowered in ("true", "false"):
                return lowered == "true"
            return int(token) != 0
        if spec.kind in (ValueKind.INT, ValueKind.COUNT):
            return int(token)
        value = float(token)
    except ValueError:
        return None
    return value if spec.is_valid(value) else None


def normalize_name(text: str) -> str:
    """Lower-case and strip spaces and underscores for loose comparisons."""
    return text.replace(" ", "").replace("_", "").lower()


def match_enumeration(value: str | None, allowed: list[str]) -> str | None:
    """Return the allowed spelling matching *value*, or None.

    With no enumeration to validate against, *value* passes unchanged.
    """
    if value is None:
        return None
    if not allowed:
        return value
    key = normalize_name(value)
    for candidate in allowed:
        if normalize_name(candidate) == key:
            return candidate
    return None
