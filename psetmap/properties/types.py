"""Type tags for property, quantity and value kinds."""

from __future__ import annotations

from enum import Enum


class PropertyValueType(str, Enum):
    """Shape of the IfcProperty entity to create."""

    SINGLE_VALUE = "SingleValue"
    ENUMERATED_VALUE = "EnumeratedValue"
    LIST_VALUE = "ListValue"
    REFERENCE_VALUE = "ReferenceValue"
    TABLE_VALUE = "TableValue"

    @classmethod
    def parse(cls, text: str, default: PropertyValueType | None = None) -> PropertyValueType | None:
        """Parse ``"ListValue"``, ``"PropertyListValue"`` or ``"listvalue"``."""
        key = text.strip().lower()
        if key.startswith("property"):
            key = key[len("property"):]
        for member in cls:
            if member.value.lower() == key:
                return member
        return default


class PropertyType(str, Enum):
    """Data type of a single property value."""

    LABEL = "Label"
    TEXT = "Text"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    REAL = "Real"
    POSITIVE_LENGTH = "PositiveLength"
    POSITIVE_RATIO = "PositiveRatio"
    PLANE_ANGLE = "PlaneAngle"
    AREA = "Area"
    IDENTIFIER = "Identifier"
    COUNT = "Count"
    THERMODYNAMIC_TEMPERATURE = "ThermodynamicTemperature"
    LENGTH = "Length"
    RATIO = "Ratio"
    THERMAL_TRANSMITTANCE = "ThermalTransmittance"
    VOLUMETRIC_FLOW_RATE = "VolumetricFlowRate"
    LOGICAL = "Logical"
    POWER = "Power"
    CLASSIFICATION_REFERENCE = "ClassificationReference"
    FREQUENCY = "Frequency"
    POSITIVE_PLANE_ANGLE = "PositivePlaneAngle"
    ELECTRIC_CURRENT = "ElectricCurrent"
    ELECTRIC_VOLTAGE = "ElectricVoltage"
    VOLUME = "Volume"
    LUMINOUS_FLUX = "LuminousFlux"
    FORCE = "Force"
    PRESSURE = "Pressure"
    COLOR_TEMPERATURE = "ColorTemperature"
    CURRENCY = "Currency"
    ELECTRICAL_EFFICACY = "ElectricalEfficacy"
    LUMINOUS_INTENSITY = "LuminousIntensity"
    ILLUMINANCE = "Illuminance"
    NORMALISED_RATIO = "NormalisedRatio"
    LINEAR_VELOCITY = "LinearVelocity"
    MASS_DENSITY = "MassDensity"
    IFC_PERSON = "IfcPerson"
    IFC_TIME_SERIES = "IfcTimeSeries"
    TORQUE = "Torque"
    IFC_MATERIAL = "IfcMaterial"
    MASS = "Mass"
    SOUND_POWER = "SoundPower"
    TIME = "Time"
    LOCAL_TIME = "LocalTime"
    ENERGY = "Energy"
    LINEAR_FORCE = "LinearForce"
    PLANAR_FORCE = "PlanarForce"
    MONETARY = "Monetary"
    THERMAL_CONDUCTIVITY = "ThermalConductivity"
    IFC_MATERIAL_DEFINITION = "IfcMaterialDefinition"
    ROTATIONAL_FREQUENCY = "RotationalFrequency"
    AREA_DENSITY = "AreaDensity"
    DATE = "Date"
    IFC_EXTERNAL_REFERENCE = "IfcExternalReference"
    MASS_FLOW_RATE = "MassFlowRate"
    ELECTRIC_RESISTANCE = "ElectricResistance"
    MASS_PER_LENGTH = "MassPerLength"
    IFC_CALENDAR_DATE = "IfcCalendarDate"
    IFC_ORGANIZATION = "IfcOrganization"
    SPECIFIC_HEAT_CAPACITY = "SpecificHeatCapacity"
    MOLECULAR_WEIGHT = "MolecularWeight"
    HEATING_VALUE = "HeatingValue"
    ISOTHERMAL_MOISTURE_CAPACITY = "IsothermalMoistureCapacity"
    VAPOR_PERMEABILITY = "VaporPermeability"
    MOISTURE_DIFFUSIVITY = "MoistureDiffusivity"
    DYNAMIC_VISCOSITY = "DynamicViscosity"
    MODULUS_OF_ELASTICITY = "ModulusOfElasticity"
    THERMAL_EXPANSION_COEFFICIENT = "ThermalExpansionCoefficient"
    ION_CONCENTRATION = "IonConcentration"
    PH = "PH"
    DATE_TIME = "DateTime"
    IFC_DATE_AND_TIME = "IfcDateAndTime"
    IFC_LOCAL_TIME = "IfcLocalTime"
    IFC_CLASSIFICATION_REFERENCE = "IfcClassificationReference"
    NON_NEGATIVE_LENGTH = "NonNegativeLength"
    MOMENT_OF_INERTIA = "MomentOfInertia"
    WARPING_CONSTANT = "WarpingConstant"
    SECTION_MODULUS = "SectionModulus"
    DURATION = "Duration"
    ELECTRIC_CONDUCTANCE = "ElectricConductance"
    TEMPERATURE_RATE_OF_CHANGE = "TemperatureRateOfChange"
    RADIO_ACTIVITY = "RadioActivity"
    SOUND_PRESSURE = "SoundPressure"
    HEAT_FLUX_DENSITY = "HeatFluxDensity"
    COMPLEX_NUMBER = "ComplexNumber"
    THERMAL_RESISTANCE = "ThermalResistance"
    NUMERIC = "Numeric"
    ELECTRIC_CAPACITANCE = "ElectricCapacitance"

    @classmethod
    def parse(cls, text: str, default: PropertyType | None = None) -> PropertyType | None:
        """Parse a type name with or without the ``Ifc`` / ``Measure`` affixes.

        ``"IfcLengthMeasure"``, ``"Length"`` and ``"length"`` all give
        :attr:`LENGTH`.
        """
        key = text.strip().lower()
        candidates = [key]
        if key.startswith("ifc"):
            candidates.append(key[3:])
        candidates.extend([c[: -len("measure")] for c in list(candidates) if c.endswith("measure")])
        for member in cls:
            if member.value.lower() in candidates:
                return member
        return default


class QuantityType(str, Enum):
    """Kind of IfcPhysicalQuantity to create."""

    REAL = "Real"
    LENGTH = "Length"
    POSITIVE_LENGTH = "PositiveLength"
    AREA = "Area"
    VOLUME = "Volume"
    WEIGHT = "Weight"
    COUNT = "Count"
    TIME = "Time"
    MASS = "Mass"

    @classmethod
    def parse(cls, text: str, default: QuantityType | None = None) -> QuantityType | None:
        key = text.strip().lower()
        if key.startswith("ifc"):
            key = key[3:]
        if key.startswith("quantity"):
            key = key[len("quantity"):]
        if key.endswith("measure"):
            key = key[: -len("measure")]
        for member in cls:
            if member.value.lower() == key:
                return member
        return default
