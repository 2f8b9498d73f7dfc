"""Built-in descriptions for a handful of common property and quantity sets.

This is a small sample of the standard IFC sets, not the full tables.
More sets come from the user-defined property set file.
"""

from __future__ import annotations

from psetmap.models.host import BuiltInParameter, LanguageType
from psetmap.properties.calculator import CalculatorRegistry, default_registry
from psetmap.properties.description import (
    PreDefinedPropertySetDescription,
    PropertySetDescription,
    QuantityDescription,
)
from psetmap.properties.predefined_entry import PreDefinedPropertySetEntry
from psetmap.properties.pset_entry import PropertySetEntry, PropertySetEntryMap
from psetmap.properties.types import PropertyType, PropertyValueType, QuantityType

STATUS_ENUMERATION = ["NEW", "EXISTING", "DEMOLISH", "TEMPORARY", "OTHER", "NOTKNOWN", "UNSET"]


def _with_calculator(entry: PropertySetEntry, registry: CalculatorRegistry, name: str) -> PropertySetEntry:
    entry.set_calculator(registry.get(name))
    return entry


def _reference(registry: CalculatorRegistry) -> PropertySetEntry:
    entry = PropertySetEntry.create_identifier("Reference")
    return _with_calculator(entry, registry, "ReferenceCalculator")


def wall_common(registry: CalculatorRegistry) -> PropertySetDescription:
    pset = PropertySetDescription(name="Pset_WallCommon", entity_types=["IfcWall"])
    pset.add_entry(_reference(registry))
    pset.add_entry(PropertySetEntry.create_label("AcousticRating"))
    pset.add_entry(PropertySetEntry.create_label("FireRating"))
    pset.add_entry(PropertySetEntry.create_boolean("Combustible"))
    is_external = PropertySetEntry.create_boolean("IsExternal")
    is_external.add_localized_parameter_name(LanguageType.GERMAN, "Außenbauteil")
    is_external.add_localized_parameter_name(LanguageType.FRENCH, "Extérieur")
    pset.add_entry(is_external)
    pset.add_entry(PropertySetEntry.create_thermal_transmittance("ThermalTransmittance"))
    pset.add_entry(_with_calculator(PropertySetEntry.create_boolean("LoadBearing"), registry, "LoadBearingCalculator"))
    pset.add_entry(PropertySetEntry.create_enumerated_value("Status", PropertyType.LABEL, STATUS_ENUMERATION))
    return pset


def slab_common(registry: CalculatorRegistry) -> PropertySetDescription:
    pset = PropertySetDescription(name="Pset_SlabCommon", entity_types=["IfcSlab"])
    pset.add_entry(_reference(registry))
    pset.add_entry(PropertySetEntry.create_label("FireRating"))
    pset.add_entry(PropertySetEntry.create_boolean("IsExternal"))
    pset.add_entry(_with_calculator(PropertySetEntry.create_boolean("LoadBearing"), registry, "LoadBearingCalculator"))
    pset.add_entry(_with_calculator(PropertySetEntry.create_plane_angle("PitchAngle"), registry, "SlopeCalculator"))
    pset.add_entry(PropertySetEntry.create_thermal_transmittance("ThermalTransmittance"))
    return pset


def door_common(registry: CalculatorRegistry) -> PropertySetDescription:
    pset = PropertySetDescription(name="Pset_DoorCommon", entity_types=["IfcDoor"])
    pset.add_entry(_reference(registry))
    pset.add_entry(PropertySetEntry.create_label("FireRating"))
    pset.add_entry(PropertySetEntry.create_boolean("IsExternal"))
    pset.add_entry(PropertySetEntry.create_boolean("HandicapAccessible"))
    pset.add_entry(PropertySetEntry.create_normalised_ratio("GlazingAreaFraction"))
    pset.add_entry(PropertySetEntry.create_thermal_transmittance("ThermalTransmittance"))
    return pset


def beam_common(registry: CalculatorRegistry) -> PropertySetDescription:
    pset = PropertySetDescription(name="Pset_BeamCommon", entity_types=["IfcBeam"])
    pset.add_entry(_reference(registry))
    pset.add_entry(PropertySetEntry.create_label("FireRating"))
    pset.add_entry(_with_calculator(PropertySetEntry.create_boolean("LoadBearing"), registry, "LoadBearingCalculator"))
    pset.add_entry(_with_calculator(PropertySetEntry.create_positive_length("Span"), registry, "SpanCalculator"))
    pset.add_entry(_with_calculator(PropertySetEntry.create_plane_angle("Slope"), registry, "SlopeCalculator"))
    return pset


def covering_common(registry: CalculatorRegistry) -> PropertySetDescription:
    pset = PropertySetDescription(name="Pset_CoveringCommon", entity_types=["IfcCovering"])
    pset.add_entry(_reference(registry))
    pset.add_entry(PropertySetEntry.create_positive_length("TotalThickness"))
    pset.add_entry(PropertySetEntry.create_label("FireRating"))
    # Finishes are kept in one ";"-separated parameter
    finish = PropertySetEntry(property_name="Finish", property_value_type=PropertyValueType.LIST_VALUE)
    finish.add_entry(
        PropertySetEntryMap(
            parameter_name="Finish", calculator=registry.get("FinishCalculator"), use_calculator_only=True
        )
    )
    pset.add_entry(finish)
    return pset


def manufacturer_type_information() -> PropertySetDescription:
    pset = PropertySetDescription(
        name="Pset_ManufacturerTypeInformation",
        entity_types=["IfcElement"],
        add_type_properties_to_instance=True,
    )
    pset.add_entry(PropertySetEntry.create_label("Manufacturer"))
    pset.add_entry(PropertySetEntry.create_label("ModelLabel", builtin=BuiltInParameter.ALL_MODEL_MODEL))
    pset.add_entry(PropertySetEntry.create_identifier("ModelReference"))
    pset.add_entry(PropertySetEntry.create_classification_reference("ArticleNumber"))
    return pset


def default_property_sets(registry: CalculatorRegistry | None = None) -> list[PropertySetDescription]:
    """Common property sets shipped with the package."""
    registry = registry or default_registry()
    return [
        wall_common(registry),
        slab_common(registry),
        door_common(registry),
        beam_common(registry),
        covering_common(registry),
        manufacturer_type_information(),
    ]


def default_quantity_sets(registry: CalculatorRegistry | None = None) -> list[QuantityDescription]:
    """Base quantity sets for walls, slabs, beams and doors."""
    registry = registry or default_registry()
    calc = registry.get

    wall = QuantityDescription.for_base("Wall", ["IfcWall"])
    wall.add_quantity("Length", QuantityType.LENGTH, calculator=calc("LengthCalculator"))
    wall.add_quantity("Width", QuantityType.LENGTH, calculator=calc("WidthCalculator"))
    wall.add_quantity("Height", QuantityType.LENGTH, calculator=calc("HeightCalculator"))
    wall.add_quantity("GrossSideArea", QuantityType.AREA, calculator=calc("AreaCalculator"))
    wall.add_quantity(
        "NetVolume",
        QuantityType.VOLUME,
        builtin=BuiltInParameter.HOST_VOLUME_COMPUTED,
        calculator=calc("NetVolumeCalculator"),
    )

    slab = QuantityDescription.for_base("Slab", ["IfcSlab"])
    slab.add_quantity("Width", QuantityType.LENGTH, calculator=calc("WidthCalculator"))
    slab.add_quantity("Depth", QuantityType.LENGTH, calculator=calc("DepthCalculator"))
    slab.add_quantity("Perimeter", QuantityType.LENGTH, parameter_name="Perimeter")
    slab.add_quantity(
        "GrossArea",
        QuantityType.AREA,
        builtin=BuiltInParameter.HOST_AREA_COMPUTED,
        calculator=calc("AreaCalculator"),
    )
    slab.add_quantity("GrossVolume", QuantityType.VOLUME, calculator=calc("GrossVolumeCalculator"))

    beam = QuantityDescription.for_base("Beam", ["IfcBeam"])
    beam.add_quantity("Length", QuantityType.LENGTH, calculator=calc("LengthCalculator"))
    beam.add_quantity("NetVolume", QuantityType.VOLUME, calculator=calc("NetVolumeCalculator"))

    door = QuantityDescription.for_base("Door", ["IfcDoor"])
    door.add_quantity("Height", QuantityType.LENGTH, calculator=calc("HeightCalculator"))
    door.add_quantity("Width", QuantityType.LENGTH, calculator=calc("WidthCalculator"))
    door.add_quantity("Area", QuantityType.AREA, calculator=calc("AreaCalculator"))

    return [wall, slab, beam, door]


def default_predefined_sets() -> list[PreDefinedPropertySetDescription]:
    """Predefined sets whose attributes come straight from parameters."""
    lining = PreDefinedPropertySetDescription(name="IfcDoorLiningProperties", entity_types=["IfcDoor"])
    lining.add_entry(PreDefinedPropertySetEntry.create("LiningDepth", PropertyType.POSITIVE_LENGTH))
    lining.add_entry(PreDefinedPropertySetEntry.create("LiningThickness", PropertyType.POSITIVE_LENGTH))
    lining.add_entry(PreDefinedPropertySetEntry.create("ThresholdDepth", PropertyType.POSITIVE_LENGTH))
    lining.add_entry(PreDefinedPropertySetEntry.create("ThresholdThickness", PropertyType.POSITIVE_LENGTH))

    window_lining = PreDefinedPropertySetDescription(name="IfcWindowLiningProperties", entity_types=["IfcWindow"])
    window_lining.add_entry(PreDefinedPropertySetEntry.create("LiningDepth", PropertyType.POSITIVE_LENGTH))
    window_lining.add_entry(PreDefinedPropertySetEntry.create("LiningThickness", PropertyType.POSITIVE_LENGTH))
    window_lining.add_entry(PreDefinedPropertySetEntry.create("TransomThickness", PropertyType.POSITIVE_LENGTH))
    window_lining.add_entry(PreDefinedPropertySetEntry.create("MullionThickness", PropertyType.POSITIVE_LENGTH))

    return [lining, window_lining]
