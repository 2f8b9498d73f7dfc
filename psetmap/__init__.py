"""psetmap — map host application parameters to IFC property sets and quantities."""

__version__ = "0.1.0"

from psetmap.context import ExportContext
from psetmap.exporter import PropertySetExporter
from psetmap.models.body import BodyParams
from psetmap.models.host import BuiltInParameter, HostElement, LanguageType, Parameter
from psetmap.options import ExportOptions, load_options
from psetmap.pipeline import ExportReport, apply_property_sets
from psetmap.properties.calculator import CalculatorRegistry, PropertyCalculator
from psetmap.properties.description import (
    PreDefinedPropertySetDescription,
    PropertySetDescription,
    QuantityDescription,
)
from psetmap.properties.pset_entry import PropertySetEntry
from psetmap.properties.quantity_entry import QuantityEntry
from psetmap.properties.types import PropertyType, PropertyValueType, QuantityType

__all__ = [
    "BodyParams",
    "BuiltInParameter",
    "CalculatorRegistry",
    "ExportContext",
    "ExportOptions",
    "ExportReport",
    "HostElement",
    "LanguageType",
    "Parameter",
    "PreDefinedPropertySetDescription",
    "PropertyCalculator",
    "PropertySetDescription",
    "PropertySetEntry",
    "PropertySetExporter",
    "PropertyType",
    "PropertyValueType",
    "QuantityDescription",
    "QuantityEntry",
    "QuantityType",
    "apply_property_sets",
    "load_options",
]
