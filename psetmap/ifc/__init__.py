"""IFC side of the mapping: schema checks, values, caches and set writing."""

from psetmap.ifc.cache import PropertyInfoCache
from psetmap.ifc.properties import PropertyFactory
from psetmap.ifc.units import UnitScaler
from psetmap.ifc.values import MEASURES, MeasureSpec, value_from_parameter, value_from_string
from psetmap.ifc.writer import PropertySetWriter

__all__ = [
    "MEASURES",
    "MeasureSpec",
    "PropertyFactory",
    "PropertyInfoCache",
    "PropertySetWriter",
    "UnitScaler",
    "value_from_parameter",
    "value_from_string",
]
