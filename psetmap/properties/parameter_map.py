"""Loaders for the parameter-mapping file and the user-defined property set file.

Both are tab-separated text files.  Lines starting with ``#`` are
comments.

Parameter mapping::

    Pset_WallCommon<TAB>FireRating<TAB>Fire Resistance

User-defined property sets::

    PropertySet:<TAB>My_Pset<TAB>I<TAB>IfcWall,IfcSlab
    <TAB>Width<TAB>Length<TAB>Wall Width
    <TAB>Materials<TAB>PropertyListValue.Label<TAB>Material
    <TAB>Height<TAB>Length<TAB>HeightCalculator
    <TAB>Mark<TAB>Label<TAB>BuiltInParameter.ALL_MODEL_TYPE_MARK

``I`` marks an instance set and ``T`` a type set.  The third column of
a property line is a host parameter name, a ``BuiltInParameter.`` id or
the name of a registered calculator.  It defaults to the property name.
"""

from __future__ import annotations

import logging
from pathlib import Path

from psetmap.models.host import BuiltInParameter
from psetmap.properties.calculator import CalculatorRegistry, default_registry
from psetmap.properties.description import PropertySetDescription
from psetmap.properties.pset_entry import PropertySetEntry, PropertySetEntryMap
from psetmap.properties.types import PropertyType, PropertyValueType

logger = logging.getLogger(__name__)

_BUILTIN_PREFIX = "BuiltInParameter."
_HEADER = "propertyset:"


def _read_lines(path: str | Path | None) -> list[str]:
    """Non-empty, non-comment lines of *path*; empty when missing or unreadable."""
    if path is None:
        return []
    path = Path(path)
    if not path.is_file():
        logger.debug("No file at %s", path)
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        logger.warning("Could not read %s", path, exc_info=True)
        return []
    lines = []
    for raw in text.splitlines():
        line = raw.lstrip(" \t")
        if line and not line.startswith("#"):
            lines.append(line)
    return lines


def _fields(line: str) -> list[str]:
    return [f.strip() for f in line.split("\t") if f.strip()]


def load_parameter_map(path: str | Path | None) -> dict[tuple[str, str], str]:
    """Read ``(property set, property) -> parameter name`` overrides.

    Lines that do not have exactly three fields are ignored.
    """
    parameter_map: dict[tuple[str, str], str] = {}
    for line in _read_lines(path):
        fields = _fields(line)
        if len(fields) != 3:
            logger.debug("Ignoring mapping line: %r", line)
            continue
        pset_name, property_name, parameter_name = fields
        parameter_map[(pset_name, property_name)] = parameter_name
    logger.debug("Loaded %d parameter mappings from %s", len(parameter_map), path)
    return parameter_map


def parse_property_types(raw: str) -> tuple[PropertyValueType, list[PropertyType]]:
    """Parse ``[<ValueType>.]<Type>[/<Type>...]``.

    Unknown value types fall back to a single value and unknown data
    types to Label.
    """
    value_type = PropertyValueType.SINGLE_VALUE
    data_part = raw
    if "." in raw:
        value_part, data_part = raw.split(".", 1)
        value_type = PropertyValueType.parse(value_part, PropertyValueType.SINGLE_VALUE)
    types = [PropertyType.parse(t, PropertyType.LABEL) for t in data_part.split("/") if t.strip()]
    return value_type, types or [PropertyType.LABEL]


def _entry_from_fields(
    fields: list[str], registry: CalculatorRegistry
) -> PropertySetEntry | None:
    property_name = fields[0]
    value_type, types = parse_property_types(fields[1])
    source = fields[2] if len(fields) >= 3 else property_name

    entry = PropertySetEntry(
        property_name=property_name,
        property_type=types[0],
        property_value_type=value_type,
    )
    if value_type == PropertyValueType.TABLE_VALUE:
        entry.property_argument_type = types[1] if len(types) > 1 else PropertyType.LABEL

    if source.lower().startswith(_BUILTIN_PREFIX.lower()):
        builtin = BuiltInParameter.parse(source[len(_BUILTIN_PREFIX):])
        if builtin is None:
            logger.warning("Unknown built-in parameter %r for %s", source, property_name)
            return None
        entry_map = PropertySetEntryMap(parameter_name=property_name, builtin=builtin)
    elif source in registry:
        entry_map = PropertySetEntryMap(calculator=registry.get(source), use_calculator_only=True)
    else:
        entry_map = PropertySetEntryMap(parameter_name=source)
    entry.add_entry(entry_map)
    return entry


def load_user_defined_psets(
    path: str | Path | None, registry: CalculatorRegistry | None = None
) -> list[PropertySetDescription]:
    """Read user-defined property set descriptions from *path*.

    Property lines before the first ``PropertySet:`` header are skipped.
    """
    registry = registry or default_registry()
    descriptions: list[PropertySetDescription] = []
    current: PropertySetDescription | None = None
    is_type_set = False

    for line in _read_lines(path):
        fields = _fields(line)
        if len(fields) >= 4 and fields[0].lower() == _HEADER:
            entity_types = [e for e in fields[3].replace(";", ",").replace(" ", ",").split(",") if e]
            is_type_set = fields[2].upper().startswith("T")
            current = PropertySetDescription(name=fields[1], entity_types=entity_types)
            descriptions.append(current)
            continue
        if len(fields) < 2 or current is None:
            logger.debug("Ignoring line outside a property set: %r", line)
            continue
        entry = _entry_from_fields(fields, registry)
        if entry is None:
            continue
        entry.is_element_type_property = is_type_set
        current.add_entry(entry)

    logger.debug("Loaded %d user-defined property sets from %s", len(descriptions), path)
    return descriptions
