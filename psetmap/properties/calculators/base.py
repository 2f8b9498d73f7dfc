"""Helpers shared by the built-in calculators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from psetmap.config import EPS
from psetmap.models.host import BuiltInParameter, HostElement

if TYPE_CHECKING:
    from psetmap.context import ExportContext
    from psetmap.properties.entry_map import EntryMap


def scaled_parameter(
    ctx: ExportContext,
    element: HostElement,
    entry_map: EntryMap,
    *fallback_names: str,
    unit: str = "length",
    builtin: BuiltInParameter | None = None,
    tolerance: float = EPS,
) -> float | None:
    """Look up the map's parameter names, then *fallback_names*, and scale.

    Values at or below *tolerance* after scaling count as missing.
    """
    raw = element.lookup_double(
        entry_map.parameter_name,
        entry_map.compatible_parameter_name,
        *fallback_names,
        builtin=builtin,
    )
    if raw is None:
        return None
    value = ctx.scaler.scale(unit, raw)
    return value if value > tolerance else None


def positive(value: float | None, tolerance: float = EPS) -> float | None:
    if value is None or value <= tolerance:
        return None
    return value


def is_slab(ctx: ExportContext, element: HostElement) -> bool:
    handle = ctx.handle_for(element)
    return handle is not None and handle.is_a("IfcSlab")
