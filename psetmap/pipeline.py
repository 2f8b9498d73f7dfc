"""Pipeline entry point: ``apply_property_sets(ifc_path, elements_path, output_path)``.

Reads host elements from JSON, finds their IFC entities by GlobalId and
writes property, quantity and predefined sets into the model.

Elements JSON layout::

    {
      "types": [{"id": 10, "name": "Generic - 200mm", "is_type": true, "parameters": [...]}],
      "elements": [
        {"id": 1, "global_id": "2O2Fr$t4X7Zf8NOew3FLOH", "category": "Walls",
         "type_id": 10, "body": {"scaled_length": 5.0}, "parameters": [...]}
      ]
    }

A bare list is accepted as the ``elements`` list.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import ifcopenshell

from psetmap.context import ExportContext
from psetmap.exporter import PropertySetExporter
from psetmap.models.body import BodyParams
from psetmap.models.host import HostElement
from psetmap.options import ExportOptions

logger = logging.getLogger(__name__)


@dataclass
class ExportReport:
    """Summary of one ``apply_property_sets`` run."""

    output_path: Path | None
    elements: int = 0
    property_sets: int = 0
    quantity_sets: int = 0
    sets_created: int = 0
    sets_reused: int = 0
    skipped: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "output_path": str(self.output_path) if self.output_path else None,
            "elements": self.elements,
            "property_sets": self.property_sets,
            "quantity_sets": self.quantity_sets,
            "sets_created": self.sets_created,
            "sets_reused": self.sets_reused,
            "skipped": list(self.skipped),
        }


def load_elements(path: str | Path) -> list[tuple[HostElement, BodyParams | None]]:
    """Read host elements and their body data, linking each to its type."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"elements": data}

    types: dict[int, HostElement] = {}
    for raw in data.get("types", []):
        element_type = HostElement.model_validate({**raw, "is_type": True})
        types[element_type.id] = element_type

    elements: list[tuple[HostElement, BodyParams | None]] = []
    for raw in data.get("elements", []):
        raw = dict(raw)
        type_id = raw.pop("type_id", None)
        body_raw = raw.pop("body", None)
        element = HostElement.model_validate(raw)
        if type_id is not None:
            element.type_element = types.get(type_id)
            if element.type_element is None:
                logger.debug("Element %s refers to unknown type %s", element.id, type_id)
        body = BodyParams.model_validate(body_raw) if body_raw else None
        elements.append((element, body))
    return elements


def _count(report: ExportReport, written: list[ifcopenshell.entity_instance]) -> None:
    for definition in written:
        if definition.is_a("IfcElementQuantity"):
            report.quantity_sets += 1
        else:
            report.property_sets += 1


def apply_property_sets(
    ifc_path: str | Path,
    elements_path: str | Path,
    output_path: str | Path,
    options: ExportOptions | None = None,
) -> ExportReport:
    """Write property sets for every host element into a copy of an IFC file.

    Parameters
    ----------
    ifc_path:
        IFC2x3, IFC4 or IFC4X3 file holding the exported entities.
    elements_path:
        JSON file with the host elements (see module docstring).
    output_path:
        Where the updated IFC file is written.
    options:
        Export options; defaults apply when omitted.

    Returns
    -------
    ExportReport
        Counts of processed elements and written sets, and the ids of
        skipped elements.
    """
    ifc_path = Path(ifc_path)
    output_path = Path(output_path)

    logger.info("Opening %s", ifc_path)
    model = ifcopenshell.open(str(ifc_path))
    elements = load_elements(elements_path)
    logger.info("Loaded %d host elements from %s", len(elements), elements_path)

    ctx = ExportContext(model, options)
    exporter = PropertySetExporter.from_options(ctx)
    report = ExportReport(output_path=output_path)

    for element, body in elements:
        if not element.global_id:
            logger.warning("Skipping element %s: no GlobalId", element.id)
            report.skipped.append(str(element.id))
            continue
        try:
            handle = model.by_guid(element.global_id)
            written = exporter.export_element(element, handle, body)
        except Exception:
            logger.warning(
                "Skipping element %s (%s) due to error",
                element.id,
                element.global_id,
                exc_info=True,
            )
            report.skipped.append(str(element.id))
            continue
        report.elements += 1
        _count(report, written)

    report.sets_created = ctx.writer.created
    report.sets_reused = ctx.writer.reused

    output_path.parent.mkdir(parents=True, exist_ok=True)
    model.write(str(output_path))
    logger.info(
        "Property sets complete: %d elements, %d property sets, %d quantity sets -> %s",
        report.elements,
        report.property_sets,
        report.quantity_sets,
        output_path,
    )
    return report
