"""ExportOptions and layered option loading."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from psetmap.config import CONFIG_DIR, CONFIG_FILE, DEFAULT_UNIT_SCALES, ENV_PREFIX
from psetmap.models.host import LanguageType

logger = logging.getLogger(__name__)


class ExportOptions(BaseModel):
    """User-facing switches for one property-set export."""

    language: LanguageType = LanguageType.ENGLISH_USA
    export_base_quantities: bool = True
    export_ifc_common_property_sets: bool = True
    export_predefined_property_sets: bool = True
    export_user_defined_psets: bool = False
    user_defined_psets_file: Path | None = None
    parameter_mapping_file: Path | None = None
    use_family_and_type_name_for_reference: bool = False
    unit_scales: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_UNIT_SCALES))


def _from_env(name: str, raw: str) -> Any:
    if name == "unit_scales":
        return json.loads(raw)
    return raw


def load_options(project_path: str | Path = ".", **overrides: Any) -> ExportOptions:
    """Load merged options: defaults -> .psetmap/config.json -> PSETMAP_* env vars.

    Keyword *overrides* are applied last.  Relative file paths resolve
    against *project_path*.  Invalid values raise pydantic's
    ``ValidationError``.
    """
    root = Path(project_path)
    data: dict[str, Any] = {}

    # 1. .psetmap/config.json
    config_json = root / CONFIG_DIR / CONFIG_FILE
    if config_json.is_file():
        try:
            loaded = json.loads(config_json.read_text(encoding="utf-8"))
            data.update({k: v for k, v in loaded.items() if k in ExportOptions.model_fields})
        except (json.JSONDecodeError, OSError):
            logger.debug("Could not read %s", config_json, exc_info=True)

    # 2. Environment variables
    for name in ExportOptions.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is None:
            continue
        try:
            data[name] = _from_env(name, raw)
        except json.JSONDecodeError:
            logger.debug("Ignoring malformed %s%s", ENV_PREFIX, name.upper(), exc_info=True)

    data.update(overrides)

    # Unit scales merge onto the defaults instead of replacing them
    if isinstance(data.get("unit_scales"), dict):
        data["unit_scales"] = {**DEFAULT_UNIT_SCALES, **data["unit_scales"]}

    options = ExportOptions(**data)
    for field in ("user_defined_psets_file", "parameter_mapping_file"):
        path = getattr(options, field)
        if path is not None and not path.is_absolute():
            setattr(options, field, root / path)
    return options
