"""Global configuration: tolerances, default names, constants."""

from pathlib import Path

# Numeric tolerance used for "almost equal" / "almost zero" checks
EPS = 1e-9

# Default location of the per-project config file
CONFIG_DIR = Path(".psetmap")
CONFIG_FILE = "config.json"

# Environment variable prefix for option overrides
ENV_PREFIX = "PSETMAP_"

# Suffix the host application appends to type-level parameter names
TYPE_PARAMETER_SUFFIX = "[Type]"

# Quantity set name used before IFC4
LEGACY_QUANTITY_SET_NAME = "BaseQuantities"

# Entities that have no related type object before IFC4; their property
# sets look at the type element directly.
ENTITIES_WITH_NO_RELATED_TYPE = (
    "IfcFooting",
    "IfcPile",
    "IfcRamp",
    "IfcRoof",
    "IfcStair",
)

# Default unit category -> scale factor from host internal units.
# Host internal units are feet / radians.
DEFAULT_UNIT_SCALES: dict[str, float] = {
    "length": 0.3048,
    "area": 0.09290304,
    "volume": 0.028316846592,
    "angle": 57.29577951308232,
}

# Categories treated as load bearing by the LoadBearing calculator
STRUCTURAL_CATEGORIES = (
    "Structural Columns",
    "Structural Framing",
    "Structural Framing System",
    "Structural Trusses",
)
