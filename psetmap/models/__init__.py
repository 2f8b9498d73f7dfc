from psetmap.models.body import BodyParams
from psetmap.models.host import (
    BuiltInParameter,
    HostElement,
    LanguageType,
    Parameter,
    SpecType,
    StorageType,
)

__all__ = [
    "BodyParams",
    "BuiltInParameter",
    "HostElement",
    "LanguageType",
    "Parameter",
    "SpecType",
    "StorageType",
]
