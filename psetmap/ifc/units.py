"""UnitScaler — multiplicative conversion from host units to export units."""

from __future__ import annotations

import ifcopenshell

from psetmap.config import DEFAULT_UNIT_SCALES


class UnitScaler:
    """Look up scale factors per unit category.

    Categories without an explicit factor scale by 1.0, so host values in
    those categories are assumed to already be in export units.
    """

    def __init__(self, scales: dict[str, float] | None = None) -> None:
        self._scales: dict[str, float] = dict(DEFAULT_UNIT_SCALES)
        if scales:
            self._scales.update(scales)

    def factor(self, category: str | None) -> float:
        if not category:
            return 1.0
        return self._scales.get(category, 1.0)

    def scale(self, category: str | None, value: float) -> float:
        return value * self.factor(category)

    def scale_length(self, value: float) -> float:
        return self.scale("length", value)

    def scale_area(self, value: float) -> float:
        return self.scale("area", value)

    def scale_volume(self, value: float) -> float:
        return self.scale("volume", value)

    def scale_angle(self, value: float) -> float:
        return self.scale("angle", value)


def has_monetary_unit(model: ifcopenshell.file) -> bool:
    """True when the model declares an IfcMonetaryUnit."""
    try:
        return len(model.by_type("IfcMonetaryUnit")) > 0
    except RuntimeError:
        return False
