"""Temperatures given directly or as a Max/Min pair."""

from __future__ import annotations

from typing import Any

from psetmap.properties.calculator import PropertyCalculator


class TemperatureCalculator(PropertyCalculator):
    """The mapped temperature, else the mean of its ``Max`` and ``Min`` parameters."""

    name = "TemperatureCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map) -> Any:
        names = [n for n in (entry_map.parameter_name, entry_map.compatible_parameter_name) if n]
        for name in names:
            raw = element.lookup_double(name)
            if raw is not None:
                return ctx.scaler.scale("temperature", raw)
        for name in names:
            high = element.lookup_double(f"{name}Max")
            low = element.lookup_double(f"{name}Min")
            if high is not None and low is not None:
                return ctx.scaler.scale("temperature", (high + low) / 2.0)
        return None
