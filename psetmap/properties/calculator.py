"""PropertyCalculator interface and CalculatorRegistry."""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING, Any

from psetmap.models.body import BodyParams
from psetmap.models.host import HostElement

if TYPE_CHECKING:
    from psetmap.context import ExportContext
    from psetmap.properties.entry_map import EntryMap

logger = logging.getLogger(__name__)


class PropertyCalculator(abc.ABC):
    """Computes a property value when no parameter supplies one.

    Calculators keep no state between calls, so a single instance is
    shared by every entry that refers to it.
    """

    #: Text results are lists that become list or enumerated properties.
    calculates_multiple_values: bool = False

    #: Text results may be shared through the property cache.
    cache_string_values: bool = False

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Registry key, as used in user-defined property set files."""

    @abc.abstractmethod
    def calculate(
        self,
        ctx: ExportContext,
        body: BodyParams | None,
        element: HostElement,
        element_type: HostElement | None,
        entry_map: EntryMap,
    ) -> Any:
        """Return the value in export units, or None if it cannot be computed.

        Parameters
        ----------
        ctx:
            The running export (options, scaler, schema).
        body:
            Extrusion data of the exported body, if any.
        element:
            The host element (or element type) being exported.
        element_type:
            The element's type, when it has one.
        entry_map:
            The map that invoked the calculator; gives access to the
            configured parameter name.
        """


class CalculatorRegistry:
    """Name -> calculator lookup."""

    def __init__(self) -> None:
        self._calculators: dict[str, PropertyCalculator] = {}

    def register(self, calculator: PropertyCalculator) -> None:
        self._calculators[calculator.name] = calculator
        logger.debug("Registered calculator: %s", calculator.name)

    def auto_discover(self) -> None:
        """Load all built-in calculators."""
        from psetmap.properties.calculators import BUILTIN_CALCULATORS

        for calculator_cls in BUILTIN_CALCULATORS:
            self.register(calculator_cls())

    def get(self, name: str) -> PropertyCalculator | None:
        return self._calculators.get(name)

    def list_calculators(self) -> list[PropertyCalculator]:
        return list(self._calculators.values())

    def __contains__(self, name: str) -> bool:
        return name in self._calculators


_default: CalculatorRegistry | None = None


def default_registry() -> CalculatorRegistry:
    """Shared registry holding the built-in calculators."""
    global _default
    if _default is None:
        _default = CalculatorRegistry()
        _default.auto_discover()
    return _default
