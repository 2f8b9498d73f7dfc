"""EntryMap — one rule for where a property value comes from."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from psetmap.models.host import BuiltInParameter, LanguageType


class EntryMap(BaseModel):
    """A parameter name, built-in id, localized names and a calculator.

    Subclasses implement the actual resolution for property sets,
    quantity sets and predefined property sets.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    parameter_name: str = ""
    compatible_parameter_name: str = ""
    localized_parameter_names: dict[LanguageType, str] = Field(default_factory=dict)
    builtin: BuiltInParameter | None = None
    calculator: Any = None
    use_calculator_only: bool = False
    parameter_name_is_valid: bool = False

    def update_entry(self) -> None:
        """Recompute whether a parameter lookup is worth attempting."""
        self.parameter_name_is_valid = not self.use_calculator_only and (
            bool(self.parameter_name) or self.builtin is not None
        )

    def localized_parameter_name(self, language: LanguageType) -> str | None:
        return self.localized_parameter_names.get(language)

    def add_localized_parameter_name(self, language: LanguageType, name: str) -> None:
        if language in self.localized_parameter_names:
            raise ValueError(f"Duplicate localized name for {language.value}: {name}")
        self.localized_parameter_names[language] = name

    def candidate_names(self, language: LanguageType) -> list[str]:
        """Parameter names to try, in resolution order, without blanks."""
        names = [
            self.parameter_name,
            self.compatible_parameter_name,
            self.localized_parameter_name(language) or "",
        ]
        return [n for n in names if n]
