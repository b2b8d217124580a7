"""
Validate use case — check app.json without touching the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from webkit.core.errors import DefinitionError
from webkit.core.pipeline import CommandInput


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {"valid": self.ok, "errors": self.errors}


def validate_definition(input: CommandInput) -> ValidationResult:
    """Load and validate the definition, collecting every error."""
    try:
        definition = input.definition()
    except DefinitionError as e:
        return ValidationResult(errors=e.errors or [str(e)])
    return ValidationResult(errors=definition.validation_errors(input.fs))
