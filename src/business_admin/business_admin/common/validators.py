from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core.exceptions import ValidationError


@dataclass
class ValidationResult:
    """Outcome of a form validator: per-field messages, empty when valid."""

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors[field_name] = message

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationError(f"Validation failed: {', '.join(self.errors.values())}", self.errors)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def clean_text(value: Any) -> str:
    return str(value).strip() if value is not None else ""
