"""Field-level validation results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ErrorKind(str, Enum):
    """Why a field failed validation."""

    REQUIRED = "required"  # Empty where a value is needed
    TYPE_MISMATCH = "type_mismatch"  # Not a number where one is expected
    BELOW_MINIMUM = "below_minimum"  # Numeric but under the configured floor


class FieldError(BaseModel):
    """A single field's validation failure, shown inline next to the field."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message
