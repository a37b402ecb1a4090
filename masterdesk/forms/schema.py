"""Declarative form schemas.

A schema maps each field name to a rule that parses the raw input and
reports at most one ``FieldError``. Once every field parses, the values
are handed to a statically declared pydantic record type, which becomes
the typed submission payload.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from masterdesk.forms.errors import ErrorKind, FieldError

RecordT = TypeVar("RecordT", bound=BaseModel)


class FieldRule(ABC):
    """Parses one field's raw value."""

    blank: Any = ""

    @abstractmethod
    def parse(self, raw: Any) -> tuple[Any, FieldError | None]:
        """Return the parsed value, or None plus the error."""


class RequiredText(FieldRule):
    """Non-empty string."""

    def __init__(self, message: str = "This field is required") -> None:
        self.message = message

    def parse(self, raw: Any) -> tuple[Any, FieldError | None]:
        if raw is None or not isinstance(raw, str) or raw == "":
            return None, FieldError(kind=ErrorKind.REQUIRED, message=self.message)
        return raw, None


class Reference(FieldRule):
    """Required ID of another record, e.g. the brand of a product."""

    def __init__(self, message: str = "Please select a value") -> None:
        self.message = message

    def parse(self, raw: Any) -> tuple[Any, FieldError | None]:
        if isinstance(raw, UUID | int) and not isinstance(raw, bool):
            return str(raw), None
        if isinstance(raw, str) and raw.strip():
            return raw.strip(), None
        return None, FieldError(kind=ErrorKind.REQUIRED, message=self.message)


class Number(FieldRule):
    """Numeric input with an optional inclusive floor.

    Text that does not parse as a number (including empty input) is a
    TYPE_MISMATCH; a number under ``minimum`` is BELOW_MINIMUM.
    """

    blank = None

    def __init__(
        self,
        minimum: float | None = None,
        *,
        integer: bool = False,
        type_message: str = "Must be a number",
        minimum_message: str | None = None,
    ) -> None:
        self.minimum = minimum
        self.integer = integer
        self.type_message = type_message
        self.minimum_message = minimum_message or f"Must be at least {minimum}"

    def _coerce(self, raw: Any) -> float | None:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int | float):
            number = float(raw)
        elif isinstance(raw, str):
            try:
                number = float(raw.strip())
            except ValueError:
                return None
        else:
            return None
        if math.isnan(number) or math.isinf(number):
            return None
        return number

    def parse(self, raw: Any) -> tuple[Any, FieldError | None]:
        number = self._coerce(raw)
        if number is None or (self.integer and not number.is_integer()):
            return None, FieldError(kind=ErrorKind.TYPE_MISMATCH, message=self.type_message)
        if self.minimum is not None and number < self.minimum:
            return None, FieldError(kind=ErrorKind.BELOW_MINIMUM, message=self.minimum_message)
        if self.integer:
            return int(number), None
        return number, None


class ValidationOutcome(BaseModel):
    """Result of validating every field of a form."""

    parsed: dict[str, Any]
    errors: dict[str, FieldError | None]

    @property
    def is_valid(self) -> bool:
        return all(error is None for error in self.errors.values())

    @property
    def failing(self) -> dict[str, FieldError]:
        return {name: error for name, error in self.errors.items() if error is not None}


class FormSchema(Generic[RecordT]):
    """Field rules plus the record type they produce."""

    def __init__(self, record: type[RecordT], fields: Mapping[str, FieldRule]) -> None:
        unknown = set(fields) - set(record.model_fields)
        if unknown:
            raise ValueError(f"Fields not on {record.__name__}: {sorted(unknown)}")
        self.record = record
        self.fields = dict(fields)

    @property
    def field_names(self) -> list[str]:
        return list(self.fields)

    def blank_values(self) -> dict[str, Any]:
        """Raw values of an empty create form."""
        return {name: rule.blank for name, rule in self.fields.items()}

    def validate_field(self, name: str, raw: Any) -> tuple[Any, FieldError | None]:
        return self.fields[name].parse(raw)

    def validate(self, values: Mapping[str, Any]) -> ValidationOutcome:
        """Validate every field independently of the others."""
        parsed: dict[str, Any] = {}
        errors: dict[str, FieldError | None] = {}
        for name, rule in self.fields.items():
            parsed[name], errors[name] = rule.parse(values.get(name))
        return ValidationOutcome(parsed=parsed, errors=errors)

    def build(self, parsed: Mapping[str, Any]) -> RecordT:
        """Build the typed record from fully parsed values."""
        return self.record.model_validate(dict(parsed))
