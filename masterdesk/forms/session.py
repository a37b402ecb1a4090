"""Form session: field values, validation errors and dirty/submitting state."""

from collections.abc import Mapping
from typing import Any, Generic

from pydantic import BaseModel

from masterdesk.forms.errors import FieldError
from masterdesk.forms.schema import FormSchema, RecordT
from masterdesk.observability.logging import get_logger

logger = get_logger(__name__)


class FormField(BaseModel):
    """State of one form field.

    ``error`` is set iff the field failed the most recent validation pass
    that covered it.
    """

    name: str
    raw_value: Any = None
    parsed_value: Any = None
    error: FieldError | None = None
    dirty: bool = False


class FieldBinding:
    """The {value, set_value, error} triple an input is wired to."""

    def __init__(self, session: "FormSession[Any]", name: str) -> None:
        self._session = session
        self.name = name

    def __repr__(self) -> str:
        return f"FieldBinding({self.name!r}, value={self.value!r})"

    @property
    def value(self) -> Any:
        return self._session.fields[self.name].raw_value

    @property
    def error(self) -> FieldError | None:
        return self._session.fields[self.name].error

    @property
    def dirty(self) -> bool:
        return self._session.fields[self.name].dirty

    def set_value(self, value: Any) -> None:
        self._session.set_value(self.name, value)

    def blur(self) -> FieldError | None:
        """Validate just this field, for immediate feedback."""
        return self._session.validate_field(self.name)


class FormSession(Generic[RecordT]):
    """Owns the field state of one open form.

    Created with empty defaults for a create form or with an entity's
    values for an edit form, and reset to a fresh baseline after a
    successful save.
    """

    def __init__(
        self,
        schema: FormSchema[RecordT],
        defaults: Mapping[str, Any] | BaseModel | None = None,
    ) -> None:
        self.schema = schema
        self.is_submitting = False
        self._baseline: dict[str, Any] = {}
        self.fields: dict[str, FormField] = {}
        self._load(defaults)

    @classmethod
    def blank(cls, schema: FormSchema[RecordT]) -> "FormSession[RecordT]":
        return cls(schema)

    @classmethod
    def from_values(
        cls,
        schema: FormSchema[RecordT],
        values: Mapping[str, Any] | BaseModel,
    ) -> "FormSession[RecordT]":
        """Session pre-filled from a loaded entity; unknown keys are ignored."""
        return cls(schema, values)

    def _load(self, defaults: Mapping[str, Any] | BaseModel | None) -> None:
        if isinstance(defaults, BaseModel):
            defaults = defaults.model_dump()
        baseline = self.schema.blank_values()
        if defaults:
            baseline.update({k: v for k, v in defaults.items() if k in baseline})
        self._baseline = baseline
        self.fields = {name: FormField(name=name, raw_value=value) for name, value in baseline.items()}

    # Field registry
    def field(self, name: str) -> FieldBinding:
        """Binding for ``name``.

        Raises:
            KeyError: If the schema has no such field
        """
        if name not in self.fields:
            raise KeyError(f"Unknown form field: {name}")
        return FieldBinding(self, name)

    def set_value(self, name: str, value: Any) -> None:
        field = self.fields[name]
        field.raw_value = value
        field.dirty = value != self._baseline[name]

    @property
    def values(self) -> dict[str, Any]:
        """Current raw values."""
        return {name: field.raw_value for name, field in self.fields.items()}

    @property
    def baseline(self) -> dict[str, Any]:
        return dict(self._baseline)

    @property
    def is_dirty(self) -> bool:
        return any(field.dirty for field in self.fields.values())

    @property
    def dirty_fields(self) -> list[str]:
        return [name for name, field in self.fields.items() if field.dirty]

    @property
    def errors(self) -> dict[str, FieldError]:
        """Errors from the last validation pass."""
        return {name: field.error for name, field in self.fields.items() if field.error}

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    # Validation
    def validate(self) -> dict[str, FieldError | None]:
        """Validate every field and record the results on the fields."""
        outcome = self.schema.validate(self.values)
        for name, field in self.fields.items():
            field.parsed_value = outcome.parsed[name]
            field.error = outcome.errors[name]

        if not outcome.is_valid:
            logger.debug(
                "form_validation_failed",
                record=self.schema.record.__name__,
                fields=sorted(outcome.failing),
                kinds=[e.kind.value for e in outcome.failing.values()],
            )
        return outcome.errors

    def validate_field(self, name: str) -> FieldError | None:
        field = self.fields[name]
        field.parsed_value, field.error = self.schema.validate_field(name, field.raw_value)
        return field.error

    def payload(self) -> RecordT:
        """The typed record for the current values.

        Raises:
            ValueError: If any field fails validation
        """
        errors = self.validate()
        failing = sorted(name for name, error in errors.items() if error is not None)
        if failing:
            raise ValueError(f"Form has invalid fields: {failing}")
        return self.schema.build({name: field.parsed_value for name, field in self.fields.items()})

    def reset(self, defaults: Mapping[str, Any] | BaseModel | None = None) -> None:
        """Replace all values and clear dirty and error state.

        Without ``defaults`` the session returns to its current baseline;
        with them, they become the new baseline.
        """
        if defaults is None:
            defaults = self._baseline
        self._load(defaults)
        self.is_submitting = False
