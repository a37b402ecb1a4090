"""Form sessions, declarative validation and the submission pipeline."""

from masterdesk.forms.errors import ErrorKind, FieldError
from masterdesk.forms.pipeline import (
    ResetPolicy,
    SubmissionPipeline,
    SubmissionResult,
    SubmissionStatus,
)
from masterdesk.forms.records import product_schema, province_schema
from masterdesk.forms.schema import (
    FieldRule,
    FormSchema,
    Number,
    Reference,
    RequiredText,
    ValidationOutcome,
)
from masterdesk.forms.session import FieldBinding, FormField, FormSession

__all__ = [
    "ErrorKind",
    "FieldBinding",
    "FieldError",
    "FieldRule",
    "FormField",
    "FormSchema",
    "FormSession",
    "Number",
    "Reference",
    "RequiredText",
    "ResetPolicy",
    "SubmissionPipeline",
    "SubmissionResult",
    "SubmissionStatus",
    "ValidationOutcome",
    "product_schema",
    "province_schema",
]
