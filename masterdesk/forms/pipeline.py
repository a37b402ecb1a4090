"""Form submission: validate, save remotely, then reset or surface the failure.

On success the form is reset to a fresh baseline, the cache is reconciled
with the saved entity, ``on_saved`` runs and a success notification is
emitted. On failure the user's input is left untouched so they can fix
and resubmit; nothing is retried automatically.
"""

import inspect
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from masterdesk.cache.models import QueryKey
from masterdesk.cache.revalidating import RevalidatingCache
from masterdesk.client.resources import ResourceAPI
from masterdesk.errors import SubmissionError
from masterdesk.forms.errors import FieldError
from masterdesk.forms.session import FormSession
from masterdesk.notifications.center import NotificationCenter
from masterdesk.observability.logging import get_logger
from masterdesk.observability.metrics import record_submission

logger = get_logger(__name__)

OnSaved = Callable[[Any], Any]


class SubmissionStatus(str, Enum):
    """Outcome of a submit attempt."""

    SAVED = "saved"  # Remote call succeeded, form reset
    INVALID = "invalid"  # Blocked by field errors, no network call
    FAILED = "failed"  # Remote call failed, input kept
    BUSY = "busy"  # A submission was already running


class ResetPolicy(str, Enum):
    """What the form holds after a successful save."""

    SUBMITTED = "submitted"  # Keep the saved values (edit forms)
    BLANK = "blank"  # Start over empty (create forms)


class SubmissionResult(BaseModel):
    """What happened to a submit attempt."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: SubmissionStatus
    errors: dict[str, FieldError] = Field(default_factory=dict)
    entity: Any = None
    error: SubmissionError | None = None

    @property
    def ok(self) -> bool:
        return self.status == SubmissionStatus.SAVED


class SubmissionPipeline:
    """Runs one form's submissions against a resource.

    With ``entity_id`` the pipeline updates that entity, otherwise it
    creates a new one.
    """

    def __init__(
        self,
        session: FormSession[Any],
        resource: ResourceAPI[Any],
        notifications: NotificationCenter,
        *,
        entity_id: str | None = None,
        cache: RevalidatingCache | None = None,
        on_saved: OnSaved | None = None,
        reset_policy: ResetPolicy | None = None,
        success_title: str = "Success",
        success_message: str = "",
        failure_title: str = "Save failed",
    ) -> None:
        self.session = session
        self.resource = resource
        self.entity_id = entity_id
        self._notifications = notifications
        self._cache = cache
        self._on_saved = on_saved
        self._reset_policy = reset_policy or (
            ResetPolicy.SUBMITTED if entity_id is not None else ResetPolicy.BLANK
        )
        self._success_title = success_title
        self._success_message = success_message
        self._failure_title = failure_title

    async def submit(self) -> SubmissionResult:
        """Validate and save the form."""
        session = self.session
        resource_name = self.resource.name

        if session.is_submitting:
            logger.debug("submission_ignored_busy", resource=resource_name)
            return SubmissionResult(status=SubmissionStatus.BUSY)

        session.validate()
        if session.has_errors:
            logger.info(
                "submission_rejected",
                resource=resource_name,
                fields=sorted(session.errors),
            )
            record_submission(resource_name, SubmissionStatus.INVALID.value)
            return SubmissionResult(status=SubmissionStatus.INVALID, errors=session.errors)

        payload = session.payload()
        session.is_submitting = True
        try:
            if self.entity_id is None:
                entity = await self.resource.create(payload)
            else:
                entity = await self.resource.update(self.entity_id, payload)
        except Exception as e:
            error = SubmissionError(str(e), resource=resource_name, cause=e)
            logger.error(
                "submission_failed",
                resource=resource_name,
                entity_id=self.entity_id,
                error=str(e),
                status_code=getattr(e, "status_code", None),
            )
            record_submission(resource_name, SubmissionStatus.FAILED.value)
            self._notifications.error(self._failure_title, error.message)
            return SubmissionResult(status=SubmissionStatus.FAILED, error=error)
        finally:
            session.is_submitting = False

        if self._reset_policy == ResetPolicy.SUBMITTED:
            session.reset(payload.model_dump())
        else:
            session.reset(session.schema.blank_values())

        self._reconcile(entity)
        await self._run_on_saved(entity)

        logger.info("submission_saved", resource=resource_name, entity_id=self._saved_id(entity))
        record_submission(resource_name, SubmissionStatus.SAVED.value)
        self._notifications.success(self._success_title, self._success_message)
        return SubmissionResult(status=SubmissionStatus.SAVED, entity=entity)

    def _saved_id(self, entity: Any) -> str | None:
        if self.entity_id is not None:
            return self.entity_id
        entity_id = getattr(entity, "id", None)
        return str(entity_id) if entity_id is not None else None

    def _reconcile(self, entity: Any) -> None:
        if self._cache is None:
            return
        self._cache.invalidate(self.resource.name)
        entity_id = self._saved_id(entity)
        if entity_id is not None and entity is not None:
            self._cache.prime(QueryKey.detail(self.resource.name, entity_id), entity)

    async def _run_on_saved(self, entity: Any) -> None:
        if self._on_saved is None:
            return
        try:
            result = self._on_saved(entity)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("on_saved_failed", resource=self.resource.name)
