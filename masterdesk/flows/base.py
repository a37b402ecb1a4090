"""Common shape of an open record form."""

from typing import Any

from masterdesk.forms.pipeline import SubmissionPipeline, SubmissionResult
from masterdesk.forms.session import FormSession
from masterdesk.selection.selector import SearchableSelector


class RecordForm:
    """A form session, its selectors and its submission pipeline.

    Closing the form tears down the selectors (pending debounce timers and
    cache listeners); the session itself needs no cleanup.
    """

    def __init__(
        self,
        session: FormSession[Any],
        pipeline: SubmissionPipeline,
        selectors: dict[str, SearchableSelector] | None = None,
    ) -> None:
        self.session = session
        self.pipeline = pipeline
        self.selectors = selectors or {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(resource={self.pipeline.resource.name!r}, "
            f"entity_id={self.pipeline.entity_id!r})"
        )

    async def __aenter__(self) -> "RecordForm":
        return self

    async def __aexit__(self, *args: Any) -> None:
        self.close()

    def selector(self, field_name: str) -> SearchableSelector:
        return self.selectors[field_name]

    async def submit(self) -> SubmissionResult:
        return await self.pipeline.submit()

    def close(self) -> None:
        for selector in self.selectors.values():
            selector.close()
