"""Pure state machine behind the searchable selector.

The selector moves IDLE -> LOADING -> READY | ERROR and re-enters LOADING
whenever the debounced filter changes. Transitions are plain functions of
(state, event) so they can be tested without any UI.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from masterdesk.cache.models import CacheEntry, CacheStatus, Option


class SelectorPhase(str, Enum):
    """Where the selector is in its load cycle."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class SelectedValue(BaseModel):
    """The current selection, with a label to show when no loaded option matches."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str | None = None

    def as_option(self) -> Option:
        return Option(label=self.label or self.value, value=self.value)


class SelectorState(BaseModel):
    """Snapshot of a selector's load state."""

    model_config = ConfigDict(frozen=True)

    phase: SelectorPhase = SelectorPhase.IDLE
    filter_text: str | None = None
    live_options: tuple[Option, ...] = Field(default_factory=tuple)
    validating: bool = False
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        """Loading with nothing to show yet."""
        return self.phase == SelectorPhase.LOADING and not self.live_options


def filter_changed(state: SelectorState, filter_text: str) -> SelectorState:
    """A new debounced filter was applied."""
    return SelectorState(
        phase=SelectorPhase.LOADING,
        filter_text=filter_text,
        validating=True,
    )


def entry_received(state: SelectorState, entry: CacheEntry, validating: bool) -> SelectorState:
    """A cache snapshot arrived.

    Snapshots for any filter other than the current one are ignored.
    """
    if state.phase == SelectorPhase.IDLE or entry.key.filter_text != state.filter_text:
        return state

    if entry.status == CacheStatus.READY:
        return state.model_copy(
            update={
                "phase": SelectorPhase.READY,
                "live_options": entry.options,
                "validating": validating,
                "error": None,
            }
        )

    if entry.status == CacheStatus.ERROR:
        return state.model_copy(
            update={
                "phase": SelectorPhase.ERROR,
                "live_options": entry.options,
                "validating": validating,
                "error": entry.error.message if entry.error else "Could not load options",
            }
        )

    return state.model_copy(update={"phase": SelectorPhase.LOADING, "validating": validating})


def revalidation_started(state: SelectorState) -> SelectorState:
    """An explicit retry was requested for the current filter."""
    if state.phase == SelectorPhase.IDLE:
        return state
    return state.model_copy(update={"validating": True})


def merge_options(
    live: tuple[Option, ...],
    selected: SelectedValue | None,
) -> tuple[Option, ...]:
    """Render-ready options that always include the selected value.

    When the live results do not contain the selection, a synthetic option
    built from the selection's own label is put first.
    """
    if selected is None or any(option.value == selected.value for option in live):
        return live
    return (selected.as_option(), *live)
