"""Searchable selector: remote options filtered by typed text.

Composes the revalidating cache and the debounce controller. The selector
subscribes to exactly one query key at a time (the current debounced
filter) and ignores snapshots for any other key.
"""

from collections.abc import Callable
from typing import Any, Protocol

from masterdesk.cache.models import CacheEntry, Option, QueryKey
from masterdesk.cache.revalidating import RevalidatingCache
from masterdesk.observability.logging import get_logger
from masterdesk.selection.debounce import DEFAULT_DEBOUNCE_SECONDS, DebouncedQueryController
from masterdesk.selection.state import (
    SelectedValue,
    SelectorPhase,
    SelectorState,
    entry_received,
    filter_changed,
    merge_options,
    revalidation_started,
)

logger = get_logger(__name__)


class BoundField(Protocol):
    """The slice of a form field binding the selector writes through."""

    @property
    def value(self) -> Any: ...

    def set_value(self, value: Any) -> None: ...


class SearchableSelector:
    """Selectable list of remote options for one resource.

    The selected value comes from the bound form field when one is given,
    so a form reset is reflected without extra wiring. Labels seen in any
    loaded page, plus the seed label, are remembered so the selection can
    always be rendered.
    """

    def __init__(
        self,
        cache: RevalidatingCache,
        resource: str,
        *,
        field: BoundField | None = None,
        selected: SelectedValue | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: Callable[[SelectorState], None] | None = None,
    ) -> None:
        """Initialize the selector.

        Args:
            cache: Shared query cache
            resource: Resource name whose fetcher is registered in the cache
            field: Form field the selection is written to
            selected: Initial selection, typically the edited entity's
                reference plus its embedded label
            debounce_seconds: Quiet period before typed text is queried
            on_change: Called with every new state
        """
        self._cache = cache
        self._resource = resource
        self._field = field
        self._on_change = on_change
        self._state = SelectorState()
        self._key: QueryKey | None = None
        # Labels of the live options, the current selection and the seed only
        self._labels: dict[str, str] = {}
        self._seed = selected
        self._selected_value: str | None = None
        self._debouncer = DebouncedQueryController(self._apply_filter, debounce_seconds)

        if selected is not None:
            self._selected_value = selected.value
            if selected.label:
                self._labels[selected.value] = selected.label

    @property
    def state(self) -> SelectorState:
        return self._state

    @property
    def phase(self) -> SelectorPhase:
        return self._state.phase

    @property
    def key(self) -> QueryKey | None:
        """Query key of the current filter."""
        return self._key

    @property
    def filter_text(self) -> str | None:
        return self._state.filter_text

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def is_validating(self) -> bool:
        return self._state.validating

    @property
    def show_pending(self) -> bool:
        """Whether to show a pending indicator instead of "no results"."""
        return self.is_loading or self.is_validating

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def selected(self) -> SelectedValue | None:
        """Current selection with the best label known for it."""
        value = self._current_value()
        if value is None:
            return None
        return SelectedValue(value=value, label=self._labels.get(value))

    @property
    def options(self) -> tuple[Option, ...]:
        """Live options merged with the current selection."""
        return merge_options(self._state.live_options, self.selected)

    def open(self) -> None:
        """Load the unfiltered list, as a freshly mounted selector does."""
        if self._key is None:
            self._apply_filter("")

    def search(self, text: str) -> None:
        """Feed one keystroke of filter text."""
        self._debouncer.on_input(text)

    def select(self, value: str, label: str | None = None) -> None:
        """Select an option and write it to the bound field.

        This only updates the field (marking it dirty); it never submits.
        """
        if label is None:
            label = next((o.label for o in self._state.live_options if o.value == value), None)
        if label is not None:
            self._labels[value] = label

        self._selected_value = value
        if self._field is not None:
            self._field.set_value(value)
        self._emit()

    def retry(self) -> None:
        """Refetch the current filter after a failure."""
        if self._key is None or self._cache.revalidate(self._key) is None:
            return
        self._transition(revalidation_started(self._state))

    def close(self) -> None:
        """Tear down: cancel the pending debounce and stop listening."""
        self._debouncer.close()
        if self._key is not None:
            self._cache.unsubscribe(self._key, self._on_entry)

    def _apply_filter(self, text: str) -> None:
        key = QueryKey.search(self._resource, text)
        if key == self._key:
            return

        if self._key is not None:
            self._cache.unsubscribe(self._key, self._on_entry)
        self._key = key

        logger.debug("selector_filter_applied", resource=self._resource, filter_text=text)
        self._transition(filter_changed(self._state, text))
        entry = self._cache.subscribe(key, self._on_entry)
        self._on_entry(entry)

    def _on_entry(self, entry: CacheEntry) -> None:
        if entry.key != self._key:
            return
        self._remember_labels(entry.options)
        self._transition(entry_received(self._state, entry, self._cache.is_validating(entry.key)))

    def _current_value(self) -> str | None:
        value = self._field.value if self._field is not None else self._selected_value
        if value is None or value == "":
            return None
        return str(value)

    def _remember_labels(self, options: tuple[Option, ...]) -> None:
        keep = {self._current_value(), self._seed.value if self._seed else None}
        self._labels = {v: label for v, label in self._labels.items() if v in keep}
        self._labels.update((o.value, o.label) for o in options)

    def _transition(self, state: SelectorState) -> None:
        self._state = state
        self._emit()

    def _emit(self) -> None:
        if self._on_change is not None:
            self._on_change(self._state)
