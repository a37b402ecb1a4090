"""Searchable selection: debounced remote filtering with a pure state machine."""

from masterdesk.selection.debounce import DebouncedQueryController
from masterdesk.selection.selector import BoundField, SearchableSelector
from masterdesk.selection.state import (
    SelectedValue,
    SelectorPhase,
    SelectorState,
    entry_received,
    filter_changed,
    merge_options,
    revalidation_started,
)

__all__ = [
    "BoundField",
    "DebouncedQueryController",
    "SearchableSelector",
    "SelectedValue",
    "SelectorPhase",
    "SelectorState",
    "entry_received",
    "filter_changed",
    "merge_options",
    "revalidation_started",
]
