"""
Filter / search evaluation over the normalized GI entries.

Everything here is a pure function of (entries, spec[, current]). The entry
list is never mutated and results keep the original list order.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from gi_atlas.models import ALL, FilterOptions, FilterSpec, GIEntry

logger = logging.getLogger(__name__)


def matches(entry: GIEntry, spec: FilterSpec) -> bool:
    """Type, state and name-substring constraints, all of which must hold."""
    if spec.type != ALL and entry.category != spec.type:
        return False
    if spec.state != ALL and spec.state not in entry.states:
        return False
    return spec.search.lower() in entry.name.lower()


def filter_entries(entries: Iterable[GIEntry], spec: FilterSpec) -> list[GIEntry]:
    return [entry for entry in entries if matches(entry, spec)]


def _position(filtered: Sequence[GIEntry], current: GIEntry) -> Optional[int]:
    for i, entry in enumerate(filtered):
        if entry == current:
            return i
    return None


def advance(filtered: Sequence[GIEntry], index: Optional[int] = None) -> Optional[int]:
    """
    Position of the next match in an already filtered list.
    None or an out-of-range index restarts at 0; an empty list gives None.
    """
    if not filtered:
        return None
    if index is None or not 0 <= index < len(filtered):
        return 0
    return (index + 1) % len(filtered)


def next_match(
    entries: Sequence[GIEntry],
    spec: FilterSpec,
    current: Optional[GIEntry] = None,
) -> Optional[GIEntry]:
    """
    Advance the selection cursor through the filtered set.

      - empty filtered set: selection unchanged (no-op)
      - no selection: first match
      - selection in the filtered set: the following match, wrapping to the first
      - selection filtered out: first match
    """
    filtered = filter_entries(entries, spec)
    if not filtered:
        return current

    if current is None:
        return filtered[0]

    index = _position(filtered, current)
    if index is None:
        logger.debug("Selection %r not in filtered set, restarting at first match", current.id)
        return filtered[0]

    return filtered[advance(filtered, index)]


def filter_options(entries: Iterable[GIEntry]) -> FilterOptions:
    """Selectable type/state values: "All" followed by the sorted distinct values."""
    types: set[str] = set()
    states: set[str] = set()
    for entry in entries:
        types.add(entry.category)
        states.update(entry.states)
    return FilterOptions(types=[ALL, *sorted(types)], states=[ALL, *sorted(states)])


class QuerySession:
    """
    Viewer-side query state: the active FilterSpec plus the selected entry.
    The entry list is fixed for the session's lifetime.
    """

    def __init__(self, entries: Sequence[GIEntry], spec: Optional[FilterSpec] = None):
        self._entries: tuple[GIEntry, ...] = tuple(entries)
        self.spec = spec or FilterSpec()
        self.selected: Optional[GIEntry] = None

    @property
    def entries(self) -> tuple[GIEntry, ...]:
        return self._entries

    def results(self) -> list[GIEntry]:
        return filter_entries(self._entries, self.spec)

    def options(self) -> FilterOptions:
        return filter_options(self._entries)

    def set_filter(self, **changes: str) -> FilterSpec:
        self.spec = self.spec.with_changes(**changes)
        return self.spec

    def reset_filters(self) -> FilterSpec:
        self.spec = FilterSpec()
        return self.spec

    def select(self, entry: Optional[GIEntry]) -> None:
        self.selected = entry

    def clear_selection(self) -> None:
        self.selected = None

    def next_match(self) -> Optional[GIEntry]:
        self.selected = next_match(self._entries, self.spec, self.selected)
        return self.selected
