"""
Normalization: raw registry rows -> GIEntry records + summary.

Each row can name up to seven states in parallel columns ("State",
"State 2" ... "State 7"). Every non-empty name is kept in ``states``;
only names found in the gazetteer get a plotted coordinate. A row with no
resolvable state produces no entry at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from gi_atlas.gazetteer import (
    INTERNATIONAL_KEYS,
    STATE_COORDINATES,
    StateCoordinate,
    domestic_key_count,
    lookup,
)
from gi_atlas.models import Coordinate, GIEntry, GISummary, ResolutionMiss

logger = logging.getLogger(__name__)

# Registry column headers
ID_COLUMN = "S.No"
NAME_COLUMN = "Geographical Indications"
CATEGORY_COLUMN = "Goods"
STATE_COLUMN = "State"

MAX_STATE_COLUMNS = 7


def state_column_keys(max_columns: int = MAX_STATE_COLUMNS) -> list[str]:
    """["State", "State 2", ..., "State N"]"""
    return [STATE_COLUMN if i == 1 else f"{STATE_COLUMN} {i}" for i in range(1, max_columns + 1)]


def collect_states(row: Mapping[str, str], max_columns: int = MAX_STATE_COLUMNS) -> list[str]:
    """Non-empty state names from the row, in column order."""
    states = []
    for key in state_column_keys(max_columns):
        name = row.get(key, "")
        if name:
            states.append(name)
    return states


def resolve_coordinates(
    entry_id: str,
    states: Iterable[str],
    table: Mapping[str, StateCoordinate] = STATE_COORDINATES,
) -> tuple[list[Coordinate], list[ResolutionMiss]]:
    """Look up every state name; misses are logged and returned, not raised."""
    coordinates: list[Coordinate] = []
    misses: list[ResolutionMiss] = []

    for name in states:
        coords = lookup(name, table)
        if coords is None:
            logger.warning("No coordinates found for state: %s", name)
            misses.append(ResolutionMiss(entry_id=entry_id, state=name))
            continue
        coordinates.append(Coordinate(state=name, lat=coords.latitude, lng=coords.longitude))

    return coordinates, misses


def build_entry(
    row: Mapping[str, str],
    table: Mapping[str, StateCoordinate] = STATE_COORDINATES,
    max_columns: int = MAX_STATE_COLUMNS,
) -> tuple[Optional[GIEntry], list[ResolutionMiss]]:
    """
    Turn one raw row into a GIEntry.
    Returns (None, misses) when none of the row's states resolved.
    """
    entry_id = row.get(ID_COLUMN, "")
    states = collect_states(row, max_columns)
    coordinates, misses = resolve_coordinates(entry_id, states, table)

    if not coordinates:
        logger.debug("Dropping GI %r (%s): no resolvable state",
                     entry_id, row.get(NAME_COLUMN, ""))
        return None, misses

    entry = GIEntry.from_states(
        id=entry_id,
        name=row.get(NAME_COLUMN, ""),
        category=row.get(CATEGORY_COLUMN, ""),
        states=states,
        coordinates=coordinates,
    )
    return entry, misses


@dataclass
class NormalizationResult:
    entries: list[GIEntry] = field(default_factory=list)
    misses: list[ResolutionMiss] = field(default_factory=list)
    rows_parsed: int = 0

    @property
    def entries_dropped(self) -> int:
        return self.rows_parsed - len(self.entries)

    @property
    def unresolved_states(self) -> list[str]:
        return sorted({m.state for m in self.misses})


def normalize_rows(
    rows: Iterable[Mapping[str, str]],
    table: Mapping[str, StateCoordinate] = STATE_COORDINATES,
    max_columns: int = MAX_STATE_COLUMNS,
) -> NormalizationResult:
    """Single pass over all rows. Rows are independent of each other."""
    result = NormalizationResult()

    for row in rows:
        result.rows_parsed += 1
        entry, misses = build_entry(row, table, max_columns)
        result.misses.extend(misses)
        if entry is not None:
            result.entries.append(entry)

    logger.info("Normalized %d rows: %d entries, %d dropped, %d unresolved state references",
                result.rows_parsed, len(result.entries), result.entries_dropped, len(result.misses))
    return result


def type_breakdown(entries: Iterable[GIEntry]) -> dict[str, int]:
    """Count per category string, exact grouping, first-seen order."""
    counts: dict[str, int] = {}
    for entry in entries:
        counts[entry.category] = counts.get(entry.category, 0) + 1
    return counts


def summarize(
    entries: list[GIEntry],
    table: Mapping[str, StateCoordinate] = STATE_COORDINATES,
    excluded: frozenset[str] = INTERNATIONAL_KEYS,
) -> GISummary:
    breakdown = type_breakdown(entries)
    return GISummary(
        total_records=len(entries),
        type_breakdown=breakdown,
        indian_states=domestic_key_count(table, excluded),
        types=sorted(breakdown),
        states=sorted({state for entry in entries for state in entry.states}),
    )
