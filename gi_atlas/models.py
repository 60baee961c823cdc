"""
Pydantic models used across the pipeline for validation and serialization.
These are pure data objects. Field aliases match the JSON keys the map viewer reads.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

# Sentinel meaning "no constraint on this dimension"
ALL = "All"


# ── Normalized records ────────────────────────────────────────────────

class Coordinate(BaseModel):
    """One plottable point: the state name as written in the source, plus its centre."""
    state: str
    lat: float
    lng: float

    model_config = {"frozen": True}


class GIEntry(BaseModel):
    """A registered Geographical Indication with its resolved state coordinates."""
    id: str = Field(..., description="Serial number from the source row, opaque")
    name: str
    category: str = Field(..., alias="type")
    states: tuple[str, ...] = ()
    coordinates: tuple[Coordinate, ...] = ()
    primary_state: str = Field("", alias="primaryState")
    state_count: int = Field(0, alias="stateCount", ge=0)

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def from_states(
        cls,
        id: str,
        name: str,
        category: str,
        states: list[str],
        coordinates: list[Coordinate],
    ) -> "GIEntry":
        """Build an entry, deriving primary_state and state_count from states."""
        return cls(
            id=id,
            name=name,
            category=category,
            states=tuple(states),
            coordinates=tuple(coordinates),
            primary_state=states[0] if states else "",
            state_count=len(states),
        )


class ResolutionMiss(BaseModel):
    """A state name that had no entry in the alias table."""
    entry_id: str = Field(..., alias="entryId")
    state: str

    model_config = {"populate_by_name": True, "frozen": True}


# ── Summary / reports ─────────────────────────────────────────────────

class GISummary(BaseModel):
    total_records: int = Field(..., alias="totalRecords")
    type_breakdown: dict[str, int] = Field(default_factory=dict, alias="typeBreakdown")
    indian_states: int = Field(..., alias="indianStates")
    # Filter bar options, without the "All" sentinel
    types: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class IngestReport(BaseModel):
    rows_parsed: int = Field(0, alias="rowsParsed")
    entries_emitted: int = Field(0, alias="entriesEmitted")
    entries_dropped: int = Field(0, alias="entriesDropped")
    resolution_misses: int = Field(0, alias="resolutionMisses")
    unresolved_states: list[str] = Field(default_factory=list, alias="unresolvedStates")
    dataset_path: Optional[str] = Field(None, alias="datasetPath")
    summary_path: Optional[str] = Field(None, alias="summaryPath")
    duration_seconds: float = Field(0.0, alias="durationSeconds")

    model_config = {"populate_by_name": True}


# ── Query models ──────────────────────────────────────────────────────

class FilterSpec(BaseModel):
    """Active query constraints. "All" leaves a dimension unconstrained."""
    type: str = ALL
    state: str = ALL
    search: str = ""

    model_config = {"frozen": True, "extra": "forbid"}

    def with_changes(self, **changes: str) -> "FilterSpec":
        return FilterSpec.model_validate({**self.model_dump(), **changes})


class FilterOptions(BaseModel):
    types: list[str] = Field(default_factory=lambda: [ALL])
    states: list[str] = Field(default_factory=lambda: [ALL])


# ── API response models ───────────────────────────────────────────────

class EntryListResponse(BaseModel):
    entries: list[GIEntry]
    total: int
    filters: FilterSpec


class NextMatchResponse(BaseModel):
    entry: Optional[GIEntry] = None
    position: Optional[int] = None
    total: int = 0


class HealthResponse(BaseModel):
    status: str = "ok"
    total_entries: int = 0
    dataset_path: Optional[str] = None
