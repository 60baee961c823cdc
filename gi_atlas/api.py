"""
FastAPI service exposing the normalized GI dataset to the map viewer.

Endpoints:
  GET /entries        - Filtered entries (type, state, search)
  GET /entries/next   - Next match after the current selection
  GET /entries/{id}   - Single entry by serial number
  GET /filters        - Selectable type/state values
  GET /summary        - Type breakdown and record counts
  GET /health         - Dataset health
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from gi_atlas.config import get_settings
from gi_atlas.errors import DatasetLoadError
from gi_atlas.models import (
    ALL,
    EntryListResponse,
    FilterOptions,
    FilterSpec,
    GIEntry,
    GISummary,
    HealthResponse,
    NextMatchResponse,
)
from gi_atlas.normalize import summarize
from gi_atlas.pipeline import load_dataset
from gi_atlas.query import advance, filter_entries, filter_options

logger = logging.getLogger(__name__)


def create_app(dataset_path: Optional[str | Path] = None) -> FastAPI:
    """Build the app. The dataset is loaded once, at startup, and never modified."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        path = Path(dataset_path or get_settings().ingest.output_paths()[0])
        logger.info("Loading GI dataset from %s", path)
        try:
            entries = load_dataset(path)
        except DatasetLoadError as e:
            # Degrade to an empty dataset rather than refusing to start
            logger.error("Error loading GI data: %s", e)
            entries = []
        app.state.entries = tuple(entries)
        app.state.dataset_path = str(path)
        logger.info("Serving %d GI entries", len(entries))
        yield
        logger.info("API server shut down.")

    app = FastAPI(
        title="GI Atlas API",
        description="Query India's registered Geographical Indications by type, state and name",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    _register_routes(app)
    return app


def _entries(request: Request) -> tuple[GIEntry, ...]:
    return request.app.state.entries


def _spec(type: str, state: str, search: str) -> FilterSpec:
    return FilterSpec(type=type, state=state, search=search)


# ══════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ══════════════════════════════════════════════════════════════════════

def _register_routes(app: FastAPI) -> None:

    @app.get("/entries", response_model=EntryListResponse)
    async def list_entries(
        request: Request,
        type: str = Query(ALL, description="GI type, or All"),
        state: str = Query(ALL, description="State name, or All"),
        search: str = Query("", max_length=200, description="Case-insensitive name substring"),
        limit: Optional[int] = Query(None, ge=1, description="Max results"),
        offset: int = Query(0, ge=0, description="Pagination offset"),
    ):
        """Entries matching every given constraint, in dataset order."""
        max_results = get_settings().api.max_results
        limit = min(limit or max_results, max_results)

        spec = _spec(type, state, search)
        matched = filter_entries(_entries(request), spec)
        return EntryListResponse(
            entries=matched[offset:offset + limit],
            total=len(matched),
            filters=spec,
        )

    @app.get("/entries/next", response_model=NextMatchResponse)
    async def next_entry(
        request: Request,
        type: str = Query(ALL),
        state: str = Query(ALL),
        search: str = Query("", max_length=200),
        current: Optional[str] = Query(None, description="Id of the selected entry"),
        position: Optional[int] = Query(None, ge=0, description="Position of the selected entry in the filtered set"),
    ):
        """
        Advance the selection: first match when nothing (or an unknown id) is
        selected, otherwise the following match, wrapping around.

        Ids may repeat, so a caller walking the set should pass back the
        returned position; current is only used when position is absent or
        out of range.
        """
        entries = _entries(request)
        matched = filter_entries(entries, _spec(type, state, search))

        if not matched:
            # No matches: the selection comes back unchanged
            selected = None
            if current is not None:
                selected = next((e for e in entries if e.id == current), None)
            return NextMatchResponse(entry=selected, position=None, total=0)

        index = None
        if position is not None and position < len(matched):
            index = position
        elif current is not None:
            index = next((i for i, e in enumerate(matched) if e.id == current), None)

        following = advance(matched, index)
        return NextMatchResponse(entry=matched[following], position=following, total=len(matched))

    @app.get("/entries/{entry_id}", response_model=GIEntry)
    async def get_entry(request: Request, entry_id: str):
        """First entry carrying this serial number."""
        for entry in _entries(request):
            if entry.id == entry_id:
                return entry
        raise HTTPException(404, "GI entry not found")

    @app.get("/filters", response_model=FilterOptions)
    async def get_filters(request: Request):
        return filter_options(_entries(request))

    @app.get("/summary", response_model=GISummary)
    async def get_summary(request: Request):
        return summarize(list(_entries(request)))

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        entries = _entries(request)
        return HealthResponse(
            status="ok" if entries else "empty",
            total_entries=len(entries),
            dataset_path=request.app.state.dataset_path,
        )


app = create_app()
