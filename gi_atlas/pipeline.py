"""
Batch pipeline.
Ties together read -> parse -> normalize -> summarize -> write in one run.
Called from the CLI; deterministic, so re-running on the same input
rewrites byte-identical files.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from gi_atlas.config import get_settings
from gi_atlas.errors import DatasetLoadError
from gi_atlas.ingest import parse_rows, read_source
from gi_atlas.models import GIEntry, GISummary, IngestReport
from gi_atlas.normalize import normalize_rows, summarize

logger = logging.getLogger(__name__)


def dumps_document(payload: Any) -> str:
    """Stable JSON text for an output artifact."""
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def dataset_payload(entries: list[GIEntry]) -> list[dict]:
    return [entry.model_dump(by_alias=True, mode="json") for entry in entries]


def summary_payload(summary: GISummary) -> dict:
    return summary.model_dump(by_alias=True, mode="json")


def _write_documents(documents: dict[Path, str]) -> None:
    """
    Stage every document as a .tmp sibling, then rename them all into place.
    A failed write replaces nothing; leftover .tmp files are always removed.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for path, text in documents.items():
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_name(path.name + ".tmp")
            staged.append((tmp, path))
            tmp.write_text(text, encoding="utf-8")
        for tmp, path in staged:
            os.replace(tmp, path)
    finally:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)


def run_pipeline(
    input_path: Optional[str | Path] = None,
    output_dir: Optional[str | Path] = None,
) -> IngestReport:
    """
    Execute the full batch transform:
      1. Read the registry export (SourceReadError aborts, nothing is written)
      2. Parse rows and normalize them into GI entries
      3. Summarize and write both JSON documents

    Returns an IngestReport summarizing the run.
    """
    settings = get_settings().ingest
    input_path = Path(input_path or settings.input_path)
    dataset_path, summary_path = settings.output_paths(output_dir)

    start_time = time.monotonic()

    # ── Stage 1: Read + parse ──────────────────────────────────────────
    logger.info("=== Reading %s ===", input_path)
    text = read_source(input_path, encoding=settings.encoding)
    rows = parse_rows(text, delimiter=settings.delimiter)
    logger.info("Parsed %d GI records", len(rows))

    # ── Stage 2: Normalize ─────────────────────────────────────────────
    result = normalize_rows(rows, max_columns=settings.max_state_columns)
    summary = summarize(result.entries)
    logger.info("Processed %d GI records with coordinates", summary.total_records)
    for category, count in summary.type_breakdown.items():
        logger.info("   %s: %d", category, count)
    if result.misses:
        logger.warning("%d state references unresolved (%d distinct): %s",
                       len(result.misses), len(result.unresolved_states),
                       ", ".join(result.unresolved_states))

    # ── Stage 3: Write ─────────────────────────────────────────────────
    # Serialize both before touching disk so a failure leaves no partial output
    dataset_text = dumps_document(dataset_payload(result.entries))
    summary_text = dumps_document(summary_payload(summary))
    _write_documents({dataset_path: dataset_text, summary_path: summary_text})
    logger.info("Saved dataset to %s", dataset_path)
    logger.info("Saved summary to %s", summary_path)

    elapsed = time.monotonic() - start_time
    logger.info("=== Pipeline complete in %.2fs ===", elapsed)

    return IngestReport(
        rows_parsed=result.rows_parsed,
        entries_emitted=len(result.entries),
        entries_dropped=result.entries_dropped,
        resolution_misses=len(result.misses),
        unresolved_states=result.unresolved_states,
        dataset_path=str(dataset_path),
        summary_path=str(summary_path),
        duration_seconds=round(elapsed, 2),
    )


def load_dataset(path: Optional[str | Path] = None) -> list[GIEntry]:
    """Read a normalized dataset written by run_pipeline."""
    path = Path(path or get_settings().ingest.output_paths()[0])
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DatasetLoadError(f"Cannot load dataset {path}: {e}") from e

    if not isinstance(raw, list):
        raise DatasetLoadError(f"Dataset {path} is not a JSON array")

    try:
        return [GIEntry.model_validate(item) for item in raw]
    except ValidationError as e:
        raise DatasetLoadError(f"Dataset {path} failed validation: {e}") from e
