"""
Central configuration loaded from environment variables with sensible defaults.
File names match what the map viewer fetches.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path


@dataclass(frozen=True)
class IngestConfig:
    input_path: str = os.getenv(
        "GI_INPUT_PATH", "Total Registered GI details of GI Application in India.txt"
    )
    output_dir: str = os.getenv("GI_OUTPUT_DIR", "public/script")
    dataset_filename: str = os.getenv("GI_DATASET_FILENAME", "processedGIData.json")
    summary_filename: str = os.getenv("GI_SUMMARY_FILENAME", "giDataSummary.json")
    delimiter: str = os.getenv("GI_DELIMITER", ",")
    # "State", "State 2", ... "State N"
    max_state_columns: int = int(os.getenv("GI_MAX_STATE_COLUMNS", "7"))
    # utf-8-sig drops a leading BOM, which spreadsheet exports often add
    encoding: str = "utf-8-sig"

    def output_paths(self, output_dir: str | Path | None = None) -> tuple[Path, Path]:
        """(dataset, summary) paths under output_dir, or the configured directory."""
        out_dir = Path(output_dir or self.output_dir)
        return out_dir / self.dataset_filename, out_dir / self.summary_filename


@dataclass(frozen=True)
class APIConfig:
    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("API_PORT", "8000"))
    max_results: int = int(os.getenv("API_MAX_RESULTS", "1000"))


@dataclass(frozen=True)
class Settings:
    ingest: IngestConfig = field(default_factory=IngestConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    env: str = os.getenv("APP_ENV", "development")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
