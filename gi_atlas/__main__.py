"""CLI entrypoint for gi_atlas."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from gi_atlas.errors import GIAtlasError
from gi_atlas.logging_config import setup_logging
from gi_atlas.models import ALL

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gi-atlas")
    sub = parser.add_subparsers(dest="command", required=True)

    run_parser = sub.add_parser("run", help="Normalize the GI registry export")
    run_parser.add_argument("--input", default=None, help="Registry export (delimited text)")
    run_parser.add_argument("--output-dir", default=None, help="Directory for the JSON documents")

    query_parser = sub.add_parser("query", help="Filter a normalized dataset")
    query_parser.add_argument("--dataset", default=None)
    query_parser.add_argument("--type", default=ALL)
    query_parser.add_argument("--state", default=ALL)
    query_parser.add_argument("--search", default="")
    query_parser.add_argument("--next", dest="current", default=None, metavar="ID",
                              help="Print the match after this GI id instead of the full list")
    query_parser.add_argument("--after", type=int, default=None, metavar="POSITION",
                              help="Print the match after this position in the filtered list")
    query_parser.add_argument("--first", action="store_true",
                              help="Print the first match (next with no selection)")

    sub.add_parser("serve", help="Serve the dataset over HTTP")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    try:
        if args.command == "run":
            _run(args.input, args.output_dir)
        elif args.command == "query":
            _query(args.dataset, args.type, args.state, args.search, args.current, args.first, args.after)
        elif args.command == "serve":
            _serve()
    except GIAtlasError as e:
        logger.error("Error: %s", e)
        return EXIT_FATAL
    return EXIT_SUCCESS


def _run(input_path: Optional[str], output_dir: Optional[str]) -> None:
    from gi_atlas.pipeline import run_pipeline

    report = run_pipeline(input_path, output_dir)
    print(f"Pipeline completed: {report.model_dump(by_alias=True)}")


def _query(
    dataset: Optional[str],
    type_: str,
    state: str,
    search: str,
    current_id: Optional[str],
    first: bool,
    after: Optional[int] = None,
) -> None:
    from gi_atlas.models import FilterSpec
    from gi_atlas.pipeline import load_dataset
    from gi_atlas.query import QuerySession, advance

    session = QuerySession(load_dataset(dataset), FilterSpec(type=type_, state=state, search=search))

    if after is not None:
        matched = session.results()
        following = advance(matched, after)
        entry = matched[following] if following is not None else None
        print(json.dumps(entry.model_dump(by_alias=True, mode="json") if entry else None,
                         ensure_ascii=False, indent=2))
        return

    if current_id is None and not first:
        payload = [e.model_dump(by_alias=True, mode="json") for e in session.results()]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    if current_id is not None:
        candidates = [*session.results(), *session.entries]
        session.select(next((e for e in candidates if e.id == current_id), None))
    entry = session.next_match()
    print(json.dumps(entry.model_dump(by_alias=True, mode="json") if entry else None,
                     ensure_ascii=False, indent=2))


def _serve() -> None:
    import uvicorn

    from gi_atlas.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "gi_atlas.api:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=(settings.env == "development"),
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main())
