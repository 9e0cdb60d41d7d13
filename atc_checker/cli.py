"""Command-line entrypoint for export integrity validation."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from atc_checker.application.use_cases import validate_batch
from atc_checker.config import SETTINGS
from atc_checker.domain.models import FileStatus, ValidationOptions
from atc_checker.domain.results import ValidationOutcome
from atc_checker.presentation.summary import render_csv, render_xlsx

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate ATC export files and write integrity reports")
    parser.add_argument("paths", nargs="+", type=Path, help="CSV export files or folders containing them")
    parser.add_argument("--detail", action="store_true", default=SETTINGS.detail, help="Report every check, even clean ones")
    parser.add_argument(
        "--remove-inconsistent",
        action="store_true",
        default=SETTINGS.remove_inconsistencies,
        help="Exclude sector rows failing the config_id checks from later checks",
    )
    parser.add_argument("--workers", type=int, default=SETTINGS.max_workers, help="Files validated in parallel")
    parser.add_argument("--summary", type=Path, help="Write a batch summary (.csv or .xlsx)")
    parser.add_argument("--log-file", type=Path, default=SETTINGS.log_file, help="Append log records to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details")
    return parser.parse_args(argv)


def configure_logging(log_file: Path | None, verbose: bool) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT, handlers=handlers)


def expand_paths(paths: Sequence[Path]) -> list[Path]:
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir():
            expanded.extend(sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() == ".csv"))
        else:
            expanded.append(path)
    return expanded


def write_summary(target: Path, outcomes: Sequence[ValidationOutcome]) -> None:
    if target.suffix.lower() == ".xlsx":
        target.write_bytes(render_xlsx(outcomes))
    else:
        target.write_bytes(render_csv(outcomes))


def print_progress(index: int, total: int, outcome: ValidationOutcome) -> None:
    print(f"[{index}/{total}] {outcome.status}: {outcome.path.name}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.log_file, args.verbose)

    paths = expand_paths(args.paths)
    if not paths:
        print("No CSV files to validate.")
        return 0

    options = ValidationOptions(detail=args.detail, remove_inconsistencies=args.remove_inconsistent)
    result = validate_batch(paths, options=options, max_workers=max(1, args.workers), progress=print_progress)

    print("Validation Summary")
    print("==================")
    print(f"Files: {len(result.outcomes)}")
    print(f"Validated: {sum(1 for o in result.outcomes if o.status is FileStatus.VALIDATED)}")
    print(f"Errors: {len(result.failed)}")
    print(f"Unknown type: {len(result.skipped)}")

    for outcome in result.outcomes:
        if outcome.report is not None and outcome.report.has_issues():
            titles = ", ".join(section.title for section in outcome.report.sections_with_issues())
            print(f"- {outcome.path.name}: {titles}")
        elif outcome.error is not None:
            print(f"- {outcome.path.name}: {outcome.error.message} ({outcome.error.detail})")

    if args.summary is not None:
        write_summary(args.summary, result.outcomes)
        print(f"Summary written to {args.summary}")

    return 0 if result.all_succeeded() else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
