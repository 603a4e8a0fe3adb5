# =============================================================================
# artist_enrichment/cli/enrich.py: Inspect and Enrich Commands
# =============================================================================
#
# Two subcommands over ArtistEnrichmentService:
#
#   inspect  Dry run for one or more names.  Names come from the command
#            line and/or a text file (one per line, '#' comments allowed)
#            and are deduplicated case-insensitively, so a pasted lineup
#            with repeats only costs one lookup per artist.  Prints a block
#            per name, then a summary table and hit counts.
#
#   enrich   Batch enrichment of a JSON file holding a list of records
#            ({"id", "name", "canonical_id", "genres", ...}).  Records that
#            already have an MBID or a description are skipped unless
#            --force is given; forced records are re-enriched from scratch
#            (old image deleted first).  The mutated records are written
#            back to the input file or to --output.
#
# Usage examples:
#   python -m artist_enrichment.cli inspect Butterwegge "Die Ärzte"
#   python -m artist_enrichment.cli inspect --file lineup.txt --json
#   python -m artist_enrichment.cli enrich artists.json
#   python -m artist_enrichment.cli enrich artists.json --force -o out.json
#
# Exit codes: 0 success, 1 bad input or configuration.
# =============================================================================

"""Standalone CLI for dry-run inspection and batch artist enrichment.

Usage::

    python -m artist_enrichment.cli inspect NAME [NAME ...] [--file PATH] [--json]
    python -m artist_enrichment.cli enrich RECORDS.json [--force] [--output PATH]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from artist_enrichment.config.loader import load_settings
from artist_enrichment.models.artist import ArtistRecord
from artist_enrichment.models.enrichment import EnrichmentReport
from artist_enrichment.utils.errors import ConfigurationError
from artist_enrichment.utils.logging import configure_logging

_SEPARATOR = "=" * 60


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------


def _read_names(names: list[str], file_path: str | None = None) -> list[str]:
    """Collect names from argv and an optional file, dropping duplicates.

    Comparison is case-insensitive on the trimmed name; the first spelling
    seen is kept.
    """
    candidates = list(names)
    if file_path:
        for line in Path(file_path).read_text(encoding="utf-8").splitlines():
            if not line.lstrip().startswith("#"):
                candidates.append(line)

    seen: set[str] = set()
    unique: list[str] = []
    for name in candidates:
        name = name.strip()
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        unique.append(name)
    return unique


def _load_records(path: Path) -> list[ArtistRecord]:
    """Parse a JSON list of records.

    Raises:
        ValueError: If the file is not a JSON list of valid records.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON list of records")

    try:
        return [ArtistRecord.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise ValueError(f"Invalid record in {path}: {exc}") from exc


def _dump_records(records: list[ArtistRecord]) -> str:
    return json.dumps(
        [record.model_dump(mode="json") for record in records],
        indent=2,
        ensure_ascii=False,
    )


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _report_row(report: EnrichmentReport) -> dict[str, Any]:
    """Flatten a report into one JSON-friendly row."""
    match = report.match
    summary = report.summary
    return {
        "query": report.query,
        "mbid": match.id if match else None,
        "name": match.display_name if match else None,
        "kind": match.kind.value if match else None,
        "disambiguation": match.disambiguation if match else None,
        "genres": list(match.genres) if match else [],
        "directory_reference_url": match.reference_url if match else None,
        "summary_title": summary.title if summary else None,
        "summary_source": report.summary_source.value if report.summary_source else None,
        "disambiguation_page": bool(summary and summary.is_disambiguation),
        "reference_url": report.reference_url,
        "description": report.description,
        "image_url": report.image_url,
    }


def _format_report(report: EnrichmentReport) -> str:
    """Human-readable block for one inspected name."""
    row = _report_row(report)
    lines = [f"\n  {report.query}", "  " + "-" * 40]

    if report.match is None:
        lines.append("  MusicBrainz: no match")
    else:
        lines.append(f"  MusicBrainz: {row['name']} [{row['kind']}] {row['mbid']}")
        if row["disambiguation"]:
            lines.append(f"    ({row['disambiguation']})")
        lines.append(f"    Genres:    {', '.join(row['genres']) or '-'}")
        lines.append(f"    Wikipedia: {row['directory_reference_url'] or '-'}")

    if report.summary is None:
        lines.append("  Wikipedia:   no summary")
    else:
        source = "link" if row["summary_source"] == "REFERENCE_URL" else "search"
        lines.append(f"  Wikipedia:   {row['summary_title']} (via {source})")
        if row["disambiguation_page"]:
            lines.append("    Warning: disambiguation page")
        if report.description:
            preview = report.description[:200] + ("..." if len(report.description) > 200 else "")
            lines.append(f"    {preview}")
        lines.append(f"    Image:     {report.image_url or '-'}")

    if report.reference_url:
        lines.append(f"  Link kept:   {report.reference_url}")

    return "\n".join(lines)


def _format_summary(reports: list[EnrichmentReport]) -> str:
    """Table of all names plus hit counts."""
    total = len(reports)
    width = max([len("Name")] + [len(r.query) for r in reports])

    lines = [
        "",
        _SEPARATOR,
        f"  {'Name'.ljust(width)}  {'MBID':<5}  {'Summary':<7}  {'Image':<5}  Genres",
        "  " + "-" * (width + 34),
    ]
    for r in reports:
        genres = ", ".join(r.match.genres) if r.match else ""
        lines.append(
            f"  {r.query.ljust(width)}  "
            f"{_yes_no(r.found_directory_match):<5}  "
            f"{_yes_no(r.found_summary):<7}  "
            f"{_yes_no(r.image_url is not None):<5}  "
            f"{genres}"
        )

    lines.append("")
    lines.append(f"  MusicBrainz matches: {sum(r.found_directory_match for r in reports)}/{total}")
    lines.append(f"  Wikipedia summaries: {sum(r.found_summary for r in reports)}/{total}")
    lines.append(f"  Images available:    {sum(r.image_url is not None for r in reports)}/{total}")
    lines.append(_SEPARATOR)
    return "\n".join(lines)


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _handle_inspect(args: argparse.Namespace, service) -> int:  # noqa: ANN001
    """Dry-run every requested name and print the reports."""
    try:
        names = _read_names(args.names, args.file)
    except OSError as exc:
        print(f"Error: Cannot read names file: {exc}", file=sys.stderr)
        return 1

    if not names:
        print("Error: No artist names given.", file=sys.stderr)
        return 1

    reports: list[EnrichmentReport] = []
    for name in names:
        print(f"Inspecting: {name}", file=sys.stderr)
        reports.append(await service.inspect(name))

    if args.json_output:
        print(json.dumps([_report_row(r) for r in reports], indent=2, ensure_ascii=False))
        return 0

    print(_SEPARATOR)
    print("  Artist Enrichment: Dry Run")
    print(_SEPARATOR)
    for report in reports:
        print(_format_report(report))
    print(_format_summary(reports))
    return 0


async def _handle_enrich(args: argparse.Namespace, service) -> int:  # noqa: ANN001
    """Enrich a JSON file of records and write them back."""
    input_path = Path(args.records)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        records = _load_records(input_path)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    enriched = skipped = no_data = 0
    for record in records:
        if record.is_enriched and not args.force:
            skipped += 1
            continue

        if args.force:
            await service.re_enrich(record)
        else:
            await service.enrich(record)

        if record.is_enriched or record.image_path:
            enriched += 1
        else:
            no_data += 1
        print(
            f"  {record.name}: mbid={record.canonical_id or '-'} "
            f"genres={', '.join(record.genres or []) or '-'} "
            f"image={record.image_path or '-'}"
        )

    output_path = Path(args.output) if args.output else input_path
    output_path.write_text(_dump_records(records), encoding="utf-8")

    print("\nEnrichment complete:")
    print(f"  Enriched: {enriched}")
    print(f"  Skipped:  {skipped}")
    print(f"  No data:  {no_data}")
    print(f"  Written:  {output_path}")
    return 0


_HANDLERS = {
    "inspect": _handle_inspect,
    "enrich": _handle_enrich,
}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the enrichment CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m artist_enrichment.cli",
        description="Look up artists on MusicBrainz and Wikipedia.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML config file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log at DEBUG level"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # -- inspect --
    inspect_parser = subparsers.add_parser("inspect", help="Dry-run lookup for artist names")
    inspect_parser.add_argument("names", nargs="*", help="Artist names")
    inspect_parser.add_argument("--file", "-f", help="Text file with one name per line")
    inspect_parser.add_argument(
        "--json", action="store_true", dest="json_output", help="Print JSON instead of text"
    )

    # -- enrich --
    enrich_parser = subparsers.add_parser("enrich", help="Enrich a JSON file of artist records")
    enrich_parser.add_argument("records", help="JSON file containing a list of records")
    enrich_parser.add_argument(
        "--force", action="store_true", help="Re-enrich records that already have data"
    )
    enrich_parser.add_argument(
        "--output", "-o", help="Write records here instead of overwriting the input"
    )

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


async def _run(args: argparse.Namespace) -> int:
    """Load settings, build the service and dispatch to the handler."""
    try:
        settings = load_settings(args.config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    log_level = "DEBUG" if args.verbose else settings.log_level
    if getattr(args, "json_output", False) and not args.verbose:
        log_level = "WARNING"
    configure_logging(log_level=log_level, stream=sys.stderr)

    # Deferred so that logging is configured before provider modules bind
    # their loggers.
    from artist_enrichment.main import build_enrichment_service

    try:
        components = build_enrichment_service(settings)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    async with components:
        return await _HANDLERS[args.command](args, components.service)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.  Exits with the handler's return code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
