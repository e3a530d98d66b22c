"""Command-line entry point for computing and verifying message digests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from digestsum.config import DigestsumConfig, load_config
from digestsum.errors import EX_NOINPUT, EX_OK, DigestsumError, InputReadError, MissingAlgorithmError
from digestsum.io.inputs import decode_text, read_path, read_stdin, split_inputs
from digestsum.io.stdin import STDIN_NAME, StdinSource
from digestsum.models import AggregateResult
from digestsum.parse.checksums import parse_checksums
from digestsum.render.formatter import Style, format_checksums
from digestsum.services import registry
from digestsum.services.compute import checksum_bytes, checksum_files
from digestsum.services.registry import Algorithm
from digestsum.services.report import (
    ReportPolicy,
    build_report,
    exit_status,
    render_json,
    render_text,
    warning_lines,
)
from digestsum.services.verifier import verify_records
from digestsum.util.logging import configure_logging, level_for_verbosity
from digestsum.util.typing import InputSource

PROG_NAME = "digestsum"

app = typer.Typer(add_completion=False, help="Compute and verify message digests.")


def _stdin_source() -> InputSource:
    return StdinSource()


def _config_overrides(
    style: Optional[Style], threads: Optional[int], pretty: bool
) -> dict[str, object]:
    overrides: dict[str, object] = {}
    if style is not None:
        overrides["output.style"] = style.value
    if threads is not None:
        overrides["runtime.threads"] = threads
    if pretty:
        overrides["output.pretty"] = True
    return overrides


def _validate_flags(
    *, check: bool, quiet: bool, status: bool, strict: bool, ignore_missing: bool, warn: bool, json_output: bool
) -> None:
    if quiet and status:
        raise typer.BadParameter("--quiet and --status are mutually exclusive")
    if check:
        return
    for enabled, flag in (
        (quiet, "--quiet"),
        (status, "--status"),
        (strict, "--strict"),
        (ignore_missing, "--ignore-missing"),
        (warn, "--warn"),
        (json_output, "--json"),
    ):
        if enabled:
            raise typer.BadParameter(f"{flag} requires --check")


def _verify_source(
    source: str,
    data: bytes,
    *,
    explicit: Optional[Algorithm],
    allow_insecure: bool,
    stdin: Optional[InputSource],
    threads: int,
    logger: logging.Logger,
) -> AggregateResult:
    parsed = parse_checksums(decode_text(data, source=source))
    logger.info(
        "Verifying %s record(s) from %s (%s improper line(s))",
        len(parsed.records),
        source,
        len(parsed.improper_lines),
    )
    outcomes = verify_records(
        parsed.records,
        explicit=explicit,
        allow_insecure=allow_insecure,
        stdin=stdin,
        threads=threads,
    )
    return AggregateResult(source=source, outcomes=outcomes, improper_lines=parsed.improper_lines)


def _run_check(
    inputs: List[tuple[str, Path]],
    stdin: InputSource,
    *,
    explicit: Optional[Algorithm],
    allow_insecure: bool,
    policy: ReportPolicy,
    cfg: DigestsumConfig,
    logger: logging.Logger,
) -> int:
    if inputs:
        sources = [(label, read_path(path)) for label, path in inputs]
        # A pipe on stdin stands in for the files named by the checksums.
        override: Optional[InputSource] = None if stdin.is_interactive() else stdin
    else:
        sources = [(STDIN_NAME, read_stdin(stdin))]
        override = None

    results = [
        _verify_source(
            source,
            data,
            explicit=explicit,
            allow_insecure=allow_insecure,
            stdin=override,
            threads=cfg.runtime.threads,
            logger=logger,
        )
        for source, data in sources
    ]

    report = build_report(results, policy)
    if policy.status:
        return exit_status(report)

    if policy.json_output:
        if policy.warn:
            for file_report in report.files:
                for line in warning_lines(file_report):
                    typer.echo(line, err=True)
        typer.echo(render_json(report))
    else:
        stdout_lines, stderr_lines = render_text(report)
        for line in stdout_lines:
            typer.echo(line)
        for line in stderr_lines:
            typer.echo(line, err=True)

    return exit_status(report)


def _run_compute(
    files: List[Path],
    stdin: InputSource,
    *,
    algorithm: Optional[Algorithm],
    output: Optional[Path],
    cfg: DigestsumConfig,
) -> int:
    if algorithm is None:
        raise MissingAlgorithmError()

    if files:
        checksums = checksum_files(algorithm, files, threads=cfg.runtime.threads)
    else:
        checksums = [checksum_bytes(algorithm, read_stdin(stdin))]

    text = format_checksums(checksums, cfg.output.style, pretty=cfg.output.pretty)
    if output is None:
        typer.echo(text, nl=False)
        return EX_OK

    try:
        output.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise InputReadError(output, "write to", exc.strerror or exc) from exc
    return EX_OK


@app.command()
def run(
    files: Optional[List[str]] = typer.Argument(None, help="Input files; standard input when omitted"),
    hash_algorithm: Optional[str] = typer.Option(
        None, "--hash-algorithm", "-H", metavar="NAME", help="Hash algorithm (case-insensitive)"
    ),
    allow_insecure_hash_algorithm: bool = typer.Option(
        False, "--allow-insecure-hash-algorithm", help="Allow MD2, MD4, MD5 and SHA1"
    ),
    list_hash_algorithms: bool = typer.Option(
        False, "--list-hash-algorithms", help="List supported hash algorithms and exit"
    ),
    check: bool = typer.Option(False, "--check", "-c", help="Read checksums from the files and check them"),
    quiet: bool = typer.Option(False, "--quiet", help="Don't print OK for each verified file"),
    status: bool = typer.Option(False, "--status", help="Print nothing; report through the exit status"),
    strict: bool = typer.Option(False, "--strict", help="Fail on improperly formatted checksum lines"),
    ignore_missing: bool = typer.Option(False, "--ignore-missing", help="Don't report missing files"),
    warn: bool = typer.Option(False, "--warn", "-w", help="Warn about improperly formatted checksum lines"),
    style: Optional[Style] = typer.Option(
        None, "--style", "-s", case_sensitive=False, help="Checksum style (default from config, else sfv)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write checksums to FILE instead of stdout"),
    json_output: bool = typer.Option(False, "--json", help="Print the verification report as JSON"),
    pretty: bool = typer.Option(False, "--pretty", help="Indent JSON output"),
    threads: Optional[int] = typer.Option(None, "--threads", "-j", min=0, help="Worker threads (0 = all cores)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config file (TOML, YAML or JSON)"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Log progress to stderr (repeat for debug)"),
) -> None:
    """Compute message digests, or verify them with --check."""

    if list_hash_algorithms:
        for algorithm in registry.list_algorithms():
            typer.echo(algorithm.display_name)
        raise typer.Exit(code=EX_OK)

    _validate_flags(
        check=check,
        quiet=quiet,
        status=status,
        strict=strict,
        ignore_missing=ignore_missing,
        warn=warn,
        json_output=json_output,
    )

    try:
        cfg = load_config(config, overrides=_config_overrides(style, threads, pretty))
        logger = configure_logging(level=level_for_verbosity(verbose, default=cfg.runtime.log_level))

        algorithm = registry.resolve_selection(hash_algorithm, allow_insecure=allow_insecure_hash_algorithm)
        selection = split_inputs(files or [])
        if not status:
            for directory in selection.directories:
                typer.echo(f"{PROG_NAME}: {directory}: Is a directory", err=True)
        if files and not selection.files:
            raise typer.Exit(code=EX_NOINPUT)

        stdin = _stdin_source()
        if check:
            policy = ReportPolicy(
                quiet=quiet,
                status=status,
                strict=strict,
                ignore_missing=ignore_missing,
                warn=warn,
                json_output=json_output,
                pretty=cfg.output.pretty,
            )
            code = _run_check(
                list(zip(selection.labels, selection.files)),
                stdin,
                explicit=algorithm,
                allow_insecure=allow_insecure_hash_algorithm,
                policy=policy,
                cfg=cfg,
                logger=logger,
            )
        else:
            code = _run_compute(selection.files, stdin, algorithm=algorithm, output=output, cfg=cfg)
    except DigestsumError as exc:
        typer.echo(f"{PROG_NAME}: {exc}", err=True)
        raise typer.Exit(code=exc.exit_code)

    raise typer.Exit(code=code)


def main() -> None:
    app(prog_name=PROG_NAME)


__all__ = ["main", "app"]
