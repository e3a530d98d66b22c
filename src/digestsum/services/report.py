"""Aggregate verification outcomes per checksum file and render the report."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from digestsum.errors import EX_NOINPUT, EX_OK, EX_SOFTWARE
from digestsum.models import AggregateResult, ImproperLine, VerificationCounts, VerificationOutcome

STATUS_TEXT = {
    True: "OK",
    False: "FAILED",
    None: "No such file or directory",
}
ALL_SUCCESSFUL = "Everything is successful"
NOTHING_VERIFIED = "no file was verified"


class ReportPolicy(BaseModel):
    """Reporting switches of a verification run."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = False
    status: bool = False
    strict: bool = False
    ignore_missing: bool = False
    warn: bool = False
    json_output: bool = False
    pretty: bool = False


class FileReport(BaseModel):
    """Filtered view of one AggregateResult."""

    model_config = ConfigDict(frozen=True)

    source: str
    raw_counts: VerificationCounts
    counts: VerificationCounts
    outcomes: List[VerificationOutcome] = Field(default_factory=list)
    displayed: List[VerificationOutcome] = Field(default_factory=list)
    improper_lines: List[ImproperLine] = Field(default_factory=list)

    @property
    def verified(self) -> bool:
        return bool(self.outcomes)

    @property
    def all_successful(self) -> bool:
        return self.counts.success == self.counts.total


class Report(BaseModel):
    """Per-file reports in input order plus the policy that shaped them."""

    model_config = ConfigDict(frozen=True)

    policy: ReportPolicy
    files: List[FileReport] = Field(default_factory=list)


def _file_report(result: AggregateResult, policy: ReportPolicy) -> FileReport:
    raw_counts = result.counts()

    outcomes = list(result.outcomes)
    counts = raw_counts
    if policy.ignore_missing:
        outcomes = [outcome for outcome in outcomes if not outcome.missing]
        counts = VerificationCounts(raw_counts.total - raw_counts.missing, 0, raw_counts.success, raw_counts.failure)

    displayed = outcomes
    if policy.quiet:
        displayed = [outcome for outcome in outcomes if outcome.success is not True]

    return FileReport(
        source=result.source,
        raw_counts=raw_counts,
        counts=counts,
        outcomes=outcomes,
        displayed=displayed,
        improper_lines=list(result.improper_lines),
    )


def build_report(results: Iterable[AggregateResult], policy: ReportPolicy) -> Report:
    """Apply ignore-missing and quiet filtering to each result, keeping input order."""

    return Report(policy=policy, files=[_file_report(result, policy) for result in results])


def summary_line(file_report: FileReport, policy: ReportPolicy) -> Optional[str]:
    """Return the summary for a verified file, or None when nothing is printed."""

    counts = file_report.counts
    if file_report.all_successful:
        return None if policy.quiet else ALL_SUCCESSFUL

    failed = counts.total - counts.success
    parts = []
    if not policy.ignore_missing:
        parts.append(f"Missing:{counts.missing}")
    parts.append(f"Success:{counts.success}")
    parts.append(f"Failure:{counts.failure}")
    return f"{failed} validations failed ({'; '.join(parts)})"


def outcome_lines(outcomes: Iterable[VerificationOutcome]) -> list[str]:
    """Render outcomes with the status column aligned across the block."""

    outcomes = list(outcomes)
    if not outcomes:
        return []
    width = max(len(str(outcome.file)) for outcome in outcomes)
    return [f"{str(outcome.file).ljust(width)}  {STATUS_TEXT[outcome.success]}" for outcome in outcomes]


def warning_lines(file_report: FileReport) -> list[str]:
    """Render the improper lines of one checksum file."""

    return [
        f"{file_report.source}: {improper.line_number}: {improper.reason}"
        for improper in file_report.improper_lines
    ]


def render_text(report: Report) -> tuple[list[str], list[str]]:
    """Return (stdout lines, stderr lines) for the textual report."""

    policy = report.policy
    stdout: list[str] = []
    stderr: list[str] = []
    if policy.status:
        return stdout, stderr

    for file_report in report.files:
        if policy.warn:
            stderr.extend(warning_lines(file_report))

        if not file_report.verified:
            stderr.append(f"{file_report.source}: {NOTHING_VERIFIED}")
            continue

        stdout.extend(outcome_lines(file_report.displayed))
        summary = summary_line(file_report, policy)
        if summary is not None:
            stderr.append(summary)

    return stdout, stderr


def json_keys(report: Report) -> list[str]:
    """Return one distinct key per checksum file; repeated names get a " (N)" suffix."""

    used: set[str] = set()
    keys: list[str] = []
    for file_report in report.files:
        key = file_report.source
        occurrence = 1
        while key in used:
            occurrence += 1
            key = f"{file_report.source} ({occurrence})"
        used.add(key)
        keys.append(key)
    return keys


def render_json(report: Report) -> str:
    """Serialize outcomes keyed by checksum file (quiet does not apply)."""

    payload = {
        key: [outcome.model_dump(mode="json") for outcome in file_report.outcomes]
        for key, file_report in zip(json_keys(report), report.files)
    }
    return json.dumps(payload, indent=2 if report.policy.pretty else None)


def exit_status(report: Report) -> int:
    """Return the process exit status for `report`."""

    policy = report.policy
    if policy.status:
        failed = any(file.raw_counts.success != file.raw_counts.total for file in report.files)
        if failed:
            return EX_SOFTWARE
        if any(file.raw_counts.total == 0 for file in report.files):
            return EX_NOINPUT
        return EX_OK

    failed = any(not file.all_successful for file in report.files)
    improper = policy.strict and any(file.improper_lines for file in report.files)
    if failed or improper:
        return EX_SOFTWARE
    if any(not file.verified for file in report.files):
        return EX_NOINPUT
    return EX_OK


__all__ = [
    "ALL_SUCCESSFUL",
    "FileReport",
    "NOTHING_VERIFIED",
    "Report",
    "ReportPolicy",
    "STATUS_TEXT",
    "build_report",
    "exit_status",
    "json_keys",
    "outcome_lines",
    "render_json",
    "render_text",
    "summary_line",
    "warning_lines",
]
