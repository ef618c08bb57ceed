"""Finding models and the reductions applied before reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

RESOLUTION_TYPES = ("cmd", "json", "js", "ts")
SEVERITIES = ("Required", "Recommended", "Optional")


@dataclass(frozen=True, slots=True)
class Position:
    """1-based location of an occurrence inside a file."""

    line: int
    character: int

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True, slots=True)
class Occurrence:
    """One place in the project where a finding applies."""

    file: str
    resolution: str
    position: Position | None = None


@dataclass(frozen=True, slots=True)
class Finding:
    """A single change required to upgrade the project."""

    id: str
    title: str
    description: str
    severity: str
    resolution_type: str
    resolution: str
    occurrences: tuple[Occurrence, ...]
    supersedes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FindingToReport:
    """Flattened, report-ready projection of one finding occurrence."""

    id: str
    title: str
    description: str
    severity: str
    resolution_type: str
    file: str
    resolution: str
    position: Position | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "severity": self.severity,
            "resolutionType": self.resolution_type,
            "file": self.file,
            "position": self.position.to_dict() if self.position else None,
            "resolution": self.resolution,
        }


def dedupe_findings(findings: list[Finding]) -> list[Finding]:
    """Keep the first finding for every id.

    Rule sets run newest version first, so the retained finding is the one
    reported by the most recent version in the upgrade range.
    """
    seen: set[str] = set()
    output: list[Finding] = []
    for finding in findings:
        if finding.id in seen:
            continue
        seen.add(finding.id)
        output.append(finding)
    return output


def remove_superseded(findings: list[Finding]) -> list[Finding]:
    """Drop every finding whose id is superseded by another finding.

    Superseded ids are gathered from the whole list before anything is
    removed, so the result does not depend on the order of the findings.
    """
    superseded = {target for finding in findings for target in finding.supersedes}
    return [finding for finding in findings if finding.id not in superseded]


def reduce_findings(findings: list[Finding]) -> list[Finding]:
    """Apply dedupe followed by supersession removal."""
    return remove_superseded(dedupe_findings(findings))


def flatten_findings(findings: list[Finding]) -> list[FindingToReport]:
    """Expand findings into one report row per occurrence."""
    rows: list[FindingToReport] = []
    for finding in findings:
        for occurrence in finding.occurrences:
            rows.append(
                FindingToReport(
                    id=finding.id,
                    title=finding.title,
                    description=finding.description,
                    severity=finding.severity,
                    resolution_type=finding.resolution_type,
                    file=occurrence.file,
                    resolution=occurrence.resolution,
                    position=occurrence.position,
                )
            )
    return rows
