"""Base rule protocol and shared helpers."""

from __future__ import annotations

import json
from typing import Any, Protocol

from spfx_upgrade.findings import Finding, Occurrence
from spfx_upgrade.project import Project


class Rule(Protocol):
    """Protocol for upgrade rules."""

    rule_id: str
    title: str
    description: str
    severity: str
    resolution_type: str
    file: str
    supersedes: tuple[str, ...]

    def visit(self, project: Project) -> list[Finding]:
        """Inspect the project and return findings."""


class RuleBase:
    """Base class carrying rule metadata and finding construction."""

    rule_id: str = ""
    title: str = ""
    description: str = ""
    severity: str = "Required"
    resolution_type: str = "json"
    resolution: str = ""
    file: str = ""
    supersedes: tuple[str, ...] = ()

    def visit(self, project: Project) -> list[Finding]:
        raise NotImplementedError

    def _finding(
        self,
        occurrences: list[Occurrence] | None = None,
        resolution: str | None = None,
    ) -> list[Finding]:
        if resolution is None:
            resolution = self.resolution
        if occurrences is None:
            occurrences = [Occurrence(file=self.file, resolution=resolution)]
        if not occurrences:
            return []
        return [
            Finding(
                id=self.rule_id,
                title=self.title,
                description=self.description,
                severity=self.severity,
                resolution_type=self.resolution_type,
                resolution=resolution,
                occurrences=tuple(occurrences),
                supersedes=self.supersedes,
            )
        ]


def nested(path: tuple[str, ...], value: Any) -> dict[str, Any]:
    """Build ``{"a": {"b": value}}`` from ``("a", "b")``."""
    result: Any = value
    for key in reversed(path):
        result = {key: result}
    return result


def to_json(value: Any) -> str:
    return json.dumps(value, indent=2)


def lookup(document: Any, path: tuple[str, ...]) -> tuple[bool, Any]:
    """Return ``(found, value)`` for a key path inside nested dictionaries."""
    current = document
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return (False, None)
        current = current[key]
    return (True, current)
