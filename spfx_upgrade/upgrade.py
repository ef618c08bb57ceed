"""Upgrade analysis orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from spfx_upgrade.findings import (
    Finding,
    FindingToReport,
    flatten_findings,
    reduce_findings,
)
from spfx_upgrade.package_manager import resolve_tokens
from spfx_upgrade.project import Project, load_project
from spfx_upgrade.rules import build_rules
from spfx_upgrade.versions import ERROR_RULE_FAILED, AnalysisContext, UpgradeError, build_context

logger = logging.getLogger(__name__)


class RuleEvaluationError(UpgradeError):
    """A rule raised while inspecting the project."""

    def __init__(self, rule_id: str, version: str, cause: Exception) -> None:
        super().__init__(
            f"Rule {rule_id} for SharePoint Framework v{version} failed: {cause}",
            ERROR_RULE_FAILED,
        )
        self.rule_id = rule_id
        self.version = version


@dataclass(slots=True)
class UpgradeResult:
    """Outcome of analysing one project."""

    context: AnalysisContext
    project: Project
    findings: list[Finding] = field(default_factory=list)
    rows: list[FindingToReport] = field(default_factory=list)


def collect_findings(project: Project, context: AnalysisContext) -> list[Finding]:
    """Run every rule between the two versions, newest version first."""
    findings: list[Finding] = []
    for version, rule in build_rules(context):
        try:
            produced = rule.visit(project)
        except Exception as exc:
            raise RuleEvaluationError(rule.rule_id, version, exc) from exc
        if produced:
            logger.debug("%s (v%s): %d finding(s)", rule.rule_id, version, len(produced))
        findings.extend(produced)
    return findings


def analyze(project: Project, context: AnalysisContext) -> UpgradeResult:
    """Collect, reduce and flatten findings into report rows."""
    for version in context.versions_to_run():
        logger.info("Analysing changes for SharePoint Framework v%s", version)
    findings = reduce_findings(collect_findings(project, context))
    rows = [_tokenize(row, context.package_manager) for row in flatten_findings(findings)]
    return UpgradeResult(context=context, project=project, findings=findings, rows=rows)


def run_upgrade(
    start: Path,
    *,
    to_version: str | None = None,
    package_manager: str = "npm",
) -> UpgradeResult:
    """Validate the upgrade path for the project at ``start`` and analyse it."""
    context = build_context(start, to_version=to_version, package_manager=package_manager)
    logger.info("Collecting project...")
    project = load_project(context.project_root)
    for skipped in project.skipped_files:
        logger.debug("Skipped %s", skipped)
    return analyze(project, context)


def _tokenize(row: FindingToReport, package_manager: str) -> FindingToReport:
    if row.resolution_type != "cmd":
        return row
    return FindingToReport(
        id=row.id,
        title=row.title,
        description=row.description,
        severity=row.severity,
        resolution_type=row.resolution_type,
        file=row.file,
        resolution=resolve_tokens(row.resolution, package_manager),
        position=row.position,
    )
