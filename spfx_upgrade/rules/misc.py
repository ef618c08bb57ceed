"""Project-wide follow-up steps."""

from __future__ import annotations

from spfx_upgrade.findings import Finding
from spfx_upgrade.project import Project
from spfx_upgrade.rules.base import RuleBase


class NpmDedupeRule(RuleBase):
    """Collapses duplicate packages after the dependency changes are applied."""

    rule_id = "FN017001_MISC_npm_dedupe"
    title = "npm dedupe"
    description = (
        "If, after upgrading npm packages, when building the project you have errors similar to: "
        '"error TS2345: Argument of type \'SPHttpClientConfiguration\' is not assignable to '
        'parameter of type \'SPHttpClientConfiguration\'", try running \'npm dedupe\' to cleanup '
        "npm packages."
    )
    resolution_type = "cmd"
    resolution = "npm dedupe"
    file = "./package.json"
    severity = "Optional"

    def visit(self, project: Project) -> list[Finding]:
        return self._finding() if project.package_json is not None else []
