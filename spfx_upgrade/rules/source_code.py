"""Rules that scan TypeScript sources for outdated API usage."""

from __future__ import annotations

import re

from spfx_upgrade.findings import Finding, Occurrence
from spfx_upgrade.project import Project
from spfx_upgrade.rules.base import RuleBase

CLIENT_PREVIEW = "@microsoft/sp-client-preview"
WEBPART_BASE = "@microsoft/sp-webpart-base"
PROPERTY_PANE = "@microsoft/sp-property-pane"

_PROPERTY_PANE_NAME_RE = re.compile(r"^I?PropertyPane")


class MsGraphClientImportRule(RuleBase):
    """MSGraphClient moved from the preview package to sp-http."""

    rule_id = "FN016001_TS_msgraphclient_packageName"
    title = "MSGraphClient package name"
    description = "Update the package from which MSGraphClient is imported"
    resolution_type = "ts"
    resolution = "import { MSGraphClient } from '@microsoft/sp-http';"

    def visit(self, project: Project) -> list[Finding]:
        occurrences: list[Occurrence] = []
        for ts_file in project.ts_files:
            for statement in ts_file.imports:
                if statement.module == CLIENT_PREVIEW and "MSGraphClient" in statement.names:
                    occurrences.append(
                        Occurrence(
                            file=ts_file.relative_path,
                            resolution=self.resolution,
                            position=statement.position,
                        )
                    )
        return self._finding(occurrences)


class SourcePatternRule(RuleBase):
    """Reports every match of a pattern in the project's TypeScript files."""

    resolution_type = "ts"

    def __init__(
        self,
        rule_id: str,
        *,
        pattern: re.Pattern[str],
        resolution: str,
        title: str,
        description: str,
        severity: str = "Required",
    ) -> None:
        self.rule_id = rule_id
        self.pattern = pattern
        self.resolution = resolution
        self.title = title
        self.description = description
        self.severity = severity

    def visit(self, project: Project) -> list[Finding]:
        occurrences = [
            Occurrence(file=ts_file.relative_path, resolution=self.resolution, position=position)
            for ts_file in project.ts_files
            for position in ts_file.find_all(self.pattern)
        ]
        return self._finding(occurrences)


class PropertyPaneImportRule(RuleBase):
    """Property pane types moved from sp-webpart-base to sp-property-pane."""

    rule_id = "FN016004_TS_property_pane_property_import"
    title = "Property pane property import change to @microsoft/sp-property-pane"
    description = "Import property pane types from @microsoft/sp-property-pane"
    resolution_type = "ts"
    resolution = f"import {{ ... }} from '{PROPERTY_PANE}';"

    def visit(self, project: Project) -> list[Finding]:
        occurrences: list[Occurrence] = []
        for ts_file in project.ts_files:
            for statement in ts_file.imports:
                if statement.module != WEBPART_BASE:
                    continue
                names = [name for name in statement.names if _PROPERTY_PANE_NAME_RE.match(name)]
                if not names:
                    continue
                occurrences.append(
                    Occurrence(
                        file=ts_file.relative_path,
                        resolution=f"import {{ {', '.join(names)} }} from '{PROPERTY_PANE}';",
                        position=statement.position,
                    )
                )
        return self._finding(occurrences)


def msgraphclient_service_scope() -> SourcePatternRule:
    return SourcePatternRule(
        "FN016002_TS_msgraphclient_instance",
        pattern=re.compile(r"\.serviceScope\s*\.\s*consume\s*\(\s*MSGraphClient\s*\.\s*serviceKey\s*\)"),
        resolution="this.context.msGraphClientFactory.getClient();",
        title="MSGraphClient instance",
        description="Create the MSGraphClient instance using the msGraphClientFactory",
    )


def aad_http_client_instance() -> SourcePatternRule:
    return SourcePatternRule(
        "FN016003_TS_aadhttpclient_instance",
        pattern=re.compile(r"\bnew\s+AadHttpClient\s*\("),
        resolution="this.context.aadHttpClientFactory.getClient('resource');",
        title="AadHttpClient instance",
        description="Create the AadHttpClient instance using the aadHttpClientFactory",
    )
