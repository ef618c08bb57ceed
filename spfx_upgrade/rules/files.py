"""Rules about files and folders that should be added to or removed from a project."""

from __future__ import annotations

from spfx_upgrade.findings import Finding
from spfx_upgrade.project import Project
from spfx_upgrade.rules.base import RuleBase, to_json
from spfx_upgrade.rules.json_rules import JsonArrayItemRule

TSLINT_ROOT = {
    "extends": "@microsoft/sp-tslint-rules/base-tslint.json",
    "rules": {
        "class-name": False,
        "export-name": False,
        "forin": False,
        "label-position": False,
        "member-access": True,
        "no-arg": False,
        "no-console": False,
        "no-construct": False,
        "no-duplicate-variable": True,
        "no-eval": False,
        "no-function-expression": True,
        "no-internal-module": True,
        "no-shadowed-variable": True,
        "no-switch-case-fall-through": True,
        "no-unnecessary-semicolons": True,
        "no-unused-expression": True,
        "no-use-before-declare": True,
        "no-with-statement": True,
        "semicolon": True,
        "trailing-comma": False,
        "typedef": False,
        "typedef-whitespace": False,
        "use-named-parameter": True,
        "variable-name": False,
        "whitespace": False,
    },
}

LAUNCH_JSON = {
    "version": "0.2.0",
    "configurations": [
        {
            "name": "Local workbench",
            "type": "chrome",
            "request": "launch",
            "url": "https://localhost:4321/temp/workbench.html",
            "webRoot": "${workspaceRoot}",
            "sourceMaps": True,
            "sourceMapPathOverrides": {
                "webpack:///../../../src/*": "${webRoot}/src/*",
                "webpack:///../../../../src/*": "${webRoot}/src/*",
                "webpack:///../../../../../src/*": "${webRoot}/src/*",
            },
            "runtimeArgs": ["--remote-debugging-port=9222"],
        }
    ],
}

GULP_WARNING_SUPPRESSION = (
    "build.addSuppression(`Warning - [sass] The local CSS class 'ms-Grid' is not camelCase "
    "and will not be type-safe.`);"
)


class FileAddRule(RuleBase):
    """Fires when a file the new version expects is missing."""

    def __init__(
        self,
        rule_id: str,
        *,
        file: str,
        contents: str,
        resolution_type: str,
        title: str,
        description: str,
        severity: str = "Required",
    ) -> None:
        self.rule_id = rule_id
        self.file = file
        self.resolution = contents
        self.resolution_type = resolution_type
        self.title = title
        self.description = description
        self.severity = severity

    def visit(self, project: Project) -> list[Finding]:
        return [] if project.has_file(self.file) else self._finding()


class FileRemoveRule(RuleBase):
    """Fires when a file that is no longer used is still present."""

    resolution_type = "cmd"

    def __init__(
        self,
        rule_id: str,
        *,
        file: str,
        title: str,
        description: str,
        severity: str = "Required",
        supersedes: tuple[str, ...] = (),
    ) -> None:
        self.rule_id = rule_id
        self.file = file
        self.resolution = f"rm {file}"
        self.title = title
        self.description = description
        self.severity = severity
        self.supersedes = supersedes

    def visit(self, project: Project) -> list[Finding]:
        return self._finding() if project.has_file(self.file) else []


class TeamsFolderRule(RuleBase):
    """Web part projects need a teams folder for the Teams tab icons."""

    rule_id = "FN018001_TEAMS_folder"
    title = "Teams folder"
    description = "Create folder for Microsoft Teams icons"
    resolution_type = "cmd"
    resolution = "mkdir teams"
    file = "./teams"
    severity = "Optional"

    def visit(self, project: Project) -> list[Finding]:
        if not project.web_part_manifests() or project.has_folder("teams"):
            return []
        return self._finding()


class GulpfileSuppressionRule(RuleBase):
    """Suppresses the sass camelCase warning for the ms-Grid class."""

    rule_id = "FN013001_GULP_msGridSassSuppression"
    title = "gulpfile.js ms-Grid sass suppression"
    description = "Add suppression for ms-Grid sass warning"
    resolution_type = "js"
    resolution = GULP_WARNING_SUPPRESSION
    file = "./gulpfile.js"
    severity = "Recommended"

    def visit(self, project: Project) -> list[Finding]:
        if project.gulpfile_js is None:
            return []
        if "'ms-Grid' is not camelCase" in project.gulpfile_js.src:
            return []
        return self._finding()


def tslint_root() -> FileAddRule:
    return FileAddRule(
        "FN015003_FILE_tslint_json",
        file="./tslint.json",
        contents=to_json(TSLINT_ROOT),
        resolution_type="json",
        title="tslint.json",
        description="Add the tslint.json file to the project root",
    )


def remove_config_tslint() -> FileRemoveRule:
    return FileRemoveRule(
        "FN015004_FILE_config_tslint_json",
        file="./config/tslint.json",
        title="config/tslint.json",
        description="Remove the config/tslint.json file",
        supersedes=(
            "FN008001_CFG_TSL_schema",
            "FN008002_CFG_TSL_removeRule",
            "FN008003_CFG_TSL_preferConst",
        ),
    )


def src_index() -> FileAddRule:
    return FileAddRule(
        "FN015005_FILE_src_index_ts",
        file="./src/index.ts",
        contents="// A file is required to be in the root of the /src directory by the TypeScript compiler",
        resolution_type="ts",
        title="src/index.ts",
        description="Add the src/index.ts file",
    )


def vscode_extensions() -> JsonArrayItemRule:
    return JsonArrayItemRule(
        "FN014002_CODE_extensions",
        document="vs_code.extensions_json",
        file="./.vscode/extensions.json",
        path=("recommendations",),
        item="msjsdiag.debugger-for-chrome",
        create=True,
        title=".vscode/extensions.json recommendations",
        description="In .vscode/extensions.json recommend the Debugger for Chrome extension",
        severity="Recommended",
    )


def vscode_launch() -> FileAddRule:
    return FileAddRule(
        "FN014003_CODE_launch",
        file="./.vscode/launch.json",
        contents=to_json(LAUNCH_JSON),
        resolution_type="json",
        title=".vscode/launch.json",
        description="Add the .vscode/launch.json file to debug the project in the local workbench",
        severity="Recommended",
    )
