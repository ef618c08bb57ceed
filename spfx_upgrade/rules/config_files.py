"""Rules for the build configuration under config/ and .yo-rc.json."""

from __future__ import annotations

import posixpath
from typing import Any

from spfx_upgrade.findings import Finding
from spfx_upgrade.project import Project
from spfx_upgrade.rules.base import RuleBase, to_json
from spfx_upgrade.rules.json_rules import JsonPropertyRule, JsonRemovePropertyRule
from spfx_upgrade.versions import GENERATOR_KEY

SCHEMA_BASE = "https://dev.office.com/json-schemas/spfx-build/"


def _schema_rule(rule_id: str, document: str, file_name: str, schema: str) -> JsonPropertyRule:
    return JsonPropertyRule(
        rule_id,
        document=document,
        file=f"./config/{file_name}",
        path=("$schema",),
        value=f"{SCHEMA_BASE}{schema}",
        title=f"{file_name} schema",
        description=f"Update {file_name} schema URL",
    )


# config/config.json


def config_schema() -> JsonPropertyRule:
    return _schema_rule("FN003001_CFG_schema", "config_json", "config.json", "config.2.0.schema.json")


def config_version() -> JsonPropertyRule:
    return JsonPropertyRule(
        "FN003002_CFG_version",
        document="config_json",
        file="./config/config.json",
        path=("version",),
        value="2.0",
        title="config.json version",
        description="Update config.json version number",
    )


class ConfigBundlesRule(RuleBase):
    """Converts the legacy ``entries`` list into the ``bundles`` map."""

    rule_id = "FN003003_CFG_bundles"
    title = "config.json bundles"
    description = "In config.json add the bundles property"
    file = "./config/config.json"

    def visit(self, project: Project) -> list[Finding]:
        config = project.config_json
        if config is None or "bundles" in config:
            return []
        return self._finding(resolution=to_json({"bundles": entries_to_bundles(config.get("entries"))}))


def entries_to_bundles(entries: Any) -> dict[str, Any]:
    """Group v1 ``entries`` into v2 bundles named after their output file."""
    bundles: dict[str, Any] = {}
    if not isinstance(entries, list):
        return bundles
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        output = entry.get("outputPath")
        name = posixpath.basename(output) if isinstance(output, str) else ""
        for suffix in (".bundle.js", ".js"):
            if name.endswith(suffix):
                name = name[: -len(suffix)]
                break
        name = name or f"bundle-{len(bundles) + 1}"
        component = {"entrypoint": entry.get("entry"), "manifest": entry.get("manifest")}
        bundles.setdefault(name, {"components": []})["components"].append(component)
    return bundles


def config_remove_entries() -> JsonRemovePropertyRule:
    return JsonRemovePropertyRule(
        "FN003004_CFG_entries",
        document="config_json",
        file="./config/config.json",
        path=("entries",),
        title="config.json entries",
        description="Remove the entries property from config.json",
        resolution='Remove the "entries" property',
    )


class LocalizedResourcePathRule(RuleBase):
    """Points localized resources at the compiled lib folder."""

    rule_id = "FN003005_CFG_localizedResource_pathLib"
    title = "config.json localizedResources path"
    description = "Update the paths of localized resources to point to the lib folder"
    file = "./config/config.json"

    def visit(self, project: Project) -> list[Finding]:
        resources = (project.config_json or {}).get("localizedResources")
        if not isinstance(resources, dict):
            return []
        changed = {
            key: f"lib/{value}"
            for key, value in resources.items()
            if isinstance(value, str) and not value.startswith("lib/")
        }
        if not changed:
            return []
        return self._finding(resolution=to_json({"localizedResources": changed}))


# config/copy-assets.json, deploy-azure-storage.json, serve.json, write-manifests.json


def copy_assets_schema() -> JsonPropertyRule:
    return _schema_rule("FN004001_CA_schema", "copy_assets_json", "copy-assets.json", "copy-assets.schema.json")


def deploy_azure_storage_schema() -> JsonPropertyRule:
    return _schema_rule(
        "FN005001_DAS_schema",
        "deploy_azure_storage_json",
        "deploy-azure-storage.json",
        "deploy-azure-storage.schema.json",
    )


def deploy_azure_storage_working_dir() -> JsonPropertyRule:
    return JsonPropertyRule(
        "FN005002_DAS_workingDir",
        document="deploy_azure_storage_json",
        file="./config/deploy-azure-storage.json",
        path=("workingDir",),
        value="./temp/deploy/",
        title="deploy-azure-storage.json workingDir",
        description="Update deploy-azure-storage.json workingDir",
    )


def serve_schema() -> JsonPropertyRule:
    return _schema_rule("FN007001_SRV_schema", "serve_json", "serve.json", "serve.schema.json")


def serve_initial_page() -> JsonPropertyRule:
    return JsonPropertyRule(
        "FN007002_SRV_initialPage",
        document="serve_json",
        file="./config/serve.json",
        path=("initialPage",),
        value="https://localhost:5432/workbench",
        title="serve.json initialPage",
        description="Update serve.json initialPage URL",
    )


def write_manifests_schema() -> JsonPropertyRule:
    return _schema_rule(
        "FN009001_WM_schema",
        "write_manifests_json",
        "write-manifests.json",
        "write-manifests.schema.json",
    )


# config/package-solution.json


def package_solution_schema() -> JsonPropertyRule:
    return _schema_rule(
        "FN006001_PS_schema",
        "package_solution_json",
        "package-solution.json",
        "package-solution.schema.json",
    )


def _solution_flag(rule_id: str, name: str, value: bool, description: str) -> JsonPropertyRule:
    return JsonPropertyRule(
        rule_id,
        document="package_solution_json",
        file="./config/package-solution.json",
        path=("solution", name),
        value=value,
        requires=("solution",),
        title=f"package-solution.json {name}",
        description=description,
    )


def package_solution_include_client_side_assets() -> JsonPropertyRule:
    return _solution_flag(
        "FN006002_PS_includeClientSideAssets",
        "includeClientSideAssets",
        True,
        "In package-solution.json add the includeClientSideAssets setting",
    )


def package_solution_is_domain_isolated() -> JsonPropertyRule:
    return _solution_flag(
        "FN006003_PS_isDomainIsolated",
        "isDomainIsolated",
        False,
        "In package-solution.json add the isDomainIsolated setting",
    )


# config/tslint.json


def tslint_schema() -> JsonPropertyRule:
    return _schema_rule("FN008001_CFG_TSL_schema", "ts_lint_json", "tslint.json", "tslint.schema.json")


def tslint_remove_no_unused_imports() -> JsonRemovePropertyRule:
    return JsonRemovePropertyRule(
        "FN008002_CFG_TSL_removeRule",
        document="ts_lint_json",
        file="./config/tslint.json",
        path=("lintConfig", "rules", "no-unused-imports"),
        title="tslint.json no-unused-imports",
        description="Remove the deprecated no-unused-imports rule from tslint.json",
        resolution='Remove the "no-unused-imports" rule',
        severity="Recommended",
    )


def tslint_prefer_const() -> JsonPropertyRule:
    return JsonPropertyRule(
        "FN008003_CFG_TSL_preferConst",
        document="ts_lint_json",
        file="./config/tslint.json",
        path=("lintConfig", "rules", "prefer-const"),
        value=True,
        requires=("lintConfig", "rules"),
        title="tslint.json prefer-const",
        description="In tslint.json enable the prefer-const rule",
        severity="Recommended",
    )


# .yo-rc.json


def _yo_rc_rule(rule_id: str, name: str, value: Any, severity: str = "Recommended") -> JsonPropertyRule:
    return JsonPropertyRule(
        rule_id,
        document="yo_rc_json",
        file="./.yo-rc.json",
        path=(GENERATOR_KEY, name),
        value=value,
        requires=(GENERATOR_KEY,),
        title=f".yo-rc.json {name}",
        description=f"Update {name} in .yo-rc.json",
        severity=severity,
    )


def yo_rc_version(version: str) -> JsonPropertyRule:
    return _yo_rc_rule("FN010001_YORC_version", "version", version)


def yo_rc_is_creating_solution() -> JsonPropertyRule:
    return _yo_rc_rule("FN010002_YORC_isCreatingSolution", "isCreatingSolution", True)


def yo_rc_package_manager() -> JsonPropertyRule:
    return _yo_rc_rule("FN010003_YORC_packageManager", "packageManager", "npm")


def yo_rc_environment() -> JsonPropertyRule:
    return _yo_rc_rule("FN010005_YORC_environment", "environment", "spo")


def yo_rc_is_domain_isolated() -> JsonPropertyRule:
    return _yo_rc_rule("FN010007_YORC_isDomainIsolated", "isDomainIsolated", False)
