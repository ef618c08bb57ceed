"""Rule sets for every supported SharePoint Framework release.

Each entry lists the changes a project needs to move onto that release
from the one before it.
"""

from __future__ import annotations

from spfx_upgrade.rules import config_files as cfg
from spfx_upgrade.rules import files
from spfx_upgrade.rules import manifests
from spfx_upgrade.rules import source_code
from spfx_upgrade.rules import tsconfig as tsc
from spfx_upgrade.rules.base import Rule
from spfx_upgrade.rules.dependencies import dep, dev_dep, remove_dep

LOCKSTEP_DEPENDENCIES = (
    "@microsoft/sp-core-library",
    "@microsoft/sp-lodash-subset",
    "@microsoft/sp-office-ui-fabric-core",
    "@microsoft/sp-webpart-base",
    "@microsoft/sp-dialog",
    "@microsoft/sp-application-base",
    "@microsoft/decorators",
    "@microsoft/sp-listview-extensibility",
)
LOCKSTEP_DEV_DEPENDENCIES = (
    "@microsoft/sp-build-web",
    "@microsoft/sp-module-interfaces",
    "@microsoft/sp-webpart-workbench",
)


def _lockstep(version: str) -> list[Rule]:
    """Framework packages that ship with the release version number."""
    rules: list[Rule] = [dep(package, version) for package in LOCKSTEP_DEPENDENCIES]
    rules.extend(dev_dep(package, version) for package in LOCKSTEP_DEV_DEPENDENCIES)
    return rules


def _release(version: str, *extra: Rule) -> tuple[Rule, ...]:
    rules = _lockstep(version)
    rules.extend(extra)
    rules.append(cfg.yo_rc_version(version))
    return tuple(rules)


UPGRADE_RULES: dict[str, tuple[Rule, ...]] = {
    "1.0.1": (
        dep("@microsoft/sp-core-library", "1.0.1"),
        dep("@microsoft/sp-webpart-base", "1.0.1"),
    ),
    "1.0.2": (
        dep("@microsoft/sp-core-library", "1.0.2"),
        dep("@microsoft/sp-lodash-subset", "1.0.2"),
        dep("@microsoft/sp-webpart-base", "1.0.2"),
    ),
    "1.1.0": _release(
        "1.1.0",
        dep("@types/react", "15.0.38"),
        dep("@types/react-dom", "0.14.18"),
        dep("@types/webpack-env", ">=1.12.1 <1.14.0"),
        dep("react", "15.4.2"),
        dep("react-dom", "15.4.2"),
        remove_dep("@microsoft/sp-client-base"),
        remove_dep("@types/react-addons-shallow-compare"),
        remove_dep("@types/react-addons-update"),
        remove_dep("@types/react-addons-test-utils"),
        dev_dep("gulp", "~3.9.1"),
        dev_dep("@types/chai", ">=3.4.34 <3.6.0"),
        dev_dep("@types/mocha", ">=2.2.33 <2.6.0"),
        cfg.config_schema(),
        cfg.config_version(),
        cfg.ConfigBundlesRule(),
        cfg.config_remove_entries(),
        cfg.LocalizedResourcePathRule(),
        cfg.copy_assets_schema(),
        cfg.deploy_azure_storage_schema(),
        cfg.deploy_azure_storage_working_dir(),
        cfg.package_solution_schema(),
        cfg.serve_schema(),
        cfg.serve_initial_page(),
        cfg.tslint_schema(),
        cfg.write_manifests_schema(),
        manifests.web_part_schema(),
        manifests.application_customizer_schema(),
        manifests.list_view_command_set_schema(),
        manifests.field_customizer_schema(),
        tsc.types_es6_collections(),
        tsc.experimental_decorators(),
    ),
    "1.1.1": _release("1.1.1"),
    "1.1.3": _release("1.1.3"),
    "1.2.0": _release(
        "1.2.0",
        tsc.skip_lib_check(),
    ),
    "1.3.0": _release(
        "1.3.0",
        cfg.yo_rc_is_creating_solution(),
        cfg.yo_rc_package_manager(),
        tsc.type_roots_types(),
        tsc.type_roots_microsoft(),
        files.vscode_launch(),
    ),
    "1.3.1": _release("1.3.1"),
    "1.3.2": _release("1.3.2"),
    "1.3.4": _release("1.3.4"),
    "1.4.0": _release(
        "1.4.0",
        remove_dep("@types/es6-collections"),
        cfg.package_solution_include_client_side_assets(),
        cfg.tslint_remove_no_unused_imports(),
        cfg.tslint_prefer_const(),
        tsc.skip_lib_check(),
        tsc.lib_es5(),
        tsc.lib_dom(),
        tsc.lib_es2015_collection(),
    ),
    "1.4.1": _release(
        "1.4.1",
        dep("@types/react", "15.6.6"),
        dep("@types/react-dom", "15.5.6"),
        dep("react", "15.6.2"),
        dep("react-dom", "15.6.2"),
        cfg.yo_rc_environment(),
    ),
    "1.5.0": _release(
        "1.5.0",
        dev_dep("@types/chai", "3.4.34"),
        dev_dep("@types/mocha", "2.2.38"),
        files.vscode_extensions(),
    ),
    "1.5.1": _release("1.5.1"),
    "1.6.0": _release(
        "1.6.0",
        dep("@types/webpack-env", "1.13.1"),
        dep("@types/es6-promise", "0.0.33"),
        dev_dep("gulp", "~3.9.1"),
        dev_dep("@types/chai", "4.1.2"),
        dev_dep("@types/mocha", "5.2.5"),
        dev_dep("ajv", "~5.2.2"),
        cfg.package_solution_is_domain_isolated(),
        tsc.out_dir(),
        tsc.include_sources(),
        tsc.exclude_node_modules(),
        source_code.MsGraphClientImportRule(),
        source_code.msgraphclient_service_scope(),
        source_code.aad_http_client_instance(),
    ),
    "1.7.0": _release(
        "1.7.0",
        dep("@types/react", "16.4.2"),
        dep("@types/react-dom", "16.0.5"),
        dep("react", "16.3.2"),
        dep("react-dom", "16.3.2"),
        dev_dep("tslint-microsoft-contrib", "5.0.0"),
        files.tslint_root(),
        files.remove_config_tslint(),
        files.src_index(),
    ),
    "1.7.1": _release("1.7.1"),
    "1.8.0": _release(
        "1.8.0",
        dep("@microsoft/sp-property-pane", "1.8.0", web_part_only=True),
        dep("office-ui-fabric-react", "6.143.0"),
        dev_dep("@microsoft/sp-tslint-rules", "1.8.0"),
        dev_dep("@microsoft/rush-stack-compiler-2.7", "0.4.0"),
        cfg.yo_rc_is_domain_isolated(),
        manifests.web_part_supported_hosts(),
        tsc.module_esnext(),
        tsc.module_resolution_node(),
        tsc.inline_sources(),
        tsc.strict_null_checks(),
        tsc.no_unused_locals(),
        tsc.extends_rush_stack_compiler(),
        files.GulpfileSuppressionRule(),
        source_code.PropertyPaneImportRule(),
        files.TeamsFolderRule(),
    ),
    "1.8.1": _release("1.8.1"),
    "1.8.2": _release("1.8.2"),
}
