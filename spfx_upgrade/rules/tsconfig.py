"""Rules for tsconfig.json compiler settings."""

from __future__ import annotations

from typing import Any

from spfx_upgrade.rules.json_rules import JsonArrayItemRule, JsonPropertyRule


def _option(
    rule_id: str,
    name: str,
    value: Any,
    severity: str = "Required",
    supersedes: tuple[str, ...] = (),
) -> JsonPropertyRule:
    return JsonPropertyRule(
        rule_id,
        document="ts_config_json",
        file="./tsconfig.json",
        path=("compilerOptions", name),
        value=value,
        title=f"tsconfig.json {name}",
        description=f"Update tsconfig.json {name} compiler option",
        severity=severity,
        supersedes=supersedes,
    )


def _list_item(
    rule_id: str,
    path: tuple[str, ...],
    item: str,
    severity: str = "Required",
    supersedes: tuple[str, ...] = (),
) -> JsonArrayItemRule:
    return JsonArrayItemRule(
        rule_id,
        document="ts_config_json",
        file="./tsconfig.json",
        path=path,
        item=item,
        title=f"tsconfig.json {path[-1]} {item}",
        description=f"Add {item} to {'.'.join(path)} in tsconfig.json",
        severity=severity,
        supersedes=supersedes,
    )


def module_esnext() -> JsonPropertyRule:
    return _option("FN012001_TSC_module", "module", "esnext")


def module_resolution_node() -> JsonPropertyRule:
    return _option("FN012002_TSC_moduleResolution", "moduleResolution", "node")


def skip_lib_check() -> JsonPropertyRule:
    return _option("FN012003_TSC_skipLibCheck", "skipLibCheck", True)


def type_roots_types() -> JsonArrayItemRule:
    return _list_item("FN012004_TSC_typeRoots_types", ("compilerOptions", "typeRoots"), "./node_modules/@types")


def type_roots_microsoft() -> JsonArrayItemRule:
    return _list_item(
        "FN012005_TSC_typeRoots_microsoft",
        ("compilerOptions", "typeRoots"),
        "./node_modules/@microsoft",
    )


def types_es6_collections() -> JsonArrayItemRule:
    return _list_item("FN012006_TSC_types_es6_collections", ("compilerOptions", "types"), "es6-collections")


def lib_es5() -> JsonArrayItemRule:
    return _list_item("FN012007_TSC_lib_es5", ("compilerOptions", "lib"), "es5")


def lib_dom() -> JsonArrayItemRule:
    return _list_item("FN012008_TSC_lib_dom", ("compilerOptions", "lib"), "dom")


def lib_es2015_collection() -> JsonArrayItemRule:
    return _list_item(
        "FN012009_TSC_lib_es2015_collection",
        ("compilerOptions", "lib"),
        "es2015.collection",
        supersedes=("FN012006_TSC_types_es6_collections",),
    )


def experimental_decorators() -> JsonPropertyRule:
    return _option("FN012010_TSC_experimentalDecorators", "experimentalDecorators", True)


def out_dir() -> JsonPropertyRule:
    return _option("FN012011_TSC_outDir", "outDir", "lib")


def include_sources() -> JsonArrayItemRule:
    return _list_item("FN012012_TSC_include", ("include",), "src/**/*.ts")


def exclude_node_modules() -> JsonArrayItemRule:
    return _list_item("FN012013_TSC_exclude", ("exclude",), "node_modules")


def inline_sources() -> JsonPropertyRule:
    return _option("FN012014_TSC_inlineSources", "inlineSources", False, severity="Recommended")


def strict_null_checks() -> JsonPropertyRule:
    return _option("FN012015_TSC_strictNullChecks", "strictNullChecks", False, severity="Recommended")


def no_unused_locals() -> JsonPropertyRule:
    return _option("FN012016_TSC_noUnusedLocals", "noUnusedLocals", False, severity="Recommended")


def extends_rush_stack_compiler() -> JsonPropertyRule:
    return JsonPropertyRule(
        "FN012017_TSC_extends",
        document="ts_config_json",
        file="./tsconfig.json",
        path=("extends",),
        value="./node_modules/@microsoft/rush-stack-compiler-2.7/includes/tsconfig-web.json",
        title="tsconfig.json extends property",
        description="Add extends to tsconfig.json",
    )
