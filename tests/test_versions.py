from __future__ import annotations

from pathlib import Path

import pytest

from spfx_upgrade.versions import (
    ERROR_NO_DOWNGRADE,
    ERROR_NO_PROJECT_ROOT_FOLDER,
    ERROR_NO_VERSION,
    ERROR_PROJECT_UP_TO_DATE,
    ERROR_UNSUPPORTED_FROM_VERSION,
    ERROR_UNSUPPORTED_TO_VERSION,
    LATEST_VERSION,
    SUPPORTED_VERSIONS,
    AnalysisContext,
    UpgradeError,
    build_context,
    find_project_root,
    get_project_version,
)
from tests.helpers_project import write_json, write_spfx_100_project, write_spfx_project


def _gate_code(start: Path, **kwargs: str) -> int:
    with pytest.raises(UpgradeError) as excinfo:
        build_context(start, **kwargs)
    return excinfo.value.code


def test_supported_versions_are_ordered_and_latest_is_last() -> None:
    assert SUPPORTED_VERSIONS[0] == "1.0.0"
    assert LATEST_VERSION == "1.8.2"
    assert len(SUPPORTED_VERSIONS) == len(set(SUPPORTED_VERSIONS)) == 21


def test_find_project_root_walks_up_from_nested_folder(tmp_path: Path) -> None:
    root = write_spfx_project(tmp_path, "1.5.1")
    nested = root / "src" / "webparts" / "helloWorld"
    assert find_project_root(nested) == root.resolve()


def test_missing_project_root_is_code_1(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    if find_project_root(empty) is not None:
        pytest.skip("a package.json exists above the temporary directory")
    assert _gate_code(empty) == ERROR_NO_PROJECT_ROOT_FOLDER


def test_unsupported_target_is_code_2_and_lists_versions(tmp_path: Path) -> None:
    root = write_spfx_project(tmp_path, "1.5.1")
    with pytest.raises(UpgradeError) as excinfo:
        build_context(root, to_version="2.0.0")
    assert excinfo.value.code == ERROR_UNSUPPORTED_TO_VERSION
    assert "2.0.0" in excinfo.value.message
    assert "1.0.0, 1.0.1" in excinfo.value.message


def test_unknown_version_is_code_3(tmp_path: Path) -> None:
    root = tmp_path / "project"
    write_json(root, "package.json", {"name": "project", "dependencies": {"react": "16.3.2"}})
    assert _gate_code(root) == ERROR_NO_VERSION


def test_unsupported_current_version_is_code_4(tmp_path: Path) -> None:
    root = write_spfx_project(tmp_path, "0.9.0")
    with pytest.raises(UpgradeError) as excinfo:
        build_context(root)
    assert excinfo.value.code == ERROR_UNSUPPORTED_FROM_VERSION
    assert excinfo.value.message == (
        "Upgrading projects built on SharePoint Framework v0.9.0 is not supported"
    )


def test_downgrade_is_code_5_and_same_version_is_code_6(tmp_path: Path) -> None:
    root = write_spfx_project(tmp_path, "1.5.1")
    assert _gate_code(root, to_version="1.4.1") == ERROR_NO_DOWNGRADE
    assert _gate_code(root, to_version="1.5.1") == ERROR_PROJECT_UP_TO_DATE


def test_unknown_package_manager_is_rejected_before_the_gate(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="bun"):
        build_context(tmp_path, package_manager="bun")


def test_version_from_yo_rc_wins_over_package_json(tmp_path: Path) -> None:
    root = write_spfx_project(tmp_path, "1.5.1")
    write_json(
        root,
        ".yo-rc.json",
        {"@microsoft/generator-sharepoint": {"version": "1.4.1"}},
    )
    assert get_project_version(root) == "1.4.1"


def test_version_from_core_library_range_keeps_digits_and_dots(tmp_path: Path) -> None:
    root = write_spfx_100_project(tmp_path)
    assert get_project_version(root) == "1.0.0"


def test_build_context_defaults_to_latest_target(tmp_path: Path) -> None:
    root = write_spfx_project(tmp_path, "1.7.1")
    context = build_context(root / "src", package_manager="yarn")
    assert context.project_root == root.resolve()
    assert context.from_version == "1.7.1"
    assert context.to_version == LATEST_VERSION
    assert context.package_manager == "yarn"


def test_versions_to_run_are_newest_first_and_exclude_current(tmp_path: Path) -> None:
    context = AnalysisContext(project_root=tmp_path, from_version="1.5.0", to_version="1.7.0")
    assert context.versions_to_run() == ["1.7.0", "1.6.0", "1.5.1"]
