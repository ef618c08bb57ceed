from __future__ import annotations

from pathlib import Path

from spfx_upgrade.project import load_project, read_json_file, remove_single_line_comments
from tests.helpers_project import write_file, write_json, write_spfx_project


def test_remove_single_line_comments_keeps_urls() -> None:
    text = '// header\n{\n  "url": "https://example.com" // trailing\n}\n'
    cleaned = remove_single_line_comments(text)
    assert "header" not in cleaned
    assert "https://example.com" in cleaned


def test_read_json_file_tolerates_comment_lines_and_bom(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('\ufeff// comment\n{"a": 1}\n', encoding="utf-8")
    assert read_json_file(path) == {"a": 1}


def test_read_json_file_returns_none_for_missing_and_malformed(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert read_json_file(tmp_path / "missing.json") is None
    assert read_json_file(broken) is None


def test_load_project_collects_documents_manifests_and_sources(tmp_path: Path) -> None:
    root = write_spfx_project(tmp_path, "1.5.1", graph_client=True)
    project = load_project(root)

    assert project.name == "spfx-151"
    assert project.package_json is not None
    assert project.yo_rc_json is not None
    assert project.ts_config_json is not None
    assert project.config_json is not None
    assert project.serve_json is None
    assert project.gulpfile_js is not None
    assert "build.initialize" in project.gulpfile_js.src
    assert [item.relative_path for item in project.manifests] == [
        "./src/webparts/helloWorld/HelloWorldWebPart.manifest.json"
    ]
    assert project.manifests[0].component_type == "WebPart"
    assert [item.relative_path for item in project.ts_files] == [
        "./src/webparts/helloWorld/GraphService.ts",
        "./src/webparts/helloWorld/HelloWorldWebPart.ts",
    ]
    assert project.has_file("./config/tslint.json")
    assert project.has_file("gulpfile.js")
    assert project.has_folder("src/webparts")
    assert not project.has_folder("teams")
    assert project.skipped_files == ()


def test_load_project_records_malformed_files_as_skipped(tmp_path: Path) -> None:
    root = tmp_path / "project"
    write_json(root, "package.json", {"name": "project"})
    write_file(root, "tsconfig.json", "{ broken")
    write_file(root, "src/webparts/a/A.manifest.json", "[1, 2]")

    project = load_project(root)
    assert project.ts_config_json is None
    assert project.manifests == ()
    assert project.skipped_files == ("tsconfig.json", "src/webparts/a/A.manifest.json")


def test_load_project_without_src_folder(tmp_path: Path) -> None:
    root = tmp_path / "project"
    write_json(root, "package.json", {"name": "project"})

    project = load_project(root)
    assert project.manifests == ()
    assert project.ts_files == ()
    assert project.web_part_manifests() == []


def test_load_project_ignores_node_modules(tmp_path: Path) -> None:
    root = tmp_path / "project"
    write_json(root, "package.json", {"name": "project"})
    write_file(root, "node_modules/pkg/index.ts", "export const a = 1;")
    write_file(root, "src/node_modules/pkg/index.ts", "export const a = 1;")
    write_file(root, "src/index.ts", "export const b = 2;")

    project = load_project(root)
    assert [item.relative_path for item in project.ts_files] == ["./src/index.ts"]
    assert not project.has_file("node_modules/pkg/index.ts")
