"""Project collector: loads an SPFx project into an immutable snapshot."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from spfx_upgrade.ts_source import TsFile

logger = logging.getLogger(__name__)

SINGLE_LINE_COMMENT_RE = re.compile(r"^\s*//.*$", re.MULTILINE)

# Project field -> path relative to the project root.
JSON_DOCUMENTS = {
    "config_json": "config/config.json",
    "copy_assets_json": "config/copy-assets.json",
    "deploy_azure_storage_json": "config/deploy-azure-storage.json",
    "package_json": "package.json",
    "package_solution_json": "config/package-solution.json",
    "serve_json": "config/serve.json",
    "ts_config_json": "tsconfig.json",
    "ts_lint_json": "config/tslint.json",
    "ts_lint_json_root": "tslint.json",
    "write_manifests_json": "config/write-manifests.json",
    "yo_rc_json": ".yo-rc.json",
}

VS_CODE_DOCUMENTS = {
    "settings_json": ".vscode/settings.json",
    "extensions_json": ".vscode/extensions.json",
    "launch_json": ".vscode/launch.json",
}

IGNORED_DIRS = {"node_modules", ".git", "lib", "dist", "temp", "release", "coverage"}
IGNORED_SRC_DIRS = {"node_modules"}

MANIFEST_SUFFIX = ".manifest.json"
TS_SUFFIXES = (".ts", ".tsx")


@dataclass(frozen=True, slots=True)
class GulpfileJs:
    """Raw gulpfile.js contents."""

    src: str


@dataclass(frozen=True, slots=True)
class VsCode:
    """Parsed Visual Studio Code workspace configuration."""

    settings_json: dict[str, Any] | None = None
    extensions_json: dict[str, Any] | None = None
    launch_json: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class Manifest:
    """A parsed SPFx component manifest."""

    path: Path
    relative_path: str
    data: dict[str, Any]

    @property
    def component_type(self) -> str | None:
        value = self.data.get("componentType")
        return value if isinstance(value, str) else None

    @property
    def extension_type(self) -> str | None:
        value = self.data.get("extensionType")
        return value if isinstance(value, str) else None


@dataclass(frozen=True, slots=True)
class Project:
    """Immutable snapshot of an SPFx project at analysis time."""

    path: Path
    config_json: dict[str, Any] | None = None
    copy_assets_json: dict[str, Any] | None = None
    deploy_azure_storage_json: dict[str, Any] | None = None
    package_json: dict[str, Any] | None = None
    package_solution_json: dict[str, Any] | None = None
    serve_json: dict[str, Any] | None = None
    ts_config_json: dict[str, Any] | None = None
    ts_lint_json: dict[str, Any] | None = None
    ts_lint_json_root: dict[str, Any] | None = None
    write_manifests_json: dict[str, Any] | None = None
    yo_rc_json: dict[str, Any] | None = None
    gulpfile_js: GulpfileJs | None = None
    vs_code: VsCode = field(default_factory=VsCode)
    manifests: tuple[Manifest, ...] = ()
    ts_files: tuple[TsFile, ...] = ()
    files: frozenset[str] = frozenset()
    skipped_files: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.path.name

    def has_file(self, relative_path: str) -> bool:
        return _normalize(relative_path) in self.files

    def has_folder(self, relative_path: str) -> bool:
        prefix = _normalize(relative_path).rstrip("/") + "/"
        return any(item.startswith(prefix) for item in self.files)

    def web_part_manifests(self) -> list[Manifest]:
        return [item for item in self.manifests if item.component_type == "WebPart"]


def remove_single_line_comments(text: str) -> str:
    """Strip lines starting with ``//`` so JSON with comments parses."""
    return SINGLE_LINE_COMMENT_RE.sub("", text)


def load_project(root: Path) -> Project:
    """Collect every known configuration and source file below ``root``."""
    root = root.resolve()
    skipped: list[str] = []
    documents: dict[str, Any] = {}
    for field_name, relative_path in JSON_DOCUMENTS.items():
        documents[field_name] = _load_json(root, relative_path, skipped)

    vs_code = VsCode(
        **{
            field_name: _load_json(root, relative_path, skipped)
            for field_name, relative_path in VS_CODE_DOCUMENTS.items()
        }
    )

    gulpfile_text = _read_text(root, "gulpfile.js", skipped)
    src_files = _walk(root / "src", IGNORED_SRC_DIRS)
    project = Project(
        path=root,
        gulpfile_js=GulpfileJs(src=gulpfile_text) if gulpfile_text is not None else None,
        vs_code=vs_code,
        manifests=tuple(_load_manifests(root, src_files, skipped)),
        ts_files=tuple(_load_ts_files(root, src_files, skipped)),
        files=frozenset(_relative(root, path) for path in _walk(root, IGNORED_DIRS)),
        skipped_files=tuple(skipped),
        **documents,
    )
    logger.debug(
        "Collected project %s: %d manifests, %d TypeScript files, %d skipped files",
        root,
        len(project.manifests),
        len(project.ts_files),
        len(project.skipped_files),
    )
    return project


def read_json_file(path: Path) -> Any | None:
    """Parse a JSON file tolerating ``//`` comments; ``None`` when unusable."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError):
        return None
    try:
        return json.loads(remove_single_line_comments(text))
    except ValueError:
        return None


def _load_json(root: Path, relative_path: str, skipped: list[str]) -> dict[str, Any] | None:
    path = root / relative_path
    if not path.is_file():
        return None
    parsed = read_json_file(path)
    if not isinstance(parsed, dict):
        logger.debug("Skipping unreadable or malformed %s", relative_path)
        skipped.append(relative_path)
        return None
    return parsed


def _read_text(root: Path, relative_path: str, skipped: list[str]) -> str | None:
    path = root / relative_path
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Skipping unreadable %s", relative_path)
        skipped.append(relative_path)
        return None


def _load_manifests(root: Path, src_files: list[Path], skipped: list[str]) -> list[Manifest]:
    manifests: list[Manifest] = []
    for path in src_files:
        if not path.name.endswith(MANIFEST_SUFFIX):
            continue
        relative_path = _relative(root, path)
        parsed = read_json_file(path)
        if not isinstance(parsed, dict):
            logger.debug("Skipping malformed manifest %s", relative_path)
            skipped.append(relative_path)
            continue
        manifests.append(Manifest(path=path, relative_path=f"./{relative_path}", data=parsed))
    return manifests


def _load_ts_files(root: Path, src_files: list[Path], skipped: list[str]) -> list[TsFile]:
    ts_files: list[TsFile] = []
    for path in src_files:
        if not path.name.endswith(TS_SUFFIXES):
            continue
        relative_path = _relative(root, path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("Skipping unreadable source %s", relative_path)
            skipped.append(relative_path)
            continue
        ts_files.append(TsFile(path=path, relative_path=f"./{relative_path}", source=source))
    return ts_files


def _walk(folder: Path, ignored: set[str]) -> list[Path]:
    if not folder.is_dir():
        return []
    found: list[Path] = []
    for current, dirs, files in os.walk(folder):
        dirs[:] = sorted(name for name in dirs if name not in ignored)
        for name in sorted(files):
            found.append(Path(current) / name)
    return found


def _relative(root: Path, path: Path) -> str:
    return path.relative_to(root).as_posix()


def _normalize(relative_path: str) -> str:
    return relative_path[2:] if relative_path.startswith("./") else relative_path
