"""Version detection and upgrade-path validation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from spfx_upgrade.project import read_json_file

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS: tuple[str, ...] = (
    "1.0.0",
    "1.0.1",
    "1.0.2",
    "1.1.0",
    "1.1.1",
    "1.1.3",
    "1.2.0",
    "1.3.0",
    "1.3.1",
    "1.3.2",
    "1.3.4",
    "1.4.0",
    "1.4.1",
    "1.5.0",
    "1.5.1",
    "1.6.0",
    "1.7.0",
    "1.7.1",
    "1.8.0",
    "1.8.1",
    "1.8.2",
)
LATEST_VERSION = SUPPORTED_VERSIONS[-1]

PACKAGE_MANAGERS = ("npm", "pnpm", "yarn")

GENERATOR_KEY = "@microsoft/generator-sharepoint"
CORE_LIBRARY = "@microsoft/sp-core-library"

ERROR_NO_PROJECT_ROOT_FOLDER = 1
ERROR_UNSUPPORTED_TO_VERSION = 2
ERROR_NO_VERSION = 3
ERROR_UNSUPPORTED_FROM_VERSION = 4
ERROR_NO_DOWNGRADE = 5
ERROR_PROJECT_UP_TO_DATE = 6
ERROR_RULE_FAILED = 7

_NON_VERSION_CHARS_RE = re.compile(r"[^0-9.]")


class UpgradeError(Exception):
    """Fatal error that stops the upgrade analysis."""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass(frozen=True, slots=True)
class AnalysisContext:
    """Per-invocation inputs shared by every analysis stage."""

    project_root: Path
    from_version: str
    to_version: str
    package_manager: str = "npm"

    def versions_to_run(self) -> list[str]:
        """Versions after ``from_version`` up to ``to_version``, newest first."""
        start = SUPPORTED_VERSIONS.index(self.from_version)
        end = SUPPORTED_VERSIONS.index(self.to_version)
        return list(reversed(SUPPORTED_VERSIONS[start + 1 : end + 1]))


def find_project_root(start: Path) -> Path | None:
    """Walk up from ``start`` until a folder containing package.json is found."""
    folder = start.resolve()
    while True:
        if (folder / "package.json").is_file():
            return folder
        if folder.parent == folder:
            return None
        folder = folder.parent


def get_project_version(project_root: Path) -> str | None:
    """Detect the SPFx version from .yo-rc.json or the core library dependency."""
    yo_rc = read_json_file(project_root / ".yo-rc.json")
    if isinstance(yo_rc, dict):
        generator = yo_rc.get(GENERATOR_KEY)
        if isinstance(generator, dict):
            version = generator.get("version")
            if isinstance(version, str) and version:
                return version

    package_json = read_json_file(project_root / "package.json")
    if isinstance(package_json, dict):
        dependencies = package_json.get("dependencies")
        if isinstance(dependencies, dict):
            core_version = dependencies.get(CORE_LIBRARY)
            if isinstance(core_version, str):
                cleaned = _NON_VERSION_CHARS_RE.sub("", core_version)
                if cleaned:
                    return cleaned
    return None


def build_context(
    start: Path,
    *,
    to_version: str | None = None,
    package_manager: str = "npm",
) -> AnalysisContext:
    """Validate the requested upgrade and return the analysis context."""
    if package_manager not in PACKAGE_MANAGERS:
        raise ValueError(
            f"{package_manager} is not a supported package manager. "
            "Supported package managers are npm, pnpm and yarn"
        )

    project_root = find_project_root(start)
    if project_root is None:
        raise UpgradeError("Couldn't find project root folder", ERROR_NO_PROJECT_ROOT_FOLDER)

    target = to_version or LATEST_VERSION
    if target not in SUPPORTED_VERSIONS:
        supported = ", ".join(SUPPORTED_VERSIONS)
        raise UpgradeError(
            f"Upgrading SharePoint Framework projects to version {target} is not supported. "
            f"Supported versions are {supported}",
            ERROR_UNSUPPORTED_TO_VERSION,
        )

    current = get_project_version(project_root)
    if current is None:
        raise UpgradeError(
            "Unable to determine the version of the current SharePoint Framework project",
            ERROR_NO_VERSION,
        )

    if current not in SUPPORTED_VERSIONS:
        raise UpgradeError(
            f"Upgrading projects built on SharePoint Framework v{current} is not supported",
            ERROR_UNSUPPORTED_FROM_VERSION,
        )

    position = SUPPORTED_VERSIONS.index(current)
    target_position = SUPPORTED_VERSIONS.index(target)
    if position > target_position:
        raise UpgradeError("You cannot downgrade a project", ERROR_NO_DOWNGRADE)
    if position == target_position:
        raise UpgradeError("Project doesn't need to be upgraded", ERROR_PROJECT_UP_TO_DATE)

    logger.info("Upgrading %s from SPFx v%s to v%s", project_root, current, target)
    return AnalysisContext(
        project_root=project_root,
        from_version=current,
        to_version=target,
        package_manager=package_manager,
    )
