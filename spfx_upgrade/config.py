"""Configuration loading for spfx-upgrade."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from spfx_upgrade.output import OUTPUT_FORMATS
from spfx_upgrade.versions import PACKAGE_MANAGERS, SUPPORTED_VERSIONS

CONFIG_FILENAMES = (".spfx-upgrade.toml", "spfx-upgrade.toml")


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    package_manager: str = "npm"
    output: str = "text"
    to_version: str | None = None
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "package_manager": self.package_manager,
            "output": self.output,
            "to_version": self.to_version,
            "source": self.source,
        }


def load_app_config(project_root: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from an explicit path or project-local files with precedence."""
    project_root = project_root.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (project_root / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        return _from_mapping(_load_toml(resolved), source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = project_root / filename
        if resolved.exists():
            return _from_mapping(_load_toml(resolved), source=str(resolved))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            "# Package manager used to build the install/uninstall commands.",
            'package_manager = "npm"',
            "",
            "# Report format: json, md or text.",
            'output = "md"',
            "",
            "# Target SharePoint Framework version; defaults to the newest supported.",
            f'# to_version = "{SUPPORTED_VERSIONS[-1]}"',
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    raw_version = mapping.get("to_version")
    to_version: str | None = None
    if raw_version is not None:
        if not isinstance(raw_version, str):
            raise ValueError("to_version must be a string")
        if raw_version not in SUPPORTED_VERSIONS:
            choices = ", ".join(SUPPORTED_VERSIONS)
            raise ValueError(f"to_version must be one of: {choices}")
        to_version = raw_version

    return AppConfig(
        package_manager=_as_choice(
            mapping.get("package_manager", "npm"),
            set(PACKAGE_MANAGERS),
            "package_manager",
        ),
        output=_as_choice(mapping.get("output", "text"), set(OUTPUT_FORMATS), "output"),
        to_version=to_version,
        source=source,
    )


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value
