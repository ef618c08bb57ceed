"""Dependency and devDependency rules for package.json."""

from __future__ import annotations

import re

from spfx_upgrade.findings import Finding
from spfx_upgrade.project import Project
from spfx_upgrade.rules.base import RuleBase

# package -> (rule number, optional)
DEPENDENCIES: dict[str, tuple[int, bool]] = {
    "@microsoft/sp-core-library": (1, False),
    "@microsoft/sp-lodash-subset": (2, True),
    "@microsoft/sp-office-ui-fabric-core": (3, True),
    "@microsoft/sp-webpart-base": (4, True),
    "@types/react": (5, True),
    "@types/react-dom": (6, True),
    "@types/webpack-env": (7, True),
    "react": (8, True),
    "react-dom": (9, True),
    "@types/es6-promise": (10, True),
    "@microsoft/sp-dialog": (11, True),
    "@microsoft/sp-application-base": (12, True),
    "@microsoft/decorators": (13, True),
    "@microsoft/sp-listview-extensibility": (14, True),
    "@types/react-addons-shallow-compare": (15, True),
    "@types/react-addons-update": (16, True),
    "@types/react-addons-test-utils": (17, True),
    "@microsoft/sp-client-base": (18, True),
    "@microsoft/sp-property-pane": (21, True),
    "office-ui-fabric-react": (22, True),
    "@types/es6-collections": (24, True),
}

DEV_DEPENDENCIES: dict[str, tuple[int, bool]] = {
    "@microsoft/sp-build-web": (1, False),
    "@microsoft/sp-module-interfaces": (2, False),
    "@microsoft/sp-webpart-workbench": (3, False),
    "gulp": (4, False),
    "@types/chai": (5, True),
    "@types/mocha": (6, True),
    "ajv": (7, False),
    "tslint-microsoft-contrib": (8, False),
    "@microsoft/sp-tslint-rules": (9, False),
    "@microsoft/rush-stack-compiler-2.7": (10, False),
}

_SLUG_RE = re.compile(r"[^a-zA-Z0-9]+")


class DependencyRule(RuleBase):
    """Checks that a package is installed at the version shipped with a release."""

    resolution_type = "cmd"
    file = "./package.json"

    def __init__(
        self,
        rule_id: str,
        package: str,
        version: str,
        *,
        dev: bool = False,
        optional: bool = False,
        remove: bool = False,
        web_part_only: bool = False,
        supersedes: tuple[str, ...] = (),
    ) -> None:
        self.rule_id = rule_id
        self.package = package
        self.version = version
        self.dev = dev
        self.optional = optional
        self.remove = remove
        self.web_part_only = web_part_only
        self.supersedes = supersedes
        self.section = "devDependencies" if dev else "dependencies"

        kind = "dev dependency" if dev else "dependency"
        self.title = package
        if remove:
            token = "uninstallDev" if dev else "uninstall"
            self.description = f"Remove SharePoint Framework {kind} package {package}"
            self.resolution = f"{token} {package}"
        else:
            token = "installDev" if dev else "install"
            self.description = f"Upgrade SharePoint Framework {kind} package {package}"
            self.resolution = f"{token} {package}@{version}"

    def visit(self, project: Project) -> list[Finding]:
        if project.package_json is None:
            return []

        installed = self._installed_version(project)
        if self.remove:
            return self._finding() if installed is not None else []

        if installed is None:
            if self.web_part_only:
                return self._finding() if project.web_part_manifests() else []
            if self.optional:
                return []
            return self._finding()

        if installed == self.version:
            return []
        return self._finding()

    def _installed_version(self, project: Project) -> str | None:
        section = (project.package_json or {}).get(self.section)
        if not isinstance(section, dict):
            return None
        version = section.get(self.package)
        return version if isinstance(version, str) else None


def dep(package: str, version: str, *, web_part_only: bool = False) -> DependencyRule:
    number, optional = DEPENDENCIES[package]
    return DependencyRule(
        _rule_id(1, number, "DEP", package),
        package,
        version,
        optional=optional,
        web_part_only=web_part_only,
    )


def dev_dep(package: str, version: str) -> DependencyRule:
    number, optional = DEV_DEPENDENCIES[package]
    return DependencyRule(
        _rule_id(2, number, "DEVDEP", package),
        package,
        version,
        dev=True,
        optional=optional,
    )


def remove_dep(package: str) -> DependencyRule:
    number, _ = DEPENDENCIES[package]
    return DependencyRule(
        _rule_id(1, number, "DEP", package),
        package,
        "",
        remove=True,
    )


def _rule_id(area: int, number: int, kind: str, package: str) -> str:
    slug = _SLUG_RE.sub("_", package).strip("_")
    return f"FN{area:03d}{number:03d}_{kind}_{slug}"
