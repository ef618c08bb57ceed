"""Package-manager specific command syntax."""

from __future__ import annotations

from dataclasses import dataclass, field

PACKAGE_COMMANDS: dict[str, dict[str, str]] = {
    "npm": {
        "install": "npm i -SE",
        "installDev": "npm i -DE",
        "uninstall": "npm un -S",
        "uninstallDev": "npm un -D",
    },
    "pnpm": {
        "install": "pnpm i -E",
        "installDev": "pnpm i -DE",
        "uninstall": "pnpm un",
        "uninstallDev": "pnpm un",
    },
    "yarn": {
        "install": "yarn add -E",
        "installDev": "yarn add -DE",
        "uninstall": "yarn remove",
        "uninstallDev": "yarn remove",
    },
}

# Checked in this order: "install" is a prefix of "installDev" and a
# substring of both uninstall tokens.
RESOLUTION_TOKENS = ("uninstallDev", "installDev", "uninstall", "install")


@dataclass(slots=True)
class PackageLists:
    """Packages collected from individual package-manager commands."""

    dep_exact: list[str] = field(default_factory=list)
    dev_exact: list[str] = field(default_factory=list)
    dep_uninstall: list[str] = field(default_factory=list)
    dev_uninstall: list[str] = field(default_factory=list)

    def for_token(self, token: str) -> list[str]:
        return {
            "install": self.dep_exact,
            "installDev": self.dev_exact,
            "uninstall": self.dep_uninstall,
            "uninstallDev": self.dev_uninstall,
        }[token]


def package_manager_command(package_manager: str, token: str) -> str:
    return PACKAGE_COMMANDS[package_manager][token]


def resolve_tokens(resolution: str, package_manager: str) -> str:
    """Replace a leading resolution token with the manager's command."""
    for token in RESOLUTION_TOKENS:
        if resolution.startswith(token):
            return resolution.replace(token, package_manager_command(package_manager, token), 1)
    return resolution


def is_package_manager_command(command: str, package_manager: str) -> bool:
    return _match_token(command, package_manager) is not None


def map_package_manager_command(command: str, package_manager: str, packages: PackageLists) -> bool:
    """Record the packages of a concrete add/remove command.

    Returns ``False`` when the command is not a package add/remove command
    for the given manager.
    """
    token = _match_token(command, package_manager)
    if token is None:
        return False
    prefix = package_manager_command(package_manager, token)
    packages.for_token(token).append(command[len(prefix) :].strip())
    return True


def reduce_package_manager_commands(packages: PackageLists, package_manager: str) -> list[str]:
    """Consolidate collected packages into at most four commands."""
    commands: list[str] = []
    for token in ("install", "installDev", "uninstall", "uninstallDev"):
        names = packages.for_token(token)
        if names:
            commands.append(f"{package_manager_command(package_manager, token)} {' '.join(names)}")
    return commands


def _match_token(command: str, package_manager: str) -> str | None:
    for token in RESOLUTION_TOKENS:
        if command.startswith(f"{package_manager_command(package_manager, token)} "):
            return token
    return None
