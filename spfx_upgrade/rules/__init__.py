"""Rules package."""

from dataclasses import dataclass

from spfx_upgrade.rules.base import Rule
from spfx_upgrade.rules.misc import NpmDedupeRule
from spfx_upgrade.rules.upgrades import UPGRADE_RULES
from spfx_upgrade.versions import SUPPORTED_VERSIONS, AnalysisContext

NPM_DEDUPE_RULE = NpmDedupeRule()


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing."""

    rule_id: str
    title: str
    description: str
    severity: str
    resolution_type: str
    file: str
    supersedes: tuple[str, ...]


def rules_for_version(version: str) -> tuple[Rule, ...]:
    """Return the rules that upgrade a project onto ``version``."""
    if version not in SUPPORTED_VERSIONS:
        choices = ", ".join(SUPPORTED_VERSIONS)
        raise ValueError(f"Unknown version '{version}'. Expected one of: {choices}")
    return UPGRADE_RULES.get(version, ())


def build_rules(context: AnalysisContext) -> list[tuple[str, Rule]]:
    """Return ``(version, rule)`` pairs in execution order.

    Versions run newest first; the npm dedupe reminder is appended last when
    the project uses npm.
    """
    ordered: list[tuple[str, Rule]] = []
    for version in context.versions_to_run():
        ordered.extend((version, rule) for rule in rules_for_version(version))
    if context.package_manager == "npm":
        ordered.append((context.to_version, NPM_DEDUPE_RULE))
    return ordered


def list_rule_info(version: str) -> list[RuleInfo]:
    """Return metadata for the rules registered for ``version``."""
    return [
        RuleInfo(
            rule_id=rule.rule_id,
            title=rule.title,
            description=rule.description,
            severity=rule.severity,
            resolution_type=rule.resolution_type,
            file=rule.file,
            supersedes=tuple(rule.supersedes),
        )
        for rule in rules_for_version(version)
    ]
