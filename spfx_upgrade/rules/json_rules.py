"""Generic rules over the project's parsed JSON documents."""

from __future__ import annotations

from typing import Any

from spfx_upgrade.findings import Finding
from spfx_upgrade.project import Project
from spfx_upgrade.rules.base import RuleBase, lookup, nested, to_json


def project_document(project: Project, name: str) -> Any:
    """Resolve a project attribute such as ``ts_config_json`` or ``vs_code.launch_json``."""
    current: Any = project
    for part in name.split("."):
        current = getattr(current, part, None)
        if current is None:
            return None
    return current


class JsonRule(RuleBase):
    """Shared plumbing for rules that check a single JSON document."""

    resolution_type = "json"

    def __init__(
        self,
        rule_id: str,
        *,
        document: str,
        file: str,
        path: tuple[str, ...],
        title: str,
        description: str,
        resolution: str,
        severity: str = "Required",
        requires: tuple[str, ...] = (),
        create: bool = False,
        supersedes: tuple[str, ...] = (),
    ) -> None:
        self.rule_id = rule_id
        self.document = document
        self.file = file
        self.path = path
        self.title = title
        self.description = description
        self.resolution = resolution
        self.severity = severity
        self.requires = requires
        self.create = create
        self.supersedes = supersedes

    def visit(self, project: Project) -> list[Finding]:
        document = project_document(project, self.document)
        if document is None:
            return self._finding() if self.create else []
        if self.requires:
            found, _ = lookup(document, self.requires)
            if not found:
                return []
        return self._finding() if self.applies(document) else []

    def applies(self, document: Any) -> bool:
        raise NotImplementedError


class JsonPropertyRule(JsonRule):
    """Fires when a property is missing or holds a different value."""

    def __init__(self, rule_id: str, *, path: tuple[str, ...], value: Any, **kwargs: Any) -> None:
        kwargs.setdefault("resolution", to_json(nested(path, value)))
        super().__init__(rule_id, path=path, **kwargs)
        self.value = value

    def applies(self, document: Any) -> bool:
        found, current = lookup(document, self.path)
        return not found or current != self.value


class JsonArrayItemRule(JsonRule):
    """Fires when an array property does not contain an item."""

    def __init__(self, rule_id: str, *, path: tuple[str, ...], item: Any, **kwargs: Any) -> None:
        kwargs.setdefault("resolution", to_json(nested(path, [item])))
        super().__init__(rule_id, path=path, **kwargs)
        self.item = item

    def applies(self, document: Any) -> bool:
        found, current = lookup(document, self.path)
        return not (found and isinstance(current, list) and self.item in current)


class JsonRemovePropertyRule(JsonRule):
    """Fires when a property that should be removed is still present."""

    def applies(self, document: Any) -> bool:
        found, _ = lookup(document, self.path)
        return found
