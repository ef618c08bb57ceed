"""Rules for component manifests under src/."""

from __future__ import annotations

from typing import Any

from spfx_upgrade.findings import Finding, Occurrence
from spfx_upgrade.project import Manifest, Project
from spfx_upgrade.rules.base import RuleBase, lookup, nested, to_json

WEB_PART_SCHEMA = "https://dev.office.com/json-schemas/spfx/client-side-web-part-manifest.schema.json"
EXTENSION_SCHEMA = "https://dev.office.com/json-schemas/spfx/client-side-extension-manifest.schema.json"


class ManifestPropertyRule(RuleBase):
    """Checks a property in every manifest of one component kind.

    Reports a single finding with one occurrence per manifest that needs
    the change.
    """

    def __init__(
        self,
        rule_id: str,
        *,
        component_type: str,
        extension_type: str | None = None,
        path: tuple[str, ...],
        value: Any,
        title: str,
        description: str,
        severity: str = "Required",
        only_when_missing: bool = False,
    ) -> None:
        self.rule_id = rule_id
        self.only_when_missing = only_when_missing
        self.component_type = component_type
        self.extension_type = extension_type
        self.path = path
        self.value = value
        self.title = title
        self.description = description
        self.severity = severity
        self.resolution = to_json(nested(path, value))

    def visit(self, project: Project) -> list[Finding]:
        occurrences = [
            Occurrence(file=manifest.relative_path, resolution=self.resolution)
            for manifest in project.manifests
            if self._matches(manifest) and self._needs_change(manifest)
        ]
        return self._finding(occurrences)

    def _matches(self, manifest: Manifest) -> bool:
        if manifest.component_type != self.component_type:
            return False
        return self.extension_type is None or manifest.extension_type == self.extension_type

    def _needs_change(self, manifest: Manifest) -> bool:
        found, current = lookup(manifest.data, self.path)
        if not found:
            return True
        return not self.only_when_missing and current != self.value


def _schema_rule(
    rule_id: str,
    label: str,
    component_type: str,
    extension_type: str | None,
    schema: str,
) -> ManifestPropertyRule:
    return ManifestPropertyRule(
        rule_id,
        component_type=component_type,
        extension_type=extension_type,
        path=("$schema",),
        value=schema,
        title=f"{label} manifest schema",
        description=f"Update schema in {label} manifest",
    )


def web_part_schema() -> ManifestPropertyRule:
    return _schema_rule("FN011001_MAN_webpart_schema", "Web part", "WebPart", None, WEB_PART_SCHEMA)


def application_customizer_schema() -> ManifestPropertyRule:
    return _schema_rule(
        "FN011002_MAN_applicationCustomizer_schema",
        "Application customizer",
        "Extension",
        "ApplicationCustomizer",
        EXTENSION_SCHEMA,
    )


def list_view_command_set_schema() -> ManifestPropertyRule:
    return _schema_rule(
        "FN011003_MAN_listViewCommandSet_schema",
        "List view command set",
        "Extension",
        "ListViewCommandSet",
        EXTENSION_SCHEMA,
    )


def field_customizer_schema() -> ManifestPropertyRule:
    return _schema_rule(
        "FN011004_MAN_fieldCustomizer_schema",
        "Field customizer",
        "Extension",
        "FieldCustomizer",
        EXTENSION_SCHEMA,
    )


def web_part_supported_hosts() -> ManifestPropertyRule:
    return ManifestPropertyRule(
        "FN011008_MAN_webpart_supportedHosts",
        component_type="WebPart",
        path=("supportedHosts",),
        value=["SharePointWebPart"],
        only_when_missing=True,
        title="Web part manifest supportedHosts",
        description="In the web part manifest add the supportedHosts property",
    )
